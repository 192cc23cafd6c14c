"""Use cases for checking credentials and bearer tokens."""

from socialnet.domain.entities import User
from socialnet.domain.exceptions import AuthError
from socialnet.domain.repositories import Store
from socialnet.infrastructure.security import (
    compute_password_signature,
    decode_access_token,
    verify_password,
)

from .validators import normalize_email


def authenticate_user(store: Store, email: str | None, password: str | None) -> User:
    """Return the user matching the credentials or raise ``AuthError``."""

    if not email or not password:
        raise AuthError("Correo y contraseña son obligatorios")

    try:
        normalized = normalize_email(email)
    except ValueError as exc:
        raise AuthError("Correo o contraseña incorrectos") from exc

    user = store.users.get_by_email(normalized)
    if user is None or not verify_password(password, user.password):
        raise AuthError("Correo o contraseña incorrectos")
    return user


def resolve_token_user(store: Store, token: str | None) -> User:
    """Return the user a bearer token was issued to.

    Tokens are rejected when the user no longer exists or changed its
    password after the token was issued.
    """

    if not token:
        raise AuthError("Token no proporcionado")

    payload = decode_access_token(token)
    user_id = payload.get("sub")
    signature = payload.get("pwd_sig")
    if not isinstance(user_id, str) or not isinstance(signature, str):
        raise AuthError("Credenciales inválidas")

    user = store.users.get(user_id)
    if user is None:
        raise AuthError("Usuario no encontrado")
    if signature != compute_password_signature(user):
        raise AuthError("Credenciales inválidas")
    return user
