"""Security helpers for hashing and token generation."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from functools import lru_cache
from hashlib import sha256

from jose import JWTError, jwt
from passlib.context import CryptContext

from socialnet.config import get_settings
from socialnet.domain.entities import User
from socialnet.domain.exceptions import AuthError

_ALGORITHM = "HS256"


@lru_cache(maxsize=1)
def _get_pwd_context() -> CryptContext:
    return CryptContext(
        schemes=["pbkdf2_sha256"],
        deprecated="auto",
        pbkdf2_sha256__rounds=get_settings().password_hash_rounds,
    )


def get_password_hash(password: str) -> str:
    return _get_pwd_context().hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return _get_pwd_context().verify(plain_password, hashed_password)


def compute_password_signature(user: User) -> str:
    """Fingerprint of the stored hash; changing the password invalidates tokens."""

    return sha256(user.password.encode()).hexdigest()


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    settings = get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode({**data, "exp": expire}, settings.secret_key, algorithm=_ALGORITHM)


def decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(token, get_settings().secret_key, algorithms=[_ALGORITHM])
    except JWTError as exc:
        raise AuthError("Could not validate credentials") from exc


def issue_token_for(user: User) -> str:
    """Return a bearer token bound to ``user`` and its current password."""

    return create_access_token(
        {
            "sub": user.id,
            "email": user.email,
            "pwd_sig": compute_password_signature(user),
        }
    )


__all__ = [
    "compute_password_signature",
    "create_access_token",
    "decode_access_token",
    "get_password_hash",
    "issue_token_for",
    "verify_password",
]
