"""FastAPI dependency utilities."""

from collections.abc import Generator

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer

from socialnet.application.use_cases.users import resolve_token_user
from socialnet.domain.entities import User
from socialnet.domain.exceptions import AuthError
from socialnet.domain.repositories import Store
from socialnet.infrastructure.store import store_scope

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="login")


def get_store(request: Request) -> Generator[Store, None, None]:
    """Yield the persistence store for the current request."""

    with store_scope(request.app) as store:
        yield store


def get_current_user(
    token: str = Depends(oauth2_scheme),
    store: Store = Depends(get_store),
) -> User:
    """Return the authenticated user from the provided token."""

    try:
        return resolve_token_user(store, token)
    except AuthError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Credenciales inválidas",
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc
