"""Endpoints for registration and login."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from socialnet.application.use_cases.users import authenticate_user, register_user
from socialnet.domain.exceptions import AuthError, DomainError
from socialnet.domain.repositories import Store
from socialnet.infrastructure.security import issue_token_for
from socialnet.interfaces.api.dependencies import get_store
from socialnet.interfaces.api.routes_helpers import to_http_exception, user_to_read_model
from socialnet.interfaces.api.schemas import AuthResponse, LoginRequest, RegisterRequest

router = APIRouter(tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, store: Store = Depends(get_store)) -> AuthResponse:
    """Crea una cuenta nueva y devuelve un token de acceso."""

    try:
        user = register_user(
            store,
            name=payload.name,
            username=payload.username,
            email=payload.email,
            password=payload.password,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc

    return AuthResponse(
        message="Registro exitoso",
        token=issue_token_for(user),
        user=user_to_read_model(user),
    )


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, store: Store = Depends(get_store)) -> AuthResponse:
    """Autentica al usuario por correo electrónico y devuelve un token JWT."""

    try:
        user = authenticate_user(store, payload.email, payload.password)
    except AuthError as exc:
        logger.info("Rejected login for %s", payload.email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Correo o contraseña incorrectos",
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc

    logger.info("User %s logged in", user.id)
    return AuthResponse(
        message="Inicio de sesión exitoso",
        token=issue_token_for(user),
        user=user_to_read_model(user),
    )
