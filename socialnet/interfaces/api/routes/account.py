"""Endpoints for the authenticated user's own account."""

from fastapi import APIRouter, Depends, File, UploadFile

from socialnet.application.use_cases.users import (
    delete_account as delete_account_uc,
    update_avatar as update_avatar_uc,
    update_profile as update_profile_uc,
)
from socialnet.domain.entities import User
from socialnet.domain.exceptions import DomainError
from socialnet.domain.repositories import Store
from socialnet.infrastructure.storage import save_user_file
from socialnet.interfaces.api.dependencies import get_current_user, get_store
from socialnet.interfaces.api.routes_helpers import to_http_exception, user_to_read_model
from socialnet.interfaces.api.schemas import (
    AvatarResponse,
    MessageResponse,
    ProfileUpdate,
    ProfileUpdateResponse,
    UserRead,
)

router = APIRouter(tags=["account"])


@router.get("/me", response_model=UserRead)
def read_current_user(current_user: User = Depends(get_current_user)) -> UserRead:
    """Devuelve la información del usuario autenticado."""

    return user_to_read_model(current_user)


@router.put("/profile", response_model=ProfileUpdateResponse)
def update_profile(
    payload: ProfileUpdate,
    store: Store = Depends(get_store),
    current_user: User = Depends(get_current_user),
) -> ProfileUpdateResponse:
    """Actualiza nombre, nombre de usuario y biografía."""

    try:
        user = update_profile_uc(
            store,
            user_id=current_user.id,
            name=payload.name,
            username=payload.username,
            bio=payload.bio,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ProfileUpdateResponse(message="Perfil actualizado", user=user_to_read_model(user))


@router.post("/avatar", response_model=AvatarResponse)
def upload_avatar(
    avatar: UploadFile = File(...),
    store: Store = Depends(get_store),
    current_user: User = Depends(get_current_user),
) -> AvatarResponse:
    """Reemplaza la foto de perfil del usuario."""

    try:
        url = save_user_file(
            current_user.id,
            filename=avatar.filename,
            content_type=avatar.content_type,
            data=avatar.file.read(),
        )
        user = update_avatar_uc(store, user_id=current_user.id, avatar_url=url)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return AvatarResponse(message="Avatar actualizado", avatar=user.avatar)


@router.delete("/account", response_model=MessageResponse)
def delete_account(
    store: Store = Depends(get_store),
    current_user: User = Depends(get_current_user),
) -> MessageResponse:
    """Elimina la cuenta junto con sus publicaciones, seguidores y notificaciones."""

    try:
        delete_account_uc(store, current_user.id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return MessageResponse(message="Cuenta eliminada")
