"""Endpoints for browsing users and the follow graph."""

from fastapi import APIRouter, Depends, Query

from socialnet.application.use_cases.follows import (
    get_followers as get_followers_uc,
    get_following as get_following_uc,
    toggle_follow as toggle_follow_uc,
)
from socialnet.application.use_cases.posts import get_user_posts as get_user_posts_uc
from socialnet.application.use_cases.users import (
    get_profile as get_profile_uc,
    get_user as get_user_uc,
    search_users as search_users_uc,
)
from socialnet.domain.entities import FOLLOW_STATUS_FOLLOWED, User
from socialnet.domain.exceptions import DomainError
from socialnet.domain.repositories import Store
from socialnet.interfaces.api.dependencies import get_current_user, get_store
from socialnet.interfaces.api.routes_helpers import (
    pagination_window,
    post_to_read_model,
    profile_to_read_model,
    to_http_exception,
)
from socialnet.interfaces.api.schemas import (
    FollowResponse,
    PostRead,
    UserProfileRead,
    UserSummaryRead,
)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/search", response_model=list[UserSummaryRead])
def search_users(
    q: str = Query("", description="Texto a buscar en nombre o nombre de usuario"),
    store: Store = Depends(get_store),
    _: User = Depends(get_current_user),
) -> list[UserSummaryRead]:
    """Busca usuarios sin distinguir mayúsculas."""

    return [UserSummaryRead.model_validate(user) for user in search_users_uc(store, q)]


@router.get("/{user_id}", response_model=UserProfileRead)
def read_user(
    user_id: str,
    store: Store = Depends(get_store),
    current_user: User = Depends(get_current_user),
) -> UserProfileRead:
    """Obtiene el perfil público del usuario identificado por ``user_id``."""

    try:
        profile = get_profile_uc(store, viewer_id=current_user.id, user_id=user_id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return profile_to_read_model(profile)


@router.get("/{user_id}/posts", response_model=list[PostRead])
def list_user_posts(
    user_id: str,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    store: Store = Depends(get_store),
    _: User = Depends(get_current_user),
) -> list[PostRead]:
    """Devuelve las publicaciones del usuario, de la más reciente a la más antigua."""

    limit, offset = pagination_window(page, limit)
    try:
        views = get_user_posts_uc(store, user_id=user_id, limit=limit, offset=offset)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return [post_to_read_model(view) for view in views]


@router.get("/{user_id}/followers", response_model=list[str])
def list_followers(
    user_id: str,
    store: Store = Depends(get_store),
    _: User = Depends(get_current_user),
) -> list[str]:
    """Devuelve los identificadores de los seguidores del usuario."""

    try:
        get_user_uc(store, user_id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return sorted(get_followers_uc(store, user_id))


@router.get("/{user_id}/following", response_model=list[str])
def list_following(
    user_id: str,
    store: Store = Depends(get_store),
    _: User = Depends(get_current_user),
) -> list[str]:
    """Devuelve los identificadores de las cuentas que sigue el usuario."""

    try:
        get_user_uc(store, user_id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return sorted(get_following_uc(store, user_id))


@router.post("/{user_id}/follow", response_model=FollowResponse)
def toggle_follow(
    user_id: str,
    store: Store = Depends(get_store),
    current_user: User = Depends(get_current_user),
) -> FollowResponse:
    """Sigue o deja de seguir al usuario indicado."""

    try:
        result = toggle_follow_uc(store, follower_id=current_user.id, followee_id=user_id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc

    if result == FOLLOW_STATUS_FOLLOWED:
        return FollowResponse(message="Ahora sigues a este usuario", following=True)
    return FollowResponse(message="Dejaste de seguir a este usuario", following=False)
