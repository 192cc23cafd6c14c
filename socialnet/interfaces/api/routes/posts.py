"""Endpoints for the feed, posts, reactions and comments."""

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status

from socialnet.application.use_cases.posts import (
    add_comment as add_comment_uc,
    create_post as create_post_uc,
    get_feed as get_feed_uc,
    get_post as get_post_uc,
    normalize_post_content,
    toggle_reaction as toggle_reaction_uc,
)
from socialnet.config import get_settings
from socialnet.domain.entities import MediaItem, User
from socialnet.domain.exceptions import DomainError
from socialnet.domain.repositories import Store
from socialnet.infrastructure.storage import (
    delete_stored_file,
    save_post_media,
    validate_upload,
)
from socialnet.interfaces.api.dependencies import get_current_user, get_store
from socialnet.interfaces.api.routes_helpers import (
    comment_to_read_model,
    pagination_window,
    post_to_read_model,
    to_http_exception,
)
from socialnet.interfaces.api.schemas import (
    CommentCreate,
    CommentRead,
    PostRead,
    ReactionRequest,
    ReactionsResponse,
)

router = APIRouter(tags=["posts"])


@router.get("/feed", response_model=list[PostRead])
def read_feed(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    store: Store = Depends(get_store),
    current_user: User = Depends(get_current_user),
) -> list[PostRead]:
    """Devuelve la página solicitada del feed del usuario autenticado."""

    limit, offset = pagination_window(page, limit)
    try:
        views = get_feed_uc(store, viewer_id=current_user.id, limit=limit, offset=offset)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return [post_to_read_model(view) for view in views]


@router.post("/posts", response_model=PostRead, status_code=status.HTTP_201_CREATED)
def create_post(
    content: str | None = Form(None),
    media: list[UploadFile] | None = File(None),
    store: Store = Depends(get_store),
    current_user: User = Depends(get_current_user),
) -> PostRead:
    """Publica un texto con hasta cinco imágenes o videos adjuntos."""

    uploads = media or []
    if len(uploads) > get_settings().max_post_media:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Demasiados archivos adjuntos",
        )

    media_items: list[MediaItem] = []
    try:
        text = normalize_post_content(content)
        # Every file is checked before the first one is written.
        payloads = []
        for upload in uploads:
            data = upload.file.read()
            validate_upload(upload.filename, upload.content_type, len(data))
            payloads.append((upload, data))
        for upload, data in payloads:
            media_items.append(
                save_post_media(
                    current_user.id,
                    filename=upload.filename,
                    content_type=upload.content_type,
                    data=data,
                )
            )
        view = create_post_uc(
            store, author_id=current_user.id, content=text, media=media_items
        )
    except DomainError as exc:
        for item in media_items:
            delete_stored_file(item.url)
        raise to_http_exception(exc) from exc
    return post_to_read_model(view)


@router.get("/posts/{post_id}", response_model=PostRead)
def read_post(
    post_id: str,
    store: Store = Depends(get_store),
    _: User = Depends(get_current_user),
) -> PostRead:
    """Devuelve una publicación con sus reacciones y comentarios."""

    try:
        view = get_post_uc(store, post_id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return post_to_read_model(view)


@router.post("/posts/{post_id}/reactions", response_model=ReactionsResponse)
def react_to_post(
    post_id: str,
    payload: ReactionRequest,
    store: Store = Depends(get_store),
    current_user: User = Depends(get_current_user),
) -> ReactionsResponse:
    """Registra la reacción del usuario, reemplazando la anterior."""

    try:
        reactions = toggle_reaction_uc(
            store, post_id=post_id, user_id=current_user.id, reaction=payload.reaction
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ReactionsResponse(message="Reacción registrada", reactions=reactions)


@router.post(
    "/posts/{post_id}/comments",
    response_model=CommentRead,
    status_code=status.HTTP_201_CREATED,
)
def comment_on_post(
    post_id: str,
    payload: CommentCreate,
    store: Store = Depends(get_store),
    current_user: User = Depends(get_current_user),
) -> CommentRead:
    """Agrega un comentario a la publicación."""

    try:
        comment = add_comment_uc(
            store, post_id=post_id, user_id=current_user.id, text=payload.text
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return comment_to_read_model(comment)
