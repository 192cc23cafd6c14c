"""Local disk storage for uploaded media and avatars."""

from __future__ import annotations

import logging
import shutil
import time
from pathlib import Path
from uuid import uuid4

from socialnet.config import get_settings
from socialnet.domain.entities import MEDIA_TYPE_IMAGE, MEDIA_TYPE_VIDEO, MediaItem
from socialnet.domain.exceptions import ValidationError

logger = logging.getLogger(__name__)

UPLOADS_URL_PREFIX = "/uploads"
ALLOWED_EXTENSIONS = frozenset({".jpeg", ".jpg", ".png", ".gif", ".mp4", ".avi", ".mov"})


def get_upload_root() -> Path:
    """Return the configured upload directory, creating it if needed."""

    root = Path(get_settings().upload_dir)
    root.mkdir(parents=True, exist_ok=True)
    return root


def media_type_for(content_type: str | None) -> str:
    """Classify an upload as image or video from its MIME type."""

    if content_type and content_type.startswith("image/"):
        return MEDIA_TYPE_IMAGE
    return MEDIA_TYPE_VIDEO


def validate_upload(filename: str | None, content_type: str | None, size: int) -> str:
    """Return the normalized extension of an acceptable upload or raise."""

    extension = Path(filename or "").suffix.lower()
    if extension not in ALLOWED_EXTENSIONS:
        raise ValidationError("Solo se permiten imágenes y videos")
    if not content_type or not content_type.startswith(("image/", "video/")):
        raise ValidationError("Solo se permiten imágenes y videos")
    if size > get_settings().max_upload_bytes:
        raise ValidationError("El archivo supera el tamaño máximo permitido")
    return extension


def save_user_file(
    user_id: str,
    *,
    filename: str | None,
    content_type: str | None,
    data: bytes,
) -> str:
    """Write ``data`` under the user's folder and return its public URL."""

    extension = validate_upload(filename, content_type, len(data))
    folder = get_upload_root() / user_id
    folder.mkdir(parents=True, exist_ok=True)
    stored_name = f"{int(time.time() * 1000)}-{uuid4().hex[:12]}{extension}"
    (folder / stored_name).write_bytes(data)
    return f"{UPLOADS_URL_PREFIX}/{user_id}/{stored_name}"


def save_post_media(
    user_id: str,
    *,
    filename: str | None,
    content_type: str | None,
    data: bytes,
) -> MediaItem:
    """Store one post attachment and describe it."""

    url = save_user_file(user_id, filename=filename, content_type=content_type, data=data)
    return MediaItem(type=media_type_for(content_type), url=url)


def delete_stored_file(url: str | None) -> None:
    """Remove a previously stored file referenced by its public URL."""

    if not url or not url.startswith(f"{UPLOADS_URL_PREFIX}/"):
        return
    root = get_upload_root().resolve()
    path = (root / url[len(UPLOADS_URL_PREFIX) + 1 :]).resolve()
    if root not in path.parents:
        logger.warning("Refusing to delete file outside the upload directory: %s", url)
        return
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        logger.warning("Could not delete stored file %s: %s", url, exc)


def delete_user_folder(user_id: str) -> None:
    """Remove every file uploaded by ``user_id``."""

    folder = get_upload_root() / user_id
    if folder.exists():
        shutil.rmtree(folder, ignore_errors=True)


__all__ = [
    "ALLOWED_EXTENSIONS",
    "UPLOADS_URL_PREFIX",
    "delete_stored_file",
    "delete_user_folder",
    "get_upload_root",
    "media_type_for",
    "save_post_media",
    "save_user_file",
    "validate_upload",
]
