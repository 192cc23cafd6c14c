"""Common validation helpers for user use cases."""

from socialnet.domain.exceptions import ValidationError

MIN_USERNAME_LENGTH = 4
MIN_PASSWORD_LENGTH = 8


def ensure_required(**fields: str | None) -> None:
    """Raise when any of ``fields`` is missing or blank."""

    if any(not (value or "").strip() for value in fields.values()):
        raise ValidationError("Todos los campos son obligatorios")


def ensure_valid_username(username: str) -> str:
    """Return the trimmed handle or raise ``ValidationError``."""

    normalized = username.strip()
    if len(normalized) < MIN_USERNAME_LENGTH:
        raise ValidationError(
            f"El nombre de usuario debe tener al menos {MIN_USERNAME_LENGTH} caracteres"
        )
    return normalized


def ensure_valid_password(password: str) -> str:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"La contraseña debe tener al menos {MIN_PASSWORD_LENGTH} caracteres"
        )
    return password


def normalize_email(email: str) -> str:
    normalized = email.strip().lower()
    if normalized.count("@") != 1 or normalized.startswith("@") or normalized.endswith("@"):
        raise ValidationError("El correo electrónico no es válido")
    return normalized
