"""
Input validation for consultant registration and profile updates.

The ``validate_*`` functions return ``None`` when the input is acceptable
and a user-facing message otherwise; the service turns that message into a
ValidationError. ``decode_avatar`` raises directly since it also produces
the decoded payload.
"""

import base64
import binascii
import re

from email_validator import EmailNotValidError, validate_email

from core.errors import ValidationError

APELIDO_MAX_LENGTH = 50
EMAIL_MAX_LENGTH = 255
SENHA_MIN_LENGTH = 8
# bcrypt ignores (or rejects, depending on version) anything past 72 bytes
SENHA_MAX_BYTES = 72

DATA_URL_PATTERN = re.compile(r"^data:(?P<mime>[\w/+.-]+)?;base64,", re.IGNORECASE)

# (signature, offset, content type)
IMAGE_SIGNATURES = (
    (b"\x89PNG\r\n\x1a\n", 0, "image/png"),
    (b"\xff\xd8\xff", 0, "image/jpeg"),
    (b"GIF87a", 0, "image/gif"),
    (b"GIF89a", 0, "image/gif"),
    (b"WEBP", 8, "image/webp"),
)


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _check_apelido(apelido) -> str | None:
    if not isinstance(apelido, str):
        return "O apelido deve ser um texto."
    if len(apelido.strip()) > APELIDO_MAX_LENGTH:
        return f"O apelido deve ter no máximo {APELIDO_MAX_LENGTH} caracteres."
    return None


def _check_senha(senha) -> str | None:
    if not isinstance(senha, str):
        return "A senha deve ser um texto."
    if len(senha) < SENHA_MIN_LENGTH:
        return f"A senha deve ter no mínimo {SENHA_MIN_LENGTH} caracteres."
    if len(senha.encode("utf-8")) > SENHA_MAX_BYTES:
        return f"A senha deve ter no máximo {SENHA_MAX_BYTES} bytes."
    return None


def _check_email(email) -> str | None:
    if not isinstance(email, str):
        return "O e-mail deve ser um texto."
    if len(email) > EMAIL_MAX_LENGTH:
        return f"O e-mail deve ter no máximo {EMAIL_MAX_LENGTH} caracteres."
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return "O e-mail informado é inválido."
    return None


def validate_registration(apelido, email, senha) -> str | None:
    """
    Validate the fields required to register a consultant.

    Returns:
        None if valid, otherwise the first problem found.
    """
    if _is_blank(apelido):
        return "O campo apelido é obrigatório."
    if _is_blank(email):
        return "O campo email é obrigatório."
    if _is_blank(senha):
        return "O campo senha é obrigatório."

    return _check_apelido(apelido) or _check_email(email) or _check_senha(senha)


def validate_update(apelido=None, senha=None) -> str | None:
    """Validate the optional text fields of a profile update."""
    if apelido is not None:
        if _is_blank(apelido):
            return "O apelido não pode ser vazio."
        error = _check_apelido(apelido)
        if error:
            return error
    if senha is not None:
        return _check_senha(senha)
    return None


def detect_image_type(data: bytes) -> str | None:
    """Return the image content type from magic bytes, or None if unrecognized."""
    for signature, offset, content_type in IMAGE_SIGNATURES:
        if data[offset:offset + len(signature)] == signature:
            if content_type == "image/webp" and not data.startswith(b"RIFF"):
                continue
            return content_type
    return None


def decode_avatar(payload: str, max_bytes: int) -> tuple[bytes, str]:
    """
    Decode a base64 avatar payload.

    Accepts raw base64 or a ``data:image/...;base64,`` URL.

    Returns:
        Tuple of (raw bytes, detected content type)

    Raises:
        ValidationError: If the payload is not base64, not a supported image,
            or larger than ``max_bytes``.
    """
    if not isinstance(payload, str):
        raise ValidationError("A imagem deve ser enviada em base64.")

    encoded = DATA_URL_PATTERN.sub("", payload.strip(), count=1)
    encoded = "".join(encoded.split())

    try:
        data = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError("A imagem deve ser enviada em base64.") from None

    if not data:
        raise ValidationError("A imagem enviada está vazia.")
    if len(data) > max_bytes:
        raise ValidationError(
            f"A imagem deve ter no máximo {max_bytes // (1024 * 1024)}MB."
        )

    content_type = detect_image_type(data)
    if content_type is None:
        raise ValidationError("Formato de imagem não suportado. Use PNG, JPEG, GIF ou WEBP.")

    return data, content_type


__all__ = [
    "validate_registration",
    "validate_update",
    "detect_image_type",
    "decode_avatar",
]
