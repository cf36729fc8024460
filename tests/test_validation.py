"""
Tests for input validation and avatar decoding.
"""

import base64

import pytest

from core.errors import ValidationError
from core.validation import (
    decode_avatar,
    detect_image_type,
    validate_registration,
    validate_update,
)

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 8
WEBP = b"RIFF\x00\x00\x00\x00WEBPVP8 " + b"\x00" * 8


class TestValidateRegistration:
    def test_valid_input(self):
        assert validate_registration("joao123", "joao@empresa.com", "Secret123!") is None

    @pytest.mark.parametrize(
        "apelido,email,senha,fragment",
        [
            (None, "joao@empresa.com", "Secret123!", "apelido"),
            ("   ", "joao@empresa.com", "Secret123!", "apelido"),
            ("joao", None, "Secret123!", "email"),
            ("joao", "joao@empresa.com", "", "senha"),
        ],
    )
    def test_missing_fields_named_in_message(self, apelido, email, senha, fragment):
        message = validate_registration(apelido, email, senha)

        assert message is not None
        assert fragment in message

    def test_rejects_malformed_email(self):
        assert validate_registration("joao", "joao@", "Secret123!") == "O e-mail informado é inválido."

    def test_rejects_long_apelido(self):
        assert validate_registration("a" * 51, "joao@empresa.com", "Secret123!") is not None

    def test_rejects_short_password(self):
        assert validate_registration("joao", "joao@empresa.com", "1234567") is not None

    def test_rejects_password_over_bcrypt_limit(self):
        # 37 two-byte characters = 74 bytes
        assert validate_registration("joao", "joao@empresa.com", "é" * 37) is not None

    def test_rejects_non_string_values(self):
        assert validate_registration(123, "joao@empresa.com", "Secret123!") is not None


class TestValidateUpdate:
    def test_nothing_supplied_is_valid(self):
        assert validate_update() is None

    def test_valid_fields(self):
        assert validate_update("novo", "OutraSenha1") is None

    def test_blank_apelido_rejected(self):
        assert validate_update(apelido="  ") is not None

    def test_short_password_rejected(self):
        assert validate_update(senha="abc") is not None


class TestDecodeAvatar:
    def test_raw_base64_png(self):
        data, content_type = decode_avatar(base64.b64encode(PNG).decode(), max_bytes=1024)

        assert data == PNG
        assert content_type == "image/png"

    def test_data_url_prefix_is_stripped(self):
        payload = "data:image/png;base64," + base64.b64encode(PNG).decode()

        data, _ = decode_avatar(payload, max_bytes=1024)

        assert data == PNG

    def test_invalid_base64(self):
        with pytest.raises(ValidationError):
            decode_avatar("%%%not-base64%%%", max_bytes=1024)

    def test_unknown_format(self):
        with pytest.raises(ValidationError, match="Formato"):
            decode_avatar(base64.b64encode(b"plain text").decode(), max_bytes=1024)

    def test_too_large(self):
        with pytest.raises(ValidationError):
            decode_avatar(base64.b64encode(PNG).decode(), max_bytes=4)

    def test_non_string_payload(self):
        with pytest.raises(ValidationError):
            decode_avatar(b"bytes", max_bytes=1024)


@pytest.mark.parametrize(
    "data,expected",
    [
        (PNG, "image/png"),
        (b"\xff\xd8\xff\xdb" + b"\x00" * 8, "image/jpeg"),
        (b"GIF89a" + b"\x00" * 8, "image/gif"),
        (WEBP, "image/webp"),
        (b"\x00\x00\x00\x00\x00\x00\x00\x00WEBP", None),
        (b"%PDF-1.4", None),
    ],
)
def test_detect_image_type(data, expected):
    assert detect_image_type(data) == expected
