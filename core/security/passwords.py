"""
Password hashing with bcrypt.

Plaintext passwords only ever exist as arguments to these functions; they
are neither stored nor logged.
"""

import bcrypt

from core.config import get_settings


def hash_password(password: str, rounds: int | None = None) -> str:
    """
    Hash a password with a fresh salt.

    Args:
        password: Plaintext password (at most 72 bytes once UTF-8 encoded)
        rounds: bcrypt work factor; defaults to settings.bcrypt_rounds (10)

    Returns:
        The bcrypt hash as text, e.g. ``$2b$10$...``
    """
    cost = rounds or get_settings().bcrypt_rounds
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=cost))
    return hashed.decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """
    Check a plaintext password against a stored bcrypt hash.

    Login lives outside this service; this is for tooling and tests that
    need to confirm what was stored.
    """
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Malformed hash in storage
        return False
