"""
Security helpers for the consultant directory.

Provides:
- bcrypt password hashing
"""

from .passwords import hash_password, verify_password

__all__ = ["hash_password", "verify_password"]
