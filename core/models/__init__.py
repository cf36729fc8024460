"""
SQLAlchemy models for the consultant directory.

Usage:
    from core.models import Consultant, DirectoryEntry
"""

from .base import Base
from .consultant import MAX_CONSULTANT_ID, Consultant
from .directory import DirectoryEntry

__all__ = [
    "Base",
    "Consultant",
    "DirectoryEntry",
    "MAX_CONSULTANT_ID",
]
