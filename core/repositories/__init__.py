"""
Repository pattern implementations for data access.

Usage:
    from core.repositories import ConsultantRepository
    from core.db import db

    with db.session() as session:
        repo = ConsultantRepository(session)
        consultants = repo.list_with_directory()
"""

from .base import BaseRepository
from .consultant_repository import ConsultantRepository
from .directory_repository import DirectoryRepository

__all__ = [
    "BaseRepository",
    "ConsultantRepository",
    "DirectoryRepository",
]
