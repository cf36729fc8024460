"""Read-only access to the employee directory."""

from sqlalchemy import func

from core.models import DirectoryEntry

from .base import BaseRepository


class DirectoryRepository(BaseRepository[DirectoryEntry]):
    """Repository for DirectoryEntry lookups."""

    model = DirectoryEntry

    def get_by_email(self, email: str) -> DirectoryEntry | None:
        """Find a directory entry by email, ignoring case."""
        return (
            self.session.query(DirectoryEntry)
            .filter(func.lower(DirectoryEntry.email) == email.strip().lower())
            .first()
        )
