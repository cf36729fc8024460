"""Consultant account repository."""

from sqlalchemy import func
from sqlalchemy.engine import Row

from core.models import Consultant, DirectoryEntry

from .base import BaseRepository

# Collation giving byte-wise, case-sensitive ordering per dialect
BINARY_COLLATIONS = {
    "sqlite": "binary",
    "postgresql": "C",
}


class ConsultantRepository(BaseRepository[Consultant]):
    """Repository for Consultant operations."""

    model = Consultant

    def _projection(self):
        """Consultant columns joined with the directory, as exposed to clients."""
        return (
            self.session.query(
                DirectoryEntry.nome_completo,
                Consultant.apelido,
                Consultant.email,
                Consultant.imagem,
                Consultant.admin,
            )
            .join(DirectoryEntry, Consultant.email == DirectoryEntry.email)
        )

    def _apelido_ordering(self):
        dialect = self.session.get_bind().dialect.name
        collation = BINARY_COLLATIONS.get(dialect)
        column = Consultant.apelido.collate(collation) if collation else Consultant.apelido
        return column.asc()

    def list_with_directory(self) -> list[Row]:
        """All consultants with a directory entry, ordered by apelido."""
        return self._projection().order_by(self._apelido_ordering()).all()

    def get_with_directory(self, consultant_id: int) -> Row | None:
        """One consultant projection by id, or None."""
        return self._projection().filter(Consultant.id == consultant_id).first()

    def email_taken(self, email: str) -> bool:
        """Check whether an account already uses this email, ignoring case."""
        query = self.session.query(Consultant).filter(
            func.lower(Consultant.email) == email.strip().lower()
        )
        return bool(self.session.query(query.exists()).scalar())

    def update_fields(self, consultant_id: int, **fields) -> int:
        """
        Update only the given columns of one consultant.

        Returns:
            Number of rows affected (0 when the consultant no longer exists)
        """
        if not fields:
            return 0
        result = (
            self.session.query(Consultant)
            .filter(Consultant.id == consultant_id)
            .update(fields)
        )
        self.session.flush()
        return result

    def delete_by_id(self, consultant_id: int) -> int:
        """Delete one consultant. Returns the number of rows removed."""
        result = (
            self.session.query(Consultant)
            .filter(Consultant.id == consultant_id)
            .delete()
        )
        self.session.flush()
        return result
