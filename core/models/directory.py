"""
Employee directory model.

Rows are owned by the HR system; this service only reads them to decide who
may register and to supply ``nome_completo`` on reads.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class DirectoryEntry(Base):
    """Authoritative record of a recognized employee, keyed by email."""

    __tablename__ = "dados_fcamara"

    email: Mapped[str] = mapped_column(String(255), primary_key=True)
    nome_completo: Mapped[str] = mapped_column(String(255))
