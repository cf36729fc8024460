"""
Consultant account model.
"""

import uuid

from sqlalchemy import Boolean, Index, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class Consultant(Base):
    """
    Local consultant account.

    Attributes:
        secundario_id: Opaque external identifier (UUID4), generated at creation
        apelido: Display nickname
        email: Matches a DirectoryEntry email; unique ignoring case
        senha: bcrypt hash, never the plaintext
        imagem: Public URL of the avatar blob
        admin: Role flag, not settable through the consultant endpoints
    """

    __tablename__ = "consultores"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    secundario_id: Mapped[str] = mapped_column(
        String(36), unique=True, default=lambda: str(uuid.uuid4())
    )
    apelido: Mapped[str] = mapped_column(String(50))
    email: Mapped[str] = mapped_column(String(255))
    senha: Mapped[str] = mapped_column(String(255))
    imagem: Mapped[str | None] = mapped_column(String(512), nullable=True)
    admin: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)


# Case-insensitive uniqueness; closes the check-then-insert race on create.
Index("ux_consultores_email_lower", func.lower(Consultant.email), unique=True)

# Largest id a signed 64-bit INTEGER column can hold
MAX_CONSULTANT_ID = 2**63 - 1
