"""Declarative base shared by every model (defined in core.db)."""

from core.db import Base

__all__ = ["Base"]
