"""
Core services with the business logic of the consultant directory.
"""

from core.services.consultant_service import (
    ConsultantDirectoryService,
    avatar_key,
    serialize_consultant,
)

__all__ = [
    "ConsultantDirectoryService",
    "avatar_key",
    "serialize_consultant",
]
