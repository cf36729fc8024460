"""
FastAPI dependency injection module.

Provides centralized dependencies for:
- Database sessions
- Repositories
- Blob storage
- The consultant service
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from core.repositories import ConsultantRepository, DirectoryRepository
from core.services import ConsultantDirectoryService
from core.storage import BlobStore
from core.storage import get_blob_store as core_get_blob_store

from ..database import get_db

# =============================================================================
# Repository Dependencies
# =============================================================================


def get_consultant_repository(db: Session = Depends(get_db)) -> ConsultantRepository:
    """Get ConsultantRepository instance."""
    return ConsultantRepository(db)


def get_directory_repository(db: Session = Depends(get_db)) -> DirectoryRepository:
    """Get DirectoryRepository instance."""
    return DirectoryRepository(db)


# =============================================================================
# Storage Dependencies
# =============================================================================


def get_blob_store() -> BlobStore:
    """Get the process-wide avatar BlobStore."""
    return core_get_blob_store()


# =============================================================================
# Service Dependencies
# =============================================================================


def get_consultant_service(
    consultant_repo: ConsultantRepository = Depends(get_consultant_repository),
    directory_repo: DirectoryRepository = Depends(get_directory_repository),
    blob_store: BlobStore = Depends(get_blob_store),
) -> ConsultantDirectoryService:
    """Get ConsultantDirectoryService with injected repositories and storage."""
    return ConsultantDirectoryService(consultant_repo, directory_repo, blob_store)


__all__ = [
    "get_consultant_repository",
    "get_directory_repository",
    "get_blob_store",
    "get_consultant_service",
]
