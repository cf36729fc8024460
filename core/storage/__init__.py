"""
Blob storage for avatar images.

Usage:
    from core.storage import BlobStore, get_blob_store
"""

from functools import lru_cache

from .client import BlobStorageError, BlobStore


@lru_cache(maxsize=1)
def get_blob_store() -> BlobStore:
    """Process-wide BlobStore built from settings."""
    return BlobStore()


__all__ = ["BlobStore", "BlobStorageError", "get_blob_store"]
