"""
Pytest fixtures for the consultant directory tests.

Uses an in-memory SQLite database per test and an in-memory blob store in
place of S3.
"""

import base64
import os

# Must be set before core.config settings are first built
os.environ.setdefault("ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "consultores-test-secret-key-0123456789abcdef")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from core.db import Base  # noqa: E402
from core.models import DirectoryEntry  # noqa: E402
from core.repositories import ConsultantRepository, DirectoryRepository  # noqa: E402
from core.services import ConsultantDirectoryService  # noqa: E402
from core.storage import BlobStorageError  # noqa: E402

# Smallest byte strings that pass image signature detection
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 24
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 24


class FakeBlobStore:
    """
    In-memory stand-in for core.storage.BlobStore.

    Records every call in ``calls`` as (operation, key) and can be told to
    fail uploads or deletes.
    """

    base_url = "http://blobs.test/consultores"

    def __init__(self):
        self.objects: dict[str, tuple[bytes, str | None]] = {}
        self.calls: list[tuple[str, str]] = []
        self.fail_upload = False
        self.fail_delete = False

    def url_for(self, key: str) -> str:
        return f"{self.base_url}/{key}"

    def key_from_url(self, url: str) -> str:
        return url[len(self.base_url) + 1:]

    def upload(self, key: str, data: bytes, content_type: str | None = None) -> str:
        self.calls.append(("upload", key))
        if self.fail_upload:
            raise BlobStorageError("upload refused")
        self.objects[key] = (data, content_type)
        return self.url_for(key)

    def delete(self, key: str) -> None:
        self.calls.append(("delete", key))
        if self.fail_delete:
            raise BlobStorageError("delete refused")
        self.objects.pop(key, None)


@pytest.fixture(scope="function")
def test_db():
    """Create a fresh in-memory database for each test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(
        bind=engine, autoflush=False, autocommit=False, expire_on_commit=False
    )

    yield "sqlite://", TestingSessionLocal, engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def test_session(test_db):
    """Get a test session from the test database."""
    _, TestingSessionLocal, _ = test_db
    session = TestingSessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture
def directory(test_session):
    """Employee directory with three recognized people."""
    entries = [
        DirectoryEntry(email="joao@empresa.com", nome_completo="João da Silva"),
        DirectoryEntry(email="maria@empresa.com", nome_completo="Maria Souza"),
        DirectoryEntry(email="Ana.Lima@empresa.com", nome_completo="Ana Lima"),
    ]
    test_session.add_all(entries)
    test_session.commit()
    return entries


@pytest.fixture
def blob_store():
    return FakeBlobStore()


@pytest.fixture
def service(test_session, directory, blob_store):
    """ConsultantDirectoryService over the test session and fake blob store."""
    return ConsultantDirectoryService(
        ConsultantRepository(test_session),
        DirectoryRepository(test_session),
        blob_store,
        password_rounds=4,
    )


@pytest.fixture
def png_base64():
    return base64.b64encode(PNG_BYTES).decode()


@pytest.fixture
def jpeg_base64():
    return base64.b64encode(JPEG_BYTES).decode()
