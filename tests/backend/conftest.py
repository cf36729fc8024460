from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from backend.app.auth.jwt import create_access_token
from backend.app.database import get_db
from backend.app.dependencies import get_blob_store
from backend.app.main import create_app
from core.models import Consultant
from core.security import hash_password


@pytest.fixture
def test_app_client(test_db, blob_store, directory) -> Iterator[tuple[TestClient, sessionmaker]]:
    _, TestingSessionLocal, _ = test_db

    app = create_app()

    def override_get_db() -> Iterator[Session]:
        db = TestingSessionLocal()
        try:
            yield db
            db.commit()  # Auto-commit on success like production
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_blob_store] = lambda: blob_store

    with TestClient(app) as client:
        yield client, TestingSessionLocal


@pytest.fixture
def authorized_client(test_app_client) -> Iterator[tuple[TestClient, dict, int, sessionmaker]]:
    """Client plus bearer headers for an existing consultant (joao@empresa.com)."""
    client, TestingSessionLocal = test_app_client
    session = TestingSessionLocal()
    consultant = Consultant(
        apelido="joao123",
        email="joao@empresa.com",
        senha=hash_password("Secret123!", rounds=4),
    )
    session.add(consultant)
    session.commit()
    consultant_id = consultant.id
    session.close()

    headers = {"Authorization": f"Bearer {create_access_token(consultant_id)}"}
    yield client, headers, consultant_id, TestingSessionLocal
