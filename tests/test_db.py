"""
Tests for DatabaseManager and get_db.
"""

import pytest
from sqlalchemy import text

from core.db import DatabaseManager, db, get_db
from core.models import DirectoryEntry


@pytest.fixture
def manager():
    db.reset()
    db.initialize("sqlite://")
    db.create_all_tables()
    yield db
    db.reset()


def test_singleton():
    assert DatabaseManager() is DatabaseManager()
    assert DatabaseManager() is db


def test_uninitialized_session_raises():
    db.reset()

    with pytest.raises(RuntimeError):
        with db.session():
            pass


def test_uninitialized_health_check():
    db.reset()

    result = db.health_check()

    assert result["healthy"] is False
    assert result["error"] == "Database not initialized"


def test_health_check(manager):
    result = manager.health_check()

    assert result["healthy"] is True
    assert result["error"] is None


def test_session_commits_on_success(manager):
    with manager.session() as session:
        session.add(DirectoryEntry(email="joao@empresa.com", nome_completo="João da Silva"))

    with manager.session() as session:
        assert session.get(DirectoryEntry, "joao@empresa.com") is not None


def test_session_rolls_back_on_error(manager):
    with pytest.raises(ValueError):
        with manager.session() as session:
            session.add(DirectoryEntry(email="maria@empresa.com", nome_completo="Maria Souza"))
            session.flush()
            raise ValueError("boom")

    with manager.session() as session:
        assert session.get(DirectoryEntry, "maria@empresa.com") is None


def test_get_db_yields_session(manager):
    gen = get_db()
    session = next(gen)
    assert session.execute(text("SELECT 1")).scalar() == 1

    with pytest.raises(StopIteration):
        next(gen)
