"""
tests/conftest.py — Shared Test Fixtures
=========================================
"""

from __future__ import annotations

import pytest
from sqlalchemy import Engine, create_engine
from sqlalchemy.pool import StaticPool

from makerhub.catalog import DEFAULT_CATALOG
from makerhub.database.models import Base
from makerhub.services.persistence import SnapshotRepository
from makerhub.services.session_service import SessionStore


@pytest.fixture
def db_engine() -> Engine:
    """Create an in-memory SQLite engine with all MakerHub tables.

    Uses StaticPool so every session shares the same in-memory database.
    """
    engine = create_engine(
        "sqlite://",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def repository(db_engine: Engine) -> SnapshotRepository:
    return SnapshotRepository(db_engine, "test_state")


@pytest.fixture
def store(repository: SnapshotRepository) -> SessionStore:
    """A fresh sample session persisted to the in-memory slot."""
    return SessionStore.open(repository, DEFAULT_CATALOG)
