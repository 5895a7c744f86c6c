"""Unit tests for backend selection and the application lifespan."""

import pytest

from recruiter.core.config import Settings
from recruiter.main import create_app, lifespan
from recruiter.storage import DatabaseRecordStore, InMemoryRecordStore, build_store

pytestmark = pytest.mark.unit


def test_build_memory_store():
    store = build_store(Settings(_env_file=None, storage_backend="memory"))
    assert isinstance(store, InMemoryRecordStore)
    assert store.name == "memory"


async def test_build_database_store():
    store = build_store(
        Settings(
            _env_file=None,
            storage_backend="database",
            database_url="sqlite+aiosqlite:///:memory:",
        )
    )
    try:
        assert isinstance(store, DatabaseRecordStore)
        assert store.name == "database"
    finally:
        await store.close()


async def test_lifespan_owns_store(monkeypatch):
    monkeypatch.setenv("STORAGE_BACKEND", "memory")
    monkeypatch.setenv("SEED_SAMPLE_DATA", "true")
    app = create_app()

    async with lifespan(app):
        positions = await app.state.store.list_positions()
        assert [p.title for p in positions] == ["Senior Frontend Developer"]
