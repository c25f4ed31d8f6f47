"""Application Lifespan — verifies startup wiring and cleanup of the provider and database.

Invariants:
    - A started app exposes its provider on app.state; shutdown closes it and clears the slot
    - The database engine is disposed even when provider construction fails
"""

import pytest
from fastapi import FastAPI

import app.main as main
from app.config import Settings
from tests.services.fake_provider import FakeProvider


class _RecordingDatabase:
    def __init__(self):
        self.created = False
        self.disposed = False

    async def create_all(self):
        self.created = True

    async def dispose(self):
        self.disposed = True


class _ClosableProvider(FakeProvider):
    closed = False

    async def close(self):
        self.closed = True


@pytest.fixture
def database(monkeypatch):
    db = _RecordingDatabase()
    monkeypatch.setattr(main, "get_settings", lambda: Settings(provider="local"))
    monkeypatch.setattr(main, "setup_logging", lambda level, fmt: None)
    monkeypatch.setattr(main, "init_db", lambda url, **kwargs: db)
    return db


async def test_lifespan_stores_and_closes_provider(monkeypatch, database):
    provider = _ClosableProvider()
    monkeypatch.setattr(main, "build_provider", lambda settings, db: provider)
    app = FastAPI()
    async with main.lifespan(app):
        assert app.state.provider is provider
        assert database.created
    assert provider.closed
    assert app.state.provider is None
    assert database.disposed


async def test_lifespan_disposes_database_when_provider_build_fails(
    monkeypatch, database,
):
    def _fail(settings, db):
        raise RuntimeError("bad provider settings")

    monkeypatch.setattr(main, "build_provider", _fail)
    with pytest.raises(RuntimeError, match="bad provider settings"):
        async with main.lifespan(FastAPI()):
            pass
    assert database.disposed
