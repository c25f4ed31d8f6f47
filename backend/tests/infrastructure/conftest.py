"""Infrastructure test fixtures — in-memory database and mocked HTTP transports.

Invariants:
    - Every test gets a fresh in-memory SQLite database with all tables created
    - No fixture performs real network IO: httpx clients use MockTransport

Design Decisions:
    - DatabaseSessionManager built via __new__: reuses the production rollback/error
      mapping while pointing at the test engine
"""

import httpx
import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from starlette.requests import Request

import app.models  # noqa: F401
from app.db.base import Base
from app.infrastructure.database import DatabaseSessionManager
from app.infrastructure.github_client import GitHubContentClient


@pytest.fixture
async def test_db_manager():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = engine
    manager._session_factory = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False,
    )
    yield manager
    await engine.dispose()


@pytest.fixture
def github_requests():
    """URLs requested from the mocked GitHub raw endpoint."""
    return []


@pytest.fixture
def github_client(github_requests):
    def handler(request: httpx.Request) -> httpx.Response:
        github_requests.append(str(request.url))
        if request.url.path.endswith("/missing.yaml"):
            return httpx.Response(404, text="404: Not Found")
        return httpx.Response(200, content=b"name: rate-limit\n")

    return GitHubContentClient(
        "https://raw.example.test",
        "master",
        httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


def _build_request(headers: dict[str, str] | None = None) -> Request:
    raw = [
        (k.lower().encode(), v.encode()) for k, v in (headers or {}).items()
    ]
    return Request({
        "type": "http", "method": "GET", "path": "/",
        "query_string": b"", "headers": raw,
    })


@pytest.fixture
def make_request():
    """Factory for bare Starlette requests carrying the given headers."""
    return _build_request
