"""Service test fixtures — fake provider + FastAPI test client.

Invariants:
    - Every test gets a fresh FakeProvider
    - get_provider dependency overridden; the app lifespan never runs, so no
      database or HTTP client is created

Design Decisions:
    - ASGITransport does not trigger lifespan: route tests stay pure translation tests
"""

import pytest
from httpx import ASGITransport, AsyncClient

from app.api.dependencies import get_provider
from app.main import app
from tests.services.fake_provider import FakeProvider


@pytest.fixture
def fake_provider():
    return FakeProvider()


@pytest.fixture
async def client(fake_provider):
    """FastAPI test client with the provider dependency overridden."""
    app.dependency_overrides[get_provider] = lambda: fake_provider

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
