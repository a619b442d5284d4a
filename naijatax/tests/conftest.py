"""
Shared fixtures for NaijaTax tests.

No test here needs PostgreSQL, Redis or the Mistral API:
  - get_db is overridden with a dummy session; store functions are patched
    per test with AsyncMock at the route module that imported them
  - FakeRedis implements the two calls cache.py makes (get / setex)
  - BrokenRedis raises on both calls, for mid-request Redis outages
  - httpx ASGITransport does not run the lifespan, so app.state starts empty
"""
from __future__ import annotations

from typing import Optional
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from redis.exceptions import ConnectionError as RedisConnectionError

from naijatax.calculator.schemas import TaxInputs
from naijatax.database import get_db
from naijatax.main import app
from naijatax.tests.scenarios import SCENARIO_INPUTS


class FakeRedis:
    """In-memory stand-in for the redis.asyncio calls used by cache.py."""

    def __init__(self) -> None:
        self.store: dict[str, str] = {}
        self.ttls: dict[str, int] = {}

    async def get(self, key: str) -> Optional[str]:
        return self.store.get(key)

    async def setex(self, key: str, ttl: int, value: str) -> None:
        self.store[key] = value
        self.ttls[key] = ttl


class BrokenRedis:
    """Every call fails the way a dropped Redis connection does."""

    def __init__(self) -> None:
        self.calls = 0

    async def get(self, key: str) -> Optional[str]:
        self.calls += 1
        raise RedisConnectionError("Connection reset by peer")

    async def setex(self, key: str, ttl: int, value: str) -> None:
        self.calls += 1
        raise RedisConnectionError("Connection reset by peer")


@pytest.fixture
def scenario_inputs() -> TaxInputs:
    return TaxInputs(**SCENARIO_INPUTS)


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def broken_redis() -> BrokenRedis:
    return BrokenRedis()


@pytest.fixture
def fake_db() -> MagicMock:
    return MagicMock(name="AsyncSession")


@pytest_asyncio.fixture
async def client(fake_db: MagicMock):
    """Async httpx client using ASGI transport - no live server needed."""
    async def _override_get_db():
        yield fake_db

    app.dependency_overrides[get_db] = _override_get_db
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()
        app.state.redis = None
        app.state.mistral = None
