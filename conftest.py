import asyncio
import uuid

import pytest
from httpx import ASGITransport, AsyncClient

from pricing_engine.main import app
from pricing_engine.core import redis as redis_module
from pricing_engine.core.config import settings
from pricing_engine.core.dependencies import get_config_provider, get_session_store
from pricing_engine.services.config_loader import ConfigurationProvider
from pricing_engine.services.session import SessionStore


class StubConfigSource:
    """In-memory stand-in for the admin config store."""

    def __init__(self, documents=None, error: Exception = None, delay: float = 0.0):
        self.documents = dict(documents or {})
        self.error = error
        self.delay = delay
        self.calls = 0

    async def fetch(self, service_id):
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.documents.get(service_id.value)


class FakeRedis:
    """Async dict standing in for the shared Redis client."""

    def __init__(self):
        self.store = {}
        self.expiry = {}

    async def get(self, key):
        return self.store.get(key)

    async def set(self, key, value, ex=None):
        self.store[key] = value.encode() if isinstance(value, str) else value
        self.expiry[key] = ex

    async def delete(self, key):
        self.store.pop(key, None)


@pytest.fixture
def fake_redis(monkeypatch):
    client = FakeRedis()
    monkeypatch.setattr(redis_module, "redis", client)
    return client


@pytest.fixture
def stub_source():
    return StubConfigSource()


@pytest.fixture
def config_provider(stub_source):
    return ConfigurationProvider(stub_source, use_redis=False)


@pytest.fixture
def session_store():
    return SessionStore()


@pytest.fixture
async def test_client(config_provider, session_store):
    app.dependency_overrides[get_config_provider] = lambda: config_provider
    app.dependency_overrides[get_session_store] = lambda: session_store
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def saniscrub_inputs():
    return {
        "frequency": "monthly",
        "fixtureCount": 5,
        "nonBathroomSqft": 0,
    }


@pytest.fixture
def carpet_inputs():
    return {
        "frequency": "weekly",
        "area_sqft": 1300,
        "include_install": True,
        "dirty_install": True,
    }


@pytest.fixture
def valid_idempotency_key():
    return str(uuid.uuid4())


@pytest.fixture
def app_settings():
    """Return application settings"""
    return settings


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "pricing: marks tests related to pricing"
    )
    config.addinivalue_line(
        "markers", "config: marks tests related to pricing configuration loading"
    )
    config.addinivalue_line(
        "markers", "overrides: marks tests related to output overrides"
    )
    config.addinivalue_line(
        "markers", "webhooks: marks tests related to webhooks"
    )
    config.addinivalue_line(
        "markers", "idempotency: marks tests related to idempotency"
    )


def pytest_collection_modifyitems(config, items):
    """
    Modify test collection to handle asyncio tests
    """
    for item in items:
        if asyncio.iscoroutinefunction(getattr(item, "function", None)):
            item.add_marker(pytest.mark.asyncio)
