"""Shared pytest fixtures: credential isolation, monitors and row stores."""

from __future__ import annotations

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.pool import StaticPool

from catalist.api.deps import get_store
from catalist.core.config import settings
from catalist.main import app
from catalist.providers.observability import ProviderMonitor
from catalist.store.base import InMemoryRowStore
from catalist.store.sql import SQLAlchemyRowStore

CREDENTIAL_FIELDS = (
    "google_maps_api_key",
    "tmdb_api_key",
    "tmdb_api_auth_header",
    "google_books_api_key",
    "rawg_api_key",
    "youtube_api_key",
    "avatar_storage_base_url",
)


@pytest.fixture(autouse=True)
def monitor(monkeypatch: pytest.MonkeyPatch) -> ProviderMonitor:
    """Start every test without credentials and with a fresh provider monitor."""
    for field in CREDENTIAL_FIELDS:
        monkeypatch.setattr(settings, field, None)
    monkeypatch.setattr(settings, "provider_max_attempts", 1)
    fresh = ProviderMonitor(circuit_threshold=3, base_backoff_seconds=15.0, max_backoff_seconds=300.0)
    monkeypatch.setattr("catalist.providers.observability.provider_monitor", fresh)
    monkeypatch.setattr("catalist.providers.base.provider_monitor", fresh)
    monkeypatch.setattr("catalist.services.provider_status.provider_monitor", fresh)
    monkeypatch.setattr("catalist.main.provider_monitor", fresh)
    return fresh


@pytest.fixture()
def memory_store() -> InMemoryRowStore:
    return InMemoryRowStore()


@pytest_asyncio.fixture()
async def sql_store() -> SQLAlchemyRowStore:
    store = SQLAlchemyRowStore.from_url(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await store.create_all()
    try:
        yield store
    finally:
        await store.dispose()


@pytest_asyncio.fixture()
async def client(memory_store: InMemoryRowStore) -> httpx.AsyncClient:
    async def _get_test_store():
        return memory_store

    app.dependency_overrides[get_store] = _get_test_store
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client
    app.dependency_overrides.pop(get_store, None)
