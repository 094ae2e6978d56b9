"""Shared pytest fixtures for the Editor Finder test suite.

Provides:
- store: empty InMemoryDocumentStore driven by a controllable clock
- failing_store: store whose every operation raises StoreIOError
- settings: dev settings isolated from the host environment
- client: AsyncClient against the app with store/settings overridden
"""

from datetime import datetime, timedelta
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from editorfinder.api.dependencies import get_store
from editorfinder.config.settings import Settings, get_settings
from editorfinder.errors import StoreIOError
from editorfinder.models.common import utc_now
from editorfinder.store.memory import InMemoryDocumentStore


class Clock:
    """Manually advanced clock for the in-memory store."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or utc_now()

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


class FailingDocumentStore(InMemoryDocumentStore):
    """Every read and write fails the way an unreachable Firestore does."""

    def _fail(self, *args: Any, **kwargs: Any) -> None:
        raise StoreIOError("connection refused")

    async def get(self, collection, doc_id):
        self._fail()

    async def set(self, collection, doc_id, data):
        self._fail()

    async def update(self, collection, doc_id, fields):
        self._fail()

    async def list_all(self, collection):
        self._fail()

    async def query(self, collection, where, **kwargs):
        self._fail()


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def clock() -> Clock:
    return Clock()


@pytest.fixture
def store(clock: Clock) -> InMemoryDocumentStore:
    return InMemoryDocumentStore(clock=clock)


@pytest.fixture
def failing_store() -> FailingDocumentStore:
    return FailingDocumentStore()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        ENVIRONMENT="dev",
        FIRESTORE_PROJECT_ID="editor-finder-test",
        TMDB_API_KEY="",
        APIFY_TOKEN="",
        ADMIN_API_KEY="",
        SCRAPING_DELAY_MS=0,
        KNOWLEDGE_UPDATE_CREATES_MISSING=True,
    )


@pytest.fixture
async def client(store: InMemoryDocumentStore, settings: Settings):
    """AsyncClient with the document store and settings overridden."""
    from editorfinder.api.main import app

    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_settings] = lambda: settings

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
