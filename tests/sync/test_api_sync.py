"""Tests for /api/sync."""

import pytest
from httpx import AsyncClient

from editorfinder.api.dependencies import get_tmdb_client
from editorfinder.api.main import app
from editorfinder.store.memory import InMemoryDocumentStore


class TestSyncStatus:
    @pytest.mark.anyio
    async def test_lists_sources(self, client: AsyncClient) -> None:
        response = await client.get("/api/sync")
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["availableSources"] == ["tmdb", "imdb", "emmy", "all"]
        assert data["status"] == "Data sync service is ready"

    @pytest.mark.anyio
    async def test_single_source_status(self, client: AsyncClient) -> None:
        response = await client.get("/api/sync", params={"source": "tmdb"})
        data = response.json()["data"]
        assert data == {"source": "tmdb", "status": "No sync history available yet"}


class TestRunSync:
    @pytest.mark.anyio
    async def test_invalid_source_is_400(
        self, client: AsyncClient, store: InMemoryDocumentStore,
    ) -> None:
        response = await client.post("/api/sync", json={"source": "netflix"})

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Invalid source. Must be one of: tmdb, imdb, emmy, all"
        assert store.count("syncLogs") == 0

    @pytest.mark.anyio
    async def test_missing_source_is_400(self, client: AsyncClient) -> None:
        response = await client.post("/api/sync", json={})
        assert response.status_code == 400

    @pytest.mark.anyio
    async def test_emmy_sync(self, client: AsyncClient, store: InMemoryDocumentStore) -> None:
        response = await client.post("/api/sync", json={"source": "emmy"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["editorsProcessed"] == 10
        assert store.count("emmyAwards") == 10

    @pytest.mark.anyio
    async def test_imdb_sync_is_500(self, client: AsyncClient) -> None:
        response = await client.post("/api/sync", json={"source": "imdb"})
        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert body["data"]["errors"] == ["IMDb sync not yet implemented"]

    @pytest.mark.anyio
    async def test_tmdb_without_key_is_500(self, client: AsyncClient) -> None:
        response = await client.post("/api/sync", json={"source": "tmdb"})
        assert response.status_code == 500
        assert response.json()["data"]["errors"][0].startswith("TMDb sync failed:")

    @pytest.mark.anyio
    async def test_tmdb_sync(
        self, client: AsyncClient, store: InMemoryDocumentStore, tmdb_client,
    ) -> None:
        app.dependency_overrides[get_tmdb_client] = lambda: tmdb_client

        response = await client.post("/api/sync", json={"source": "tmdb", "maxItems": 2})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["editorsProcessed"] == 2
        assert data["editorsAdded"] == 2
        assert data["creditsAdded"] == 2
        assert store.count("editors") == 2
