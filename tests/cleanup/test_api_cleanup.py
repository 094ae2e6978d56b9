"""Tests for /api/cleanup-mock."""

import pytest
from httpx import AsyncClient

from editorfinder.store.memory import InMemoryDocumentStore


class TestCleanupEndpoint:
    @pytest.mark.anyio
    async def test_post_deletes_mock_editors(
        self, client: AsyncClient, store: InMemoryDocumentStore,
    ) -> None:
        await store.set("editors", "real", {"name": "Nat Fuller"})
        await store.set("editors", "fake", {"name": "Jane Doe"})

        response = await client.post("/api/cleanup-mock")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["message"] == "Successfully deleted 1 mock editors"
        assert data["deletedCount"] == 1
        assert data["remaining"] == 1
        assert data["matches"] == [
            {"editorId": "fake", "name": "Jane Doe", "reason": "Known mock/non-editor"},
        ]
        assert store.count("editors") == 1

    @pytest.mark.anyio
    async def test_dry_run_flag(
        self, client: AsyncClient, store: InMemoryDocumentStore,
    ) -> None:
        await store.set("editors", "fake", {"name": "Jane Doe"})

        response = await client.post("/api/cleanup-mock", params={"dryRun": "true"})

        data = response.json()["data"]
        assert data["message"] == "Dry run: 1 mock editors would be deleted"
        assert data["dryRun"] is True
        assert store.count("editors") == 1

    @pytest.mark.anyio
    async def test_get_describes_endpoint(self, client: AsyncClient) -> None:
        response = await client.get("/api/cleanup-mock")
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["endpoint"] == "Mock Editor Cleanup API"
        assert "POST" in data["usage"]

    @pytest.mark.anyio
    async def test_store_failure_is_500(self, client: AsyncClient, failing_store) -> None:
        from editorfinder.api.dependencies import get_store
        from editorfinder.api.main import app

        app.dependency_overrides[get_store] = lambda: failing_store
        response = await client.post("/api/cleanup-mock")
        assert response.status_code == 500
        assert response.json()["success"] is False
