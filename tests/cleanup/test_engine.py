"""Tests for CleanupEngine: classification, cascading deletes, batching."""

import pytest

from editorfinder.cleanup.engine import BATCH_COMMIT_THRESHOLD, CleanupEngine
from editorfinder.errors import StoreIOError
from editorfinder.store.base import subcollection
from editorfinder.store.memory import InMemoryDocumentStore

REAL = {
    "name": "Joanna Naugle",
    "location": {"city": "New York", "state": "NY"},
    "professional": {"unionStatus": "guild", "availability": "busy"},
}


async def _seed(store: InMemoryDocumentStore) -> None:
    await store.set("editors", "real-1", REAL)
    await store.set("editors", "mock-1", {**REAL, "name": "John Smith"})
    await store.set("editors", "web-abc123", REAL)
    await store.set(
        "editors", "unk-1", {**REAL, "location": {"city": "Unknown", "state": "Unknown"}},
    )
    for editor_id in ("real-1", "mock-1"):
        await store.add(subcollection("editors", editor_id, "credits"), {"show": {"title": "X"}})
        await store.add(subcollection("editors", editor_id, "awards"), {"award": {"year": 2024}})


class TestCleanupRun:
    @pytest.mark.anyio
    async def test_deletes_mocks_and_keeps_real(self, store: InMemoryDocumentStore) -> None:
        await _seed(store)

        report = await CleanupEngine(store).run()

        assert report.scanned == 4
        assert report.deleted == 3
        assert report.remaining == 1
        assert {m.editor_id for m in report.matches} == {"mock-1", "web-abc123", "unk-1"}
        assert await store.get("editors", "real-1") == REAL
        assert store.count("editors") == 1

    @pytest.mark.anyio
    async def test_subcollections_deleted_with_editor(
        self, store: InMemoryDocumentStore,
    ) -> None:
        await _seed(store)

        report = await CleanupEngine(store).run()

        assert report.subdocuments_deleted == 2
        assert store.count("editors/mock-1/credits") == 0
        assert store.count("editors/mock-1/awards") == 0
        assert store.count("editors/real-1/credits") == 1
        assert store.count("editors/real-1/awards") == 1

    @pytest.mark.anyio
    async def test_dry_run_deletes_nothing(self, store: InMemoryDocumentStore) -> None:
        await _seed(store)

        report = await CleanupEngine(store).run(dry_run=True)

        assert report.dry_run is True
        assert len(report.matches) == 3
        assert report.deleted == 0
        assert store.count("editors") == 4
        assert store.committed_batches == []

    @pytest.mark.anyio
    async def test_empty_collection(self, store: InMemoryDocumentStore) -> None:
        report = await CleanupEngine(store).run()
        assert report.to_dict()["deletedCount"] == 0
        assert report.batches_committed == 0

    @pytest.mark.anyio
    async def test_report_dict_shape(self, store: InMemoryDocumentStore) -> None:
        await _seed(store)
        data = (await CleanupEngine(store).run()).to_dict()
        assert data["deletedCount"] == 3
        assert data["remaining"] == 1
        assert {"editorId", "name", "reason"} == set(data["matches"][0])


class TestBatching:
    @pytest.mark.anyio
    async def test_batches_stay_under_threshold(self, store: InMemoryDocumentStore) -> None:
        for i in range(3):
            editor_id = f"web-{i}"
            await store.set("editors", editor_id, {"name": f"Generated {i}"})
            path = subcollection("editors", editor_id, "credits")
            for j in range(300):
                await store.set(path, f"c{j}", {"n": j})

        report = await CleanupEngine(store).run()

        assert report.deleted == 3
        assert report.subdocuments_deleted == 900
        assert sum(store.committed_batches) == 903
        assert all(size <= BATCH_COMMIT_THRESHOLD for size in store.committed_batches)
        assert report.batches_committed == len(store.committed_batches)

    @pytest.mark.anyio
    async def test_custom_threshold(self, store: InMemoryDocumentStore) -> None:
        for i in range(5):
            await store.set("editors", f"web-{i}", {"name": "x"})

        await CleanupEngine(store, batch_threshold=2).run()

        assert store.committed_batches == [2, 2, 1]

    def test_threshold_must_be_positive(self, store: InMemoryDocumentStore) -> None:
        with pytest.raises(ValueError):
            CleanupEngine(store, batch_threshold=0)


class _BrokenAwardsStore(InMemoryDocumentStore):
    async def list_all(self, collection):
        if collection.endswith("/awards"):
            raise StoreIOError("awards unavailable")
        return await super().list_all(collection)


class TestSubcollectionFailure:
    @pytest.mark.anyio
    async def test_error_recorded_and_editor_still_deleted(self) -> None:
        store = _BrokenAwardsStore()
        await store.set("editors", "web-1", {"name": "x"})
        await store.add("editors/web-1/credits", {"show": {"title": "X"}})

        report = await CleanupEngine(store).run()

        assert report.deleted == 1
        assert report.subdocuments_deleted == 1
        assert len(report.errors) == 1
        assert "awards" in report.errors[0]
