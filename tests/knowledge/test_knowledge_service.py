"""Tests for KnowledgeService: lazy initialization and partial updates."""

import pytest

from editorfinder.errors import (
    InvalidActionError,
    KnowledgeFetchError,
    KnowledgeNotFoundError,
    KnowledgeUpdateError,
    ValidationError,
)
from editorfinder.knowledge.service import (
    KnowledgeService,
    KnowledgeUpdateStatus,
)
from editorfinder.models.common import CareerStage
from editorfinder.repositories.knowledge import KnowledgeRepository
from editorfinder.store.memory import InMemoryDocumentStore


@pytest.fixture
def service(store: InMemoryDocumentStore) -> KnowledgeService:
    return KnowledgeService(KnowledgeRepository(store))


class TestGetOrCreate:
    """First read creates a fully-defaulted record; later reads return it."""

    @pytest.mark.anyio
    async def test_first_read_creates_defaults(
        self, service: KnowledgeService, store: InMemoryDocumentStore,
    ) -> None:
        knowledge, created = await service.get_or_create_knowledge("ed-1")

        assert created is True
        assert knowledge.completeness == 0
        assert knowledge.summary.career_stage == CareerStage.EMERGING
        assert knowledge.summary.availability_pattern == "unknown"
        assert knowledge.summary.rate_range.currency == "USD"
        assert knowledge.summary.rate_range.unit == "project"
        assert knowledge.summary.communication_style == "Unknown"
        assert knowledge.summary.last_known_status == "No recent information available"
        assert knowledge.insights == []
        assert knowledge.connections == []
        assert knowledge.opportunities == []
        assert knowledge.risks == []
        assert knowledge.metrics.technical_skills.software_proficiency == {}
        assert store.count("editorKnowledge") == 1

    @pytest.mark.anyio
    async def test_stored_document_has_no_editor_id(
        self, service: KnowledgeService, store: InMemoryDocumentStore,
    ) -> None:
        await service.get_or_create_knowledge("ed-1")
        doc = await store.get("editorKnowledge", "ed-1")
        assert "editorId" not in doc
        assert doc["summary"]["careerStage"] == "emerging"

    @pytest.mark.anyio
    async def test_second_read_returns_same_record(self, service: KnowledgeService) -> None:
        first, _ = await service.get_or_create_knowledge("ed-1")
        second, created = await service.get_or_create_knowledge("ed-1")
        assert created is False
        assert second.to_document() == first.to_document()

    @pytest.mark.anyio
    async def test_empty_editor_id_rejected(self, service: KnowledgeService) -> None:
        with pytest.raises(ValidationError):
            await service.get_or_create_knowledge("  ")

    @pytest.mark.anyio
    async def test_store_failure_raises_fetch_error(self, failing_store) -> None:
        service = KnowledgeService(KnowledgeRepository(failing_store))
        with pytest.raises(KnowledgeFetchError) as exc_info:
            await service.get_or_create_knowledge("ed-1")
        assert exc_info.value.data_message == "Failed to fetch editor knowledge"
        assert exc_info.value.status_code == 500
        assert exc_info.value.error == "connection refused"


class TestUpdate:
    """``update`` overwrites patched fields and stamps lastUpdated."""

    @pytest.mark.anyio
    async def test_update_overwrites_only_patched_fields(
        self, service: KnowledgeService, store: InMemoryDocumentStore, clock,
    ) -> None:
        knowledge, _ = await service.get_or_create_knowledge("ed-1")
        clock.advance(minutes=5)

        result = await service.update_knowledge(
            "ed-1", "update", {"completeness": 0.4, "insights": [{"text": "Fast turnaround"}]},
        )

        assert result.status == KnowledgeUpdateStatus.UPDATED
        assert result.message == "Knowledge updated successfully"
        doc = await store.get("editorKnowledge", "ed-1")
        assert doc["completeness"] == 0.4
        assert doc["insights"] == [{"text": "Fast turnaround"}]
        assert doc["summary"] == knowledge.to_document()["summary"]
        assert doc["lastUpdated"] > knowledge.last_updated

    @pytest.mark.anyio
    async def test_action_and_editor_id_never_written(
        self, service: KnowledgeService, store: InMemoryDocumentStore,
    ) -> None:
        await service.get_or_create_knowledge("ed-1")
        await service.update_knowledge(
            "ed-1", "update", {"action": "update", "editorId": "other", "completeness": 1},
        )
        doc = await store.get("editorKnowledge", "ed-1")
        assert "action" not in doc
        assert "editorId" not in doc

    @pytest.mark.anyio
    async def test_update_missing_creates_then_patches(
        self, service: KnowledgeService, store: InMemoryDocumentStore,
    ) -> None:
        result = await service.update_knowledge("ed-new", "update", {"completeness": 0.2})
        assert result.created is True
        doc = await store.get("editorKnowledge", "ed-new")
        assert doc["completeness"] == 0.2
        assert doc["summary"]["communicationStyle"] == "Unknown"

    @pytest.mark.anyio
    async def test_update_missing_without_create_policy(
        self, store: InMemoryDocumentStore,
    ) -> None:
        service = KnowledgeService(KnowledgeRepository(store), create_missing=False)
        with pytest.raises(KnowledgeNotFoundError):
            await service.update_knowledge("ed-new", "update", {"completeness": 0.2})
        assert store.count("editorKnowledge") == 0

    @pytest.mark.anyio
    async def test_invalid_patch_rejected(
        self, service: KnowledgeService, store: InMemoryDocumentStore,
    ) -> None:
        await service.get_or_create_knowledge("ed-1")
        with pytest.raises(ValidationError):
            await service.update_knowledge("ed-1", "update", {"completeness": 3})
        doc = await store.get("editorKnowledge", "ed-1")
        assert doc["completeness"] == 0

    @pytest.mark.anyio
    async def test_dotted_patch_applies_nested_field(
        self, service: KnowledgeService, store: InMemoryDocumentStore,
    ) -> None:
        await service.get_or_create_knowledge("ed-1")
        await service.update_knowledge("ed-1", "update", {"summary.careerStage": "veteran"})

        knowledge, _ = await service.get_or_create_knowledge("ed-1")
        assert knowledge.summary.career_stage == CareerStage.VETERAN
        assert knowledge.summary.communication_style == "Unknown"

    @pytest.mark.anyio
    async def test_invalid_dotted_patch_rejected(
        self, service: KnowledgeService, store: InMemoryDocumentStore,
    ) -> None:
        await service.get_or_create_knowledge("ed-1")
        with pytest.raises(ValidationError):
            await service.update_knowledge("ed-1", "update", {"summary.careerStage": "wizard"})

        doc = await store.get("editorKnowledge", "ed-1")
        assert doc["summary"]["careerStage"] == "emerging"
        await service.get_or_create_knowledge("ed-1")

    @pytest.mark.anyio
    async def test_dotted_reserved_keys_never_written(
        self, service: KnowledgeService, store: InMemoryDocumentStore,
    ) -> None:
        await service.get_or_create_knowledge("ed-1")
        await service.update_knowledge("ed-1", "update", {"editorId.x": "other"})
        assert "editorId" not in await store.get("editorKnowledge", "ed-1")

    @pytest.mark.anyio
    async def test_store_failure_raises_update_error(self, failing_store) -> None:
        service = KnowledgeService(KnowledgeRepository(failing_store))
        with pytest.raises(KnowledgeUpdateError) as exc_info:
            await service.update_knowledge("ed-1", "update", {"completeness": 0.5})
        assert exc_info.value.error == "connection refused"
        assert exc_info.value.data_message == "Failed to update editor knowledge"


class TestActions:
    """``regenerate`` is reserved; other actions are rejected."""

    @pytest.mark.anyio
    async def test_regenerate_changes_nothing(
        self, service: KnowledgeService, store: InMemoryDocumentStore,
    ) -> None:
        await service.get_or_create_knowledge("ed-1")
        before = await store.get("editorKnowledge", "ed-1")

        result = await service.update_knowledge("ed-1", "regenerate", {"completeness": 1})

        assert result.status == KnowledgeUpdateStatus.NOT_IMPLEMENTED
        assert not result.implemented
        assert "coming soon" in result.message
        assert await store.get("editorKnowledge", "ed-1") == before

    @pytest.mark.anyio
    async def test_regenerate_never_touches_store(self, failing_store) -> None:
        service = KnowledgeService(KnowledgeRepository(failing_store))
        result = await service.update_knowledge("ed-1", "regenerate")
        assert result.status == KnowledgeUpdateStatus.NOT_IMPLEMENTED

    @pytest.mark.anyio
    async def test_unknown_action_rejected(self, service: KnowledgeService) -> None:
        with pytest.raises(InvalidActionError) as exc_info:
            await service.update_knowledge("ed-1", "delete")
        assert "update" in exc_info.value.data_message
        assert "regenerate" in exc_info.value.data_message
