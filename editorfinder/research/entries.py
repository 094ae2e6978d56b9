"""Research entries: per-editor notes plus the activity log kept beside them."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from editorfinder.errors import ResearchEntryNotFoundError, ValidationError
from editorfinder.models.common import Collections
from editorfinder.models.research import (
    ActivityAction,
    ResearchActivity,
    ResearchEntry,
    ResearchStatus,
)
from editorfinder.store.base import SERVER_TIMESTAMP, DocumentStore, apply_field_paths

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("type", "title", "content")
_IMMUTABLE_FIELDS = frozenset({"id", "editorId", "metadata"})
SYSTEM_USER = "system"


def _mutable_fields(body: dict[str, Any]) -> dict[str, Any]:
    """Drop caller keys that address an immutable field, dotted paths included."""
    return {k: v for k, v in body.items() if k.split(".")[0] not in _IMMUTABLE_FIELDS}


class ResearchService:
    """CRUD over ``research`` documents. Deletion is a soft archive."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    async def list_entries(
        self,
        editor_id: str,
        *,
        research_type: str | None = None,
        status: str | None = None,
        limit: int = 50,
    ) -> list[ResearchEntry]:
        where: dict[str, Any] = {
            "editorId": editor_id,
            "status": status or ResearchStatus.ACTIVE.value,
        }
        if research_type:
            where["type"] = research_type
        docs = await self._store.query(
            Collections.RESEARCH, where,
            order_by="metadata.updatedAt", descending=True, limit=limit,
        )
        entries = []
        for doc in docs:
            try:
                entries.append(ResearchEntry.from_document(doc.data, doc_id=doc.id))
            except PydanticValidationError as exc:
                logger.warning("Skipping malformed research entry %s: %s", doc.id, exc)
        return entries

    async def create_entry(self, editor_id: str, body: dict[str, Any]) -> str:
        if any(not body.get(f) for f in REQUIRED_FIELDS):
            raise ValidationError("Missing required fields: type, title, content")

        fields = _mutable_fields(body)
        try:
            entry = ResearchEntry.model_validate({**fields, "editorId": editor_id})
        except PydanticValidationError as exc:
            raise ValidationError(
                f"Invalid research entry: {exc.error_count()} error(s)",
            ) from exc

        research_id = await self._store.add(Collections.RESEARCH, entry.to_document())
        await self._log_activity(ResearchActivity(
            editor_id=editor_id,
            action=ActivityAction.CREATED,
            resource_id=research_id,
            description=f"New research entry: {entry.title}",
            metadata={
                "researchType": entry.type.value,
                "confidence": entry.confidence.value,
                "priority": entry.priority.value,
            },
        ))
        return research_id

    async def update_entry(
        self, editor_id: str, research_id: str, body: dict[str, Any],
    ) -> None:
        current = await self._get_owned(editor_id, research_id)
        updates = _mutable_fields(body)
        try:
            ResearchEntry.model_validate(apply_field_paths(current, updates))
        except PydanticValidationError as exc:
            raise ValidationError(
                f"Invalid research entry: {exc.error_count()} error(s)",
            ) from exc

        version = int(current.get("metadata", {}).get("version", 1)) + 1
        await self._store.update(Collections.RESEARCH, research_id, {
            **updates,
            "metadata.updatedAt": SERVER_TIMESTAMP,
            "metadata.updatedBy": SYSTEM_USER,
            "metadata.version": version,
        })
        await self._log_activity(ResearchActivity(
            editor_id=editor_id,
            action=ActivityAction.UPDATED,
            resource_id=research_id,
            description="Updated research entry",
            metadata={"changes": sorted(updates)},
        ))

    async def archive_entry(self, editor_id: str, research_id: str) -> None:
        await self._get_owned(editor_id, research_id)
        await self._store.update(Collections.RESEARCH, research_id, {
            "status": ResearchStatus.ARCHIVED.value,
            "metadata.updatedAt": SERVER_TIMESTAMP,
            "metadata.updatedBy": SYSTEM_USER,
        })
        await self._log_activity(ResearchActivity(
            editor_id=editor_id,
            action=ActivityAction.ARCHIVED,
            resource_id=research_id,
            description="Archived research entry",
        ))

    async def _get_owned(self, editor_id: str, research_id: str) -> dict[str, Any]:
        data = await self._store.get(Collections.RESEARCH, research_id)
        if data is None or data.get("editorId") != editor_id:
            raise ResearchEntryNotFoundError(research_id)
        return data

    async def _log_activity(self, activity: ResearchActivity) -> None:
        await self._store.add(Collections.RESEARCH_ACTIVITIES, activity.to_document())
