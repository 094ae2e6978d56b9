"""Knowledge repository: raw access to ``editorKnowledge/{editorId}`` documents."""

from typing import Any

from editorfinder.models.common import Collections
from editorfinder.models.knowledge import EditorKnowledge
from editorfinder.store.base import SERVER_TIMESTAMP, DocumentStore


class KnowledgeRepository:
    """Repository for editor knowledge documents.

    Store errors propagate unchanged; the knowledge service decides how to
    report them.
    """

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    async def get(self, editor_id: str) -> dict[str, Any] | None:
        return await self._store.get(Collections.EDITOR_KNOWLEDGE, editor_id)

    async def create(self, editor_id: str, knowledge: EditorKnowledge) -> None:
        await self._store.set(
            Collections.EDITOR_KNOWLEDGE, editor_id, knowledge.to_document(),
        )

    async def merge(self, editor_id: str, fields: dict[str, Any]) -> None:
        """Overwrite ``fields`` on an existing document; stamps ``lastUpdated``."""
        await self._store.update(
            Collections.EDITOR_KNOWLEDGE,
            editor_id,
            {**fields, "lastUpdated": SERVER_TIMESTAMP},
        )
