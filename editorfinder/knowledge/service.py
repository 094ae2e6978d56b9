"""Editor knowledge service: lazy initialization and partial updates.

Two operations:

- ``get_or_create_knowledge``: a client never observes a missing knowledge
  document. The first read for an unknown editor persists a fully-defaulted
  record and returns it. Concurrent first reads may both write; the default
  payload is identical so last-write-wins is harmless.
- ``update_knowledge``: ``update`` merges caller fields and stamps
  ``lastUpdated`` with the store clock; ``regenerate`` is reserved and
  reports NOT_IMPLEMENTED without touching the store.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from editorfinder.errors import (
    DocumentNotFoundError,
    InvalidActionError,
    KnowledgeFetchError,
    KnowledgeNotFoundError,
    KnowledgeUpdateError,
    StoreIOError,
    ValidationError,
)
from editorfinder.models.knowledge import EditorKnowledge, default_knowledge
from editorfinder.repositories.knowledge import KnowledgeRepository
from editorfinder.store.base import apply_field_paths

logger = logging.getLogger(__name__)

# Keys a caller may send in an update body that must never be written.
_RESERVED_PATCH_KEYS = frozenset({"action", "editorId"})


class KnowledgeAction(StrEnum):
    UPDATE = "update"
    REGENERATE = "regenerate"


class KnowledgeUpdateStatus(StrEnum):
    UPDATED = "UPDATED"
    NOT_IMPLEMENTED = "NOT_IMPLEMENTED"


@dataclass(frozen=True)
class KnowledgeUpdateResult:
    """Outcome of ``update_knowledge``."""

    status: KnowledgeUpdateStatus
    message: str
    # True when the update had to create the document first.
    created: bool = False

    @property
    def implemented(self) -> bool:
        return self.status != KnowledgeUpdateStatus.NOT_IMPLEMENTED


REGENERATION_PENDING = KnowledgeUpdateResult(
    status=KnowledgeUpdateStatus.NOT_IMPLEMENTED,
    message="Knowledge regeneration started. This feature is coming soon.",
)


def _require_editor_id(editor_id: str) -> None:
    if not editor_id or not editor_id.strip():
        raise ValidationError("editorId must be a non-empty identifier")


class KnowledgeService:
    """Get-or-create and update operations over knowledge documents.

    Parameters
    ----------
    repo:
        Knowledge repository bound to the injected document store.
    create_missing:
        Policy for ``update`` against a document that does not exist yet.
        True creates it with defaults and then applies the patch; False
        raises ``KnowledgeNotFoundError``.
    """

    def __init__(self, repo: KnowledgeRepository, *, create_missing: bool = True) -> None:
        self._repo = repo
        self._create_missing = create_missing

    # ------------------------------------------------------------------
    # Initializer
    # ------------------------------------------------------------------

    async def get_or_create_knowledge(
        self, editor_id: str,
    ) -> tuple[EditorKnowledge, bool]:
        """Return ``(record, created)`` for ``editor_id``."""
        _require_editor_id(editor_id)
        try:
            data = await self._repo.get(editor_id)
            if data is not None:
                return EditorKnowledge.from_document(data), False

            knowledge = default_knowledge()
            await self._repo.create(editor_id, knowledge)
        except (StoreIOError, PydanticValidationError) as exc:
            logger.error("Error fetching knowledge for %s: %s", editor_id, exc)
            raise KnowledgeFetchError(editor_id, exc) from exc

        logger.info("Created default knowledge record for editor %s", editor_id)
        return knowledge, True

    # ------------------------------------------------------------------
    # Update handler
    # ------------------------------------------------------------------

    async def update_knowledge(
        self,
        editor_id: str,
        action: str = KnowledgeAction.UPDATE,
        patch: dict[str, Any] | None = None,
    ) -> KnowledgeUpdateResult:
        _require_editor_id(editor_id)

        if action == KnowledgeAction.REGENERATE:
            return REGENERATION_PENDING
        if action != KnowledgeAction.UPDATE:
            raise InvalidActionError(action)

        fields = {
            k: v for k, v in (patch or {}).items()
            if k.split(".")[0] not in _RESERVED_PATCH_KEYS
        }
        self._check_patch(fields)

        created = False
        try:
            try:
                await self._repo.merge(editor_id, fields)
            except DocumentNotFoundError:
                if not self._create_missing:
                    raise KnowledgeNotFoundError(editor_id) from None
                await self._repo.create(editor_id, default_knowledge())
                await self._repo.merge(editor_id, fields)
                created = True
        except StoreIOError as exc:
            logger.error("Error updating knowledge for %s: %s", editor_id, exc)
            raise KnowledgeUpdateError(editor_id, exc) from exc

        return KnowledgeUpdateResult(
            status=KnowledgeUpdateStatus.UPDATED,
            message="Knowledge updated successfully",
            created=created,
        )

    @staticmethod
    def _check_patch(fields: dict[str, Any]) -> None:
        """Reject patches that would leave the document unreadable."""
        candidate = apply_field_paths(default_knowledge().to_document(), fields)
        try:
            EditorKnowledge.model_validate(candidate)
        except PydanticValidationError as exc:
            raise ValidationError(
                f"Invalid knowledge fields: {exc.error_count()} error(s)",
                data_message="Failed to update editor knowledge",
            ) from exc
