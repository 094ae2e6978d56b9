"""FastAPI editor knowledge endpoints.

GET  /api/knowledge/{editorId}  — knowledge record, created with defaults on first read
POST /api/knowledge/{editorId}  — {action?: "update" | "regenerate", ...fields}

``update`` overwrites the posted top-level fields and stamps ``lastUpdated``.
``regenerate`` is reserved: it answers with a placeholder message and changes
nothing.
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends

from editorfinder.api.dependencies import get_knowledge_service
from editorfinder.api.envelope import envelope
from editorfinder.knowledge.service import KnowledgeAction, KnowledgeService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/knowledge", tags=["knowledge"])


@router.get("/{editor_id}")
async def get_knowledge(
    editor_id: str,
    service: KnowledgeService = Depends(get_knowledge_service),
) -> dict:
    knowledge, created = await service.get_or_create_knowledge(editor_id)
    if created:
        logger.info("Initialized knowledge for editor %s", editor_id)
    return envelope(knowledge.with_editor_id(editor_id))


@router.post("/{editor_id}")
async def post_knowledge(
    editor_id: str,
    body: dict[str, Any] | None = Body(default=None),
    service: KnowledgeService = Depends(get_knowledge_service),
) -> dict:
    payload = body or {}
    action = payload.get("action", KnowledgeAction.UPDATE.value)
    result = await service.update_knowledge(editor_id, action, payload)
    return envelope({"message": result.message})
