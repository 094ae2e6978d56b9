"""FastAPI research endpoints.

POST   /api/research/auto-gather          — research every editor (admin)
GET    /api/research/auto-gather          — describe the endpoint
GET    /api/research/{editorId}           — list entries (?type, ?status, ?limit)
POST   /api/research/{editorId}           — create entry
PUT    /api/research/{editorId}?id=...    — update entry
DELETE /api/research/{editorId}?id=...    — archive entry

In production the auto-gather POST requires ``Authorization: Bearer
<ADMIN_API_KEY>``.
"""

import hmac
import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Header, Query
from fastapi.responses import JSONResponse

from editorfinder.api.dependencies import get_auto_research_service, get_research_service
from editorfinder.api.envelope import envelope, envelope_response, error_response
from editorfinder.config.settings import Settings, get_settings
from editorfinder.errors import UnauthorizedError
from editorfinder.research.auto_research import AutoResearchService
from editorfinder.research.entries import ResearchService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/research", tags=["research"])

_MISSING_ID = "Research ID is required in query parameters"


async def require_admin(
    authorization: str | None = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> None:
    if not settings.is_production:
        return
    expected = f"Bearer {settings.ADMIN_API_KEY}".encode()
    supplied = (authorization or "").encode()
    if not settings.ADMIN_API_KEY or not hmac.compare_digest(supplied, expected):
        raise UnauthorizedError()


# ---------------------------------------------------------------------------
# Auto-gather (declared before /{editor_id} so the literal path wins)
# ---------------------------------------------------------------------------


@router.post("/auto-gather", dependencies=[Depends(require_admin)])
async def auto_gather(
    service: AutoResearchService = Depends(get_auto_research_service),
) -> dict:
    logger.info("Starting automated research for all editors")
    report = await service.gather_all()
    return envelope({
        "message": "Automated research completed for all editors",
        **report.to_dict(),
    })


@router.get("/auto-gather")
async def describe_auto_gather() -> dict:
    return envelope({
        "message": "Automated Research Service",
        "description": "POST to this endpoint to trigger research gathering for all editors",
        "status": "ready",
    })


# ---------------------------------------------------------------------------
# Entries
# ---------------------------------------------------------------------------


@router.get("/{editor_id}")
async def list_research(
    editor_id: str,
    research_type: str | None = Query(default=None, alias="type"),
    status: str | None = None,
    limit: int = Query(default=50, ge=1, le=500),
    service: ResearchService = Depends(get_research_service),
) -> dict:
    entries = await service.list_entries(
        editor_id, research_type=research_type, status=status, limit=limit,
    )
    return envelope([e.to_response() for e in entries])


@router.post("/{editor_id}", status_code=201)
async def create_research(
    editor_id: str,
    body: dict[str, Any] | None = Body(default=None),
    service: ResearchService = Depends(get_research_service),
) -> JSONResponse:
    research_id = await service.create_entry(editor_id, body or {})
    return envelope_response(
        {"message": "Research entry created successfully", "id": research_id},
        status_code=201,
    )


@router.put("/{editor_id}")
async def update_research(
    editor_id: str,
    research_id: str | None = Query(default=None, alias="id"),
    body: dict[str, Any] | None = Body(default=None),
    service: ResearchService = Depends(get_research_service),
) -> Any:
    if not research_id:
        return error_response(400, "Missing parameter", _MISSING_ID)
    await service.update_entry(editor_id, research_id, body or {})
    return envelope({"message": "Research entry updated successfully"})


@router.delete("/{editor_id}")
async def archive_research(
    editor_id: str,
    research_id: str | None = Query(default=None, alias="id"),
    service: ResearchService = Depends(get_research_service),
) -> Any:
    if not research_id:
        return error_response(400, "Missing parameter", _MISSING_ID)
    await service.archive_entry(editor_id, research_id)
    return envelope({"message": "Research entry archived successfully"})
