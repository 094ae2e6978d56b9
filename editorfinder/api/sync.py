"""FastAPI sync endpoints.

POST /api/sync  — {source: "tmdb" | "imdb" | "emmy" | "all", maxItems?}
GET  /api/sync  — available sources, or ?source=x for one source's status

The POST answers 200 when the sync succeeded and 500 otherwise; the body is
the aggregated SyncResult either way.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from editorfinder.api.dependencies import get_sync_orchestrator
from editorfinder.api.envelope import envelope, envelope_response
from editorfinder.sync.orchestrator import SOURCES, SyncOrchestrator

router = APIRouter(prefix="/api/sync", tags=["sync"])


class SyncRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    source: str | None = None
    max_items: int = Field(default=50, ge=1, alias="maxItems")


@router.post("")
async def run_sync(
    body: SyncRequest,
    orchestrator: SyncOrchestrator = Depends(get_sync_orchestrator),
) -> JSONResponse:
    result = await orchestrator.run(body.source, max_items=body.max_items)
    return envelope_response(
        result.to_document(),
        status_code=200 if result.success else 500,
        success=result.success,
    )


@router.get("")
async def sync_status(source: str | None = None) -> dict:
    if not source:
        return envelope({
            "availableSources": list(SOURCES),
            "status": "Data sync service is ready",
        })
    return envelope({"source": source, "status": "No sync history available yet"})
