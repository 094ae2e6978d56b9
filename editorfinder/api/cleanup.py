"""FastAPI mock-editor cleanup endpoints.

POST /api/cleanup-mock  — run the cleanup engine (?dryRun=true to only classify)
GET  /api/cleanup-mock  — describe the endpoint
"""

import logging

from fastapi import APIRouter, Depends, Query

from editorfinder.api.dependencies import get_cleanup_engine
from editorfinder.api.envelope import envelope
from editorfinder.cleanup.engine import CleanupEngine

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/cleanup-mock", tags=["cleanup"])


@router.post("")
async def cleanup_mock_editors(
    dry_run: bool = Query(default=False, alias="dryRun"),
    engine: CleanupEngine = Depends(get_cleanup_engine),
) -> dict:
    report = await engine.run(dry_run=dry_run)
    if dry_run:
        message = f"Dry run: {len(report.matches)} mock editors would be deleted"
    else:
        message = f"Successfully deleted {report.deleted} mock editors"
    logger.info(message)
    return envelope({"message": message, **report.to_dict()})


@router.get("")
async def describe_cleanup() -> dict:
    return envelope({
        "endpoint": "Mock Editor Cleanup API",
        "description": (
            "Removes mock editors (placeholder names, web-generated IDs, "
            "unknown locations) together with their credits and awards"
        ),
        "usage": "POST to this endpoint to trigger cleanup",
    })
