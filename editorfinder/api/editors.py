"""FastAPI editor directory endpoints.

GET /api/editors              — filter editors (?q, ?specialty, ?unionStatus, ?remote, ?limit)
GET /api/editors/{editorId}   — one editor with credits and awards
"""

from fastapi import APIRouter, Depends, Query

from editorfinder.api.dependencies import get_editor_repo
from editorfinder.api.envelope import envelope
from editorfinder.errors import EditorNotFoundError
from editorfinder.models.common import UnionStatus
from editorfinder.repositories.editors import EditorRepository

router = APIRouter(prefix="/api/editors", tags=["editors"])


@router.get("")
async def list_editors(
    q: str | None = None,
    specialty: str | None = None,
    union_status: UnionStatus | None = Query(default=None, alias="unionStatus"),
    remote: bool = False,
    limit: int = Query(default=50, ge=1, le=500),
    repo: EditorRepository = Depends(get_editor_repo),
) -> dict:
    editors = await repo.search(
        query=q,
        specialty=specialty,
        union_status=union_status,
        remote_only=remote,
        limit=limit,
    )
    return envelope([e.to_response() for e in editors])


@router.get("/{editor_id}")
async def get_editor(
    editor_id: str,
    repo: EditorRepository = Depends(get_editor_repo),
) -> dict:
    editor = await repo.get(editor_id)
    if editor is None:
        raise EditorNotFoundError(editor_id)

    credits = await repo.list_credits(editor_id)
    awards = await repo.list_awards(editor_id)
    return envelope({
        **editor.to_response(),
        "credits": [c.to_response() for c in credits],
        "awards": [a.to_response() for a in awards],
    })
