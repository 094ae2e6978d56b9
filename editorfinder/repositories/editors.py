"""Editor repository: editors plus their credits and awards subcollections."""

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from editorfinder.models.common import Collections, UnionStatus, utc_now
from editorfinder.models.editor import Award, Credit, Editor
from editorfinder.store.base import SERVER_TIMESTAMP, DocumentStore, subcollection

logger = logging.getLogger(__name__)


class EditorRepository:
    """Repository for editor documents and their credits/awards."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    # --- Editors ---

    async def get(self, editor_id: str) -> Editor | None:
        data = await self._store.get(Collections.EDITORS, editor_id)
        if data is None:
            return None
        return Editor.from_document(data, doc_id=editor_id)

    async def add(self, editor: Editor) -> str:
        now = utc_now()
        editor.metadata.created_at = now
        editor.metadata.updated_at = now
        editor_id = await self._store.add(Collections.EDITORS, editor.to_document())
        editor.id = editor_id
        return editor_id

    async def update(self, editor_id: str, fields: dict[str, Any]) -> None:
        """Overwrite top-level (or dotted) fields and stamp ``metadata.updatedAt``."""
        await self._store.update(
            Collections.EDITORS,
            editor_id,
            {**fields, "metadata.updatedAt": SERVER_TIMESTAMP},
        )

    async def find_by_name(self, name: str) -> list[Editor]:
        docs = await self._store.query(Collections.EDITORS, {"name": name})
        return [Editor.from_document(d.data, doc_id=d.id) for d in docs]

    async def list_all(self) -> list[Editor]:
        editors: list[Editor] = []
        for doc in await self._store.list_all(Collections.EDITORS):
            try:
                editors.append(Editor.from_document(doc.data, doc_id=doc.id))
            except PydanticValidationError as exc:
                logger.warning("Skipping malformed editor %s: %s", doc.id, exc)
        return editors

    async def search(
        self,
        *,
        query: str | None = None,
        specialty: str | None = None,
        union_status: UnionStatus | None = None,
        remote_only: bool = False,
        limit: int = 50,
    ) -> list[Editor]:
        """Field-filter the directory. Results are ordered by name, not ranked."""
        needle = query.strip().lower() if query else ""
        wanted_specialty = specialty.lower() if specialty else None

        matches = []
        for editor in await self.list_all():
            if needle and needle not in editor.name.lower():
                continue
            if wanted_specialty and wanted_specialty not in (
                s.lower() for s in editor.experience.specialties
            ):
                continue
            if union_status and editor.professional.union_status != union_status:
                continue
            if remote_only and not editor.location.remote:
                continue
            matches.append(editor)

        matches.sort(key=lambda e: e.name.lower())
        return matches[:limit]

    # --- Credits ---

    async def add_credit(self, editor_id: str, credit: Credit) -> str:
        now = utc_now()
        credit.editor_id = editor_id
        credit.metadata.created_at = now
        credit.metadata.updated_at = now
        path = subcollection(Collections.EDITORS, editor_id, Collections.CREDITS)
        credit.id = await self._store.add(path, credit.to_document())
        return credit.id

    async def list_credits(self, editor_id: str) -> list[Credit]:
        path = subcollection(Collections.EDITORS, editor_id, Collections.CREDITS)
        credits = [
            Credit.from_document(d.data, doc_id=d.id)
            for d in await self._store.list_all(path)
        ]
        # Credits without a start year sort last.
        credits.sort(key=lambda c: c.timeline.start_year or 0, reverse=True)
        return credits

    # --- Awards ---

    async def add_award(self, editor_id: str, award: Award) -> str:
        now = utc_now()
        award.editor_id = editor_id
        award.metadata.created_at = now
        award.metadata.updated_at = now
        path = subcollection(Collections.EDITORS, editor_id, Collections.AWARDS)
        award.id = await self._store.add(path, award.to_document())
        return award.id

    async def list_awards(self, editor_id: str) -> list[Award]:
        path = subcollection(Collections.EDITORS, editor_id, Collections.AWARDS)
        docs = await self._store.query(
            path, {}, order_by="award.year", descending=True,
        )
        return [Award.from_document(d.data, doc_id=d.id) for d in docs]
