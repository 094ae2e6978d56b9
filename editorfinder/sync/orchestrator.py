"""Sync orchestrator: dispatches a sync request to the per-source routines.

Sources:

- ``tmdb``: popular and top-rated TV shows, their editing crew, one credit per
  editor per show. Shows run ``batch_size`` at a time with a delay between
  batches. Per-show and per-editor failures are collected in the result.
- ``imdb``: placeholder, always unsuccessful.
- ``emmy``: loads the Emmy editing reference data.
- ``all``: ``tmdb`` then ``emmy``, counts summed.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

from pydantic import Field
from pydantic import ValidationError as PydanticValidationError

from editorfinder.errors import EditorFinderError, InvalidSourceError
from editorfinder.models.common import Collections, EditorFinderBase, utc_now
from editorfinder.models.editor import Editor, EditorMetadata, Experience
from editorfinder.repositories.editors import EditorRepository
from editorfinder.store.base import SERVER_TIMESTAMP, DocumentStore
from editorfinder.sync.emmy import load_emmy_reference
from editorfinder.sync.similarity import name_similarity
from editorfinder.sync.tmdb import (
    TMDbClient,
    extract_editors,
    job_to_specialty,
    map_show_to_credit,
)

logger = logging.getLogger(__name__)

SOURCES: tuple[str, ...] = ("tmdb", "imdb", "emmy", "all")
SIMILARITY_THRESHOLD = 0.8
SHOW_BATCH_SIZE = 5


class SyncResult(EditorFinderBase):
    success: bool = True
    editors_processed: int = 0
    editors_added: int = 0
    editors_updated: int = 0
    credits_added: int = 0
    errors: list[str] = Field(default_factory=list)

    def absorb(self, other: SyncResult) -> None:
        """Add ``other``'s counts and errors into this result."""
        self.success = self.success and other.success
        self.editors_processed += other.editors_processed
        self.editors_added += other.editors_added
        self.editors_updated += other.editors_updated
        self.credits_added += other.credits_added
        self.errors.extend(other.errors)


@dataclass(frozen=True)
class EditorMatch:
    editor: Editor | None
    similarity: float
    match_type: str  # "exact" | "fuzzy" | "none"


NO_MATCH = EditorMatch(editor=None, similarity=0.0, match_type="none")


class SyncOrchestrator:
    """Runs source syncs against the document store."""

    def __init__(
        self,
        store: DocumentStore,
        tmdb: TMDbClient,
        *,
        delay_ms: int = 2000,
        batch_size: int = SHOW_BATCH_SIZE,
    ) -> None:
        self._store = store
        self._editors = EditorRepository(store)
        self._tmdb = tmdb
        self._delay_s = delay_ms / 1000
        self._batch_size = batch_size

    async def run(self, source: str | None, max_items: int = 50) -> SyncResult:
        if source not in SOURCES:
            raise InvalidSourceError(source, SOURCES)

        logger.info("Starting %s sync (max_items=%d)", source, max_items)
        if source == "tmdb":
            return await self.sync_tmdb(max_items)
        if source == "imdb":
            return self.sync_imdb()
        if source == "emmy":
            return await self.sync_emmy()

        result = await self.sync_tmdb(max_items)
        result.absorb(await self.sync_emmy())
        return result

    # ------------------------------------------------------------------
    # IMDb / Emmy
    # ------------------------------------------------------------------

    @staticmethod
    def sync_imdb() -> SyncResult:
        return SyncResult(success=False, errors=["IMDb sync not yet implemented"])

    async def sync_emmy(self) -> SyncResult:
        try:
            count = await load_emmy_reference(self._store)
        except EditorFinderError as exc:
            logger.error("Emmy sync failed: %s", exc)
            return SyncResult(success=False, errors=[str(exc)])
        return SyncResult(editors_processed=count, credits_added=count)

    # ------------------------------------------------------------------
    # TMDb
    # ------------------------------------------------------------------

    async def sync_tmdb(self, max_items: int = 50) -> SyncResult:
        result = SyncResult()
        try:
            popular, top_rated = await asyncio.gather(
                self._tmdb.popular_shows(), self._tmdb.top_rated_shows(),
            )
        except EditorFinderError as exc:
            logger.error("TMDb sync error: %s", exc)
            result.success = False
            result.errors.append(f"TMDb sync failed: {exc}")
            await self._log_sync("tmdb", result)
            return result

        shows = _unique_shows([*popular, *top_rated])[:max_items]
        logger.info("Found %d unique shows to process", len(shows))

        for start in range(0, len(shows), self._batch_size):
            batch = shows[start:start + self._batch_size]
            for show_result in await asyncio.gather(*(self._sync_show(s) for s in batch)):
                # A failed show is reported in errors; the run itself continues.
                show_result.success = True
                result.absorb(show_result)
            if start + self._batch_size < len(shows):
                await asyncio.sleep(self._delay_s)

        await self._log_sync("tmdb", result)
        logger.info(
            "TMDb sync completed: %d processed, %d added, %d updated, %d credits",
            result.editors_processed, result.editors_added,
            result.editors_updated, result.credits_added,
        )
        return result

    async def _sync_show(self, show: dict[str, Any]) -> SyncResult:
        result = SyncResult()
        title = show.get("name", show.get("id"))
        try:
            details, credits = await asyncio.gather(
                self._tmdb.show(show["id"]), self._tmdb.credits(show["id"]),
            )
        except EditorFinderError as exc:
            result.success = False
            result.errors.append(f"Error syncing show {title}: {exc}")
            return result

        crew = extract_editors(credits)
        if crew:
            logger.info("Processing %d editors from %r", len(crew), title)

        for member in crew:
            result.editors_processed += 1
            try:
                await self._sync_editor(details, member, result)
            except (EditorFinderError, PydanticValidationError) as exc:
                result.errors.append(
                    f"Error processing editor {member.get('name')}: {exc}",
                )
        return result

    async def _sync_editor(
        self, show: dict[str, Any], member: dict[str, Any], result: SyncResult,
    ) -> None:
        name = member.get("name", "")
        match = await self.find_existing_editor(name)

        if match.match_type == "exact" and match.editor is not None:
            editor_id = match.editor.id or ""
            await self._update_from_tmdb(match.editor, member)
            result.editors_updated += 1
        else:
            if match.match_type == "fuzzy" and match.editor is not None:
                logger.info(
                    "Fuzzy match %r ~ %r (%.2f); adding as new editor",
                    name, match.editor.name, match.similarity,
                )
            editor_id = await self._editors.add(_editor_from_tmdb(member))
            result.editors_added += 1

        await self._editors.add_credit(editor_id, map_show_to_credit(show, member))
        result.credits_added += 1

    async def find_existing_editor(self, name: str) -> EditorMatch:
        exact = await self._editors.find_by_name(name)
        if exact:
            return EditorMatch(editor=exact[0], similarity=1.0, match_type="exact")

        best = NO_MATCH
        for editor in await self._editors.list_all():
            score = name_similarity(name, editor.name)
            if score >= SIMILARITY_THRESHOLD and score > best.similarity:
                best = EditorMatch(editor=editor, similarity=score, match_type="fuzzy")
        return best

    async def _update_from_tmdb(self, editor: Editor, member: dict[str, Any]) -> None:
        sources = list(editor.metadata.data_source)
        if "tmdb" not in sources:
            sources.append("tmdb")
        fields: dict[str, Any] = {"metadata.dataSource": sources}

        specialty = job_to_specialty(member.get("job", ""))
        if specialty not in editor.experience.specialties:
            fields["experience.specialties"] = [*editor.experience.specialties, specialty]

        await self._editors.update(editor.id or "", fields)

    async def _log_sync(self, source: str, result: SyncResult) -> None:
        try:
            await self._store.add(
                Collections.SYNC_LOGS,
                {"source": source, "timestamp": SERVER_TIMESTAMP, **result.to_document()},
            )
        except EditorFinderError as exc:
            logger.error("Error logging sync results: %s", exc)


def _unique_shows(shows: list[dict[str, Any]]) -> list[dict[str, Any]]:
    seen: set[Any] = set()
    unique = []
    for show in shows:
        if show.get("id") in seen:
            continue
        seen.add(show.get("id"))
        unique.append(show)
    return unique


def _editor_from_tmdb(member: dict[str, Any]) -> Editor:
    return Editor(
        name=member.get("name", ""),
        experience=Experience(
            years_active=0,
            start_year=utc_now().year,
            specialties=[job_to_specialty(member.get("job", ""))],
        ),
        metadata=EditorMetadata(data_source=["tmdb"]),
    )
