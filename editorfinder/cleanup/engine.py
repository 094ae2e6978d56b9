"""Mock-editor cleanup engine.

Scans every editor document, classifies it with the rule table, and deletes
matches together with their ``credits`` and ``awards`` subcollections.

Deletes go through write batches capped at ``BATCH_COMMIT_THRESHOLD``
operations, under Firestore's 500-write ceiling. Each batch commits before the
next one is filled. An editor's subcollection documents are queued before the
editor document, so an interrupted run leaves the editor in place to be
picked up again.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from editorfinder.cleanup.rules import DEFAULT_RULES, CleanupRule, classify
from editorfinder.errors import StoreIOError
from editorfinder.models.common import Collections
from editorfinder.store.base import DocumentStore, WriteBatch, subcollection

logger = logging.getLogger(__name__)

BATCH_COMMIT_THRESHOLD = 400

_SUBCOLLECTIONS = (Collections.CREDITS, Collections.AWARDS)


@dataclass(frozen=True)
class CleanupMatch:
    editor_id: str
    name: str
    reason: str


@dataclass
class CleanupReport:
    scanned: int = 0
    matches: list[CleanupMatch] = field(default_factory=list)
    deleted: int = 0
    subdocuments_deleted: int = 0
    batches_committed: int = 0
    errors: list[str] = field(default_factory=list)
    dry_run: bool = False

    @property
    def remaining(self) -> int:
        return self.scanned - self.deleted

    def to_dict(self) -> dict[str, object]:
        return {
            "scanned": self.scanned,
            "deletedCount": self.deleted,
            "remaining": self.remaining,
            "subdocumentsDeleted": self.subdocuments_deleted,
            "batchesCommitted": self.batches_committed,
            "dryRun": self.dry_run,
            "matches": [
                {"editorId": m.editor_id, "name": m.name, "reason": m.reason}
                for m in self.matches
            ],
            "errors": list(self.errors),
        }


class _BatchWriter:
    """Feeds deletes into store batches, committing at the threshold."""

    def __init__(self, store: DocumentStore, threshold: int, report: CleanupReport) -> None:
        self._store = store
        self._threshold = threshold
        self._report = report
        self._batch: WriteBatch = store.batch()

    async def delete(self, collection: str, doc_id: str) -> None:
        self._batch.delete(collection, doc_id)
        if len(self._batch) >= self._threshold:
            await self.flush()

    async def flush(self) -> None:
        if len(self._batch) == 0:
            return
        size = len(self._batch)
        await self._batch.commit()
        self._report.batches_committed += 1
        logger.info("Committed batch of %d deletions", size)
        self._batch = self._store.batch()


class CleanupEngine:
    """Classify-and-delete pass over the ``editors`` collection."""

    def __init__(
        self,
        store: DocumentStore,
        rules: Sequence[CleanupRule] = DEFAULT_RULES,
        batch_threshold: int = BATCH_COMMIT_THRESHOLD,
    ) -> None:
        if batch_threshold < 1:
            msg = "batch_threshold must be positive"
            raise ValueError(msg)
        self._store = store
        self._rules = tuple(rules)
        self._threshold = batch_threshold

    async def run(self, *, dry_run: bool = False) -> CleanupReport:
        report = CleanupReport(dry_run=dry_run)
        editors = await self._store.list_all(Collections.EDITORS)
        report.scanned = len(editors)
        logger.info("Found %d total editors in database", report.scanned)

        writer = _BatchWriter(self._store, self._threshold, report)
        for doc in editors:
            rule = classify(doc.id, doc.data, self._rules)
            if rule is None:
                continue

            name = str(doc.data.get("name", ""))
            report.matches.append(CleanupMatch(doc.id, name, rule.reason))
            logger.info("Deleting %s (%s): %s", name, doc.id, rule.reason)
            if dry_run:
                continue

            await self._queue_subcollections(doc.id, writer, report)
            await writer.delete(Collections.EDITORS, doc.id)
            report.deleted += 1

        await writer.flush()
        logger.info(
            "Cleanup finished: %d deleted, %d remaining",
            report.deleted, report.remaining,
        )
        return report

    async def _queue_subcollections(
        self, editor_id: str, writer: _BatchWriter, report: CleanupReport,
    ) -> None:
        for name in _SUBCOLLECTIONS:
            path = subcollection(Collections.EDITORS, editor_id, name)
            try:
                children = await self._store.list_all(path)
            except StoreIOError as exc:
                msg = f"Error cleaning {name} for {editor_id}: {exc}"
                logger.warning(msg)
                report.errors.append(msg)
                continue
            for child in children:
                await writer.delete(path, child.id)
                report.subdocuments_deleted += 1
