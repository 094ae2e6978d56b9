"""Dict-backed document store for tests and local development.

Mirrors the Firestore semantics the application relies on: ``update`` fails on
a missing document, dotted keys address nested fields, ``SERVER_TIMESTAMP`` is
replaced by the store clock, and batches apply all-or-nothing on commit.
Reads and writes deep-copy so callers never share state with the store.
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

from editorfinder.errors import DocumentNotFoundError
from editorfinder.models.common import new_document_id, utc_now
from editorfinder.store.base import (
    SERVER_TIMESTAMP,
    DocumentStore,
    StoredDocument,
    WriteBatch,
    set_field_path,
)

_MISSING = object()


def _get_path(data: Mapping[str, Any], dotted: str) -> Any:
    node: Any = data
    for part in dotted.split("."):
        if not isinstance(node, Mapping) or part not in node:
            return _MISSING
        node = node[part]
    return node


def _sort_key(data: Mapping[str, Any], dotted: str) -> tuple[bool, Any]:
    # Nulls sort before values, as in Firestore.
    value = _get_path(data, dotted)
    return (value is not None, value)


class InMemoryWriteBatch(WriteBatch):
    def __init__(self, store: InMemoryDocumentStore) -> None:
        super().__init__()
        self._store = store
        self._pending: list[tuple[str, str, str, dict[str, Any] | None]] = []

    def set(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        self._count()
        self._pending.append(("set", collection, doc_id, data))

    def delete(self, collection: str, doc_id: str) -> None:
        self._count()
        self._pending.append(("delete", collection, doc_id, None))

    async def commit(self) -> None:
        self._store._apply_batch(self._pending)
        self._pending = []


class InMemoryDocumentStore(DocumentStore):
    """In-memory implementation for tests."""

    def __init__(self, clock: Callable[[], datetime] = utc_now) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}
        self._clock = clock
        # Size of every committed batch, in commit order.
        self.committed_batches: list[int] = []

    # ----- helpers -----

    def _resolve(self, value: Any, now: datetime) -> Any:
        if value is SERVER_TIMESTAMP:
            return now
        if isinstance(value, Mapping):
            return {k: self._resolve(v, now) for k, v in value.items()}
        if isinstance(value, list):
            return [self._resolve(v, now) for v in value]
        return copy.deepcopy(value)

    def _docs(self, collection: str) -> dict[str, dict[str, Any]]:
        return self._collections.setdefault(collection, {})

    def _apply_batch(
        self, ops: list[tuple[str, str, str, dict[str, Any] | None]],
    ) -> None:
        now = self._clock()
        for op, collection, doc_id, data in ops:
            if op == "set":
                self._docs(collection)[doc_id] = self._resolve(data, now)
            else:
                self._docs(collection).pop(doc_id, None)
        self.committed_batches.append(len(ops))

    # ----- DocumentStore -----

    async def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        doc = self._docs(collection).get(doc_id)
        return copy.deepcopy(doc) if doc is not None else None

    async def set(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        self._docs(collection)[doc_id] = self._resolve(data, self._clock())

    async def add(self, collection: str, data: dict[str, Any]) -> str:
        doc_id = new_document_id()
        await self.set(collection, doc_id, data)
        return doc_id

    async def update(self, collection: str, doc_id: str, fields: dict[str, Any]) -> None:
        doc = self._docs(collection).get(doc_id)
        if doc is None:
            raise DocumentNotFoundError(f"{collection}/{doc_id}")
        now = self._clock()
        for key, value in fields.items():
            set_field_path(doc, key, self._resolve(value, now))

    async def delete(self, collection: str, doc_id: str) -> None:
        self._docs(collection).pop(doc_id, None)

    async def list_all(self, collection: str) -> list[StoredDocument]:
        return [
            StoredDocument(id=doc_id, data=copy.deepcopy(doc))
            for doc_id, doc in self._docs(collection).items()
        ]

    async def query(
        self,
        collection: str,
        where: Mapping[str, Any],
        *,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[StoredDocument]:
        matches = [
            doc for doc in await self.list_all(collection)
            if all(_get_path(doc.data, f) == v for f, v in where.items())
        ]
        if order_by is not None:
            # Firestore drops documents lacking the ordered field.
            matches = [d for d in matches if _get_path(d.data, order_by) is not _MISSING]
            matches.sort(key=lambda d: _sort_key(d.data, order_by), reverse=descending)
        if limit is not None:
            matches = matches[:limit]
        return matches

    def batch(self) -> InMemoryWriteBatch:
        return InMemoryWriteBatch(self)

    # ----- test helpers -----

    def count(self, collection: str) -> int:
        return len(self._docs(collection))
