"""Document store contract.

A schemaless key-document database addressed by collection path and document
ID. Subcollections are addressed by slash-joined paths
(``editors/{editor_id}/credits``). Implementations:

- ``FirestoreDocumentStore``: Google Cloud Firestore (production).
- ``InMemoryDocumentStore``: dict-backed, for tests and local development.

Driver failures surface as ``StoreIOError``; ``update`` on a missing document
raises ``DocumentNotFoundError``.
"""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

# Firestore rejects batches above 500 writes.
MAX_BATCH_OPERATIONS = 500


class _ServerTimestamp:
    """Sentinel resolved to the store's own clock at write time."""

    _instance: _ServerTimestamp | None = None

    def __new__(cls) -> _ServerTimestamp:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = _ServerTimestamp()


def set_field_path(data: dict[str, Any], dotted: str, value: Any) -> None:
    """Set ``value`` at a dotted field path, creating or replacing parents as maps."""
    parts = dotted.split(".")
    node = data
    for part in parts[:-1]:
        child = node.get(part)
        if not isinstance(child, dict):
            child = {}
            node[part] = child
        node = child
    node[parts[-1]] = value


def apply_field_paths(data: Mapping[str, Any], fields: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of ``data`` with ``fields`` applied the way ``update`` applies them."""
    result = copy.deepcopy(dict(data))
    for key, value in fields.items():
        set_field_path(result, key, value)
    return result


def subcollection(collection: str, doc_id: str, name: str) -> str:
    """Return the path of a subcollection under one document."""
    return f"{collection}/{doc_id}/{name}"


@dataclass(frozen=True)
class StoredDocument:
    """A document read back from the store."""

    id: str
    data: dict[str, Any]


class WriteBatch(ABC):
    """Group of writes committed as one atomic unit."""

    def __init__(self) -> None:
        self._ops = 0

    def __len__(self) -> int:
        return self._ops

    def _count(self) -> None:
        if self._ops >= MAX_BATCH_OPERATIONS:
            msg = f"Batch already holds {MAX_BATCH_OPERATIONS} operations."
            raise ValueError(msg)
        self._ops += 1

    @abstractmethod
    def set(self, collection: str, doc_id: str, data: dict[str, Any]) -> None: ...

    @abstractmethod
    def delete(self, collection: str, doc_id: str) -> None: ...

    @abstractmethod
    async def commit(self) -> None: ...


class DocumentStore(ABC):
    """Async document store contract."""

    @abstractmethod
    async def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        """Return the document body, or ``None`` if it does not exist."""

    @abstractmethod
    async def set(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        """Create or overwrite a document."""

    @abstractmethod
    async def add(self, collection: str, data: dict[str, Any]) -> str:
        """Create a document under a store-generated ID and return the ID."""

    @abstractmethod
    async def update(self, collection: str, doc_id: str, fields: dict[str, Any]) -> None:
        """Overwrite the given fields of an existing document.

        Keys may be dotted field paths (``metadata.updatedAt``). Raises
        ``DocumentNotFoundError`` when the document does not exist.
        """

    @abstractmethod
    async def delete(self, collection: str, doc_id: str) -> None: ...

    @abstractmethod
    async def list_all(self, collection: str) -> list[StoredDocument]:
        """Return every document in a collection."""

    @abstractmethod
    async def query(
        self,
        collection: str,
        where: Mapping[str, Any],
        *,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[StoredDocument]:
        """Return documents whose fields equal every value in ``where``."""

    @abstractmethod
    def batch(self) -> WriteBatch: ...

    async def close(self) -> None:  # noqa: B027
        """Release client resources. Default: nothing to release."""
