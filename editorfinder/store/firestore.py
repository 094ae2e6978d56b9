"""Google Cloud Firestore implementation of the document store."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from google.api_core import exceptions as google_exceptions
from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from editorfinder.config.settings import Settings
from editorfinder.errors import DocumentNotFoundError, StoreIOError
from editorfinder.store.base import (
    SERVER_TIMESTAMP,
    DocumentStore,
    StoredDocument,
    WriteBatch,
)

logger = logging.getLogger(__name__)


def _to_firestore(value: Any) -> Any:
    """Swap the store-neutral timestamp sentinel for Firestore's own."""
    if value is SERVER_TIMESTAMP:
        return firestore.SERVER_TIMESTAMP
    if isinstance(value, Mapping):
        return {k: _to_firestore(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_to_firestore(v) for v in value]
    return value


@contextmanager
def _translate_errors(op: str, path: str) -> Iterator[None]:
    try:
        yield
    except google_exceptions.NotFound as exc:
        if op == "update":
            raise DocumentNotFoundError(path) from exc
        raise StoreIOError(f"{op} {path}: {exc}") from exc
    except google_exceptions.GoogleAPIError as exc:
        logger.warning("Firestore %s failed for %s: %s", op, path, exc)
        raise StoreIOError(f"{op} {path}: {exc}") from exc


class FirestoreWriteBatch(WriteBatch):
    def __init__(self, client: firestore.AsyncClient) -> None:
        super().__init__()
        self._client = client
        self._batch = client.batch()

    def set(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        self._count()
        ref = self._client.collection(collection).document(doc_id)
        self._batch.set(ref, _to_firestore(data))

    def delete(self, collection: str, doc_id: str) -> None:
        self._count()
        self._batch.delete(self._client.collection(collection).document(doc_id))

    async def commit(self) -> None:
        with _translate_errors("commit", f"batch of {len(self)}"):
            await self._batch.commit()


class FirestoreDocumentStore(DocumentStore):
    """Document store over ``google.cloud.firestore.AsyncClient``."""

    def __init__(self, client: firestore.AsyncClient) -> None:
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> FirestoreDocumentStore:
        if settings.FIRESTORE_EMULATOR_HOST:
            # The client library reads the emulator address from the environment.
            os.environ["FIRESTORE_EMULATOR_HOST"] = settings.FIRESTORE_EMULATOR_HOST
        client = firestore.AsyncClient(
            project=settings.FIRESTORE_PROJECT_ID or None,
            database=settings.FIRESTORE_DATABASE,
        )
        return cls(client)

    async def close(self) -> None:
        """Close the gRPC channel and the HTTP session held by the client."""
        # AsyncClient.close() only releases the HTTP session; the channel is awaited here.
        await self._client._firestore_api.transport.close()
        self._client.close()

    def _doc(self, collection: str, doc_id: str):  # noqa: ANN202
        return self._client.collection(collection).document(doc_id)

    async def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        with _translate_errors("get", f"{collection}/{doc_id}"):
            snapshot = await self._doc(collection, doc_id).get()
        return snapshot.to_dict() if snapshot.exists else None

    async def set(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        with _translate_errors("set", f"{collection}/{doc_id}"):
            await self._doc(collection, doc_id).set(_to_firestore(data))

    async def add(self, collection: str, data: dict[str, Any]) -> str:
        with _translate_errors("add", collection):
            _, ref = await self._client.collection(collection).add(_to_firestore(data))
        return ref.id

    async def update(self, collection: str, doc_id: str, fields: dict[str, Any]) -> None:
        with _translate_errors("update", f"{collection}/{doc_id}"):
            await self._doc(collection, doc_id).update(_to_firestore(fields))

    async def delete(self, collection: str, doc_id: str) -> None:
        with _translate_errors("delete", f"{collection}/{doc_id}"):
            await self._doc(collection, doc_id).delete()

    async def list_all(self, collection: str) -> list[StoredDocument]:
        with _translate_errors("list", collection):
            return [
                StoredDocument(id=snap.id, data=snap.to_dict() or {})
                async for snap in self._client.collection(collection).stream()
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
        q = self._client.collection(collection)
        for field, value in where.items():
            q = q.where(filter=FieldFilter(field, "==", value))
        if order_by is not None:
            direction = (
                firestore.Query.DESCENDING if descending else firestore.Query.ASCENDING
            )
            q = q.order_by(order_by, direction=direction)
        if limit is not None:
            q = q.limit(limit)
        with _translate_errors("query", collection):
            return [
                StoredDocument(id=snap.id, data=snap.to_dict() or {})
                async for snap in q.stream()
            ]

    def batch(self) -> FirestoreWriteBatch:
        return FirestoreWriteBatch(self._client)
