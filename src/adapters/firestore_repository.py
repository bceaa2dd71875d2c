"""
Firestore-backed content repository.

Each table maps to a collection; the row "id" is the document id. The
Firestore client is synchronous, so every call runs in the default executor.
"""

import asyncio
from collections.abc import Callable
from typing import Any, TypeVar

from google.api_core import exceptions as gcp_exceptions
from google.auth import exceptions as auth_exceptions
from google.cloud import firestore  # type: ignore[import, attr-defined]
from google.cloud.firestore_v1.base_query import FieldFilter

from contracts.errors import ConfigurationError, PersistenceError
from utils.get_logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def _to_row(doc: Any) -> dict[str, Any]:
    data = doc.to_dict() or {}
    return {**data, "id": doc.id}


class FirestoreRepository:
    def __init__(self, project: str | None = None, client: Any = None) -> None:
        self.project = project
        self._db = client  # Lazy initialization unless injected

    @property
    def db(self) -> firestore.Client:
        if self._db is None:
            self._db = firestore.Client(project=self.project)
        return self._db

    async def _run(self, description: str, fn: Callable[[], T]) -> T:
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, fn)
        except PersistenceError:
            raise
        except gcp_exceptions.GoogleAPICallError as e:
            raise PersistenceError(f"Firestore {description} failed: {e}") from e
        except auth_exceptions.GoogleAuthError as e:
            # Raised when the lazy client is built without usable credentials
            raise ConfigurationError(f"Firestore credentials are not configured: {e}") from e

    def _find_ref(self, table: str, key_column: str, key: Any) -> Any | None:
        collection = self.db.collection(table)
        if key_column == "id":
            ref = collection.document(str(key))
            return ref if ref.get().exists else None
        docs = list(collection.where(filter=FieldFilter(key_column, "==", key)).limit(1).stream())
        return docs[0].reference if docs else None

    async def select(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = True,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        def _select() -> list[dict[str, Any]]:
            query: Any = self.db.collection(table)
            for column, value in (filters or {}).items():
                query = query.where(filter=FieldFilter(column, "==", value))
            if order_by:
                direction = firestore.Query.DESCENDING if descending else firestore.Query.ASCENDING
                query = query.order_by(order_by, direction=direction)
            if limit:
                query = query.limit(limit)
            return [_to_row(doc) for doc in query.stream()]

        return await self._run(f"select {table}", _select)

    async def get(self, table: str, key_column: str, key: Any) -> dict[str, Any] | None:
        def _get() -> dict[str, Any] | None:
            ref = self._find_ref(table, key_column, key)
            return _to_row(ref.get()) if ref is not None else None

        return await self._run(f"get {table}/{key}", _get)

    async def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        def _insert() -> dict[str, Any]:
            data = {k: v for k, v in row.items() if k != "id"}
            collection = self.db.collection(table)
            if row.get("id"):
                ref = collection.document(str(row["id"]))
                try:
                    ref.create(data)
                except gcp_exceptions.Conflict as e:
                    raise PersistenceError(f"Document {table}/{row['id']} already exists") from e
            else:
                _, ref = collection.add(data)
            return {**data, "id": ref.id}

        return await self._run(f"insert into {table}", _insert)

    async def update(
        self, table: str, key_column: str, key: Any, changes: dict[str, Any]
    ) -> dict[str, Any] | None:
        def _update() -> dict[str, Any] | None:
            ref = self._find_ref(table, key_column, key)
            if ref is None:
                return None
            ref.update({k: v for k, v in changes.items() if k != "id"})
            return _to_row(ref.get())

        return await self._run(f"update {table}/{key}", _update)

    async def update_where(
        self, table: str, filters: dict[str, Any], changes: dict[str, Any]
    ) -> int:
        def _update_where() -> int:
            query: Any = self.db.collection(table)
            for column, value in filters.items():
                query = query.where(filter=FieldFilter(column, "==", value))
            updated = 0
            for doc in query.stream():
                doc.reference.update(changes)
                updated += 1
            return updated

        return await self._run(f"bulk update {table}", _update_where)

    async def delete(self, table: str, key_column: str, key: Any) -> bool:
        def _delete() -> bool:
            ref = self._find_ref(table, key_column, key)
            if ref is None:
                return False
            ref.delete()
            return True

        return await self._run(f"delete {table}/{key}", _delete)

    async def count(self, table: str) -> int:
        def _count() -> int:
            result = self.db.collection(table).count().get()
            return int(result[0][0].value)

        return await self._run(f"count {table}", _count)

    async def close(self) -> None:
        if self._db is not None:
            self._db.close()
            self._db = None
