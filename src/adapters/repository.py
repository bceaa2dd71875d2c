"""
Persistence gateway: the interface the services use to read and write the
content store, and the registry that routes each table to its backend.
"""

from typing import Any, Protocol

from adapters.config import BACKEND_FIRESTORE, Settings
from contracts.models import ContentKind
from utils.get_logger import get_logger

logger = get_logger(__name__)


class ContentRepository(Protocol):
    """Select/insert/update/delete over one content store. Failures raise PersistenceError."""

    async def select(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = True,
        limit: int | None = None,
    ) -> list[dict[str, Any]]: ...

    async def get(self, table: str, key_column: str, key: Any) -> dict[str, Any] | None: ...

    async def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]: ...

    async def update(
        self, table: str, key_column: str, key: Any, changes: dict[str, Any]
    ) -> dict[str, Any] | None: ...

    async def update_where(
        self, table: str, filters: dict[str, Any], changes: dict[str, Any]
    ) -> int: ...

    async def delete(self, table: str, key_column: str, key: Any) -> bool: ...

    async def count(self, table: str) -> int: ...

    async def close(self) -> None: ...


class RepositoryRegistry:
    """Resolve the repository for a content table from Settings.

    Backends are built lazily and shared between tables that use the same one.
    """

    def __init__(self, settings: Settings, overrides: dict[str, ContentRepository] | None = None):
        self.settings = settings
        self._backends: dict[str, ContentRepository] = dict(overrides or {})

    def _build(self, backend: str) -> ContentRepository:
        if backend == BACKEND_FIRESTORE:
            from adapters.firestore_repository import FirestoreRepository

            return FirestoreRepository(project=self.settings.firestore_project)

        from adapters.supabase_repository import SupabaseRepository

        return SupabaseRepository(
            base_url=self.settings.require("supabase_url"),
            api_key=self.settings.supabase_key,
        )

    def for_kind(self, kind: ContentKind) -> ContentRepository:
        backend = self.settings.backend_for(kind)
        if backend not in self._backends:
            logger.info(f"Initializing {backend} repository (first used by {kind.value})")
            self._backends[backend] = self._build(backend)
        return self._backends[backend]

    async def close(self) -> None:
        for repo in self._backends.values():
            await repo.close()
        self._backends.clear()
