"""
Sync orchestrator: pulls one page from an external media provider,
normalizes and de-duplicates the items, and inserts the new ones into the
target content table one row at a time.

One pipeline per provider, selected by name:
    pexels  -> photography
    youtube -> vlogs

A provider failure aborts the run. A failed insert only fails that item:
it is logged, counted and recorded in the result, and the run continues.
The orchestrator never updates or deletes rows.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from adapters.config import Settings
from adapters.repository import ContentRepository, RepositoryRegistry
from api.pexels import PexelsService
from api.pexels.core import MAX_PAGE_SIZE as PEXELS_MAX_PAGE_SIZE
from api.youtube import YouTubeService, YouTubeVideoItem
from api.youtube.core import MAX_PAGE_SIZE as YOUTUBE_MAX_PAGE_SIZE
from contracts.errors import NotFoundError, PersistenceError, ValidationError
from contracts.models import (
    ContentKind,
    ContentRecord,
    ContentSource,
    SyncedItem,
    SyncResult,
    VlogCategory,
)
from core.dedup import is_duplicate
from core.normalize import normalize
from core.tables import PHOTOGRAPHY_TABLE, VLOGS_TABLE, TableAdapter
from utils.get_logger import get_logger

logger = get_logger(__name__)

DEFAULT_MAX_ITEMS = 40
DEFAULT_PREVIEW_ITEMS = 5


@dataclass
class ProviderAdapter:
    """What a pipeline needs from a provider client."""

    name: str
    source: ContentSource
    fetch_page: Callable[[str, int, int], Awaitable[list[Any]]]
    probe: Callable[[str], Awaitable[int]]
    default_collection: Callable[[], str]
    max_page_size: int
    # Publish time of a raw item; None when the provider has no publish dates
    published_at: Callable[[Any], str | None] | None = None


def video_published_at(video: YouTubeVideoItem) -> str | None:
    return video.published_at


def _parse_timestamp(value: str) -> datetime | None:
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


def pexels_adapter(settings: Settings, client: PexelsService | None = None) -> ProviderAdapter:
    client = client or PexelsService(settings.pexels_api_key)
    return ProviderAdapter(
        name="pexels",
        source=ContentSource.PEXELS,
        fetch_page=client.fetch_page,
        probe=client.probe,
        default_collection=lambda: settings.require("pexels_collection_id"),
        max_page_size=PEXELS_MAX_PAGE_SIZE,
    )


def youtube_adapter(settings: Settings, client: YouTubeService | None = None) -> ProviderAdapter:
    client = client or YouTubeService(settings.youtube_api_key)
    return ProviderAdapter(
        name="youtube",
        source=ContentSource.YOUTUBE,
        fetch_page=client.fetch_page,
        probe=client.probe,
        default_collection=lambda: settings.require("youtube_channel_id"),
        max_page_size=YOUTUBE_MAX_PAGE_SIZE,
        published_at=video_published_at,
    )


# provider name -> (provider adapter factory, target table)
PIPELINES: dict[str, tuple[Callable[[Settings], ProviderAdapter], TableAdapter]] = {
    "pexels": (pexels_adapter, PHOTOGRAPHY_TABLE),
    "youtube": (youtube_adapter, VLOGS_TABLE),
}


class SyncOrchestrator:
    """One sync pipeline: a provider adapter feeding a target table."""

    def __init__(self, provider: ProviderAdapter, target: TableAdapter, repository: ContentRepository):
        self.provider = provider
        self.target = target
        self.repository = repository

    async def _load_existing(self) -> list[ContentRecord]:
        try:
            rows = await self.repository.select(self.target.table)
        except PersistenceError:
            logger.error(f"Could not load existing {self.target.table} rows")
            raise
        return [self.target.from_row(row) for row in rows]

    def _check_options(self, published_after: datetime | None, category: VlogCategory | None) -> None:
        if published_after is not None and self.provider.published_at is None:
            raise ValidationError(
                f"{self.provider.name} items have no publish date",
                fields={"publishedAfter": f"Not supported for {self.provider.name}"},
            )
        if category is not None and self.target.kind != ContentKind.VLOGS:
            raise ValidationError(
                f"Category override only applies to vlogs, not {self.target.table}",
                fields={"category": f"Not supported for {self.provider.name}"},
            )

    def _published_since(self, raw_items: list[Any], published_after: datetime) -> list[Any]:
        """Keep items published at or after published_after; undated items are dropped."""
        if published_after.tzinfo is None:
            published_after = published_after.replace(tzinfo=UTC)
        kept = []
        for raw in raw_items:
            value = self.provider.published_at(raw)  # type: ignore[misc]
            published = _parse_timestamp(value) if value else None
            if published is not None and published >= published_after:
                kept.append(raw)
        if len(kept) < len(raw_items):
            logger.info(
                f"{len(raw_items) - len(kept)} of {len(raw_items)} items published before "
                f"{published_after.isoformat()} left out"
            )
        return kept

    async def sync(
        self,
        collection_id: str | None = None,
        max_items: int = DEFAULT_MAX_ITEMS,
        force: bool = False,
        published_after: datetime | None = None,
        category: VlogCategory | None = None,
    ) -> SyncResult:
        """
        Run one sync.

        Args:
            collection_id: Provider collection/channel; defaults to the configured one
            max_items: Page size requested from the provider
            force: Insert every fetched item, bypassing duplicate detection
            published_after: Only sync items published at or after this time
            category: Vlog category for every item instead of the keyword classifier

        Returns:
            SyncResult with inserted + skipped + failed == total_fetched

        Raises:
            ValidationError: an option the pipeline does not support
            ConfigurationError: missing credential or collection id
            ProviderError: the provider call failed
            PersistenceError: existing rows could not be loaded
        """
        self._check_options(published_after, category)
        collection_id = collection_id or self.provider.default_collection()
        page_size = max(1, min(max_items, self.provider.max_page_size))

        logger.info(
            f"Starting {self.provider.name} sync of {collection_id} into {self.target.table} "
            f"(max_items={page_size}, force={force})"
        )
        raw_items = await self.provider.fetch_page(collection_id, page_size, 1)
        if published_after is not None:
            raw_items = self._published_since(raw_items, published_after)

        result = SyncResult(
            provider=self.provider.name,
            table=self.target.kind,
            collection_id=collection_id,
            forced=force,
            total_fetched=len(raw_items),
        )
        if not raw_items:
            logger.info(f"No items returned by {self.provider.name} for {collection_id}")
            return result

        existing = await self._load_existing()
        logger.info(f"Fetched {len(raw_items)} items; {len(existing)} existing rows in {self.target.table}")

        for raw in raw_items:
            record = normalize(raw, self.provider.source)
            if category is not None:
                record.category = category.value

            if not force and is_duplicate(record, existing):
                logger.debug(f"Skipping duplicate {record.id}")
                result.skipped += 1
                continue

            try:
                await self.repository.insert(self.target.table, self.target.to_row(record))
            except PersistenceError as e:
                logger.error(f"Failed to insert {record.id}: {e.message}")
                result.failed += 1
                result.errors.append(f"{record.id}: {e.message}")
                continue

            existing.append(record)
            result.inserted += 1
            result.items.append(SyncedItem(id=record.id, title=record.title))
            logger.info(f"Inserted {record.id}: {record.title}")

        logger.info(
            f"{self.provider.name} sync finished: {result.inserted} inserted, "
            f"{result.skipped} skipped, {result.failed} failed of {result.total_fetched}"
        )
        return result

    async def probe(self, collection_id: str | None = None) -> dict[str, Any]:
        """Check provider connectivity without writing anything."""
        collection_id = collection_id or self.provider.default_collection()
        count = await self.provider.probe(collection_id)
        logger.info(f"{self.provider.name} probe of {collection_id}: {count} items")
        return {"provider": self.provider.name, "collection_id": collection_id, "count": count}

    async def preview(
        self, collection_id: str | None = None, max_items: int = DEFAULT_PREVIEW_ITEMS
    ) -> dict[str, Any]:
        """Fetch and normalize one page without writing it. Rows carry the suggested category."""
        collection_id = collection_id or self.provider.default_collection()
        page_size = max(1, min(max_items, self.provider.max_page_size))
        raw_items = await self.provider.fetch_page(collection_id, page_size, 1)

        items = []
        for raw in raw_items:
            record = normalize(raw, self.provider.source)
            items.append({**self.target.to_row(record), "suggestedCategory": record.category})
        logger.info(f"{self.provider.name} preview of {collection_id}: {len(items)} items")
        return {
            "provider": self.provider.name,
            "collection_id": collection_id,
            "count": len(items),
            "items": items,
        }


def build_orchestrator(
    provider: str,
    settings: Settings,
    registry: RepositoryRegistry,
    provider_adapter: ProviderAdapter | None = None,
) -> SyncOrchestrator:
    """Select the pipeline for a provider name and wire it to its repository."""
    if provider not in PIPELINES:
        raise NotFoundError(
            f"Unknown provider {provider!r}; expected one of {sorted(PIPELINES)}"
        )
    adapter_factory, target = PIPELINES[provider]
    adapter = provider_adapter or adapter_factory(settings)
    return SyncOrchestrator(adapter, target, registry.for_kind(target.kind))
