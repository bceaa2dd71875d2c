"""
Admin CRUD over posts, vlogs and photography, plus the vlog maintenance
operations.

Write paths validate input before touching the store and surface every
error. The list read path degrades: a store or configuration failure is
logged and answered with an empty list and a message. Vlog listings are
bounded by Settings.vlog_read_timeout.
"""

import asyncio
from typing import Any
from urllib.parse import quote

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from adapters.config import Settings
from adapters.repository import RepositoryRegistry
from contracts.errors import (
    ConfigurationError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from contracts.models import (
    CREATE_MODELS,
    KEY_COLUMNS,
    ORDER_COLUMNS,
    UPDATE_MODELS,
    ContentKind,
    ContentRecord,
    ContentSource,
    ListResult,
    Platform,
    VlogCategory,
)
from core.classify import classify_video_type, platform_for
from core.dedup import extract_youtube_video_id, is_duplicate, youtube_thumbnail
from core.normalize import record_id
from core.tables import VLOGS_TABLE
from utils.get_logger import get_logger

logger = get_logger(__name__)

# Old category labels still present in early vlog rows
LEGACY_CATEGORY_RENAMES: dict[str, VlogCategory] = {
    "Daily Life": VlogCategory.DAILY,
    "Tech Talks": VlogCategory.TECH,
}

# Platforms whose rows are re-classified between long and short form
YOUTUBE_PLATFORMS = (Platform.YOUTUBE.value, Platform.YT_SHORTS.value)


def titled_placeholder(title: str) -> str:
    return f"https://placehold.co/600x400.png?text={quote(title)}"


def _validate(model: type[BaseModel], payload: dict[str, Any]) -> BaseModel:
    """Validate admin input; field errors are reported by dotted field name."""
    try:
        return model.model_validate(payload)
    except PydanticValidationError as e:
        fields = {
            ".".join(str(part) for part in err["loc"]) or "__root__": err["msg"]
            for err in e.errors()
        }
        raise ValidationError(f"Invalid {model.__name__} payload", fields=fields) from e


class ContentService:
    def __init__(self, settings: Settings, registry: RepositoryRegistry):
        self.settings = settings
        self.registry = registry

    # -------------------------------
    # Read path
    # -------------------------------
    async def _select_all(self, kind: ContentKind, limit: int | None) -> list[dict[str, Any]]:
        repo = self.registry.for_kind(kind)
        return await repo.select(kind.value, order_by=ORDER_COLUMNS[kind], descending=True, limit=limit)

    async def list_items(self, kind: ContentKind, limit: int | None = None) -> ListResult:
        """List rows newest first. Never raises for store or configuration failures."""
        try:
            if kind == ContentKind.VLOGS:
                rows = await asyncio.wait_for(
                    self._select_all(kind, limit), timeout=self.settings.vlog_read_timeout
                )
            else:
                rows = await self._select_all(kind, limit)
        except asyncio.TimeoutError:
            logger.warning(
                f"Listing {kind.value} timed out after {self.settings.vlog_read_timeout}s"
            )
            return ListResult(
                kind=kind,
                message=f"Loading {kind.value} timed out, please try again later",
                degraded=True,
            )
        except (PersistenceError, ConfigurationError) as e:
            logger.error(f"Listing {kind.value} failed: {e.message}")
            return ListResult(
                kind=kind,
                message=f"{kind.value.capitalize()} are temporarily unavailable",
                degraded=True,
            )

        return ListResult(kind=kind, items=rows, total_results=len(rows))

    async def get(self, kind: ContentKind, key: str) -> dict[str, Any]:
        repo = self.registry.for_kind(kind)
        row = await repo.get(kind.value, KEY_COLUMNS[kind], key)
        if row is None:
            raise NotFoundError(f"{kind.value} {key!r} not found")
        return row

    # -------------------------------
    # Write path
    # -------------------------------
    def _vlog_row(self, payload: BaseModel) -> dict[str, Any]:
        row = payload.to_row()  # type: ignore[attr-defined]
        video_id = extract_youtube_video_id(row["url"]) if "youtu" in row["url"] else None
        if video_id:
            row["youtube_video_id"] = video_id
        if not row.get("thumbnail"):
            row["thumbnail"] = (
                youtube_thumbnail(video_id, "hqdefault") if video_id else titled_placeholder(row["title"])
            )
        return row

    async def create(self, kind: ContentKind, payload: dict[str, Any]) -> dict[str, Any]:
        model = _validate(CREATE_MODELS[kind], payload)
        row = self._vlog_row(model) if kind == ContentKind.VLOGS else model.to_row()  # type: ignore[attr-defined]

        repo = self.registry.for_kind(kind)
        created = await repo.insert(kind.value, row)
        logger.info(f"Created {kind.value} {created.get(KEY_COLUMNS[kind])}")
        return created

    async def update(self, kind: ContentKind, key: str, payload: dict[str, Any]) -> dict[str, Any]:
        changes = _validate(UPDATE_MODELS[kind], payload).to_row()  # type: ignore[attr-defined]
        if not changes:
            raise ValidationError("No fields to update")

        repo = self.registry.for_kind(kind)
        updated = await repo.update(kind.value, KEY_COLUMNS[kind], key, changes)
        if updated is None:
            raise NotFoundError(f"{kind.value} {key!r} not found")
        logger.info(f"Updated {kind.value} {key}: {sorted(changes)}")
        return updated

    async def delete(self, kind: ContentKind, key: str) -> None:
        repo = self.registry.for_kind(kind)
        if not await repo.delete(kind.value, KEY_COLUMNS[kind], key):
            raise NotFoundError(f"{kind.value} {key!r} not found")
        logger.info(f"Deleted {kind.value} {key}")

    async def add_video_by_url(
        self,
        url: str,
        title: str | None = None,
        description: str = "",
        category: VlogCategory = VlogCategory.DAILY,
    ) -> dict[str, Any]:
        """Insert a YouTube video as a vlog from its URL, unless it is already stored."""
        video_id = extract_youtube_video_id(url)
        if not video_id:
            raise ValidationError("Not a YouTube video URL", fields={"url": "Invalid YouTube URL"})

        title = title or f"YouTube video {video_id}"
        video_type = classify_video_type(title, description)
        record = ContentRecord(
            id=record_id(ContentSource.YOUTUBE, video_id),
            kind=ContentKind.VLOGS,
            source=ContentSource.YOUTUBE,
            external_id=video_id,
            title=title,
            description=description,
            media_url=youtube_thumbnail(video_id, "hqdefault"),
            source_url=f"https://www.youtube.com/watch?v={video_id}",
            category=category.value,
            platform=platform_for(video_type),
            video_type=video_type,
        )

        repo = self.registry.for_kind(ContentKind.VLOGS)
        existing = [VLOGS_TABLE.from_row(row) for row in await repo.select(VLOGS_TABLE.table)]
        if is_duplicate(record, existing):
            raise ValidationError("Video already exists", fields={"url": f"{video_id} is already stored"})

        created = await repo.insert(VLOGS_TABLE.table, VLOGS_TABLE.to_row(record))
        logger.info(f"Added YouTube video {video_id} as vlog {record.id}")
        return created

    # -------------------------------
    # Maintenance
    # -------------------------------
    async def rename_legacy_categories(self) -> dict[str, int]:
        """Rewrite old vlog category labels to the current ones. Returns rows changed per label."""
        repo = self.registry.for_kind(ContentKind.VLOGS)
        renamed: dict[str, int] = {}
        for old, new in LEGACY_CATEGORY_RENAMES.items():
            count = await repo.update_where(ContentKind.VLOGS.value, {"category": old}, {"category": new.value})
            logger.info(f"Renamed vlog category {old!r} -> {new.value!r} on {count} rows")
            renamed[old] = count
        return renamed

    async def reclassify_video_types(self) -> dict[str, int]:
        """Re-run short-form detection over YouTube vlogs and fix platform/video_type."""
        repo = self.registry.for_kind(ContentKind.VLOGS)
        rows = await repo.select(ContentKind.VLOGS.value)

        checked = updated = 0
        for row in rows:
            if row.get("platform") not in YOUTUBE_PLATFORMS:
                continue
            checked += 1
            video_type = classify_video_type(row.get("title"), row.get("description"), row.get("duration"))
            changes = {"video_type": video_type.value, "platform": platform_for(video_type).value}
            if all(row.get(column) == value for column, value in changes.items()):
                continue
            await repo.update(ContentKind.VLOGS.value, "id", row["id"], changes)
            updated += 1
            logger.info(f"Vlog {row['id']} is now {video_type.value} ({changes['platform']})")

        return {"checked": checked, "updated": updated}

