"""
Target-table adapters: map ContentRecords to and from the rows of the
photography and vlogs tables.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar

from contracts.models import (
    ContentKind,
    ContentRecord,
    ContentSource,
    Platform,
    VideoType,
)
from core.dedup import extract_youtube_video_id

E = TypeVar("E", bound=Enum)


def _enum_or_none(enum_cls: type[E], value: Any) -> E | None:
    try:
        return enum_cls(value)
    except ValueError:
        return None


def _int_or_none(value: Any) -> int | None:
    try:
        return int(value) if value is not None else None
    except (TypeError, ValueError):
        return None


def split_tags(value: Any) -> list[str]:
    """Tags are stored as a list or as a comma-joined string."""
    if not value:
        return []
    if isinstance(value, str):
        return [tag.strip() for tag in value.split(",") if tag.strip()]
    return [str(tag) for tag in value]


# -------------------------------
# photography
# -------------------------------
def photography_to_row(record: ContentRecord) -> dict[str, Any]:
    return {
        "id": record.id,
        "title": record.title,
        "description": record.description,
        "src": record.media_url,
        "alt": record.alt or record.title,
        "category": record.category,
        "tags": list(record.tags),
        "photographer_name": record.author_name,
        "photographer_url": record.author_url,
        "width": record.width,
        "height": record.height,
        "original_url": record.source_url,
        "download_url": record.download_url,
        "pexels_id": _int_or_none(record.external_id) if record.source == ContentSource.PEXELS else None,
        "source": record.source.value,
        "created_at": record.created_at,
    }


def photography_from_row(row: dict[str, Any]) -> ContentRecord:
    pexels_id = row.get("pexels_id")
    source = _enum_or_none(ContentSource, row.get("source"))
    if source is None:
        source = ContentSource.PEXELS if pexels_id else ContentSource.NATIVE

    record = ContentRecord(
        id=str(row.get("id") or ""),
        kind=ContentKind.PHOTOGRAPHY,
        source=source,
        external_id=str(pexels_id) if pexels_id else None,
        title=row.get("title") or "",
        description=row.get("description") or "",
        media_url=row.get("src") or "",
        source_url=row.get("original_url") or "",
        alt=row.get("alt") or "",
        category=row.get("category"),
        tags=split_tags(row.get("tags")),
        author_name=row.get("photographer_name"),
        author_url=row.get("photographer_url"),
        width=_int_or_none(row.get("width")),
        height=_int_or_none(row.get("height")),
        download_url=row.get("download_url"),
    )
    if row.get("created_at"):
        record.created_at = str(row["created_at"])
    return record


# -------------------------------
# vlogs
# -------------------------------
def vlog_to_row(record: ContentRecord) -> dict[str, Any]:
    return {
        "id": record.id,
        "title": record.title,
        "description": record.description,
        "thumbnail": record.media_url,
        "url": record.source_url,
        "platform": record.platform.value if record.platform else None,
        "category": record.category,
        "video_type": record.video_type.value if record.video_type else None,
        "youtube_video_id": record.external_id if record.source == ContentSource.YOUTUBE else None,
        "duration": record.duration,
        "view_count": record.view_count,
        "tags": ",".join(record.tags),
        "created_at": record.created_at,
    }


def vlog_from_row(row: dict[str, Any]) -> ContentRecord:
    url = row.get("url") or ""
    video_id = row.get("youtube_video_id")
    source = ContentSource.YOUTUBE if video_id else ContentSource.NATIVE

    record = ContentRecord(
        id=str(row.get("id") or ""),
        kind=ContentKind.VLOGS,
        source=source,
        external_id=video_id or extract_youtube_video_id(url),
        title=row.get("title") or "",
        description=row.get("description") or "",
        media_url=row.get("thumbnail") or "",
        source_url=url,
        category=row.get("category"),
        tags=split_tags(row.get("tags")),
        platform=_enum_or_none(Platform, row.get("platform")),
        video_type=_enum_or_none(VideoType, row.get("video_type")),
        duration=row.get("duration"),
        view_count=_int_or_none(row.get("view_count")),
    )
    if row.get("created_at"):
        record.created_at = str(row["created_at"])
    return record


@dataclass(frozen=True)
class TableAdapter:
    kind: ContentKind
    to_row: Callable[[ContentRecord], dict[str, Any]]
    from_row: Callable[[dict[str, Any]], ContentRecord]

    @property
    def table(self) -> str:
        return self.kind.value


PHOTOGRAPHY_TABLE = TableAdapter(ContentKind.PHOTOGRAPHY, photography_to_row, photography_from_row)
VLOGS_TABLE = TableAdapter(ContentKind.VLOGS, vlog_to_row, vlog_from_row)
