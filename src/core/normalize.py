"""
Normalization of raw provider items into ContentRecords.

Pure functions with no failure path: every missing field has a fallback, so
a sparse item still produces a complete record. Items without a provider id
get a time-based synthetic id; such items cannot be recognized again by a
later sync and are re-inserted each time.
"""

import time

from api.pexels.models import PexelsPhoto
from api.youtube.models import YouTubeVideoItem
from contracts.models import (
    PLACEHOLDER_IMAGE,
    ContentKind,
    ContentRecord,
    ContentSource,
    slugify,
    utc_now_iso,
)
from core.classify import classify_category, classify_video_type, platform_for
from core.dedup import youtube_thumbnail

PHOTO_CATEGORY = "pexels-collection"


def record_id(source: ContentSource, provider_id: str | int | None) -> str:
    """Stable identifier "{source}-{provider_id}", or a synthetic one when the id is missing."""
    if provider_id is None or str(provider_id).strip() == "":
        return f"{source.value}-synthetic-{time.time_ns()}"
    return f"{source.value}-{provider_id}"


def normalize_photo(photo: PexelsPhoto) -> ContentRecord:
    external_id = str(photo.id) if photo.id not in (None, "") else None
    media_url = photo.src.best() or PLACEHOLDER_IMAGE

    if photo.alt:
        title = photo.alt
    elif photo.photographer:
        title = f"Photo by {photo.photographer}"
    else:
        title = "Untitled photo"

    tags = ["pexels", "photography"]
    photographer_slug = slugify(photo.photographer or "")
    if photographer_slug:
        tags.append(photographer_slug)

    return ContentRecord(
        id=record_id(ContentSource.PEXELS, external_id),
        kind=ContentKind.PHOTOGRAPHY,
        source=ContentSource.PEXELS,
        external_id=external_id,
        title=title,
        description=f"Photo by {photo.photographer} on Pexels" if photo.photographer else "",
        media_url=media_url,
        source_url=photo.url or "",
        alt=title,
        category=PHOTO_CATEGORY,
        tags=tags,
        author_name=photo.photographer,
        author_url=photo.photographer_url,
        width=photo.width,
        height=photo.height,
        download_url=photo.src.original or photo.src.large2x or photo.url or media_url,
        created_at=utc_now_iso(),
    )


def normalize_video(video: YouTubeVideoItem) -> ContentRecord:
    title = video.title or "Untitled video"
    description = video.description or ""

    thumbnail = video.best_thumbnail()
    if not thumbnail and video.video_id:
        thumbnail = youtube_thumbnail(video.video_id, "hqdefault")

    video_type = classify_video_type(title, description, video.duration)

    return ContentRecord(
        id=record_id(ContentSource.YOUTUBE, video.video_id),
        kind=ContentKind.VLOGS,
        source=ContentSource.YOUTUBE,
        external_id=video.video_id,
        title=title,
        description=description,
        media_url=thumbnail or PLACEHOLDER_IMAGE,
        source_url=video.watch_url or "",
        alt=title,
        category=classify_category(title, description).value,
        tags=list(video.tags),
        author_name=video.channel_title,
        created_at=video.published_at or utc_now_iso(),
        platform=platform_for(video_type),
        video_type=video_type,
        duration=video.duration,
        view_count=video.view_count,
    )


def normalize(raw: PexelsPhoto | YouTubeVideoItem, source_kind: ContentSource) -> ContentRecord:
    """Normalize a raw provider item; source_kind selects the mapping."""
    if source_kind == ContentSource.PEXELS:
        return normalize_photo(raw)  # type: ignore[arg-type]
    if source_kind == ContentSource.YOUTUBE:
        return normalize_video(raw)  # type: ignore[arg-type]
    raise ValueError(f"No normalizer for source {source_kind!r}")
