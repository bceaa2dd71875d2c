"""
Duplicate detection between a candidate record and the stored records.

A candidate is a duplicate when any stored record has the same identifier
(or the same external id from the same source), the same media or source URL,
or, for videos, a stored URL that contains the candidate's video id.
No fuzzy matching is done.
"""

import re
from collections.abc import Iterable

from contracts.models import PLACEHOLDER_IMAGE, ContentRecord

YOUTUBE_THUMBNAIL_QUALITIES = ("maxresdefault", "hqdefault", "mqdefault", "default")

_VIDEO_ID = r"([a-zA-Z0-9_-]{11})"
_YOUTUBE_URL_PATTERNS = (
    re.compile(r"(?:youtube\.com/watch\?(?:.*&)?v=)" + _VIDEO_ID),
    re.compile(r"(?:youtube\.com/embed/)" + _VIDEO_ID),
    re.compile(r"(?:youtube\.com/shorts/)" + _VIDEO_ID),
    re.compile(r"(?:youtu\.be/)" + _VIDEO_ID),
    re.compile(r"(?:youtube\.com/v/)" + _VIDEO_ID),
    re.compile(r"(?:youtube\.com/user/[^/]+/)" + _VIDEO_ID),
)
_BARE_VIDEO_ID = re.compile(r"^" + _VIDEO_ID + r"$")


def extract_youtube_video_id(url: str | None) -> str | None:
    """Video id from a watch, embed, shorts, youtu.be or /v/ URL, or a bare 11-char id."""
    if not url:
        return None
    url = url.strip()
    for pattern in _YOUTUBE_URL_PATTERNS:
        match = pattern.search(url)
        if match:
            return match.group(1)
    match = _BARE_VIDEO_ID.match(url)
    return match.group(1) if match else None


def youtube_thumbnail(video_id: str, quality: str = "hqdefault") -> str:
    if quality not in YOUTUBE_THUMBNAIL_QUALITIES:
        raise ValueError(f"Unknown thumbnail quality {quality!r}")
    return f"https://i.ytimg.com/vi/{video_id}/{quality}.jpg"


def _same_identity(candidate: ContentRecord, record: ContentRecord) -> bool:
    if candidate.id == record.id:
        return True
    return bool(
        candidate.external_id
        and candidate.external_id == record.external_id
        and candidate.source == record.source
    )


def _same_url(candidate: ContentRecord, record: ContentRecord) -> bool:
    candidate_urls = {u for u in (candidate.media_url, candidate.source_url) if u} - {PLACEHOLDER_IMAGE}
    return any(u in candidate_urls for u in (record.media_url, record.source_url) if u)


def _contains_video_id(candidate: ContentRecord, record: ContentRecord) -> bool:
    if not candidate.is_video or not candidate.external_id:
        return False
    return any(candidate.external_id in u for u in (record.source_url, record.media_url) if u)


def is_duplicate(candidate: ContentRecord, existing: Iterable[ContentRecord]) -> bool:
    return any(
        _same_identity(candidate, record)
        or _same_url(candidate, record)
        or _contains_video_id(candidate, record)
        for record in existing
    )
