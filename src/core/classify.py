"""
Keyword tables and classifiers for synced videos.

Category matching is a case-insensitive substring search of title plus
description against CATEGORY_KEYWORDS; the first category in table order
with a matching keyword wins. Short-form detection looks for the markers in
SHORT_FORM_MARKERS, or a known duration of at most SHORT_FORM_MAX_SECONDS.
"""

import re

from contracts.models import Platform, VideoType, VlogCategory

DEFAULT_CATEGORY = VlogCategory.DAILY

# Order matters: first match wins
CATEGORY_KEYWORDS: dict[VlogCategory, tuple[str, ...]] = {
    VlogCategory.TECH: (
        "tech",
        "technology",
        "coding",
        "programming",
        "software",
        "development",
        "tutorial",
        "review",
        "techlife",
    ),
    VlogCategory.TRAVEL: (
        "travel",
        "trip",
        "vacation",
        "journey",
        "explore",
        "adventure",
        "destination",
        "tourism",
        "uttarakhand",
        "kathmandu",
    ),
    VlogCategory.FOOD: (
        "food",
        "cooking",
        "recipe",
        "restaurant",
        "eating",
        "cuisine",
        "chef",
        "kitchen",
    ),
    VlogCategory.DAILY: (
        "daily",
        "routine",
        "life",
        "personal",
        "vlog",
        "day in the life",
        "gym",
        "workout",
        "fitness",
        "motivation",
        "gymmotivation",
        "exercise",
        "bodybuilding",
        "training",
        "champion",
        "beast",
        "city",
        "lifestyle",
    ),
    VlogCategory.EDUCATION: (
        "education",
        "learn",
        "tutorial",
        "how to",
        "guide",
        "tips",
        "advice",
        "explain",
    ),
    VlogCategory.ENTERTAINMENT: (
        "entertainment",
        "fun",
        "funny",
        "comedy",
        "music",
        "movie",
        "game",
        "review",
    ),
}

SHORT_FORM_MARKERS: tuple[str, ...] = ("#shorts", "#short", "shorts", "#reel", "#reels")
SHORT_FORM_MAX_SECONDS = 60

_DURATION_RE = re.compile(
    r"^P(?:(?P<days>\d+)D)?(?:T(?:(?P<hours>\d+)H)?(?:(?P<minutes>\d+)M)?(?:(?P<seconds>\d+)S)?)?$"
)


def _haystack(title: str | None, description: str | None) -> str:
    return f"{title or ''} {description or ''}".lower()


def classify_category(title: str | None, description: str | None = None) -> VlogCategory:
    text = _haystack(title, description)
    for category, keywords in CATEGORY_KEYWORDS.items():
        if any(keyword in text for keyword in keywords):
            return category
    return DEFAULT_CATEGORY


def parse_duration(duration: str | None) -> int | None:
    """Seconds in an ISO 8601 duration such as PT1H2M3S. None when unparseable."""
    if not duration:
        return None
    match = _DURATION_RE.match(duration.strip().upper())
    if not match or not any(match.groupdict().values()):
        return None
    parts = {k: int(v) for k, v in match.groupdict().items() if v}
    return (
        parts.get("days", 0) * 86400
        + parts.get("hours", 0) * 3600
        + parts.get("minutes", 0) * 60
        + parts.get("seconds", 0)
    )


def classify_video_type(
    title: str | None, description: str | None = None, duration: str | None = None
) -> VideoType:
    text = _haystack(title, description)
    if any(marker in text for marker in SHORT_FORM_MARKERS):
        return VideoType.SHORT

    seconds = parse_duration(duration)
    if seconds is not None and 0 < seconds <= SHORT_FORM_MAX_SECONDS:
        return VideoType.SHORT
    return VideoType.LONG


def platform_for(video_type: VideoType) -> Platform:
    return Platform.YT_SHORTS if video_type == VideoType.SHORT else Platform.YOUTUBE
