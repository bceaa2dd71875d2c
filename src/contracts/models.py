"""
Content contracts shared by the sync pipeline, the CRUD service and the web layer.
"""

import re
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import ConfigDict, Field, model_validator

from utils.pydantic_tools import BaseModelWithMethods


class ContentKind(str, Enum):
    """The three content tables of the site."""

    POSTS = "posts"
    VLOGS = "vlogs"
    PHOTOGRAPHY = "photography"


class ContentSource(str, Enum):
    """Where a record came from: written by an admin, or synced from a provider."""

    NATIVE = "native"
    PEXELS = "pexels"
    YOUTUBE = "youtube"


class Platform(str, Enum):
    YOUTUBE = "YouTube"
    YT_SHORTS = "YT Shorts"
    INSTAGRAM_REELS = "Instagram Reels"
    TIKTOK = "TikTok"


class VideoType(str, Enum):
    LONG = "long"
    SHORT = "short"


class VlogCategory(str, Enum):
    TRAVEL = "Travel"
    TECH = "Tech"
    DAILY = "Daily"
    FOOD = "Food"
    EDUCATION = "Education"
    ENTERTAINMENT = "Entertainment"


class PostCategory(str, Enum):
    TECH = "Tech"
    CURRENT_AFFAIRS = "Current Affairs"
    PERSONAL = "Personal"


# Local image shown when a provider item has no usable image URL
PLACEHOLDER_IMAGE = "/images/placeholder.jpg"

# Column used to address a single row of each table
KEY_COLUMNS: dict[ContentKind, str] = {
    ContentKind.POSTS: "slug",
    ContentKind.VLOGS: "id",
    ContentKind.PHOTOGRAPHY: "id",
}

# Column used to order listings, newest first
ORDER_COLUMNS: dict[ContentKind, str] = {
    ContentKind.POSTS: "date",
    ContentKind.VLOGS: "created_at",
    ContentKind.PHOTOGRAPHY: "created_at",
}


def utc_now_iso() -> str:
    return datetime.now(UTC).isoformat()


def slugify(text: str) -> str:
    """Lower-case, hyphen-separated slug built from letters and digits only."""
    slug = re.sub(r"[^a-z0-9]+", "-", (text or "").lower())
    return slug.strip("-")


# -------------------------------
# Normalized content
# -------------------------------
class ContentRecord(BaseModelWithMethods):
    """Normalized form of one piece of content, independent of table layout."""

    id: str
    kind: ContentKind
    source: ContentSource = ContentSource.NATIVE
    external_id: str | None = None

    title: str = ""
    description: str = ""
    media_url: str = ""  # photo src or video thumbnail
    source_url: str = ""  # provider page or watch URL
    alt: str = ""
    category: str | None = None
    tags: list[str] = Field(default_factory=list)

    # Attribution
    author_name: str | None = None
    author_url: str | None = None

    width: int | None = None
    height: int | None = None
    download_url: str | None = None
    created_at: str = Field(default_factory=utc_now_iso)

    # Video-only
    platform: Platform | None = None
    video_type: VideoType | None = None
    duration: str | None = None
    view_count: int | None = None

    @property
    def is_video(self) -> bool:
        return self.kind == ContentKind.VLOGS


class SyncedItem(BaseModelWithMethods):
    id: str
    title: str


class SyncResult(BaseModelWithMethods):
    """Summary of one sync run. inserted + skipped + failed == total_fetched."""

    provider: str
    table: ContentKind
    collection_id: str = ""
    forced: bool = False
    total_fetched: int = 0
    inserted: int = 0
    skipped: int = 0
    failed: int = 0
    items: list[SyncedItem] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        """False when items were due for insertion and every insert failed."""
        return not (self.inserted == 0 and self.failed > 0)

    @property
    def message(self) -> str:
        if self.total_fetched == 0:
            return "No new items found"
        if self.inserted == 0 and self.failed == 0:
            return "All items are already synced"
        if not self.succeeded:
            return f"Failed to sync {self.failed} items ({self.skipped} skipped)"
        message = f"Successfully synced {self.inserted} new items"
        if self.failed:
            message += f" ({self.failed} failed)"
        return message

    def to_response(self) -> dict[str, Any]:
        """Response envelope returned by the sync endpoints."""
        return {
            "success": self.succeeded,
            "message": self.message,
            "syncedCount": self.inserted,
            "totalFetched": self.total_fetched,
            "skippedCount": self.skipped,
            "failedCount": self.failed,
            "forced": self.forced,
            "items": [item.to_dict() for item in self.items],
            "errors": self.errors,
        }


class ListResult(BaseModelWithMethods):
    """Read-path result. A failed read carries an empty list and a message."""

    kind: ContentKind
    items: list[dict[str, Any]] = Field(default_factory=list)
    total_results: int = 0
    message: str | None = None
    degraded: bool = False


# -------------------------------
# Admin CRUD payloads
# -------------------------------
class BlogPost(BaseModelWithMethods):
    model_config = ConfigDict(extra="forbid")

    slug: str = ""
    title: str = Field(..., min_length=1)
    excerpt: str = ""
    content: str = Field(..., min_length=1)
    image: str = ""
    category: PostCategory = PostCategory.PERSONAL
    tags: list[str] = Field(default_factory=list)
    author: str = ""
    date: str = Field(default_factory=utc_now_iso)

    @model_validator(mode="after")
    def derive_slug(self) -> "BlogPost":
        if not self.slug:
            self.slug = slugify(self.title)
        return self


class BlogPostUpdate(BaseModelWithMethods):
    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(None, min_length=1)
    excerpt: str | None = None
    content: str | None = Field(None, min_length=1)
    image: str | None = None
    category: PostCategory | None = None
    tags: list[str] | None = None
    author: str | None = None
    date: str | None = None


class Vlog(BaseModelWithMethods):
    model_config = ConfigDict(extra="forbid")

    title: str = Field(..., min_length=1)
    url: str = Field(..., pattern=r"^https?://")
    platform: Platform
    category: VlogCategory
    description: str = ""
    thumbnail: str = ""
    video_type: VideoType = VideoType.LONG
    featured: bool = False
    created_at: str = Field(default_factory=utc_now_iso)


class VlogUpdate(BaseModelWithMethods):
    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(None, min_length=1)
    url: str | None = Field(None, pattern=r"^https?://")
    platform: Platform | None = None
    category: VlogCategory | None = None
    description: str | None = None
    thumbnail: str | None = None
    video_type: VideoType | None = None
    featured: bool | None = None


class Photography(BaseModelWithMethods):
    model_config = ConfigDict(extra="forbid")

    src: str = Field(..., min_length=1)
    alt: str = Field(..., min_length=1)
    download_url: str = Field(..., min_length=1)
    title: str = ""
    description: str = ""
    category: str = ""
    tags: list[str] = Field(default_factory=list)
    source: str = "personal"
    created_at: str = Field(default_factory=utc_now_iso)


class PhotographyUpdate(BaseModelWithMethods):
    model_config = ConfigDict(extra="forbid")

    src: str | None = Field(None, min_length=1)
    alt: str | None = Field(None, min_length=1)
    download_url: str | None = Field(None, min_length=1)
    title: str | None = None
    description: str | None = None
    category: str | None = None
    tags: list[str] | None = None


CREATE_MODELS: dict[ContentKind, type[BaseModelWithMethods]] = {
    ContentKind.POSTS: BlogPost,
    ContentKind.VLOGS: Vlog,
    ContentKind.PHOTOGRAPHY: Photography,
}

UPDATE_MODELS: dict[ContentKind, type[BaseModelWithMethods]] = {
    ContentKind.POSTS: BlogPostUpdate,
    ContentKind.VLOGS: VlogUpdate,
    ContentKind.PHOTOGRAPHY: PhotographyUpdate,
}
