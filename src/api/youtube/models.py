"""
YouTube Models - Pydantic models for YouTube Data API structures.
"""

from pydantic import BaseModel, ConfigDict, Field

from utils.pydantic_tools import BaseModelWithMethods

# Thumbnail qualities in descending size order
THUMBNAIL_PREFERENCE = ("maxres", "standard", "high", "medium", "default")


class YouTubeThumbnail(BaseModel):
    model_config = ConfigDict(extra="ignore")

    url: str | None = None
    width: int | None = None
    height: int | None = None


class YouTubeVideoItem(BaseModelWithMethods):
    """One upload of a channel, merged from playlistItems.list and videos.list."""

    model_config = ConfigDict(extra="ignore")

    video_id: str | None = None
    title: str | None = None
    description: str | None = None
    published_at: str | None = None
    channel_title: str | None = None
    thumbnails: dict[str, YouTubeThumbnail] = Field(default_factory=dict)
    tags: list[str] = Field(default_factory=list)
    duration: str | None = None  # ISO 8601, e.g. PT4M13S
    view_count: int | None = None

    def best_thumbnail(self, preference: tuple[str, ...] = THUMBNAIL_PREFERENCE) -> str | None:
        for quality in preference:
            thumb = self.thumbnails.get(quality)
            if thumb and thumb.url:
                return thumb.url
        return None

    @property
    def watch_url(self) -> str | None:
        if not self.video_id:
            return None
        return f"https://www.youtube.com/watch?v={self.video_id}"
