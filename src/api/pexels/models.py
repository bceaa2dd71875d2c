"""
Pexels Models - Pydantic models for Pexels API structures.
Every field is optional: the normalizer supplies the fallbacks.
"""

from pydantic import BaseModel, ConfigDict, Field

from utils.pydantic_tools import BaseModelWithMethods

# Resolution variants in descending size order
PHOTO_SIZE_PREFERENCE = ("original", "large2x", "large", "medium", "small")


class PexelsPhotoSrc(BaseModel):
    """Resolution-specific URLs of one photo."""

    model_config = ConfigDict(extra="ignore")

    original: str | None = None
    large2x: str | None = None
    large: str | None = None
    medium: str | None = None
    small: str | None = None
    portrait: str | None = None
    landscape: str | None = None
    tiny: str | None = None

    def best(self, preference: tuple[str, ...] = PHOTO_SIZE_PREFERENCE) -> str | None:
        """Return the first non-empty URL in preference order."""
        for size in preference:
            url = getattr(self, size, None)
            if url:
                return url
        return None


class PexelsPhoto(BaseModelWithMethods):
    """Raw photo as returned by /v1/curated or /v1/collections/{id}."""

    model_config = ConfigDict(extra="ignore")

    id: int | str | None = None
    type: str | None = None  # "Photo" or "Video" in collection responses
    width: int | None = None
    height: int | None = None
    url: str | None = None  # Pexels page URL
    photographer: str | None = None
    photographer_url: str | None = None
    photographer_id: int | str | None = None
    avg_color: str | None = None
    alt: str | None = None
    src: PexelsPhotoSrc = Field(default_factory=PexelsPhotoSrc)


class PexelsPage(BaseModelWithMethods):
    """One page of a collection (media) or of curated photos (photos)."""

    model_config = ConfigDict(extra="ignore")

    page: int = 1
    per_page: int = 0
    total_results: int = 0
    next_page: str | None = None
    media: list[PexelsPhoto] | None = None
    photos: list[PexelsPhoto] | None = None

    @property
    def items(self) -> list[PexelsPhoto]:
        return self.media if self.media is not None else (self.photos or [])
