"""
Public, read-only photo gallery backed directly by the Pexels collection.

Falls back to the curated feed when the collection is unavailable or empty,
and to local placeholders when Pexels cannot be reached at all. Successful
responses are cached in Redis for an hour; placeholder responses are not.
"""

from typing import Any

from api.pexels import PexelsService
from contracts.errors import ConfigurationError, ProviderError
from contracts.models import PLACEHOLDER_IMAGE
from core.normalize import normalize_photo
from core.tables import photography_to_row
from utils.get_logger import get_logger
from utils.pydantic_tools import BaseModelWithMethods
from utils.redis_cache import RedisCache

logger = get_logger(__name__)

DEFAULT_GALLERY_COLLECTION = "ofymzs7"
DEFAULT_PER_PAGE = 30
GALLERY_CACHE_TTL = 3600
PLACEHOLDER_COUNT = 6

SOURCE_COLLECTION = "collection"
SOURCE_CURATED = "curated"
SOURCE_PLACEHOLDER = "placeholder"


class GalleryResult(BaseModelWithMethods):
    photos: list[dict[str, Any]]
    source: str
    page: int
    per_page: int
    message: str | None = None
    degraded: bool = False


def placeholder_photos(count: int = PLACEHOLDER_COUNT) -> list[dict[str, Any]]:
    return [
        {
            "id": f"placeholder-{i}",
            "title": "Photo coming soon",
            "src": PLACEHOLDER_IMAGE,
            "alt": "Photo coming soon",
            "photographer_name": None,
            "photographer_url": None,
            "download_url": PLACEHOLDER_IMAGE,
        }
        for i in range(1, count + 1)
    ]


class GalleryService:
    def __init__(
        self,
        pexels: PexelsService,
        collection_id: str | None = None,
        cache: RedisCache | None = None,
    ):
        self.pexels = pexels
        self.collection_id = collection_id or DEFAULT_GALLERY_COLLECTION
        if cache is not None:
            self.list_photos = RedisCache.use_cache(cache, prefix="gallery")(self._list_photos)
        else:
            self.list_photos = self._list_photos

    async def _list_photos(self, per_page: int = DEFAULT_PER_PAGE, page: int = 1) -> GalleryResult:
        try:
            photos = await self.pexels.fetch_page(self.collection_id, page_size=per_page, page=page)
            if photos:
                return self._result(photos, SOURCE_COLLECTION, per_page, page)
            logger.warning(f"Pexels collection {self.collection_id} is empty, using curated photos")
        except (ProviderError, ConfigurationError) as e:
            logger.warning(f"Pexels collection {self.collection_id} unavailable ({e.message}), using curated photos")

        try:
            photos = await self.pexels.fetch_curated(page_size=per_page, page=page)
            if photos:
                return self._result(photos, SOURCE_CURATED, per_page, page)
            logger.warning("Pexels curated feed is empty, using placeholders")
        except (ProviderError, ConfigurationError) as e:
            logger.error(f"Pexels curated feed unavailable ({e.message}), using placeholders")

        return GalleryResult(
            photos=placeholder_photos(),
            source=SOURCE_PLACEHOLDER,
            page=page,
            per_page=per_page,
            message="Photos are temporarily unavailable",
            degraded=True,
        )

    @staticmethod
    def _result(photos: list, source: str, per_page: int, page: int) -> GalleryResult:
        rows = [photography_to_row(normalize_photo(photo)) for photo in photos]
        return GalleryResult(photos=rows, source=source, page=page, per_page=per_page)
