"""
Pexels Core Service - fetches pages of photos from a Pexels collection
or from the curated feed and maps them into PexelsPhoto models.

No retries here: a failure propagates to the caller, which decides
whether to abort (sync) or fall back (gallery).
"""

from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from api.pexels.auth import Auth
from api.pexels.models import PexelsPage, PexelsPhoto
from contracts.errors import ProviderError
from utils.get_logger import get_logger

logger = get_logger(__name__)

PEXELS_API_BASE = "https://api.pexels.com/v1"
MAX_PAGE_SIZE = 50
DEFAULT_PAGE_SIZE = 40
DEFAULT_TIMEOUT = 30.0


def _check_paging(page_size: int, page: int) -> None:
    if not 1 <= page_size <= MAX_PAGE_SIZE:
        raise ValueError(f"page_size must be between 1 and {MAX_PAGE_SIZE}, got {page_size}")
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")


class PexelsService(Auth):
    """Pexels API client for collection and curated photo listings."""

    provider = "pexels"

    def __init__(
        self,
        api_key: str | None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(api_key)
        self._timeout = timeout
        self._transport = transport

    async def _get(self, path: str, params: dict[str, Any]) -> PexelsPage:
        headers = self.auth_headers()  # raises ConfigurationError before the request
        url = f"{PEXELS_API_BASE}{path}"
        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout), transport=self._transport
            ) as client:
                resp = await client.get(url, params=params, headers=headers)
        except httpx.HTTPError as e:
            raise ProviderError(f"Pexels request failed: {e}", provider=self.provider) from e

        if resp.status_code != 200:
            raise ProviderError(
                f"Pexels API error: {resp.status_code} {resp.reason_phrase}",
                status_code=resp.status_code,
                provider=self.provider,
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise ProviderError("Pexels API returned an empty or non-JSON body", provider=self.provider) from e
        if not isinstance(data, dict) or ("media" not in data and "photos" not in data):
            raise ProviderError("Pexels API response has no media list", provider=self.provider)

        try:
            return PexelsPage.model_validate(data)
        except PydanticValidationError as e:
            raise ProviderError(f"Unexpected Pexels response shape: {e}", provider=self.provider) from e

    async def fetch_page(
        self, collection_id: str, page_size: int = DEFAULT_PAGE_SIZE, page: int = 1
    ) -> list[PexelsPhoto]:
        """
        Fetch one page of photos from a collection.

        Args:
            collection_id: Pexels collection id (e.g. "ofymzs7")
            page_size: Items per page (1-50)
            page: 1-based page number

        Returns:
            Photos of the page; videos in the collection are skipped.
        """
        _check_paging(page_size, page)
        logger.info(f"Fetching Pexels collection {collection_id}: page={page}, per_page={page_size}")

        result = await self._get(
            f"/collections/{collection_id}",
            {"per_page": page_size, "page": page, "type": "photos"},
        )
        photos = [item for item in result.items if (item.type or "Photo").lower() == "photo"]
        skipped = len(result.items) - len(photos)
        if skipped:
            logger.info(f"Skipped {skipped} non-photo media items in collection {collection_id}")

        logger.info(f"Found {len(photos)} photos in collection {collection_id}")
        return photos

    async def fetch_curated(
        self, page_size: int = DEFAULT_PAGE_SIZE, page: int = 1
    ) -> list[PexelsPhoto]:
        """Fetch one page of the Pexels curated feed."""
        _check_paging(page_size, page)
        result = await self._get("/curated", {"per_page": page_size, "page": page})
        return result.items

    async def probe(self, collection_id: str) -> int:
        """Number of photos in the first page of the collection. Writes nothing."""
        photos = await self.fetch_page(collection_id, page_size=MAX_PAGE_SIZE, page=1)
        return len(photos)
