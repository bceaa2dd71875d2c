"""
Unit tests for the public gallery: collection first, then curated photos,
then placeholders, with successful pages cached in Redis.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from contracts.errors import ConfigurationError, ProviderError
from contracts.models import PLACEHOLDER_IMAGE
from services.gallery_service import (
    DEFAULT_GALLERY_COLLECTION,
    PLACEHOLDER_COUNT,
    GalleryService,
)
from utils.redis_cache import RedisCache

pytestmark = pytest.mark.unit


def make_pexels(collection=None, curated=None):
    pexels = MagicMock()
    pexels.fetch_page = AsyncMock(
        side_effect=collection if isinstance(collection, Exception) else None,
        return_value=collection if not isinstance(collection, Exception) else None,
    )
    pexels.fetch_curated = AsyncMock(
        side_effect=curated if isinstance(curated, Exception) else None,
        return_value=curated if not isinstance(curated, Exception) else None,
    )
    return pexels


@pytest.mark.asyncio
async def test_serves_collection(pexels_photos):
    pexels = make_pexels(collection=pexels_photos)
    gallery = GalleryService(pexels)

    result = await gallery.list_photos(per_page=12, page=2)

    pexels.fetch_page.assert_awaited_once_with(DEFAULT_GALLERY_COLLECTION, page_size=12, page=2)
    pexels.fetch_curated.assert_not_called()
    assert result.source == "collection"
    assert result.degraded is False
    assert (result.page, result.per_page) == (2, 12)
    assert result.photos[0]["id"] == "pexels-2014422"
    assert result.photos[0]["photographer_name"] == "Joey Farina"


@pytest.mark.asyncio
async def test_empty_collection_falls_back_to_curated(pexels_photos):
    pexels = make_pexels(collection=[], curated=pexels_photos[:1])

    result = await GalleryService(pexels, collection_id="abc").list_photos()

    assert result.source == "curated"
    assert [photo["id"] for photo in result.photos] == ["pexels-2014422"]


@pytest.mark.asyncio
async def test_collection_error_falls_back_to_curated(pexels_photos):
    pexels = make_pexels(
        collection=ProviderError("Pexels request failed", status_code=500, provider="pexels"),
        curated=pexels_photos,
    )

    result = await GalleryService(pexels).list_photos()

    assert result.source == "curated"
    assert result.message is None


@pytest.mark.asyncio
async def test_placeholders_when_pexels_is_unreachable():
    pexels = make_pexels(
        collection=ConfigurationError("PEXELS_API_KEY is not configured"),
        curated=ConfigurationError("PEXELS_API_KEY is not configured"),
    )

    result = await GalleryService(pexels).list_photos()

    assert result.source == "placeholder"
    assert result.degraded is True
    assert len(result.photos) == PLACEHOLDER_COUNT
    assert all(photo["src"] == PLACEHOLDER_IMAGE for photo in result.photos)


@pytest.mark.asyncio
async def test_successful_page_is_cached(pexels_photos, fake_redis):
    pexels = make_pexels(collection=pexels_photos)
    gallery = GalleryService(pexels, cache=RedisCache(fake_redis, prefix="gallery"))

    with patch("utils.redis_cache.DISABLE_CACHE", False):
        first = await gallery.list_photos(per_page=30, page=1)
        second = await gallery.list_photos(per_page=30, page=1)

    assert pexels.fetch_page.await_count == 1
    assert second.photos == first.photos
    assert len(fake_redis.store) == 1


@pytest.mark.asyncio
async def test_placeholder_page_is_not_cached(fake_redis):
    error = ProviderError("Pexels request failed", status_code=503, provider="pexels")
    pexels = make_pexels(collection=error, curated=error)
    gallery = GalleryService(pexels, cache=RedisCache(fake_redis, prefix="gallery"))

    with patch("utils.redis_cache.DISABLE_CACHE", False):
        await gallery.list_photos(per_page=30, page=1)
        await gallery.list_photos(per_page=30, page=1)

    assert pexels.fetch_page.await_count == 2
    assert fake_redis.store == {}
