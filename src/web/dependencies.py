"""
FastAPI dependencies. Everything is built from the Settings stored on
app.state by create_app(); tests replace entries through
app.dependency_overrides or by passing their own objects to create_app().
"""

from fastapi import Depends, Request

from adapters.config import Settings
from adapters.repository import RepositoryRegistry
from api.pexels import PexelsService
from services.content_service import ContentService
from services.gallery_service import GalleryService
from services.sync_service import ProviderAdapter, SyncOrchestrator, build_orchestrator
from utils.get_logger import get_logger
from utils.redis_cache import RedisCache, build_redis_client

logger = get_logger(__name__)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_registry(request: Request) -> RepositoryRegistry:
    return request.app.state.registry


def get_content_service(
    settings: Settings = Depends(get_settings),
    registry: RepositoryRegistry = Depends(get_registry),
) -> ContentService:
    return ContentService(settings, registry)


def get_gallery_service(request: Request, settings: Settings = Depends(get_settings)) -> GalleryService:
    """Gallery service shared across requests so its cache client is reused."""
    gallery = getattr(request.app.state, "gallery", None)
    if gallery is None:
        cache = None
        if settings.environment != "test":
            client = build_redis_client(settings.redis_host, settings.redis_port, settings.redis_password)
            cache = RedisCache(client, defaultTTL=3600, prefix="contentsite")
        gallery = GalleryService(
            PexelsService(settings.pexels_api_key),
            collection_id=settings.pexels_collection_id,
            cache=cache,
        )
        request.app.state.gallery = gallery
        logger.info(f"Gallery service ready (cache={'on' if cache else 'off'})")
    return gallery


def get_orchestrator(
    provider: str,
    request: Request,
    settings: Settings = Depends(get_settings),
    registry: RepositoryRegistry = Depends(get_registry),
) -> SyncOrchestrator:
    adapters: dict[str, ProviderAdapter] = getattr(request.app.state, "provider_adapters", {})
    return build_orchestrator(provider, settings, registry, provider_adapter=adapters.get(provider))
