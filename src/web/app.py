"""
FastAPI application for the content site back office.

Routers:
- /content      CRUD over posts, vlogs and photography
- /sync         Pexels and YouTube sync runs
- /gallery      Public Pexels gallery
- /maintenance  Vlog maintenance operations

Run locally with:
    uvicorn web.app:app --reload --app-dir src
"""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from adapters.config import Settings
from adapters.repository import RepositoryRegistry
from contracts.errors import ContentSiteError, ProviderError, ValidationError
from services.sync_service import ProviderAdapter
from utils.get_logger import get_logger
from utils.setup_logging import setup_cloud_logging
from web.routes import content, gallery, maintenance, sync

logger = get_logger(__name__)


async def content_site_error_handler(request: Request, exc: ContentSiteError) -> JSONResponse:
    """Turn taxonomy errors into {success: false, message, error} envelopes."""
    body: dict[str, Any] = {
        "success": False,
        "message": exc.message,
        "error": type(exc).__name__,
    }
    if isinstance(exc, ValidationError):
        body["fields"] = exc.fields
    if isinstance(exc, ProviderError):
        body["provider"] = exc.provider
        body["upstreamStatus"] = exc.upstream_status

    log = logger.error if exc.status_code >= 500 else logger.warning
    log(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=body)


def create_app(
    settings: Settings | None = None,
    registry: RepositoryRegistry | None = None,
    provider_adapters: dict[str, ProviderAdapter] | None = None,
) -> FastAPI:
    settings = settings or Settings.from_env()
    registry = registry or RepositoryRegistry(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_cloud_logging()
        logger.info(f"Content site API starting (environment={settings.environment})")
        yield
        await registry.close()

    app = FastAPI(title="Content Site API", lifespan=lifespan)
    app.state.settings = settings
    app.state.registry = registry
    app.state.provider_adapters = provider_adapters or {}

    app.add_exception_handler(ContentSiteError, content_site_error_handler)  # type: ignore[arg-type]

    app.include_router(content.router)
    app.include_router(sync.router)
    app.include_router(gallery.router)
    app.include_router(maintenance.router)

    @app.get("/health")
    async def health():
        return {"status": "ok", "environment": settings.environment}

    return app


app = create_app()
