"""
Sync API Routes

Provides endpoints for:
- Triggering a provider sync (GET with query params or POST with a JSON body)
- Probing provider connectivity without writing anything
- Previewing one normalized page, with suggested categories, without writing it

Failures are turned into {success: false, message, error} envelopes by the
app-level ContentSiteError handler.
"""

from datetime import datetime

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from contracts.models import VlogCategory
from services.sync_service import DEFAULT_MAX_ITEMS, DEFAULT_PREVIEW_ITEMS, SyncOrchestrator
from web.auth import require_api_key
from web.dependencies import get_orchestrator

router = APIRouter(prefix="/sync", tags=["sync"], dependencies=[Depends(require_api_key)])


class SyncRequest(BaseModel):
    maxResults: int = DEFAULT_MAX_ITEMS
    forceSync: bool = False
    collectionId: str | None = None
    publishedAfter: datetime | None = None
    category: VlogCategory | None = None


@router.get("/{provider}/probe")
async def probe_provider(
    orchestrator: SyncOrchestrator = Depends(get_orchestrator),
    collectionId: str | None = Query(None),
):
    """Check that the provider answers for the configured collection."""
    probe = await orchestrator.probe(collectionId)
    return JSONResponse(content={"success": True, **probe})


@router.get("/{provider}/preview")
async def preview_provider(
    orchestrator: SyncOrchestrator = Depends(get_orchestrator),
    maxResults: int = Query(DEFAULT_PREVIEW_ITEMS, ge=1, le=50),
    collectionId: str | None = Query(None),
):
    """Return what a sync would insert, before duplicate checks. Nothing is written."""
    preview = await orchestrator.preview(collectionId, max_items=maxResults)
    return JSONResponse(content={"success": True, **preview})


@router.get("/{provider}")
async def run_sync_get(
    orchestrator: SyncOrchestrator = Depends(get_orchestrator),
    maxResults: int = Query(DEFAULT_MAX_ITEMS, ge=1, le=50),
    forceSync: bool = Query(False),
    collectionId: str | None = Query(None),
    publishedAfter: datetime | None = Query(None),
    category: VlogCategory | None = Query(None),
):
    result = await orchestrator.sync(
        collectionId,
        max_items=maxResults,
        force=forceSync,
        published_after=publishedAfter,
        category=category,
    )
    return JSONResponse(content=result.to_response())


@router.post("/{provider}")
async def run_sync_post(
    request: SyncRequest | None = Body(None),
    orchestrator: SyncOrchestrator = Depends(get_orchestrator),
):
    request = request or SyncRequest()
    result = await orchestrator.sync(
        request.collectionId,
        max_items=request.maxResults,
        force=request.forceSync,
        published_after=request.publishedAfter,
        category=request.category,
    )
    return JSONResponse(content=result.to_response())
