"""
Content API Routes

Provides endpoints for:
- Listing and fetching posts, vlogs and photography (public)
- Creating, updating and deleting content (admin)
- Adding a YouTube video as a vlog from its URL (admin)
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from contracts.models import ContentKind, VlogCategory
from services.content_service import ContentService
from web.auth import require_api_key
from web.dependencies import get_content_service

router = APIRouter(prefix="/content", tags=["content"])


class AddVideoRequest(BaseModel):
    url: str
    title: str | None = None
    description: str = ""
    category: VlogCategory = VlogCategory.DAILY


@router.post("/vlogs/add-video")
async def add_video(
    request: AddVideoRequest,
    service: ContentService = Depends(get_content_service),
    _: None = Depends(require_api_key),
):
    """Add a YouTube video to the vlogs table by URL."""
    vlog = await service.add_video_by_url(
        request.url,
        title=request.title,
        description=request.description,
        category=request.category,
    )
    return JSONResponse(
        status_code=201,
        content={"success": True, "message": "Video added successfully", "vlog": vlog},
    )


@router.get("/{kind}")
async def list_content(
    kind: ContentKind,
    limit: int | None = Query(None, ge=1, le=500),
    service: ContentService = Depends(get_content_service),
):
    """List content newest first. Store failures return an empty list with a message."""
    result = await service.list_items(kind, limit=limit)
    content: dict[str, Any] = {
        "success": not result.degraded,
        "kind": kind.value,
        "items": result.items,
        "totalResults": result.total_results,
    }
    if result.message:
        content["message"] = result.message
    return JSONResponse(content=content)


@router.get("/{kind}/{key}")
async def get_content(
    kind: ContentKind,
    key: str,
    service: ContentService = Depends(get_content_service),
):
    item = await service.get(kind, key)
    return JSONResponse(content={"success": True, "item": item})


@router.post("/{kind}")
async def create_content(
    kind: ContentKind,
    payload: dict[str, Any] = Body(...),
    service: ContentService = Depends(get_content_service),
    _: None = Depends(require_api_key),
):
    item = await service.create(kind, payload)
    return JSONResponse(status_code=201, content={"success": True, "item": item})


@router.put("/{kind}/{key}")
async def update_content(
    kind: ContentKind,
    key: str,
    payload: dict[str, Any] = Body(...),
    service: ContentService = Depends(get_content_service),
    _: None = Depends(require_api_key),
):
    item = await service.update(kind, key, payload)
    return JSONResponse(content={"success": True, "item": item})


@router.delete("/{kind}/{key}")
async def delete_content(
    kind: ContentKind,
    key: str,
    service: ContentService = Depends(get_content_service),
    _: None = Depends(require_api_key),
):
    await service.delete(kind, key)
    return JSONResponse(content={"success": True, "message": f"Deleted {kind.value} {key}"})
