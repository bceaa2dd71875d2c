"""Public gallery route, served straight from the Pexels collection."""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from services.gallery_service import DEFAULT_PER_PAGE, GalleryService
from web.dependencies import get_gallery_service

router = APIRouter(prefix="/gallery", tags=["gallery"])


@router.get("/pexels")
async def pexels_gallery(
    perPage: int = Query(DEFAULT_PER_PAGE, ge=1, le=50),
    page: int = Query(1, ge=1),
    gallery: GalleryService = Depends(get_gallery_service),
):
    result = await gallery.list_photos(per_page=perPage, page=page)
    content = {
        "success": not result.degraded,
        "photos": result.photos,
        "source": result.source,
        "page": result.page,
        "perPage": result.per_page,
    }
    if result.message:
        content["message"] = result.message
    return JSONResponse(content=content, headers={"Cache-Control": "public, max-age=3600"})
