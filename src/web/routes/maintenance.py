"""
Maintenance API Routes

One-off fixes over existing vlog rows:
- Renaming legacy categories ("Daily Life" -> "Daily", "Tech Talks" -> "Tech")
- Re-classifying YouTube vlogs between long and short form
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from services.content_service import ContentService
from web.auth import require_api_key
from web.dependencies import get_content_service

router = APIRouter(
    prefix="/maintenance", tags=["maintenance"], dependencies=[Depends(require_api_key)]
)


@router.post("/vlogs/categories")
async def update_vlog_categories(
    service: ContentService = Depends(get_content_service),
):
    renamed = await service.rename_legacy_categories()
    return JSONResponse(
        content={
            "success": True,
            "message": f"Updated {sum(renamed.values())} vlogs",
            "renamed": renamed,
        }
    )


@router.post("/vlogs/video-types")
async def update_vlog_video_types(
    service: ContentService = Depends(get_content_service),
):
    counts = await service.reclassify_video_types()
    return JSONResponse(
        content={
            "success": True,
            "message": f"Updated {counts['updated']} of {counts['checked']} YouTube vlogs",
            **counts,
        }
    )
