"""
YouTube Service Package.

This package provides:
- YouTubeService: uploads of a channel via the YouTube Data API
- Models: Pydantic models for raw channel uploads
"""

from api.youtube.core import YouTubeService
from api.youtube.models import YouTubeThumbnail, YouTubeVideoItem

__all__ = [
    "YouTubeService",
    "YouTubeVideoItem",
    "YouTubeThumbnail",
]
