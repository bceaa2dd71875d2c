"""
Pexels Service Package.

This package provides:
- PexelsService: collection and curated photo listings
- Models: Pydantic models for raw Pexels photos
"""

from api.pexels.core import PexelsService
from api.pexels.models import PexelsPage, PexelsPhoto, PexelsPhotoSrc

__all__ = [
    "PexelsService",
    "PexelsPhoto",
    "PexelsPhotoSrc",
    "PexelsPage",
]
