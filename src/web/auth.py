"""
Web app authentication utilities.

Shared auth functions used across web routes.
"""

import os

from fastapi import Depends, Header, HTTPException

from adapters.config import Settings
from web.dependencies import get_settings


def verify_api_key(x_api_key: str | None, settings: Settings) -> bool:
    """
    Verify API key for admin endpoints.

    Authorization is granted if:
    1. Valid X-API-Key header matching ADMIN_API_KEY
    2. No ADMIN_API_KEY is configured and ENVIRONMENT=local (not in Cloud Run)

    Args:
        x_api_key: API key header
        settings: Application settings

    Returns:
        True if authorized, False otherwise
    """
    expected_key = settings.admin_api_key
    if expected_key:
        return x_api_key == expected_key

    # If running in Cloud Run, auth is REQUIRED (no bypass)
    if os.getenv("K_SERVICE"):
        return False

    # Local development: only skip auth if explicitly set to "local"
    return settings.environment == "local"


def require_api_key(
    x_api_key: str | None = Header(None, alias="X-API-Key"),
    settings: Settings = Depends(get_settings),
) -> None:
    """
    FastAPI dependency that requires API key authentication.

    Use with: Depends(require_api_key)

    Raises HTTPException 401 if not authorized.
    """
    if not verify_api_key(x_api_key, settings):
        raise HTTPException(status_code=401, detail="Unauthorized: X-API-Key header required")
