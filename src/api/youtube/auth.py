"""
YouTube Auth Service - Base service with authentication utilities.
Provides foundation for YouTube Data API operations.
"""

from googleapiclient.discovery import build

from contracts.errors import ConfigurationError
from utils.get_logger import get_logger

logger = get_logger(__name__)


class Auth:
    """
    Base YouTube service with authentication utilities.
    The API key comes from Settings; the discovery client is built lazily.
    """

    def __init__(self, api_key: str | None, client=None):
        self._youtube_api_key = api_key
        self._youtube = client

    @property
    def youtube_api_key(self) -> str:
        if not self._youtube_api_key:
            logger.error("YOUTUBE_API_KEY not available")
            raise ConfigurationError("YOUTUBE_API_KEY is not configured")
        return self._youtube_api_key

    @property
    def has_credentials(self) -> bool:
        return bool(self._youtube_api_key)

    @property
    def youtube(self):
        """Lazy-load YouTube client."""
        if self._youtube is None:
            self._youtube = build(
                "youtube", "v3", developerKey=self.youtube_api_key, cache_discovery=False
            )
        return self._youtube
