"""
Pexels Auth - holds the API key and builds request headers.
The key is checked before any request so a missing key never reaches the network.
"""

from contracts.errors import ConfigurationError


class Auth:
    """Base Pexels service with authentication utilities."""

    def __init__(self, api_key: str | None):
        self._pexels_api_key = api_key

    @property
    def pexels_api_key(self) -> str:
        if not self._pexels_api_key:
            raise ConfigurationError("PEXELS_API_KEY is not configured")
        return self._pexels_api_key

    @property
    def has_credentials(self) -> bool:
        return bool(self._pexels_api_key)

    def auth_headers(self) -> dict[str, str]:
        return {"Authorization": self.pexels_api_key}
