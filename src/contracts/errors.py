"""
Error taxonomy shared by the provider clients, the persistence gateway,
the services and the web layer.
"""


class ContentSiteError(Exception):
    """Base class for all errors raised by the content service."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ConfigurationError(ContentSiteError):
    """A required credential or identifier is missing. Never retried."""

    status_code = 400


class ProviderError(ContentSiteError):
    """Non-success response or transport failure from an external media API."""

    status_code = 502

    def __init__(self, message: str, status_code: int | None = None, provider: str = ""):
        super().__init__(message)
        self.provider = provider
        # upstream status, kept apart from the HTTP status we answer with
        self.upstream_status = status_code


class PersistenceError(ContentSiteError):
    """Write or read failure against the content store."""

    status_code = 500


class ValidationError(ContentSiteError):
    """Malformed admin input, rejected before any network call."""

    status_code = 422

    def __init__(self, message: str, fields: dict[str, str] | None = None):
        super().__init__(message)
        self.fields = fields or {}


class NotFoundError(ContentSiteError):
    """The requested content record does not exist."""

    status_code = 404
