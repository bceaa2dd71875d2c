"""
Settings object passed explicitly to every client, repository and service.

Values come from the process environment (optionally loaded from an env file
with python-dotenv). Provider API keys are resolved through Firebase
SecretParam first, falling back to the environment. Nothing here raises for
missing values; callers use Settings.require() at the point of use so the
error names the variable that is actually needed.
"""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv
from firebase_functions.params import SecretParam

from contracts.errors import ConfigurationError
from contracts.models import ContentKind
from utils.get_logger import get_logger

logger = get_logger(__name__)

BACKEND_SUPABASE = "supabase"
BACKEND_FIRESTORE = "firestore"
VALID_BACKENDS = (BACKEND_SUPABASE, BACKEND_FIRESTORE)

DEFAULT_VLOG_READ_TIMEOUT = 8.0

# Settings attribute -> environment variable
ENV_NAMES: dict[str, str] = {
    "pexels_api_key": "PEXELS_API_KEY",
    "pexels_collection_id": "PEXELS_COLLECTION_ID",
    "youtube_api_key": "YOUTUBE_API_KEY",
    "youtube_channel_id": "YOUTUBE_CHANNEL_ID",
    "supabase_url": "SUPABASE_URL",
    "supabase_anon_key": "SUPABASE_ANON_KEY",
    "supabase_service_role_key": "SUPABASE_SERVICE_ROLE_KEY",
    "firestore_project": "FIRESTORE_PROJECT",
    "admin_api_key": "ADMIN_API_KEY",
}

SECRET_NAMES = ("PEXELS_API_KEY", "YOUTUBE_API_KEY", "SUPABASE_SERVICE_ROLE_KEY")


def load_env(env_file: str | None = None) -> None:
    """Load environment variables from an env file.

    Defaults to config/local.env for local development.
    Set ENV_FILE to override.
    """
    env = env_file or os.getenv("ENV_FILE", "config/local.env")
    load_dotenv(env)


def resolve_secret(name: str) -> str | None:
    """Read a secret via SecretParam, falling back to the environment."""
    try:
        value = SecretParam(name).value
        if value:
            return value
    except Exception as e:
        logger.debug(f"SecretParam access failed for {name}: {e}, using environment")
    return os.getenv(name) or None


@dataclass
class Settings:
    pexels_api_key: str | None = None
    pexels_collection_id: str | None = None
    youtube_api_key: str | None = None
    youtube_channel_id: str | None = None
    supabase_url: str | None = None
    supabase_anon_key: str | None = None
    supabase_service_role_key: str | None = None
    firestore_project: str | None = None
    admin_api_key: str | None = None
    environment: str = ""
    content_backends: dict[str, str] = field(default_factory=dict)
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_password: str | None = None
    vlog_read_timeout: float = DEFAULT_VLOG_READ_TIMEOUT

    @classmethod
    def from_env(cls, env_file: str | None = None) -> "Settings":
        """Build settings from the environment (after loading the env file)."""
        load_env(env_file)

        values: dict[str, str | None] = {}
        for attr, env_name in ENV_NAMES.items():
            if env_name in SECRET_NAMES:
                values[attr] = resolve_secret(env_name)
            else:
                values[attr] = os.getenv(env_name) or None

        backends = {}
        for kind in ContentKind:
            backend = os.getenv(f"CONTENT_BACKEND_{kind.value.upper()}", BACKEND_SUPABASE).lower()
            if backend not in VALID_BACKENDS:
                raise ConfigurationError(
                    f"CONTENT_BACKEND_{kind.value.upper()} must be one of {VALID_BACKENDS}, got {backend!r}"
                )
            backends[kind.value] = backend

        port_str = os.getenv("REDIS_PORT", "6379")
        try:
            redis_port = int(port_str)
        except ValueError:
            raise ConfigurationError(f"Invalid REDIS_PORT value: {port_str!r}")

        timeout_str = os.getenv("VLOG_READ_TIMEOUT_SECONDS", str(DEFAULT_VLOG_READ_TIMEOUT))
        try:
            vlog_read_timeout = float(timeout_str)
        except ValueError:
            raise ConfigurationError(f"Invalid VLOG_READ_TIMEOUT_SECONDS value: {timeout_str!r}")

        return cls(
            **values,
            environment=os.getenv("ENVIRONMENT", ""),
            content_backends=backends,
            redis_host=os.getenv("REDIS_HOST", "localhost"),
            redis_port=redis_port,
            redis_password=os.getenv("REDIS_PASSWORD") or None,
            vlog_read_timeout=vlog_read_timeout,
        )

    def require(self, attr: str) -> str:
        """Return a required value or fail fast naming its environment variable."""
        value = getattr(self, attr)
        if not value:
            env_name = ENV_NAMES.get(attr, attr.upper())
            raise ConfigurationError(f"{env_name} is not configured")
        return value

    def backend_for(self, kind: ContentKind) -> str:
        return self.content_backends.get(kind.value, BACKEND_SUPABASE)

    @property
    def supabase_key(self) -> str:
        """Service role key for server-side writes, anon key as a local fallback."""
        if self.supabase_service_role_key:
            return self.supabase_service_role_key
        if self.supabase_anon_key:
            logger.warning(
                "SUPABASE_SERVICE_ROLE_KEY is not set; using the anon key for admin operations"
            )
            return self.supabase_anon_key
        raise ConfigurationError("SUPABASE_SERVICE_ROLE_KEY or SUPABASE_ANON_KEY is not configured")
