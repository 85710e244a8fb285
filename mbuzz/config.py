"""
Tracking Configuration

Immutable configuration for the tracking library: credentials, endpoint,
timeouts and the request filtering rules. Values can be passed explicitly
or loaded from ``MBUZZ_*`` environment variables.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_URL = "https://mbuzz.co/api/v1"
DEFAULT_TIMEOUT_MS = 5000

DEFAULT_SKIP_PATHS: tuple[str, ...] = (
    "/up",
    "/health",
    "/healthz",
    "/ping",
    "/cable",
    "/assets",
    "/packs",
    "/rails/active_storage",
    "/api",
)

DEFAULT_SKIP_EXTENSIONS: tuple[str, ...] = (
    ".js",
    ".css",
    ".map",
    ".png",
    ".jpg",
    ".jpeg",
    ".gif",
    ".ico",
    ".svg",
    ".woff",
    ".woff2",
    ".ttf",
    ".eot",
    ".webp",
)


class TrackingConfig(BaseSettings):
    """Tracking configuration loaded from arguments or environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MBUZZ_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # Connection
    api_key: str = Field(default="", validate_default=True, description="Bearer API key")
    api_url: str = Field(default=DEFAULT_API_URL, description="Base URL of the tracking API")
    timeout: int = Field(default=DEFAULT_TIMEOUT_MS, gt=0, description="Request timeout in ms")

    # Switches
    enabled: bool = True
    debug: bool = False  # Logs request/response detail

    # Request filtering (appended to the defaults)
    skip_paths: tuple[str, ...] = ()
    skip_extensions: tuple[str, ...] = ()

    # Client IP resolution behind a reverse proxy
    trust_forwarded_for: bool = False

    @field_validator("api_key")
    @classmethod
    def _require_api_key(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("api_key is required")
        return value

    @property
    def timeout_seconds(self) -> float:
        """Timeout converted to seconds for httpx/asyncio."""
        return self.timeout / 1000

    @property
    def all_skip_paths(self) -> tuple[str, ...]:
        """Default skip prefixes followed by the configured ones."""
        return DEFAULT_SKIP_PATHS + tuple(self.skip_paths)

    @property
    def all_skip_extensions(self) -> tuple[str, ...]:
        """Default skip extensions followed by the configured ones."""
        return DEFAULT_SKIP_EXTENSIONS + tuple(self.skip_extensions)
