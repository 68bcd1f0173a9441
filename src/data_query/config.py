import json
import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

import redis.asyncio as redis
from dotenv import load_dotenv

from data_query.entities import EndpointConfig

load_dotenv()

DEFAULT_CACHE_DURATION_MINUTES = 60
DEFAULT_CACHE_DIR = "data-fetcher-cache"
QUERY_BLOCK_TYPE = "data-query"


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Cache
    cache_duration_minutes: int = int(os.getenv("CACHE_DURATION_MINUTES", str(DEFAULT_CACHE_DURATION_MINUTES)))
    cache_dir: str = os.getenv("CACHE_DIR", DEFAULT_CACHE_DIR)

    # Storage backend: "local" or "redis"
    storage_backend: str = os.getenv("STORAGE_BACKEND", "local")
    storage_root: str = os.getenv("STORAGE_ROOT", ".")

    # Redis
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")
    redis_namespace: str = os.getenv("REDIS_NAMESPACE", "data_query")

    # Endpoints (JSON list of endpoint records)
    endpoints_file: str | None = os.getenv("ENDPOINTS_FILE")

    # HTTP transport
    http_timeout: float = float(os.getenv("HTTP_TIMEOUT", "30.0"))

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"

    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_duration_minutes < 0:
            raise ValueError("CACHE_DURATION_MINUTES must be zero or positive")

        if self.storage_backend not in ("local", "redis"):
            raise ValueError(f"STORAGE_BACKEND must be one of ['local', 'redis'], got {self.storage_backend}")

        if self.http_timeout <= 0:
            raise ValueError("HTTP_TIMEOUT must be positive")


@dataclass(frozen=True)
class PipelineConfig:
    """Explicit configuration handed to every pipeline component.

    Attributes:
        endpoints: Ordered endpoint presets, looked up by alias
        cache_duration_minutes: Age after which a cached result is stale
        cache_dir: Directory (relative to the storage root) holding entries
    """

    endpoints: tuple[EndpointConfig, ...] = field(default_factory=tuple)
    cache_duration_minutes: int = DEFAULT_CACHE_DURATION_MINUTES
    cache_dir: str = DEFAULT_CACHE_DIR

    @property
    def cache_duration_ms(self) -> int:
        return self.cache_duration_minutes * 60 * 1000

    @classmethod
    def from_settings(cls, settings: Settings) -> "PipelineConfig":
        endpoints = load_endpoints(settings.endpoints_file) if settings.endpoints_file else []
        return cls(
            endpoints=tuple(endpoints),
            cache_duration_minutes=settings.cache_duration_minutes,
            cache_dir=settings.cache_dir,
        )


def load_endpoints(path: str | Path) -> list[EndpointConfig]:
    """Load endpoint presets from a JSON file.

    The file holds either a list of endpoint records or an object with an
    ``endpoints`` list (the plugin settings format).

    Raises:
        ValueError: If the file is not valid JSON or a record is invalid
    """
    raw = Path(path).read_text(encoding="utf-8")
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"Endpoints file {path} is not valid JSON: {e}") from e

    if isinstance(payload, dict):
        payload = payload.get("endpoints", [])
    if not isinstance(payload, list):
        raise ValueError(f"Endpoints file {path} must contain a list of endpoints")

    return [EndpointConfig.from_dict(record) for record in payload]


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the application."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def get_redis_client(settings: Settings) -> redis.Redis:
    """Create an async Redis client instance."""
    return redis.from_url(
        settings.redis_url,
        password=settings.redis_password,
        decode_responses=False,
    )
