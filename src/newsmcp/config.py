"""Environment-driven server configuration.

Environment variables:
- NEWSAPI_KEY: API key for Event Registry / NewsAPI.ai (required to serve)
- NEWSAPI_BASE_URL: Main API base (default https://eventregistry.org/api/v1)
- NEWSAPI_ANALYTICS_URL: Analytics API base
- NEWSAPI_TIMEOUT: Request timeout in seconds (default 30)
- NEWSAPI_SUGGEST_CACHE_SIZE: Max cached suggest lookups (default 1000)
- NEWSAPI_SUGGEST_CACHE_TTL_HOURS: Suggest cache TTL (default 24)
- NEWSAPI_LOG_LEVEL: Log level when --log-level is not given (default INFO)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://eventregistry.org/api/v1"
DEFAULT_ANALYTICS_URL = "http://analytics.eventregistry.org/api/v1"


@dataclass(frozen=True)
class ServerConfig:
    """Runtime settings for the NewsAPI MCP server."""
    api_key: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    analytics_url: str = DEFAULT_ANALYTICS_URL
    timeout: float = 30.0
    suggest_cache_size: int = 1000
    suggest_cache_ttl_hours: float = 24.0
    log_level: str = "INFO"

    ENV_API_KEY = "NEWSAPI_KEY"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ServerConfig":
        """Build config from environment variables.

        Invalid numeric values fall back to defaults with a warning.

        Args:
            environ: Mapping to read from (defaults to ``os.environ``).
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        api_key = env.get(cls.ENV_API_KEY, "").strip() or None
        return cls(
            api_key=api_key,
            base_url=env.get("NEWSAPI_BASE_URL", "").strip().rstrip("/")
            or defaults.base_url,
            analytics_url=env.get("NEWSAPI_ANALYTICS_URL", "").strip().rstrip("/")
            or defaults.analytics_url,
            timeout=_read_number(env, "NEWSAPI_TIMEOUT", defaults.timeout, float),
            suggest_cache_size=_read_number(
                env, "NEWSAPI_SUGGEST_CACHE_SIZE", defaults.suggest_cache_size, int
            ),
            suggest_cache_ttl_hours=_read_number(
                env, "NEWSAPI_SUGGEST_CACHE_TTL_HOURS",
                defaults.suggest_cache_ttl_hours, float,
            ),
            log_level=env.get("NEWSAPI_LOG_LEVEL", "").strip().upper()
            or defaults.log_level,
        )


def _read_number(env: Mapping[str, str], name: str, default, cast):
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        value = cast(raw)
    except ValueError:
        logger.warning(f"Invalid {name}={raw!r}, using default {default}")
        return default
    if value <= 0:
        logger.warning(f"{name} must be positive, using default {default}")
        return default
    return value
