"""Entity URI lookup (``suggest``) with an in-process LRU cache.

Lookups are keyed by type, lower-cased prefix and language, so repeated
resolution of the same name costs no upstream tokens.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from newsmcp.cache import LRUCache
from newsmcp.formatters import format_suggest
from newsmcp.tools.base import ApiPort, ToolDefinition, ToolResult

logger = logging.getLogger(__name__)

SUGGEST_PATHS = {
    "concepts": "/suggestConceptsFast",
    "categories": "/suggestCategoriesFast",
    "sources": "/suggestSourcesFast",
    "locations": "/suggestLocationsFast",
    "authors": "/suggestAuthorsFast",
}

DEFAULT_LANG = "eng"

_suggest_cache: LRUCache[Any] = LRUCache(max_entries=1000, ttl_hours=24)


def configure_suggest_cache(max_entries: int, ttl_hours: float) -> None:
    """Replace the suggest cache (used at startup from ServerConfig)."""
    global _suggest_cache
    _suggest_cache = LRUCache(max_entries=max_entries, ttl_hours=ttl_hours)


def clear_suggest_cache() -> None:
    _suggest_cache.clear()


def cache_key(suggest_type: str, prefix: str, lang: str) -> str:
    return f"{suggest_type}:{prefix.lower()}:{lang}"


async def suggest(client: ApiPort, params: Mapping[str, Any]) -> ToolResult:
    suggest_type: str = params["type"]
    prefix: str = params["prefix"]
    lang: str = params.get("lang") or DEFAULT_LANG
    path: Optional[str] = SUGGEST_PATHS.get(suggest_type)
    if path is None:
        raise ValueError(
            f"Unknown suggest type: '{suggest_type}'. "
            f"Available: {', '.join(SUGGEST_PATHS)}"
        )

    key = cache_key(suggest_type, prefix, lang)
    cached = _suggest_cache.get(key)
    if cached is not None:
        logger.debug(f"Suggest cache hit: {key}")
        return ToolResult(cached)

    result = await client.api_post(path, {"prefix": prefix, "lang": lang})
    _suggest_cache.set(key, result)
    return ToolResult(result)


SUGGEST_TOOLS = (
    ToolDefinition("suggest", "suggest", suggest, format_suggest),
)
