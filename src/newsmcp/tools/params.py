"""Request body building shared by the search tools.

Tool params arrive as a flat dict (camelCase, matching the upstream
API). Projection-only params (``includeFields``, ``detailLevel``,
``format``) are consumed here and never forwarded upstream.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from newsmcp.domains.response_filter import (
    EntityKind,
    FilterRequest,
    build_include_params,
)
from newsmcp.domains.shared.kernel import parse_array
from newsmcp.errors import InvalidParameterError

CONTENT_ARRAY_FIELDS = (
    "keyword",
    "conceptUri",
    "categoryUri",
    "sourceUri",
    "sourceLocationUri",
    "authorUri",
    "locationUri",
    "lang",
)

CONTENT_SCALAR_FIELDS = (
    "dateStart",
    "dateEnd",
    "keywordLoc",
    "keywordOper",
    "minSentiment",
    "maxSentiment",
    "startSourceRankPercentile",
    "endSourceRankPercentile",
    "forceMaxDataTimeWindow",
)

# Consumed locally, never sent upstream.
LOCAL_PARAMS = frozenset({"includeFields", "detailLevel", "format"})


@dataclass(frozen=True)
class DetailPreset:
    articles_count: int
    events_count: int
    article_body_len: int


DETAIL_PRESETS: Dict[str, DetailPreset] = {
    "minimal": DetailPreset(articles_count=5, events_count=5, article_body_len=200),
    "standard": DetailPreset(articles_count=10, events_count=10, article_body_len=-1),
    "full": DetailPreset(articles_count=50, events_count=20, article_body_len=-1),
}

DEFAULT_DETAIL_LEVEL = "standard"


def apply_detail_level(params: Mapping[str, Any], *keys: str) -> Dict[str, Any]:
    """Fill count and body-length defaults from ``detailLevel``.

    Only the requested ``keys`` (``articlesCount``, ``eventsCount``,
    ``articleBodyLen``) are filled. Explicit params win over the preset;
    unknown levels fall back to ``standard``. Returns a new dict.
    """
    level = str(params.get("detailLevel") or DEFAULT_DETAIL_LEVEL).strip().lower()
    preset = DETAIL_PRESETS.get(level, DETAIL_PRESETS[DEFAULT_DETAIL_LEVEL])
    defaults = {
        "articlesCount": preset.articles_count,
        "eventsCount": preset.events_count,
        "articleBodyLen": preset.article_body_len,
    }
    resolved = dict(params)
    for key in keys:
        if resolved.get(key) is None:
            resolved[key] = defaults[key]
    return resolved


def parse_query(value: Any) -> Dict[str, Any]:
    """Advanced query: a JSON object string is decoded, a dict passes through.

    Raises:
        InvalidParameterError: If ``value`` is not a JSON object.
    """
    if isinstance(value, dict):
        return value
    try:
        parsed = json.loads(value)
    except (TypeError, json.JSONDecodeError) as e:
        raise InvalidParameterError("query", f"must be a JSON object ({e})") from e
    if not isinstance(parsed, dict):
        raise InvalidParameterError("query", f"must be a JSON object, got {type(parsed).__name__}")
    return parsed


def build_filter_body(params: Mapping[str, Any]) -> Dict[str, Any]:
    """Build the upstream body from tool params.

    Array-typed filters are normalized via ``parse_array``, ``query`` is
    decoded, ``None`` values and local-only params are dropped. Other
    params are forwarded unchanged.
    """
    body: Dict[str, Any] = {}
    for key, value in params.items():
        if value is None or key in LOCAL_PARAMS:
            continue
        if key == "query":
            body[key] = parse_query(value)
        elif key in CONTENT_ARRAY_FIELDS:
            body[key] = parse_array(value)
        else:
            body[key] = value
    return body


def array_fields(body: Dict[str, Any], params: Mapping[str, Any], names) -> None:
    """Normalize extra list-valued params into ``body`` in place."""
    for name in names:
        if params.get(name):
            body[name] = parse_array(params[name])


def filter_request(
    kind: EntityKind,
    params: Mapping[str, Any],
    body_length: Optional[int] = None,
) -> FilterRequest:
    return FilterRequest.build(kind, params.get("includeFields"), body_length)


def with_include_params(body: Dict[str, Any], request: FilterRequest) -> Dict[str, Any]:
    body.update(build_include_params(request.kind, request.groups))
    return body
