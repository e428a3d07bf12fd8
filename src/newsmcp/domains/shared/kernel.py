"""Shared Kernel - Parameter types shared by all tools.

Literal type aliases with BeforeValidator for lenient normalization.
They produce flat {"enum": [...]} in JSON Schema while accepting
wrong-case or stringified input from LLM callers at runtime.
"""

from __future__ import annotations

import json
import re
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BeforeValidator


def _normalize_str(v: Any) -> Any:
    """Normalize string input: strip whitespace, lowercase."""
    return v.strip().lower() if isinstance(v, str) else v


def _strip_str(v: Any) -> Any:
    """Strip whitespace only; for camelCase upstream enum values."""
    return v.strip() if isinstance(v, str) else v


# ── Projection / output selectors ─────────────────────────────

DetailLevel = Annotated[
    Literal["minimal", "standard", "full"],
    BeforeValidator(_normalize_str),
]

OutputFormat = Annotated[
    Literal["json", "text"],
    BeforeValidator(_normalize_str),
]

SuggestType = Annotated[
    Literal["concepts", "categories", "sources", "locations", "authors"],
    BeforeValidator(_normalize_str),
]

ToolCategoryName = Annotated[
    Literal["search", "suggest", "topic_pages", "usage", "analytics"],
    BeforeValidator(_normalize_str),
]

Taxonomy = Annotated[
    Literal["dmoz", "news", "iptc"],
    BeforeValidator(_normalize_str),
]

# ── Upstream filter enums (case-sensitive upstream values) ────

KeywordLoc = Annotated[
    Literal["body", "title", "title,body"],
    BeforeValidator(_normalize_str),
]

KeywordOper = Annotated[
    Literal["and", "or"],
    BeforeValidator(_normalize_str),
]

IsDuplicateFilter = Annotated[
    Literal["keepAll", "skipDuplicates", "keepOnlyDuplicates"],
    BeforeValidator(_strip_str),
]

ArticlesSortBy = Annotated[
    Literal[
        "date", "rel", "sourceImportance", "sourceAlexaGlobalRank",
        "socialScore", "facebookShares",
    ],
    BeforeValidator(_strip_str),
]

EventsSortBy = Annotated[
    Literal["date", "rel", "size", "socialScore"],
    BeforeValidator(_strip_str),
]


# ============================================================
# Array coercion
# ============================================================

_URL_BOUNDARY = re.compile(r",(?=\s*https?://)")


def parse_array(value: Any) -> Optional[List[str]]:
    """Coerce a caller-supplied value to a list of strings.

    Handles the shapes LLM callers produce:
    1. Already a list:       ["a", 1]              -> ["a", "1"]
    2. JSON array string:    '["a", "b"]'          -> ["a", "b"]
    3. URL list:             'https://x/?a=1,b, https://y' -> split only
       on commas that precede a URL, so commas inside URLs survive
    4. Comma-separated:      'a, b'                -> ["a", "b"]

    ``None`` yields ``None``.
    """
    if value is None:
        return None
    if isinstance(value, list):
        return [str(item) for item in value]
    text = str(value).strip()
    if text.startswith("["):
        try:
            parsed = json.loads(text)
            if isinstance(parsed, list):
                return [str(item) for item in parsed]
        except json.JSONDecodeError:
            pass
    if re.search(r"https?://", text):
        parts = _URL_BOUNDARY.split(text)
    else:
        parts = text.split(",")
    return [part.strip() for part in parts if part.strip()]


def _coerce_string_to_list(v: Any) -> Any:
    if v is None or isinstance(v, list):
        return v
    if isinstance(v, str):
        return parse_array(v)
    return v


CoercedStringList = Annotated[List[str], BeforeValidator(_coerce_string_to_list)]
OptionalCoercedStringList = Annotated[
    Optional[List[str]], BeforeValidator(_coerce_string_to_list)
]


def _coerce_string_to_query(v: Any) -> Any:
    """Coerce a stringified JSON query object to a dict.

    Strings that are not valid JSON objects pass through unchanged; the
    request builder rejects them as an invalid ``query`` parameter.
    """
    if isinstance(v, str):
        v_stripped = v.strip()
        if v_stripped.startswith("{"):
            try:
                parsed = json.loads(v_stripped)
                if isinstance(parsed, dict):
                    return parsed
            except json.JSONDecodeError:
                pass
    return v


CoercedQuery = Annotated[
    Union[Dict[str, Any], str, None],
    BeforeValidator(_coerce_string_to_query),
]
