"""Caller-facing error guidance.

Turns upstream failures into short messages that tell an LLM caller
what went wrong and what to try next.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from newsmcp.client import ApiError

# Known param values, offered when a 400 body names the parameter.
KNOWN_PARAM_VALUES: Dict[str, List[str]] = {
    "lang": ["eng", "deu", "fra", "spa", "ita", "por", "rus", "zho", "jpn", "ara"],
    "detailLevel": ["minimal", "standard", "full"],
    "articlesSortBy": [
        "date", "rel", "sourceImportance", "sourceAlexaGlobalRank",
        "socialScore", "facebookShares",
    ],
    "eventsSortBy": ["date", "rel", "size", "socialScore"],
    "isDuplicateFilter": ["keepAll", "skipDuplicates", "keepOnlyDuplicates"],
    "keywordLoc": ["body", "title", "title,body"],
    "keywordOper": ["and", "or"],
    "dataType": ["news", "pr", "blog"],
}


class InvalidParameterError(ValueError):
    """A tool argument rejected before any upstream call.

    Attributes:
        param: Name of the offending parameter.
        reason: What is wrong with it.
    """

    def __init__(self, param: str, reason: str) -> None:
        super().__init__(f'"{param}" {reason}')
        self.param = param
        self.reason = reason


def _body_text(body: Any) -> str:
    if isinstance(body, str):
        return body
    if isinstance(body, (dict, list)):
        return json.dumps(body)
    return ""


def extract_param_hint(body: Any) -> Optional[str]:
    """Return the first known parameter named in an error body."""
    text = _body_text(body).lower()
    if not text:
        return None
    for param in KNOWN_PARAM_VALUES:
        if param.lower() in text:
            return param
    return None


def format_error_response(err: ApiError) -> str:
    """Format an ApiError as recovery guidance, one hint per line."""
    parts: List[str] = []

    if err.category == "rate_limit":
        parts.append("Rate limited (daily quota). Tokens refresh the next day.")
    elif err.category == "auth_error":
        parts.append("Authentication failed. Check NEWSAPI_KEY is valid.")
    elif err.category == "not_found":
        parts.append("No results found. Try broader search terms or check URIs.")
    elif err.category == "invalid_param":
        parts.append(f"Invalid request (HTTP 400): {_body_text(err.body)}")
        param = extract_param_hint(err.body)
        if param:
            parts.append(
                f'Valid values for "{param}": {", ".join(KNOWN_PARAM_VALUES[param])}'
            )
    elif err.category == "network_error":
        parts.append("Network error. Check connectivity and try again.")
    elif err.is_retryable:
        parts.append(f"Server error (HTTP {err.status}, retryable). Try again shortly.")
    else:
        parts.append(f"API error (HTTP {err.status}): {_body_text(err.body)}")

    if err.is_retryable and err.category != "rate_limit":
        parts.append("This error is retryable.")

    return "\n".join(parts)


def format_invalid_parameter(err: InvalidParameterError) -> str:
    """Format a locally rejected argument; nothing was sent upstream."""
    parts = [f"Invalid parameter: {err}"]
    if err.param == "query":
        parts.append(
            'Pass "query" as a JSON object, e.g. {"$query": {"keyword": "AI"}}, '
            "or use the simple filter parameters instead."
        )
    elif err.param in KNOWN_PARAM_VALUES:
        parts.append(
            f'Valid values for "{err.param}": {", ".join(KNOWN_PARAM_VALUES[err.param])}'
        )
    return "\n".join(parts)


def format_unknown_error(err: object) -> str:
    """Format a non-API failure."""
    if isinstance(err, BaseException):
        return f"Network/unexpected error: {err}"
    return f"Unexpected error: {err}"
