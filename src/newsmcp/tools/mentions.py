"""Sentence-level mention search handler."""

from __future__ import annotations

from typing import Any, Mapping

from newsmcp.domains.response_filter import EntityKind, project_response
from newsmcp.tools.base import ApiPort, ToolDefinition, ToolResult
from newsmcp.tools.params import (
    array_fields,
    build_filter_body,
    filter_request,
    with_include_params,
)

MENTION_ARRAY_FIELDS = (
    "eventTypeUri",
    "industryUri",
    "sdgUri",
    "sasbUri",
    "esgUri",
    "factLevel",
)


async def search_mentions(client: ApiPort, params: Mapping[str, Any]) -> ToolResult:
    request = filter_request(EntityKind.MENTIONS, params)

    body = build_filter_body(params)
    body["resultType"] = "mentions"
    array_fields(body, params, MENTION_ARRAY_FIELDS)
    with_include_params(body, request)

    result = await client.api_post("/article/getMentions", body)
    return ToolResult(
        project_response(result, request.kind, request.options), request.warnings
    )


MENTION_TOOLS = (
    ToolDefinition("search_mentions", "search", search_mentions),
)
