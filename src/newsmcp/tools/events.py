"""Event search, detail and text-matching handlers."""

from __future__ import annotations

from typing import Any, Mapping

from newsmcp.domains.response_filter import EntityKind, project_response
from newsmcp.domains.shared.kernel import parse_array
from newsmcp.formatters import format_event_details, format_event_results
from newsmcp.tools.base import ApiPort, ToolDefinition, ToolResult
from newsmcp.tools.params import (
    apply_detail_level,
    build_filter_body,
    filter_request,
    with_include_params,
)


async def search_events(client: ApiPort, params: Mapping[str, Any]) -> ToolResult:
    params = apply_detail_level(params, "eventsCount")
    request = filter_request(EntityKind.EVENTS, params)

    body = build_filter_body(params)
    body["resultType"] = "events"
    with_include_params(body, request)

    result = await client.api_post("/event/getEvents", body)
    return ToolResult(
        project_response(result, request.kind, request.options), request.warnings
    )


async def get_event_details(client: ApiPort, params: Mapping[str, Any]) -> ToolResult:
    request = filter_request(EntityKind.EVENTS, params)
    body = with_include_params({"eventUri": parse_array(params.get("eventUri"))}, request)

    result = await client.api_post("/event/getEvent", body)
    return ToolResult(
        project_response(result, request.kind, request.options), request.warnings
    )


async def find_event_for_text(client: ApiPort, params: Mapping[str, Any]) -> ToolResult:
    request = filter_request(EntityKind.EVENTS, params)
    body = with_include_params(
        {
            "keyword": params.get("text"),
            "resultType": "events",
            "eventsCount": 1,
            "eventsSortBy": "rel",
        },
        request,
    )

    result = await client.api_post("/event/getEvents", body)
    return ToolResult(
        project_response(result, request.kind, request.options), request.warnings
    )


EVENT_TOOLS = (
    ToolDefinition("search_events", "search", search_events, format_event_results),
    ToolDefinition("get_event_details", "search", get_event_details, format_event_details),
    ToolDefinition("find_event_for_text", "search", find_event_for_text, format_event_results),
)
