"""API token usage handler."""

from __future__ import annotations

from typing import Any, Mapping

from newsmcp.formatters import format_usage_results
from newsmcp.tools.base import ApiPort, ToolDefinition, ToolResult


async def get_api_usage(client: ApiPort, params: Mapping[str, Any]) -> ToolResult:
    return ToolResult(await client.api_post("/usage", {}))


USAGE_TOOLS = (
    ToolDefinition("get_api_usage", "usage", get_api_usage, format_usage_results),
)
