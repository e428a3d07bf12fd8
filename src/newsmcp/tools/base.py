"""Tool definitions and result rendering.

A tool handler is an ``async`` callable taking the API client and the
tool params dict and returning a ``ToolResult``. The server layer turns
that into the content blocks the MCP caller sees.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Protocol, Tuple

from newsmcp.formatters import ResponseFormatter


class ApiPort(Protocol):
    """What tool handlers need from the upstream client."""

    async def api_post(self, path: str, body: Dict[str, Any]) -> Any: ...

    async def analytics_post(self, path: str, body: Dict[str, Any]) -> Any: ...


@dataclass(frozen=True)
class ToolResult:
    """Handler output: payload plus projection warnings for the caller."""
    data: Any
    warnings: Tuple[str, ...] = ()


Handler = Callable[[ApiPort, Mapping[str, Any]], Awaitable[ToolResult]]


@dataclass(frozen=True)
class ToolDefinition:
    """Static description of one handler and how to render it.

    Attributes:
        name: MCP tool name.
        category: Toolset category the tool belongs to.
        handler: Async handler.
        formatter: Text renderer for ``format="text"``, if any.
    """
    name: str
    category: str
    handler: Handler
    formatter: Optional[ResponseFormatter] = None


def render_result(
    result: ToolResult,
    params: Mapping[str, Any],
    formatter: Optional[ResponseFormatter] = None,
) -> List[str]:
    """Serialize a ToolResult into the text blocks returned to the caller.

    JSON output is a block of its own so it always parses; warnings, if
    any, follow in a second block. With ``format="text"`` and a formatter
    the warnings are appended to the rendered text instead.
    """
    warnings = "\n".join(result.warnings)
    if formatter is not None and params.get("format") == "text":
        text = formatter(result.data, params)
        return [f"{text}\n\n{warnings}" if warnings else text]
    payload = json.dumps(result.data, ensure_ascii=False)
    return [payload, warnings] if warnings else [payload]
