"""Tool handlers, grouped by toolset category."""

from typing import Dict, Tuple

from .analytics import ANALYTICS_TOOLS
from .articles import ARTICLE_TOOLS
from .base import ApiPort, ToolDefinition, ToolResult, render_result
from .events import EVENT_TOOLS
from .mentions import MENTION_TOOLS
from .suggest import SUGGEST_TOOLS
from .topic_pages import TOPIC_PAGE_TOOLS
from .usage import USAGE_TOOLS

ALL_TOOLS: Tuple[ToolDefinition, ...] = (
    ARTICLE_TOOLS
    + EVENT_TOOLS
    + MENTION_TOOLS
    + TOPIC_PAGE_TOOLS
    + ANALYTICS_TOOLS
    + SUGGEST_TOOLS
    + USAGE_TOOLS
)

TOOLS_BY_NAME: Dict[str, ToolDefinition] = {tool.name: tool for tool in ALL_TOOLS}

__all__ = [
    "ALL_TOOLS",
    "TOOLS_BY_NAME",
    "ApiPort",
    "ToolDefinition",
    "ToolResult",
    "render_result",
]
