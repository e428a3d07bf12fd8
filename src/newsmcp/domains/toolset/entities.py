"""Toolset Domain Entities."""

from __future__ import annotations

from dataclasses import dataclass

from .value_objects import ToolCategory


@dataclass
class ToolEntry:
    """Domain-side mirror of one registered MCP tool.

    This is not the FastMCP Tool object; the ToolManagerAdapter
    translates between names and FastMCP's Tool.

    Attributes:
        tool_name: Unique MCP tool name.
        category: Category the tool is toggled with.
        core: Whether the tool stays visible regardless of toggles.
        visible: Whether the tool is currently exposed to clients.
    """
    tool_name: str
    category: ToolCategory
    core: bool = False
    visible: bool = False
