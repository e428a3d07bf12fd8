"""Toolset port implementation backed by the FastMCP server.

Opt-in tools are registered like every other tool at import time. The
adapter keeps the registered Tool objects from startup so a hidden
tool can be put back with its handler and input schema intact.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, FrozenSet

from newsmcp.compat.fastmcp_compat import ToolManagerCompat

logger = logging.getLogger(__name__)


class ToolManagerAdapter:
    """Implements ToolManagerPort on top of a FastMCP server.

    Connected clients receive ``notifications/tools/list_changed`` from
    FastMCP whenever a tool is hidden or restored.

    Attributes:
        _compat: Release-independent access to the tool registry.
        _registered: Tool objects captured by ``initialize``.
    """

    def __init__(self, fastmcp_server: Any) -> None:
        self._compat = ToolManagerCompat(fastmcp_server)
        self._registered: Dict[str, Any] = {}

    @property
    def initialized(self) -> bool:
        return bool(self._registered)

    async def initialize(self) -> None:
        """Capture every registered tool. Call after all ``@mcp.tool`` decorators ran."""
        self._registered.update(await self._compat.get_tools())
        logger.info(f"Captured {len(self._registered)} registered tools")

    async def get_visible_tool_names(self) -> FrozenSet[str]:
        tools = await self._compat.get_tools()
        return frozenset(
            name for name, tool in tools.items() if getattr(tool, "enabled", True)
        )

    async def remove_tool(self, tool_name: str) -> None:
        if tool_name not in await self.get_visible_tool_names():
            return
        self._compat.remove_tool(tool_name)
        logger.debug(f"Hid tool {tool_name}")

    async def add_tool(self, tool_name: str) -> None:
        tool = self._registered.get(tool_name)
        if tool is None:
            logger.warning(f"No original tool captured for '{tool_name}'")
            return
        if tool_name in await self.get_visible_tool_names():
            return
        self._compat.add_tool(tool)
        logger.debug(f"Restored tool {tool_name}")
