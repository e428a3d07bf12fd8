"""Hiding and restoring registered tools across fastmcp releases.

fastmcp 2.x keeps tools in ``server._tool_manager``; hiding a tool means
removing it there and re-adding the same Tool object later. fastmcp 3.x
drops that manager in favour of ``server.disable(names=...)`` and
``server.enable(names=...)``. ``ToolManagerCompat`` picks whichever the
installed release offers so the toolset adapter never has to care.
"""

from __future__ import annotations

import importlib.metadata
import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


def _installed_version() -> str:
    try:
        return importlib.metadata.version("fastmcp")
    except importlib.metadata.PackageNotFoundError:
        return "0.0.0"


def _major(version: str) -> int:
    head = version.split(".", 1)[0]
    return int(head) if head.isdigit() else 0


FASTMCP_VERSION: str = _installed_version()
FASTMCP_V3: bool = _major(FASTMCP_VERSION) >= 3


def _tool_name(tool: Any) -> Optional[str]:
    return getattr(tool, "name", None) or getattr(tool, "key", None)


def _as_mapping(tools: Any) -> Dict[str, Any]:
    """Normalize ``{name: Tool}`` or ``[Tool, ...]`` to a name-keyed dict."""
    if isinstance(tools, dict):
        return dict(tools)
    return {_tool_name(tool): tool for tool in tools or () if _tool_name(tool)}


class ToolManagerCompat:
    """Thin facade over the server's tool registry.

    Attributes:
        _server: The FastMCP server instance.
    """

    def __init__(self, server: Any) -> None:
        self._server = server

    @property
    def _manager(self) -> Any:
        return getattr(self._server, "_tool_manager", None)

    async def get_tools(self) -> Dict[str, Any]:
        """All registered tools keyed by name."""
        if not FASTMCP_V3:
            return _as_mapping(await self._manager.get_tools())

        source = getattr(self._server, "get_tools", None)
        if source is None and self._manager is not None:
            source = self._manager.get_tools
        if source is None:
            logger.warning("Server exposes no tool listing API")
            return {}
        tools = source()
        if hasattr(tools, "__await__"):
            tools = await tools
        return _as_mapping(tools)

    def remove_tool(self, name: str) -> None:
        if not FASTMCP_V3:
            self._manager.remove_tool(name)
            return
        if self._manager is not None and self._manager_call("remove_tool", name):
            return
        self._toggle("disable", name)

    def add_tool(self, tool: Any) -> None:
        if not FASTMCP_V3:
            self._manager.add_tool(tool)
            return
        if self._manager is not None and self._manager_call("add_tool", tool):
            return
        name = _tool_name(tool)
        if name:
            self._toggle("enable", name)

    def _manager_call(self, method: str, arg: Any) -> bool:
        try:
            getattr(self._manager, method)(arg)
        except Exception as e:
            logger.debug(f"_tool_manager.{method} unavailable: {e}")
            return False
        return True

    def _toggle(self, method: str, name: str) -> None:
        try:
            getattr(self._server, method)(names={name})
        except Exception as e:
            logger.warning(f"Could not {method} tool '{name}': {e}")
