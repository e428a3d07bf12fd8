"""Unit tests for the fastmcp compatibility layer and the toolset adapter.

Tests cover: version detection, ToolManagerCompat (v2 and
patched v3 paths), ToolManagerAdapter against mocks and a real server.

Run with: uv run pytest tests/unit/test_fastmcp_compat.py -v
"""

__test__ = True

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from fastmcp import FastMCP

from newsmcp.compat.fastmcp_compat import (
    FASTMCP_V3,
    FASTMCP_VERSION,
    ToolManagerCompat,
)
from newsmcp.domains.toolset.adapters import ToolManagerAdapter


# =============================================================================
# Version detection
# =============================================================================


class TestVersionDetection:
    """Test fastmcp version detection."""

    def test_version_string_not_empty(self):
        assert FASTMCP_VERSION != ""
        assert "." in FASTMCP_VERSION

    def test_v3_flag_matches_version(self):
        major = int(FASTMCP_VERSION.split(".")[0])
        assert FASTMCP_V3 == (major >= 3)


# =============================================================================
# ToolManagerCompat
# =============================================================================


def _make_v2_server():
    """Mock FastMCP v2 server with _tool_manager."""
    server = MagicMock()
    server._tool_manager = MagicMock()
    server._tool_manager.get_tools = AsyncMock(return_value={
        "search_articles": MagicMock(enabled=True),
        "annotate_text": MagicMock(enabled=False),
    })
    return server


class TestToolManagerCompat:
    """Test ToolManagerCompat version-aware wrapper."""

    @pytest.mark.asyncio
    async def test_get_tools_v2(self):
        tools = await ToolManagerCompat(_make_v2_server()).get_tools()
        assert set(tools) == {"search_articles", "annotate_text"}

    @patch("newsmcp.compat.fastmcp_compat.FASTMCP_V3", False)
    def test_remove_and_add_v2(self):
        server = _make_v2_server()
        compat = ToolManagerCompat(server)
        compat.remove_tool("search_articles")
        server._tool_manager.remove_tool.assert_called_once_with("search_articles")
        tool = MagicMock()
        compat.add_tool(tool)
        server._tool_manager.add_tool.assert_called_once_with(tool)

    @patch("newsmcp.compat.fastmcp_compat.FASTMCP_V3", True)
    def test_remove_falls_back_to_disable_on_v3(self):
        server = MagicMock(spec=["disable", "enable"])
        ToolManagerCompat(server).remove_tool("annotate_text")
        server.disable.assert_called_once_with(names={"annotate_text"})

    @patch("newsmcp.compat.fastmcp_compat.FASTMCP_V3", True)
    def test_add_falls_back_to_enable_on_v3(self):
        server = MagicMock(spec=["disable", "enable"])
        tool = MagicMock()
        tool.name = "annotate_text"
        ToolManagerCompat(server).add_tool(tool)
        server.enable.assert_called_once_with(names={"annotate_text"})

    @patch("newsmcp.compat.fastmcp_compat.FASTMCP_V3", True)
    @pytest.mark.asyncio
    async def test_get_tools_v3_without_api(self):
        assert await ToolManagerCompat(MagicMock(spec=[])).get_tools() == {}


# =============================================================================
# ToolManagerAdapter
# =============================================================================


class TestToolManagerAdapter:
    """Test the anti-corruption layer over the tool manager."""

    @pytest.mark.asyncio
    async def test_visible_names_exclude_disabled(self):
        adapter = ToolManagerAdapter(_make_v2_server())
        assert await adapter.get_visible_tool_names() == frozenset({"search_articles"})

    @pytest.mark.asyncio
    async def test_add_without_snapshot_is_noop(self, caplog):
        server = _make_v2_server()
        adapter = ToolManagerAdapter(server)
        await adapter.add_tool("unknown_tool")
        server._tool_manager.add_tool.assert_not_called()
        assert "No original tool" in caplog.text

    @pytest.mark.skipif(FASTMCP_V3, reason="exercises the fastmcp 2.x tool manager")
    @pytest.mark.asyncio
    async def test_round_trip_on_real_server(self):
        server = FastMCP("adapter-test")

        @server.tool
        def ping() -> str:
            """Reply pong."""
            return "pong"

        @server.tool
        def echo(text: str) -> str:
            """Echo text."""
            return text

        adapter = ToolManagerAdapter(server)
        await adapter.initialize()
        assert adapter.initialized

        await adapter.remove_tool("echo")
        assert await adapter.get_visible_tool_names() == frozenset({"ping"})

        # removing twice is a no-op
        await adapter.remove_tool("echo")

        await adapter.add_tool("echo")
        assert await adapter.get_visible_tool_names() == frozenset({"ping", "echo"})
