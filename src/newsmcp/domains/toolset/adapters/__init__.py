"""Infrastructure adapters for the Toolset bounded context."""

from .fastmcp_adapter import ToolManagerAdapter

__all__ = ["ToolManagerAdapter"]
