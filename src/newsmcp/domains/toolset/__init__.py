"""Toolset Bounded Context.

Category-based MCP tool visibility. Core tools are always exposed; the
rest of a category is revealed on demand via ``enable_toolset`` so that
callers only pay for the tool descriptions they use.

Example usage:
    from newsmcp.domains.toolset import Toolset, ToolsetManager, ToolCategory

    toolset = Toolset.build([("search_articles", ToolCategory.SEARCH), ...])
    manager = ToolsetManager(tool_manager, toolset)
    await manager.apply_initial_visibility()
    await manager.enable_category(ToolCategory.ANALYTICS)
"""

from .aggregates import DEFAULT_CORE_POLICIES, Toolset
from .entities import ToolEntry
from .events import ToolsetDisabled, ToolsetEnabled
from .services import ToolManagerPort, ToolsetManager
from .value_objects import CorePolicy, ToolCategory

__all__ = [
    # Value Objects
    "CorePolicy",
    "ToolCategory",
    # Entities
    "ToolEntry",
    # Aggregates
    "DEFAULT_CORE_POLICIES",
    "Toolset",
    # Events
    "ToolsetDisabled",
    "ToolsetEnabled",
    # Services
    "ToolManagerPort",
    "ToolsetManager",
]
