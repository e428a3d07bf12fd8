"""Toolset Domain Services."""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Protocol, Union

from .aggregates import Toolset
from .events import ToolsetDisabled, ToolsetEnabled
from .value_objects import ToolCategory

logger = logging.getLogger(__name__)


class ToolManagerPort(Protocol):
    """Port to the infrastructure layer that manages actual tools.

    Implemented by ToolManagerAdapter.
    """

    async def remove_tool(self, tool_name: str) -> None:
        """Remove a tool from the visible set."""
        ...

    async def add_tool(self, tool_name: str) -> None:
        """Restore a previously registered tool to the visible set."""
        ...

    async def get_visible_tool_names(self) -> frozenset[str]:
        """Return the set of currently visible tool names."""
        ...


class ToolsetManager:
    """Domain service applying category toggles to the MCP server.

    It:
    1. Keeps the Toolset aggregate as the source of truth.
    2. Applies reveal/hide plans through the ToolManagerPort.
    3. Publishes ToolsetEnabled / ToolsetDisabled events.

    Runs on the asyncio event loop; toggles are applied one at a time.

    Attributes:
        _tool_manager: Infrastructure port for tool manipulation.
        _toolset: The Toolset aggregate.
        _event_publisher: Optional callback for domain events.
    """

    def __init__(
        self,
        tool_manager: ToolManagerPort,
        toolset: Toolset,
        event_publisher: Optional[Callable[[object], None]] = None,
    ) -> None:
        self._tool_manager = tool_manager
        self._toolset = toolset
        self._event_publisher = event_publisher

    @property
    def toolset(self) -> Toolset:
        return self._toolset

    async def apply_initial_visibility(self) -> List[str]:
        """Hide every non-core tool the server currently exposes.

        Must be called once after all tools are registered.

        Returns:
            Names of the tools hidden.
        """
        visible = await self._tool_manager.get_visible_tool_names()
        hidden = [name for name in self._toolset.hidden_names() if name in visible]
        for name in hidden:
            await self._tool_manager.remove_tool(name)
        logger.info(
            f"Toolset initialized: {len(self._toolset.visible_names())} visible, "
            f"{len(self._toolset.hidden_names())} opt-in"
        )
        return hidden

    async def enable_category(self, category: ToolCategory) -> List[str]:
        """Reveal every tool of ``category``.

        Returns:
            Names of the tools newly revealed.

        Raises:
            KeyError: If the category has no tools.
        """
        added = self._toolset.plan_enable(category)
        for name in added:
            await self._tool_manager.add_tool(name)
            self._toolset.mark_visible(name, True)
        self._publish_event(ToolsetEnabled(category=category.value, tools_added=tuple(added)))
        return added

    async def disable_category(self, category: ToolCategory) -> List[str]:
        """Hide the non-core tools of ``category``.

        A category without core tools ends up fully hidden.

        Returns:
            Names of the tools hidden.

        Raises:
            KeyError: If the category has no tools.
        """
        removed = self._toolset.plan_disable(category)
        for name in removed:
            await self._tool_manager.remove_tool(name)
            self._toolset.mark_visible(name, False)
        self._publish_event(ToolsetDisabled(category=category.value, tools_removed=tuple(removed)))
        return removed

    async def set_enabled(self, category: Union[str, ToolCategory], enabled: bool = True) -> str:
        """Toggle a category and describe the outcome for the caller."""
        if not isinstance(category, ToolCategory):
            category = ToolCategory.from_string(category)
        name = category.value
        if enabled:
            added = await self.enable_category(category)
            if added:
                return f"Enabled {name}: added {', '.join(added)}"
            return f"Category {name} already fully enabled"
        removed = await self.disable_category(category)
        if removed:
            return f"Disabled {name}: removed {', '.join(removed)}"
        return f"Category {name} has no non-core tools to disable"

    def get_category_info(self) -> List[Dict[str, object]]:
        return self._toolset.category_info()

    def _publish_event(self, event: object) -> None:
        """Publish a domain event.

        Args:
            event: The event to publish.
        """
        if self._event_publisher:
            try:
                self._event_publisher(event)
            except Exception as e:
                logger.error(f"Failed to publish event: {e}")
