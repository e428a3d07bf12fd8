"""Toolset Domain Aggregates."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Set, Tuple

from .entities import ToolEntry
from .value_objects import CorePolicy, ToolCategory

DEFAULT_CORE_POLICIES: Dict[ToolCategory, CorePolicy] = {
    ToolCategory.SEARCH: CorePolicy.only(
        "search_articles", "get_article_details", "search_events", "get_event_details",
    ),
    ToolCategory.SUGGEST: CorePolicy.everything(),
    ToolCategory.TOPIC_PAGES: CorePolicy.none(),
    ToolCategory.USAGE: CorePolicy.everything(),
    ToolCategory.ANALYTICS: CorePolicy.none(),
}


@dataclass
class Toolset:
    """Aggregate root: every known tool and its visibility.

    Invariants:
    - Core tools are visible from construction and never hidden.
    - A category is "enabled" while any of its tools is visible.
    - A category is "fully enabled" after enable_category until the
      next disable_category.

    Attributes:
        entries: Tool entries keyed by name, in registration order.
        core_policies: Core-tool policy per category.
        fully_enabled: Categories whose every tool has been revealed.
    """
    entries: Dict[str, ToolEntry]
    core_policies: Mapping[ToolCategory, CorePolicy] = field(
        default_factory=lambda: dict(DEFAULT_CORE_POLICIES)
    )
    fully_enabled: Set[ToolCategory] = field(default_factory=set)

    @classmethod
    def build(
        cls,
        tools: Iterable[Tuple[str, ToolCategory]],
        core_policies: Mapping[ToolCategory, CorePolicy] = DEFAULT_CORE_POLICIES,
    ) -> "Toolset":
        """Create a toolset where exactly the core tools are visible.

        Args:
            tools: (tool_name, category) pairs.
            core_policies: Core policy per category; missing means none.
        """
        entries: Dict[str, ToolEntry] = {}
        for name, category in tools:
            core = core_policies.get(category, CorePolicy.none()).is_core(name)
            entries[name] = ToolEntry(tool_name=name, category=category, core=core, visible=core)
        return cls(entries=entries, core_policies=dict(core_policies))

    def categories(self) -> List[ToolCategory]:
        """Categories that own at least one tool, in first-seen order."""
        seen: Dict[ToolCategory, None] = {}
        for entry in self.entries.values():
            seen.setdefault(entry.category, None)
        return list(seen)

    def tools_in(self, category: ToolCategory) -> List[ToolEntry]:
        return [e for e in self.entries.values() if e.category == category]

    def visible_names(self) -> List[str]:
        return [e.tool_name for e in self.entries.values() if e.visible]

    def hidden_names(self) -> List[str]:
        return [e.tool_name for e in self.entries.values() if not e.visible]

    def plan_enable(self, category: ToolCategory) -> List[str]:
        """Mark the category fully enabled; return hidden tools to reveal."""
        self._require(category)
        self.fully_enabled.add(category)
        return [e.tool_name for e in self.tools_in(category) if not e.visible]

    def plan_disable(self, category: ToolCategory) -> List[str]:
        """Clear the fully-enabled mark; return visible non-core tools to hide."""
        self._require(category)
        self.fully_enabled.discard(category)
        return [e.tool_name for e in self.tools_in(category) if e.visible and not e.core]

    def mark_visible(self, tool_name: str, visible: bool) -> None:
        entry = self.entries[tool_name]
        if entry.core and not visible:
            raise ValueError(f"Core tool '{tool_name}' cannot be hidden")
        entry.visible = visible

    def category_info(self) -> List[Dict[str, object]]:
        """Per-category summary for ``list_available_tools``."""
        return [
            {
                "category": category.value,
                "description": category.description,
                "enabled": [e.tool_name for e in self.tools_in(category) if e.visible],
                "disabled": [e.tool_name for e in self.tools_in(category) if not e.visible],
            }
            for category in self.categories()
        ]

    def _require(self, category: ToolCategory) -> None:
        if not self.tools_in(category):
            raise KeyError(
                f"Unknown category: '{category.value}'. "
                f"Available: {', '.join(c.value for c in self.categories())}"
            )
