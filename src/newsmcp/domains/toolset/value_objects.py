"""Toolset Domain Value Objects.

Immutable values for the Toolset bounded context: the category
vocabulary and the per-category core-tool policy.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet


class ToolCategory(Enum):
    """Group of tools toggled together by ``enable_toolset``."""
    SEARCH = "search"
    SUGGEST = "suggest"
    TOPIC_PAGES = "topic_pages"
    USAGE = "usage"
    ANALYTICS = "analytics"

    @property
    def description(self) -> str:
        return _CATEGORY_DESCRIPTIONS[self]

    @classmethod
    def from_string(cls, value: str) -> "ToolCategory":
        """Parse a category name (case-insensitive).

        Raises:
            ValueError: If the name is not a known category.
        """
        normalized = value.strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        raise ValueError(
            f"Unknown category: '{value}'. "
            f"Available: {', '.join(m.value for m in cls)}"
        )


_CATEGORY_DESCRIPTIONS = {
    ToolCategory.SEARCH: "Article, event and mention search, details, and text matching",
    ToolCategory.SUGGEST: "URI lookup for concepts, categories, sources, locations, authors",
    ToolCategory.TOPIC_PAGES: "Topic page article and event retrieval",
    ToolCategory.USAGE: "API usage and plan details",
    ToolCategory.ANALYTICS: "Text analytics: entities, categories, sentiment, language, similarity",
}


@dataclass(frozen=True)
class CorePolicy:
    """Which tools of a category stay visible regardless of toggles.

    Attributes:
        all_core: Every tool in the category is core.
        tool_names: Core tool names when ``all_core`` is False.
    """
    all_core: bool = False
    tool_names: FrozenSet[str] = frozenset()

    @classmethod
    def everything(cls) -> "CorePolicy":
        return cls(all_core=True)

    @classmethod
    def only(cls, *names: str) -> "CorePolicy":
        return cls(all_core=False, tool_names=frozenset(names))

    @classmethod
    def none(cls) -> "CorePolicy":
        return cls()

    def is_core(self, tool_name: str) -> bool:
        return self.all_core or tool_name in self.tool_names
