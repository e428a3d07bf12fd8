"""Toolset Domain Events.

Domain events record visibility changes so that observers (logging,
tests) can follow what the caller toggled.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Tuple


@dataclass
class ToolsetEnabled:
    """Emitted when a category is enabled via ``enable_toolset``.

    Attributes:
        category: The category enabled.
        tools_added: Tools that became visible (may be empty).
        timestamp: When the change occurred.
    """
    category: str
    tools_added: Tuple[str, ...]
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "event_type": "ToolsetEnabled",
            "category": self.category,
            "tools_added": list(self.tools_added),
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class ToolsetDisabled:
    """Emitted when a category is disabled via ``enable_toolset``.

    Attributes:
        category: The category disabled.
        tools_removed: Non-core tools that were hidden (may be empty).
        timestamp: When the change occurred.
    """
    category: str
    tools_removed: Tuple[str, ...]
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "event_type": "ToolsetDisabled",
            "category": self.category,
            "tools_removed": list(self.tools_removed),
            "timestamp": self.timestamp.isoformat(),
        }
