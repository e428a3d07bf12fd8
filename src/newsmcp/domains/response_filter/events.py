"""Response Filter Domain Events."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Tuple


@dataclass
class ResponseProjected:
    """Emitted after an envelope has been projected.

    Attributes:
        entity_kind: Kind of records projected.
        groups: Active group names.
        body_length: Article body limit in effect, if any.
        record_count: Number of records projected.
        raw_tokens: Estimated tokens before projection.
        projected_tokens: Estimated tokens after projection.
        timestamp: When the projection happened.
    """
    entity_kind: str
    groups: Tuple[str, ...]
    body_length: Optional[int]
    record_count: int
    raw_tokens: int
    projected_tokens: int
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def tokens_saved(self) -> int:
        return max(0, self.raw_tokens - self.projected_tokens)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "event_type": "ResponseProjected",
            "entity_kind": self.entity_kind,
            "groups": list(self.groups),
            "body_length": self.body_length,
            "record_count": self.record_count,
            "raw_tokens": self.raw_tokens,
            "projected_tokens": self.projected_tokens,
            "tokens_saved": self.tokens_saved,
            "timestamp": self.timestamp.isoformat(),
        }
