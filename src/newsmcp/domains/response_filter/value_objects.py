"""Response Filter Value Objects.

Immutable types describing *what* a caller asked to keep from an
upstream response: the entity kind, the normalized set of field groups,
and the optional article body limit.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, FrozenSet, Iterator, List, Optional, Tuple


class FieldGroup(Enum):
    """Named bundle of optional entity fields a caller may opt into."""
    SENTIMENT = "sentiment"
    CONCEPTS = "concepts"
    CATEGORIES = "categories"
    IMAGES = "images"
    AUTHORS = "authors"
    LOCATION = "location"
    SOCIAL = "social"
    METADATA = "metadata"
    EVENT = "event"
    FULL = "full"      # superset sentinel, disables pruning

    @classmethod
    def vocabulary(cls) -> Tuple[str, ...]:
        """All recognized group names in declaration order."""
        return tuple(member.value for member in cls)


class EntityKind(Enum):
    """Kind of record being projected.

    The value doubles as the pluralized wrapper key used by the upstream
    API for paginated search results (``{"articles": {"results": [...]}}``).
    """
    ARTICLES = "articles"
    EVENTS = "events"
    MENTIONS = "mentions"

    @property
    def plural(self) -> str:
        return self.value


@dataclass(frozen=True)
class FieldGroupSet:
    """Normalized, case-insensitive set of recognized field groups.

    Duplicates collapse; unknown names are dropped silently by ``parse``
    and reported separately by ``validate``.
    """
    groups: FrozenSet[FieldGroup] = field(default_factory=frozenset)

    SEPARATOR: ClassVar[str] = ","

    @classmethod
    def empty(cls) -> FieldGroupSet:
        return cls(groups=frozenset())

    @classmethod
    def of(cls, *names: str) -> FieldGroupSet:
        """Build a set from group names (convenience for callers and tests)."""
        return cls.parse(cls.SEPARATOR.join(names))

    @classmethod
    def parse(cls, text: Optional[str]) -> FieldGroupSet:
        """Parse a comma-separated group list.

        Tokens are trimmed and lower-cased; empty and unrecognized tokens
        are ignored. Absent or empty input yields the empty set.

        Args:
            text: Raw caller input such as ``"Sentiment, concepts"``.

        Returns:
            The normalized FieldGroupSet. Never raises.
        """
        if not text or not isinstance(text, str):
            return cls.empty()
        known = {member.value: member for member in FieldGroup}
        found = set()
        for token in _tokens(text):
            member = known.get(token)
            if member is not None:
                found.add(member)
        return cls(groups=frozenset(found))

    @staticmethod
    def validate(text: Optional[str]) -> List[str]:
        """Return one warning per unrecognized, non-empty token.

        Warnings are ordered as the tokens appear in the input. Each one
        names the token and lists the valid vocabulary.
        """
        if not text or not isinstance(text, str):
            return []
        vocabulary = FieldGroup.vocabulary()
        valid = ", ".join(vocabulary)
        return [
            f'Unknown field group "{token}" ignored. Valid: {valid}'
            for token in _tokens(text)
            if token not in vocabulary
        ]

    @property
    def is_full(self) -> bool:
        return FieldGroup.FULL in self.groups

    @property
    def names(self) -> Tuple[str, ...]:
        """Group names in vocabulary order (stable for logging and output)."""
        return tuple(g.value for g in FieldGroup if g in self.groups)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, str):
            return any(g.value == item for g in self.groups)
        return item in self.groups

    def __iter__(self) -> Iterator[FieldGroup]:
        return iter(g for g in FieldGroup if g in self.groups)

    def __len__(self) -> int:
        return len(self.groups)

    def __str__(self) -> str:
        return self.SEPARATOR.join(self.names)


def _tokens(text: str) -> Iterator[str]:
    for raw in text.split(FieldGroupSet.SEPARATOR):
        token = raw.strip().lower()
        if token:
            yield token


@dataclass(frozen=True)
class FilterOptions:
    """Projection options: active groups plus the article body limit.

    ``body_length`` semantics: ``None`` or negative keeps the body as is,
    ``0`` removes it, a positive value truncates longer bodies.
    """
    groups: FieldGroupSet = field(default_factory=FieldGroupSet.empty)
    body_length: Optional[int] = None

    @classmethod
    def from_params(
        cls, include_fields: Optional[str], body_length: Optional[int] = None
    ) -> FilterOptions:
        return cls(groups=FieldGroupSet.parse(include_fields), body_length=body_length)

    @property
    def truncates_body(self) -> bool:
        return self.body_length is not None and self.body_length >= 0

    @property
    def is_passthrough(self) -> bool:
        """True when projection would hand back the input untouched."""
        return self.groups.is_full and not self.truncates_body


@dataclass(frozen=True)
class FilterRequest:
    """Caller-visible projection configuration for one tool call."""
    kind: EntityKind
    options: FilterOptions
    warnings: Tuple[str, ...] = ()

    @classmethod
    def build(
        cls,
        kind: EntityKind,
        include_fields: Optional[str],
        body_length: Optional[int] = None,
    ) -> FilterRequest:
        return cls(
            kind=kind,
            options=FilterOptions.from_params(include_fields, body_length),
            warnings=tuple(FieldGroupSet.validate(include_fields)),
        )

    @property
    def groups(self) -> FieldGroupSet:
        return self.options.groups


@dataclass(frozen=True)
class TokenEstimate:
    """Token count estimate for a JSON-serializable payload."""
    char_count: int
    estimated_tokens: int
    CHARS_PER_TOKEN: ClassVar[float] = 4.0

    @classmethod
    def from_obj(cls, obj: object) -> TokenEstimate:
        content = json.dumps(obj, default=str)
        char_count = len(content)
        return cls(
            char_count=char_count,
            estimated_tokens=int(char_count / cls.CHARS_PER_TOKEN),
        )


def parse_field_groups(text: Optional[str]) -> FieldGroupSet:
    return FieldGroupSet.parse(text)


def validate_field_groups(text: Optional[str]) -> List[str]:
    return FieldGroupSet.validate(text)
