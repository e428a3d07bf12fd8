"""Entity Field Catalogs.

Static per-kind tables declaring the minimal projection, the fields each
group adds, and the upstream ``include*`` flags each group turns on.
Every EntityKind must have exactly one catalog; this is checked when the
module is imported.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Mapping, Tuple

from .value_objects import EntityKind, FieldGroup


@dataclass(frozen=True)
class EntityFieldCatalog:
    """Declared field and flag tables for one entity kind.

    Attributes:
        kind: The entity kind described.
        minimal_fields: Fields always kept when present.
        group_fields: Extra fields kept per active group.
        include_flags: Upstream flags turned on per active group.
        always_flags: Upstream flags sent regardless of groups.
        trims_source: Whether a nested ``source`` is reduced to title/uri.
        truncates_body: Whether the body length policy applies.
    """
    kind: EntityKind
    minimal_fields: Tuple[str, ...]
    group_fields: Mapping[FieldGroup, Tuple[str, ...]]
    include_flags: Mapping[FieldGroup, Tuple[str, ...]]
    always_flags: Tuple[str, ...] = ()
    trims_source: bool = False
    truncates_body: bool = False
    collapses_article_counts: bool = False

    def allowed_fields(self, groups) -> FrozenSet[str]:
        """Union of the minimal fields and the fields of each active group."""
        allowed = set(self.minimal_fields)
        for group in groups:
            allowed.update(self.group_fields.get(group, ()))
        return frozenset(allowed)

    def all_flags(self) -> Tuple[str, ...]:
        """Every include flag this kind knows, in declaration order."""
        seen: Dict[str, None] = {}
        for flags in self.include_flags.values():
            for flag in flags:
                seen.setdefault(flag, None)
        return tuple(seen)


ARTICLE_CATALOG = EntityFieldCatalog(
    kind=EntityKind.ARTICLES,
    minimal_fields=("uri", "title", "body", "dateTimePub", "url", "source"),
    group_fields={
        FieldGroup.SENTIMENT: ("sentiment",),
        FieldGroup.CONCEPTS: ("concepts",),
        FieldGroup.CATEGORIES: ("categories",),
        FieldGroup.IMAGES: ("image",),
        FieldGroup.AUTHORS: ("authors",),
        FieldGroup.LOCATION: ("location",),
        FieldGroup.SOCIAL: ("shares",),
        FieldGroup.METADATA: (
            "relevance", "wgt", "sim", "isDuplicate", "dataType",
            "lang", "date", "time", "dateTime",
        ),
        FieldGroup.EVENT: ("eventUri", "storyUri"),
    },
    include_flags={
        FieldGroup.CONCEPTS: ("includeArticleConcepts",),
        FieldGroup.CATEGORIES: ("includeArticleCategories",),
        FieldGroup.IMAGES: ("includeArticleImage",),
        FieldGroup.AUTHORS: ("includeArticleAuthors",),
        FieldGroup.LOCATION: ("includeArticleLocation", "includeSourceLocation"),
        FieldGroup.SOCIAL: ("includeArticleSocialScore",),
        FieldGroup.SENTIMENT: ("includeArticleSentiment",),
    },
    trims_source=True,
    truncates_body=True,
)

EVENT_CATALOG = EntityFieldCatalog(
    kind=EntityKind.EVENTS,
    minimal_fields=("uri", "title", "eventDate", "summary", "articleCounts"),
    group_fields={
        FieldGroup.SENTIMENT: ("sentiment",),
        FieldGroup.CONCEPTS: ("concepts",),
        FieldGroup.CATEGORIES: ("categories",),
        # events carry an image list, articles a single image
        FieldGroup.IMAGES: ("images",),
        FieldGroup.LOCATION: ("location",),
        FieldGroup.SOCIAL: ("socialScore",),
        FieldGroup.METADATA: ("wgt", "relevance"),
    },
    include_flags={
        FieldGroup.CONCEPTS: ("includeEventConcepts",),
        FieldGroup.CATEGORIES: ("includeEventCategories",),
        FieldGroup.IMAGES: ("includeEventImages",),
        FieldGroup.LOCATION: ("includeEventLocation",),
        FieldGroup.SOCIAL: ("includeEventSocialScore",),
        FieldGroup.SENTIMENT: ("includeEventSentiment",),
    },
    always_flags=("includeEventSummary",),
    collapses_article_counts=True,
)

MENTION_CATALOG = EntityFieldCatalog(
    kind=EntityKind.MENTIONS,
    minimal_fields=("uri", "sentence", "date", "source"),
    group_fields={
        FieldGroup.SENTIMENT: ("sentiment",),
        FieldGroup.LOCATION: ("location",),
        FieldGroup.METADATA: (
            "time", "lang", "eventTypeUri", "factLevel",
            "articleUri", "articleUrl", "sentenceIdx",
        ),
    },
    include_flags={
        FieldGroup.LOCATION: ("includeMentionSourceLocation",),
    },
    trims_source=True,
)

CATALOGS: Dict[EntityKind, EntityFieldCatalog] = {
    catalog.kind: catalog
    for catalog in (ARTICLE_CATALOG, EVENT_CATALOG, MENTION_CATALOG)
}


def _check_exhaustive() -> None:
    missing = [kind.value for kind in EntityKind if kind not in CATALOGS]
    if missing:
        raise RuntimeError(f"No field catalog declared for: {', '.join(missing)}")
    for catalog in CATALOGS.values():
        stray = [g for g in catalog.group_fields if g is FieldGroup.FULL]
        if stray:
            raise RuntimeError(f"'full' cannot map to fields ({catalog.kind.value})")


_check_exhaustive()


def catalog_for(kind: EntityKind) -> EntityFieldCatalog:
    return CATALOGS[kind]
