"""Response Filter Domain Services.

Three stateless services make up the projection engine:

- ``UpstreamHintBuilder`` turns a FieldGroupSet into ``include*`` flags
  so the upstream API only computes what will be kept.
- ``EntityProjector`` reduces one raw record to the fields implied by the
  active groups, flattening and trimming nested values on the way.
- ``ResponseProjector`` walks a response envelope (paginated search
  wrapper or URI-keyed detail map) and projects every record in it.

None of them mutate their inputs.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from .catalog import EntityFieldCatalog, catalog_for
from .events import ResponseProjected
from .value_objects import (
    EntityKind,
    FieldGroup,
    FieldGroupSet,
    FilterOptions,
    TokenEstimate,
)

logger = logging.getLogger(__name__)

PAGINATION_KEYS = ("totalResults", "page", "count", "pages")

# Multilingual maps are keyed by three-letter language codes.
PREFERRED_LANGUAGE = "eng"

_MULTILINGUAL_FIELDS = ("title", "summary")

# Element shape kept for nested lists when not in full mode.
_NESTED_LIST_SHAPES: Dict[str, tuple] = {
    "concepts": ("uri", "label", "type"),
    "categories": ("uri", "label", "type"),
    "authors": ("uri", "name"),
}

_SOURCE_SHAPE = ("title", "uri")


def flatten_multilingual(value: Any) -> Any:
    """Collapse a ``{lang: text}`` map to one string.

    Prefers the English entry, falls back to the first entry, and yields
    ``""`` for an empty map. Non-dict values are returned unchanged.
    """
    if not isinstance(value, dict):
        return value
    if PREFERRED_LANGUAGE in value:
        return value[PREFERRED_LANGUAGE]
    for text in value.values():
        return text
    return ""


class UpstreamHintBuilder:
    """Derives upstream ``include*`` flags from the active field groups."""

    def build(self, kind: EntityKind, groups: FieldGroupSet) -> Dict[str, bool]:
        """Return the flags to merge into the upstream request body.

        Args:
            kind: Entity kind being requested.
            groups: Active field groups.

        Returns:
            Mapping of flag name to ``True``. Only enabled flags appear.
        """
        catalog = catalog_for(kind)
        params: Dict[str, bool] = {flag: True for flag in catalog.always_flags}

        if groups.is_full:
            for flag in catalog.all_flags():
                params[flag] = True
            return params

        for group in groups:
            for flag in catalog.include_flags.get(group, ()):
                params[flag] = True
        return params


class EntityProjector:
    """Projects a single raw record to its allowed fields.

    Order of operations: field pruning, kind-specific post-processing
    (both skipped under ``full``), then the article body-length policy.
    """

    def project(
        self,
        raw: Dict[str, Any],
        kind: EntityKind,
        options: FilterOptions,
    ) -> Dict[str, Any]:
        catalog = catalog_for(kind)
        groups = options.groups

        if groups.is_full:
            projected = dict(raw)
        else:
            allowed = catalog.allowed_fields(groups)
            projected = {k: v for k, v in raw.items() if k in allowed}
            self._post_process(projected, catalog, groups)

        if catalog.truncates_body:
            apply_body_length(projected, options.body_length)
        return projected

    def _post_process(
        self,
        projected: Dict[str, Any],
        catalog: EntityFieldCatalog,
        groups: FieldGroupSet,
    ) -> None:
        if (
            catalog.trims_source
            and FieldGroup.LOCATION not in groups
            and isinstance(projected.get("source"), dict)
        ):
            projected["source"] = _pick(projected["source"], _SOURCE_SHAPE)

        for name in _MULTILINGUAL_FIELDS:
            if isinstance(projected.get(name), dict):
                projected[name] = flatten_multilingual(projected[name])

        for name, shape in _NESTED_LIST_SHAPES.items():
            if isinstance(projected.get(name), list):
                projected[name] = [_trim_element(item, shape) for item in projected[name]]

        if (
            catalog.collapses_article_counts
            and FieldGroup.METADATA not in groups
            and isinstance(projected.get("articleCounts"), dict)
        ):
            counts = projected["articleCounts"]
            projected["articleCounts"] = {"total": counts["total"]} if "total" in counts else {}


def apply_body_length(record: Dict[str, Any], body_length: Optional[int]) -> None:
    """Apply the body length policy to ``record`` in place.

    ``None`` or negative: untouched. ``0``: body removed. Positive and
    shorter than the body: hard character cut.
    """
    if body_length is None or body_length < 0:
        return
    if body_length == 0:
        record.pop("body", None)
        return
    body = record.get("body")
    if isinstance(body, str) and len(body) > body_length:
        record["body"] = body[:body_length]


def _pick(source: Dict[str, Any], keys) -> Dict[str, Any]:
    return {k: source[k] for k in keys if k in source}


def _trim_element(item: Any, shape) -> Any:
    if not isinstance(item, dict):
        return item
    trimmed = _pick(item, shape)
    if "label" in trimmed:
        trimmed["label"] = flatten_multilingual(trimmed["label"])
    return trimmed


class ResponseProjector:
    """Envelope-level orchestration of entity projection.

    Handles the paginated search wrapper (``{plural: {results: [...]}}``)
    and the URI-keyed detail map (``{uri: {info: {...}}}``). Anything else
    is handed back unchanged.

    Attributes:
        _entity_projector: Per-record projector.
        _event_publisher: Optional callback receiving ResponseProjected.
    """

    def __init__(
        self,
        entity_projector: Optional[EntityProjector] = None,
        event_publisher: Optional[Callable[[object], None]] = None,
    ) -> None:
        self._entity_projector = entity_projector or EntityProjector()
        self._event_publisher = event_publisher

    @property
    def event_publisher(self) -> Optional[Callable[[object], None]]:
        return self._event_publisher

    @event_publisher.setter
    def event_publisher(self, publisher: Optional[Callable[[object], None]]) -> None:
        self._event_publisher = publisher

    def project(self, response: Any, kind: EntityKind, options: FilterOptions) -> Any:
        """Project every record in ``response``.

        Args:
            response: Upstream response body.
            kind: Entity kind held by the response.
            options: Active groups and article body limit.

        Returns:
            A new envelope with the same shape, or the input itself when it
            is not a dict or when ``full`` is set without a body limit.
        """
        if not isinstance(response, dict):
            return response
        if options.is_passthrough:
            return response

        wrapper = response.get(kind.plural)
        if isinstance(wrapper, dict):
            results = wrapper.get("results")
            if not isinstance(results, list):
                return response
            projected = dict(response)
            projected[kind.plural] = self._project_wrapper(wrapper, results, kind, options)
            record_count = len(results)
        else:
            projected, record_count = self._project_detail_map(response, kind, options)

        self._report(response, projected, kind, options, record_count)
        return projected

    def _project_wrapper(
        self,
        wrapper: Dict[str, Any],
        results: List[Any],
        kind: EntityKind,
        options: FilterOptions,
    ) -> Dict[str, Any]:
        rebuilt: Dict[str, Any] = {
            "results": [self._project_item(item, kind, options) for item in results]
        }
        for key in PAGINATION_KEYS:
            if key in wrapper:
                rebuilt[key] = wrapper[key]
        return rebuilt

    def _project_detail_map(
        self, response: Dict[str, Any], kind: EntityKind, options: FilterOptions
    ):
        projected: Dict[str, Any] = {}
        count = 0
        for key, entry in response.items():
            if isinstance(entry, dict) and isinstance(entry.get("info"), dict):
                projected[key] = {
                    **entry,
                    "info": self._entity_projector.project(entry["info"], kind, options),
                }
                count += 1
            else:
                projected[key] = entry
        return projected, count

    def _project_item(self, item: Any, kind: EntityKind, options: FilterOptions) -> Any:
        if not isinstance(item, dict):
            return item
        return self._entity_projector.project(item, kind, options)

    def _report(
        self,
        raw: Dict[str, Any],
        projected: Dict[str, Any],
        kind: EntityKind,
        options: FilterOptions,
        record_count: int,
    ) -> None:
        if not (self._event_publisher or logger.isEnabledFor(logging.DEBUG)):
            return
        before = TokenEstimate.from_obj(raw)
        after = TokenEstimate.from_obj(projected)
        logger.debug(
            "Projected %d %s with groups [%s]: ~%d -> ~%d tokens",
            record_count,
            kind.value,
            options.groups,
            before.estimated_tokens,
            after.estimated_tokens,
        )
        self._publish_event(ResponseProjected(
            entity_kind=kind.value,
            groups=options.groups.names,
            body_length=options.body_length,
            record_count=record_count,
            raw_tokens=before.estimated_tokens,
            projected_tokens=after.estimated_tokens,
        ))

    def _publish_event(self, event: object) -> None:
        if self._event_publisher:
            try:
                self._event_publisher(event)
            except Exception as e:
                logger.error(f"Failed to publish event: {e}")


# Module-level services; all three are stateless.
_hint_builder = UpstreamHintBuilder()
_entity_projector = EntityProjector()
_response_projector = ResponseProjector(_entity_projector)


def build_include_params(kind: EntityKind, groups: FieldGroupSet) -> Dict[str, bool]:
    return _hint_builder.build(kind, groups)


def project_entity(
    raw: Dict[str, Any], kind: EntityKind, options: FilterOptions
) -> Dict[str, Any]:
    return _entity_projector.project(raw, kind, options)


def project_response(response: Any, kind: EntityKind, options: FilterOptions) -> Any:
    return _response_projector.project(response, kind, options)


def set_projection_event_publisher(
    publisher: Optional[Callable[[object], None]],
) -> None:
    """Send ResponseProjected events from ``project_response`` to ``publisher``."""
    _response_projector.event_publisher = publisher
