"""Response Filter Bounded Context.

Field-group projection of upstream news API responses. Callers select
optional field groups (``"sentiment,concepts"``); the engine derives the
upstream ``include*`` flags and reduces every returned record to the
minimal fields plus those groups.

Example usage:
    from newsmcp.domains.response_filter import (
        EntityKind,
        FilterOptions,
        FieldGroupSet,
        build_include_params,
        project_response,
    )

    groups = FieldGroupSet.parse("sentiment,location")
    flags = build_include_params(EntityKind.ARTICLES, groups)
    slim = project_response(raw, EntityKind.ARTICLES, FilterOptions(groups, 300))
"""

from .catalog import CATALOGS, EntityFieldCatalog, catalog_for
from .events import ResponseProjected
from .services import (
    EntityProjector,
    ResponseProjector,
    UpstreamHintBuilder,
    apply_body_length,
    build_include_params,
    flatten_multilingual,
    project_entity,
    project_response,
    set_projection_event_publisher,
)
from .value_objects import (
    EntityKind,
    FieldGroup,
    FieldGroupSet,
    FilterOptions,
    FilterRequest,
    TokenEstimate,
    parse_field_groups,
    validate_field_groups,
)

__all__ = [
    # Value Objects
    "EntityKind",
    "FieldGroup",
    "FieldGroupSet",
    "FilterOptions",
    "FilterRequest",
    "TokenEstimate",
    "parse_field_groups",
    "validate_field_groups",
    # Catalogs
    "CATALOGS",
    "EntityFieldCatalog",
    "catalog_for",
    # Services
    "EntityProjector",
    "ResponseProjector",
    "UpstreamHintBuilder",
    "apply_body_length",
    "build_include_params",
    "flatten_multilingual",
    "project_entity",
    "project_response",
    "set_projection_event_publisher",
    # Events
    "ResponseProjected",
]
