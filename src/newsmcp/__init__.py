"""NewsAPI MCP Server - news search over Event Registry with token-aware responses."""

from newsmcp.domains.response_filter import (  # noqa: F401
    build_include_params,
    project_entity,
    project_response,
)

# Expose the projection entry points at the package level

__all__ = ["build_include_params", "project_entity", "project_response"]

__version__ = "1.0.0"
