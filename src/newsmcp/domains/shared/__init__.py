"""Shared kernel for the newsmcp bounded contexts."""

from .kernel import (
    ArticlesSortBy,
    CoercedQuery,
    CoercedStringList,
    DetailLevel,
    EventsSortBy,
    IsDuplicateFilter,
    KeywordLoc,
    KeywordOper,
    OptionalCoercedStringList,
    OutputFormat,
    SuggestType,
    Taxonomy,
    ToolCategoryName,
    parse_array,
)

__all__ = [
    "ArticlesSortBy",
    "CoercedQuery",
    "CoercedStringList",
    "DetailLevel",
    "EventsSortBy",
    "IsDuplicateFilter",
    "KeywordLoc",
    "KeywordOper",
    "OptionalCoercedStringList",
    "OutputFormat",
    "SuggestType",
    "Taxonomy",
    "ToolCategoryName",
    "parse_array",
]
