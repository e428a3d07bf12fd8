"""Main MCP Server implementation for the NewsAPI.ai / Event Registry API."""

import argparse
import json
import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional

import httpx
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from mcp.types import TextContent

from newsmcp.client import ApiError, NewsApiClient
from newsmcp.config import ServerConfig
from newsmcp.domains.shared.kernel import (
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
)
from newsmcp.domains.toolset import (
    DEFAULT_CORE_POLICIES,
    ToolCategory,
    Toolset,
    ToolsetManager,
)
from newsmcp.domains.toolset.adapters import ToolManagerAdapter
from newsmcp.domains.response_filter import set_projection_event_publisher
from newsmcp.errors import (
    InvalidParameterError,
    format_error_response,
    format_invalid_parameter,
    format_unknown_error,
)
from newsmcp.instructions import SERVER_INSTRUCTIONS
from newsmcp.resources import (
    EXAMPLES_CONTENT,
    EXAMPLES_URI,
    FIELDS_CONTENT,
    FIELDS_URI,
    GUIDE_CONTENT,
    GUIDE_URI,
)
from newsmcp.tools import ALL_TOOLS, TOOLS_BY_NAME, ApiPort, render_result
from newsmcp.tools.suggest import configure_suggest_cache

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(server: FastMCP) -> AsyncIterator[None]:
    """Hide opt-in tools on start; close the upstream HTTP client on shutdown."""
    await _get_toolset_manager()
    try:
        yield
    finally:
        await _close_client()


def _create_mcp_server() -> FastMCP:
    """Create and configure the FastMCP server with instructions."""
    return FastMCP(
        "NewsAPI MCP Server",
        instructions=SERVER_INSTRUCTIONS,
        lifespan=_lifespan,
    )


mcp = _create_mcp_server()

# Lazily created on first tool call so importing the module needs no key.
_client: Optional[ApiPort] = None
_toolset_manager: Optional[ToolsetManager] = None


def _get_client() -> ApiPort:
    global _client
    if _client is None:
        config = ServerConfig.from_env()
        if not config.api_key:
            raise ToolError(
                f"{ServerConfig.ENV_API_KEY} is not set. "
                "Get a key at https://newsapi.ai and export it before starting the server."
            )
        _client = NewsApiClient.from_config(config)
    return _client


async def _close_client() -> None:
    global _client
    if isinstance(_client, NewsApiClient):
        await _client.aclose()
        logger.debug("Closed upstream HTTP client")
        _client = None


def _log_toolset_event(event: Any) -> None:
    logger.info(f"Toolset event: {event.to_dict()}")


def _log_projection_event(event: Any) -> None:
    logger.info(f"Response projected: {event.to_dict()}")


set_projection_event_publisher(_log_projection_event)


async def _get_toolset_manager() -> ToolsetManager:
    """Build the toolset manager and hide opt-in tools (first call only)."""
    global _toolset_manager
    if _toolset_manager is None:
        adapter = ToolManagerAdapter(mcp)
        await adapter.initialize()
        toolset = Toolset.build(
            ((tool.name, ToolCategory.from_string(tool.category)) for tool in ALL_TOOLS),
            DEFAULT_CORE_POLICIES,
        )
        manager = ToolsetManager(adapter, toolset, event_publisher=_log_toolset_event)
        await manager.apply_initial_visibility()
        _toolset_manager = manager
    return _toolset_manager


async def _run_tool(name: str, params: Dict[str, Any]) -> List[TextContent]:
    """Run a tool handler and render its result for the caller.

    Upstream failures and rejected arguments are raised as ``ToolError``
    carrying recovery guidance, so the MCP result is flagged ``isError``.
    """
    tool = TOOLS_BY_NAME[name]
    try:
        result = await tool.handler(_get_client(), params)
    except ToolError:
        raise
    except ApiError as e:
        logger.warning(f"{name} failed: HTTP {e.status} ({e.category})")
        raise ToolError(format_error_response(e)) from e
    except httpx.HTTPError as e:
        logger.warning(f"{name} network failure: {e}")
        raise ToolError(format_error_response(ApiError.network(e))) from e
    except InvalidParameterError as e:
        logger.warning(f"{name} rejected: {e}")
        raise ToolError(format_invalid_parameter(e)) from e
    except Exception as e:
        logger.error(f"{name} failed unexpectedly: {e}", exc_info=True)
        raise ToolError(format_unknown_error(e)) from e
    return [
        TextContent(type="text", text=block)
        for block in render_result(result, params, tool.formatter)
    ]


# ============================================================
# Search: articles
# ============================================================


@mcp.tool
async def search_articles(
    keyword: OptionalCoercedStringList = None,
    conceptUri: OptionalCoercedStringList = None,
    categoryUri: OptionalCoercedStringList = None,
    sourceUri: OptionalCoercedStringList = None,
    sourceLocationUri: OptionalCoercedStringList = None,
    authorUri: OptionalCoercedStringList = None,
    locationUri: OptionalCoercedStringList = None,
    lang: OptionalCoercedStringList = None,
    dateStart: str | None = None,
    dateEnd: str | None = None,
    keywordLoc: KeywordLoc | None = None,
    keywordOper: KeywordOper | None = None,
    minSentiment: float | None = None,
    maxSentiment: float | None = None,
    startSourceRankPercentile: int | None = None,
    endSourceRankPercentile: int | None = None,
    forceMaxDataTimeWindow: int | None = None,
    isDuplicateFilter: IsDuplicateFilter | None = None,
    dataType: OptionalCoercedStringList = None,
    articlesPage: int | None = None,
    articlesCount: int | None = None,
    articlesSortBy: ArticlesSortBy | None = None,
    articlesSortByAsc: bool | None = None,
    articleBodyLen: int | None = None,
    query: CoercedQuery = None,
    includeFields: str | None = None,
    detailLevel: DetailLevel | None = None,
    format: OutputFormat | None = None,
) -> List[TextContent]:
    """Search news articles by keyword, concept, category, source, location, author or date.

    Resolve names to URIs with suggest first; keyword search is a fallback.
    Start with detailLevel "minimal" and paginate with articlesPage.

    Args:
        keyword: Phrase(s) to match. Comma-separated for multiple.
        conceptUri: Concept URI(s) from suggest (type "concepts").
        categoryUri: Category URI(s), e.g. "news/Business".
        sourceUri: Source URI(s), e.g. "bbc.com".
        sourceLocationUri: Location URI(s) where the source is based.
        authorUri: Author URI(s) from suggest (type "authors").
        locationUri: Location URI(s) mentioned in the article.
        lang: ISO 639-3 language code(s), e.g. "eng".
        dateStart: Start date inclusive (YYYY-MM-DD).
        dateEnd: End date inclusive (YYYY-MM-DD).
        keywordLoc: Where keywords must appear.
        keywordOper: "and" requires every keyword, "or" any.
        minSentiment: Minimum sentiment (-1 to 1).
        maxSentiment: Maximum sentiment (-1 to 1).
        startSourceRankPercentile: Min source rank percentile (0-100).
        endSourceRankPercentile: Max source rank percentile (0-100).
        forceMaxDataTimeWindow: Limit to the last 7 or 31 days.
        isDuplicateFilter: Duplicate handling.
        dataType: "news", "pr" and/or "blog".
        articlesPage: Page number (starting from 1).
        articlesCount: Articles per page (max 100).
        articlesSortBy: Sort order.
        articlesSortByAsc: Ascending sort order.
        articleBodyLen: Body characters to return (0 none, -1 full).
        query: Advanced query object (overrides simple filters).
        includeFields: Extra field groups, comma-separated (see newsapi://fields).
        detailLevel: Preset for counts and body length.
        format: "json" (default) or "text".
    """
    return await _run_tool("search_articles", dict(locals()))


@mcp.tool
async def get_article_details(
    articleUri: CoercedStringList,
    articleBodyLen: int | None = None,
    includeFields: str | None = None,
    format: OutputFormat | None = None,
) -> List[TextContent]:
    """Get full details for one or more articles by their URI(s).

    Args:
        articleUri: Article URI(s). Comma-separated for multiple.
        articleBodyLen: Body characters to return (default -1, full body).
        includeFields: Extra field groups, comma-separated.
        format: "json" (default) or "text".
    """
    return await _run_tool("get_article_details", dict(locals()))


@mcp.tool
async def stream_articles(
    keyword: OptionalCoercedStringList = None,
    conceptUri: OptionalCoercedStringList = None,
    categoryUri: OptionalCoercedStringList = None,
    sourceUri: OptionalCoercedStringList = None,
    sourceLocationUri: OptionalCoercedStringList = None,
    authorUri: OptionalCoercedStringList = None,
    locationUri: OptionalCoercedStringList = None,
    lang: OptionalCoercedStringList = None,
    recentActivityArticlesMaxArticleCount: int | None = None,
    recentActivityArticlesNewsUpdatesAfterUri: str | None = None,
    recentActivityArticlesUpdatesAfterMinsAgo: int | None = None,
) -> List[TextContent]:
    """Get recently published articles (real-time stream).

    Returns articles added in the last few minutes, up to 2000. Pass the
    last seen URI as recentActivityArticlesNewsUpdatesAfterUri to avoid
    duplicates between calls.
    """
    return await _run_tool("stream_articles", dict(locals()))


# ============================================================
# Search: events and mentions
# ============================================================


@mcp.tool
async def search_events(
    keyword: OptionalCoercedStringList = None,
    conceptUri: OptionalCoercedStringList = None,
    categoryUri: OptionalCoercedStringList = None,
    sourceUri: OptionalCoercedStringList = None,
    sourceLocationUri: OptionalCoercedStringList = None,
    authorUri: OptionalCoercedStringList = None,
    locationUri: OptionalCoercedStringList = None,
    lang: OptionalCoercedStringList = None,
    dateStart: str | None = None,
    dateEnd: str | None = None,
    keywordLoc: KeywordLoc | None = None,
    keywordOper: KeywordOper | None = None,
    minSentiment: float | None = None,
    maxSentiment: float | None = None,
    minArticlesInEvent: int | None = None,
    maxArticlesInEvent: int | None = None,
    reportingDateStart: str | None = None,
    reportingDateEnd: str | None = None,
    eventsPage: int | None = None,
    eventsCount: int | None = None,
    eventsSortBy: EventsSortBy | None = None,
    eventsSortByAsc: bool | None = None,
    query: CoercedQuery = None,
    includeFields: str | None = None,
    detailLevel: DetailLevel | None = None,
    format: OutputFormat | None = None,
) -> List[TextContent]:
    """Search events (clusters of related articles about the same real-world happening).

    Returns up to 50 events per call. Paginate with eventsPage.

    Args:
        minArticlesInEvent: Minimum number of articles in the event.
        maxArticlesInEvent: Maximum number of articles in the event.
        reportingDateStart: Earliest date an article reported on the event.
        reportingDateEnd: Latest date an article reported on the event.
        eventsPage: Page number (starting from 1).
        eventsCount: Events per page (max 50).
        includeFields: Extra field groups, comma-separated (see newsapi://fields).
        detailLevel: Preset for the event count.
        format: "json" (default) or "text".
    """
    return await _run_tool("search_events", dict(locals()))


@mcp.tool
async def get_event_details(
    eventUri: CoercedStringList,
    includeFields: str | None = None,
    format: OutputFormat | None = None,
) -> List[TextContent]:
    """Get full details for one or more events by their URI(s)."""
    return await _run_tool("get_event_details", dict(locals()))


@mcp.tool
async def find_event_for_text(
    text: str,
    includeFields: str | None = None,
    format: OutputFormat | None = None,
) -> List[TextContent]:
    """Match a text passage to a known event; returns the single most relevant event."""
    return await _run_tool("find_event_for_text", dict(locals()))


@mcp.tool
async def search_mentions(
    keyword: OptionalCoercedStringList = None,
    conceptUri: OptionalCoercedStringList = None,
    categoryUri: OptionalCoercedStringList = None,
    sourceUri: OptionalCoercedStringList = None,
    sourceLocationUri: OptionalCoercedStringList = None,
    authorUri: OptionalCoercedStringList = None,
    locationUri: OptionalCoercedStringList = None,
    lang: OptionalCoercedStringList = None,
    dateStart: str | None = None,
    dateEnd: str | None = None,
    eventTypeUri: OptionalCoercedStringList = None,
    industryUri: OptionalCoercedStringList = None,
    sdgUri: OptionalCoercedStringList = None,
    sasbUri: OptionalCoercedStringList = None,
    esgUri: OptionalCoercedStringList = None,
    factLevel: OptionalCoercedStringList = None,
    mentionsPage: int | None = None,
    mentionsCount: int | None = None,
    mentionsSortBy: str | None = None,
    includeFields: str | None = None,
) -> List[TextContent]:
    """Search sentence-level mentions of event types (e.g. acquisitions, layoffs).

    Args:
        eventTypeUri: Event type URI(s), e.g. "et/business/acquisitions-mergers".
        industryUri: Industry URI(s).
        sdgUri: Sustainable Development Goal URI(s).
        sasbUri: SASB category URI(s).
        esgUri: ESG category URI(s), e.g. "esg/environment".
        factLevel: "fact", "opinion" and/or "forecast".
        mentionsPage: Page number (starting from 1).
        mentionsCount: Mentions per page (max 100).
        mentionsSortBy: "date", "rel" or "sourceImportance".
        includeFields: Extra field groups, comma-separated.
    """
    return await _run_tool("search_mentions", dict(locals()))


# ============================================================
# Topic pages
# ============================================================


@mcp.tool
async def get_topic_page_articles(
    uri: str,
    articlesPage: int | None = None,
    articlesCount: int | None = None,
    articlesSortBy: ArticlesSortBy | None = None,
    articleBodyLen: int | None = None,
    includeFields: str | None = None,
    detailLevel: DetailLevel | None = None,
    format: OutputFormat | None = None,
) -> List[TextContent]:
    """Get articles matching a topic page saved on newsapi.ai."""
    return await _run_tool("get_topic_page_articles", dict(locals()))


@mcp.tool
async def get_topic_page_events(
    uri: str,
    eventsPage: int | None = None,
    eventsCount: int | None = None,
    eventsSortBy: EventsSortBy | None = None,
    includeFields: str | None = None,
    detailLevel: DetailLevel | None = None,
    format: OutputFormat | None = None,
) -> List[TextContent]:
    """Get events matching a topic page saved on newsapi.ai."""
    return await _run_tool("get_topic_page_events", dict(locals()))


# ============================================================
# Text analytics
# ============================================================


@mcp.tool
async def annotate_text(text: str) -> List[TextContent]:
    """Annotate text with Wikipedia-linked concepts (entity linking)."""
    return await _run_tool("annotate_text", dict(locals()))


@mcp.tool
async def categorize_text(text: str, taxonomy: Taxonomy | None = None) -> List[TextContent]:
    """Categorize text into a topic taxonomy ("dmoz", "news" or "iptc")."""
    return await _run_tool("categorize_text", dict(locals()))


@mcp.tool
async def analyze_sentiment(text: str) -> List[TextContent]:
    """Compute the sentiment of a text (-1 negative to 1 positive)."""
    return await _run_tool("analyze_sentiment", dict(locals()))


@mcp.tool
async def extract_article_info(url: str) -> List[TextContent]:
    """Extract title, body, date and authors from an article URL."""
    return await _run_tool("extract_article_info", dict(locals()))


@mcp.tool
async def detect_language(text: str) -> List[TextContent]:
    """Detect the language of a text."""
    return await _run_tool("detect_language", dict(locals()))


@mcp.tool
async def compute_semantic_similarity(text1: str, text2: str) -> List[TextContent]:
    """Compute semantic similarity between two texts (0 to 1)."""
    return await _run_tool("compute_semantic_similarity", dict(locals()))


# ============================================================
# Suggest and usage
# ============================================================


@mcp.tool
async def suggest(
    type: SuggestType,
    prefix: str,
    lang: str | None = None,
    format: OutputFormat | None = None,
) -> List[TextContent]:
    """Resolve a name to an entity URI for use in search filters.

    Types: concepts (people, organizations, places, things), categories,
    sources, locations, authors. Results are cached per prefix.

    Args:
        type: Entity type to look up.
        prefix: Name or name prefix, e.g. "Tesla".
        lang: Language of the prefix (default "eng").
        format: "json" (default) or "text".
    """
    return await _run_tool("suggest", dict(locals()))


@mcp.tool
async def get_api_usage(format: OutputFormat | None = None) -> List[TextContent]:
    """Get API token usage: tokens used and tokens available on the plan."""
    return await _run_tool("get_api_usage", dict(locals()))


# ============================================================
# Toolset meta tools
# ============================================================


@mcp.tool
async def list_available_tools() -> str:
    """List tool categories with their enabled and hidden tools.

    Use enable_toolset to reveal hidden tools of a category.
    """
    manager = await _get_toolset_manager()
    return json.dumps(manager.get_category_info(), indent=2)


@mcp.tool
async def enable_toolset(category: ToolCategoryName, enabled: bool = True) -> str:
    """Enable or disable an optional tool category.

    Args:
        category: One of search, suggest, topic_pages, usage, analytics.
        enabled: True to reveal the category's tools, False to hide its
            non-core tools.
    """
    manager = await _get_toolset_manager()
    try:
        return await manager.set_enabled(category, enabled)
    except (KeyError, ValueError) as e:
        raise ToolError(f"Cannot toggle '{category}': {e}") from e


# ============================================================
# Resources
# ============================================================


@mcp.resource(
    GUIDE_URI,
    name="guide",
    description="Comprehensive guide to using the NewsAPI MCP server",
    mime_type="text/plain",
)
def guide() -> str:
    return GUIDE_CONTENT


@mcp.resource(
    EXAMPLES_URI,
    name="examples",
    description="Example tool calls for common NewsAPI use cases",
    mime_type="text/plain",
)
def examples() -> str:
    return EXAMPLES_CONTENT


@mcp.resource(
    FIELDS_URI,
    name="fields",
    description="Reference for includeFields, detailLevel, and other params",
    mime_type="text/plain",
)
def fields() -> str:
    return FIELDS_CONTENT


# ============================================================
# Entry point
# ============================================================


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="NewsAPI MCP server entry point.")
    parser.add_argument(
        "--transport",
        dest="transport",
        choices=["stdio", "http", "sse"],
        help="Transport to use for the MCP server (default: stdio).",
    )
    parser.add_argument(
        "--host",
        dest="host",
        help="Host/interface for HTTP transport (default 127.0.0.1).",
    )
    parser.add_argument(
        "--port",
        dest="port",
        type=int,
        help="Port for HTTP transport (default 8000).",
    )
    parser.add_argument(
        "--path",
        dest="path",
        help="Path for HTTP/streamable endpoints (default '/').",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        help="Log level for the MCP server (e.g., INFO, DEBUG).",
    )
    return parser


def main(argv: List[str] | None = None) -> None:
    """Start the NewsAPI MCP server."""

    parser = _build_arg_parser()
    args = parser.parse_args(argv)

    config = ServerConfig.from_env()
    log_level = (args.log_level or config.log_level).upper()
    # stdout carries the stdio transport, so logs go to stderr
    logging.basicConfig(level=getattr(logging, log_level, logging.INFO), stream=sys.stderr)

    if not config.api_key:
        logger.error(
            f"{ServerConfig.ENV_API_KEY} environment variable is required. "
            "Get a key at https://newsapi.ai"
        )
        sys.exit(1)

    configure_suggest_cache(config.suggest_cache_size, config.suggest_cache_ttl_hours)

    try:
        run_kwargs = {}

        # Default to stdio when no transport is provided
        transport = args.transport or "stdio"
        run_kwargs["transport"] = transport

        if args.log_level:
            run_kwargs["log_level"] = args.log_level

        # Only pass host/port/path when using HTTP/SSE transports
        if transport != "stdio":
            if args.host:
                run_kwargs["host"] = args.host
            if args.port:
                run_kwargs["port"] = args.port
            if args.path:
                run_kwargs["path"] = args.path

        logger.info(f"Starting NewsAPI MCP server ({transport})")
        mcp.run(**run_kwargs)
    except KeyboardInterrupt:
        logger.info("NewsAPI MCP server interrupted by user")


if __name__ == "__main__":
    main()
