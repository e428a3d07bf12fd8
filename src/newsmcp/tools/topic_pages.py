"""Topic page handlers.

Topic pages are saved search profiles created on newsapi.ai; only the
page URI and paging/sorting params are sent.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping

from newsmcp.domains.response_filter import EntityKind, project_response
from newsmcp.formatters import format_article_results, format_event_results
from newsmcp.tools.base import ApiPort, ToolDefinition, ToolResult
from newsmcp.tools.params import apply_detail_level, filter_request, with_include_params


def _copy_present(body: Dict[str, Any], params: Mapping[str, Any], *names: str) -> None:
    for name in names:
        if params.get(name) is not None:
            body[name] = params[name]


async def get_topic_page_articles(client: ApiPort, params: Mapping[str, Any]) -> ToolResult:
    params = apply_detail_level(params, "articlesCount", "articleBodyLen")
    request = filter_request(EntityKind.ARTICLES, params, params["articleBodyLen"])

    body: Dict[str, Any] = {"uri": params.get("uri"), "resultType": "articles"}
    _copy_present(
        body, params, "articlesPage", "articlesCount", "articlesSortBy", "articleBodyLen"
    )
    with_include_params(body, request)

    result = await client.api_post("/article/getArticlesForTopicPage", body)
    return ToolResult(
        project_response(result, request.kind, request.options), request.warnings
    )


async def get_topic_page_events(client: ApiPort, params: Mapping[str, Any]) -> ToolResult:
    params = apply_detail_level(params, "eventsCount")
    request = filter_request(EntityKind.EVENTS, params)

    body: Dict[str, Any] = {"uri": params.get("uri"), "resultType": "events"}
    _copy_present(body, params, "eventsPage", "eventsCount", "eventsSortBy")
    with_include_params(body, request)

    result = await client.api_post("/event/getEventsForTopicPage", body)
    return ToolResult(
        project_response(result, request.kind, request.options), request.warnings
    )


TOPIC_PAGE_TOOLS = (
    ToolDefinition(
        "get_topic_page_articles", "topic_pages", get_topic_page_articles,
        format_article_results,
    ),
    ToolDefinition(
        "get_topic_page_events", "topic_pages", get_topic_page_events,
        format_event_results,
    ),
)
