"""Article search, detail and stream handlers."""

from __future__ import annotations

from typing import Any, Mapping

from newsmcp.domains.response_filter import EntityKind, project_response
from newsmcp.domains.shared.kernel import parse_array
from newsmcp.formatters import format_article_details, format_article_results
from newsmcp.tools.base import ApiPort, ToolDefinition, ToolResult
from newsmcp.tools.params import (
    apply_detail_level,
    build_filter_body,
    filter_request,
    with_include_params,
)


async def search_articles(client: ApiPort, params: Mapping[str, Any]) -> ToolResult:
    params = apply_detail_level(params, "articlesCount", "articleBodyLen")
    request = filter_request(EntityKind.ARTICLES, params, params["articleBodyLen"])

    body = build_filter_body(params)
    body["resultType"] = "articles"
    if params.get("dataType"):
        body["dataType"] = parse_array(params["dataType"])
    with_include_params(body, request)

    result = await client.api_post("/article/getArticles", body)
    return ToolResult(
        project_response(result, request.kind, request.options), request.warnings
    )


async def get_article_details(client: ApiPort, params: Mapping[str, Any]) -> ToolResult:
    body_len = params.get("articleBodyLen")
    if body_len is None:
        body_len = -1
    request = filter_request(EntityKind.ARTICLES, params, body_len)

    body = {"articleUri": parse_array(params.get("articleUri")), "articleBodyLen": body_len}
    with_include_params(body, request)

    result = await client.api_post("/article/getArticle", body)
    return ToolResult(
        project_response(result, request.kind, request.options), request.warnings
    )


async def stream_articles(client: ApiPort, params: Mapping[str, Any]) -> ToolResult:
    body = build_filter_body(params)
    body["resultType"] = "recentActivityArticles"
    return ToolResult(await client.api_post("/minuteStreamArticles", body))


ARTICLE_TOOLS = (
    ToolDefinition("search_articles", "search", search_articles, format_article_results),
    ToolDefinition("get_article_details", "search", get_article_details, format_article_details),
    ToolDefinition("stream_articles", "search", stream_articles),
)
