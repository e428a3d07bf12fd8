"""Text analytics handlers (analytics API host)."""

from __future__ import annotations

from typing import Any, Mapping

from newsmcp.tools.base import ApiPort, ToolDefinition, ToolResult


async def annotate_text(client: ApiPort, params: Mapping[str, Any]) -> ToolResult:
    return ToolResult(await client.analytics_post("/annotate", {"text": params.get("text")}))


async def categorize_text(client: ApiPort, params: Mapping[str, Any]) -> ToolResult:
    body = {"text": params.get("text"), "taxonomy": params.get("taxonomy")}
    return ToolResult(await client.analytics_post("/categorize", body))


async def analyze_sentiment(client: ApiPort, params: Mapping[str, Any]) -> ToolResult:
    return ToolResult(await client.analytics_post("/sentiment", {"text": params.get("text")}))


async def extract_article_info(client: ApiPort, params: Mapping[str, Any]) -> ToolResult:
    return ToolResult(
        await client.analytics_post("/extractArticleInfo", {"url": params.get("url")})
    )


async def detect_language(client: ApiPort, params: Mapping[str, Any]) -> ToolResult:
    return ToolResult(
        await client.analytics_post("/detectLanguage", {"text": params.get("text")})
    )


async def compute_semantic_similarity(
    client: ApiPort, params: Mapping[str, Any]
) -> ToolResult:
    body = {"text1": params.get("text1"), "text2": params.get("text2")}
    return ToolResult(await client.analytics_post("/semanticSimilarity", body))


ANALYTICS_TOOLS = (
    ToolDefinition("annotate_text", "analytics", annotate_text),
    ToolDefinition("categorize_text", "analytics", categorize_text),
    ToolDefinition("analyze_sentiment", "analytics", analyze_sentiment),
    ToolDefinition("extract_article_info", "analytics", extract_article_info),
    ToolDefinition("detect_language", "analytics", detect_language),
    ToolDefinition("compute_semantic_similarity", "analytics", compute_semantic_similarity),
)
