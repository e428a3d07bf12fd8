"""Server-level instructions sent to MCP clients on initialize."""

SERVER_INSTRUCTIONS = """NewsAPI MCP server provides access to Event Registry's global news database: articles, events (clusters of articles about one happening), entity lookup and topic pages.

## Critical Workflow: suggest -> search
ALWAYS resolve entity names to URIs before searching:
1. suggest({type: "concepts", prefix: "Tesla"}) -> get conceptUri
2. search_articles({conceptUri: "<uri>"}) -> search with URI

Keyword search is a fallback, not the primary method.

## Retrieval Strategy
Results must fit in your context window. Start small, then paginate.
- Use detailLevel "minimal" (5 results, 200-char bodies) or "standard" (10 results) first
- Set articleBodyLen: 200 if you only need headlines, 0 for titles only
- Add includeFields (e.g. "sentiment,concepts") only for data you will use
- Paginate with articlesPage / eventsPage for more results
- Use detailLevel "full" only for comprehensive historical analysis

## Keyword Usage
- Each keyword value is matched as an exact phrase
- Comma-separate individual terms: keyword: "SaaS, acquisition, merger"
- keywordOper: "and" (default) requires all terms, "or" matches any

## Concept Selection
Concepts map to Wikipedia pages. Prefer broad, well-established concepts ("FIFA World Cup", not "2026 FIFA World Cup"); combine a broad concept with a keyword for precision.

## Optional Toolsets
Only core tools are exposed initially. Call list_available_tools to see categories and enable_toolset(category) to add more (mentions, real-time stream, text matching, topic pages, text analytics).

## Usage Tracking
Call get_api_usage before and after a task and report the exact token difference.

For detailed documentation, read the newsapi://guide resource."""
