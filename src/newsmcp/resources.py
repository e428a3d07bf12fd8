"""Static documentation exposed as MCP resources.

- ``newsapi://guide``: workflow and parameter guide
- ``newsapi://examples``: example tool calls
- ``newsapi://fields``: includeFields / detailLevel reference, generated
  from the field catalogs so it never drifts from the projection tables
"""

from __future__ import annotations

from typing import List

from newsmcp.domains.response_filter import CATALOGS, EntityKind, FieldGroup
from newsmcp.tools.params import DETAIL_PRESETS

GUIDE_URI = "newsapi://guide"
EXAMPLES_URI = "newsapi://examples"
FIELDS_URI = "newsapi://fields"

GUIDE_CONTENT = """# NewsAPI MCP Server Guide

This server provides access to Event Registry's global news database covering 150,000+ sources in 100+ languages.

## Entity URIs
NewsAPI identifies entities by URI. Raw text can be ambiguous, so resolve names with suggest first:

1. suggest({type: "concepts", prefix: "Apple Inc"})
2. Take the URI from the results, e.g. "http://en.wikipedia.org/wiki/Apple_Inc."
3. search_articles({conceptUri: "http://en.wikipedia.org/wiki/Apple_Inc."})

### Suggest types
- concepts: people, organizations, places, products ("Elon Musk", "Paris", "COVID-19")
- categories: news topics ("business", "technology"), URIs like "news/Technology"
- sources: outlets ("Reuters", "BBC")
- locations: for locationUri (mentioned) or sourceLocationUri (where the source is based)
- authors: journalist bylines

## Search tools
- search_articles: concept/category/source/location/author URIs, keyword, dateStart/dateEnd (YYYY-MM-DD), lang, minSentiment/maxSentiment
- search_events: clusters of related articles with summaries
- get_article_details / get_event_details: full records by URI
- search_mentions, stream_articles, find_event_for_text: opt-in via enable_toolset("search")

## Response control
- detailLevel presets: minimal, standard (default), full
- articleBodyLen: character limit for article bodies (0 drops the body, -1 keeps it whole)
- includeFields: extra field groups, see newsapi://fields
- format: "json" (default) or "text" for a compact readable rendering

## Error recovery
- Invalid parameter: check names and values; use suggest for valid URIs
- Rate limit (429): daily quota exceeded, tokens refresh the next day
- No results: try a broader concept, a keyword, wider dates or other languages"""

EXAMPLES_CONTENT = """# NewsAPI MCP Examples

## Recent AI news
suggest({type: "concepts", prefix: "artificial intelligence"})
search_articles({conceptUri: "<uri>", forceMaxDataTimeWindow: 7, lang: "eng", detailLevel: "minimal"})

## Positive news about Tesla
suggest({type: "concepts", prefix: "Tesla"})
search_articles({conceptUri: "<uri>", minSentiment: 0.3, includeFields: "sentiment"})

## Bitcoin news in January 2025
suggest({type: "concepts", prefix: "Bitcoin"})
search_articles({conceptUri: "<uri>", dateStart: "2025-01-01", dateEnd: "2025-01-31"})

## News from sources in Slovenia
suggest({type: "locations", prefix: "Slovenia"})
search_articles({sourceLocationUri: "<uri>", detailLevel: "minimal"})

## Event details with entities
get_event_details({eventUri: "eng-1234567", includeFields: "concepts,categories"})

## Topic page monitoring
enable_toolset({category: "topic_pages"})
get_topic_page_articles({uri: "<topic-page-uri>", detailLevel: "minimal"})

## Check API quota
get_api_usage({})"""


def render_fields_reference() -> str:
    """Build the includeFields / detailLevel reference from the catalogs."""
    kinds = list(EntityKind)
    header = "| Group | " + " | ".join(k.value for k in kinds) + " |"
    lines: List[str] = [
        "# NewsAPI Fields Reference",
        "",
        "## includeFields groups",
        "",
        "Comma-separated, case-insensitive. Unknown names are ignored with a warning.",
        "",
        header,
        "|" + "---|" * (len(kinds) + 1),
    ]
    for group in FieldGroup:
        if group is FieldGroup.FULL:
            continue
        cells = [", ".join(CATALOGS[k].group_fields.get(group, ())) or "-" for k in kinds]
        lines.append(f"| {group.value} | " + " | ".join(cells) + " |")
    lines.append("| full | " + " | ".join("all fields, raw shape" for _ in kinds) + " |")
    lines += ["", "## Always returned", ""]
    for kind in kinds:
        lines.append(f"- {kind.value}: {', '.join(CATALOGS[kind].minimal_fields)}")
    lines += [
        "",
        "Without `location`, source objects are reduced to title and uri.",
        "Without `metadata`, event articleCounts is reduced to the total.",
        "",
        "## detailLevel presets",
        "",
        "| Level | articlesCount | eventsCount | articleBodyLen |",
        "|---|---|---|---|",
    ]
    for name, preset in DETAIL_PRESETS.items():
        body = "full" if preset.article_body_len < 0 else f"{preset.article_body_len} chars"
        lines.append(f"| {name} | {preset.articles_count} | {preset.events_count} | {body} |")
    lines += ["", "Explicit articlesCount, eventsCount and articleBodyLen override presets."]
    return "\n".join(lines)


FIELDS_CONTENT = render_fields_reference()
