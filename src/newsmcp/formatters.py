"""Plain-text renderers for tool results (``format="text"``).

Every formatter takes the (already projected) upstream payload plus the
tool params and returns a string. Missing fields fall back to readable
placeholders instead of raising.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional

from newsmcp.domains.response_filter import flatten_multilingual

ENTRY_SEPARATOR = "\n\n---\n\n"

ResponseFormatter = Callable[[Any, Mapping[str, Any]], str]


def extract_label(item: Mapping[str, Any]) -> str:
    """Label of a suggest item: language map, plain string, title or name."""
    label = item.get("label")
    if isinstance(label, dict):
        return flatten_multilingual(label) or "Unknown"
    if isinstance(label, str):
        return label
    for key in ("title", "name"):
        if isinstance(item.get(key), str):
            return item[key]
    return "Unknown"


def _text(value: Any) -> str:
    if isinstance(value, dict):
        flattened = flatten_multilingual(value)
        return flattened if isinstance(flattened, str) else ""
    return value if isinstance(value, str) else ""


def _numbered(data: Any, render: Callable[[Dict[str, Any]], str]) -> str:
    if not isinstance(data, list) or not data:
        return "No results found."
    return "\n\n".join(
        f"{i}. {render(item if isinstance(item, dict) else {})}"
        for i, item in enumerate(data, start=1)
    )


# ── Suggest ──────────────────────────────────────────────────


def format_suggest_concepts(data: Any, params: Optional[Mapping[str, Any]] = None) -> str:
    return _numbered(
        data,
        lambda rec: f"{extract_label(rec)} [{rec.get('type') or 'concept'}]\n   {rec.get('uri') or ''}",
    )


def format_suggest_categories(data: Any, params: Optional[Mapping[str, Any]] = None) -> str:
    return _numbered(data, lambda rec: f"{extract_label(rec)}\n   {rec.get('uri') or ''}")


def format_suggest_sources(data: Any, params: Optional[Mapping[str, Any]] = None) -> str:
    return _numbered(
        data,
        lambda rec: (
            f"{rec.get('title') or 'Unknown'} [{rec.get('dataType') or 'news'}]\n"
            f"   {rec.get('uri') or ''}"
        ),
    )


def format_suggest_locations(data: Any, params: Optional[Mapping[str, Any]] = None) -> str:
    def render(rec: Dict[str, Any]) -> str:
        country = rec.get("country")
        country_str = f" - {extract_label(country)}" if isinstance(country, dict) else ""
        return (
            f"{extract_label(rec)} [{rec.get('type') or 'location'}]{country_str}\n"
            f"   {rec.get('wikiUri') or ''}"
        )

    return _numbered(data, render)


def format_suggest_authors(data: Any, params: Optional[Mapping[str, Any]] = None) -> str:
    def render(rec: Dict[str, Any]) -> str:
        source = rec.get("source")
        source_title = source.get("title") if isinstance(source, dict) else None
        source_str = f" ({source_title})" if source_title else ""
        return f"{rec.get('name') or 'Unknown'}{source_str}\n   {rec.get('uri') or ''}"

    return _numbered(data, render)


SUGGEST_FORMATTERS: Dict[str, ResponseFormatter] = {
    "concepts": format_suggest_concepts,
    "categories": format_suggest_categories,
    "sources": format_suggest_sources,
    "locations": format_suggest_locations,
    "authors": format_suggest_authors,
}


def format_suggest(data: Any, params: Mapping[str, Any]) -> str:
    formatter = SUGGEST_FORMATTERS.get(params.get("type") or "concepts", format_suggest_concepts)
    return formatter(data, params)


# ── Articles / events ────────────────────────────────────────


def _render_article(art: Mapping[str, Any], index: int) -> str:
    date_time = art.get("dateTimePub")
    date = date_time.split("T")[0] if isinstance(date_time, str) and date_time else "Unknown"
    source = art.get("source")
    source_title = (source.get("title") if isinstance(source, dict) else None) or "Unknown"
    url = f"\n   URL: {art['url']}" if art.get("url") else ""
    body = art.get("body") or ""
    title = _text(art.get("title")) or "Untitled"
    return f"{index}. [{date}] {title} - {source_title}{url}\n\n{body}"


def _render_event(evt: Mapping[str, Any], index: int) -> str:
    title = _text(evt.get("title")) or "Untitled"
    summary = _text(evt.get("summary"))
    counts = evt.get("articleCounts")
    count = (counts.get("total") if isinstance(counts, dict) else None) or 0
    return (
        f"{index}. [{evt.get('eventDate') or 'Unknown'}] {title} ({count} articles)\n"
        f"   URI: {evt.get('uri') or ''}\n\n{summary}"
    )


def _pagination_footer(wrapper: Mapping[str, Any], shown: int, page_param: str) -> str:
    parts = [f"{shown} results"]
    total = wrapper.get("totalResults")
    if total is not None:
        parts.append(f"({total} total)")
    pages = wrapper.get("pages")
    page = wrapper.get("page")
    if pages and page and pages > 1:
        parts.append(f"Page {page} of {pages}. Use {page_param}: {page + 1} for more.")
    return "---\n" + " ".join(parts)


def _format_results(
    data: Any,
    plural: str,
    render: Callable[[Mapping[str, Any], int], str],
    page_param: str,
) -> str:
    wrapper = data.get(plural) if isinstance(data, dict) else None
    results: Optional[List[Any]] = wrapper.get("results") if isinstance(wrapper, dict) else None
    if not results:
        return f"No {plural} found."
    lines = [
        render(item if isinstance(item, dict) else {}, i)
        for i, item in enumerate(results, start=1)
    ]
    lines.append(_pagination_footer(wrapper, len(results), page_param))
    return ENTRY_SEPARATOR.join(lines)


def _format_details(
    data: Any, noun: str, render: Callable[[Mapping[str, Any], int], str]
) -> str:
    if not isinstance(data, dict) or not data:
        return f"No {noun} details found."
    lines = []
    for i, value in enumerate(data.values(), start=1):
        if not isinstance(value, dict):
            lines.append(f"{i}. (unavailable)")
            continue
        info = value.get("info")
        lines.append(render(info if isinstance(info, dict) else value, i))
    return ENTRY_SEPARATOR.join(lines)


def format_article_results(data: Any, params: Optional[Mapping[str, Any]] = None) -> str:
    return _format_results(data, "articles", _render_article, "articlesPage")


def format_event_results(data: Any, params: Optional[Mapping[str, Any]] = None) -> str:
    return _format_results(data, "events", _render_event, "eventsPage")


def format_article_details(data: Any, params: Optional[Mapping[str, Any]] = None) -> str:
    return _format_details(data, "article", _render_article)


def format_event_details(data: Any, params: Optional[Mapping[str, Any]] = None) -> str:
    return _format_details(data, "event", _render_event)


# ── Usage ────────────────────────────────────────────────────


def format_usage_results(data: Any, params: Optional[Mapping[str, Any]] = None) -> str:
    usage = data if isinstance(data, dict) else {}
    used = usage.get("usedTokens") or 0
    available = usage.get("availableTokens") or 0
    return f"Tokens used: {used:,}\nTokens available: {available:,}"
