"""Unit tests for plain-text result formatters (``format="text"``).

Run with: uv run pytest tests/unit/test_formatters.py -v
"""

__test__ = True

from newsmcp.formatters import (
    extract_label,
    format_article_details,
    format_article_results,
    format_event_details,
    format_event_results,
    format_suggest,
    format_suggest_authors,
    format_suggest_locations,
    format_suggest_sources,
    format_usage_results,
)


# =============================================================================
# Suggest
# =============================================================================


class TestSuggestFormatters:
    """Test suggest result rendering."""

    def test_extract_label_variants(self):
        assert extract_label({"label": {"eng": "Tesla"}}) == "Tesla"
        assert extract_label({"label": "Plain"}) == "Plain"
        assert extract_label({"title": "BBC"}) == "BBC"
        assert extract_label({"name": "Jane"}) == "Jane"
        assert extract_label({}) == "Unknown"

    def test_concepts(self):
        data = [{"label": {"eng": "Tesla, Inc."}, "type": "org", "uri": "http://en.wikipedia.org/wiki/Tesla,_Inc."}]
        text = format_suggest(data, {"type": "concepts"})
        assert text == "1. Tesla, Inc. [org]\n   http://en.wikipedia.org/wiki/Tesla,_Inc."

    def test_categories_dispatch(self):
        text = format_suggest([{"label": "news/Business", "uri": "news/Business"}], {"type": "categories"})
        assert text == "1. news/Business\n   news/Business"

    def test_sources(self):
        text = format_suggest_sources([{"title": "BBC", "uri": "bbc.com"}])
        assert text == "1. BBC [news]\n   bbc.com"

    def test_locations_with_country(self):
        data = [{
            "label": {"eng": "Paris"},
            "type": "place",
            "country": {"label": {"eng": "France"}},
            "wikiUri": "http://en.wikipedia.org/wiki/Paris",
        }]
        assert format_suggest_locations(data) == (
            "1. Paris [place] - France\n   http://en.wikipedia.org/wiki/Paris"
        )

    def test_authors_with_source(self):
        data = [{"name": "Jane Doe", "uri": "jane@bbc", "source": {"title": "BBC"}}]
        assert format_suggest_authors(data) == "1. Jane Doe (BBC)\n   jane@bbc"

    def test_empty(self):
        assert format_suggest([], {"type": "concepts"}) == "No results found."
        assert format_suggest(None, {"type": "sources"}) == "No results found."


# =============================================================================
# Articles / events
# =============================================================================


class TestResultFormatters:
    """Test search result rendering."""

    def test_article_results_with_pagination(self):
        data = {
            "articles": {
                "results": [{
                    "dateTimePub": "2024-05-01T10:00:00Z",
                    "title": "Headline",
                    "source": {"title": "Reuters"},
                    "url": "https://r.com/1",
                    "body": "Text",
                }],
                "totalResults": 42,
                "page": 1,
                "pages": 5,
            }
        }
        text = format_article_results(data)
        assert text.startswith("1. [2024-05-01] Headline - Reuters\n   URL: https://r.com/1\n\nText")
        assert text.endswith("---\n1 results (42 total) Page 1 of 5. Use articlesPage: 2 for more.")

    def test_article_placeholders(self):
        text = format_article_results({"articles": {"results": [{}]}})
        assert text.startswith("1. [Unknown] Untitled - Unknown")

    def test_no_articles(self):
        assert format_article_results({}) == "No articles found."
        assert format_article_results({"articles": {"results": []}}) == "No articles found."

    def test_event_results(self):
        data = {
            "events": {
                "results": [{
                    "uri": "eng-1",
                    "eventDate": "2024-01-02",
                    "title": {"eng": "Summit"},
                    "summary": "Leaders met.",
                    "articleCounts": {"total": 7},
                }],
                "totalResults": 1,
            }
        }
        text = format_event_results(data)
        assert "1. [2024-01-02] Summit (7 articles)\n   URI: eng-1\n\nLeaders met." in text
        assert text.endswith("---\n1 results (1 total)")

    def test_no_events(self):
        assert format_event_results(None) == "No events found."


class TestDetailFormatters:
    """Test detail-map rendering."""

    def test_article_details(self):
        data = {"a1": {"info": {"title": "T", "dateTimePub": "2024-01-01T00:00:00Z"}}, "a2": None}
        text = format_article_details(data)
        assert text.startswith("1. [2024-01-01] T - Unknown")
        assert text.endswith("2. (unavailable)")

    def test_event_details_without_info(self):
        text = format_event_details({"e1": {"title": "Raw", "uri": "e1"}})
        assert text.startswith("1. [Unknown] Raw (0 articles)")

    def test_empty_details(self):
        assert format_article_details({}) == "No article details found."
        assert format_event_details("x") == "No event details found."


# =============================================================================
# Usage
# =============================================================================


class TestUsageFormatter:
    """Test token usage rendering."""

    def test_usage(self):
        text = format_usage_results({"usedTokens": 12345, "availableTokens": 50000})
        assert text == "Tokens used: 12,345\nTokens available: 50,000"

    def test_usage_missing(self):
        assert format_usage_results(None) == "Tokens used: 0\nTokens available: 0"
