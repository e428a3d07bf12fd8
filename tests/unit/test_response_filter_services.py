"""Unit tests for Response Filter domain services.

Tests cover: UpstreamHintBuilder, EntityProjector (per-kind pruning,
post-processing, body-length law), ResponseProjector (search wrappers,
detail maps, passthrough, events), catalog exhaustiveness.

Run with: uv run pytest tests/unit/test_response_filter_services.py -v
"""

__test__ = True

import copy

import pytest

from newsmcp.domains.response_filter import (
    CATALOGS,
    EntityKind,
    EntityProjector,
    FieldGroup,
    FieldGroupSet,
    FilterOptions,
    ResponseProjected,
    ResponseProjector,
    UpstreamHintBuilder,
    apply_body_length,
    build_include_params,
    flatten_multilingual,
    project_entity,
    project_response,
    set_projection_event_publisher,
)
from newsmcp.domains.response_filter import services as projection_services


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def raw_article():
    return {
        "uri": "a1",
        "title": "T",
        "body": "0123456789",
        "dateTimePub": "2024-01-01T00:00:00Z",
        "source": {"title": "S", "uri": "s.com", "location": {"country": "US"}},
        "sentiment": 0.5,
        "wgt": 9,
    }


@pytest.fixture
def raw_event():
    return {
        "uri": "eng-1",
        "title": {"eng": "Summit", "deu": "Gipfel"},
        "summary": {"deu": "Zusammenfassung"},
        "eventDate": "2024-02-02",
        "articleCounts": {"total": 50, "eng": 30, "deu": 20},
        "concepts": [
            {"uri": "c1", "label": {"eng": "Paris"}, "type": "loc", "score": 5},
        ],
        "images": ["i1.jpg"],
        "wgt": 3,
        "socialScore": 12,
    }


def opts(include=None, body_length=None):
    return FilterOptions.from_params(include, body_length)


# =============================================================================
# UpstreamHintBuilder
# =============================================================================


class TestUpstreamHintBuilder:
    """Test include* flag derivation."""

    def test_empty_article_groups_send_nothing(self):
        assert build_include_params(EntityKind.ARTICLES, FieldGroupSet.empty()) == {}

    def test_events_always_request_summary(self):
        assert build_include_params(EntityKind.EVENTS, FieldGroupSet.empty()) == {
            "includeEventSummary": True,
        }

    def test_location_maps_to_two_article_flags(self):
        params = build_include_params(EntityKind.ARTICLES, FieldGroupSet.of("location"))
        assert params == {"includeArticleLocation": True, "includeSourceLocation": True}

    def test_social_flag_for_articles_and_events(self):
        groups = FieldGroupSet.of("social")
        assert build_include_params(EntityKind.ARTICLES, groups) == {
            "includeArticleSocialScore": True,
        }
        assert build_include_params(EntityKind.EVENTS, groups)["includeEventSocialScore"]

    def test_mention_location_flag(self):
        params = build_include_params(EntityKind.MENTIONS, FieldGroupSet.of("location"))
        assert params == {"includeMentionSourceLocation": True}

    def test_unmapped_group_is_noop(self):
        # metadata is projection-only, event has no flag for mentions
        groups = FieldGroupSet.of("metadata", "event")
        assert build_include_params(EntityKind.MENTIONS, groups) == {}
        assert build_include_params(EntityKind.ARTICLES, groups) == {}

    def test_full_enables_every_flag_of_kind(self):
        params = UpstreamHintBuilder().build(EntityKind.ARTICLES, FieldGroupSet.of("full"))
        assert set(params) == set(CATALOGS[EntityKind.ARTICLES].all_flags())
        assert all(value is True for value in params.values())

    def test_full_events_keeps_summary_flag(self):
        params = build_include_params(EntityKind.EVENTS, FieldGroupSet.of("full"))
        assert params["includeEventSummary"] is True
        assert params["includeEventImages"] is True

    def test_only_true_values(self):
        groups = FieldGroupSet.of("sentiment", "concepts", "images")
        for kind in EntityKind:
            assert all(v is True for v in build_include_params(kind, groups).values())


# =============================================================================
# EntityProjector: articles
# =============================================================================


class TestArticleProjection:
    """Test article pruning and source trimming."""

    def test_minimal_projection_scenario(self, raw_article):
        projected = project_entity(raw_article, EntityKind.ARTICLES, opts(None, 4))
        assert projected == {
            "uri": "a1",
            "title": "T",
            "body": "0123",
            "dateTimePub": "2024-01-01T00:00:00Z",
            "source": {"title": "S", "uri": "s.com"},
        }

    def test_sentiment_and_location_keep_source(self, raw_article):
        raw = dict(raw_article, location={"label": "Boston"})
        projected = project_entity(raw, EntityKind.ARTICLES, opts("sentiment,location", -1))
        assert projected["body"] == "0123456789"
        assert projected["sentiment"] == 0.5
        assert projected["source"] == raw_article["source"]
        assert projected["location"] == {"label": "Boston"}
        assert "wgt" not in projected

    def test_metadata_keeps_wgt(self, raw_article):
        projected = project_entity(raw_article, EntityKind.ARTICLES, opts("metadata"))
        assert projected["wgt"] == 9

    def test_absent_fields_are_not_invented(self):
        projected = project_entity({"uri": "a2"}, EntityKind.ARTICLES, opts("sentiment"))
        assert projected == {"uri": "a2"}

    def test_non_dict_source_untouched(self):
        raw = {"uri": "a3", "source": "s.com"}
        assert project_entity(raw, EntityKind.ARTICLES, opts())["source"] == "s.com"

    def test_nested_lists_trimmed(self):
        raw = {
            "uri": "a4",
            "concepts": [{"uri": "c", "label": {"eng": "X"}, "type": "org", "score": 3}],
            "authors": [{"uri": "au", "name": "N", "isAgency": False}],
        }
        projected = project_entity(raw, EntityKind.ARTICLES, opts("concepts,authors"))
        assert projected["concepts"] == [{"uri": "c", "label": "X", "type": "org"}]
        assert projected["authors"] == [{"uri": "au", "name": "N"}]

    def test_non_dict_list_elements_kept(self):
        raw = {"uri": "a5", "categories": ["news/Business"]}
        projected = project_entity(raw, EntityKind.ARTICLES, opts("categories"))
        assert projected["categories"] == ["news/Business"]

    def test_input_not_mutated(self, raw_article):
        before = copy.deepcopy(raw_article)
        project_entity(raw_article, EntityKind.ARTICLES, opts(None, 0))
        assert raw_article == before


# =============================================================================
# EntityProjector: full mode
# =============================================================================


class TestFullProjection:
    """Test the full superset sentinel."""

    def test_full_keeps_raw_shape(self, raw_event):
        projected = project_entity(raw_event, EntityKind.EVENTS, opts("full"))
        assert projected == raw_event
        assert projected is not raw_event

    def test_full_still_applies_article_body_limit(self, raw_article):
        projected = project_entity(raw_article, EntityKind.ARTICLES, opts("full", 3))
        assert projected["body"] == "012"
        assert projected["wgt"] == 9

    @pytest.mark.parametrize(
        "include", [None, "sentiment", "metadata,location", "concepts,images,social"]
    )
    def test_full_is_superset(self, raw_article, raw_event, include):
        for raw, kind in ((raw_article, EntityKind.ARTICLES), (raw_event, EntityKind.EVENTS)):
            full_keys = set(project_entity(raw, kind, opts("full")))
            partial_keys = set(project_entity(raw, kind, opts(include)))
            assert partial_keys <= full_keys


# =============================================================================
# EntityProjector: events and mentions
# =============================================================================


class TestEventProjection:
    """Test event-specific flattening and articleCounts handling."""

    def test_article_counts_collapse_to_total(self, raw_event):
        projected = project_entity(raw_event, EntityKind.EVENTS, opts())
        assert projected["articleCounts"] == {"total": 50}

    def test_metadata_keeps_article_count_breakdown(self, raw_event):
        projected = project_entity(raw_event, EntityKind.EVENTS, opts("metadata"))
        assert projected["articleCounts"] == {"total": 50, "eng": 30, "deu": 20}
        assert projected["wgt"] == 3

    def test_article_counts_without_total(self):
        raw = {"uri": "e", "articleCounts": {"eng": 3}}
        assert project_entity(raw, EntityKind.EVENTS, opts())["articleCounts"] == {}

    def test_multilingual_title_and_summary_flattened(self, raw_event):
        projected = project_entity(raw_event, EntityKind.EVENTS, opts())
        assert projected["title"] == "Summit"
        assert projected["summary"] == "Zusammenfassung"

    def test_event_concepts_trimmed_and_images_kept(self, raw_event):
        projected = project_entity(raw_event, EntityKind.EVENTS, opts("concepts,images"))
        assert projected["concepts"] == [{"uri": "c1", "label": "Paris", "type": "loc"}]
        assert projected["images"] == ["i1.jpg"]

    def test_event_body_never_truncated(self):
        raw = {"uri": "e", "body": "long text"}
        projected = project_entity(raw, EntityKind.EVENTS, opts("full", 2))
        assert projected["body"] == "long text"


class TestMentionProjection:
    """Test mention minimal fields and groups."""

    def test_minimal_mention(self):
        raw = {
            "uri": "m1",
            "sentence": "Acme acquired Foo.",
            "date": "2024-03-03",
            "source": {"title": "S", "uri": "s.com", "location": {"label": "X"}},
            "eventTypeUri": "et/acq",
            "sentiment": -0.2,
        }
        projected = project_entity(raw, EntityKind.MENTIONS, opts())
        assert projected == {
            "uri": "m1",
            "sentence": "Acme acquired Foo.",
            "date": "2024-03-03",
            "source": {"title": "S", "uri": "s.com"},
        }

    def test_mention_metadata(self):
        raw = {"uri": "m2", "eventTypeUri": "et/acq", "factLevel": "fact"}
        projected = project_entity(raw, EntityKind.MENTIONS, opts("metadata"))
        assert projected == raw


# =============================================================================
# Body-length law
# =============================================================================


class TestBodyLength:
    """Test the article body policy."""

    BODY = "abcdefghij"

    @pytest.mark.parametrize(
        "limit,expected",
        [
            (None, 10),
            (-1, 10),
            (-50, 10),
            (3, 3),
            (9, 9),
            (10, 10),
            (25, 10),
        ],
    )
    def test_resulting_length(self, limit, expected):
        record = {"body": self.BODY}
        apply_body_length(record, limit)
        assert len(record["body"]) == expected
        assert self.BODY.startswith(record["body"])

    def test_zero_removes_body(self):
        record = {"uri": "x", "body": self.BODY}
        apply_body_length(record, 0)
        assert record == {"uri": "x"}

    def test_missing_or_non_string_body(self):
        record = {"uri": "x"}
        apply_body_length(record, 3)
        assert record == {"uri": "x"}
        record = {"body": None}
        apply_body_length(record, 3)
        assert record == {"body": None}


# =============================================================================
# flatten_multilingual
# =============================================================================


class TestFlattenMultilingual:
    """Test language-map collapsing."""

    def test_prefers_english(self):
        assert flatten_multilingual({"deu": "Hallo", "eng": "Hello"}) == "Hello"

    def test_falls_back_to_first(self):
        assert flatten_multilingual({"deu": "Hallo", "fra": "Bonjour"}) == "Hallo"

    def test_empty_map(self):
        assert flatten_multilingual({}) == ""

    def test_plain_value_passes_through(self):
        assert flatten_multilingual("Hi") == "Hi"


# =============================================================================
# ResponseProjector
# =============================================================================


class TestResponseProjectorWrapper:
    """Test paginated search wrapper handling."""

    def test_pagination_preserved(self, raw_article):
        response = {
            "articles": {
                "results": [raw_article, raw_article],
                "totalResults": 120,
                "page": 2,
                "count": 2,
                "pages": 60,
            }
        }
        for include in (None, "sentiment", "metadata,location"):
            projected = project_response(response, EntityKind.ARTICLES, opts(include))
            wrapper = projected["articles"]
            assert {k: wrapper[k] for k in ("totalResults", "page", "count", "pages")} == {
                "totalResults": 120, "page": 2, "count": 2, "pages": 60,
            }
            assert len(wrapper["results"]) == 2

    def test_results_projected(self, raw_article):
        response = {"articles": {"results": [raw_article], "totalResults": 1}}
        projected = project_response(response, EntityKind.ARTICLES, opts())
        assert "sentiment" not in projected["articles"]["results"][0]

    def test_other_wrapper_keys_dropped(self, raw_article):
        response = {"articles": {"results": [raw_article], "debug": {"x": 1}}}
        projected = project_response(response, EntityKind.ARTICLES, opts())
        assert set(projected["articles"]) == {"results"}

    def test_sibling_keys_preserved(self, raw_event):
        response = {"events": {"results": [raw_event]}, "info": "ok"}
        projected = project_response(response, EntityKind.EVENTS, opts())
        assert projected["info"] == "ok"

    def test_non_dict_results_kept(self):
        response = {"articles": {"results": ["a", 3]}}
        projected = project_response(response, EntityKind.ARTICLES, opts())
        assert projected["articles"]["results"] == ["a", 3]

    def test_wrapper_without_results_list_unchanged(self):
        response = {"articles": {"results": "oops", "page": 1}}
        assert project_response(response, EntityKind.ARTICLES, opts()) is response

    def test_event_wrapper_collapses_counts(self, raw_event):
        response = {"events": {"results": [raw_event]}}
        projected = project_response(response, EntityKind.EVENTS, opts())
        assert projected["events"]["results"][0]["articleCounts"] == {"total": 50}


class TestResponseProjectorDetailMap:
    """Test URI-keyed detail lookups."""

    def test_detail_map_scenario(self):
        response = {"u1": {"info": {"title": "X", "body": "Y"}}, "u2": {"other": "Z"}}
        projected = project_response(response, EntityKind.ARTICLES, opts())
        assert projected["u1"]["info"] == {"title": "X", "body": "Y"}
        assert projected["u2"] is response["u2"]

    def test_detail_map_projects_info(self, raw_article):
        response = {"a1": {"info": raw_article, "extra": 1}}
        projected = project_response(response, EntityKind.ARTICLES, opts(None, 2))
        assert projected["a1"]["info"]["body"] == "01"
        assert "wgt" not in projected["a1"]["info"]
        assert projected["a1"]["extra"] == 1

    def test_non_dict_entries_kept(self):
        response = {"error": "not found"}
        assert project_response(response, EntityKind.EVENTS, opts()) == response


class TestResponseProjectorPassthrough:
    """Test inputs returned unchanged."""

    @pytest.mark.parametrize("response", [None, "text", 42, ["a"]])
    def test_non_dict_returned_as_is(self, response):
        assert project_response(response, EntityKind.ARTICLES, opts()) is response

    def test_full_without_limit_is_identity(self, raw_article):
        response = {"articles": {"results": [raw_article]}}
        assert project_response(response, EntityKind.ARTICLES, opts("full")) is response

    def test_full_with_limit_truncates_only_body(self, raw_article):
        response = {"articles": {"results": [raw_article], "page": 1}}
        projected = project_response(response, EntityKind.ARTICLES, opts("full", 5))
        item = projected["articles"]["results"][0]
        assert item["body"] == "01234"
        assert item["source"] == raw_article["source"]
        assert raw_article["body"] == "0123456789"

    def test_reprojection_is_idempotent(self, raw_article):
        response = {"articles": {"results": [raw_article]}}
        once = project_response(response, EntityKind.ARTICLES, opts())
        twice = project_response(once, EntityKind.ARTICLES, opts())
        assert once == twice


class TestResponseProjectorEvents:
    """Test ResponseProjected publication."""

    def test_event_published(self, raw_article):
        events = []
        projector = ResponseProjector(EntityProjector(), event_publisher=events.append)
        response = {"articles": {"results": [raw_article, raw_article]}}
        projector.project(response, EntityKind.ARTICLES, opts("sentiment", 4))

        assert len(events) == 1
        event = events[0]
        assert isinstance(event, ResponseProjected)
        assert event.entity_kind == "articles"
        assert event.groups == ("sentiment",)
        assert event.record_count == 2
        assert event.body_length == 4
        assert event.projected_tokens < event.raw_tokens
        assert event.tokens_saved == event.raw_tokens - event.projected_tokens
        assert event.to_dict()["event_type"] == "ResponseProjected"

    def test_no_event_for_passthrough(self, raw_article):
        events = []
        projector = ResponseProjector(event_publisher=events.append)
        projector.project({"articles": {"results": [raw_article]}}, EntityKind.ARTICLES, opts("full"))
        assert events == []

    def test_publisher_failure_is_logged_not_raised(self, raw_article, caplog):
        def boom(event):
            raise RuntimeError("sink down")

        projector = ResponseProjector(event_publisher=boom)
        result = projector.project({"a1": {"info": raw_article}}, EntityKind.ARTICLES, opts())
        assert "a1" in result
        assert "Failed to publish event" in caplog.text

    def test_module_level_publisher(self, raw_article):
        events = []
        previous = projection_services._response_projector.event_publisher
        set_projection_event_publisher(events.append)
        try:
            project_response({"articles": {"results": [raw_article]}}, EntityKind.ARTICLES, opts())
        finally:
            set_projection_event_publisher(previous)

        assert [e.record_count for e in events] == [1]
        assert projection_services._response_projector.event_publisher is previous


# =============================================================================
# Catalogs
# =============================================================================


class TestCatalogs:
    """Test per-kind table coverage."""

    def test_every_kind_has_catalog(self):
        assert set(CATALOGS) == set(EntityKind)

    def test_full_never_maps_to_fields(self):
        for catalog in CATALOGS.values():
            assert FieldGroup.FULL not in catalog.group_fields

    def test_body_truncation_only_for_articles(self):
        assert [k for k, c in CATALOGS.items() if c.truncates_body] == [EntityKind.ARTICLES]
