"""Tests for smart suggestions, placeholder text and suggestion icons."""

import pytest

from commglass.engine.models import ContentType, DateRange, Platform, Priority, SearchFilterState
from commglass.engine.suggestions import (
    DEFAULT_PLACEHOLDER, icon_for_suggestion, smart_placeholder, smart_suggestions,
)


def state(**kwargs) -> SearchFilterState:
    for key in ("selected_priorities", "selected_platforms", "selected_content_types"):
        if key in kwargs:
            kwargs[key] = frozenset(kwargs[key])
    return SearchFilterState(**kwargs)


class TestSmartSuggestions:
    """Order is unspecified, so only membership and size are checked."""

    def test_no_facets_no_suggestions(self):
        assert smart_suggestions(state()) == []

    def test_single_priority(self):
        result = smart_suggestions(state(selected_priorities={Priority.HIGH}))
        assert set(result) == {"Critical Issues", "Urgent Reviews", "Immediate Actions"}

    def test_shared_platform_phrases_deduplicated(self):
        result = smart_suggestions(state(selected_platforms={Platform.GMAIL, Platform.OUTLOOK}))
        assert sorted(result) == sorted(["Email Thread", "Stakeholder Update", "External Communication"])

    def test_platform_without_phrases(self):
        assert smart_suggestions(state(selected_platforms={Platform.DISCORD})) == []

    def test_topic_has_no_phrases(self):
        assert smart_suggestions(state(selected_content_types={ContentType.TOPIC})) == []

    def test_capped_at_six(self):
        result = smart_suggestions(state(
            selected_priorities={Priority.HIGH, Priority.MEDIUM},
            selected_platforms={Platform.SLACK},
            selected_date_range=DateRange.TODAY,
        ))
        assert len(result) == 6
        assert len(set(result)) == 6

    def test_custom_limit(self):
        result = smart_suggestions(state(selected_date_range=DateRange.THIS_WEEK), limit=2)
        assert len(result) == 2
        assert set(result) <= {"This Week", "Weekly Report", "Current Sprint"}

    @pytest.mark.parametrize("date_range", [DateRange.THIS_MONTH, DateRange.ALL_TIME])
    def test_date_ranges_without_phrases(self, date_range):
        assert smart_suggestions(state(selected_date_range=date_range)) == []


class TestSmartPlaceholder:
    """Test placeholder clause assembly."""

    def test_default(self):
        assert smart_placeholder(state()) == DEFAULT_PLACEHOLDER

    def test_all_clauses_in_fixed_order(self):
        text = smart_placeholder(state(
            selected_priorities={Priority.MEDIUM, Priority.HIGH},
            selected_platforms={Platform.TEAMS, Platform.SLACK},
            selected_content_types={ContentType.TOPIC},
            selected_date_range=DateRange.THIS_WEEK,
        ))
        assert text == "Search high, medium priority in Slack, Teams topic content from this week..."

    def test_date_only(self):
        text = smart_placeholder(state(selected_date_range=DateRange.LAST_QUARTER))
        assert text == "Search from last quarter..."

    def test_query_text_does_not_affect_placeholder(self):
        assert smart_placeholder(state(query_text="budget")) == DEFAULT_PLACEHOLDER


class TestSuggestionIcons:
    """Test keyword-based icon lookup."""

    @pytest.mark.parametrize("text,icon", [
        ("Team Chat", "person.circle.fill"),
        ("Weekly Report", "doc.text.fill"),
        ("Video Call", "calendar.circle.fill"),
        ("Product Roadmap", "rocket.fill"),
        ("Research Initiative", "folder.fill"),
        ("Campaign Ideas", "megaphone.fill"),
        ("Analytics Dashboard", "chart.bar.fill"),
        ("Thread", "magnifyingglass"),
    ])
    def test_icon_lookup(self, text, icon):
        assert icon_for_suggestion(text) == icon

    def test_first_matching_rule_wins(self):
        # "team" (people) is checked before "meeting" (calendar)
        assert icon_for_suggestion("Team Meeting") == "person.circle.fill"
