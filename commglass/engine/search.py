"""Search/filter engine: query text, facet selections and the derived result view."""

import time
from typing import Dict, Iterable, List, Optional, Sequence, Set

from loguru import logger

from .bus import Event, EventBus
from .dataset import mock_content
from .models import (
    ContentRecord, ContentType, DateRange, FilterCategory, FilterPreset,
    Platform, Priority, SearchFilterState,
)
from .presets import QUICK_FILTER_PRESETS
from .ranking import (
    DEFAULT_GROUP_MIN_RESULTS, Group, ResultSummary, choose_grouping,
    group_results, should_group, sort_results, summarize,
)
from .suggestions import (
    DEFAULT_SUGGESTION_LIMIT, POPULAR_SEARCHES, RECENT_SEARCHES,
    smart_placeholder, smart_suggestions,
)


class SearchFilterEngine:
    """
    Holds free-text search and facet selections over a fixed content set.

    Every mutating call recomputes `results` synchronously before it
    returns; there is no background work and nothing to cancel. Callers
    read `results`, `is_searching` and the derived properties afterwards.

    An empty facet set means "no restriction" on that facet. With no text
    and no facet active the engine is idle: results are empty and
    `is_searching` is False.
    """

    def __init__(
        self,
        content: Optional[Sequence[ContentRecord]] = None,
        event_bus: Optional[EventBus] = None,
        presets: Sequence[FilterPreset] = QUICK_FILTER_PRESETS,
        suggestion_limit: int = DEFAULT_SUGGESTION_LIMIT,
        group_min_results: int = DEFAULT_GROUP_MIN_RESULTS
    ):
        self._content: List[ContentRecord] = list(
            mock_content() if content is None else content
        )
        self._event_bus = event_bus
        self._presets = tuple(presets)
        self.suggestion_limit = suggestion_limit
        self.group_min_results = group_min_results

        self.query_text: str = ""
        self.selected_pill: Optional[str] = None
        self.selected_priorities: Set[Priority] = set()
        self.selected_platforms: Set[Platform] = set()
        self.selected_content_types: Set[ContentType] = set()
        self.selected_date_range: DateRange = DateRange.ALL_TIME

        self.results: List[ContentRecord] = []
        self.is_searching: bool = False

        self._stats = {
            "searches": 0,
            "idle_resets": 0,
            "presets_applied": 0,
            "last_latency_ms": 0.0,
        }

    # State

    @property
    def content(self) -> Sequence[ContentRecord]:
        return tuple(self._content)

    def snapshot(self) -> SearchFilterState:
        """Immutable copy of the current query and facet selections."""
        return SearchFilterState(
            query_text=self.query_text,
            selected_pill=self.selected_pill,
            selected_priorities=frozenset(self.selected_priorities),
            selected_platforms=frozenset(self.selected_platforms),
            selected_content_types=frozenset(self.selected_content_types),
            selected_date_range=self.selected_date_range,
        )

    @property
    def has_active_filters(self) -> bool:
        return self.snapshot().has_active_filters

    @property
    def active_filter_count(self) -> int:
        return self.snapshot().active_filter_count

    # Recompute

    def perform_search(self) -> List[ContentRecord]:
        """Recompute `results` from the current state."""
        state = self.snapshot()

        if state.is_idle:
            self.results = []
            self.is_searching = False
            self._stats["idle_resets"] += 1
            return self.results

        self.is_searching = True
        start = time.perf_counter()

        matched = [record for record in self._content if state.matches(record)]
        self.results = sort_results(matched)

        latency_ms = (time.perf_counter() - start) * 1000
        self._stats["searches"] += 1
        self._stats["last_latency_ms"] = latency_ms
        logger.debug(
            f"Search '{state.trimmed_query}' with {state.active_filter_count} active filters: "
            f"{len(self.results)}/{len(self._content)} records in {latency_ms:.2f}ms"
        )

        self._publish("search.completed", {
            "query": state.trimmed_query,
            "active_filters": state.active_filter_count,
            "result_count": len(self.results),
            "result_ids": [r.id for r in self.results],
            "latency_ms": latency_ms,
        })
        return self.results

    # Text and pills

    def set_query_text(self, text: str) -> None:
        self.query_text = text
        self.perform_search()

    def set_selected_pill(self, pill: Optional[str]) -> None:
        """
        Lock a suggestion pill into the search bar.

        Selecting a pill puts its text into the query. Removing the pill
        (None) keeps whatever text has been typed since.
        """
        self.selected_pill = pill
        if pill is not None:
            self.query_text = pill
        self.perform_search()

    # Facets

    def toggle_priority(self, priority: Priority) -> None:
        self._toggle(self.selected_priorities, Priority.parse(priority))

    def toggle_platform(self, platform: Platform) -> None:
        self._toggle(self.selected_platforms, Platform.parse(platform))

    def toggle_content_type(self, content_type: ContentType) -> None:
        self._toggle(self.selected_content_types, ContentType.parse(content_type))

    def _toggle(self, selected: Set, value) -> None:
        if value in selected:
            selected.discard(value)
        else:
            selected.add(value)
        self._publish("filters.changed", self._facet_payload())
        self.perform_search()

    def set_date_range(self, date_range: DateRange) -> None:
        self.selected_date_range = DateRange.parse(date_range)
        self._publish("filters.changed", self._facet_payload())
        self.perform_search()

    def clear_all_filters(self) -> None:
        """Empty every facet and reset the date range; query text is kept."""
        self._reset_facets()
        self._publish("filters.changed", self._facet_payload())
        self.perform_search()

    def _reset_facets(self) -> None:
        self.selected_priorities.clear()
        self.selected_platforms.clear()
        self.selected_content_types.clear()
        self.selected_date_range = DateRange.ALL_TIME

    def clear_search(self) -> None:
        """Reset text, pill and every facet; the engine goes idle."""
        self.query_text = ""
        self.selected_pill = None
        self.clear_all_filters()
        self.results = []
        self.is_searching = False
        self._publish("search.cleared", {})

    # Presets

    @property
    def quick_filter_presets(self) -> Sequence[FilterPreset]:
        return self._presets

    def apply_filter_preset(self, preset: FilterPreset) -> None:
        """
        Replace every facet with the preset's selections.

        Prior selections never survive. Query text is replaced only when the
        preset carries search terms.
        """
        self._reset_facets()
        self.selected_priorities.update(preset.priorities)
        self.selected_platforms.update(preset.platforms)
        self.selected_content_types.update(preset.content_types)
        self.selected_date_range = preset.date_range
        if preset.query_text is not None:
            self.query_text = preset.query_text

        self._stats["presets_applied"] += 1
        logger.info(f"Applied filter preset: {preset.name}")
        self._publish("preset.applied", {"name": preset.name, **self._facet_payload()})
        self.perform_search()

    # Grouping

    @property
    def should_group(self) -> bool:
        return should_group(
            self.active_filter_count, len(self.results), self.group_min_results
        )

    @property
    def grouping_category(self) -> Optional[FilterCategory]:
        if not self.should_group:
            return None
        return choose_grouping(self.selected_priorities, self.selected_platforms)

    @property
    def grouped_results(self) -> List[Group]:
        """Labelled groups when grouping is active, otherwise an empty list."""
        category = self.grouping_category
        if category is None:
            return []
        return group_results(self.results, category)

    def summary(self) -> ResultSummary:
        return summarize(self.results, self.grouped_results, self.grouping_category)

    # Derived text

    @property
    def smart_suggestions(self) -> List[str]:
        return smart_suggestions(self.snapshot(), self.suggestion_limit)

    @property
    def smart_placeholder(self) -> str:
        return smart_placeholder(self.snapshot())

    @property
    def popular_searches(self) -> List[str]:
        return list(POPULAR_SEARCHES)

    @property
    def recent_searches(self) -> List[str]:
        return list(RECENT_SEARCHES)

    # Stats and events

    def get_stats(self) -> Dict[str, float]:
        return dict(self._stats)

    def _facet_payload(self) -> Dict[str, object]:
        return {
            "priorities": _values(self.selected_priorities),
            "platforms": _values(self.selected_platforms),
            "content_types": _values(self.selected_content_types),
            "date_range": self.selected_date_range.value,
        }

    def _publish(self, event_type: str, data: Dict[str, object]) -> None:
        if self._event_bus is None:
            return
        self._event_bus.emit_nowait(Event(type=event_type, data=data, source="search"))


def _values(members: Iterable) -> List[str]:
    return sorted(m.value for m in members)
