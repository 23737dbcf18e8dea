"""Tests for event bus and engine notifications."""

import asyncio
import pytest

from commglass.engine.bus import EventBus, Event
from commglass.engine.models import Priority
from commglass.engine.presets import find_preset
from commglass.engine.search import SearchFilterEngine


@pytest.mark.asyncio
async def test_event_emit_and_subscribe():
    """Test basic pub/sub functionality."""
    bus = EventBus()
    await bus.start()

    received_events = []

    async def handler(event: Event):
        received_events.append(event)

    bus.subscribe("search.*", handler)

    await bus.emit(Event(
        type="search.completed",
        data={"result_count": 3}
    ))

    # Give time for processing
    await asyncio.sleep(0.2)

    assert len(received_events) == 1
    assert received_events[0].type == "search.completed"
    assert received_events[0].data["result_count"] == 3

    await bus.stop()


@pytest.mark.asyncio
async def test_wildcard_subscription():
    """Test wildcard pattern matching."""
    bus = EventBus()

    all_events = []
    search_events = []

    def all_handler(event: Event):
        all_events.append(event)

    async def search_handler(event: Event):
        search_events.append(event)

    bus.subscribe("*", all_handler)
    bus.subscribe("search.*", search_handler)

    await bus.emit(Event(type="search.completed", data={}))
    await bus.emit(Event(type="filters.changed", data={}))
    await bus.emit(Event(type="search.cleared", data={}))
    await bus.drain()

    assert len(all_events) == 3
    assert len(search_events) == 2


@pytest.mark.asyncio
async def test_event_queue_full():
    """Test behavior when event queue is full."""
    bus = EventBus(max_queue=2)

    assert bus.emit_nowait(Event(type="test.1", data={}))
    await bus.emit(Event(type="test.2", data={}))

    # This should be dropped
    assert not bus.emit_nowait(Event(type="test.3", data={}))
    await bus.emit(Event(type="test.4", data={}))

    stats = bus.get_stats()
    assert stats['dropped'] == 2
    assert stats['emitted'] == 2


@pytest.mark.asyncio
async def test_handler_errors_are_counted():
    """A failing handler does not stop delivery to others."""
    bus = EventBus()
    delivered = []

    def broken(event: Event):
        raise RuntimeError("boom")

    def working(event: Event):
        delivered.append(event.type)

    bus.subscribe("search.completed", broken)
    bus.subscribe("search.completed", working)

    bus.emit_nowait(Event(type="search.completed", data={}))
    await bus.drain()

    assert delivered == ["search.completed"]
    assert bus.get_stats()['handler_errors'] == 1


@pytest.mark.asyncio
async def test_bound_method_subscribers_stay_alive():
    """Bound methods are held weakly but live as long as their owner."""

    class View:
        def __init__(self):
            self.seen = []

        def on_event(self, event: Event):
            self.seen.append(event.type)

    bus = EventBus()
    view = View()
    bus.subscribe("*", view.on_event)

    bus.emit_nowait(Event(type="preset.applied", data={}))
    await bus.drain()
    assert view.seen == ["preset.applied"]

    del view
    bus.emit_nowait(Event(type="preset.applied", data={}))
    await bus.drain()
    assert bus.get_stats()['processed'] == 2


@pytest.mark.asyncio
async def test_unsubscribe():
    bus = EventBus()
    seen = []

    def handler(event: Event):
        seen.append(event)

    bus.subscribe("search.*", handler)
    bus.unsubscribe("search.*", handler)

    bus.emit_nowait(Event(type="search.completed", data={}))
    await bus.drain()
    assert seen == []


@pytest.mark.asyncio
async def test_engine_publishes_changes():
    """The engine notifies observers after each recomputation."""
    bus = EventBus()
    engine = SearchFilterEngine(event_bus=bus)
    events = []

    def handler(event: Event):
        events.append(event)

    bus.subscribe("*", handler)

    engine.toggle_priority(Priority.HIGH)
    engine.apply_filter_preset(find_preset("Design & UX"))
    engine.clear_search()
    await bus.drain()

    types = [e.type for e in events]
    assert types[:2] == ["filters.changed", "search.completed"]
    assert "preset.applied" in types
    assert types[-1] == "search.cleared"

    completed = events[1]
    assert completed.data["result_count"] == 7
    high_ids = {r.id for r in engine.content if r.priority is Priority.HIGH}
    assert set(completed.data["result_ids"]) == high_ids
    assert completed.source == "search"


def test_engine_without_bus_is_silent():
    engine = SearchFilterEngine()
    engine.toggle_priority(Priority.LOW)
    assert len(engine.results) == 4


def test_pattern_matching():
    """Test pattern matching logic."""
    bus = EventBus()

    # Exact match
    assert bus._matches_pattern("search.completed", "search.completed")
    assert not bus._matches_pattern("search.completed", "search.cleared")

    # Wildcard
    assert bus._matches_pattern("search.completed", "search.*")
    assert bus._matches_pattern("filters.changed", "filters.*")
    assert not bus._matches_pattern("search.completed", "filters.*")

    # Global wildcard
    assert bus._matches_pattern("anything", "*")
    assert bus._matches_pattern("preset.applied", "*")
