"""Async event bus that lets views observe engine changes."""

import asyncio
import inspect
import weakref
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from loguru import logger


@dataclass
class Event:
    """Base event class."""
    type: str
    data: Dict[str, Any]
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    source: Optional[str] = None


def _weak(handler: Callable) -> weakref.ref:
    # Plain weakref on a bound method dies immediately.
    if inspect.ismethod(handler):
        return weakref.WeakMethod(handler)
    return weakref.ref(handler)


class EventBus:
    """
    Async pub/sub event bus for in-process observers.

    Event types follow pattern: category.action
    Examples: search.completed, search.cleared, filters.changed, preset.applied

    Publishers never wait on subscribers: the engine recomputes results
    synchronously and only then hands a notification to the queue.
    """

    def __init__(self, max_queue: int = 1000):
        self._subscribers: Dict[str, List[weakref.ref]] = defaultdict(list)
        self._event_queue: asyncio.Queue = asyncio.Queue(maxsize=max_queue)
        self._running = False
        self._processor_task: Optional[asyncio.Task] = None
        self._stats = defaultdict(int)

    def subscribe(self, event_pattern: str, handler: Callable[[Event], Any]) -> None:
        """
        Subscribe to events matching pattern.
        Pattern can use wildcards: 'search.*' matches all search events.
        Handlers are held weakly; keep a reference to them while subscribed.
        """
        self._subscribers[event_pattern].append(_weak(handler))
        logger.debug(f"Subscribed handler to pattern: {event_pattern}")

    def unsubscribe(self, event_pattern: str, handler: Callable[[Event], Any]) -> None:
        """Unsubscribe handler from event pattern."""
        self._subscribers[event_pattern] = [
            ref for ref in self._subscribers[event_pattern]
            if ref() is not None and ref() != handler
        ]

    async def emit(self, event: Event) -> None:
        """Emit an event to the bus."""
        if self._event_queue.full():
            logger.warning(f"Event queue full, dropping event: {event.type}")
            self._stats['dropped'] += 1
            return

        await self._event_queue.put(event)
        self._stats['emitted'] += 1
        logger.debug(f"Emitted event: {event.type}")

    def emit_nowait(self, event: Event) -> bool:
        """
        Emit an event without waiting (non-async).
        Returns True if successful, False if queue is full.
        """
        try:
            self._event_queue.put_nowait(event)
        except asyncio.QueueFull:
            logger.warning(f"Event queue full, dropping event: {event.type}")
            self._stats['dropped'] += 1
            return False
        self._stats['emitted'] += 1
        logger.debug(f"Emitted event (nowait): {event.type}")
        return True

    async def start(self) -> None:
        """Start the event processor."""
        if self._running:
            logger.warning("Event bus already running")
            return

        self._running = True
        self._processor_task = asyncio.create_task(self._process_events())
        logger.info("Event bus started")

    async def stop(self) -> None:
        """Stop the event processor."""
        self._running = False
        if self._processor_task:
            await self._processor_task
            self._processor_task = None
        logger.info("Event bus stopped")

    async def drain(self) -> None:
        """Dispatch every queued event now. Useful when no processor is running."""
        while not self._event_queue.empty():
            await self._dispatch(self._event_queue.get_nowait())

    async def _process_events(self) -> None:
        """Process events from the queue."""
        while self._running:
            try:
                # Timeout lets the loop notice stop()
                event = await asyncio.wait_for(self._event_queue.get(), timeout=0.1)
            except asyncio.TimeoutError:
                continue
            await self._dispatch(event)

    def _handlers_for(self, event_type: str) -> List[Callable]:
        handlers = []
        for pattern, refs in self._subscribers.items():
            if not self._matches_pattern(event_type, pattern):
                continue
            valid_refs = []
            for ref in refs:
                handler = ref()
                if handler is not None:
                    handlers.append(handler)
                    valid_refs.append(ref)
            self._subscribers[pattern] = valid_refs
        return handlers

    async def _dispatch(self, event: Event) -> None:
        for handler in self._handlers_for(event.type):
            try:
                result = handler(event)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.error(f"Handler error for event {event.type}: {e}")
                self._stats['handler_errors'] += 1
        self._stats['processed'] += 1

    def _matches_pattern(self, event_type: str, pattern: str) -> bool:
        """Check if event type matches subscription pattern."""
        if pattern == "*":
            return True
        if pattern.endswith(".*"):
            prefix = pattern[:-2]
            return event_type.startswith(prefix + ".")
        return event_type == pattern

    def get_stats(self) -> Dict[str, int]:
        """Get event bus statistics."""
        return dict(self._stats)

    def reset_stats(self) -> None:
        """Reset statistics."""
        self._stats.clear()
