"""Event log — bounded, thread-safe store of generation events.

Thread Safety:
    All methods are protected by a ``threading.Lock``.  Passes append from
    the coordinator's worker thread while the CLI reads from the loop.

"""

import threading
from collections import deque
from typing import Any

from safe_router.observability.events import GenerationEvent


class EventLog:
    """Ring buffer of generation events with simple queries.

    Args:
        max_events: Maximum number of events to retain; the oldest are
            discarded first.

    """

    __slots__ = ("_events", "_lock", "_max_events")

    def __init__(self, max_events: int = 1_000) -> None:
        self._max_events = max_events
        self._events: deque[GenerationEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def append(self, event: GenerationEvent) -> None:
        """Record an event in the log."""
        with self._lock:
            self._events.append(event)

    def query(
        self,
        *,
        event_type: type | None = None,
        generation: int | None = None,
        limit: int = 100,
    ) -> list[GenerationEvent]:
        """Return matching events, most recent first."""
        with self._lock:
            snapshot = list(self._events)

        results: list[GenerationEvent] = []
        for event in reversed(snapshot):
            if len(results) >= limit:
                break
            if event_type is not None and not isinstance(event, event_type):
                continue
            if generation is not None and event.generation != generation:
                continue
            results.append(event)
        return results

    def recent(self, n: int = 20) -> list[GenerationEvent]:
        """Return the N most recent events, oldest first."""
        with self._lock:
            items = list(self._events)
        return items[-n:]

    def clear(self) -> int:
        """Clear all events and return the count that was cleared."""
        with self._lock:
            count = len(self._events)
            self._events.clear()
            return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def stats(self) -> dict[str, Any]:
        """Summary counts by event type."""
        with self._lock:
            events = list(self._events)

        by_type: dict[str, int] = {}
        for event in events:
            name = type(event).__name__
            by_type[name] = by_type.get(name, 0) + 1

        return {
            "total": len(events),
            "max_events": self._max_events,
            "by_type": by_type,
        }
