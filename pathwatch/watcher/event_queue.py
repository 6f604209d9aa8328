"""Per-key buffer of pending watch events."""
from __future__ import annotations

import threading

from .types import WatchEvent


class PendingEvents:
    """Accumulate events for one watch key until they are drained.

    Consecutive identical events (same kind and entry name) are merged into
    a single event with an increased count, mirroring the coalescing most
    native notification primitives already perform.
    """

    def __init__(self) -> None:
        self._events: list[WatchEvent] = []
        self._lock = threading.Lock()

    def add(self, event: WatchEvent) -> None:
        """Append *event*, merging it into the last one when identical."""

        with self._lock:
            if self._events:
                last = self._events[-1]
                if last.kind is event.kind and last.context == event.context:
                    self._events[-1] = WatchEvent(last.kind, last.context, last.count + event.count)
                    return
            self._events.append(event)

    def drain(self) -> tuple[WatchEvent, ...]:
        """Return every pending event and clear the buffer."""

        with self._lock:
            drained = tuple(self._events)
            self._events.clear()
        return drained

    def clear(self) -> None:
        with self._lock:
            self._events.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def __bool__(self) -> bool:
        return len(self) > 0


__all__ = ["PendingEvents"]
