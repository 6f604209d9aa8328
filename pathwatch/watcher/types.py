"""Shared type definitions for the watch subsystem."""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Iterable

from ..errors import UnsupportedEventKindError
from ..models import PathValue

if TYPE_CHECKING:  # pragma: no cover
    from .service import WatchKey


class EventKind(Enum):
    """Filesystem mutations a watch registration can subscribe to."""

    CREATED = "created"
    DELETED = "deleted"
    MODIFIED = "modified"

    @classmethod
    def coerce(cls, value: Any) -> "EventKind":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.lower())
            except ValueError:
                pass
        raise UnsupportedEventKindError(value)


def coerce_kinds(kinds: Iterable[Any]) -> frozenset[EventKind]:
    """Validate *kinds* and return them as a frozen set."""

    if isinstance(kinds, (str, EventKind)):
        kinds = [kinds]
    result = frozenset(EventKind.coerce(kind) for kind in kinds)
    if not result:
        raise UnsupportedEventKindError(kinds)
    return result


ALL_KINDS = frozenset(EventKind)


@dataclass(frozen=True, slots=True)
class WatchEvent:
    """One change reported for an entry of a watched directory.

    ``context`` is the entry name relative to the watched directory.
    ``count`` is greater than one when repeated identical events were
    coalesced.
    """

    kind: EventKind
    context: PathValue
    count: int = 1


@dataclass(frozen=True, slots=True)
class WatchBatch:
    """Events drained from one key in a single poll cycle."""

    key: "WatchKey"
    events: tuple[WatchEvent, ...]

    def __iter__(self):
        return iter(self.events)

    def __len__(self) -> int:
        return len(self.events)

    def counts(self) -> dict[EventKind, int]:
        """Tally events by kind, honouring coalesced counts."""

        tally: Counter[EventKind] = Counter()
        for event in self.events:
            tally[event.kind] += event.count
        return dict(tally)


__all__ = ["ALL_KINDS", "EventKind", "WatchBatch", "WatchEvent", "coerce_kinds"]
