"""Watch subsystem for pathwatch."""
from .dispatcher import BatchDispatcher, Subscription
from .event_queue import PendingEvents
from .service import WatchKey, WatchService, register, take_next_batch
from .types import ALL_KINDS, EventKind, WatchBatch, WatchEvent

__all__ = [
    "ALL_KINDS",
    "BatchDispatcher",
    "EventKind",
    "PendingEvents",
    "Subscription",
    "WatchBatch",
    "WatchEvent",
    "WatchKey",
    "WatchService",
    "register",
    "take_next_batch",
]
