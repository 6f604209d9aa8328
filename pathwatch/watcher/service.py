"""Watch services backed by :mod:`watchdog`.

A :class:`WatchService` owns one watchdog observer thread. Directories are
registered on it and yield a :class:`WatchKey`; the observer thread signals
keys as events arrive and consumers block in :meth:`WatchService.take` until
a key is ready. A key delivers at most one outstanding batch: after draining
it with :meth:`WatchKey.poll_events` the consumer must call
:meth:`WatchKey.reset` before that key is queued again.
"""
from __future__ import annotations

import logging
import os
import threading
import time
from queue import Empty, Queue
from typing import TYPE_CHECKING, Any, Iterable

from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

from ..coercion import parse, path
from ..errors import (
    ClosedWatchServiceError,
    IncompatibleFileSystemsError,
    NotADirectoryPathError,
    PathNotFoundError,
    WatchTimeoutError,
)
from ..logger import get_logger, log_event
from ..models import PathValue
from ..resolver import absolute_path
from ..utils.fs import first_missing_component
from .event_queue import PendingEvents
from .types import ALL_KINDS, EventKind, WatchBatch, WatchEvent, coerce_kinds

if TYPE_CHECKING:  # pragma: no cover
    from ..filesystem import FileSystem

logger = get_logger("watcher")

_KIND_BY_EVENT_TYPE = {
    EVENT_TYPE_CREATED: EventKind.CREATED,
    EVENT_TYPE_DELETED: EventKind.DELETED,
    EVENT_TYPE_MODIFIED: EventKind.MODIFIED,
}

_CLOSED = object()


class WatchKey:
    """Registration of one directory on a :class:`WatchService`."""

    def __init__(self, service: "WatchService", watchable: PathValue, kinds: frozenset[EventKind]) -> None:
        self.service = service
        self.watchable = watchable
        self._kinds = kinds
        self._pending = PendingEvents()
        self._lock = threading.Lock()
        self._signalled = False
        self._valid = True
        self._watch: Any = None

    def __repr__(self) -> str:
        kinds = ",".join(sorted(kind.value for kind in self._kinds))
        return f"WatchKey({str(self.watchable)!r}, kinds={kinds}, valid={self._valid})"

    @property
    def kinds(self) -> frozenset[EventKind]:
        return self._kinds

    @property
    def is_valid(self) -> bool:
        return self._valid

    def poll_events(self) -> tuple[WatchEvent, ...]:
        """Drain and return the events accumulated since the last poll."""

        return self._pending.drain()

    def reset(self) -> bool:
        """Re-arm the key. Returns ``False`` once the key is no longer valid."""

        with self._lock:
            if not self._valid:
                return False
            if self._pending:
                requeue = True
            else:
                self._signalled = False
                requeue = False
        if requeue:
            self.service._enqueue(self)
        return True

    def cancel(self) -> None:
        self.service._cancel(self)

    def _signal(self, kind: EventKind, name: str) -> None:
        with self._lock:
            if not self._valid or kind not in self._kinds:
                return
            context = parse(self.watchable.file_system, (name,))
            self._pending.add(WatchEvent(kind, context))
            if self._signalled:
                return
            self._signalled = True
        self.service._enqueue(self)

    def _invalidate(self) -> None:
        with self._lock:
            self._valid = False
            self._pending.clear()


class _DirectoryEventHandler(FileSystemEventHandler):
    """Route watchdog events for direct children of one directory to a key."""

    def __init__(self, key: WatchKey, native: str) -> None:
        super().__init__()
        self._key = key
        self._directories = {native, os.path.realpath(native)}

    def dispatch(self, event: FileSystemEvent) -> None:
        if event.event_type == EVENT_TYPE_MOVED:
            self._emit(EventKind.DELETED, event.src_path)
            self._emit(EventKind.CREATED, event.dest_path)
            return

        # Opened and closed notifications are not part of the contract.
        kind = _KIND_BY_EVENT_TYPE.get(event.event_type)
        if kind is not None:
            self._emit(kind, event.src_path)

    def _emit(self, kind: EventKind, raw_path: str | bytes) -> None:
        native = os.fsdecode(raw_path).rstrip(os.sep)
        parent, name = os.path.split(native)
        if not name or parent not in self._directories:
            return
        self._key._signal(kind, name)


class WatchService:
    """Blocking queue of signalled watch keys for one file system."""

    def __init__(self, file_system: "FileSystem") -> None:
        self.file_system = file_system
        self._observer = Observer()
        self._ready: Queue[Any] = Queue()
        self._keys: dict[str, WatchKey] = {}
        self._lock = threading.Lock()
        self._started = False
        self._closed = False

    def __enter__(self) -> "WatchService":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def is_open(self) -> bool:
        return not self._closed

    def register(self, directory: Any, kinds: Iterable[Any] = ALL_KINDS) -> WatchKey:
        """Watch the direct children of *directory* for *kinds* of events."""

        value = directory if isinstance(directory, PathValue) else path(directory)
        if value.file_system is not self.file_system:
            raise IncompatibleFileSystemsError(
                f"{value!r} does not belong to this watch service's file system"
            )
        wanted = coerce_kinds(kinds)
        native = str(absolute_path(value))
        if not os.path.exists(native):
            raise PathNotFoundError(value, first_missing_component(native))
        if not os.path.isdir(native):
            raise NotADirectoryPathError(value)

        with self._lock:
            self._ensure_open()
            key = self._keys.get(native)
            if key is not None and key.is_valid:
                key._kinds = wanted
                return key

            key = WatchKey(self, value, wanted)
            key._watch = self._observer.schedule(
                _DirectoryEventHandler(key, native), native, recursive=False
            )
            self._keys[native] = key
            if not self._started:
                self._observer.start()
                self._started = True

        log_event(
            logger,
            level=logging.DEBUG,
            action="watch.register",
            message=f"Watching {native}",
            path=native,
            extra={"kinds": sorted(kind.value for kind in wanted)},
        )
        return key

    def take(self, timeout: float | None = None) -> WatchKey:
        """Block until a key is signalled and return it.

        Raises :class:`ClosedWatchServiceError` when the service is closed,
        also for callers that were already waiting.
        """

        deadline = None if timeout is None else time.monotonic() + timeout
        while True:
            self._ensure_open()
            remaining = None if deadline is None else max(deadline - time.monotonic(), 0.0)
            try:
                key = self._ready.get(timeout=remaining)
            except Empty:
                raise WatchTimeoutError(f"No watch events within {timeout} seconds") from None
            if key is _CLOSED:
                self._ready.put(_CLOSED)
                raise ClosedWatchServiceError("Watch service is closed")
            if key.is_valid:
                return key

    def poll(self) -> WatchKey | None:
        """Return a signalled key if one is ready, otherwise ``None``."""

        self._ensure_open()
        while True:
            try:
                key = self._ready.get_nowait()
            except Empty:
                return None
            if key is _CLOSED:
                self._ready.put(_CLOSED)
                raise ClosedWatchServiceError("Watch service is closed")
            if key.is_valid:
                return key

    def close(self) -> None:
        """Stop the observer and invalidate every key. Idempotent."""

        with self._lock:
            if self._closed:
                return
            self._closed = True
            keys = list(self._keys.values())
            self._keys.clear()

        for key in keys:
            key._invalidate()
        if self._started:
            self._observer.stop()
            if threading.current_thread() is not self._observer:
                self._observer.join()
        self._ready.put(_CLOSED)
        self.file_system._forget(self)
        log_event(
            logger,
            level=logging.DEBUG,
            action="watch.close",
            message="Watch service closed",
            extra={"keys": len(keys)},
        )

    def _ensure_open(self) -> None:
        if self._closed:
            raise ClosedWatchServiceError("Watch service is closed")

    def _enqueue(self, key: WatchKey) -> None:
        if not self._closed:
            self._ready.put(key)

    def _cancel(self, key: WatchKey) -> None:
        with self._lock:
            for native, registered in list(self._keys.items()):
                if registered is key:
                    del self._keys[native]
                    if key._watch is not None and not self._closed:
                        self._observer.unschedule(key._watch)
                    break
        key._invalidate()
        log_event(
            logger,
            level=logging.DEBUG,
            action="watch.cancel",
            message=f"Cancelled watch on {key.watchable}",
            path=str(key.watchable),
        )


def register(directory: Any, kinds: Iterable[Any] = ALL_KINDS, *, service: WatchService | None = None) -> WatchKey:
    """Register *directory*, reusing its file system's shared service by default."""

    value = directory if isinstance(directory, PathValue) else path(directory)
    if service is None:
        service = value.file_system.watch_service()
    return service.register(value, kinds)


def take_next_batch(service: WatchService, timeout: float | None = None) -> WatchBatch:
    """Block for the next signalled key and drain its events."""

    key = service.take(timeout)
    return WatchBatch(key, key.poll_events())


__all__ = ["WatchKey", "WatchService", "register", "take_next_batch"]
