"""Background consumer that fans watch batches out to subscribers."""
from __future__ import annotations

import logging
import threading
from queue import Empty, Queue
from typing import Callable, Iterator

from ..errors import ClosedWatchServiceError
from ..logger import get_logger, log_event
from .service import WatchService, take_next_batch
from .types import WatchBatch

LOGGER_NAME = "dispatcher"

_END = object()


class Subscription:
    """Channel receiving every batch the dispatcher takes.

    Iterating blocks for the next batch and stops once the dispatcher has
    stopped and the remaining batches have been consumed.
    """

    def __init__(self, dispatcher: "BatchDispatcher") -> None:
        self._dispatcher = dispatcher
        self._queue: Queue[object] = Queue()
        self._ended = False

    def __iter__(self) -> Iterator[WatchBatch]:
        while True:
            batch = self.get()
            if batch is None:
                return
            yield batch

    def get(self, timeout: float | None = None) -> WatchBatch | None:
        """Return the next batch, or ``None`` once the channel has ended.

        Raises :class:`queue.Empty` when *timeout* expires first.
        """

        if self._ended:
            return None
        item = self._queue.get(timeout=timeout)
        if item is _END:
            self._ended = True
            return None
        return item  # type: ignore[return-value]

    def close(self) -> None:
        """Stop receiving batches."""

        self._dispatcher._unsubscribe(self)
        self._push(_END)

    def _push(self, item: object) -> None:
        self._queue.put(item)


class BatchDispatcher:
    """Own the blocking take loop of one :class:`WatchService`.

    A single daemon thread takes batches, acknowledges them with
    :meth:`~pathwatch.watcher.service.WatchKey.reset` and forwards them to the
    optional *callback* and to every :class:`Subscription`. Stopping closes
    the watch service, which is what wakes the blocked thread.
    """

    def __init__(
        self,
        service: WatchService,
        callback: Callable[[WatchBatch], None] | None = None,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self.service = service
        self.callback = callback
        self._subscribers: list[Subscription] = []
        self._worker: threading.Thread | None = None
        self._lock = threading.Lock()
        self._stopped = False
        self.logger = logger or get_logger(LOGGER_NAME)

    def __enter__(self) -> "BatchDispatcher":
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    @property
    def is_running(self) -> bool:
        return self._worker is not None and self._worker.is_alive()

    def subscribe(self) -> Subscription:
        """Open a channel; it is already ended when the dispatcher has stopped."""

        subscription = Subscription(self)
        with self._lock:
            stopped = self._stopped
            if not stopped:
                self._subscribers.append(subscription)
        if stopped:
            subscription._push(_END)
        return subscription

    def start(self) -> None:
        with self._lock:
            if self._worker and self._worker.is_alive():
                return
            self._stopped = False
            self._worker = threading.Thread(target=self._run, name="BatchDispatcher", daemon=True)
            self._worker.start()

    def stop(self, timeout: float | None = None) -> None:
        """Close the watch service and wait for the loop to finish."""

        self.service.close()
        worker = self._worker
        if worker and worker.is_alive() and worker is not threading.current_thread():
            worker.join(timeout)
        self._worker = None
        if worker is None:
            self._finish()

    def _run(self) -> None:
        try:
            while True:
                try:
                    batch = take_next_batch(self.service)
                except ClosedWatchServiceError:
                    break
                batch.key.reset()
                if batch.events:
                    self._emit(batch)
        finally:
            self._finish()
            log_event(
                self.logger,
                level=logging.DEBUG,
                action="dispatcher.stopped",
                message="Watch dispatcher stopped",
            )

    def _finish(self) -> None:
        with self._lock:
            self._stopped = True
            subscribers = list(self._subscribers)
            self._subscribers.clear()
        for subscription in subscribers:
            subscription._push(_END)

    def _emit(self, batch: WatchBatch) -> None:
        with self._lock:
            subscribers = list(self._subscribers)
        for subscription in subscribers:
            subscription._push(batch)

        if self.callback is None:
            return
        try:
            self.callback(batch)
        except Exception as exc:
            log_event(
                self.logger,
                level=logging.ERROR,
                action="dispatcher.callback_error",
                message="Watch callback raised an exception",
                extra={"error": repr(exc)},
            )

    def _unsubscribe(self, subscription: Subscription) -> None:
        with self._lock:
            if subscription in self._subscribers:
                self._subscribers.remove(subscription)


__all__ = ["BatchDispatcher", "Subscription"]
