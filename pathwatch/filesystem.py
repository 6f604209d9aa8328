"""File system identities.

A :class:`FileSystem` names one path namespace. Every path value carries a
reference to the file system it was built in; paths from different file
systems never compare equal and cannot be combined.
"""
from __future__ import annotations

import os
import threading
from typing import TYPE_CHECKING

from .config import Settings, load_settings
from .errors import ClosedWatchServiceError, UnsupportedOperationError

if TYPE_CHECKING:  # pragma: no cover
    from .watcher.service import WatchService

SEPARATOR = "/"


class FileSystem:
    """A path namespace backed by the native file system.

    The working directory used to absolutize relative paths is captured once
    when the file system is created.
    """

    separator = SEPARATOR

    def __init__(self, *, name: str = "local", working_directory: str | None = None) -> None:
        workdir = working_directory if working_directory is not None else os.getcwd()
        if not workdir.startswith(self.separator):
            raise ValueError(f"working_directory must be absolute, got {workdir!r}")
        self.name = name
        self.working_directory = workdir
        self._services: list["WatchService"] = []
        self._shared_service: "WatchService | None" = None
        self._lock = threading.RLock()
        self._open = True

    def __repr__(self) -> str:
        return f"FileSystem(name={self.name!r}, working_directory={self.working_directory!r})"

    @property
    def is_open(self) -> bool:
        return self._open

    @property
    def is_default(self) -> bool:
        return self is default_file_system()

    def new_watch_service(self) -> "WatchService":
        """Create a new watch service bound to this file system."""

        from .watcher.service import WatchService

        with self._lock:
            if not self._open:
                raise ClosedWatchServiceError(f"File system {self.name!r} is closed")
            service = WatchService(self)
            self._services.append(service)
            return service

    def watch_service(self) -> "WatchService":
        """Return the shared watch service, creating it on first use."""

        with self._lock:
            if self._shared_service is None or not self._shared_service.is_open:
                self._shared_service = self.new_watch_service()
            return self._shared_service

    def _forget(self, service: "WatchService") -> None:
        with self._lock:
            if service in self._services:
                self._services.remove(service)
            if self._shared_service is service:
                self._shared_service = None

    def close(self) -> None:
        """Close every watch service created by this file system."""

        if self.is_default:
            raise UnsupportedOperationError("The default file system cannot be closed")
        with self._lock:
            self._open = False
            services = list(self._services)
        for service in services:
            service.close()


_default: FileSystem | None = None
_default_lock = threading.Lock()


def default_file_system() -> FileSystem:
    """Return the process-wide default file system."""

    global _default
    if _default is None:
        with _default_lock:
            if _default is None:
                _default = from_settings(load_settings(), name="default")
    return _default


def from_settings(settings: Settings, *, name: str = "local") -> FileSystem:
    return FileSystem(name=name, working_directory=settings.working_directory)


__all__ = ["FileSystem", "SEPARATOR", "default_file_system", "from_settings"]
