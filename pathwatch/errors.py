"""Exception hierarchy for pathwatch."""
from __future__ import annotations


class PathError(Exception):
    """Base class for every error raised by pathwatch."""


class InvalidPathError(PathError, ValueError):
    """Raised when an input cannot be parsed as a path."""

    def __init__(self, value: object, reason: str) -> None:
        super().__init__(f"Invalid path {value!r}: {reason}")
        self.value = value
        self.reason = reason


class NoParentError(PathError, ValueError):
    """Raised when a path has no parent to return."""


class NoRootError(PathError, ValueError):
    """Raised when the root of a relative path is requested."""


class NoFileNameError(PathError, ValueError):
    """Raised when a path has no terminal segment."""


class IncompatibleRootsError(PathError, ValueError):
    """Raised when relativizing an absolute path against a relative one."""


class IncompatibleFileSystemsError(PathError, ValueError):
    """Raised when two paths from different file systems are combined."""


class UnsupportedOperationError(PathError, RuntimeError):
    """Raised when a file system does not support the requested operation."""


class PathNotFoundError(PathError, FileNotFoundError):
    """Raised when an operation requires a path that does not exist."""

    def __init__(self, path: object, missing: object | None = None) -> None:
        message = f"No such file or directory: {path}"
        if missing is not None and str(missing) != str(path):
            message = f"{message} (missing: {missing})"
        super().__init__(message)
        self.path = path
        self.missing = missing if missing is not None else path

    def __str__(self) -> str:
        return self.args[0]


class NotADirectoryPathError(PathError, NotADirectoryError):
    """Raised when a directory is required but something else was found."""

    def __init__(self, path: object) -> None:
        super().__init__(f"Not a directory: {path}")
        self.path = path

    def __str__(self) -> str:
        return self.args[0]


class DirectoryNotEmptyError(PathError, OSError):
    """Raised when deleting a directory that still has entries."""

    def __init__(self, path: object) -> None:
        super().__init__(f"Directory not empty: {path}")
        self.path = path

    def __str__(self) -> str:
        return self.args[0]


class UnsupportedEventKindError(PathError, ValueError):
    """Raised when a watch registration asks for an unknown event kind."""

    def __init__(self, kind: object) -> None:
        super().__init__(f"Unsupported watch event kind: {kind!r}")
        self.kind = kind


class ClosedWatchServiceError(PathError, RuntimeError):
    """Raised when a closed watch service is used."""


class WatchTimeoutError(PathError, TimeoutError):
    """Raised when no watch batch became ready before the timeout."""


class ConfigError(PathError, ValueError):
    """Raised when settings from the environment cannot be parsed."""


__all__ = [
    "ClosedWatchServiceError",
    "ConfigError",
    "DirectoryNotEmptyError",
    "IncompatibleFileSystemsError",
    "IncompatibleRootsError",
    "InvalidPathError",
    "NoFileNameError",
    "NoParentError",
    "NoRootError",
    "NotADirectoryPathError",
    "PathError",
    "PathNotFoundError",
    "UnsupportedEventKindError",
    "UnsupportedOperationError",
    "WatchTimeoutError",
]
