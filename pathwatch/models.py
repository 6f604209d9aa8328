"""Immutable path values."""
from __future__ import annotations

from dataclasses import dataclass, field
from functools import total_ordering
from typing import Iterator

from .errors import IncompatibleFileSystemsError
from .filesystem import FileSystem


@total_ordering
@dataclass(frozen=True, slots=True, eq=True)
class PathValue:
    """A hierarchical path bound to a :class:`FileSystem`.

    ``root`` is the empty string for relative paths and the separator for
    absolute ones. ``segments`` never contains empty strings. Values are
    built through :func:`pathwatch.coercion.path` rather than directly.
    """

    root: str
    segments: tuple[str, ...]
    file_system: FileSystem = field(repr=False)

    def __str__(self) -> str:
        return self.root + self.file_system.separator.join(self.segments)

    def __repr__(self) -> str:
        return f"PathValue({str(self)!r})"

    def __fspath__(self) -> str:
        return str(self)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, PathValue):
            return NotImplemented
        if self.file_system is not other.file_system:
            raise IncompatibleFileSystemsError(
                f"cannot order {self!r} and {other!r}: different file systems"
            )
        return sort_key(self) < sort_key(other)

    def __iter__(self) -> Iterator["PathValue"]:
        for index in range(len(self.segments)):
            yield self.name(index)

    @property
    def is_empty(self) -> bool:
        return not self.root and not self.segments

    @property
    def name_count(self) -> int:
        return len(self.segments)

    def name(self, index: int) -> "PathValue":
        """Return segment *index* as a one-segment relative path."""

        if not 0 <= index < len(self.segments):
            raise IndexError(f"segment index {index} out of range for {self}")
        return self.with_parts("", (self.segments[index],))

    def subpath(self, begin: int, end: int | None = None) -> "PathValue":
        """Return the relative path made of segments ``begin:end``."""

        stop = len(self.segments) if end is None else end
        if not 0 <= begin < stop <= len(self.segments):
            raise IndexError(f"invalid subpath range {begin}:{end} for {self}")
        return self.with_parts("", self.segments[begin:stop])

    def with_parts(self, root: str, segments: tuple[str, ...]) -> "PathValue":
        """Return a new path in the same file system."""

        return PathValue(root, segments, self.file_system)


def sort_key(value: PathValue) -> tuple[str, tuple[str, ...]]:
    return value.root, value.segments


__all__ = ["PathValue", "sort_key"]
