"""Pure operations over :class:`PathValue`.

Nothing here touches the disk. Every function returns a new value; inputs
that are not already path values are coerced with :func:`path`.
"""
from __future__ import annotations

from typing import Any

from .coercion import path
from .errors import (
    IncompatibleFileSystemsError,
    IncompatibleRootsError,
    NoFileNameError,
    NoParentError,
    NoRootError,
)
from .filesystem import FileSystem
from .models import PathValue, sort_key

CURRENT = "."
PARENT = ".."


def _as_path(value: Any) -> PathValue:
    return value if isinstance(value, PathValue) else path(value)


def _same_file_system(a: PathValue, b: PathValue) -> None:
    if a.file_system is not b.file_system:
        raise IncompatibleFileSystemsError(
            f"{a!r} and {b!r} belong to different file systems"
        )


def file_system(value: Any) -> FileSystem:
    return _as_path(value).file_system


def compare_to(a: Any, b: Any) -> int:
    """Return -1, 0 or 1 comparing roots first and then segments."""

    a, b = _as_path(a), _as_path(b)
    _same_file_system(a, b)
    left, right = sort_key(a), sort_key(b)
    if left == right:
        return 0
    return -1 if left < right else 1


def is_absolute(value: Any) -> bool:
    return bool(_as_path(value).root)


def starts_with(value: Any, prefix: Any) -> bool:
    """Whether *prefix* is a segment-aligned prefix of *value*, root included."""

    value, prefix = _as_path(value), _as_path(prefix)
    if value.file_system is not prefix.file_system or value.root != prefix.root:
        return False
    if prefix.is_empty:
        return value.is_empty
    count = len(prefix.segments)
    return value.segments[:count] == prefix.segments


def ends_with(value: Any, suffix: Any) -> bool:
    """Whether *suffix* is a segment-aligned suffix of *value*.

    An absolute suffix only matches the whole path.
    """

    value, suffix = _as_path(value), _as_path(suffix)
    if value.file_system is not suffix.file_system:
        return False
    if suffix.root:
        return value == suffix
    if suffix.is_empty:
        return value.is_empty
    count = len(suffix.segments)
    if count > len(value.segments):
        return False
    return value.segments[-count:] == suffix.segments


def file_name(value: Any) -> PathValue:
    value = _as_path(value)
    if not value.segments:
        raise NoFileNameError(f"{value!r} has no file name")
    return value.with_parts("", value.segments[-1:])


def parent(value: Any) -> PathValue:
    value = _as_path(value)
    if not value.segments or (not value.root and len(value.segments) == 1):
        raise NoParentError(f"{value!r} has no parent")
    return value.with_parts(value.root, value.segments[:-1])


def root(value: Any) -> PathValue:
    value = _as_path(value)
    if not value.root:
        raise NoRootError(f"{value!r} is relative and has no root")
    return value.with_parts(value.root, ())


def normalize(value: Any) -> PathValue:
    """Remove ``.`` segments and cancel ``..`` against the preceding segment.

    Unmatched ``..`` segments are kept on relative paths and dropped directly
    under the root of absolute ones.
    """

    value = _as_path(value)
    kept: list[str] = []
    for segment in value.segments:
        if segment == CURRENT:
            continue
        if segment == PARENT:
            if kept and kept[-1] != PARENT:
                kept.pop()
                continue
            if value.root:
                continue
        kept.append(segment)
    return value.with_parts(value.root, tuple(kept))


def _has_dot_segments(value: PathValue) -> bool:
    return any(segment in (CURRENT, PARENT) for segment in value.segments)


def relativize(base: Any, target: Any) -> PathValue:
    """Return the relative path leading from *base* to *target*."""

    base, target = _as_path(base), _as_path(target)
    _same_file_system(base, target)
    if bool(base.root) != bool(target.root):
        raise IncompatibleRootsError(
            f"cannot relativize {target!r} against {base!r}: only one is absolute"
        )
    if _has_dot_segments(base) or _has_dot_segments(target):
        base, target = normalize(base), normalize(target)

    common = 0
    for left, right in zip(base.segments, target.segments):
        if left != right:
            break
        common += 1

    ups = (PARENT,) * (len(base.segments) - common)
    return base.with_parts("", ups + target.segments[common:])


def resolve(base: Any, child: Any) -> PathValue:
    """Append *child* to *base*; an absolute *child* replaces *base*."""

    base, child = _as_path(base), _as_path(child)
    _same_file_system(base, child)
    if child.root:
        return child
    if child.is_empty:
        return base
    return base.with_parts(base.root, base.segments + child.segments)


def resolve_sibling(base: Any, sibling: Any) -> PathValue:
    """Resolve *sibling* against the parent of *base*.

    When *base* has no parent the sibling is returned unchanged.
    """

    base, sibling = _as_path(base), _as_path(sibling)
    try:
        anchor = parent(base)
    except NoParentError:
        _same_file_system(base, sibling)
        return sibling
    return resolve(anchor, sibling)


__all__ = [
    "compare_to",
    "ends_with",
    "file_name",
    "file_system",
    "is_absolute",
    "normalize",
    "parent",
    "relativize",
    "resolve",
    "resolve_sibling",
    "root",
    "starts_with",
]
