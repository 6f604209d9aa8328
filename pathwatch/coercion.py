"""Build :class:`PathValue` objects from the shapes callers hand us.

:func:`path` dispatches on the type of its first argument. Each accepted
shape (string, segment sequence, existing path, path-like handle, local-file
URI, explicit file system) has its own registered variant.
"""
from __future__ import annotations

import os
from functools import singledispatch
from typing import Any, Iterable
from urllib.parse import ParseResult, SplitResult, quote, unquote, urlsplit

from .errors import InvalidPathError
from .filesystem import FileSystem, default_file_system
from .models import PathValue

FILE_SCHEME = "file"
_LOCAL_HOSTS = ("", "localhost")


def parse(file_system: FileSystem, parts: Iterable[Any]) -> PathValue:
    """Join string *parts* with the separator and split them into segments."""

    sep = file_system.separator
    texts: list[str] = []
    for part in parts:
        if not isinstance(part, str):
            raise InvalidPathError(part, f"expected a string segment, got {type(part).__name__}")
        if "\x00" in part:
            raise InvalidPathError(part, "path contains a NUL character")
        if part:
            texts.append(part)

    joined = sep.join(texts)
    root = sep if joined.startswith(sep) else ""
    segments = tuple(segment for segment in joined.split(sep) if segment)
    return PathValue(root, segments, file_system)


def path(*parts: Any) -> PathValue:
    """Coerce *parts* into a :class:`PathValue`.

    >>> path("/foo", "bar") == path("/foo/bar")
    True
    """

    if not parts:
        raise InvalidPathError(parts, "at least one path component is required")
    return _coerce(parts[0], *parts[1:])


@singledispatch
def _coerce(first: Any, *rest: Any) -> PathValue:
    raise InvalidPathError(first, f"cannot build a path from {type(first).__name__}")


@_coerce.register
def _from_string(first: str, *rest: Any) -> PathValue:
    return parse(default_file_system(), (first, *rest))


@_coerce.register(list)
@_coerce.register(tuple)
def _from_segments(first: Any, *rest: Any) -> PathValue:
    return parse(default_file_system(), (*first, *rest))


@_coerce.register
def _from_path_value(first: PathValue, *rest: Any) -> PathValue:
    if not rest:
        return first
    return parse(first.file_system, (str(first), *rest))


@_coerce.register
def _from_file_system(first: FileSystem, *rest: Any) -> PathValue:
    if not rest:
        raise InvalidPathError(first, "a file system must be followed by path strings")
    return parse(first, rest)


@_coerce.register(ParseResult)
@_coerce.register(SplitResult)
def _from_uri(first: Any, *rest: Any) -> PathValue:
    if rest:
        raise InvalidPathError(first, "a URI cannot be combined with other components")
    uri = first.geturl()
    if first.scheme.lower() != FILE_SCHEME:
        raise InvalidPathError(uri, f"URI scheme is not {FILE_SCHEME!r}")
    if first.netloc.lower() not in _LOCAL_HOSTS:
        raise InvalidPathError(uri, "URI has an authority component")
    if first.query or first.fragment:
        raise InvalidPathError(uri, "URI has a query or fragment component")
    if isinstance(first, ParseResult) and first.params:
        raise InvalidPathError(uri, "URI has a parameter component")
    if not first.path.startswith("/"):
        raise InvalidPathError(uri, "URI path is not absolute")
    return parse(default_file_system(), (unquote(first.path),))


@_coerce.register(os.PathLike)
def _from_path_like(first: Any, *rest: Any) -> PathValue:
    native = os.fspath(first)
    if isinstance(native, bytes):
        native = os.fsdecode(native)
    if os.sep != "/":
        native = native.replace(os.sep, "/")
    return parse(default_file_system(), (native, *rest))


def from_uri(text: str) -> PathValue:
    """Parse a ``file:`` URI string into a path."""

    try:
        parsed = urlsplit(text)
    except ValueError as exc:
        raise InvalidPathError(text, str(exc)) from exc
    return path(parsed)


def to_uri(value: PathValue) -> str:
    """Return the ``file:`` URI of *value*, absolutized if needed."""

    from .resolver import absolute_path

    absolute = absolute_path(value)
    return f"{FILE_SCHEME}://{quote(str(absolute))}"


__all__ = ["FILE_SCHEME", "from_uri", "parse", "path", "to_uri"]
