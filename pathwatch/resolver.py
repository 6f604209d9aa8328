"""Operations that bridge path values to the native file system."""
from __future__ import annotations

import errno
import logging
import os
import shutil
from typing import Any

from .algebra import resolve
from .coercion import parse, path
from .errors import DirectoryNotEmptyError, NotADirectoryPathError, PathNotFoundError
from .logger import get_logger, log_event
from .models import PathValue
from .utils.fs import first_missing_component

logger = get_logger("resolver")


def _as_path(value: Any) -> PathValue:
    return value if isinstance(value, PathValue) else path(value)


def _native(value: PathValue) -> str:
    return str(absolute_path(value))


def _not_found(value: PathValue, native: str) -> PathNotFoundError:
    missing = first_missing_component(native)
    return PathNotFoundError(value, missing if missing is not None else native)


def absolute_path(value: Any) -> PathValue:
    """Resolve *value* against its file system's working directory.

    Purely syntactic: the disk is never consulted.
    """

    value = _as_path(value)
    if value.root:
        return value
    workdir = parse(value.file_system, (value.file_system.working_directory,))
    return resolve(workdir, value)


def real_path(value: Any) -> PathValue:
    """Return the canonical, symlink-free form of an existing path."""

    value = _as_path(value)
    native = _native(value)
    try:
        resolved = os.path.realpath(native, strict=True)
    except (FileNotFoundError, NotADirectoryError) as exc:
        raise _not_found(value, native) from exc
    return parse(value.file_system, (resolved,))


def exists(value: Any) -> bool:
    return os.path.exists(_native(_as_path(value)))


def is_directory(value: Any) -> bool:
    return os.path.isdir(_native(_as_path(value)))


def create_directories(value: Any) -> PathValue:
    """Create *value* and every missing ancestor directory."""

    value = _as_path(value)
    native = _native(value)
    try:
        os.makedirs(native, exist_ok=True)
    except (FileExistsError, NotADirectoryError) as exc:
        raise NotADirectoryPathError(value) from exc
    log_event(
        logger,
        level=logging.DEBUG,
        action="fs.create_directories",
        message=f"Ensured directory {native}",
        path=native,
    )
    return value


def copy(source: Any, destination: Any) -> PathValue:
    """Copy a path or a readable binary stream to *destination*.

    An existing destination file is overwritten.
    """

    destination = _as_path(destination)
    target = _native(destination)

    if hasattr(source, "read"):
        with open(target, "wb") as handle:
            shutil.copyfileobj(source, handle)
            written = handle.tell()
        origin = "<stream>"
    else:
        source = _as_path(source)
        origin = _native(source)
        try:
            shutil.copyfile(origin, target)
        except FileNotFoundError as exc:
            if not os.path.lexists(origin):
                raise _not_found(source, origin) from exc
            raise
        written = os.path.getsize(target)

    log_event(
        logger,
        level=logging.DEBUG,
        action="fs.copy",
        message=f"Copied {origin} -> {target}",
        path=target,
        bytes_processed=written,
    )
    return destination


def delete(value: Any) -> None:
    """Remove a file, symlink or empty directory."""

    value = _as_path(value)
    if not _delete(value):
        raise _not_found(value, _native(value))


def delete_if_exists(value: Any) -> bool:
    """Remove *value* if present. Returns whether anything was removed."""

    return _delete(_as_path(value))


def _delete(value: PathValue) -> bool:
    native = _native(value)
    try:
        if os.path.isdir(native) and not os.path.islink(native):
            os.rmdir(native)
        else:
            os.unlink(native)
    except FileNotFoundError:
        return False
    except OSError as exc:
        if exc.errno in (errno.ENOTEMPTY, errno.EEXIST):
            raise DirectoryNotEmptyError(value) from exc
        raise

    log_event(
        logger,
        level=logging.DEBUG,
        action="fs.delete",
        message=f"Deleted {native}",
        path=native,
    )
    return True


__all__ = [
    "absolute_path",
    "copy",
    "create_directories",
    "delete",
    "delete_if_exists",
    "exists",
    "is_directory",
    "real_path",
]
