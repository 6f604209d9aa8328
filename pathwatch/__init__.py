"""pathwatch package exports."""

from .algebra import (
    compare_to,
    ends_with,
    file_name,
    file_system,
    is_absolute,
    normalize,
    parent,
    relativize,
    resolve,
    resolve_sibling,
    root,
    starts_with,
)
from .cli import main as cli_main
from .coercion import from_uri, path, to_uri
from .errors import (
    ClosedWatchServiceError,
    DirectoryNotEmptyError,
    IncompatibleFileSystemsError,
    IncompatibleRootsError,
    InvalidPathError,
    NoFileNameError,
    NoParentError,
    NoRootError,
    NotADirectoryPathError,
    PathError,
    PathNotFoundError,
    UnsupportedEventKindError,
    WatchTimeoutError,
)
from .filesystem import FileSystem, default_file_system
from .models import PathValue
from .resolver import (
    absolute_path,
    copy,
    create_directories,
    delete,
    delete_if_exists,
    exists,
    is_directory,
    real_path,
)
from .watcher import (
    BatchDispatcher,
    EventKind,
    WatchBatch,
    WatchEvent,
    WatchKey,
    WatchService,
    register,
    take_next_batch,
)

__all__ = [
    "BatchDispatcher",
    "ClosedWatchServiceError",
    "DirectoryNotEmptyError",
    "EventKind",
    "FileSystem",
    "IncompatibleFileSystemsError",
    "IncompatibleRootsError",
    "InvalidPathError",
    "NoFileNameError",
    "NoParentError",
    "NoRootError",
    "NotADirectoryPathError",
    "PathError",
    "PathNotFoundError",
    "PathValue",
    "UnsupportedEventKindError",
    "WatchBatch",
    "WatchEvent",
    "WatchKey",
    "WatchService",
    "WatchTimeoutError",
    "absolute_path",
    "cli_main",
    "compare_to",
    "copy",
    "create_directories",
    "default_file_system",
    "delete",
    "delete_if_exists",
    "ends_with",
    "exists",
    "file_name",
    "file_system",
    "from_uri",
    "is_absolute",
    "is_directory",
    "normalize",
    "parent",
    "path",
    "real_path",
    "register",
    "relativize",
    "resolve",
    "resolve_sibling",
    "root",
    "starts_with",
    "take_next_batch",
    "to_uri",
]
