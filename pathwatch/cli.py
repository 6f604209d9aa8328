"""Command line interface for pathwatch."""
from __future__ import annotations

import argparse
import json
import sys
import time
from queue import Empty

from .algebra import normalize, relativize, resolve
from .coercion import path
from .config import load_settings
from .errors import PathError
from .logger import configure_logging
from .resolver import absolute_path, real_path
from .watcher.dispatcher import BatchDispatcher
from .watcher.service import register
from .watcher.types import EventKind


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "handler"):
        parser.print_help()
        return 1
    settings = load_settings()
    configure_logging(settings.log_path, level=settings.log_level)
    try:
        return args.handler(args)
    except PathError as exc:
        print(f"{args.command} failed: {exc}", file=sys.stderr)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pathwatch", description="Path inspection and watch diagnostics")
    subparsers = parser.add_subparsers(dest="command")

    show = subparsers.add_parser("show", help="Print the parsed form of a path")
    show.add_argument("parts", nargs="+", help="Path components joined in order")
    show.set_defaults(handler=_handle_show)

    norm = subparsers.add_parser("normalize", help="Remove . and .. segments")
    norm.add_argument("path")
    norm.set_defaults(handler=_handle_normalize)

    absolute = subparsers.add_parser("absolute", help="Join a path with the working directory")
    absolute.add_argument("path")
    absolute.set_defaults(handler=_handle_absolute)

    real = subparsers.add_parser("real", help="Resolve an existing path to its canonical form")
    real.add_argument("path")
    real.set_defaults(handler=_handle_real)

    rel = subparsers.add_parser("relativize", help="Relative path from BASE to TARGET")
    rel.add_argument("base")
    rel.add_argument("target")
    rel.set_defaults(handler=_handle_relativize)

    res = subparsers.add_parser("resolve", help="Resolve CHILD against BASE")
    res.add_argument("base")
    res.add_argument("child")
    res.add_argument("--normalize", action="store_true", help="Normalize the result")
    res.set_defaults(handler=_handle_resolve)

    watch = subparsers.add_parser("watch", help="Print change events for a directory")
    watch.add_argument("directory")
    watch.add_argument(
        "--kind",
        action="append",
        choices=[kind.value for kind in EventKind],
        help="Event kind to subscribe to (repeatable, default all)",
    )
    watch.add_argument("--count", type=int, help="Stop after this many events")
    watch.add_argument("--timeout", type=float, help="Stop after this many seconds")
    watch.set_defaults(handler=_handle_watch)

    return parser


def _handle_show(args: argparse.Namespace) -> int:
    value = path(*args.parts)
    print(json.dumps({"path": str(value), "absolute": bool(value.root), "segments": list(value.segments)}))
    return 0


def _handle_normalize(args: argparse.Namespace) -> int:
    print(normalize(path(args.path)))
    return 0


def _handle_absolute(args: argparse.Namespace) -> int:
    print(absolute_path(path(args.path)))
    return 0


def _handle_real(args: argparse.Namespace) -> int:
    print(real_path(path(args.path)))
    return 0


def _handle_relativize(args: argparse.Namespace) -> int:
    print(relativize(path(args.base), path(args.target)))
    return 0


def _handle_resolve(args: argparse.Namespace) -> int:
    result = resolve(path(args.base), path(args.child))
    print(normalize(result) if args.normalize else result)
    return 0


def _handle_watch(args: argparse.Namespace) -> int:
    directory = path(args.directory)
    kinds = args.kind or [kind.value for kind in EventKind]
    service = directory.file_system.new_watch_service()
    register(directory, kinds, service=service)

    deadline = None if args.timeout is None else time.monotonic() + args.timeout
    seen = 0
    with BatchDispatcher(service) as dispatcher:
        subscription = dispatcher.subscribe()
        try:
            while args.count is None or seen < args.count:
                remaining = None if deadline is None else deadline - time.monotonic()
                if remaining is not None and remaining <= 0:
                    break
                try:
                    batch = subscription.get(timeout=remaining)
                except Empty:
                    break
                if batch is None:
                    break
                for event in batch:
                    print(json.dumps({"kind": event.kind.value, "name": str(event.context), "count": event.count}))
                    seen += 1
                sys.stdout.flush()
        except KeyboardInterrupt:
            pass
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
