"""Native file system helpers used by :mod:`pathwatch.resolver`."""
from __future__ import annotations

import os


def first_missing_component(native: str) -> str | None:
    """Return the shortest prefix of absolute *native* that does not exist.

    ``None`` is returned when every component exists.
    """

    current = os.sep if native.startswith(os.sep) else ""
    for part in [p for p in native.split(os.sep) if p]:
        current = os.path.join(current, part) if current else part
        if not os.path.lexists(current):
            return current
    return None


__all__ = ["first_missing_component"]
