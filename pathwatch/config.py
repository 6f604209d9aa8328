"""Process-wide settings for pathwatch.

Settings are read once from the environment when the default file system is
first needed and are never mutated afterwards. Code that needs a different
working directory builds its own :class:`~pathwatch.filesystem.FileSystem`.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .errors import ConfigError

ENV_WORKDIR = "PATHWATCH_WORKDIR"
ENV_LOG_LEVEL = "PATHWATCH_LOG_LEVEL"
ENV_LOG_FILE = "PATHWATCH_LOG_FILE"


@dataclass(frozen=True)
class Settings:
    """Settings captured at startup."""

    working_directory: str
    log_level: int = logging.INFO
    log_path: Optional[Path] = None


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build :class:`Settings` from *environ* (defaults to ``os.environ``)."""

    env = os.environ if environ is None else environ

    workdir = env.get(ENV_WORKDIR) or os.getcwd()
    if not os.path.isabs(workdir):
        raise ConfigError(f"{ENV_WORKDIR} must be an absolute path, got {workdir!r}")

    log_file = env.get(ENV_LOG_FILE)
    return Settings(
        working_directory=workdir,
        log_level=_parse_level(env.get(ENV_LOG_LEVEL)),
        log_path=Path(log_file).expanduser() if log_file else None,
    )


def _parse_level(raw: str | None) -> int:
    if not raw:
        return logging.INFO
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw.upper())
    if not isinstance(level, int):
        raise ConfigError(f"Unknown log level in {ENV_LOG_LEVEL}: {raw!r}")
    return level


__all__ = ["Settings", "load_settings"]
