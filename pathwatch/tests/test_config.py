from __future__ import annotations

import logging
import os
from pathlib import Path

import pytest

from pathwatch.config import load_settings
from pathwatch.errors import ConfigError
from pathwatch.filesystem import FileSystem, from_settings


def test_defaults_capture_current_directory() -> None:
    settings = load_settings({})
    assert settings.working_directory == os.getcwd()
    assert settings.log_level == logging.INFO
    assert settings.log_path is None


def test_environment_overrides(tmp_path: Path) -> None:
    settings = load_settings(
        {
            "PATHWATCH_WORKDIR": str(tmp_path),
            "PATHWATCH_LOG_LEVEL": "debug",
            "PATHWATCH_LOG_FILE": str(tmp_path / "pathwatch.log"),
        }
    )
    assert settings.working_directory == str(tmp_path)
    assert settings.log_level == logging.DEBUG
    assert settings.log_path == tmp_path / "pathwatch.log"


def test_numeric_log_level() -> None:
    assert load_settings({"PATHWATCH_LOG_LEVEL": "30"}).log_level == logging.WARNING


@pytest.mark.parametrize(
    "environ",
    [
        {"PATHWATCH_WORKDIR": "relative/dir"},
        {"PATHWATCH_LOG_LEVEL": "chatty"},
    ],
)
def test_invalid_settings_raise(environ) -> None:
    with pytest.raises(ConfigError):
        load_settings(environ)


def test_file_system_from_settings(tmp_path: Path) -> None:
    fs = from_settings(load_settings({"PATHWATCH_WORKDIR": str(tmp_path)}))
    assert isinstance(fs, FileSystem)
    assert fs.working_directory == str(tmp_path)
