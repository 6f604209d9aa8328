"""Tests for :mod:`pathwatch.resolver`."""
from __future__ import annotations

import io
import os
from pathlib import Path

import pytest

from pathwatch.coercion import path
from pathwatch.errors import DirectoryNotEmptyError, NotADirectoryPathError, PathNotFoundError
from pathwatch.filesystem import FileSystem, default_file_system
from pathwatch.resolver import (
    absolute_path,
    copy,
    create_directories,
    delete,
    delete_if_exists,
    exists,
    is_directory,
    real_path,
)


@pytest.fixture()
def fs(tmp_path: Path) -> FileSystem:
    return FileSystem(working_directory=os.path.realpath(tmp_path))


@pytest.fixture()
def workdir(fs: FileSystem) -> Path:
    return Path(fs.working_directory)


def test_absolute_path_uses_default_working_directory() -> None:
    workdir = default_file_system().working_directory
    assert absolute_path(path("foo/bar")) == path(workdir, "foo", "bar")


def test_absolute_path_is_syntactic() -> None:
    fs = FileSystem(working_directory="/does/not/exist")
    assert absolute_path(path(fs, "foo/../bar")) == path(fs, "/does/not/exist/foo/../bar")
    absolute = path(fs, "/already/absolute")
    assert absolute_path(absolute) is absolute


def test_real_path_canonicalizes_dot_segments(fs: FileSystem, workdir: Path) -> None:
    (workdir / "project.txt").write_text("data", encoding="utf-8")
    (workdir / "sub").mkdir()

    expected = absolute_path(path(fs, "project.txt"))
    assert real_path(path(fs, "./project.txt")) == expected
    assert real_path(path(fs, "./././project.txt")) == expected
    assert real_path(path(fs, "sub/../project.txt")) == expected


def test_real_path_follows_symlinks(fs: FileSystem, workdir: Path) -> None:
    target = workdir / "target.txt"
    target.write_text("data", encoding="utf-8")
    (workdir / "link.txt").symlink_to(target)

    assert real_path(path(fs, "link.txt")) == real_path(path(fs, "target.txt"))


def test_real_path_missing_names_the_path(fs: FileSystem, workdir: Path) -> None:
    with pytest.raises(PathNotFoundError, match="foo/bar") as excinfo:
        real_path(path(fs, "foo/bar"))
    assert excinfo.value.missing == str(workdir / "foo")
    assert isinstance(excinfo.value, FileNotFoundError)


def test_real_path_through_a_regular_file_is_not_found(fs: FileSystem, workdir: Path) -> None:
    (workdir / "file.txt").write_text("data", encoding="utf-8")

    with pytest.raises(PathNotFoundError, match="file.txt/x") as excinfo:
        real_path(path(fs, "file.txt/x"))
    assert excinfo.value.missing == str(workdir / "file.txt" / "x")


def test_create_directories_is_idempotent(fs: FileSystem, workdir: Path) -> None:
    nested = path(fs, "foo.d", "bar", "baz")
    assert create_directories(nested) == nested
    assert (workdir / "foo.d" / "bar" / "baz").is_dir()

    create_directories(nested)
    assert is_directory(nested)


def test_create_directories_through_a_file_fails(fs: FileSystem, workdir: Path) -> None:
    (workdir / "plain").write_text("", encoding="utf-8")
    with pytest.raises(NotADirectoryPathError):
        create_directories(path(fs, "plain", "child"))
    with pytest.raises(NotADirectoryPathError):
        create_directories(path(fs, "plain"))


def test_copy_from_stream(fs: FileSystem, workdir: Path) -> None:
    destination = path(fs, "copied.txt")
    copy(io.BytesIO(b"hello"), destination)
    assert (workdir / "copied.txt").read_text(encoding="utf-8") == "hello"

    copy(io.BytesIO(b"bye"), destination)
    assert (workdir / "copied.txt").read_text(encoding="utf-8") == "bye"


def test_copy_between_paths_overwrites(fs: FileSystem, workdir: Path) -> None:
    (workdir / "source.txt").write_text("source contents", encoding="utf-8")
    (workdir / "dest.txt").write_text("stale", encoding="utf-8")

    result = copy(path(fs, "source.txt"), path(fs, "dest.txt"))

    assert result == path(fs, "dest.txt")
    assert (workdir / "dest.txt").read_text(encoding="utf-8") == "source contents"


def test_copy_missing_source_raises(fs: FileSystem) -> None:
    with pytest.raises(PathNotFoundError):
        copy(path(fs, "missing.txt"), path(fs, "dest.txt"))


def test_delete_if_exists(fs: FileSystem, workdir: Path) -> None:
    assert delete_if_exists(path(fs, "absent")) is False

    (workdir / "file.txt").write_text("x", encoding="utf-8")
    assert delete_if_exists(path(fs, "file.txt")) is True
    assert not exists(path(fs, "file.txt"))

    (workdir / "empty").mkdir()
    assert delete_if_exists(path(fs, "empty")) is True


def test_delete_non_empty_directory_raises(fs: FileSystem, workdir: Path) -> None:
    (workdir / "full").mkdir()
    (workdir / "full" / "child.txt").write_text("x", encoding="utf-8")
    with pytest.raises(DirectoryNotEmptyError):
        delete_if_exists(path(fs, "full"))
    assert (workdir / "full").is_dir()


def test_delete_missing_raises(fs: FileSystem) -> None:
    with pytest.raises(PathNotFoundError):
        delete(path(fs, "absent"))


def test_delete_removes_symlink_not_target(fs: FileSystem, workdir: Path) -> None:
    target = workdir / "dir"
    target.mkdir()
    (workdir / "link").symlink_to(target, target_is_directory=True)

    delete(path(fs, "link"))

    assert target.is_dir()
    assert not (workdir / "link").exists()
