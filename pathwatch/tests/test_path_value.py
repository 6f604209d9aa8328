from __future__ import annotations

import dataclasses
import os

import pytest

from pathwatch.coercion import path
from pathwatch.errors import IncompatibleFileSystemsError
from pathwatch.filesystem import FileSystem


def test_string_forms() -> None:
    value = path("/foo", "bar")
    assert str(value) == "/foo/bar"
    assert os.fspath(value) == "/foo/bar"
    assert repr(value) == "PathValue('/foo/bar')"


def test_equal_values_hash_equal() -> None:
    assert hash(path("/foo/bar")) == hash(path("/foo", "bar"))
    assert len({path("a/b"), path("a", "b"), path("a/b/")}) == 1


def test_values_are_immutable() -> None:
    value = path("foo")
    with pytest.raises(dataclasses.FrozenInstanceError):
        value.segments = ("bar",)  # type: ignore[misc]


def test_sorting_follows_compare_to() -> None:
    values = [path("b"), path("/a"), path("a/b"), path("a")]
    assert sorted(values) == [path("a"), path("a/b"), path("b"), path("/a")]
    assert path("a") < path("b")
    assert path("b") >= path("a")


def test_ordering_across_file_systems_raises() -> None:
    other = FileSystem(working_directory="/work")
    with pytest.raises(IncompatibleFileSystemsError):
        path("a") < path(other, "b")
    with pytest.raises(IncompatibleFileSystemsError):
        path(other, "b") >= path("a")
    with pytest.raises(IncompatibleFileSystemsError):
        sorted([path("a"), path(other, "a")])


def test_segment_accessors() -> None:
    value = path("/foo/bar/baz")
    assert value.name_count == 3
    assert value.name(1) == path("bar")
    assert value.subpath(1) == path("bar/baz")
    assert value.subpath(0, 2) == path("foo/bar")
    assert list(value) == [path("foo"), path("bar"), path("baz")]


def test_segment_accessors_reject_bad_indexes() -> None:
    value = path("foo/bar")
    with pytest.raises(IndexError):
        value.name(2)
    with pytest.raises(IndexError):
        value.subpath(1, 1)


def test_path_values_work_with_os_functions(tmp_path) -> None:
    target = path(str(tmp_path), "file.txt")
    with open(target, "w", encoding="utf-8") as handle:
        handle.write("data")
    assert os.path.exists(target)
