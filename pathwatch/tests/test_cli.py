from __future__ import annotations

import json
import os
import threading
import time

from pathwatch import cli


def test_cli_path_algebra_commands(capsys) -> None:
    assert cli.main(["normalize", "foo/../foo/../foo/bar"]) == 0
    assert capsys.readouterr().out.strip() == "foo/bar"

    assert cli.main(["relativize", "foo/bar/baz", "foo"]) == 0
    assert capsys.readouterr().out.strip() == "../.."

    assert cli.main(["resolve", "foo/bar/baz", "../../", "--normalize"]) == 0
    assert capsys.readouterr().out.strip() == "foo"

    assert cli.main(["show", "/foo/", "bar"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload == {"path": "/foo/bar", "absolute": True, "segments": ["foo", "bar"]}


def test_cli_real_path(tmp_path, capsys) -> None:
    target = tmp_path / "file.txt"
    target.write_text("x", encoding="utf-8")

    assert cli.main(["real", str(tmp_path / "." / "file.txt")]) == 0
    assert capsys.readouterr().out.strip() == os.path.realpath(target)


def test_cli_reports_path_errors(tmp_path, capsys) -> None:
    exit_code = cli.main(["real", str(tmp_path / "missing" / "file.txt")])
    assert exit_code == 1
    assert "No such file or directory" in capsys.readouterr().err

    assert cli.main(["relativize", "/abs", "rel"]) == 1


def test_cli_without_command_prints_help(capsys) -> None:
    assert cli.main([]) == 1
    assert "usage" in capsys.readouterr().out


def test_cli_watch_times_out_quietly(tmp_path, capsys) -> None:
    assert cli.main(["watch", str(tmp_path), "--timeout", "0.2"]) == 0
    assert capsys.readouterr().out == ""


def test_cli_watch_prints_events(tmp_path, capsys) -> None:
    def writer() -> None:
        time.sleep(0.3)
        (tmp_path / "new.txt").write_text("hello", encoding="utf-8")

    thread = threading.Thread(target=writer, daemon=True)
    thread.start()

    exit_code = cli.main(["watch", str(tmp_path), "--kind", "created", "--count", "1", "--timeout", "5"])
    thread.join()

    assert exit_code == 0
    lines = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    assert lines
    assert lines[0]["kind"] == "created"
    assert lines[0]["name"] == "new.txt"
