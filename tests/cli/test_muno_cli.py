from __future__ import annotations

import json
from pathlib import Path
from typing import List

import pytest

from helpers.workspace import read_config
from muno.cli._dispatcher import build_parser, discover_root_commands, main


def _run(root: Path, *argv: str) -> int:
    return main([*argv, "--workspace-root", str(root)])


def test_all_commands_are_discovered() -> None:
    assert set(discover_root_commands()) >= {
        "init",
        "tree",
        "list",
        "show",
        "use",
        "current",
        "add",
        "remove",
    }
    build_parser()


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 0
    assert "usage: muno" in capsys.readouterr().out


def test_init_creates_workspace(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(tmp_path, "init", "platform") == 0

    assert "Initialized workspace 'platform'" in capsys.readouterr().out
    assert read_config(tmp_path / "muno.yaml")["workspace"]["name"] == "platform"

    assert _run(tmp_path, "init") == 1
    assert "already exists" in capsys.readouterr().err


def test_tree_renders_nested_workspace(nested_workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(nested_workspace, "tree") == 0

    assert capsys.readouterr().out.splitlines() == [
        "test *",
        "└── team",
        "    └── service",
    ]


def test_tree_json(nested_workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(nested_workspace, "tree", "--json") == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["workspace"] == "test"
    assert payload["current"] == "/"
    assert payload["tree"]["children"][0]["children"][0]["path"] == "/team/service"
    assert payload["problems"] == {}


def test_tree_depth_and_subtree(nested_workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(nested_workspace, "tree", "--depth", "1") == 0
    assert capsys.readouterr().out.splitlines() == ["test *", "└── team"]

    assert _run(nested_workspace, "tree", "/team") == 0
    assert capsys.readouterr().out.splitlines() == ["team", "└── service"]


def test_use_and_current_persist(nested_workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(nested_workspace, "use", "/team/service") == 0
    assert "Now at /team/service" in capsys.readouterr().out

    assert _run(nested_workspace, "current") == 0
    assert capsys.readouterr().out.strip() == "/team/service"

    assert _run(nested_workspace, "use", "..") == 0
    capsys.readouterr()
    assert _run(nested_workspace, "current", "--json") == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["path"] == "/team"
    assert payload["history"] == ["/", "/team/service"]


def test_use_unknown_path_fails(nested_workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(nested_workspace, "use", "/nope") == 1
    assert "node not found: /nope" in capsys.readouterr().err


def test_add_list_and_show(nested_workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(nested_workspace, "add", "api", "--url", "https://example.com/api", "--lazy") == 0
    assert "Added /api" in capsys.readouterr().out

    assert _run(nested_workspace, "list") == 0
    lines: List[str] = capsys.readouterr().out.splitlines()
    assert lines[0].split() == ["team", "https://example.com/team"]
    assert lines[1].split() == ["api", "(lazy)", "https://example.com/api"]

    assert _run(nested_workspace, "show", "/api", "--json") == 0
    details = json.loads(capsys.readouterr().out)
    assert details["isLazy"] is True
    assert details["isCloned"] is False
    assert details["directory"].endswith("repos/api")


def test_add_under_parent_edits_nested_config(nested_workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(nested_workspace, "add", "worker", "--file", "worker.yaml", "--parent", "/team", "--json") == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["status"] == "success"
    assert payload["node"]["path"] == "/team/worker"
    assert payload["node"]["isConfigReference"] is True
    nested = read_config(nested_workspace / "repos" / "team" / "muno.yaml")
    assert nested["nodes"][-1] == {"name": "worker", "file": "worker.yaml"}


def test_add_requires_a_source(nested_workspace: Path) -> None:
    with pytest.raises(SystemExit) as exc:
        _run(nested_workspace, "add", "api")
    assert exc.value.code == 2


def test_remove(nested_workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(nested_workspace, "remove", "/team") == 0

    assert "Removed /team (2 nodes)" in capsys.readouterr().out
    assert read_config(nested_workspace / "muno.yaml")["nodes"] == []


def test_json_errors_go_to_stderr(nested_workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(nested_workspace, "show", "/missing", "--json") == 1

    captured = capsys.readouterr()
    assert captured.out == ""
    payload = json.loads(captured.err)
    assert payload["error"] == "show_error"
    assert payload["code"] == "NodeNotFoundError"
    assert payload["context"] == {"path": "/missing"}


def test_missing_workspace(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run(tmp_path, "tree") == 1
    assert "no workspace config" in capsys.readouterr().err
