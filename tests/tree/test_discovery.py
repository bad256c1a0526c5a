from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Tuple

import pytest

from helpers.workspace import write_config
from muno.core.fs import LocalFileSystem
from muno.core.tree import Discovery, NodeRecord, PathResolver, TreeStore


def _discovery(root: Path, **kwargs) -> Tuple[TreeStore, Discovery]:
    store = TreeStore()
    store.add_node("/", NodeRecord(name="root", path="/"))
    resolver = PathResolver(str(root), "repos")
    discovery = Discovery(
        store,
        resolver,
        LocalFileSystem(),
        config_file_names=["muno.yaml"],
        **kwargs,
    )
    return store, discovery


def test_discover_expands_nested_configs_depth_first(nested_workspace: Path) -> None:
    store, discovery = _discovery(nested_workspace)

    inserted = discovery.discover("/")

    assert inserted == ["/team", "/team/service"]
    assert discovery.is_scanned("/")
    assert discovery.is_scanned("/team")
    assert discovery.sources["/team"] == str(nested_workspace / "repos" / "team" / "muno.yaml")
    service = store.get_node("/team/service")
    assert service.repository_url == "https://example.com/service"


def test_discover_twice_is_a_no_op(nested_workspace: Path) -> None:
    store, discovery = _discovery(nested_workspace)
    discovery.discover("/")
    before = store.snapshot()

    assert discovery.discover("/") == []
    assert discovery.discover("/team") == []
    assert store.snapshot() == before


def test_absent_config_is_not_memoized_and_is_retried(tmp_path: Path) -> None:
    root = tmp_path / "ws"
    write_config(root, "test", nodes=[{"name": "team", "url": "https://example.com/team"}])
    store, discovery = _discovery(root)

    discovery.discover("/")
    assert not discovery.is_scanned("/team")
    assert store.list_children("/team") == []

    write_config(root / "repos" / "team", "team", nodes=[{"name": "service", "url": "u"}])

    assert discovery.discover("/team") == ["/team/service"]
    assert discovery.is_scanned("/team")


def test_invalid_config_is_reported_and_retried(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    root = tmp_path / "ws"
    write_config(root, "test", nodes=[{"name": "team", "url": "https://example.com/team"}])
    broken = root / "repos" / "team" / "muno.yaml"
    broken.parent.mkdir(parents=True)
    broken.write_text("workspace: [unclosed\n", encoding="utf-8")
    store, discovery = _discovery(root)

    with caplog.at_level(logging.WARNING, logger="muno"):
        discovery.discover("/")

    assert "/team" in discovery.problems
    assert not discovery.is_scanned("/team")
    assert any("Ignoring invalid nested config" in r.getMessage() for r in caplog.records)

    write_config(root / "repos" / "team", "team", nodes=[{"name": "service", "url": "u"}])
    discovery.discover("/team")

    assert "/team" not in discovery.problems
    assert "/team/service" in store


def test_schema_violation_counts_as_invalid(tmp_path: Path) -> None:
    root = tmp_path / "ws"
    write_config(root, "test", nodes=[{"name": "team", "url": "u"}])
    write_config(root / "repos" / "team", "team", nodes=[{"name": "both", "url": "u", "file": "f.yaml"}])
    store, discovery = _discovery(root)

    discovery.discover("/")

    assert "both" in discovery.problems["/team"]
    assert "/team/both" not in store


def test_nested_repos_dir_is_inherited(tmp_path: Path) -> None:
    root = tmp_path / "ws"
    write_config(root, "test", nodes=[{"name": "team", "url": "u"}], repos_dir=".nodes")
    write_config(root / ".nodes" / "team", "team", nodes=[{"name": "service", "url": "u"}])
    write_config(
        root / ".nodes" / "team" / ".nodes" / "service",
        "service",
        nodes=[{"name": "lib", "url": "u"}],
    )
    store, discovery = _discovery(root)

    discovery.discover("/")

    assert "/team/service/lib" in store
    assert discovery.resolver.resolve("/team/service/lib") == os.path.join(
        str(root), ".nodes", "team", ".nodes", "service", ".nodes", "lib"
    )


def test_explicit_file_reference_resolves_from_declaring_config(tmp_path: Path) -> None:
    root = tmp_path / "ws"
    write_config(root, "test", nodes=[{"name": "platform", "file": "configs/platform.yaml"}])
    write_config(
        root / "configs",
        "platform",
        nodes=[{"name": "api", "url": "https://example.com/api"}],
        filename="platform.yaml",
    )
    store, discovery = _discovery(root)

    discovery.discover("/")

    platform = store.get_node("/platform")
    assert platform.is_config_reference
    assert platform.config_file_ref == "configs/platform.yaml"
    assert store.get_node("/platform/api").repository_url == "https://example.com/api"
    assert discovery.sources["/platform"] == str(root / "configs" / "platform.yaml")


def test_fetch_mode_and_clone_status_are_recorded(tmp_path: Path) -> None:
    root = tmp_path / "ws"
    write_config(
        root,
        "test",
        nodes=[
            {"name": "eager", "url": "u"},
            {"name": "lazy", "url": "u", "fetch": "lazy"},
            {"name": "legacy", "url": "u", "lazy": True},
        ],
    )
    (root / "repos" / "eager").mkdir(parents=True)
    store, discovery = _discovery(root)

    discovery.discover("/")

    assert store.get_node("/eager").is_cloned
    assert not store.get_node("/eager").is_lazy
    assert store.get_node("/lazy").is_lazy
    assert not store.get_node("/lazy").is_cloned
    assert store.get_node("/legacy").is_lazy


def test_depth_limit_stops_probing(nested_workspace: Path) -> None:
    store, discovery = _discovery(nested_workspace, max_depth=1)

    discovery.discover("/")

    assert "/team" in store
    assert "/team/service" not in store
    assert not discovery.is_scanned("/team")


def test_symlink_loop_is_not_followed(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    root = tmp_path / "ws"
    write_config(root, "test", nodes=[{"name": "team", "url": "u"}])
    team_dir = root / "repos" / "team"
    write_config(team_dir, "team", nodes=[{"name": "loop", "url": "u"}])
    (team_dir / "repos").mkdir()
    os.symlink(team_dir, team_dir / "repos" / "loop")
    store, discovery = _discovery(root)

    with caplog.at_level(logging.WARNING, logger="muno"):
        discovery.discover("/")

    assert "/team/loop" in store
    assert "/team/loop/loop" not in store
    assert any("already loaded" in r.getMessage() for r in caplog.records)


def test_discover_all_probes_every_unscanned_node(nested_workspace: Path) -> None:
    store, discovery = _discovery(nested_workspace)
    store.add_node("/", NodeRecord(name="team", repository_url="https://example.com/team"))

    discovery.discover_all()

    assert "/team/service" in store
    assert discovery.is_scanned("/")


def test_sibling_references_to_one_shared_config_are_both_expanded(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    root = tmp_path / "ws"
    write_config(
        root,
        "test",
        nodes=[
            {"name": "a", "file": "shared/muno.yaml"},
            {"name": "b", "file": "shared/muno.yaml"},
        ],
    )
    write_config(root / "shared", "shared", nodes=[{"name": "svc", "url": "u"}])
    store, discovery = _discovery(root)
    discovery.mark_scanned("/", str(root / "muno.yaml"))
    store.add_node("/", NodeRecord(name="a", config_file_ref="shared/muno.yaml", is_config_reference=True))
    store.add_node("/", NodeRecord(name="b", config_file_ref="shared/muno.yaml", is_config_reference=True))

    with caplog.at_level(logging.WARNING, logger="muno"):
        discovery.discover("/a")
        discovery.discover("/b")

    assert "/a/svc" in store
    assert "/b/svc" in store
    assert discovery.is_scanned("/b")
    assert not any("already loaded" in r.getMessage() for r in caplog.records)


def test_config_referencing_an_ancestor_config_is_a_cycle(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    root = tmp_path / "ws"
    write_config(root, "test", nodes=[{"name": "again", "file": "muno.yaml"}])
    store, discovery = _discovery(root)
    discovery.mark_scanned("/", str(root / "muno.yaml"))
    store.add_node("/", NodeRecord(name="again", config_file_ref="muno.yaml", is_config_reference=True))

    with caplog.at_level(logging.WARNING, logger="muno"):
        assert discovery.discover("/again") == []

    assert "/again/again" not in store
    assert not discovery.is_scanned("/again")
    assert any("already loaded by ancestor /" in r.getMessage() for r in caplog.records)
