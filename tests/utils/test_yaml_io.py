from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from muno.core.utils.io import dump_yaml_string, parse_yaml_bytes, read_yaml, write_yaml
from muno.core.utils.merge import deep_merge


def test_read_yaml_defaults(tmp_path: Path) -> None:
    assert read_yaml(tmp_path / "missing.yaml", default={}) == {}
    bad = tmp_path / "bad.yaml"
    bad.write_text("a: [", encoding="utf-8")
    assert read_yaml(bad, default="fallback") == "fallback"
    with pytest.raises(yaml.YAMLError):
        read_yaml(bad, raise_on_error=True)


def test_write_yaml_keeps_key_order(tmp_path: Path) -> None:
    path = tmp_path / "out.yaml"
    write_yaml(path, {"workspace": {"name": "x"}, "nodes": []})

    assert path.read_text(encoding="utf-8").startswith("workspace:")
    assert read_yaml(path) == {"workspace": {"name": "x"}, "nodes": []}


def test_parse_yaml_bytes_raises() -> None:
    assert parse_yaml_bytes(b"a: 1\n") == {"a": 1}
    with pytest.raises(yaml.YAMLError):
        parse_yaml_bytes(b"a: [")
    assert dump_yaml_string({"b": 1, "a": 2}).splitlines() == ["b: 1", "a: 2"]


def test_deep_merge_does_not_mutate() -> None:
    base = {"a": {"x": 1, "y": [1]}, "b": 1}
    merged = deep_merge(base, {"a": {"y": [2]}, "c": 3})

    assert merged == {"a": {"x": 1, "y": [2]}, "b": 1, "c": 3}
    assert base == {"a": {"x": 1, "y": [1]}, "b": 1}
