from __future__ import annotations

import pytest

from muno.core.tree import paths


@pytest.mark.parametrize(
    "raw, current, expected",
    [
        ("/", "/", "/"),
        ("/team//service/", "/", "/team/service"),
        ("service", "/team", "/team/service"),
        ("./service", "/team", "/team/service"),
        ("..", "/team/service", "/team"),
        ("../docs", "/team/service", "/team/docs"),
        ("../../..", "/team", "/"),
        ("", "/team", "/team"),
    ],
)
def test_normalize(raw: str, current: str, expected: str) -> None:
    assert paths.normalize(raw, current) == expected


def test_is_ancestor_is_segment_bounded() -> None:
    assert paths.is_ancestor("/team", "/team/service")
    assert paths.is_ancestor("/", "/team")
    assert not paths.is_ancestor("/team", "/team2/service")
    assert not paths.is_ancestor("/team", "/team")
    assert not paths.is_ancestor("/team/service", "/team")


def test_ancestors_run_from_root_down() -> None:
    assert paths.ancestors("/a/b/c") == ["/", "/a", "/a/b"]
    assert paths.ancestors("/") == []


def test_join_parent_and_name() -> None:
    assert paths.join("/", "team") == "/team"
    assert paths.join("/team", "service") == "/team/service"
    assert paths.parent_of("/team/service") == "/team"
    assert paths.parent_of("/team") == "/"
    assert paths.name_of("/team/service") == "service"
    assert paths.depth("/team/service") == 2
