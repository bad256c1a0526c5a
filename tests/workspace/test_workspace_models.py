from __future__ import annotations

from muno.core.workspace import ConfigRecord, FetchMode, NodeDefinition


def test_fetch_wins_over_legacy_lazy_flag() -> None:
    assert NodeDefinition.from_dict({"name": "a", "url": "u", "lazy": True}).is_lazy
    node = NodeDefinition.from_dict({"name": "a", "url": "u", "lazy": True, "fetch": "eager"})
    assert node.fetch is FetchMode.EAGER


def test_node_definition_to_dict_omits_defaults() -> None:
    assert NodeDefinition("a", url="u").to_dict() == {"name": "a", "url": "u"}


def test_find_node_by_name() -> None:
    record = ConfigRecord.from_dict(
        {"workspace": {"name": "ws"}, "nodes": [{"name": "a", "url": "u"}]}
    )
    assert record.find_node("a") is not None
    assert record.find_node("b") is None
    assert record.to_dict() == {"workspace": {"name": "ws"}, "nodes": [{"name": "a", "url": "u"}]}
