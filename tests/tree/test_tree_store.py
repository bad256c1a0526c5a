from __future__ import annotations

import pytest

from muno.core.exceptions import NodeNotFoundError
from muno.core.tree import NodeRecord, TreeStore


@pytest.fixture
def store() -> TreeStore:
    s = TreeStore()
    s.add_node("/", NodeRecord(name="root", path="/"))
    return s


def test_add_then_get_returns_node_at_joined_path(store: TreeStore) -> None:
    assert store.add_node("/", NodeRecord(name="team", repository_url="https://example.com/team"))
    assert store.add_node("/team", NodeRecord(name="service"))

    node = store.get_node("/team/service")
    assert node.name == "service"
    assert node.path == "/team/service"


def test_get_on_empty_store_raises_node_not_found() -> None:
    with pytest.raises(NodeNotFoundError) as exc:
        TreeStore().get_node("/nonexistent")
    assert exc.value.path == "/nonexistent"
    # Also usable as a LookupError by callers that do not know muno errors.
    assert isinstance(exc.value, LookupError)


def test_add_under_missing_parent_fails(store: TreeStore) -> None:
    with pytest.raises(NodeNotFoundError):
        store.add_node("/missing", NodeRecord(name="x"))
    assert "/missing/x" not in store


def test_add_existing_path_keeps_first_record(store: TreeStore) -> None:
    assert store.add_node("/", NodeRecord(name="team", repository_url="first"))
    assert not store.add_node("/", NodeRecord(name="team", repository_url="second"))
    assert store.get_node("/team").repository_url == "first"


@pytest.mark.parametrize("name", ["", "a/b", ".", ".."])
def test_add_rejects_invalid_names(store: TreeStore, name: str) -> None:
    with pytest.raises(ValueError):
        store.add_node("/", NodeRecord(name=name))


def test_list_children_does_not_match_sibling_prefixes(store: TreeStore) -> None:
    store.add_node("/", NodeRecord(name="team"))
    store.add_node("/", NodeRecord(name="team2"))
    store.add_node("/team2", NodeRecord(name="x"))
    store.add_node("/team", NodeRecord(name="service"))

    assert [n.path for n in store.list_children("/team")] == ["/team/service"]
    assert [n.path for n in store.list_children("/")] == ["/team", "/team2"]


def test_list_children_is_direct_only(store: TreeStore) -> None:
    store.add_node("/", NodeRecord(name="a"))
    store.add_node("/a", NodeRecord(name="b"))
    store.add_node("/a/b", NodeRecord(name="c"))

    assert [n.path for n in store.list_children("/a")] == ["/a/b"]
    assert [n.path for n in store.list_descendants("/a")] == ["/a/b", "/a/b/c"]


def test_remove_node_does_not_cascade(store: TreeStore) -> None:
    store.add_node("/", NodeRecord(name="a"))
    store.add_node("/a", NodeRecord(name="b"))

    store.remove_node("/a")
    store.remove_node("/never-existed")

    assert "/a" not in store
    assert "/a/b" in store
    # The orphan attaches to its nearest surviving ancestor.
    assert [n.path for n in store.list_children("/")] == ["/a/b"]


def test_remove_subtree_cascades(store: TreeStore) -> None:
    store.add_node("/", NodeRecord(name="a"))
    store.add_node("/a", NodeRecord(name="b"))
    store.add_node("/", NodeRecord(name="ab"))

    removed = store.remove_subtree("/a")

    assert sorted(removed) == ["/a", "/a/b"]
    assert store.paths() == ["/", "/ab"]


def test_update_node_requires_existing_path(store: TreeStore) -> None:
    store.add_node("/", NodeRecord(name="team"))
    store.update_node("/team", NodeRecord(name="team", is_cloned=True, path="/elsewhere"))

    updated = store.get_node("/team")
    assert updated.is_cloned
    assert updated.path == "/team"

    with pytest.raises(NodeNotFoundError):
        store.update_node("/ghost", NodeRecord(name="ghost"))


def test_returned_records_are_copies(store: TreeStore) -> None:
    store.add_node("/", NodeRecord(name="team"))
    node = store.get_node("/team")
    node.is_cloned = True
    assert store.get_node("/team").is_cloned is False
