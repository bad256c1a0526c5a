"""Path-keyed storage for tree nodes.

Nodes live in a flat map keyed by absolute tree path. Parent/child links are
never stored; they are derived from the keys at query time, so removing a
node cannot leave a dangling reference anywhere else.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional

from muno.core.exceptions import NodeNotFoundError

from . import paths as tpaths
from .node import NodeRecord

logger = logging.getLogger(__name__)


class TreeStore:
    """In-memory map from tree path to :class:`NodeRecord`.

    Records handed out are copies; mutate through :meth:`update_node`.
    """

    def __init__(self) -> None:
        self._nodes: Dict[str, NodeRecord] = {}

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and path in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._nodes))

    def paths(self) -> List[str]:
        return list(self._nodes)

    def add_node(self, parent_path: str, node: NodeRecord) -> bool:
        """Insert ``node`` under ``parent_path``.

        The node's path becomes ``join(parent_path, node.name)``. A node that
        already carries ``path == "/"`` is stored verbatim as the root.

        Returns:
            True if inserted, False if a node already occupies the path
            (the existing node is left untouched)

        Raises:
            NodeNotFoundError: If ``parent_path`` is not in the store
            ValueError: If the node name is not a single path segment
        """
        if node.path == tpaths.ROOT:
            path = tpaths.ROOT
        else:
            if not node.name or tpaths.SEP in node.name or node.name in {".", ".."}:
                raise ValueError(f"invalid node name: {node.name!r}")
            parent = tpaths.normalize(parent_path or tpaths.ROOT)
            if parent not in self._nodes:
                raise NodeNotFoundError(parent, f"parent node not found: {parent}")
            path = tpaths.join(parent, node.name)

        if path in self._nodes:
            logger.debug("Node %s already present; keeping existing record", path)
            return False

        stored = node.copy()
        stored.path = path
        self._nodes[path] = stored
        return True

    def remove_node(self, path: str) -> None:
        """Delete exactly ``path``. Descendants are not touched."""
        self._nodes.pop(path, None)

    def remove_subtree(self, path: str) -> List[str]:
        """Delete ``path`` and every descendant; return the removed paths."""
        removed = [p for p in self._nodes if p == path or tpaths.is_ancestor(path, p)]
        for p in removed:
            del self._nodes[p]
        return removed

    def get_node(self, path: str) -> NodeRecord:
        """Return a copy of the node stored at ``path``.

        Raises:
            NodeNotFoundError: If no node is stored at ``path``
        """
        node = self._nodes.get(path)
        if node is None:
            raise NodeNotFoundError(path)
        return node.copy()

    def update_node(self, path: str, node: NodeRecord) -> None:
        """Replace the record at ``path``; the stored path is kept as the key.

        Raises:
            NodeNotFoundError: If no node is stored at ``path``
        """
        if path not in self._nodes:
            raise NodeNotFoundError(path)
        stored = node.copy()
        stored.path = path
        self._nodes[path] = stored

    def nearest_ancestor(self, path: str) -> Optional[str]:
        """Return the longest stored proper ancestor of ``path``."""
        for candidate in reversed(tpaths.ancestors(path)):
            if candidate in self._nodes:
                return candidate
        return None

    def list_children(self, path: str) -> List[NodeRecord]:
        """Return the direct children of ``path`` in insertion order.

        A node is a direct child when ``path`` is its nearest stored ancestor,
        so orphans left behind by :meth:`remove_node` attach to the closest
        surviving ancestor.
        """
        return [
            node.copy()
            for p, node in self._nodes.items()
            if tpaths.is_ancestor(path, p) and self.nearest_ancestor(p) == path
        ]

    def list_descendants(self, path: str) -> List[NodeRecord]:
        return [node.copy() for p, node in self._nodes.items() if tpaths.is_ancestor(path, p)]

    def clear(self) -> None:
        self._nodes.clear()

    def snapshot(self) -> Dict[str, NodeRecord]:
        return {p: n.copy() for p, n in self._nodes.items()}

    def replace_all(self, nodes: Dict[str, NodeRecord]) -> None:
        """Replace the whole store, trusting the keys of ``nodes`` as paths."""
        self._nodes = {p: n.copy() for p, n in nodes.items()}


__all__ = ["TreeStore"]
