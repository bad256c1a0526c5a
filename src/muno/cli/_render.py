"""Text rendering of workspace tree nodes."""
from __future__ import annotations

from typing import List, Optional

from muno.core.tree import NodeRecord

BRANCH = "├── "
LAST = "└── "
PIPE = "│   "
SPACE = "    "


def node_label(node: NodeRecord, current_path: Optional[str] = None) -> str:
    """Return ``name`` followed by status markers.

    Markers: ``(lazy)`` for lazy nodes not yet cloned, ``(config)`` for config
    references and ``*`` for the current position.
    """
    parts = [node.name or "/"]
    if node.is_lazy and not node.is_cloned:
        parts.append("(lazy)")
    if node.is_config_reference:
        parts.append("(config)")
    if current_path is not None and node.path == current_path:
        parts.append("*")
    return " ".join(parts)


def render_tree(node: NodeRecord, current_path: Optional[str] = None) -> List[str]:
    """Render ``node`` and its materialized children as box-drawing lines."""
    lines = [node_label(node, current_path)]

    def _walk(children: List[NodeRecord], prefix: str) -> None:
        for idx, child in enumerate(children):
            last = idx == len(children) - 1
            lines.append(prefix + (LAST if last else BRANCH) + node_label(child, current_path))
            _walk(child.children, prefix + (SPACE if last else PIPE))

    _walk(node.children, "")
    return lines


__all__ = ["node_label", "render_tree"]
