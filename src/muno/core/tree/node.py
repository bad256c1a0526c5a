"""Tree node records and the serializable tree snapshot."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List


@dataclass
class NodeRecord:
    """One tree entity, keyed by its absolute ``path`` in the tree store.

    ``children`` is only filled on the copies handed out by the navigator's
    recursive views; stored records never carry it, and it takes no part in
    equality.
    """

    name: str
    path: str = ""
    repository_url: str = ""
    config_file_ref: str = ""
    is_config_reference: bool = False
    is_lazy: bool = False
    is_cloned: bool = False
    has_changes: bool = False
    children: List["NodeRecord"] = field(default_factory=list, compare=False, repr=False)

    def copy(self, *, with_children: bool = False) -> "NodeRecord":
        return replace(self, children=list(self.children) if with_children else [])

    def to_info(self) -> "NodeInfo":
        return NodeInfo(
            name=self.name,
            path=self.path,
            repository_url=self.repository_url,
            is_lazy=self.is_lazy,
            is_cloned=self.is_cloned,
            is_config_reference=self.is_config_reference,
            children=tuple(child.to_info() for child in self.children),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "path": self.path,
            "repositoryUrl": self.repository_url,
            "configFileRef": self.config_file_ref,
            "isConfigReference": self.is_config_reference,
            "isLazy": self.is_lazy,
            "isCloned": self.is_cloned,
            "hasChanges": self.has_changes,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NodeRecord":
        return cls(
            name=str(data.get("name", "")),
            path=str(data.get("path", "")),
            repository_url=str(data.get("repositoryUrl") or ""),
            config_file_ref=str(data.get("configFileRef") or ""),
            is_config_reference=bool(data.get("isConfigReference", False)),
            is_lazy=bool(data.get("isLazy", False)),
            is_cloned=bool(data.get("isCloned", False)),
            has_changes=bool(data.get("hasChanges", False)),
        )


@dataclass(frozen=True)
class NodeInfo:
    """Read-only projection of a node for rendering and status commands."""

    name: str
    path: str
    repository_url: str
    is_lazy: bool
    is_cloned: bool
    is_config_reference: bool = False
    children: tuple["NodeInfo", ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "path": self.path,
            "repositoryUrl": self.repository_url,
            "isLazy": self.is_lazy,
            "isCloned": self.is_cloned,
            "isConfigReference": self.is_config_reference,
            "children": [c.to_dict() for c in self.children],
        }


@dataclass
class TreeState:
    """Snapshot of the navigator: current path, node map and history."""

    current_path: str = "/"
    nodes: Dict[str, NodeRecord] = field(default_factory=dict)
    history: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "currentPath": self.current_path,
            "nodes": {path: node.to_dict() for path, node in self.nodes.items()},
            "history": list(self.history),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TreeState":
        nodes = {
            str(path): NodeRecord.from_dict(raw)
            for path, raw in (data.get("nodes") or {}).items()
            if isinstance(raw, dict)
        }
        return cls(
            current_path=str(data.get("currentPath") or "/"),
            nodes=nodes,
            history=[str(p) for p in (data.get("history") or [])],
        )


__all__ = ["NodeRecord", "NodeInfo", "TreeState"]
