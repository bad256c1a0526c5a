"""Workspace configuration records.

A workspace config file declares a workspace descriptor plus an ordered list
of node definitions::

    workspace:
      name: platform
      repos_dir: repos
    nodes:
      - name: team
        url: https://example.com/team.git
      - name: docs
        file: docs/muno.yaml
        fetch: lazy
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class FetchMode(str, Enum):
    """When a node's repository is materialized on disk."""

    EAGER = "eager"
    LAZY = "lazy"


@dataclass
class NodeDefinition:
    """One declared child node.

    Attributes:
        name: Segment name, unique among siblings
        url: Repository URL for repository nodes
        file: Explicit nested-config reference for config nodes
        fetch: Eager or lazy materialization
    """

    name: str
    url: str = ""
    file: str = ""
    fetch: FetchMode = FetchMode.EAGER

    @property
    def is_lazy(self) -> bool:
        return self.fetch is FetchMode.LAZY

    @property
    def is_config_reference(self) -> bool:
        return bool(self.file) and not self.url

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"name": self.name}
        if self.url:
            result["url"] = self.url
        if self.file:
            result["file"] = self.file
        if self.fetch is not FetchMode.EAGER:
            result["fetch"] = self.fetch.value
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NodeDefinition":
        """Create from a parsed YAML mapping.

        ``fetch`` wins over the older boolean ``lazy`` key when both are set.
        """
        raw_fetch = data.get("fetch")
        if raw_fetch:
            fetch = FetchMode(str(raw_fetch))
        elif data.get("lazy") is True:
            fetch = FetchMode.LAZY
        else:
            fetch = FetchMode.EAGER
        return cls(
            name=str(data.get("name", "")),
            url=str(data.get("url") or ""),
            file=str(data.get("file") or ""),
            fetch=fetch,
        )


@dataclass
class WorkspaceDescriptor:
    """The ``workspace`` section of a config file.

    ``repos_dir`` is None when the file does not declare one; the effective
    value is then inherited from the nearest ancestor config.
    """

    name: str
    repos_dir: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"name": self.name}
        if self.repos_dir:
            result["repos_dir"] = self.repos_dir
        return result


@dataclass
class ConfigRecord:
    """Parsed form of one workspace config file."""

    workspace: WorkspaceDescriptor
    nodes: List[NodeDefinition] = field(default_factory=list)
    source: Optional[str] = None

    @property
    def name(self) -> str:
        return self.workspace.name

    @property
    def repos_dir(self) -> Optional[str]:
        return self.workspace.repos_dir

    def effective_repos_dir(self, inherited: str) -> str:
        return self.workspace.repos_dir or inherited

    def find_node(self, name: str) -> Optional[NodeDefinition]:
        for node in self.nodes:
            if node.name == name:
                return node
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "workspace": self.workspace.to_dict(),
            "nodes": [n.to_dict() for n in self.nodes],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], *, source: Optional[str] = None) -> "ConfigRecord":
        ws = data.get("workspace") or {}
        return cls(
            workspace=WorkspaceDescriptor(
                name=str(ws.get("name", "")),
                repos_dir=str(ws["repos_dir"]) if ws.get("repos_dir") else None,
            ),
            nodes=[NodeDefinition.from_dict(n) for n in (data.get("nodes") or [])],
            source=source,
        )


__all__ = ["FetchMode", "NodeDefinition", "WorkspaceDescriptor", "ConfigRecord"]
