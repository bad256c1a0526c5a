"""Hierarchical workspace tree: store, resolver, discovery and navigator."""
from __future__ import annotations

from . import paths
from .discovery import Discovery, record_from_definition
from .navigator import TreeNavigator
from .node import NodeInfo, NodeRecord, TreeState
from .resolver import PathResolver
from .store import TreeStore

__all__ = [
    "paths",
    "Discovery",
    "record_from_definition",
    "TreeNavigator",
    "NodeInfo",
    "NodeRecord",
    "TreeState",
    "PathResolver",
    "TreeStore",
]
