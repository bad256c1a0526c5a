"""Path-addressable facade over the tree store.

The navigator owns the store, the current position and, once a workspace
context is attached, the resolver and discovery engine that expand the tree
lazily on read.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from muno.core.config import DiscoverySettings, WorkspaceSettings
from muno.core.exceptions import InvalidConfigTypeError, NodeNotFoundError
from muno.core.fs import FileSystem, LocalFileSystem
from muno.core.workspace.models import ConfigRecord

from . import paths as tpaths
from .discovery import Discovery, record_from_definition
from .node import NodeRecord, TreeState
from .resolver import PathResolver
from .store import TreeStore

logger = logging.getLogger(__name__)


class TreeNavigator:
    """Tree operations consumed by the workspace and CLI layers.

    Without a workspace context the navigator is a pure in-memory tree:
    ``load`` builds the root and its direct children and no discovery runs.
    """

    def __init__(self, store: Optional[TreeStore] = None) -> None:
        self.store = store or TreeStore()
        self.config: Optional[ConfigRecord] = None
        self.resolver: Optional[PathResolver] = None
        self.discovery: Optional[Discovery] = None
        self.fs: Optional[FileSystem] = None
        self._current = tpaths.ROOT
        self._history: List[str] = []

    # ------------------------------------------------------------------
    # Context
    # ------------------------------------------------------------------
    def set_workspace_context(
        self,
        root_dir: Union[str, Path],
        fs: Optional[FileSystem] = None,
        *,
        default_repos_dir: Optional[str] = None,
        config_file_names: Optional[Sequence[str]] = None,
        max_depth: Optional[int] = None,
    ) -> None:
        """Attach the physical workspace root and filesystem used by discovery.

        Unset options fall back to the ``workspace`` and ``discovery`` settings.
        """
        if default_repos_dir is None or config_file_names is None:
            ws = WorkspaceSettings()
            default_repos_dir = default_repos_dir or ws.repos_dir
            config_file_names = config_file_names or ws.config_file_names
        if max_depth is None:
            max_depth = DiscoverySettings().max_depth

        self.fs = fs or LocalFileSystem()
        self.resolver = PathResolver(str(root_dir), default_repos_dir)
        self.discovery = Discovery(
            self.store,
            self.resolver,
            self.fs,
            config_file_names=config_file_names,
            max_depth=max_depth,
        )

    @property
    def has_workspace_context(self) -> bool:
        return self.discovery is not None

    @property
    def problems(self) -> Dict[str, str]:
        """Nested configs that were found but failed to load, by tree path."""
        return dict(self.discovery.problems) if self.discovery else {}

    def physical_path(self, path: str) -> str:
        """Return the directory that tree ``path`` maps to."""
        if self.resolver is None:
            raise RuntimeError("no workspace context attached")
        return self.resolver.resolve(self._absolute(path))

    def declaring_config(self, path: str) -> Optional[str]:
        """Return the config file that lists the children of ``path``, if known."""
        if self.discovery is None:
            return None
        return self.discovery.sources.get(self._absolute(path))

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    def load(self, config: ConfigRecord) -> None:
        """Build the root node and its children from the root config.

        Raises:
            InvalidConfigTypeError: If ``config`` is not a ConfigRecord
        """
        if not isinstance(config, ConfigRecord):
            raise InvalidConfigTypeError(config)

        self.store.clear()
        self._current = tpaths.ROOT
        self._history = []
        self.config = config

        root = NodeRecord(name=config.name, path=tpaths.ROOT)
        repos_dir: Optional[str] = None
        if self.discovery is not None and self.resolver is not None:
            self.discovery.reset()
            self.resolver.forget(tpaths.ROOT)
            repos_dir = config.effective_repos_dir(self.resolver.default_repos_dir)
            self.resolver.declare(tpaths.ROOT, repos_dir)
            root.is_cloned = self._probe_cloned(tpaths.ROOT)
        self.store.add_node(tpaths.ROOT, root)

        children: List[str] = []
        for definition in config.nodes:
            child = record_from_definition(definition)
            child_path = tpaths.join(tpaths.ROOT, definition.name)
            if self.discovery is not None:
                child.is_cloned = self._probe_cloned(child_path)
            if self.store.add_node(tpaths.ROOT, child):
                children.append(child_path)

        if self.discovery is None:
            return
        self.discovery.mark_scanned(tpaths.ROOT, config.source)
        for child_path in children:
            self.discovery.discover(child_path, repos_dir)

    # ------------------------------------------------------------------
    # Position
    # ------------------------------------------------------------------
    def _absolute(self, path: str) -> str:
        return tpaths.normalize(path or tpaths.ROOT, self._current)

    def navigate(self, path: str) -> str:
        """Move the current position to ``path`` (absolute or relative).

        Navigation is a pure lookup; it never triggers discovery.

        Raises:
            NodeNotFoundError: If the target is not in the store
        """
        target = self._absolute(path)
        if target not in self.store:
            raise NodeNotFoundError(target)
        if target != self._current:
            self._history.append(self._current)
            self._current = target
        return target

    set_path = navigate

    def get_path(self) -> str:
        return self._current

    def get_current(self) -> NodeRecord:
        return self.get_node(self._current)

    @property
    def history(self) -> List[str]:
        return list(self._history)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def _ensure_discovered(self, path: str) -> None:
        if self.discovery is None:
            return
        for level in [*tpaths.ancestors(path), path]:
            if level in self.store and not self.discovery.is_scanned(level):
                self.discovery.discover(level)

    def _materialize(self, path: str, depth: Optional[int]) -> NodeRecord:
        node = self.store.get_node(path)
        if depth is not None and depth <= 0:
            return node
        next_depth = None if depth is None else depth - 1
        node.children = [
            self._materialize(child.path, next_depth) for child in self.store.list_children(path)
        ]
        return node

    def get_node(self, path: str, *, depth: Optional[int] = None) -> NodeRecord:
        """Return the node at ``path`` with ``children`` filled recursively.

        Every level from the root down to ``path`` is probed for nested
        configs first, so children declared on disk appear on demand.

        Raises:
            NodeNotFoundError: If ``path`` is absent after discovery
        """
        target = self._absolute(path)
        self._ensure_discovered(target)
        if target not in self.store:
            raise NodeNotFoundError(target)
        return self._materialize(target, depth)

    def get_tree(self, *, depth: Optional[int] = None) -> NodeRecord:
        """Return the whole tree from the root, expanding every known node."""
        if self.discovery is not None:
            self.discovery.discover_all()
        if tpaths.ROOT not in self.store:
            raise NodeNotFoundError(tpaths.ROOT)
        return self._materialize(tpaths.ROOT, depth)

    def list_children(self, path: str) -> List[NodeRecord]:
        target = self._absolute(path)
        self._ensure_discovered(target)
        if target not in self.store:
            raise NodeNotFoundError(target)
        return self.store.list_children(target)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def _probe_cloned(self, path: str) -> bool:
        if self.fs is None or self.resolver is None:
            return False
        return self.fs.is_dir(self.resolver.resolve(path))

    def add_node(self, parent_path: str, node: NodeRecord) -> bool:
        """Insert ``node`` under ``parent_path``; see :meth:`TreeStore.add_node`."""
        parent = self._absolute(parent_path)
        if self.discovery is not None and parent in self.store and not node.is_cloned:
            node = node.copy()
            node.is_cloned = self._probe_cloned(tpaths.join(parent, node.name))
        return self.store.add_node(parent, node)

    def remove_node(self, path: str) -> None:
        target = self._absolute(path)
        self.store.remove_node(target)
        if self.discovery is not None:
            self.discovery.discard(target)

    def remove_subtree(self, path: str) -> List[str]:
        target = self._absolute(path)
        removed = self.store.remove_subtree(target)
        if self.discovery is not None:
            self.discovery.forget(target)
        return removed

    def update_node(self, path: str, node: NodeRecord) -> None:
        self.store.update_node(self._absolute(path), node)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    def get_state(self) -> TreeState:
        return TreeState(
            current_path=self._current,
            nodes=self.store.snapshot(),
            history=list(self._history),
        )

    def set_state(self, state: TreeState) -> None:
        """Replace nodes, position and history with ``state``.

        The discovery memo is left untouched.
        """
        self.store.replace_all(state.nodes)
        self._current = state.current_path
        self._history = list(state.history)

    def restore_position(self, current_path: str, history: Sequence[str]) -> None:
        """Restore a saved position, falling back to the root if it is gone."""
        if current_path in self.store:
            self._current = current_path
        else:
            logger.info("Saved position %s no longer exists; using /", current_path)
            self._current = tpaths.ROOT
        self._history = [p for p in history if isinstance(p, str)]


__all__ = ["TreeNavigator"]
