"""Nested-config discovery.

Expands the tree lazily: every node may map to a directory holding a config
file that declares the node's own children. Discovery probes for that file,
inserts the declared children and recurses into them depth-first.

Only successful loads are memoized. A missing or invalid nested config leaves
the path eligible for a later probe, so cloning a lazy node (which brings its
config file onto disk) is picked up by the next lookup.
"""
from __future__ import annotations

import logging
import os
from typing import Dict, List, Optional, Sequence, Set

from muno.core.exceptions import ConfigParseError
from muno.core.fs import FileSystem, LocalFileSystem
from muno.core.workspace.loader import find_config_file, load_config_record
from muno.core.workspace.models import NodeDefinition

from . import paths as tpaths
from .node import NodeRecord
from .resolver import PathResolver
from .store import TreeStore

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 32


def record_from_definition(definition: NodeDefinition) -> NodeRecord:
    """Build an unplaced NodeRecord from a config node definition."""
    return NodeRecord(
        name=definition.name,
        repository_url=definition.url,
        config_file_ref=definition.file,
        is_config_reference=definition.is_config_reference,
        is_lazy=definition.is_lazy,
    )


class Discovery:
    """Probe for and load nested configs, memoizing successful loads.

    Attributes:
        scanned: Tree paths whose nested config has been loaded (the scan memo)
        sources: Config file that declared the children of each scanned path
        problems: Paths whose nested config exists but failed to load
    """

    def __init__(
        self,
        store: TreeStore,
        resolver: PathResolver,
        fs: Optional[FileSystem] = None,
        *,
        config_file_names: Sequence[str] = ("muno.yaml",),
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        self.store = store
        self.resolver = resolver
        self.fs = fs or LocalFileSystem()
        self.config_file_names = list(config_file_names)
        self.max_depth = max_depth
        self.scanned: Set[str] = set()
        self.sources: Dict[str, str] = {}
        self.problems: Dict[str, str] = {}
        # tree path -> canonical path of the config file it loaded
        self._loaded_files: Dict[str, str] = {}

    def is_scanned(self, path: str) -> bool:
        return tpaths.normalize(path) in self.scanned

    def mark_scanned(self, path: str, source: Optional[str] = None) -> None:
        """Record ``path`` as expanded from ``source`` (used for the root config)."""
        path = tpaths.normalize(path)
        self.scanned.add(path)
        self.problems.pop(path, None)
        if source:
            self.sources[path] = source
            self._loaded_files[path] = self.fs.real_path(source)

    def discard(self, path: str) -> None:
        """Drop the memo entry for exactly ``path``."""
        path = tpaths.normalize(path)
        self.scanned.discard(path)
        self.sources.pop(path, None)
        self.problems.pop(path, None)
        self._loaded_files.pop(path, None)

    def forget(self, path: str) -> None:
        """Drop memo entries for ``path`` and its descendants."""
        path = tpaths.normalize(path)

        def _covered(p: str) -> bool:
            return p == path or tpaths.is_ancestor(path, p)

        self.scanned = {p for p in self.scanned if not _covered(p)}
        self.sources = {p: s for p, s in self.sources.items() if not _covered(p)}
        self.problems = {p: m for p, m in self.problems.items() if not _covered(p)}
        self._loaded_files = {p: f for p, f in self._loaded_files.items() if not _covered(p)}
        self.resolver.forget(path)

    def reset(self) -> None:
        self.scanned.clear()
        self.sources.clear()
        self.problems.clear()
        self._loaded_files.clear()

    def _loading_ancestor(self, path: str, canonical: str) -> Optional[str]:
        """Return the ancestor of ``path`` that already loaded ``canonical``.

        Unrelated paths may share one config file; only a repeat along the
        ancestor chain is a cycle.
        """
        for ancestor in tpaths.ancestors(path):
            if self._loaded_files.get(ancestor) == canonical:
                return ancestor
        return None

    def physical_dir(self, path: str) -> str:
        return self.resolver.resolve(path)

    def _declaring_dir(self, path: str) -> str:
        """Directory of the config file that declared ``path``."""
        parent = tpaths.parent_of(path)
        source = self.sources.get(parent)
        if source:
            return os.path.dirname(source)
        return self.resolver.resolve(parent)

    def locate_config(self, path: str) -> Optional[str]:
        """Return the nested config file for ``path`` if one is present.

        Nodes with an explicit file reference are probed at that file
        (relative references resolve against the declaring config's
        directory); all others at the conventional names in their directory.
        """
        node = self.store.get_node(path)
        if node.config_file_ref and path != tpaths.ROOT:
            ref = os.path.expanduser(node.config_file_ref)
            candidate = ref if os.path.isabs(ref) else os.path.join(self._declaring_dir(path), ref)
            if self.fs.exists(candidate) and not self.fs.is_dir(candidate):
                return candidate
            return None
        return find_config_file(self.physical_dir(path), self.config_file_names, self.fs)

    def discover(self, parent_path: str, inherited_repos_dir: Optional[str] = None) -> List[str]:
        """Probe ``parent_path`` for a nested config and expand it.

        Args:
            parent_path: Tree path whose children may be declared on disk
            inherited_repos_dir: repos_dir to use when the nested config
                declares none (defaults to the one in effect for the path)

        Returns:
            Tree paths inserted by this call, including recursive expansion
        """
        parent_path = tpaths.normalize(parent_path)
        if parent_path in self.scanned:
            logger.debug("Discovery memo hit for %s", parent_path)
            return []
        if parent_path not in self.store:
            logger.debug("Skipping discovery for unknown node %s", parent_path)
            return []
        if tpaths.depth(parent_path) >= self.max_depth:
            logger.warning(
                "Not probing %s: tree depth limit of %d reached", parent_path, self.max_depth
            )
            return []

        config_path = self.locate_config(parent_path)
        if config_path is None:
            logger.debug("No nested config for %s", parent_path)
            return []

        canonical = self.fs.real_path(config_path)
        owner = self._loading_ancestor(parent_path, canonical)
        if owner is not None:
            logger.warning(
                "Not loading %s for %s: already loaded by ancestor %s (cyclic layout)",
                config_path,
                parent_path,
                owner,
            )
            return []

        try:
            record = load_config_record(config_path, self.fs)
        except ConfigParseError as exc:
            # Retry-eligible: leave the path out of the memo.
            logger.warning("Ignoring invalid nested config for %s: %s", parent_path, exc)
            self.problems[parent_path] = str(exc)
            return []

        inherited = inherited_repos_dir or self.resolver.repos_dir_for(parent_path)
        repos_dir = record.effective_repos_dir(inherited)
        self.resolver.declare(parent_path, repos_dir)

        inserted: List[str] = []
        for definition in record.nodes:
            child = record_from_definition(definition)
            child_path = tpaths.join(parent_path, definition.name)
            child.is_cloned = self.fs.is_dir(self.resolver.resolve(child_path))
            if self.store.add_node(parent_path, child):
                inserted.append(child_path)

        self.scanned.add(parent_path)
        self.sources[parent_path] = config_path
        self.problems.pop(parent_path, None)
        self._loaded_files[parent_path] = canonical
        logger.debug(
            "Loaded nested config %s for %s (%d new nodes)", config_path, parent_path, len(inserted)
        )

        expanded = list(inserted)
        for child_path in inserted:
            expanded.extend(self.discover(child_path, repos_dir))
        return expanded

    def discover_all(self) -> List[str]:
        """Probe every stored node that is not yet memoized."""
        inserted: List[str] = []
        attempted: Set[str] = set()
        while True:
            pending = [p for p in self.store.paths() if p not in self.scanned and p not in attempted]
            if not pending:
                return inserted
            for path in pending:
                attempted.add(path)
                inserted.extend(self.discover(path))


__all__ = ["Discovery", "record_from_definition", "DEFAULT_MAX_DEPTH"]
