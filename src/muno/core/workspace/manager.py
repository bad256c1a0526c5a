"""Workspace facade: root config, navigator and persisted state together.

This is the entry point used by CLI commands. It opens a workspace from disk,
restores the last navigator position and applies node edits to both the tree
and the config file that declares the edited node.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional, Tuple, Union

from muno.core.config import WorkspaceSettings
from muno.core.exceptions import MunoError, NodeExistsError, NodeNotFoundError, WorkspaceNotFoundError
from muno.core.fs import FileSystem, LocalFileSystem
from muno.core.paths import resolve_workspace_root
from muno.core.tree import TreeNavigator, paths as tpaths, record_from_definition
from muno.core.tree.node import NodeRecord

from .loader import ConfigLoader, find_config_file, load_config_record, save_config_record
from .models import ConfigRecord, FetchMode, NodeDefinition, WorkspaceDescriptor
from .state import StateStore

logger = logging.getLogger(__name__)


class Workspace:
    """An opened workspace.

    Attributes:
        root: Physical workspace root directory
        config_path: Root config file
        navigator: Tree navigator with the workspace context attached
    """

    def __init__(
        self,
        root: Path,
        config_path: str,
        navigator: TreeNavigator,
        *,
        settings: Optional[WorkspaceSettings] = None,
        fs: Optional[FileSystem] = None,
    ) -> None:
        self.root = root
        self.config_path = config_path
        self.navigator = navigator
        self.settings = settings or WorkspaceSettings()
        self.fs = fs or LocalFileSystem()
        self.state_store = StateStore(root, self.settings.state_file)
        self.loader = ConfigLoader(self.fs, config_file_names=self.settings.config_file_names)

    @property
    def config(self) -> ConfigRecord:
        if self.navigator.config is None:
            raise MunoError("workspace config is not loaded", context={"root": str(self.root)})
        return self.navigator.config

    @property
    def name(self) -> str:
        return self.config.name

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    @classmethod
    def open(
        cls,
        root: Optional[Union[str, Path]] = None,
        *,
        fs: Optional[FileSystem] = None,
        settings: Optional[WorkspaceSettings] = None,
    ) -> "Workspace":
        """Open the workspace at ``root`` (or the one enclosing the CWD).

        Raises:
            WorkspaceNotFoundError: If no root config exists
            ConfigParseError: If the root config is malformed
        """
        settings = settings or WorkspaceSettings()
        fs = fs or LocalFileSystem()
        names = settings.config_file_names
        if root is None:
            root_path = resolve_workspace_root(config_file_names=names)
        else:
            root_path = Path(root).expanduser().resolve()

        config_path = find_config_file(root_path, names, fs)
        if config_path is None:
            raise WorkspaceNotFoundError(
                f"no workspace config found in {root_path}", start=str(root_path)
            )
        record = load_config_record(config_path, fs)

        navigator = TreeNavigator()
        navigator.set_workspace_context(
            root_path,
            fs,
            default_repos_dir=settings.repos_dir,
            config_file_names=names,
        )
        navigator.load(record)

        workspace = cls(root_path, config_path, navigator, settings=settings, fs=fs)
        workspace._restore_position()
        logger.debug("Opened workspace %s at %s", record.name, root_path)
        return workspace

    @classmethod
    def init(
        cls,
        root: Union[str, Path],
        name: Optional[str] = None,
        repos_dir: Optional[str] = None,
        *,
        fs: Optional[FileSystem] = None,
        settings: Optional[WorkspaceSettings] = None,
    ) -> "Workspace":
        """Create a new workspace config in ``root`` and open it.

        Raises:
            MunoError: If ``root`` already holds a workspace config
        """
        settings = settings or WorkspaceSettings()
        fs = fs or LocalFileSystem()
        root_path = Path(root).expanduser().resolve()
        existing = find_config_file(root_path, settings.config_file_names, fs)
        if existing is not None:
            raise MunoError(
                f"workspace config already exists: {existing}", context={"path": existing}
            )

        record = ConfigRecord(
            workspace=WorkspaceDescriptor(
                name=name or root_path.name or settings.default_name,
                repos_dir=repos_dir or settings.repos_dir,
            )
        )
        config_path = root_path / settings.config_file_names[0]
        save_config_record(config_path, record, fs)
        os.makedirs(root_path / record.effective_repos_dir(settings.repos_dir), exist_ok=True)
        logger.info("Initialized workspace %s at %s", record.name, root_path)

        workspace = cls.open(root_path, fs=fs, settings=settings)
        workspace.save()
        return workspace

    def save(self) -> None:
        """Persist the navigator snapshot to the state file."""
        self.state_store.save(self.navigator.get_state())

    def _restore_position(self) -> None:
        state = self.state_store.load()
        if state is None:
            return
        current = state.current_path
        try:
            # Expands nested configs along the saved path.
            self.navigator.get_node(current, depth=0)
        except NodeNotFoundError:
            current = tpaths.ROOT
        self.navigator.restore_position(current, state.history)

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------
    def _config_for_children(self, parent: str) -> Tuple[str, ConfigRecord]:
        """Return the config file listing ``parent``'s children, and its record.

        A parent without a nested config gets a fresh one in its directory.
        """
        source = self.navigator.declaring_config(parent)
        if source is not None:
            return source, self.loader.load_record(source)

        node = self.navigator.get_node(parent, depth=0)
        if node.is_config_reference:
            raise MunoError(
                f"referenced config for {parent} is not available: {node.config_file_ref}",
                context={"path": parent, "file": node.config_file_ref},
            )
        if node.is_lazy and not node.is_cloned:
            # Writing a nested config would create the checkout directory.
            raise MunoError(
                f"{parent} is lazy and not cloned yet; clone it before adding nodes under it",
                context={"path": parent},
            )
        directory = self.navigator.physical_path(parent)
        path = os.path.join(directory, self.settings.config_file_names[0])
        return path, ConfigRecord(workspace=WorkspaceDescriptor(name=node.name))

    def add_node(
        self,
        parent: str,
        name: str,
        *,
        url: str = "",
        file: str = "",
        fetch: FetchMode = FetchMode.EAGER,
    ) -> NodeRecord:
        """Declare a new node under ``parent`` and insert it into the tree.

        Raises:
            ValueError: Unless exactly one of ``url`` and ``file`` is given,
                or if ``name`` is not a single path segment
            NodeNotFoundError: If ``parent`` does not exist
            NodeExistsError: If the node is already declared
            MunoError: If ``parent`` is a lazy repository that is not cloned
        """
        if bool(url) == bool(file):
            raise ValueError("a node needs exactly one of url or file")
        if not name or tpaths.SEP in name or name in {".", ".."}:
            raise ValueError(f"invalid node name: {name!r}")

        parent_path = tpaths.normalize(parent, self.navigator.get_path())
        self.navigator.get_node(parent_path, depth=0)
        child_path = tpaths.join(parent_path, name)

        config_path, record = self._config_for_children(parent_path)
        if child_path in self.navigator.store or record.find_node(name) is not None:
            raise NodeExistsError(child_path)

        definition = NodeDefinition(name=name, url=url, file=file, fetch=fetch)
        record.nodes.append(definition)
        self.loader.save(config_path, record)

        discovery = self.navigator.discovery
        if discovery is not None and self.navigator.declaring_config(parent_path) is None:
            discovery.mark_scanned(parent_path, config_path)
        if config_path == self.config_path:
            self.navigator.config = record

        self.navigator.add_node(parent_path, record_from_definition(definition))
        logger.info("Added %s to %s", child_path, config_path)
        return self.navigator.store.get_node(child_path)

    def remove_node(self, path: str) -> List[str]:
        """Remove ``path`` and its subtree from the tree and its declaring config.

        Returns:
            The removed tree paths

        Raises:
            MunoError: When asked to remove the root
            NodeNotFoundError: If ``path`` does not exist
        """
        target = tpaths.normalize(path, self.navigator.get_path())
        if target == tpaths.ROOT:
            raise MunoError("cannot remove the workspace root", context={"path": target})
        self.navigator.get_node(target, depth=0)

        parent = tpaths.parent_of(target)
        source = self.navigator.declaring_config(parent)
        if source is not None:
            record = self.loader.load_record(source)
            name = tpaths.name_of(target)
            record.nodes = [n for n in record.nodes if n.name != name]
            self.loader.save(source, record)
            if source == self.config_path:
                self.navigator.config = record
        else:
            logger.warning("No config declares %s; removing it from the tree only", target)

        current = self.navigator.get_path()
        removed = self.navigator.remove_subtree(target)
        if current in removed:
            self.navigator.restore_position(parent, self.navigator.history)
        logger.info("Removed %s (%d nodes)", target, len(removed))
        return removed


__all__ = ["Workspace"]
