"""Mapping from tree paths to physical directories.

Each step down the tree descends into ``<current>/<repos_dir>/<segment>``.
The ``repos_dir`` used when leaving a node is the one declared by the config
that lists that node's children, inherited from the nearest ancestor config
when it declares none, and finally the workspace default.
"""
from __future__ import annotations

import os
from typing import Dict

from . import paths as tpaths


class PathResolver:
    """Resolve tree paths to directories. Performs no I/O."""

    def __init__(self, root_dir: str, default_repos_dir: str = "repos") -> None:
        self.root_dir = str(root_dir)
        self.default_repos_dir = default_repos_dir
        self._declared: Dict[str, str] = {}

    def declare(self, path: str, repos_dir: str) -> None:
        """Record the repos_dir that applies to the children of ``path``."""
        self._declared[tpaths.normalize(path)] = repos_dir

    def forget(self, path: str) -> None:
        """Drop declarations for ``path`` and everything below it."""
        path = tpaths.normalize(path)
        for key in list(self._declared):
            if key == path or tpaths.is_ancestor(path, key):
                del self._declared[key]

    def repos_dir_for(self, path: str) -> str:
        """Return the repos_dir in effect for the children of ``path``."""
        path = tpaths.normalize(path)
        for candidate in [path, *reversed(tpaths.ancestors(path))]:
            declared = self._declared.get(candidate)
            if declared:
                return declared
        return self.default_repos_dir

    def resolve(self, path: str) -> str:
        """Return the physical directory for tree ``path``.

        Example:
            With root ``/ws`` and repos_dir ``repos`` everywhere,
            ``/team/service`` maps to ``/ws/repos/team/repos/service``.
        """
        current = self.root_dir
        walked = tpaths.ROOT
        for seg in tpaths.segments(tpaths.normalize(path)):
            current = os.path.join(current, self.repos_dir_for(walked), seg)
            walked = tpaths.join(walked, seg)
        return current


__all__ = ["PathResolver"]
