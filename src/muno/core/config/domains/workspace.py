"""Settings for workspace layout and file names."""
from __future__ import annotations

from functools import cached_property
from typing import List

from ..base import BaseDomainConfig


class WorkspaceSettings(BaseDomainConfig):
    """Workspace layout settings (``workspace`` section)."""

    def _config_section(self) -> str:
        return "workspace"

    @cached_property
    def repos_dir(self) -> str:
        """Fallback repository-storage directory when no config declares one."""
        return str(self.section.get("repos_dir") or "repos")

    @cached_property
    def config_file_names(self) -> List[str]:
        """Conventional config file names, in probe order."""
        names = self.section.get("config_file_names") or ["muno.yaml"]
        if isinstance(names, str):
            names = [names]
        return [str(n) for n in names if n]

    @cached_property
    def state_file(self) -> str:
        return str(self.section.get("state_file") or ".muno-state.json")

    @cached_property
    def default_name(self) -> str:
        return str(self.section.get("default_name") or "muno-workspace")


__all__ = ["WorkspaceSettings"]
