"""Workspace path resolution."""
from __future__ import annotations

from .workspace import WORKSPACE_ROOT_ENV, resolve_workspace_root

__all__ = ["WORKSPACE_ROOT_ENV", "resolve_workspace_root"]
