"""Shared CLI utility functions."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional

from muno.core.config import LoggingSettings
from muno.core.stdlib_logging import configure_logging, suppress_lastresort_in_json_mode
from muno.core.workspace.manager import Workspace


def get_workspace_root(args: argparse.Namespace) -> Optional[Path]:
    """Return the --workspace-root override, or None to auto-detect."""
    raw = getattr(args, "workspace_root", None)
    if raw:
        return Path(raw).expanduser().resolve()
    return None


def open_workspace(args: argparse.Namespace) -> Workspace:
    """Open the workspace selected by ``args`` (or enclosing the CWD).

    Raises:
        WorkspaceNotFoundError: If no workspace can be located
        ConfigParseError: If the root config is malformed
    """
    return Workspace.open(get_workspace_root(args))


def setup_logging(args: argparse.Namespace) -> None:
    """Configure the ``muno`` logger from settings and command flags."""
    if getattr(args, "json", False):
        suppress_lastresort_in_json_mode()
    settings = LoggingSettings()
    level = "DEBUG" if getattr(args, "verbose", False) else settings.level
    configure_logging(level=level, log_path=settings.file)


__all__ = ["get_workspace_root", "open_workspace", "setup_logging"]
