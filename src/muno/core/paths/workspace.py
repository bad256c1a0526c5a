"""Locate the workspace root for the current invocation."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Sequence, Union

from muno.core.exceptions import WorkspaceNotFoundError

WORKSPACE_ROOT_ENV = "MUNO_WORKSPACE_ROOT"


def _has_config(directory: Path, names: Sequence[str]) -> bool:
    return any((directory / name).is_file() for name in names)


def resolve_workspace_root(
    start: Optional[Union[str, Path]] = None,
    *,
    config_file_names: Optional[Sequence[str]] = None,
) -> Path:
    """Resolve the workspace root directory.

    Resolution priority:
    1. ``MUNO_WORKSPACE_ROOT`` environment variable
    2. The nearest directory at or above ``start`` (default: CWD) that holds
       a conventional workspace config file

    The nearest match wins.

    Raises:
        WorkspaceNotFoundError: If the env override points at a missing
            directory or no config file is found
    """
    if config_file_names is None:
        from muno.core.config import WorkspaceSettings

        config_file_names = WorkspaceSettings().config_file_names

    env_root = os.environ.get(WORKSPACE_ROOT_ENV)
    if env_root:
        path = Path(env_root).expanduser().resolve()
        if not path.is_dir():
            raise WorkspaceNotFoundError(
                f"{WORKSPACE_ROOT_ENV} points at missing directory: {path}", start=str(path)
            )
        return path

    origin = Path(start).expanduser().resolve() if start is not None else Path.cwd().resolve()
    for candidate in [origin, *origin.parents]:
        if _has_config(candidate, config_file_names):
            return candidate

    raise WorkspaceNotFoundError(
        f"no workspace config ({', '.join(config_file_names)}) found in {origin} or its parents; "
        "run 'muno init' first",
        start=str(origin),
    )


__all__ = ["WORKSPACE_ROOT_ENV", "resolve_workspace_root"]
