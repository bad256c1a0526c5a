"""Persistence of the navigator snapshot between CLI invocations."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from muno.core.tree.node import TreeState
from muno.core.utils.io import read_json, write_json_atomic

logger = logging.getLogger(__name__)


class StateStore:
    """JSON file holding the last :class:`TreeState` of a workspace."""

    def __init__(self, root: Union[str, Path], filename: str = ".muno-state.json") -> None:
        self.path = Path(root) / filename

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> Optional[TreeState]:
        """Return the saved state, or None when absent or unreadable.

        A corrupt state file is not fatal: the tree is rebuilt from config.
        """
        if not self.exists():
            return None
        try:
            data = read_json(self.path)
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable state file %s: %s", self.path, exc)
            return None
        if not isinstance(data, dict):
            logger.warning("Ignoring state file %s: expected a JSON object", self.path)
            return None
        return TreeState.from_dict(data)

    def save(self, state: TreeState) -> None:
        write_json_atomic(self.path, state.to_dict())
        logger.debug("Saved tree state to %s", self.path)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


__all__ = ["StateStore"]
