from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

_MUNO_HANDLER: logging.Handler | None = None
_CONFIGURED_KEY: tuple[str, str] | None = None
_JSON_MODE_NULL_HANDLER_INSTALLED: bool = False

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(*, level: str = "WARNING", log_path: Optional[Path] = None) -> None:
    """Install the Muno handler on the ``muno`` logger.

    With ``log_path`` records go to that file; otherwise to stderr.
    Idempotent per-process: reconfiguring with the same target is a no-op.
    """
    global _MUNO_HANDLER, _CONFIGURED_KEY

    target = str(Path(log_path).expanduser().resolve()) if log_path else "<stderr>"
    key = (target, level.upper())
    if _CONFIGURED_KEY == key and _MUNO_HANDLER is not None:
        return

    logger = logging.getLogger("muno")
    if _MUNO_HANDLER is not None:
        logger.removeHandler(_MUNO_HANDLER)
        _MUNO_HANDLER.close()
        _MUNO_HANDLER = None

    handler: logging.Handler
    if log_path:
        Path(target).parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(target, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.setLevel(_level_from_name(level))

    logger.setLevel(_level_from_name(level))
    logger.addHandler(handler)

    _MUNO_HANDLER = handler
    _CONFIGURED_KEY = key


def suppress_lastresort_in_json_mode() -> None:
    """Keep stdlib's lastResort handler from writing to stderr in --json mode.

    The root logger gets a NullHandler when it has no handlers of its own.
    """
    global _JSON_MODE_NULL_HANDLER_INSTALLED

    root = logging.getLogger()
    if root.handlers or _JSON_MODE_NULL_HANDLER_INSTALLED:
        return
    root.addHandler(logging.NullHandler())
    _JSON_MODE_NULL_HANDLER_INSTALLED = True


def reset_logging_for_tests() -> None:
    """Test-only: remove the Muno handler."""
    global _MUNO_HANDLER, _CONFIGURED_KEY
    if _MUNO_HANDLER is not None:
        logging.getLogger("muno").removeHandler(_MUNO_HANDLER)
        _MUNO_HANDLER.close()
    _MUNO_HANDLER = None
    _CONFIGURED_KEY = None


__all__ = ["configure_logging", "suppress_lastresort_in_json_mode", "reset_logging_for_tests"]
