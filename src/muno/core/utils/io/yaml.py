"""YAML I/O with atomic writes."""
from __future__ import annotations

import fcntl
from pathlib import Path
from typing import Any, TextIO

import yaml

from .core import atomic_write


def read_yaml(path: Path, default: Any = None, raise_on_error: bool = False) -> Any:
    """Read a YAML file.

    Returns ``default`` if the file is missing, empty or invalid, unless
    ``raise_on_error`` is True.

    Examples:
        >>> settings = read_yaml(Path("config.yaml"), default={})
        >>> assert isinstance(settings, dict)
    """
    path = Path(path)
    if not path.exists():
        if raise_on_error:
            raise FileNotFoundError(f"File not found: {path}")
        return default

    try:
        with open(path, "r", encoding="utf-8") as f:
            fcntl.flock(f.fileno(), fcntl.LOCK_SH)
            data = yaml.safe_load(f)
            fcntl.flock(f.fileno(), fcntl.LOCK_UN)
        return data if data is not None else default
    except (OSError, yaml.YAMLError):
        if raise_on_error:
            raise
        return default


def parse_yaml_bytes(content: bytes | str) -> Any:
    """Parse YAML from raw bytes or text.

    Unlike :func:`read_yaml` this never swallows errors: callers decide how a
    malformed document is treated.

    Raises:
        yaml.YAMLError: If the content is not valid YAML
        UnicodeDecodeError: If bytes are not valid UTF-8
    """
    if isinstance(content, bytes):
        content = content.decode("utf-8")
    return yaml.safe_load(content)


def dump_yaml_string(data: Any, sort_keys: bool = False) -> str:
    """Dump data to a block-style YAML string."""
    return yaml.safe_dump(
        data,
        default_flow_style=False,
        sort_keys=sort_keys,
        allow_unicode=True,
    )


def write_yaml(path: Path, data: Any, sort_keys: bool = False) -> None:
    """Atomically write YAML data to ``path``.

    Key order is preserved by default so that workspace configs keep the
    ``workspace`` section ahead of ``nodes``.
    """

    def _writer(f: TextIO) -> None:
        f.write(dump_yaml_string(data, sort_keys=sort_keys))

    atomic_write(Path(path), _writer)


__all__ = [
    "read_yaml",
    "write_yaml",
    "parse_yaml_bytes",
    "dump_yaml_string",
]
