"""I/O utilities for Muno.

This package provides safe, atomic file operations:
- Core: atomic writes, text I/O
- JSON: state-file read/write
- YAML: workspace-config read/write
"""
from __future__ import annotations

from .core import (
    PathLike,
    atomic_write,
    ensure_parent_dir,
    read_text,
    write_text,
)
from .json import (
    read_json,
    write_json_atomic,
)
from .yaml import (
    dump_yaml_string,
    parse_yaml_bytes,
    read_yaml,
    write_yaml,
)

__all__ = [
    # core
    "PathLike",
    "ensure_parent_dir",
    "atomic_write",
    "read_text",
    "write_text",
    # json
    "read_json",
    "write_json_atomic",
    # yaml
    "read_yaml",
    "write_yaml",
    "parse_yaml_bytes",
    "dump_yaml_string",
]
