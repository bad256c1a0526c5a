"""Filesystem accessor used by the workspace tree.

The tree only needs to ask whether a path exists and to read or write bytes.
Keeping that behind a protocol lets discovery run against any backing store.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Protocol, Union, runtime_checkable

from muno.core.utils.io import atomic_write

PathLike = Union[str, Path]


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for the filesystem operations the tree depends on."""

    def exists(self, path: PathLike) -> bool:
        ...

    def is_dir(self, path: PathLike) -> bool:
        ...

    def read_file(self, path: PathLike) -> bytes:
        """Return the raw file contents.

        Raises:
            OSError: If the file cannot be read
        """
        ...

    def write_file(self, path: PathLike, data: bytes) -> None:
        ...

    def real_path(self, path: PathLike) -> str:
        """Return the canonical path with symlinks resolved."""
        ...


class LocalFileSystem:
    """FileSystem backed by the local disk."""

    def exists(self, path: PathLike) -> bool:
        return os.path.exists(path)

    def is_dir(self, path: PathLike) -> bool:
        return os.path.isdir(path)

    def read_file(self, path: PathLike) -> bytes:
        with open(path, "rb") as f:
            return f.read()

    def write_file(self, path: PathLike, data: bytes) -> None:
        text = data.decode("utf-8")
        atomic_write(Path(path), lambda f: f.write(text))

    def real_path(self, path: PathLike) -> str:
        return os.path.realpath(path)


__all__ = ["FileSystem", "LocalFileSystem", "PathLike"]
