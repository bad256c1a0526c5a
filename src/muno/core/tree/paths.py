"""Tree path helpers.

Tree paths are slash-delimited addresses rooted at ``/`` (``/team/service``).
Ancestry is always decided segment-wise so that ``/team`` is never treated as
an ancestor of ``/team2/x``.
"""
from __future__ import annotations

from typing import List

ROOT = "/"
SEP = "/"


def segments(path: str) -> List[str]:
    """Return the non-empty segments of ``path`` (``/`` -> [])."""
    return [s for s in path.split(SEP) if s]


def normalize(path: str, current: str = ROOT) -> str:
    """Return the absolute, collapsed form of ``path``.

    Relative paths are resolved against ``current``. ``.`` and ``..`` are
    collapsed and ``..`` never climbs above the root.

    Examples:
        >>> normalize("/team//service/")
        '/team/service'
        >>> normalize("../docs", current="/team/service")
        '/team/docs'
    """
    if not path:
        return normalize(current) if current != ROOT else ROOT
    parts: List[str] = [] if path.startswith(SEP) else segments(current)
    for seg in segments(path):
        if seg == ".":
            continue
        if seg == "..":
            if parts:
                parts.pop()
            continue
        parts.append(seg)
    return SEP + SEP.join(parts)


def join(parent: str, name: str) -> str:
    """Join a child name onto a parent path (``/`` + ``team`` -> ``/team``)."""
    if parent in ("", ROOT):
        return SEP + name
    return parent.rstrip(SEP) + SEP + name


def parent_of(path: str) -> str:
    """Return the structural parent path (the root is its own parent)."""
    parts = segments(path)
    if len(parts) <= 1:
        return ROOT
    return SEP + SEP.join(parts[:-1])


def name_of(path: str) -> str:
    parts = segments(path)
    return parts[-1] if parts else ""


def depth(path: str) -> int:
    return len(segments(path))


def is_ancestor(ancestor: str, path: str) -> bool:
    """True when ``ancestor`` is a proper, separator-bounded ancestor of ``path``."""
    a = segments(ancestor)
    p = segments(path)
    return len(a) < len(p) and p[: len(a)] == a


def ancestors(path: str) -> List[str]:
    """Return the proper ancestors of ``path`` from the root down."""
    parts = segments(path)
    return [SEP + SEP.join(parts[:i]) if i else ROOT for i in range(len(parts))]


__all__ = [
    "ROOT",
    "segments",
    "normalize",
    "join",
    "parent_of",
    "name_of",
    "depth",
    "is_ancestor",
    "ancestors",
]
