from __future__ import annotations

from typing import Any, Dict, Mapping


class MunoError(Exception):
    """Base exception for Muno."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class NodeNotFoundError(MunoError, LookupError):
    """Raised when a tree path is absent from the tree store."""

    def __init__(self, path: str, message: str | None = None) -> None:
        self.path = path
        MunoError.__init__(self, message or f"node not found: {path}", context={"path": path})
        LookupError.__init__(self, message or f"node not found: {path}")


class NodeExistsError(MunoError, ValueError):
    """Raised when adding a node whose path is already taken."""

    def __init__(self, path: str) -> None:
        self.path = path
        MunoError.__init__(self, f"node already exists: {path}", context={"path": path})
        ValueError.__init__(self, f"node already exists: {path}")


class ConfigParseError(MunoError, ValueError):
    """Raised when a workspace configuration file is malformed."""

    def __init__(self, message: str, *, path: str | None = None) -> None:
        self.path = path
        text = f"{path}: {message}" if path else message
        MunoError.__init__(self, text, context={"path": path} if path else None)
        ValueError.__init__(self, text)


class InvalidConfigTypeError(MunoError, TypeError):
    """Raised when the tree is asked to load something that is not a ConfigRecord."""

    def __init__(self, value: object) -> None:
        kind = type(value).__name__
        MunoError.__init__(
            self,
            f"expected ConfigRecord, got {kind}",
            context={"type": kind},
        )
        TypeError.__init__(self, f"expected ConfigRecord, got {kind}")


class WorkspaceNotFoundError(MunoError, FileNotFoundError):
    """Raised when no workspace configuration can be located."""

    def __init__(self, message: str, *, start: str | None = None) -> None:
        MunoError.__init__(self, message, context={"start": start} if start else None)
        FileNotFoundError.__init__(self, message)


__all__ = [
    "MunoError",
    "NodeNotFoundError",
    "NodeExistsError",
    "ConfigParseError",
    "InvalidConfigTypeError",
    "WorkspaceNotFoundError",
]
