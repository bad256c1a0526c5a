"""Domain-specific settings accessors."""
from __future__ import annotations

from .discovery import DiscoverySettings
from .logging import LoggingSettings
from .workspace import WorkspaceSettings

__all__ = ["DiscoverySettings", "LoggingSettings", "WorkspaceSettings"]
