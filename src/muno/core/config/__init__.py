"""Tool settings for Muno.

Workspace configs (muno.yaml) live in :mod:`muno.core.workspace`; this
package only covers how the tool itself is configured.
"""
from __future__ import annotations

from .base import BaseDomainConfig
from .cache import clear_all_caches, get_cached_config
from .domains import DiscoverySettings, LoggingSettings, WorkspaceSettings
from .manager import ConfigManager, get_user_config_dir

__all__ = [
    "BaseDomainConfig",
    "ConfigManager",
    "DiscoverySettings",
    "LoggingSettings",
    "WorkspaceSettings",
    "clear_all_caches",
    "get_cached_config",
    "get_user_config_dir",
]
