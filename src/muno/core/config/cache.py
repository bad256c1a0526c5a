"""Centralized settings caching.

All domain settings accessors read through this cache so a single CLI
invocation loads the YAML layers once.
"""
from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import Any, Dict, Optional

from .manager import ENV_PREFIX, ConfigManager, get_user_config_dir

_config_cache: Dict[str, Dict[str, Any]] = {}


def _cache_key(user_config_dir: Path) -> str:
    # Tests and long-running processes may mutate MUNO_* variables; include
    # them so a cache hit never returns stale settings.
    env_items = sorted((k, v) for k, v in os.environ.items() if k.startswith(ENV_PREFIX))
    env_fp = hashlib.sha256(repr(env_items).encode("utf-8")).hexdigest()[:12]
    return f"{user_config_dir.expanduser().resolve()}:{env_fp}"


def get_cached_config(user_config_dir: Optional[Path] = None) -> Dict[str, Any]:
    """Return merged settings, loading them on first use."""
    directory = user_config_dir or get_user_config_dir()
    key = _cache_key(directory)
    cached = _config_cache.get(key)
    if cached is None:
        cached = ConfigManager(directory).load_config()
        _config_cache[key] = cached
    return cached


def clear_all_caches() -> None:
    """Drop every cached settings snapshot."""
    _config_cache.clear()


__all__ = ["get_cached_config", "clear_all_caches"]
