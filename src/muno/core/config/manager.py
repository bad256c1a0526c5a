"""
Muno tool settings (YAML layers plus environment overrides).
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

from muno.core.utils.io import read_yaml
from muno.core.utils.merge import deep_merge
from muno.data import get_data_path

logger = logging.getLogger(__name__)

ENV_PREFIX = "MUNO_"
# Variables read directly by other modules; never treated as setting overrides.
RESERVED_ENV_KEYS = frozenset({"MUNO_CONFIG_HOME", "MUNO_WORKSPACE_ROOT"})


def get_user_config_dir() -> Path:
    """Return the per-user settings directory (``$MUNO_CONFIG_HOME`` or ~/.config/muno)."""
    override = os.environ.get("MUNO_CONFIG_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "muno"


class ConfigManager:
    """Load and merge Muno tool settings.

    Sources (highest to lowest priority):
    1. Environment variables: MUNO_<section>__<key>
    2. User config: <user config dir>/config.yaml
    3. Bundled defaults: muno.data/config/defaults.yaml

    These are settings for the tool itself. Workspace configs (muno.yaml) are
    handled by :mod:`muno.core.workspace.loader`.
    """

    def __init__(self, user_config_dir: Optional[Path] = None) -> None:
        self.core_defaults_path = get_data_path("config", "defaults.yaml")
        self.user_config_dir = user_config_dir or get_user_config_dir()

    @property
    def user_config_path(self) -> Path:
        return self.user_config_dir / "config.yaml"

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        # Settings never silently ignore invalid YAML.
        data = read_yaml(path, default={}, raise_on_error=True)
        if not isinstance(data, dict):
            raise ValueError(f"Settings file must be a YAML mapping: {path}")
        return data

    def load_config(self) -> Dict[str, Any]:
        cfg = self.load_yaml(self.core_defaults_path)
        if self.user_config_path.exists():
            cfg = deep_merge(cfg, self.load_yaml(self.user_config_path))
            logger.debug("Merged user settings from %s", self.user_config_path)
        self.apply_env_overrides(cfg)
        return cfg

    # ---------- environment overrides ----------

    def _coerce_type(self, value: str) -> Any:
        s = value.strip()
        low = s.lower()
        if low in {"true", "false"}:
            return low == "true"
        if low in {"null", "none"}:
            return None
        if re.fullmatch(r"[-+]?\d+", s):
            return int(s)
        if re.fullmatch(r"[-+]?\d*\.\d+", s):
            return float(s)
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except json.JSONDecodeError:
                return s
        return s

    def _iter_env_overrides(self) -> Iterator[Tuple[List[str], Any]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX) or key in RESERVED_ENV_KEYS:
                continue
            raw = key[len(ENV_PREFIX):]
            segs = raw.split("__")
            if not raw or any(seg == "" for seg in segs):
                logger.warning("Ignoring malformed settings override %s", key)
                continue
            yield [seg.lower() for seg in segs], self._coerce_type(os.environ[key])

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> None:
        for path, value in self._iter_env_overrides():
            cur = cfg
            for part in path[:-1]:
                nxt = cur.get(part)
                if not isinstance(nxt, dict):
                    nxt = {}
                    cur[part] = nxt
                cur = nxt
            cur[path[-1]] = value


__all__ = ["ConfigManager", "get_user_config_dir", "ENV_PREFIX"]
