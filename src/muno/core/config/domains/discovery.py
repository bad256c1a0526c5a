"""Settings for nested-config discovery."""
from __future__ import annotations

from functools import cached_property

from ..base import BaseDomainConfig


class DiscoverySettings(BaseDomainConfig):
    def _config_section(self) -> str:
        return "discovery"

    @cached_property
    def max_depth(self) -> int:
        """Deepest tree path (in segments) that discovery will probe."""
        value = int(self.section.get("max_depth", 32))
        if value < 1:
            raise ValueError("discovery.max_depth must be >= 1")
        return value


__all__ = ["DiscoverySettings"]
