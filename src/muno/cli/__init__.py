"""
Muno CLI package.

Commands are auto-discovered from ``muno/cli/commands``.

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
- _utils: Shared CLI utilities
- _render: Text rendering of the workspace tree
"""
from ._output import OutputFormatter
from ._args import (
    add_json_flag,
    add_path_arg,
    add_standard_flags,
    add_verbose_flag,
    add_workspace_root_flag,
)
from ._utils import get_workspace_root, open_workspace, setup_logging

__all__ = [
    # Output formatting
    "OutputFormatter",
    # Argument helpers
    "add_json_flag",
    "add_path_arg",
    "add_standard_flags",
    "add_verbose_flag",
    "add_workspace_root_flag",
    # Utilities
    "get_workspace_root",
    "open_workspace",
    "setup_logging",
]
