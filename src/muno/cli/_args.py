"""Common CLI argument registration utilities."""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_workspace_root_flag(parser: argparse.ArgumentParser) -> None:
    """Add --workspace-root flag for workspace root override."""
    parser.add_argument(
        "--workspace-root",
        type=str,
        help="Override workspace root path",
    )


def add_verbose_flag(parser: argparse.ArgumentParser) -> None:
    """Add --verbose flag."""
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output",
    )


def add_path_arg(
    parser: argparse.ArgumentParser,
    help_text: str = "Tree path (absolute or relative to the current node)",
    required: bool = False,
) -> None:
    """Add the positional tree path argument."""
    if required:
        parser.add_argument("path", help=help_text)
    else:
        parser.add_argument("path", nargs="?", default=None, help=help_text)


def add_standard_flags(parser: argparse.ArgumentParser) -> None:
    """Add --json, --workspace-root and --verbose."""
    add_json_flag(parser)
    add_workspace_root_flag(parser)
    add_verbose_flag(parser)


__all__ = [
    "add_json_flag",
    "add_workspace_root_flag",
    "add_verbose_flag",
    "add_path_arg",
    "add_standard_flags",
]
