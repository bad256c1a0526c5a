"""
muno init command.

SUMMARY: Create a new workspace config in a directory
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from muno.cli import OutputFormatter, add_standard_flags, get_workspace_root
from muno.core.exceptions import MunoError
from muno.core.workspace.manager import Workspace

SUMMARY = "Create a new workspace config in a directory"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "name",
        nargs="?",
        default=None,
        help="Workspace name (default: directory name)",
    )
    parser.add_argument(
        "--repos-dir",
        type=str,
        default=None,
        help="Directory (relative to each node) that holds child repositories",
    )
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        root = get_workspace_root(args) or Path.cwd()
        workspace = Workspace.init(root, name=args.name, repos_dir=args.repos_dir)
    except (MunoError, OSError, ValueError) as e:
        formatter.error(e, error_code="init_error")
        return 1

    formatter.success(
        {
            "workspace": workspace.name,
            "root": str(workspace.root),
            "config": workspace.config_path,
        },
        f"Initialized workspace '{workspace.name}' in {workspace.root}",
    )
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
