"""
muno add command.

SUMMARY: Declare a repository or config node under a parent
"""

from __future__ import annotations

import argparse
import sys

from muno.cli import OutputFormatter, add_standard_flags, open_workspace
from muno.core.exceptions import MunoError
from muno.core.tree import paths
from muno.core.workspace.models import FetchMode

SUMMARY = "Declare a repository or config node under a parent"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("name", help="Name of the new node")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--url", type=str, help="Repository URL")
    source.add_argument("--file", type=str, help="Nested config file to reference")
    parser.add_argument(
        "--lazy",
        action="store_true",
        help="Do not clone until the node is first used",
    )
    parser.add_argument(
        "--parent",
        type=str,
        default=None,
        help="Parent node (default: current node)",
    )
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        workspace = open_workspace(args)
        parent = args.parent or workspace.navigator.get_path()
        node = workspace.add_node(
            parent,
            args.name,
            url=args.url or "",
            file=args.file or "",
            fetch=FetchMode.LAZY if args.lazy else FetchMode.EAGER,
        )
        workspace.save()
    except (MunoError, OSError, ValueError) as e:
        formatter.error(e, error_code="add_error")
        return 1

    formatter.success(
        {
            "node": node.to_dict(),
            "config": workspace.navigator.declaring_config(paths.parent_of(node.path)),
        },
        f"Added {node.path}",
    )
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
