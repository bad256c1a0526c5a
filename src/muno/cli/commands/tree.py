"""
muno tree command.

SUMMARY: Show the workspace tree
"""

from __future__ import annotations

import argparse
import sys

from muno.cli import OutputFormatter, add_path_arg, add_standard_flags, open_workspace
from muno.cli._render import render_tree
from muno.core.exceptions import MunoError

SUMMARY = "Show the workspace tree"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_path_arg(parser, help_text="Subtree to show (default: whole workspace)")
    parser.add_argument(
        "--depth",
        type=int,
        default=None,
        help="Maximum depth to display",
    )
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        workspace = open_workspace(args)
        navigator = workspace.navigator
        if args.path:
            node = navigator.get_node(args.path, depth=args.depth)
        else:
            node = navigator.get_tree(depth=args.depth)
    except (MunoError, OSError) as e:
        formatter.error(e, error_code="tree_error")
        return 1

    if formatter.json_mode:
        formatter.json_output(
            {
                "workspace": workspace.name,
                "current": navigator.get_path(),
                "tree": node.to_info().to_dict(),
                "problems": navigator.problems,
            }
        )
        return 0

    for line in render_tree(node, navigator.get_path()):
        formatter.text(line)
    for path, problem in sorted(navigator.problems.items()):
        print(f"warning: {path}: {problem}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
