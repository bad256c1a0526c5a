"""
muno list command.

SUMMARY: List the direct children of a node
"""

from __future__ import annotations

import argparse
import sys

from muno.cli import OutputFormatter, add_path_arg, add_standard_flags, open_workspace
from muno.cli._render import node_label
from muno.core.exceptions import MunoError

SUMMARY = "List the direct children of a node"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_path_arg(parser, help_text="Node whose children to list (default: current node)")
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        workspace = open_workspace(args)
        navigator = workspace.navigator
        path = navigator.get_node(args.path or navigator.get_path(), depth=0).path
        children = navigator.list_children(path)
    except (MunoError, OSError) as e:
        formatter.error(e, error_code="list_error")
        return 1

    if formatter.json_mode:
        formatter.json_output(
            {"path": path, "children": [child.to_info().to_dict() for child in children]}
        )
        return 0

    if not children:
        formatter.text(f"No children under {path}")
        return 0
    for child in children:
        source = child.repository_url or child.config_file_ref
        label = node_label(child)
        formatter.text(f"{label:<32} {source}".rstrip())
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
