"""
muno remove command.

SUMMARY: Remove a node and everything below it
"""

from __future__ import annotations

import argparse
import sys

from muno.cli import OutputFormatter, add_path_arg, add_standard_flags, open_workspace
from muno.core.exceptions import MunoError

SUMMARY = "Remove a node and everything below it"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_path_arg(parser, help_text="Node to remove", required=True)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        workspace = open_workspace(args)
        removed = workspace.remove_node(args.path)
        workspace.save()
    except (MunoError, OSError) as e:
        formatter.error(e, error_code="remove_error")
        return 1

    formatter.success(
        {"removed": removed, "current": workspace.navigator.get_path()},
        f"Removed {min(removed, key=len)} ({len(removed)} node{'s' if len(removed) != 1 else ''})",
    )
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
