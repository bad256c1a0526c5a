"""
muno use command.

SUMMARY: Change the current node
"""

from __future__ import annotations

import argparse
import sys

from muno.cli import OutputFormatter, add_path_arg, add_standard_flags, open_workspace
from muno.core.exceptions import MunoError

SUMMARY = "Change the current node"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_path_arg(parser, help_text="Target node (absolute, relative, or '..')", required=True)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        workspace = open_workspace(args)
        navigator = workspace.navigator
        previous = navigator.get_path()
        # Expand nested configs along the target before the pure lookup.
        target = navigator.get_node(args.path, depth=0).path
        navigator.navigate(target)
        workspace.save()
    except (MunoError, OSError) as e:
        formatter.error(e, error_code="use_error")
        return 1

    formatter.success(
        {"path": target, "previous": previous},
        f"Now at {target}",
    )
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
