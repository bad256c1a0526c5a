"""
muno current command.

SUMMARY: Print the current node
"""

from __future__ import annotations

import argparse
import sys

from muno.cli import OutputFormatter, add_standard_flags, open_workspace
from muno.core.exceptions import MunoError

SUMMARY = "Print the current node"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        workspace = open_workspace(args)
        node = workspace.navigator.get_current()
    except (MunoError, OSError) as e:
        formatter.error(e, error_code="current_error")
        return 1

    if formatter.json_mode:
        formatter.json_output(
            {
                "path": node.path,
                "name": node.name,
                "history": workspace.navigator.history,
            }
        )
    else:
        formatter.text(node.path)
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
