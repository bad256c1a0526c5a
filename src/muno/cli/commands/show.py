"""
muno show command.

SUMMARY: Show details of a node
"""

from __future__ import annotations

import argparse
import sys

from muno.cli import OutputFormatter, add_path_arg, add_standard_flags, open_workspace
from muno.core.exceptions import MunoError

SUMMARY = "Show details of a node"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_path_arg(parser, help_text="Node to show (default: current node)")
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        workspace = open_workspace(args)
        navigator = workspace.navigator
        node = navigator.get_node(args.path or navigator.get_path(), depth=1)
        directory = navigator.physical_path(node.path)
    except (MunoError, OSError) as e:
        formatter.error(e, error_code="show_error")
        return 1

    details = {
        "name": node.name,
        "path": node.path,
        "repositoryUrl": node.repository_url,
        "configFileRef": node.config_file_ref,
        "isLazy": node.is_lazy,
        "isCloned": node.is_cloned,
        "isConfigReference": node.is_config_reference,
        "directory": directory,
        "config": navigator.declaring_config(node.path),
        "children": [child.name for child in node.children],
    }
    problem = navigator.problems.get(node.path)
    if problem:
        details["problem"] = problem

    if formatter.json_mode:
        formatter.json_output(details)
        return 0

    formatter.text(node.path)
    formatter.text_kv("name", node.name)
    if node.repository_url:
        formatter.text_kv("url", node.repository_url)
    if node.config_file_ref:
        formatter.text_kv("file", node.config_file_ref)
    formatter.text_kv("fetch", "lazy" if node.is_lazy else "eager")
    formatter.text_kv("cloned", "yes" if node.is_cloned else "no")
    formatter.text_kv("directory", directory)
    if details["config"]:
        formatter.text_kv("config", details["config"])
    formatter.text_kv("children", len(node.children))
    if problem:
        formatter.text_kv("problem", problem)
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
