"""
logicgraph.commands.config_cmd - Inspect the effective configuration.
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import tomlkit

from logicgraph.config import find_config_file, get_config


def run(args: argparse.Namespace) -> int:
    """Run the config command."""
    if args.config_action == "path":
        return run_path(args)
    if args.config_action == "show":
        return run_show(args)
    print("Usage: logicgraph config {show|path}")
    return 1


def run_path(args: argparse.Namespace) -> int:
    path = args.config or find_config_file(Path.cwd())
    if path is None:
        print("No .logicgraph.toml found; using defaults")
        return 1
    print(path)
    return 0


def run_show(args: argparse.Namespace) -> int:
    config = get_config(args.config)
    if args.json:
        print(json.dumps(config, indent=2))
    else:
        print(tomlkit.dumps(config), end="")
    return 0
