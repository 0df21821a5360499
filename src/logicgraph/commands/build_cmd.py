"""
logicgraph.commands.build_cmd - Compile a world definition into a region graph.
"""

from __future__ import annotations

import argparse

from logicgraph.config import get_config
from logicgraph.graph.deserializer import load_name_set
from logicgraph.graph.factory import build_world, export_world


def run(args: argparse.Namespace) -> int:
    """Run the build command."""
    config = get_config(args.config)

    keep = set(args.keep or [])
    if args.keep_file:
        keep |= load_name_set(args.keep_file)

    world = build_world(
        config,
        world_path=args.world,
        start_term=args.start,
        regions_to_keep=keep,
        inline_patterns=args.inline_waypoint or [],
    )
    written = export_world(world, config, output_dir=args.output, include_dot=not args.no_dot)

    if not args.quiet:
        print(
            f"✓ {len(world.regions)} regions, {len(world.locations)} locations, "
            f"{len(world.transitions)} transitions"
        )
        for path in written:
            print(f"  wrote {path}")
    return 0
