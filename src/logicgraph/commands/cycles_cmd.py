"""
logicgraph.commands.cycles_cmd - Report reference cycles between logic objects.

Cyclic waypoints cannot be inlined by substitution, so this is the first
thing to check when choosing inline patterns.
"""

from __future__ import annotations

import argparse
import re
import sys
from pathlib import Path

from logicgraph.config import get_config
from logicgraph.graph.classifier import classifier_from_config
from logicgraph.graph.deserializer import load_world
from logicgraph.graph.solver import WaypointSolver


def run(args: argparse.Namespace) -> int:
    """Run the cycles command."""
    config = get_config(args.config)
    world_path = args.world or config["input"].get("world")
    if not world_path:
        print("Error: no world definition given; pass WORLD or set input.world", file=sys.stderr)
        return 1

    objects = load_world(Path(world_path))
    if args.pattern:
        matchers = [re.compile(f"^{p}$") for p in args.pattern]
        objects = [o for o in objects if any(m.match(o.name) for m in matchers)]

    graph = WaypointSolver(classifier_from_config(config)).reference_graph(objects)
    cyclic = graph.cyclic_names()
    if not cyclic:
        if not args.quiet:
            print(f"No reference cycles among {len(graph)} objects")
        return 0

    groups: list[str] = []
    for path in graph.find_cycles():
        group = str(path.largest_cycle_group())
        if group not in groups:
            groups.append(group)
    if not groups:
        # every member is referenced by another, so no root leads in
        groups.append(", ".join(sorted(cyclic)))

    print(f"Reference cycles ({len(groups)})")
    print("=" * 60)
    for group in groups:
        print(f"  {group}")
    return 0
