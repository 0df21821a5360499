"""Graph Factory - Wires loading, inlining and building together.

This is the single entry point the CLI uses to turn a world definition
file and a configuration dict into a simplified GraphWorldDefinition.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable

from logicgraph.graph.builder import CleanupOptions, RegionGraphBuilder
from logicgraph.graph.classifier import classifier_from_config
from logicgraph.graph.deserializer import load_name_set, load_world
from logicgraph.graph.reducer import StateModifierReducer
from logicgraph.graph.regions import GraphWorldDefinition, LogicObjectDefinition
from logicgraph.graph.serialize import write_pythonized, write_world
from logicgraph.graph.solver import WaypointSolver
from logicgraph.graph.visualize import write_dot

logger = logging.getLogger(__name__)


def resolve_keep_regions(config: dict[str, Any], extra: Iterable[str] = ()) -> set[str]:
    """Union of configured keep regions, the keep-list file and ``extra``."""
    section = config.get("input", {})
    keep = set(section.get("keep_regions", []))
    keep_file = section.get("keep_regions_file")
    if keep_file:
        keep |= load_name_set(Path(keep_file))
    keep.update(extra)
    return keep


def prepare_objects(
    objects: list[LogicObjectDefinition],
    config: dict[str, Any],
    inline_patterns: Iterable[str] = (),
) -> list[LogicObjectDefinition]:
    """Inline configured waypoints, then reduce modifier runs if enabled."""
    classifier = classifier_from_config(config)
    patterns = [*config.get("waypoints", {}).get("inline", []), *inline_patterns]
    if patterns:
        before = len(objects)
        objects = WaypointSolver(classifier, patterns).solve(objects)
        logger.info("Inlined %d waypoints", before - len(objects))
    if config.get("reducer", {}).get("enabled", False):
        objects = StateModifierReducer.from_config(config).reduce_objects(objects)
    return objects


def build_world(
    config: dict[str, Any],
    world_path: Path | None = None,
    start_term: str | None = None,
    regions_to_keep: Iterable[str] = (),
    inline_patterns: Iterable[str] = (),
) -> GraphWorldDefinition:
    """Load a world definition and compile it into a simplified region graph.

    Args:
        config: Full configuration dict.
        world_path: World definition file; defaults to ``input.world``.
        start_term: State region to relabel as Menu; defaults to
            ``input.start_term``.
        regions_to_keep: Extra regions exempt from merging.
        inline_patterns: Extra waypoint name patterns to inline.

    Raises:
        ValueError: If no world definition file is configured.
        GraphValidationError: If the built graph is inconsistent.
    """
    section = config.get("input", {})
    world_path = world_path or (Path(section["world"]) if section.get("world") else None)
    if world_path is None:
        raise ValueError("No world definition given; pass WORLD or set input.world")

    objects = prepare_objects(load_world(world_path), config, inline_patterns)

    builder = RegionGraphBuilder()
    for obj in objects:
        builder.ingest(obj)

    start_term = start_term or section.get("start_term")
    if start_term:
        builder.label_region_as_menu(start_term)

    keep = resolve_keep_regions(config, regions_to_keep)
    world = builder.build(
        classifier_from_config(config),
        regions_to_keep=keep,
        options=CleanupOptions.from_config(config),
    )
    logger.info(
        "Built %d regions, %d locations, %d transitions",
        len(world.regions),
        len(world.locations),
        len(world.transitions),
    )
    return world


def export_world(
    world: GraphWorldDefinition,
    config: dict[str, Any],
    output_dir: Path | None = None,
    include_dot: bool = True,
) -> list[Path]:
    """Write regions JSON, the Python data module and DOT unless disabled.

    Returns the written paths in that order.
    """
    section = config.get("output", {})
    output_dir = Path(output_dir or section.get("directory", "output"))
    written = [
        write_world(world, output_dir / section.get("regions_file", "regions.json")),
        write_pythonized(world, output_dir / section.get("python_file", "region_data.py")),
    ]
    if include_dot:
        written.append(write_dot(world, output_dir / section.get("dot_file", "regionGraph.dot")))
    return written
