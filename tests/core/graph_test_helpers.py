"""Test helpers for black-box region graph testing.

This module provides factories for logic objects and branches, and string
conversion helpers for asserting on the graph through observable output
rather than internal state.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable

from logicgraph.graph.branches import RequirementBranch
from logicgraph.graph.builder import RegionGraphBuilder
from logicgraph.graph.clauses import StatefulClause
from logicgraph.graph.regions import LogicHandling, LogicObjectDefinition

# === Clause and Branch Factories ===


def clause(
    provider: str | None = None,
    *conditions: str,
    modifiers: Iterable[str] = (),
) -> StatefulClause:
    """Factory for clauses: ``clause("Ledge", "Sword", modifiers=["$TAKEDAMAGE"])``."""
    return StatefulClause.of(provider, conditions, modifiers)


def branch(
    *items: str,
    locations: Iterable[str] = (),
    regions: Iterable[str] = (),
    modifiers: Iterable[str] = (),
) -> RequirementBranch:
    """Factory for branches: ``branch("Sword", modifiers=["$TAKEDAMAGE"])``."""
    return RequirementBranch.of(items, locations, regions, modifiers)


# === Logic Object Factories ===


def make_waypoint(name: str, *clauses: StatefulClause) -> LogicObjectDefinition:
    """A Default-handled object (a stateful waypoint or plain region)."""
    return LogicObjectDefinition(name, list(clauses), LogicHandling.DEFAULT)


def make_location(name: str, *clauses: StatefulClause, event: bool = False) -> LogicObjectDefinition:
    return LogicObjectDefinition(name, list(clauses), LogicHandling.LOCATION, event)


def make_transition(name: str, *clauses: StatefulClause) -> LogicObjectDefinition:
    return LogicObjectDefinition(name, list(clauses), LogicHandling.TRANSITION)


def build_builder(*objects: LogicObjectDefinition) -> RegionGraphBuilder:
    """Ingest objects into a fresh builder, in order."""
    builder = RegionGraphBuilder()
    for obj in objects:
        builder.ingest(obj)
    return builder


def write_world_file(path: Path, *objects: LogicObjectDefinition) -> Path:
    """Write objects as a ``{"LogicObjects": [...]}`` JSON file."""
    path.write_text(
        json.dumps({"LogicObjects": [o.to_dict() for o in objects]}, indent=2),
        encoding="utf-8",
    )
    return path


# === String Helpers ===


def logic_string(branches: Iterable[RequirementBranch]) -> str:
    """``(Sword) | (Dash + $TAKEDAMAGE)``; order preserved."""
    return " | ".join(str(b) for b in branches)


def regions_string(builder: RegionGraphBuilder) -> str:
    """Region names with their locations: ``Menu[Apple], Town[]``."""
    return ", ".join(f"{r.name}[{', '.join(r.locations)}]" for r in builder.regions.values())


def exits_string(builder: RegionGraphBuilder, region_name: str) -> str:
    """Exit targets of a region: ``Ledge, Town``."""
    return ", ".join(c.target for c in builder.regions[region_name].exits)


def item_sets(branches: Iterable[RequirementBranch]) -> list[set[str]]:
    return [set(b.item_requirements) for b in branches]
