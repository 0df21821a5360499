"""Serialize a GraphWorldDefinition to JSON-compatible data and Python source."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

from logicgraph.graph.regions import GraphWorldDefinition

PYTHON_HEADER = "# This file is programmatically generated, do not modify by hand"
_INDENT = "    "
_UPPER = re.compile(r"(?<!^)(?=[A-Z])")

# Mapping fields whose keys are names from the world, not record fields
_NAME_KEYED_FIELDS = frozenset({"TransitionToRegionMap"})


def serialize_world(world: GraphWorldDefinition) -> dict[str, Any]:
    """Convert the world to plain dicts; requirement sets are sorted."""
    return {
        "Regions": [r.to_dict() for r in world.regions],
        "Locations": [loc.to_dict() for loc in world.locations],
        "Transitions": [t.to_dict() for t in world.transitions],
        "TransitionToRegionMap": dict(sorted(world.transition_to_region.items())),
    }


def write_world(world: GraphWorldDefinition, path: Path) -> Path:
    """Write the serialized world as indented JSON, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(serialize_world(world), indent=2) + "\n", encoding="utf-8")
    return path


# ─────────────────────────────────────────────────────────────────────────
# Python module output
# ─────────────────────────────────────────────────────────────────────────


def snake_case(name: str) -> str:
    """``TransitionToRegionMap`` -> ``transition_to_region_map``."""
    return _UPPER.sub("_", name).lower()


def pythonize_world(world: GraphWorldDefinition) -> str:
    """Render the serialized world as a Python module of literal assignments.

    Each top-level field becomes ``snake_name = <literal>``. Record field
    names are snake_cased; region, location and transition names are kept
    verbatim. Containers put one item per line, indented four spaces per
    level, and empty containers stay on one line.
    """
    lines = [PYTHON_HEADER, "", ""]
    for key, value in serialize_world(world).items():
        lines.append(f"{snake_case(key)} = {_literal(value, 0, rename_keys=key not in _NAME_KEYED_FIELDS)}")
        lines.append("")
    return "\n".join(lines) + "\n"


def write_pythonized(world: GraphWorldDefinition, path: Path) -> Path:
    """Write ``pythonize_world`` output, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(pythonize_world(world), encoding="utf-8")
    return path


def _literal(value: Any, depth: int, rename_keys: bool = True) -> str:
    if value is None:
        return "None"
    if isinstance(value, bool):
        return "True" if value else "False"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        return json.dumps(value)
    if isinstance(value, dict):
        items = [
            f"{json.dumps(snake_case(k) if rename_keys else k)}: {_literal(v, depth + 1)}"
            for k, v in value.items()
        ]
        return _container(items, depth, "{", "}")
    if isinstance(value, (list, tuple)):
        return _container([_literal(v, depth + 1) for v in value], depth, "[", "]")
    raise TypeError(f"Cannot render {type(value).__name__} as a Python literal")


def _container(items: list[str], depth: int, open_: str, close: str) -> str:
    if not items:
        return open_ + close
    inner = _INDENT * (depth + 1)
    body = ",\n".join(inner + item for item in items)
    return f"{open_}\n{body}\n{_INDENT * depth}{close}"
