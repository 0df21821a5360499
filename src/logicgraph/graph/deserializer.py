"""Load world definitions and name lists from JSON files."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from logicgraph.graph.regions import LogicObjectDefinition

logger = logging.getLogger(__name__)


def load_world(path: Path) -> list[LogicObjectDefinition]:
    """Read a ``{"LogicObjects": [...]}`` world definition.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the document is not a world definition.
        MalformedTermError: If any clause term cannot be parsed.
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict) or "LogicObjects" not in data:
        raise ValueError(f"{path} is not a world definition: missing 'LogicObjects'")
    objects = [LogicObjectDefinition.from_dict(o) for o in data["LogicObjects"]]
    logger.info("Loaded %d logic objects from %s", len(objects), path)
    return objects


def load_name_set(path: Path) -> set[str]:
    """Read a JSON array of names, e.g. a list of regions to keep."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, list) or not all(isinstance(n, str) for n in data):
        raise ValueError(f"{path} must contain a JSON array of strings")
    return set(data)
