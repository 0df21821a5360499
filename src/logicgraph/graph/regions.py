"""Region graph data model.

This module provides the node and edge types of the region graph:
- LogicHandling: How an input logic object is placed in the graph
- LogicObjectDefinition: A named logic object with its DNF clauses
- Connection: A region exit carrying OR'd requirement branches
- Region: A named traversable area owning locations, transitions and exits
- GraphLocation / Transition: Logic-bearing objects placed in a region
- GraphWorldDefinition: The final exported graph
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator

from logicgraph.graph.branches import RequirementBranch
from logicgraph.graph.clauses import StatefulClause


class LogicHandling(Enum):
    """How ingestion treats a logic object."""

    DEFAULT = "Default"
    LOCATION = "Location"
    TRANSITION = "Transition"


@dataclass
class LogicObjectDefinition:
    """A named logic object and its DNF clauses.

    Attributes:
        name: Unique object name; also the name of its region.
        logic: OR'd clauses that grant access to the object.
        handling: Whether the object is a location, a transition or neither.
        is_event_location: Marks a location that is an in-game event.
    """

    name: str
    logic: list[StatefulClause] = field(default_factory=list)
    handling: LogicHandling = LogicHandling.DEFAULT
    is_event_location: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LogicObjectDefinition:
        return cls(
            name=data["Name"],
            logic=[StatefulClause.from_dict(c) for c in data.get("Logic", [])],
            handling=LogicHandling(data.get("Handling", "Default")),
            is_event_location=bool(data.get("IsEventLocation", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "Name": self.name,
            "Logic": [c.to_dict() for c in self.logic],
            "Handling": self.handling.value,
            "IsEventLocation": self.is_event_location,
        }


@dataclass
class Connection:
    """An exit to ``target``; each branch is one way to traverse it."""

    target: str
    logic: list[RequirementBranch] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"Target": self.target, "Logic": [b.to_dict() for b in self.logic]}


@dataclass
class Region:
    """A node of the region graph.

    Locations and transitions keep insertion order with set semantics.
    Parents are not stored here; the builder keeps a parent index.
    """

    name: str
    locations: list[str] = field(default_factory=list)
    transitions: list[str] = field(default_factory=list)
    exits: list[Connection] = field(default_factory=list)

    def iter_exits(self) -> Iterator[Connection]:
        """Iterate over outgoing connections."""
        yield from self.exits

    def exit_to(self, target: str) -> Connection | None:
        """Return the connection to ``target``, or None."""
        for conn in self.exits:
            if conn.target == target:
                return conn
        return None

    def add_location(self, name: str) -> None:
        if name not in self.locations:
            self.locations.append(name)

    def add_transition(self, name: str) -> None:
        if name not in self.transitions:
            self.transitions.append(name)

    @property
    def is_empty(self) -> bool:
        """True if the region holds no locations and no transitions."""
        return not self.locations and not self.transitions

    def to_dict(self) -> dict[str, Any]:
        return {
            "Name": self.name,
            "Locations": list(self.locations),
            "Transitions": list(self.transitions),
            "Exits": [c.to_dict() for c in self.exits],
        }


@dataclass
class GraphLocation:
    """A location; its logic applies after reaching its region."""

    name: str
    logic: list[RequirementBranch] = field(default_factory=list)
    is_event: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "Name": self.name,
            "Logic": [b.to_dict() for b in self.logic],
            "IsEvent": self.is_event,
        }


@dataclass
class Transition:
    """A randomizable transition; its logic applies after reaching its region."""

    name: str
    logic: list[RequirementBranch] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"Name": self.name, "Logic": [b.to_dict() for b in self.logic]}


@dataclass
class GraphWorldDefinition:
    """The exported, simplified graph."""

    regions: list[Region]
    locations: list[GraphLocation]
    transitions: list[Transition] = field(default_factory=list)
    transition_to_region: dict[str, str] = field(default_factory=dict)

    def find_region(self, name: str) -> Region | None:
        for region in self.regions:
            if region.name == name:
                return region
        return None

    def find_location(self, name: str) -> GraphLocation | None:
        for location in self.locations:
            if location.name == name:
                return location
        return None
