"""Waypoint Reference Graph - Reference cycles and substitution order.

Waypoints are named logic objects that other objects refer to. Before their
definitions can be substituted into each other we need to know which ones
refer to each other cyclically (those need joint resolution) and in which
order the rest can be substituted.

Example:
    graph = WaypointReferenceGraph()
    graph.update("A", ["B"])
    graph.update("B", ["C"])
    graph.substitution_order()
    # Returns ["C", "B", "A"]
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Iterable, Iterator

logger = logging.getLogger(__name__)


class CyclicReferenceError(Exception):
    """Raised when an ordering is requested for a graph with reference cycles."""

    def __init__(self, cycles: list[TraversalPath]) -> None:
        self.cycles = cycles
        super().__init__(
            "Cyclic waypoint references detected: " + "; ".join(str(c) for c in cycles)
        )


@dataclass(eq=False)
class WaypointReferenceNode:
    """A named node with its outgoing references and incoming referrers."""

    name: str
    references: list[WaypointReferenceNode] = field(default_factory=list)
    referrers: list[WaypointReferenceNode] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"WaypointReferenceNode({self.name!r})"


class TraversalPath:
    """A walk through the reference graph, starting from a root."""

    def __init__(self, nodes: Iterable[WaypointReferenceNode]) -> None:
        self._nodes: list[WaypointReferenceNode] = list(nodes)

    def __iter__(self) -> Iterator[WaypointReferenceNode]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(n.name for n in self._nodes)

    @property
    def is_cycle(self) -> bool:
        """True if some name appears twice on the path."""
        names = self.names
        return len(names) > 1 and len(set(names)) < len(names)

    @property
    def is_complete(self) -> bool:
        """True if the last node references nothing."""
        return not self._nodes[-1].references

    def step(self) -> list[TraversalPath]:
        """Extend the path by each reference of its last node."""
        return [TraversalPath([*self._nodes, ref]) for ref in self._nodes[-1].references]

    def largest_cycle_group(self) -> TraversalPath:
        """Return the repeating segment of a cyclic path.

        For ``A -> B -> C -> B`` this is ``B -> C``.

        Raises:
            ValueError: If the path is not a cycle.
        """
        if not self.is_cycle:
            raise ValueError(f"Path {self} is not a cycle")
        last = self._nodes[-1].name
        for i, node in enumerate(self._nodes):
            if node.name == last:
                return TraversalPath(self._nodes[i:-1])
        raise ValueError(f"Path {self} is not a cycle")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TraversalPath):
            return NotImplemented
        return self.names == other.names

    def __hash__(self) -> int:
        return hash(self.names)

    def __str__(self) -> str:
        return " -> ".join(self.names)

    def __repr__(self) -> str:
        return f"TraversalPath({str(self)!r})"


class WaypointReferenceGraph:
    """Directed graph of "X references Y" relationships between named objects."""

    def __init__(self) -> None:
        self._members: dict[str, WaypointReferenceNode] = {}
        self._roots: dict[str, WaypointReferenceNode] = {}

    @property
    def roots(self) -> list[WaypointReferenceNode]:
        """Nodes nothing references, in creation order."""
        return list(self._roots.values())

    def __contains__(self, name: str) -> bool:
        return name in self._members

    def __len__(self) -> int:
        return len(self._members)

    def get(self, name: str) -> WaypointReferenceNode | None:
        return self._members.get(name)

    def names(self) -> list[str]:
        return list(self._members)

    def update(self, name: str, references: Iterable[str]) -> None:
        """Create or update ``name``, replacing its outgoing references."""
        node = self._members.get(name)
        if node is None:
            node = WaypointReferenceNode(name)
            # a new node is a root until something references it
            self._roots[name] = node
            self._members[name] = node

        for old in node.references:
            if node in old.referrers:
                old.referrers.remove(node)
        node.references.clear()

        for reference in references:
            target = self._members.get(reference)
            if target is None:
                target = WaypointReferenceNode(reference)
                self._members[reference] = target
            else:
                self._roots.pop(reference, None)
            if target not in node.references:
                node.references.append(target)
            if node not in target.referrers:
                target.referrers.append(node)

    def inverse(self) -> WaypointReferenceGraph:
        """Return a graph with every edge reversed."""
        inverse = WaypointReferenceGraph()
        for node in self._members.values():
            inverse.update(node.name, [r.name for r in node.referrers])
        return inverse

    def to_paths(self) -> list[TraversalPath]:
        """Expand every path from every root until it cycles or ends.

        Single-node paths are dropped. Duplicate paths are removed, keeping
        the first occurrence.
        """
        pending = deque(TraversalPath([root]) for root in self._roots.values())
        finished: list[TraversalPath] = []
        while pending:
            path = pending.popleft()
            if path.is_cycle or path.is_complete:
                if len(path) > 1:
                    finished.append(path)
                continue
            pending.extendleft(reversed(path.step()))
        return list(dict.fromkeys(finished))

    def find_cycles(self) -> list[TraversalPath]:
        """Paths from roots that revisit a name."""
        return [p for p in self.to_paths() if p.is_cycle]

    def cyclic_names(self) -> set[str]:
        """Names of every node on a strongly connected cycle.

        Cycles not reachable from any root (every member referenced by
        another member) are found too.
        """
        names: set[str] = set()
        for path in self.find_cycles():
            names.update(path.largest_cycle_group().names)
        # nodes left over by a topological sort sit on or behind a cycle
        leftovers = set(self._members) - set(self._kahn_order())
        for name in leftovers:
            if self._reaches(name, name):
                names.add(name)
        return names

    def substitution_order(self) -> list[str]:
        """Order names so every node comes after all nodes it references.

        Raises:
            CyclicReferenceError: If any reference cycle exists.
        """
        order = self._kahn_order()
        if len(order) != len(self._members):
            cycles = [p.largest_cycle_group() for p in self.find_cycles()]
            if not cycles:
                cycles = [TraversalPath([self._members[n]]) for n in sorted(self.cyclic_names())]
            raise CyclicReferenceError(cycles)
        return order

    def _kahn_order(self) -> list[str]:
        remaining = {name: len(node.references) for name, node in self._members.items()}
        queue = deque(name for name, count in remaining.items() if count == 0)
        order: list[str] = []
        while queue:
            name = queue.popleft()
            order.append(name)
            for referrer in self._members[name].referrers:
                remaining[referrer.name] -= 1
                if remaining[referrer.name] == 0:
                    queue.append(referrer.name)
        return order

    def _reaches(self, start: str, goal: str) -> bool:
        seen: set[str] = set()
        stack = [r.name for r in self._members[start].references]
        while stack:
            name = stack.pop()
            if name == goal:
                return True
            if name in seen:
                continue
            seen.add(name)
            stack.extend(r.name for r in self._members[name].references)
        return False
