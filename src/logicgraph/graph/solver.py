"""Waypoint Solver - Inline stateful waypoints into the objects that use them.

A stateful waypoint that only ever serves as a state provider adds a region
to the graph without adding anything to place in it. Inlining substitutes
its clauses into every clause that draws state from it, so the waypoint can
be dropped before graph construction.

Waypoints that reference each other cyclically cannot be solved by simple
substitution; they are reported and left in place.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable

from logicgraph.graph.classifier import ModifierClassifier
from logicgraph.graph.clauses import StatefulClause
from logicgraph.graph.regions import LogicHandling, LogicObjectDefinition
from logicgraph.graph.waypoints import WaypointReferenceGraph

logger = logging.getLogger(__name__)


def reduce_clauses(
    clauses: list[StatefulClause], classifier: ModifierClassifier
) -> list[StatefulClause]:
    """Drop clauses for which another clause is the same or better."""
    kept = list(clauses)
    i = 0
    while i < len(kept) - 1:
        j = i + 1
        restart = False
        while j < len(kept):
            if kept[j].is_same_or_better_than(kept[i], classifier):
                del kept[i]
                restart = True
                break
            if kept[i].is_same_or_better_than(kept[j], classifier):
                del kept[j]
                continue
            j += 1
        if not restart:
            i += 1
    return kept


class WaypointSolver:
    """Inlines waypoints whose names match any of the given regex patterns."""

    def __init__(self, classifier: ModifierClassifier, patterns: Iterable[str] = ()) -> None:
        self.classifier = classifier
        self._matchers = [re.compile(f"^{p}$") for p in patterns]

    def is_candidate(self, obj: LogicObjectDefinition) -> bool:
        """Only plain (non-location, non-transition) objects can be inlined."""
        if obj.handling is not LogicHandling.DEFAULT:
            return False
        return any(m.match(obj.name) for m in self._matchers)

    def reference_graph(self, objects: list[LogicObjectDefinition]) -> WaypointReferenceGraph:
        """Graph of every object's references to other known objects."""
        known = {o.name for o in objects}
        graph = WaypointReferenceGraph()
        for obj in objects:
            refs: set[str] = set()
            for clause in obj.logic:
                refs.update(clause.referenced_names())
            refs.discard(obj.name)
            graph.update(obj.name, sorted(refs & known))
        return graph

    def solve(self, objects: list[LogicObjectDefinition]) -> list[LogicObjectDefinition]:
        """Return ``objects`` with every solvable candidate inlined and removed."""
        by_name = {o.name: o for o in objects}
        candidates = {o.name for o in objects if self.is_candidate(o)}
        if not candidates:
            return list(objects)

        for name in sorted(candidates):
            if any(c.is_self_referential(name) for c in by_name[name].logic):
                logger.warning("Waypoint %s refers to its own state; not inlining", name)
                candidates.discard(name)
        for obj in objects:
            for clause in obj.logic:
                for name in sorted(candidates):
                    if clause.references_in_conditions(name):
                        logger.warning(
                            "Waypoint %s is required as a condition by %s; not inlining",
                            name,
                            obj.name,
                        )
                        candidates.discard(name)

        provider_refs = {name: self._provider_refs(by_name[name], candidates) for name in candidates}
        graph = WaypointReferenceGraph()
        for name in sorted(candidates):
            graph.update(name, provider_refs[name])
        cyclic = graph.cyclic_names()
        if cyclic:
            groups = {str(p.largest_cycle_group()) for p in graph.find_cycles()}
            for group in sorted(groups or {", ".join(sorted(cyclic))}):
                logger.error(
                    "Waypoints %s are mutually recursive and need joint resolution; not inlining",
                    group,
                )
        candidates -= cyclic

        acyclic = WaypointReferenceGraph()
        for name in sorted(candidates):
            acyclic.update(name, [r for r in provider_refs[name] if r in candidates])

        solved: dict[str, list[StatefulClause]] = {}
        for name in acyclic.substitution_order():
            solved[name] = self._substitute(by_name[name].logic, solved)
            logger.info("Inlined waypoint %s as %d clauses", name, len(solved[name]))

        return [
            LogicObjectDefinition(
                o.name, self._substitute(o.logic, solved), o.handling, o.is_event_location
            )
            for o in objects
            if o.name not in solved
        ]

    @staticmethod
    def _provider_refs(obj: LogicObjectDefinition, candidates: set[str]) -> list[str]:
        refs = {c.parent_region() for c in obj.logic if c.state_provider is not None}
        refs.discard(obj.name)
        return sorted(refs & candidates)

    def _substitute(
        self, clauses: list[StatefulClause], solved: dict[str, list[StatefulClause]]
    ) -> list[StatefulClause]:
        result: list[StatefulClause] = []
        for clause in clauses:
            provider = clause.parent_region() if clause.state_provider is not None else None
            if provider in solved:
                result.extend(clause.substitute_state_provider(s) for s in solved[provider])
            else:
                result.append(clause)
        return reduce_clauses(result, self.classifier)
