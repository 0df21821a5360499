"""State Modifier Reducer - Shorten modifier runs before graph construction.

Clause modifier lists grow quickly once waypoints are inlined. A few
domain rules shrink them without changing what they can reach:

- consecutive state setters with the same prefix collapse to one
- a run made only of a commuting pair of setters (bench and hot spring
  resets) collapses to one pair, written in a fixed order so equivalent
  clauses compare equal
- an exclusive modifier used twice without its reset in between can never
  be satisfied, so the clause is dropped
- clauses longer than ``max_modifiers`` are dropped as incompletable
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from logicgraph.graph.clauses import StatefulClause
from logicgraph.graph.regions import LogicObjectDefinition
from logicgraph.graph.tokens import SimpleToken, parse_prefix, parse_token

logger = logging.getLogger(__name__)


def modifier_prefix(term: str) -> str:
    """Prefix of a modifier term; non-simple terms are their own prefix."""
    token = parse_token(term)
    if isinstance(token, SimpleToken):
        return parse_prefix(token.name)[0]
    return term


class StateModifierReducer:
    """Applies the reduction rules to clauses and logic objects."""

    def __init__(
        self,
        state_setters: Iterable[str] = (),
        exclusive: dict[str, str] | None = None,
        max_modifiers: int = 10,
        commuting_pairs: Iterable[Iterable[str]] = (),
    ) -> None:
        self.state_setters = set(state_setters)
        self.exclusive = dict(exclusive or {})
        self.commuting_pairs = [tuple(pair) for pair in commuting_pairs]
        self.max_modifiers = max_modifiers

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> StateModifierReducer:
        section = config.get("reducer", {})
        return cls(
            state_setters=section.get("state_setters", []),
            exclusive=section.get("exclusive", {}),
            max_modifiers=int(section.get("max_modifiers", 10)),
            commuting_pairs=section.get("commuting_pairs", []),
        )

    def reduce(self, clause: StatefulClause) -> StatefulClause | None:
        """Reduce one clause; None means the clause should be discarded."""
        modifiers: list[str] = []
        prefixes: list[str] = []
        for term in clause.state_modifiers:
            prefix = modifier_prefix(term)
            if prefix in self.state_setters and prefixes and prefixes[-1] == prefix:
                continue
            modifiers.append(term)
            prefixes.append(prefix)
        modifiers, prefixes = self._collapse_commuting_pairs(modifiers, prefixes)

        for i, prefix in enumerate(prefixes):
            reset = self.exclusive.get(prefix)
            if reset is None:
                continue
            for later in prefixes[i + 1 :]:
                if later == prefix:
                    return None
                if later == reset:
                    break

        if len(modifiers) > self.max_modifiers:
            return None
        return StatefulClause(clause.state_provider, clause.conditions, tuple(modifiers))

    def _commuting_pair(self, first: str, second: str) -> tuple[str, ...] | None:
        for pair in self.commuting_pairs:
            if first != second and {first, second} == set(pair):
                return pair
        return None

    def _collapse_commuting_pairs(
        self, modifiers: list[str], prefixes: list[str]
    ) -> tuple[list[str], list[str]]:
        out_modifiers: list[str] = []
        out_prefixes: list[str] = []
        i = 0
        while i < len(prefixes):
            pair = self._commuting_pair(prefixes[i], prefixes[i + 1]) if i + 1 < len(prefixes) else None
            if pair is None:
                out_modifiers.append(modifiers[i])
                out_prefixes.append(prefixes[i])
                i += 1
                continue
            end = i + 2
            while end < len(prefixes) and prefixes[end] in pair:
                end += 1
            ordered = (i, i + 1) if prefixes[i] == pair[0] else (i + 1, i)
            out_modifiers.extend(modifiers[k] for k in ordered)
            out_prefixes.extend(prefixes[k] for k in ordered)
            i = end
        return out_modifiers, out_prefixes

    def reduce_all(self, clauses: Iterable[StatefulClause]) -> list[StatefulClause]:
        reduced = []
        for clause in clauses:
            result = self.reduce(clause)
            if result is not None:
                reduced.append(result)
        return reduced

    def reduce_objects(
        self, objects: Iterable[LogicObjectDefinition]
    ) -> list[LogicObjectDefinition]:
        """Reduce every object's clauses, logging objects that lose clauses."""
        result = []
        for obj in objects:
            logic = self.reduce_all(obj.logic)
            if len(logic) != len(obj.logic):
                logger.debug(
                    "Reduced %s from %d to %d clauses", obj.name, len(obj.logic), len(logic)
                )
            result.append(
                LogicObjectDefinition(obj.name, logic, obj.handling, obj.is_event_location)
            )
        return result
