"""Stateful clauses - One conjunctive term of a DNF logic formula.

A clause is partitioned into an optional state provider (the logic object
whose state flows into this one), a set of plain conditions and an ordered
list of state modifiers. Terms are kept in their written form and parsed on
demand with ``logicgraph.graph.tokens``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from logicgraph.graph.classifier import ModifierClassifier, ModifierKind
from logicgraph.graph.tokens import (
    ComparisonToken,
    MalformedTermError,
    ProjectedToken,
    ReferenceToken,
    SimpleToken,
    parse_token,
)

MENU_REGION = "Menu"


@dataclass(frozen=True)
class PartitionedRequirements:
    """Conditions of a clause split by the kind of thing they require."""

    items: frozenset[str]
    locations: frozenset[str]
    regions: frozenset[str]


@dataclass(frozen=True)
class StatefulClause:
    """A single DNF conjunction.

    Attributes:
        state_provider: Written token of the state provider, or None when the
            clause is satisfiable from the start region.
        conditions: Stateless terms that must all hold.
        state_modifiers: Modifier terms, applied in order.
    """

    state_provider: str | None = None
    conditions: frozenset[str] = field(default_factory=frozenset)
    state_modifiers: tuple[str, ...] = ()

    @classmethod
    def of(
        cls,
        state_provider: str | None = None,
        conditions: Iterable[str] = (),
        state_modifiers: Iterable[str] = (),
    ) -> StatefulClause:
        return cls(state_provider, frozenset(conditions), tuple(state_modifiers))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StatefulClause:
        """Build from the ``{"StateProvider", "Conditions", "StateModifiers"}`` form."""
        clause = cls.of(
            data.get("StateProvider"),
            data.get("Conditions", []),
            data.get("StateModifiers", []),
        )
        # fail on malformed terms at load time rather than during ingestion
        for term in clause.to_terms():
            parse_token(term)
        return clause

    def to_dict(self) -> dict[str, Any]:
        return {
            "StateProvider": self.state_provider,
            "Conditions": sorted(self.conditions),
            "StateModifiers": list(self.state_modifiers),
        }

    def to_terms(self) -> list[str]:
        """Return all terms, provider first, conditions sorted, modifiers in order."""
        head = [self.state_provider] if self.state_provider is not None else []
        return [*head, *sorted(self.conditions), *self.state_modifiers]

    def __str__(self) -> str:
        return "(" + " + ".join(self.to_terms()) + ")"

    # ─────────────────────────────────────────────────────────────────────────
    # Graph construction helpers
    # ─────────────────────────────────────────────────────────────────────────

    def parent_region(self) -> str:
        """Name of the region providing state to this clause.

        Raises:
            MalformedTermError: If the provider is not a simple term or a
                reference.
        """
        if self.state_provider is None:
            return MENU_REGION
        token = parse_token(self.state_provider)
        if isinstance(token, SimpleToken):
            return token.name
        if isinstance(token, ReferenceToken):
            return token.target
        raise MalformedTermError(
            f"Tokens of type {type(token).__name__} are not valid region parents: "
            f"{self.state_provider!r}"
        )

    def partition_requirements(self) -> PartitionedRequirements:
        """Split conditions into item, location and region requirements.

        A reference (``*X``) requires location ``X``. A projection (``X/``)
        requires region ``X``, or location ``X`` when it projects a
        reference. Every other term is an item requirement.
        """
        items: set[str] = set()
        locations: set[str] = set()
        regions: set[str] = set()
        for term in self.conditions:
            token = parse_token(term)
            if isinstance(token, ReferenceToken):
                locations.add(token.target)
            elif isinstance(token, ProjectedToken):
                if isinstance(token.inner, ReferenceToken):
                    locations.add(token.inner.target)
                else:
                    regions.add(token.inner.write())
            else:
                items.add(token.write())
        return PartitionedRequirements(frozenset(items), frozenset(locations), frozenset(regions))

    # ─────────────────────────────────────────────────────────────────────────
    # Waypoint substitution
    # ─────────────────────────────────────────────────────────────────────────

    def referenced_names(self) -> set[str]:
        """Names of logic objects this clause references (provider and conditions)."""
        names: set[str] = set()
        if self.state_provider is not None:
            names.add(self.parent_region())
        for term in self.conditions:
            names.update(_names_in(parse_token(term)))
        return names

    def references_in_conditions(self, name: str) -> bool:
        """True if ``name`` is used as a plain condition (not as the provider)."""
        return any(name in _names_in(parse_token(term)) for term in self.conditions)

    def is_self_referential(self, name: str) -> bool:
        """Whether this clause of object ``name`` draws state from ``name`` itself.

        Raises:
            ValueError: If ``name`` appears among the conditions; a boolean
                self-reference cannot be resolved.
        """
        for term in self.conditions:
            token = parse_token(term)
            if isinstance(token, ComparisonToken) and name in (token.left, token.right):
                raise ValueError(f"Unexpected comparison self-reference to {name} in {self}")
            if name in _names_in(token):
                raise ValueError(f"Unexpected boolean self-reference to {name} in {self}")
        return self.state_provider is not None and self.parent_region() == name

    def substitute_state_provider(self, other: StatefulClause) -> StatefulClause:
        """Replace this clause's provider with the clause ``other`` that provides it.

        ``other`` happens first, so its modifiers are placed before ours.
        """
        return StatefulClause(
            other.state_provider,
            other.conditions | self.conditions,
            other.state_modifiers + self.state_modifiers,
        )

    def is_same_or_better_than(self, other: StatefulClause, classifier: ModifierClassifier) -> bool:
        """Whether this clause yields at least as good a state as ``other``
        under no more conditions.

        Both clauses must share a provider. The shorter modifier list must be
        a prefix of the longer one; extra modifiers must be beneficial when
        they are ours and detrimental when they are the other clause's.
        """
        if self.state_provider != other.state_provider:
            return False
        if not self.conditions <= other.conditions:
            return False

        shared = min(len(self.state_modifiers), len(other.state_modifiers))
        if self.state_modifiers[:shared] != other.state_modifiers[:shared]:
            return False
        ours = self.state_modifiers[shared:]
        theirs = other.state_modifiers[shared:]
        if any(classifier.classify_single(m) is not ModifierKind.BENEFICIAL for m in ours):
            return False
        return all(classifier.classify_single(m) is ModifierKind.DETRIMENTAL for m in theirs)


def _names_in(token) -> set[str]:
    """Object names a single condition token refers to."""
    if isinstance(token, ReferenceToken):
        return {token.target}
    if isinstance(token, ProjectedToken):
        return _names_in(token.inner)
    if isinstance(token, SimpleToken):
        return {token.name}
    return set()
