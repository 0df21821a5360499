"""Requirement branches - One alternative way to satisfy a piece of logic.

A branch ANDs together item, location and region requirements with an
ordered run of state modifiers. Lists of branches are OR'd.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable


@dataclass(frozen=True)
class RequirementBranch:
    """An immutable conjunction of requirements.

    Attributes:
        item_requirements: Items (or other plain terms) that must be held.
        location_requirements: Logic objects that must be reachable first.
        region_requirements: Stateful regions whose state must be reachable.
        state_modifiers: Modifiers applied in order; order is significant.
    """

    item_requirements: frozenset[str] = field(default_factory=frozenset)
    location_requirements: frozenset[str] = field(default_factory=frozenset)
    region_requirements: frozenset[str] = field(default_factory=frozenset)
    state_modifiers: tuple[str, ...] = ()

    @classmethod
    def of(
        cls,
        items: Iterable[str] = (),
        locations: Iterable[str] = (),
        regions: Iterable[str] = (),
        modifiers: Iterable[str] = (),
    ) -> RequirementBranch:
        """Build a branch from arbitrary iterables."""
        return cls(frozenset(items), frozenset(locations), frozenset(regions), tuple(modifiers))

    @property
    def is_empty(self) -> bool:
        """True if the branch requires nothing and modifies nothing."""
        return not (
            self.item_requirements
            or self.location_requirements
            or self.region_requirements
            or self.state_modifiers
        )

    def __add__(self, other: RequirementBranch) -> RequirementBranch:
        """Combine two branches: first satisfy self, then other."""
        if not isinstance(other, RequirementBranch):
            return NotImplemented
        return RequirementBranch(
            self.item_requirements | other.item_requirements,
            self.location_requirements | other.location_requirements,
            self.region_requirements | other.region_requirements,
            self.state_modifiers + other.state_modifiers,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize with sorted requirement sets for stable output."""
        return {
            "ItemRequirements": sorted(self.item_requirements),
            "LocationRequirements": sorted(self.location_requirements),
            "RegionRequirements": sorted(self.region_requirements),
            "StateModifiers": list(self.state_modifiers),
        }

    def __str__(self) -> str:
        parts = [
            *sorted(self.item_requirements),
            *(f"*{x}" for x in sorted(self.location_requirements)),
            *(f"{x}/" for x in sorted(self.region_requirements)),
            *self.state_modifiers,
        ]
        return "(" + " + ".join(parts) + ")" if parts else "(TRUE)"


EMPTY_BRANCH = RequirementBranch()


def distribute_branches(
    left: list[RequirementBranch], right: list[RequirementBranch]
) -> list[RequirementBranch]:
    """Return the cross product ``l + r`` of two OR'd branch lists.

    An empty list carries no requirements, so the other side is returned
    unchanged.
    """
    if not left:
        return list(right)
    if not right:
        return list(left)
    return [lhs + rhs for lhs in left for rhs in right]
