"""Region Graph Builder - Constructs and simplifies the region graph.

The builder is the sole owner of every region, location and transition.
Nodes are addressed by name, so removing a region is a dict removal. Parent
back-references live in an index owned by the builder rather than on the
regions themselves.

Typical use::

    builder = RegionGraphBuilder()
    for obj in objects:
        builder.ingest(obj)
    world = builder.build(classifier, regions_to_keep={"Town"})
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping

from logicgraph.graph.branches import EMPTY_BRANCH, RequirementBranch, distribute_branches
from logicgraph.graph.classifier import ModifierClassifier, ModifierKind
from logicgraph.graph.clauses import MENU_REGION
from logicgraph.graph.dominance import remove_redundant_branches
from logicgraph.graph.regions import (
    Connection,
    GraphLocation,
    GraphWorldDefinition,
    LogicHandling,
    LogicObjectDefinition,
    Region,
    Transition,
)

logger = logging.getLogger(__name__)


class GraphValidationError(Exception):
    """Raised once with every structural inconsistency found by validation.

    Attributes:
        errors: One message per detected problem.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__(
            "One or more validation errors have occurred:\n" + "\n".join(self.errors)
        )


class LabelRegionError(ValueError):
    """Raised when a region cannot be relabelled as the start region."""


@dataclass
class CleanupOptions:
    """Switches for the cleanup fixpoint.

    Attributes:
        compare_region_requirements: Include region requirements in the
            dominance subset test.
        merge_logicless_cycles: Collapse pairs of regions joined by
            unconditional edges in both directions.
        remove_empty_regions: Remove regions without locations or transitions
            by rerouting their incoming edges across their exits.
    """

    compare_region_requirements: bool = False
    merge_logicless_cycles: bool = False
    remove_empty_regions: bool = False

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> CleanupOptions:
        section = config.get("cleanup", {})
        return cls(
            compare_region_requirements=bool(section.get("compare_region_requirements", False)),
            merge_logicless_cycles=bool(section.get("merge_logicless_cycles", False)),
            remove_empty_regions=bool(section.get("remove_empty_regions", False)),
        )


@dataclass
class CleanupReport:
    """What the cleanup fixpoint did."""

    rounds: int = 0
    merged_regions: list[str] = field(default_factory=list)
    absorbed_regions: list[str] = field(default_factory=list)
    removed_regions: list[str] = field(default_factory=list)
    removed_branches: int = 0

    def __str__(self) -> str:
        return (
            f"{self.rounds} rounds, {len(self.merged_regions)} merged, "
            f"{len(self.absorbed_regions)} absorbed, {len(self.removed_regions)} removed, "
            f"{self.removed_branches} redundant branches dropped"
        )


class RegionGraphBuilder:
    """Builds a region graph from logic objects and simplifies it."""

    def __init__(self) -> None:
        self._regions: dict[str, Region] = {}
        self._locations: dict[str, GraphLocation] = {}
        self._transitions: dict[str, Transition] = {}
        # child region name -> parent region names, in insertion order
        self._parents: dict[str, list[str]] = {}
        self._add_region(MENU_REGION)

    # ─────────────────────────────────────────────────────────────────────────
    # Read access
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def regions(self) -> Mapping[str, Region]:
        return MappingProxyType(self._regions)

    @property
    def locations(self) -> Mapping[str, GraphLocation]:
        return MappingProxyType(self._locations)

    @property
    def transitions(self) -> Mapping[str, Transition]:
        return MappingProxyType(self._transitions)

    def parents_of(self, region_name: str) -> list[str]:
        """Names of regions with an exit into ``region_name``."""
        return list(self._parents.get(region_name, []))

    def iter_connections(self) -> Iterator[tuple[str, Connection]]:
        """Iterate (source name, connection) over every edge."""
        for region in self._regions.values():
            for conn in region.iter_exits():
                yield region.name, conn

    # ─────────────────────────────────────────────────────────────────────────
    # Ingestion
    # ─────────────────────────────────────────────────────────────────────────

    def ingest(self, obj: LogicObjectDefinition) -> None:
        """Add a logic object and its clauses to the graph.

        The object gets a region of its own name. Each clause becomes a
        branch on the edge from the clause's state provider to that region.
        """
        region = self._regions.get(obj.name) or self._add_region(obj.name)

        transition: Transition | None = None
        if obj.handling is LogicHandling.LOCATION:
            region.add_location(obj.name)
            self._locations[obj.name] = GraphLocation(obj.name, [EMPTY_BRANCH], obj.is_event_location)
        elif obj.handling is LogicHandling.TRANSITION:
            region.add_transition(obj.name)
            transition = self._transitions.setdefault(obj.name, Transition(obj.name))
        elif obj.handling is not LogicHandling.DEFAULT:
            raise ValueError(f"Unsupported logic handling {obj.handling!r} for {obj.name}")

        for clause in obj.logic:
            parent = clause.parent_region()
            reqs = clause.partition_requirements()
            if transition is not None and parent == obj.name:
                # a self-loop onto a transition is logic on the transition, not an edge
                transition.logic.append(
                    RequirementBranch(reqs.items, reqs.locations, reqs.regions, clause.state_modifiers)
                )
                continue
            self.connect(
                parent,
                reqs.items,
                reqs.locations,
                clause.state_modifiers,
                obj.name,
                region_reqs=reqs.regions,
            )

    def connect(
        self,
        parent: str,
        item_reqs: Iterable[str],
        location_reqs: Iterable[str],
        state_modifiers: Iterable[str],
        target: str,
        region_reqs: Iterable[str] = (),
    ) -> Connection:
        """Add one branch to the edge ``parent -> target``.

        Regions are created on demand. An existing edge between the two
        regions gets the branch appended as another alternative.
        """
        branch = RequirementBranch.of(item_reqs, location_reqs, region_reqs, state_modifiers)
        return self._add_edge(parent, [branch], target)

    def label_region_as_menu(self, region_name: str) -> None:
        """Rebase the start state: reroute every edge into ``region_name`` onto Menu.

        Raises:
            LabelRegionError: If the region is unknown, is Menu, or still owns
                locations, transitions or exits.
        """
        if region_name == MENU_REGION:
            raise LabelRegionError("Menu is already the start region")
        region = self._regions.get(region_name)
        if region is None:
            raise LabelRegionError(f"Cannot label unknown region {region_name} as Menu")
        if region.exits or region.locations or region.transitions:
            raise LabelRegionError(
                f"Should not merge state region {region_name} into Menu with any child objects"
            )

        for parent in self.parents_of(region_name):
            conn = self._regions[parent].exit_to(region_name)
            self._disconnect(parent, region_name)
            if conn is not None:
                self._add_edge(parent, conn.logic, MENU_REGION)
        self._remove_region(region_name)
        logger.info("Relabelled start region %s as %s", region_name, MENU_REGION)

    # ─────────────────────────────────────────────────────────────────────────
    # Validation
    # ─────────────────────────────────────────────────────────────────────────

    def validate(self) -> None:
        """Check location and transition placement.

        Raises:
            GraphValidationError: Listing every problem found.
        """
        errors: list[str] = []
        errors.extend(
            self._placement_errors(
                "transitions", {r.name: r.transitions for r in self._regions.values()}, self._transitions
            )
        )
        errors.extend(
            self._placement_errors(
                "locations", {r.name: r.locations for r in self._regions.values()}, self._locations
            )
        )
        if errors:
            raise GraphValidationError(errors)

    @staticmethod
    def _placement_errors(
        kind: str, placed: dict[str, list[str]], declared: Mapping[str, Any]
    ) -> list[str]:
        errors: list[str] = []
        counts = Counter(name for names in placed.values() for name in names)

        duplicated = [name for name, count in counts.items() if count > 1]
        if duplicated:
            details = []
            for name in duplicated:
                owners = [region for region, names in placed.items() if name in names]
                details.append(f"{name} (in {', '.join(owners)})")
            errors.append(f"The following {kind} appeared in multiple regions: {', '.join(details)}")

        mismatched = set(counts) ^ set(declared)
        if mismatched:
            errors.append(
                f"Expected declared {kind} to exactly match placed {kind}, "
                f"but the following were not matched: {', '.join(sorted(mismatched))}"
            )
        return errors

    # ─────────────────────────────────────────────────────────────────────────
    # Cleanup
    # ─────────────────────────────────────────────────────────────────────────

    def clean(
        self,
        classifier: ModifierClassifier,
        regions_to_keep: Iterable[str] | None = None,
        options: CleanupOptions | None = None,
    ) -> CleanupReport:
        """Run branch elimination and region merging to a fixpoint.

        Each round merges every childless, transition-free, single-parent,
        unprotected region into its parent, then eliminates redundant
        branches again. Every productive round removes at least one region,
        so a graph of N regions needs at most N rounds.

        Args:
            classifier: Oracle for modifier effects.
            regions_to_keep: Regions exempt from deletion by merging.
            options: Optional extra passes and dominance settings.

        Returns:
            A CleanupReport describing the changes.
        """
        options = options or CleanupOptions()
        protected = self._protected_regions(regions_to_keep)
        report = CleanupReport()

        report.removed_branches += self._remove_redundant_branches(classifier, options)
        while True:
            merged = self._run_round(lambda n: self._try_merge_into_parent(n, protected))
            absorbed: list[str] = []
            removed: list[str] = []
            if not merged and options.merge_logicless_cycles:
                absorbed = self._run_round(lambda n: self._try_merge_logicless_cycle(n, protected))
            if not merged and not absorbed and options.remove_empty_regions:
                removed = self._run_round(
                    lambda n: self._try_remove_empty_region(n, classifier, protected)
                )
            if not (merged or absorbed or removed):
                break

            report.rounds += 1
            report.merged_regions.extend(merged)
            report.absorbed_regions.extend(absorbed)
            report.removed_regions.extend(removed)
            logger.debug(
                "Cleanup round %d: merged %s, absorbed %s, removed %s",
                report.rounds,
                merged,
                absorbed,
                removed,
            )
            report.removed_branches += self._remove_redundant_branches(classifier, options)

        self._strip_empty_branches()
        return report

    def build(
        self,
        classifier: ModifierClassifier,
        regions_to_keep: Iterable[str] | None = None,
        options: CleanupOptions | None = None,
    ) -> GraphWorldDefinition:
        """Validate, clean and export the graph.

        Raises:
            GraphValidationError: If validation fails; nothing is cleaned.
        """
        self.validate()
        report = self.clean(classifier, regions_to_keep, options)
        logger.info("Cleanup finished: %s", report)

        transition_to_region = {
            t: region.name for region in self._regions.values() for t in region.transitions
        }
        return GraphWorldDefinition(
            regions=list(self._regions.values()),
            locations=list(self._locations.values()),
            transitions=list(self._transitions.values()),
            transition_to_region=transition_to_region,
        )

    def _run_round(self, attempt) -> list[str]:
        """Apply ``attempt`` to every region still present.

        ``attempt`` returns the name of the region it removed, or None.
        """
        consumed = []
        for name in list(self._regions):
            if name not in self._regions:
                continue
            removed = attempt(name)
            if removed is not None:
                consumed.append(removed)
        return consumed

    def _protected_regions(self, regions_to_keep: Iterable[str] | None) -> set[str]:
        protected = {MENU_REGION, *(regions_to_keep or ())}
        for logic in self._iter_logic_lists():
            for branch in logic:
                protected.update(branch.region_requirements)
        return protected

    def _iter_logic_lists(self) -> Iterator[list[RequirementBranch]]:
        for _, conn in self.iter_connections():
            yield conn.logic
        for location in self._locations.values():
            yield location.logic
        for transition in self._transitions.values():
            yield transition.logic

    def _remove_redundant_branches(
        self, classifier: ModifierClassifier, options: CleanupOptions
    ) -> int:
        return sum(
            remove_redundant_branches(logic, classifier, options.compare_region_requirements)
            for logic in self._iter_logic_lists()
        )

    def _strip_empty_branches(self) -> None:
        # an always-true alternative that stands alone is kept so the list is not emptied
        for logic in self._iter_logic_lists():
            non_empty = [b for b in logic if not b.is_empty]
            logic[:] = non_empty if non_empty else logic[:1]

    def _try_merge_into_parent(self, name: str, protected: set[str]) -> str | None:
        if name in protected:
            return None
        child = self._regions[name]
        if child.exits or child.transitions:
            return None
        parents = self._parents.get(name, [])
        if len(parents) != 1:
            return None

        parent = self._regions[parents[0]]
        conn = parent.exit_to(name)
        edge_logic = conn.logic if conn is not None else []
        self._remove_region(name)
        for location_name in child.locations:
            parent.add_location(location_name)
            location = self._locations[location_name]
            location.logic[:] = distribute_branches(edge_logic, location.logic)
        logger.debug("Merged %s into %s", name, parent.name)
        return name

    def _try_merge_logicless_cycle(self, name: str, protected: set[str]) -> str | None:
        parent = self._regions[name]
        for conn in parent.exits:
            target = conn.target
            if target == name or target in protected:
                continue
            if not all(b.is_empty for b in conn.logic):
                continue
            back = self._regions[target].exit_to(name)
            if back is None or not all(b.is_empty for b in back.logic):
                continue
            self._absorb(parent, self._regions[target])
            return target
        return None

    def _absorb(self, parent: Region, child: Region) -> None:
        """Fold ``child`` into ``parent``; the two are topologically equivalent."""
        for location in child.locations:
            parent.add_location(location)
        for transition in child.transitions:
            parent.add_transition(transition)
        for exit_ in list(child.exits):
            if exit_.target == parent.name:
                continue
            target = parent.name if exit_.target == child.name else exit_.target
            self._add_edge(parent.name, exit_.logic, target)
        for other in self.parents_of(child.name):
            if other in (parent.name, child.name):
                continue
            conn = self._regions[other].exit_to(child.name)
            self._disconnect(other, child.name)
            if conn is not None:
                self._add_edge(other, conn.logic, parent.name)
        self._remove_region(child.name)
        logger.debug("Absorbed %s into %s", child.name, parent.name)

    def _try_remove_empty_region(
        self, name: str, classifier: ModifierClassifier, protected: set[str]
    ) -> str | None:
        region = self._regions[name]
        parents = self.parents_of(name)
        if not region.is_empty or not parents or name in protected:
            return None
        if name in parents:
            # a self-cycle is assumed to modify state, so rerouting is unsafe
            return None

        if not region.exits:
            self._remove_region(name)
            logger.debug("Removed dead-end region %s", name)
            return name

        entrances = [(p, self._regions[p].exit_to(name)) for p in parents]
        exits = list(region.exits)
        self._remove_region(name)
        for parent, entrance in entrances:
            entrance_logic = entrance.logic if entrance is not None else []
            for exit_ in exits:
                branches = distribute_branches(entrance_logic, exit_.logic)
                if parent == exit_.target:
                    # going round to where you started only helps if it improves state
                    branches = [
                        b
                        for b in branches
                        if b.state_modifiers
                        and classifier.classify_many(b.state_modifiers) is not ModifierKind.DETRIMENTAL
                    ]
                    if not branches:
                        continue
                self._add_edge(parent, branches, exit_.target)
        logger.debug("Removed empty region %s by rerouting %d entrances", name, len(entrances))
        return name

    # ─────────────────────────────────────────────────────────────────────────
    # Arena primitives
    # ─────────────────────────────────────────────────────────────────────────

    def _add_region(self, name: str) -> Region:
        region = Region(name)
        self._regions[name] = region
        self._parents.setdefault(name, [])
        return region

    def _add_edge(self, parent: str, branches: list[RequirementBranch], target: str) -> Connection:
        source = self._regions.get(parent) or self._add_region(parent)
        if target not in self._regions:
            self._add_region(target)

        conn = source.exit_to(target)
        if conn is None:
            conn = Connection(target, list(branches))
            source.exits.append(conn)
        else:
            conn.logic.extend(branches)

        parents = self._parents.setdefault(target, [])
        if parent not in parents:
            parents.append(parent)
        return conn

    def _disconnect(self, parent: str, target: str) -> None:
        source = self._regions[parent]
        source.exits[:] = [c for c in source.exits if c.target != target]
        parents = self._parents.get(target)
        if parents and parent in parents:
            parents.remove(parent)

    def _remove_region(self, name: str) -> None:
        region = self._regions[name]
        for parent in self.parents_of(name):
            self._disconnect(parent, name)
        for conn in list(region.exits):
            self._disconnect(name, conn.target)
        del self._regions[name]
        self._parents.pop(name, None)
