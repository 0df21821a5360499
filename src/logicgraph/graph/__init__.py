"""
logicgraph.graph - Region graph compilation.

Exports the clause and branch model, the builder and its cleanup passes,
and the waypoint tooling used before ingestion.
"""

from logicgraph.graph.branches import EMPTY_BRANCH, RequirementBranch, distribute_branches
from logicgraph.graph.builder import (
    CleanupOptions,
    CleanupReport,
    GraphValidationError,
    LabelRegionError,
    RegionGraphBuilder,
)
from logicgraph.graph.classifier import (
    ClassificationModel,
    ModifierClassifier,
    ModifierKind,
    classifier_from_config,
)
from logicgraph.graph.clauses import MENU_REGION, StatefulClause
from logicgraph.graph.dominance import dominates, remove_redundant_branches
from logicgraph.graph.factory import build_world, export_world
from logicgraph.graph.reducer import StateModifierReducer
from logicgraph.graph.regions import (
    Connection,
    GraphLocation,
    GraphWorldDefinition,
    LogicHandling,
    LogicObjectDefinition,
    Region,
    Transition,
)
from logicgraph.graph.serialize import serialize_world
from logicgraph.graph.solver import WaypointSolver
from logicgraph.graph.tokens import MalformedTermError, parse_token
from logicgraph.graph.visualize import build_region_digraph, to_dot
from logicgraph.graph.waypoints import CyclicReferenceError, TraversalPath, WaypointReferenceGraph

__all__ = [
    "EMPTY_BRANCH",
    "MENU_REGION",
    "ClassificationModel",
    "CleanupOptions",
    "CleanupReport",
    "Connection",
    "CyclicReferenceError",
    "GraphLocation",
    "GraphValidationError",
    "GraphWorldDefinition",
    "LabelRegionError",
    "LogicHandling",
    "LogicObjectDefinition",
    "MalformedTermError",
    "ModifierClassifier",
    "ModifierKind",
    "Region",
    "RegionGraphBuilder",
    "RequirementBranch",
    "StateModifierReducer",
    "StatefulClause",
    "Transition",
    "TraversalPath",
    "WaypointReferenceGraph",
    "WaypointSolver",
    "build_region_digraph",
    "build_world",
    "classifier_from_config",
    "distribute_branches",
    "dominates",
    "export_world",
    "parse_token",
    "remove_redundant_branches",
    "serialize_world",
    "to_dot",
]
