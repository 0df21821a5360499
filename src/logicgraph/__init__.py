"""
logicgraph - Stateful logic to region graph compiler

logicgraph reads a world of named logic objects, each guarded by DNF
clauses that may draw on and modify player state, and compiles it into a
graph of regions connected by requirement-bearing exits. The graph is then
simplified by dropping dominated branches and merging single-entrance
regions into their parents until nothing changes.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("logicgraph")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed

from logicgraph.graph import (
    GraphWorldDefinition,
    ModifierClassifier,
    RegionGraphBuilder,
    RequirementBranch,
    StatefulClause,
    build_world,
)

__all__ = [
    "__version__",
    "GraphWorldDefinition",
    "ModifierClassifier",
    "RegionGraphBuilder",
    "RequirementBranch",
    "StatefulClause",
    "build_world",
]
