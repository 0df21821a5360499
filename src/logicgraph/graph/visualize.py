"""Render the region graph as a networkx digraph and Graphviz DOT text."""

from __future__ import annotations

from pathlib import Path

import networkx as nx

from logicgraph.graph.regions import GraphWorldDefinition


def build_region_digraph(world: GraphWorldDefinition) -> nx.DiGraph:
    """One box node per region labelled with its locations, one edge per exit target."""
    graph = nx.DiGraph()
    for region in world.regions:
        graph.add_node(
            region.name,
            shape="box",
            label="\n".join([region.name, *region.locations]),
        )
    for region in world.regions:
        for conn in region.iter_exits():
            graph.add_edge(region.name, conn.target, branches=len(conn.logic))
    return graph


def _dot_quote(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'


def to_dot(world: GraphWorldDefinition) -> str:
    """DOT source for the region graph.

    Region names may contain characters DOT treats specially (brackets,
    colons), so every id and label is quoted before handing off to pydot.
    """
    graph = build_region_digraph(world)
    quoted = nx.DiGraph()
    for name, data in graph.nodes(data=True):
        quoted.add_node(_dot_quote(name), shape=data["shape"], label=_dot_quote(data["label"]))
    for source, target in graph.edges():
        quoted.add_edge(_dot_quote(source), _dot_quote(target))
    return nx.nx_pydot.to_pydot(quoted).to_string()


def write_dot(world: GraphWorldDefinition, path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(to_dot(world), encoding="utf-8")
    return path
