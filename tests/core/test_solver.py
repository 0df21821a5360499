"""Tests for waypoint inlining."""

import logging

import pytest

from logicgraph.graph.solver import WaypointSolver, reduce_clauses
from tests.core.graph_test_helpers import clause, make_location, make_waypoint


def _by_name(objects):
    return {o.name: o for o in objects}


class TestReduceClauses:
    def test_fewer_conditions_wins(self, classifier):
        assert reduce_clauses([clause("P", "A"), clause("P", "A", "B")], classifier) == [
            clause("P", "A")
        ]

    def test_beneficial_extra_wins(self, classifier):
        plain = clause("P", "A")
        rested = clause("P", "A", modifiers=["$BENCHRESET"])

        assert reduce_clauses([plain, rested], classifier) == [rested]

    def test_different_providers_kept(self, classifier):
        clauses = [clause("P", "A"), clause("Q", "A")]

        assert reduce_clauses(clauses, classifier) == clauses


class TestWaypointSolver:
    def test_inlines_single_waypoint(self, classifier):
        objects = [
            make_waypoint("W", clause(None, "Dash", modifiers=["$BENCHRESET"])),
            make_location("Apple", clause("W", "Sword", modifiers=["$TAKEDAMAGE"])),
        ]

        result = WaypointSolver(classifier, ["W"]).solve(objects)

        assert [o.name for o in result] == ["Apple"]
        assert result[0].logic == [
            clause(None, "Dash", "Sword", modifiers=["$BENCHRESET", "$TAKEDAMAGE"])
        ]
        assert result[0].handling is objects[1].handling

    def test_inlines_chain_in_dependency_order(self, classifier):
        objects = [
            make_waypoint("W1", clause("W2", "B")),
            make_waypoint("W2", clause(None, "A")),
            make_location("Apple", clause("*W1", "C")),
        ]

        result = WaypointSolver(classifier, [r"W\d"]).solve(objects)

        assert [o.name for o in result] == ["Apple"]
        assert result[0].logic == [clause(None, "A", "B", "C")]

    def test_waypoint_alternatives_are_reduced(self, classifier):
        objects = [
            make_waypoint("W", clause(None, "A"), clause(None, "A", "B")),
            make_location("Apple", clause("W")),
        ]

        result = WaypointSolver(classifier, ["W"]).solve(objects)

        assert _by_name(result)["Apple"].logic == [clause(None, "A")]

    def test_patterns_must_match_whole_name(self, classifier):
        objects = [make_waypoint("Wall", clause(None)), make_location("Apple", clause("Wall"))]

        result = WaypointSolver(classifier, ["W"]).solve(objects)

        assert [o.name for o in result] == ["Wall", "Apple"]

    def test_locations_are_never_inlined(self, classifier):
        objects = [make_location("W", clause(None)), make_location("Apple", clause("W"))]

        assert WaypointSolver(classifier, ["W"]).solve(objects) == objects

    def test_condition_reference_blocks_inlining(self, classifier, caplog):
        objects = [
            make_waypoint("W", clause(None, "Dash")),
            make_location("Apple", clause("W")),
            make_location("Pear", clause(None, "W")),
        ]

        with caplog.at_level(logging.WARNING, logger="logicgraph.graph.solver"):
            result = WaypointSolver(classifier, ["W"]).solve(objects)

        assert [o.name for o in result] == ["W", "Apple", "Pear"]
        assert _by_name(result)["Apple"].logic == [clause("W")]
        assert "required as a condition by Pear" in caplog.text

    def test_self_loop_blocks_inlining(self, classifier, caplog):
        objects = [
            make_waypoint("W", clause(None, "A"), clause("W", "B")),
            make_location("Apple", clause("W")),
        ]

        with caplog.at_level(logging.WARNING, logger="logicgraph.graph.solver"):
            result = WaypointSolver(classifier, ["W"]).solve(objects)

        assert "W" in _by_name(result)
        assert "refers to its own state" in caplog.text

    def test_boolean_self_reference_raises(self, classifier):
        objects = [make_waypoint("W", clause(None, "W"))]

        with pytest.raises(ValueError):
            WaypointSolver(classifier, ["W"]).solve(objects)

    def test_cyclic_waypoints_are_left_in_place(self, classifier, caplog):
        objects = [
            make_waypoint("W1", clause("W2")),
            make_waypoint("W2", clause(None, "X"), clause("W1", "Y")),
            make_location("Apple", clause("W1")),
        ]

        with caplog.at_level(logging.ERROR, logger="logicgraph.graph.solver"):
            result = WaypointSolver(classifier, [r"W\d"]).solve(objects)

        assert [o.name for o in result] == ["W1", "W2", "Apple"]
        assert "mutually recursive" in caplog.text

    def test_acyclic_waypoint_behind_cycle_is_still_inlined(self, classifier):
        objects = [
            make_waypoint("W1", clause("W2")),
            make_waypoint("W2", clause("W1"), clause("W3", "Y")),
            make_waypoint("W3", clause(None, "Z")),
            make_location("Apple", clause("W3")),
        ]

        result = WaypointSolver(classifier, [r"W\d"]).solve(objects)

        by_name = _by_name(result)
        assert "W3" not in by_name
        assert by_name["Apple"].logic == [clause(None, "Z")]
        assert clause(None, "Y", "Z") in by_name["W2"].logic

    def test_no_patterns_is_a_no_op(self, classifier):
        objects = [make_waypoint("W", clause(None))]

        assert WaypointSolver(classifier).solve(objects) == objects

    def test_reference_graph_over_known_objects(self, classifier):
        objects = [
            make_location("Apple", clause("W", "Sword")),
            make_waypoint("W", clause(None)),
        ]

        graph = WaypointSolver(classifier).reference_graph(objects)

        assert [n.name for n in graph.roots] == ["Apple"]
        assert [n.name for n in graph.get("Apple").references] == ["W"]
        assert "Sword" not in graph
