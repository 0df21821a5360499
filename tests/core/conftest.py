"""Pytest fixtures for core tests."""

import pytest


@pytest.fixture
def classifier():
    """Classifier built from the default configuration tables."""
    from logicgraph.config import DEFAULT_CONFIG
    from logicgraph.graph.classifier import classifier_from_config

    return classifier_from_config(DEFAULT_CONFIG)


@pytest.fixture
def charm_classifier():
    """Small classifier where charm and damage terms are costs."""
    from logicgraph.graph.classifier import ClassificationModel, ModifierClassifier

    return ModifierClassifier(
        ClassificationModel(
            beneficial={"BenchReset"},
            detrimental={"EquipCharm", "TakeDamage"},
            mixed={"WarpToBench"},
        )
    )


@pytest.fixture
def builder():
    """Fresh RegionGraphBuilder instance."""
    from logicgraph.graph.builder import RegionGraphBuilder

    return RegionGraphBuilder()


@pytest.fixture
def ledge_builder():
    """Menu --(Sword)--> Ledge --(Sword)--> Apple."""
    from tests.core.graph_test_helpers import build_builder, clause, make_location, make_waypoint

    return build_builder(
        make_waypoint("Ledge", clause(None, "Sword")),
        make_location("Apple", clause("Ledge", "Sword")),
    )
