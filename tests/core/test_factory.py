"""Tests for the build pipeline: load, inline, ingest, relabel, build, export."""

import json

import pytest

from logicgraph.graph.builder import GraphValidationError
from logicgraph.graph.deserializer import load_name_set, load_world
from logicgraph.graph.factory import build_world, export_world, resolve_keep_regions
from logicgraph.graph.regions import LogicHandling
from logicgraph.graph.tokens import MalformedTermError
from tests.core.graph_test_helpers import (
    branch,
    clause,
    make_location,
    make_waypoint,
    write_world_file,
)


@pytest.fixture
def world_file(tmp_path):
    return write_world_file(
        tmp_path / "world.json",
        make_waypoint("Start", clause(None, "NewGame")),
        make_waypoint("Ledge", clause(None, "Sword")),
        make_location("Apple", clause("Ledge", "Sword")),
        make_waypoint("Can_Dash", clause("Ledge", "Dash")),
        make_location("Pear", clause("Can_Dash", "Wings")),
    )


class TestDeserializer:
    def test_load_world(self, world_file):
        objects = load_world(world_file)

        assert [o.name for o in objects] == ["Start", "Ledge", "Apple", "Can_Dash", "Pear"]
        assert objects[2].handling is LogicHandling.LOCATION
        assert objects[2].logic == [clause("Ledge", "Sword")]

    def test_load_world_rejects_other_documents(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("[]", encoding="utf-8")

        with pytest.raises(ValueError):
            load_world(path)

    def test_load_world_rejects_malformed_terms(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(
            json.dumps({"LogicObjects": [{"Name": "A", "Logic": [{"Conditions": ["A | B"]}]}]}),
            encoding="utf-8",
        )

        with pytest.raises(MalformedTermError):
            load_world(path)

    def test_load_name_set(self, tmp_path):
        path = tmp_path / "keep.json"
        path.write_text('["Town", "Ledge"]', encoding="utf-8")

        assert load_name_set(path) == {"Town", "Ledge"}

    def test_load_name_set_rejects_objects(self, tmp_path):
        path = tmp_path / "keep.json"
        path.write_text('{"Town": 1}', encoding="utf-8")

        with pytest.raises(ValueError):
            load_name_set(path)


class TestBuildWorld:
    def test_build(self, world_file, default_config):
        world = build_world(default_config, world_file)

        assert [r.name for r in world.regions] == ["Menu"]
        assert world.find_region("Menu").locations == ["Apple", "Pear"]
        assert world.find_location("Pear").logic == [branch("Dash", "Sword", "Wings")]

    def test_start_term_relabelled(self, world_file, default_config):
        world = build_world(default_config, world_file, start_term="Start")

        assert [r.name for r in world.regions] == ["Menu"]
        assert world.find_region("Menu").exits[0].target == "Menu"

    def test_keep_regions(self, world_file, default_config, tmp_path):
        keep_file = tmp_path / "keep.json"
        keep_file.write_text('["Can_Dash"]', encoding="utf-8")
        default_config["input"]["keep_regions_file"] = str(keep_file)

        world = build_world(default_config, world_file, regions_to_keep=["Ledge"])

        assert world.find_region("Ledge").locations == ["Apple"]
        assert world.find_region("Can_Dash").locations == ["Pear"]

    def test_inline_patterns(self, world_file, default_config):
        world = build_world(default_config, world_file, regions_to_keep=["Ledge"], inline_patterns=["Can_.*"])

        assert world.find_region("Can_Dash") is None
        assert world.find_region("Ledge").locations == ["Apple", "Pear"]
        assert world.find_location("Pear").logic == [branch("Dash", "Wings")]

    def test_world_from_config(self, world_file, default_config):
        default_config["input"]["world"] = str(world_file)

        assert build_world(default_config).find_location("Apple") is not None

    def test_missing_world(self, default_config):
        with pytest.raises(ValueError):
            build_world(default_config)

    def test_reducer_enabled(self, tmp_path, default_config):
        path = write_world_file(
            tmp_path / "world.json",
            make_location(
                "Apple",
                clause(None, "Sword"),
                clause(None, modifiers=["$SHADESKIP", "$SHADESKIP"]),
            ),
        )
        default_config["reducer"]["enabled"] = True

        world = build_world(default_config, path)

        assert world.find_location("Apple").logic == [branch("Sword")]


class TestResolveKeepRegions:
    def test_union(self, tmp_path):
        keep_file = tmp_path / "keep.json"
        keep_file.write_text('["B"]', encoding="utf-8")
        config = {"input": {"keep_regions": ["A"], "keep_regions_file": str(keep_file)}}

        assert resolve_keep_regions(config, ["C"]) == {"A", "B", "C"}


class TestExportWorld:
    def test_writes_json_python_and_dot(self, world_file, default_config, tmp_path):
        world = build_world(default_config, world_file)

        written = export_world(world, default_config, output_dir=tmp_path / "out")

        assert [p.name for p in written] == ["regions.json", "region_data.py", "regionGraph.dot"]
        assert all(p.exists() for p in written)

    def test_no_dot(self, world_file, default_config, tmp_path):
        world = build_world(default_config, world_file)

        written = export_world(world, default_config, output_dir=tmp_path, include_dot=False)

        assert [p.name for p in written] == ["regions.json", "region_data.py"]


def test_validation_error_is_reported_with_names():
    error = GraphValidationError(["a", "b"])

    assert error.errors == ["a", "b"]
    assert str(error).splitlines()[1:] == ["a", "b"]
