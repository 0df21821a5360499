"""Tests for the cycles command."""

from logicgraph.cli import main
from tests.core.graph_test_helpers import clause, make_location, make_waypoint, write_world_file


class TestCyclesCommand:
    def test_no_cycles(self, tmp_path, capsys):
        path = write_world_file(
            tmp_path / "world.json",
            make_waypoint("Ledge", clause(None, "Sword")),
            make_location("Apple", clause("Ledge")),
        )

        assert main(["cycles", str(path)]) == 0

        assert "No reference cycles among 2 objects" in capsys.readouterr().out

    def test_reports_cycle_group(self, tmp_path, capsys):
        path = write_world_file(
            tmp_path / "world.json",
            make_waypoint("W1", clause("W2")),
            make_waypoint("W2", clause(None, "X"), clause("W1", "Y")),
            make_location("Apple", clause("W1")),
        )

        assert main(["cycles", str(path)]) == 0

        out = capsys.readouterr().out
        assert "Reference cycles (1)" in out
        assert "  W1 -> W2" in out

    def test_reports_cycle_nothing_else_references(self, tmp_path, capsys):
        path = write_world_file(
            tmp_path / "world.json",
            make_waypoint("W1", clause("W2")),
            make_waypoint("W2", clause("W1")),
        )

        assert main(["cycles", str(path)]) == 0

        assert "  W1, W2" in capsys.readouterr().out

    def test_pattern_filters_objects(self, tmp_path, capsys):
        path = write_world_file(
            tmp_path / "world.json",
            make_waypoint("W1", clause("W2")),
            make_waypoint("W2", clause("W1")),
            make_location("Apple", clause("W1")),
        )

        assert main(["cycles", str(path), "--pattern", "Apple"]) == 0

        assert "No reference cycles among 1 objects" in capsys.readouterr().out

    def test_missing_world(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)

        assert main(["cycles"]) == 1

        assert "no world definition" in capsys.readouterr().err
