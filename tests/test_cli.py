"""Tests for argument parsing and log level selection."""

import logging

import pytest

from logicgraph.cli import configure_logging, create_parser


class TestParser:
    def test_build_options(self):
        args = create_parser().parse_args(
            ["build", "w.json", "--keep", "A", "B", "--inline-waypoint", "X", "--inline-waypoint", "Y"]
        )

        assert args.command == "build"
        assert str(args.world) == "w.json"
        assert args.keep == ["A", "B"]
        assert args.inline_waypoint == ["X", "Y"]
        assert args.no_dot is False

    def test_global_options(self):
        args = create_parser().parse_args(["-vv", "--config", "c.toml", "classify", "$A"])

        assert args.verbose == 2
        assert str(args.config) == "c.toml"
        assert args.tokens == ["$A"]

    def test_classify_needs_a_token(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["classify"])


class TestConfigureLogging:
    @pytest.mark.parametrize(
        "argv, level",
        [
            ([], logging.WARNING),
            (["-v"], logging.INFO),
            (["-vv"], logging.DEBUG),
            (["-q", "-v"], logging.ERROR),
        ],
    )
    def test_levels(self, argv, level, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

        configure_logging(create_parser().parse_args(argv))

        assert calls[0]["level"] == level
