"""Shared pytest fixtures."""

import pytest


@pytest.fixture(autouse=True)
def _clear_logicgraph_env(monkeypatch):
    """Keep developer LOGICGRAPH_* variables out of config tests."""
    import os

    for name in list(os.environ):
        if name.startswith("LOGICGRAPH_"):
            monkeypatch.delenv(name)


@pytest.fixture
def default_config():
    """A private copy of the default configuration."""
    import copy

    from logicgraph.config import DEFAULT_CONFIG

    return copy.deepcopy(DEFAULT_CONFIG)
