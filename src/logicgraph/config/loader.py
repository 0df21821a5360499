"""
logicgraph.config.loader - Configuration file discovery, parsing and merging.

Configuration is read from ``.logicgraph.toml``, merged over
DEFAULT_CONFIG, then overridden by ``LOGICGRAPH_<SECTION>_<KEY>``
environment variables.
"""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any

import tomlkit

from logicgraph.config.defaults import DEFAULT_CONFIG

CONFIG_FILENAME = ".logicgraph.toml"
ENV_PREFIX = "LOGICGRAPH_"


def parse_toml(content: str) -> dict[str, Any]:
    """Parse TOML text into plain Python dicts and lists."""
    return tomlkit.parse(content).unwrap()


def find_config_file(start: Path) -> Path | None:
    """Find ``.logicgraph.toml`` in ``start`` or any parent directory.

    Args:
        start: Directory to start searching from.

    Returns:
        Path to the config file, or None if not found.
    """
    current = Path(start).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def merge_configs(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge ``override`` into a copy of ``base``.

    Nested dicts are merged key by key; any other value in ``override``
    replaces the base value.
    """
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def _try_parse_env_value(value: str) -> Any:
    """Parse an environment value into a list, dict or bool where possible.

    Malformed JSON is returned unchanged as a string.
    """
    if value.lower() == "true":
        return True
    if value.lower() == "false":
        return False
    if value.startswith(("[", "{")):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return value
    return value


def _coerce_to_default(name: str, value: Any, default: Any) -> Any:
    """Convert a parsed override to the type of its DEFAULT_CONFIG entry.

    A plain string for a list setting is split on commas; an int setting
    must parse as an integer.

    Raises:
        ValueError: If an int setting gets a value that is not an integer.
    """
    if isinstance(default, list) and isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    if isinstance(default, int) and not isinstance(default, bool) and isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            raise ValueError(f"{name} must be an integer, got {value!r}") from None
    return value


def _apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Apply ``LOGICGRAPH_<SECTION>_<KEY>`` variables to ``config`` in place.

    ``LOGICGRAPH_CLEANUP_REMOVE_EMPTY_REGIONS=true`` sets
    ``config["cleanup"]["remove_empty_regions"] = True``, and
    ``LOGICGRAPH_INPUT_KEEP_REGIONS=Town,Ledge`` sets a two-item list.
    """
    for name, raw in os.environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        section, _, key = name[len(ENV_PREFIX) :].lower().partition("_")
        if not section or not key:
            continue
        default = DEFAULT_CONFIG.get(section, {}).get(key)
        value = _coerce_to_default(name, _try_parse_env_value(raw), default)
        config.setdefault(section, {})[key] = value
    return config


def load_config(config_path: Path) -> dict[str, Any]:
    """Load a config file merged over the defaults, with env overrides applied.

    Raises:
        FileNotFoundError: If ``config_path`` does not exist.
        tomlkit.exceptions.ParseError: If the file is not valid TOML.
    """
    content = Path(config_path).read_text(encoding="utf-8")
    config = merge_configs(DEFAULT_CONFIG, parse_toml(content))
    return _apply_env_overrides(config)


def get_config(config_path: Path | None = None, start: Path | None = None) -> dict[str, Any]:
    """Return the effective configuration.

    Uses ``config_path`` if given, else the nearest ``.logicgraph.toml``
    above ``start`` (default: the working directory), else the defaults.
    """
    if config_path is None:
        config_path = find_config_file(start or Path.cwd())
    if config_path is None:
        return _apply_env_overrides(copy.deepcopy(DEFAULT_CONFIG))
    return load_config(config_path)
