"""
logicgraph.config - Configuration loading and defaults
"""

from logicgraph.config.defaults import DEFAULT_CONFIG
from logicgraph.config.loader import (
    CONFIG_FILENAME,
    _apply_env_overrides,
    _try_parse_env_value,
    find_config_file,
    get_config,
    load_config,
    merge_configs,
    parse_toml,
)

__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_CONFIG",
    "_apply_env_overrides",
    "_try_parse_env_value",
    "find_config_file",
    "get_config",
    "load_config",
    "merge_configs",
    "parse_toml",
]
