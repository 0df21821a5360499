"""
logicgraph.commands - CLI command implementations
"""

__all__ = [
    "build_cmd",
    "classify_cmd",
    "config_cmd",
    "cycles_cmd",
]
