"""
logicgraph.config.defaults - Default configuration values
"""

DEFAULT_CONFIG = {
    "input": {
        "world": "",
        "start_term": "",
        "keep_regions": [],
        "keep_regions_file": "",
    },
    "output": {
        "directory": "output",
        "regions_file": "regions.json",
        "python_file": "region_data.py",
        "dot_file": "regionGraph.dot",
    },
    "classifier": {
        "beneficial": ["$BENCHRESET", "$HOTSPRINGRESET", "$REGAINSOUL"],
        "detrimental": ["$EQUIPPEDCHARM", "$TAKEDAMAGE", "$SPENDSOUL", "$SHADESKIP"],
        "mixed": [
            "$WARPTOBENCH",
            "$WARPTOSTART",
            "$STARTRESPAWN",
            "$SAVEQUITRESET",
            "$FLOWERGET",
            "$CASTSPELL",
            "$SLOPEBALL",
            "$SHRIEKPOGO",
        ],
        # Spells not timed both before: and after: a soul refill only cost soul
        "argument_rules": [
            {"prefix": p, "comparison": "no_arg_starts_with", "test": t, "classification": "Detrimental"}
            for p in ("$CASTSPELL", "$SLOPEBALL", "$SHRIEKPOGO")
            for t in ("before:", "after:")
        ],
    },
    "cleanup": {
        "compare_region_requirements": False,
        "merge_logicless_cycles": False,
        "remove_empty_regions": False,
    },
    "waypoints": {
        # Regex patterns (full match) of stateful waypoints to inline
        "inline": [],
    },
    "reducer": {
        "enabled": False,
        "state_setters": [
            "$FLOWERGET",
            "$BENCHRESET",
            "$HOTSPRINGRESET",
            "$SAVEQUITRESET",
            "$STARTRESPAWN",
            "$WARPTOBENCH",
            "$WARPTOSTART",
        ],
        # modifier prefix -> prefix that resets it
        "exclusive": {"$SHADESKIP": "$BENCHRESET"},
        # setter pairs whose runs reduce to one pair, in this order
        "commuting_pairs": [["$BENCHRESET", "$HOTSPRINGRESET"]],
        "max_modifiers": 10,
    },
}
