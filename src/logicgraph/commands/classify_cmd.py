"""
logicgraph.commands.classify_cmd - Show how state modifiers are classified.
"""

from __future__ import annotations

import argparse

from logicgraph.config import get_config
from logicgraph.graph.classifier import classifier_from_config


def run(args: argparse.Namespace) -> int:
    """Run the classify command."""
    classifier = classifier_from_config(get_config(args.config))

    width = max(len(t) for t in args.tokens)
    for token in args.tokens:
        print(f"{token:<{width}}  {classifier.classify_single(token).value}")
    if len(args.tokens) > 1:
        print(f"{'(sequence)':<{width}}  {classifier.classify_many(args.tokens).value}")
    return 0
