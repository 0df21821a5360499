"""Modifier Classifier - Direction of a state modifier's effect.

A state modifier changes some resource or progress pool as a side effect of
traversing logic. For static simplification we only need to know whether a
modifier can only help (BENEFICIAL), can only hurt (DETRIMENTAL), might do
either (MIXED), or does not matter (NONE).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable

from logicgraph.graph.tokens import ComparisonToken, SimpleToken, Token, parse_prefix, parse_token


class ModifierKind(Enum):
    """Effect of a modifier (or modifier sequence) on future progression."""

    NONE = "None"
    BENEFICIAL = "Beneficial"
    DETRIMENTAL = "Detrimental"
    MIXED = "Mixed"

    @classmethod
    def parse(cls, value: str) -> ModifierKind:
        """Parse a kind from its configuration spelling (case-insensitive)."""
        for kind in cls:
            if kind.value.lower() == str(value).lower():
                return kind
        raise ValueError(f"Unknown modifier classification: {value!r}")


class ArgumentComparison(Enum):
    """How an argument rule tests a modifier's arguments."""

    NO_ARG_EQUALS = "no_arg_equals"
    NO_ARG_STARTS_WITH = "no_arg_starts_with"
    NO_ARG_ENDS_WITH = "no_arg_ends_with"


@dataclass(frozen=True)
class ArgumentRule:
    """Classify a prefix by inspecting its arguments.

    The rule matches when the prefix is equal and no argument satisfies the
    comparison against ``test``. Rules are tried in order; the first match
    decides.
    """

    prefix: str
    comparison: ArgumentComparison
    test: str
    classification: ModifierKind

    def matches(self, prefix: str, args: list[str]) -> bool:
        if prefix != self.prefix:
            return False
        if self.comparison is ArgumentComparison.NO_ARG_EQUALS:
            return not any(a == self.test for a in args)
        if self.comparison is ArgumentComparison.NO_ARG_STARTS_WITH:
            return not any(a.startswith(self.test) for a in args)
        return not any(a.endswith(self.test) for a in args)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ArgumentRule:
        return cls(
            prefix=data["prefix"],
            comparison=ArgumentComparison(data.get("comparison", "no_arg_starts_with")),
            test=data["test"],
            classification=ModifierKind.parse(data.get("classification", "Detrimental")),
        )


@dataclass
class ClassificationModel:
    """Prefix tables and argument rules used by the classifier."""

    beneficial: set[str] = field(default_factory=set)
    detrimental: set[str] = field(default_factory=set)
    mixed: set[str] = field(default_factory=set)
    argument_rules: list[ArgumentRule] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ClassificationModel:
        """Build a model from the ``[classifier]`` configuration section."""
        return cls(
            beneficial=set(data.get("beneficial", [])),
            detrimental=set(data.get("detrimental", [])),
            mixed=set(data.get("mixed", [])),
            argument_rules=[ArgumentRule.from_dict(r) for r in data.get("argument_rules", [])],
        )


class ModifierClassifier:
    """Pure oracle from modifier tokens to ModifierKind."""

    def __init__(self, model: ClassificationModel | None = None) -> None:
        self.model = model or ClassificationModel()

    def classify_single(self, token: str | Token) -> ModifierKind:
        """Classify one modifier token."""
        if isinstance(token, str):
            token = parse_token(token)
        if isinstance(token, ComparisonToken):
            # comparisons against state can never be purely beneficial
            return ModifierKind.MIXED
        if not isinstance(token, SimpleToken):
            return ModifierKind.MIXED

        prefix, args = parse_prefix(token.name)
        for rule in self.model.argument_rules:
            if rule.matches(prefix, args):
                return rule.classification

        if prefix in self.model.beneficial:
            return ModifierKind.BENEFICIAL
        if prefix in self.model.detrimental:
            return ModifierKind.DETRIMENTAL
        if prefix in self.model.mixed:
            return ModifierKind.MIXED
        return ModifierKind.NONE

    def classify_many(self, tokens: Iterable[str | Token]) -> ModifierKind:
        """Classify a modifier sequence; MIXED is absorbing."""
        aggregated = ModifierKind.NONE
        for token in tokens:
            kind = self.classify_single(token)
            if kind is ModifierKind.MIXED:
                return ModifierKind.MIXED
            if kind is ModifierKind.BENEFICIAL and aggregated is ModifierKind.DETRIMENTAL:
                return ModifierKind.MIXED
            if kind is ModifierKind.DETRIMENTAL and aggregated is ModifierKind.BENEFICIAL:
                return ModifierKind.MIXED
            if kind is not ModifierKind.NONE:
                aggregated = kind
        return aggregated


def classifier_from_config(config: dict[str, Any]) -> ModifierClassifier:
    """Create a classifier from a full configuration dict."""
    return ModifierClassifier(ClassificationModel.from_dict(config.get("classifier", {})))
