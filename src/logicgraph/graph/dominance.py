"""Dominance - Provable "at least as good" relation between branches.

``dominates(a, b)`` is a one-sided proof: when it holds, anything that can
satisfy ``b`` can satisfy ``a`` at no worse state cost, so ``b`` may be
dropped from an OR'd list containing ``a``. When it does not hold nothing is
known; the answer is always safe.
"""

from __future__ import annotations

import logging
from typing import Sequence

from logicgraph.graph.branches import RequirementBranch
from logicgraph.graph.classifier import ModifierClassifier, ModifierKind

logger = logging.getLogger(__name__)


def has_sublist_with_extras_of_kind(
    sequence: Sequence[str],
    sublist: Sequence[str],
    classifier: ModifierClassifier,
    kind: ModifierKind,
) -> bool:
    """Check that ``sublist`` occurs contiguously in ``sequence`` and that
    every element of ``sequence`` outside the first match classifies as ``kind``.
    """
    if not set(sublist) <= set(sequence):
        return False

    n, m = len(sequence), len(sublist)
    for start in range(n - m + 1):
        if tuple(sequence[start : start + m]) == tuple(sublist):
            extras = [*sequence[:start], *sequence[start + m :]]
            return all(classifier.classify_single(x) is kind for x in extras)
        # no match starting here, so this element is an extra
        if classifier.classify_single(sequence[start]) is not kind:
            return False
    return False


def dominates(
    a: RequirementBranch,
    b: RequirementBranch,
    classifier: ModifierClassifier,
    compare_region_requirements: bool = False,
) -> bool:
    """Return True if branch ``a`` makes branch ``b`` redundant.

    Args:
        a: The candidate better branch.
        b: The candidate redundant branch.
        classifier: Oracle for modifier effects.
        compare_region_requirements: Also require ``a``'s region requirements
            to be a subset of ``b``'s. Off by default.
    """
    if not a.item_requirements <= b.item_requirements:
        return False
    if not a.location_requirements <= b.location_requirements:
        return False
    if compare_region_requirements and not a.region_requirements <= b.region_requirements:
        return False

    if len(a.state_modifiers) >= len(b.state_modifiers):
        # anything a does on top of b must be an improvement
        return has_sublist_with_extras_of_kind(
            a.state_modifiers, b.state_modifiers, classifier, ModifierKind.BENEFICIAL
        )
    # anything b does on top of a must be a cost a avoids
    return has_sublist_with_extras_of_kind(
        b.state_modifiers, a.state_modifiers, classifier, ModifierKind.DETRIMENTAL
    )


def remove_redundant_branches(
    branches: list[RequirementBranch],
    classifier: ModifierClassifier,
    compare_region_requirements: bool = False,
) -> int:
    """Remove dominated branches from ``branches`` in place.

    Single pass over ordered pairs (i, j), i < j. When j dominates i, i is
    dropped and the comparison restarts for the branch now at i. Otherwise
    when i dominates j, j is dropped.

    Returns:
        Number of branches removed.
    """
    removed = 0
    i = 0
    while i < len(branches) - 1:
        j = i + 1
        restart = False
        while j < len(branches):
            left, right = branches[i], branches[j]
            if dominates(right, left, classifier, compare_region_requirements):
                logger.debug("Dropping %s, dominated by %s", left, right)
                del branches[i]
                removed += 1
                restart = True
                break
            if dominates(left, right, classifier, compare_region_requirements):
                logger.debug("Dropping %s, dominated by %s", right, left)
                del branches[j]
                removed += 1
                continue
            j += 1
        if not restart:
            i += 1
    return removed
