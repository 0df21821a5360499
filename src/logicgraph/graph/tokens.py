"""Term tokens - Shapes of the individual terms in a DNF clause.

Clauses arrive as plain strings. This module turns a single term string
into one of a small closed set of token shapes:

- ConstToken: TRUE / FALSE / ANY / NONE
- ReferenceToken: ``*Name``, a reference to another logic object
- ProjectedToken: ``Name/``, the projection of a stateful term
- ComparisonToken: ``Left<Right``, ``Left>Right`` or ``Left=Right``
- SimpleToken: any other bare term, possibly with ``[arg,...]`` parameters
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

CONST_NAMES = frozenset({"TRUE", "FALSE", "ANY", "NONE"})
COMPARISON_OPERATORS = ("<", ">", "=")

# Characters that only appear in unsplit infix expressions
_EXPRESSION_CHARS = re.compile(r"[\s()+|]")


class MalformedTermError(ValueError):
    """Raised when a term string does not have a recognised token shape."""


@dataclass(frozen=True)
class SimpleToken:
    name: str

    def write(self) -> str:
        return self.name


@dataclass(frozen=True)
class ConstToken:
    name: str

    def write(self) -> str:
        return self.name


@dataclass(frozen=True)
class ReferenceToken:
    """Reference to another named logic object (``*Target``)."""

    target: str

    def write(self) -> str:
        return f"*{self.target}"


@dataclass(frozen=True)
class ProjectedToken:
    """Projection of a stateful term onto a boolean (``Inner/``)."""

    inner: Token

    def write(self) -> str:
        return f"{self.inner.write()}/"


@dataclass(frozen=True)
class ComparisonToken:
    left: str
    operator: str
    right: str

    def write(self) -> str:
        return f"{self.left}{self.operator}{self.right}"


Token = Union[SimpleToken, ConstToken, ReferenceToken, ProjectedToken, ComparisonToken]


def _find_operator(term: str) -> int:
    """Return the index of a comparison operator outside brackets, or -1."""
    depth = 0
    for i, ch in enumerate(term):
        if ch == "[":
            depth += 1
        elif ch == "]":
            depth -= 1
        elif depth == 0 and ch in COMPARISON_OPERATORS:
            return i
    return -1


def parse_token(term: str) -> Token:
    """Parse a single term string into a token.

    Args:
        term: The written form of one term, e.g. ``"*Ledge"`` or ``"$TAKEDAMAGE[2]"``.

    Returns:
        The token for the term.

    Raises:
        MalformedTermError: If the term is empty, still contains infix
            expression syntax, or has unbalanced brackets.
    """
    if not term or _EXPRESSION_CHARS.search(term):
        raise MalformedTermError(f"Not a single term: {term!r}")
    if term.count("[") != term.count("]"):
        raise MalformedTermError(f"Unbalanced brackets in term: {term!r}")

    if term in CONST_NAMES:
        return ConstToken(term)
    if term.endswith("/"):
        return ProjectedToken(parse_token(term[:-1]))
    if term.startswith("*"):
        target = term[1:]
        if not target:
            raise MalformedTermError(f"Reference without a target: {term!r}")
        return ReferenceToken(target)

    op = _find_operator(term)
    if op != -1:
        left, right = term[:op], term[op + 1 :]
        if not left or not right:
            raise MalformedTermError(f"Incomplete comparison: {term!r}")
        return ComparisonToken(left, term[op], right)

    return SimpleToken(term)


def parse_prefix(term: str) -> tuple[str, list[str]]:
    """Split a parameterised term into its prefix and arguments.

    ``$CASTSPELL[1,before:ROOMSOUL]`` -> ``("$CASTSPELL", ["1", "before:ROOMSOUL"])``.
    A term without brackets is its own prefix with no arguments.

    Raises:
        MalformedTermError: If the brackets are misplaced, e.g. a leading
            bracket or trailing text after the closing bracket.
    """
    x = term.find("[")
    y = term.find("]")
    if y < x or (y != -1 and y < len(term) - 1) or x == 0 or (x == -1 and y != -1):
        raise MalformedTermError(f"Not a valid term to find prefix: {term!r}")
    if x == -1:
        return term, []
    inner = term[x + 1 : y]
    args = [a for a in inner.split(",") if a] if inner else []
    return term[:x], args
