"""Tests for term token parsing."""

import pytest

from logicgraph.graph.tokens import (
    ComparisonToken,
    ConstToken,
    MalformedTermError,
    ProjectedToken,
    ReferenceToken,
    SimpleToken,
    parse_prefix,
    parse_token,
)


class TestParseToken:
    """Tests for parse_token shapes."""

    def test_simple(self):
        assert parse_token("Sword") == SimpleToken("Sword")

    def test_parameterised_simple(self):
        assert parse_token("$CASTSPELL[1,before:ROOMSOUL]") == SimpleToken(
            "$CASTSPELL[1,before:ROOMSOUL]"
        )

    @pytest.mark.parametrize("term", ["TRUE", "FALSE", "ANY", "NONE"])
    def test_constants(self, term):
        assert parse_token(term) == ConstToken(term)

    def test_reference(self):
        assert parse_token("*Ledge") == ReferenceToken("Ledge")

    def test_projection_of_simple(self):
        assert parse_token("Ledge/") == ProjectedToken(SimpleToken("Ledge"))

    def test_projection_of_reference(self):
        assert parse_token("*Ledge/") == ProjectedToken(ReferenceToken("Ledge"))

    def test_comparison(self):
        assert parse_token("SIMPLE>1") == ComparisonToken("SIMPLE", ">", "1")

    def test_operator_inside_brackets_is_not_comparison(self):
        assert isinstance(parse_token("$STATE[a=b]"), SimpleToken)

    @pytest.mark.parametrize("term", ["Sword", "*Ledge", "Ledge/", "SIMPLE<2", "FALSE"])
    def test_write_returns_written_form(self, term):
        assert parse_token(term).write() == term

    @pytest.mark.parametrize(
        "term",
        ["", "Sword + Dash", "(Sword)", "A|B", "$X[1", "*", "<3", "A="],
    )
    def test_malformed_terms_raise(self, term):
        with pytest.raises(MalformedTermError):
            parse_token(term)

    def test_malformed_term_is_value_error(self):
        with pytest.raises(ValueError):
            parse_token("A B")


class TestParsePrefix:
    """Tests for prefix/argument splitting."""

    def test_with_arguments(self):
        assert parse_prefix("$CASTSPELL[1,before:ROOMSOUL]") == (
            "$CASTSPELL",
            ["1", "before:ROOMSOUL"],
        )

    def test_without_brackets(self):
        assert parse_prefix("$BENCHRESET") == ("$BENCHRESET", [])

    def test_empty_brackets(self):
        assert parse_prefix("$SHADESKIP[]") == ("$SHADESKIP", [])

    @pytest.mark.parametrize("term", ["[X]", "$X[1]a", "$X]", "$X]["])
    def test_misplaced_brackets_raise(self, term):
        with pytest.raises(MalformedTermError):
            parse_prefix(term)
