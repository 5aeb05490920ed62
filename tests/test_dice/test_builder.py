"""Tests for DiceBuilder and the build entry points."""

import logging

import pytest

from src.dice import (
    DiceBuilder,
    DiceBuildingError,
    DomainTooLargeError,
    LexError,
    ParseError,
    ParseErrorKind,
    SemanticError,
    build_from_string,
    from_string,
)
from src.dice.types import BinaryOp, BinaryOpKind, Constant, Die


class TestFromString:
    """Tests for parsing into a builder."""

    def test_holds_expression(self):
        """Test the parsed tree is kept."""
        builder = from_string("2d6+1")
        assert builder.expression == BinaryOp(BinaryOpKind.ADD, Die(2, 6), Constant(1))

    def test_classmethod_and_function_agree(self):
        """Test both spellings give equal builders."""
        assert DiceBuilder.from_string("d8") == from_string("d8")
        assert hash(DiceBuilder.from_string("d8")) == hash(from_string("d8"))

    def test_does_not_evaluate(self):
        """Test semantic problems only show up at build time."""
        builder = from_string("d0")
        with pytest.raises(SemanticError):
            builder.build()

    @pytest.mark.parametrize("notation", ["2x+3", "max()", "(2d6", "1d20+abc"])
    def test_malformed_input(self, notation):
        """Test malformed notation is rejected before building."""
        with pytest.raises(DiceBuildingError):
            from_string(notation)

    def test_error_types(self):
        """Test lexing and parsing failures are distinguishable."""
        with pytest.raises(LexError):
            from_string("2d6!")
        with pytest.raises(ParseError):
            from_string("2d6+")


class TestReconstructString:
    """Tests for turning builders back into notation."""

    @pytest.mark.parametrize(
        "notation,expected",
        [
            ("2d6 + 3", "2d6+3"),
            ("1d20", "d20"),
            ("MAX(D6, d6)", "max(d6,d6)"),
            ("((2+3))*4", "(2+3)*4"),
            ("3W6", "3d6"),
        ],
    )
    def test_normalized(self, notation, expected):
        """Test whitespace, case and redundant parentheses are normalized."""
        assert from_string(notation).reconstruct_string() == expected

    def test_round_trip(self):
        """Test reconstructed notation rebuilds an equal builder."""
        builder = from_string("max(d6, 2d4) - min(3, d8) x d2")
        assert from_string(builder.reconstruct_string()) == builder

    def test_str_and_repr(self):
        """Test str is the notation and repr wraps it."""
        builder = from_string("2d6")
        assert str(builder) == "2d6"
        assert repr(builder) == "DiceBuilder('2d6')"


class TestBuild:
    """Tests for building Dice."""

    def test_builder_string_is_normalized(self):
        """Test the built Dice remembers its reconstructed notation."""
        assert build_from_string(" 1D6 + 1 ").builder_string == "d6+1"

    def test_builder_string_rebuilds(self):
        """Test builder_string parses back into an equal Dice."""
        dice = build_from_string("d2xd6 - max(d4,d4)")
        assert build_from_string(dice.builder_string) == dice

    def test_classmethod_shortcut(self):
        """Test DiceBuilder.build_from_string."""
        assert DiceBuilder.build_from_string("d6").max == 6

    def test_build_is_repeatable(self):
        """Test building twice gives equal results."""
        builder = from_string("3d6")
        assert builder.build() == builder.build()

    def test_max_domain_size(self):
        """Test the domain ceiling is passed to evaluation."""
        with pytest.raises(DomainTooLargeError):
            build_from_string("d100xd100", max_domain_size=500)

    def test_build_logs(self, caplog):
        """Test a debug record is emitted for each build."""
        with caplog.at_level(logging.DEBUG, logger="src.dice.builder"):
            build_from_string("2d6")
        assert any("Built 2d6" in record.getMessage() for record in caplog.records)


class TestLongAndDeepExpressions:
    """Tests for inputs far longer or deeper than everyday notation."""

    def test_thousand_term_sum(self):
        """Test a flat 1000-term sum builds and reconstructs."""
        notation = "+".join(["d2"] + ["1"] * 999)
        dice = build_from_string(notation)
        assert dice.min == 1000
        assert dice.max == 1001
        assert dice.builder_string == notation

    def test_long_dice_sum(self):
        """Test a flat sum of 600 separate dice."""
        dice = build_from_string("+".join(["d2"] * 600))
        assert dice.min == 600
        assert dice.max == 1200
        assert dice.median == 900

    def test_many_unary_minuses(self):
        """Test a long run of minus signs collapses by parity."""
        assert build_from_string("-" * 600 + "d6") == build_from_string("d6")
        assert build_from_string("-" * 601 + "d6") == build_from_string("-d6")

    def test_deep_parentheses_are_a_parse_error(self):
        """Test nesting beyond the stack limit is reported, not crashed on."""
        with pytest.raises(ParseError) as exc_info:
            from_string("(" * 1000 + "d6" + ")" * 1000)
        assert exc_info.value.kind == ParseErrorKind.NESTING_TOO_DEEP

    def test_moderate_nesting_still_works(self):
        """Test ordinary nesting depths parse normally."""
        assert build_from_string("(" * 50 + "d6" + ")" * 50).max == 6
