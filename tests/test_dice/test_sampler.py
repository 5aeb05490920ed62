"""Tests for inverse-CDF sampling."""

from fractions import Fraction

import pytest

from src.dice.exceptions import SemanticError, SemanticErrorKind
from src.dice.sampler import RandomSource, Sampler

D4_CDF = (
    (1, Fraction(1, 4)),
    (2, Fraction(1, 2)),
    (3, Fraction(3, 4)),
    (4, Fraction(1)),
)


class TestSamplerRoll:
    """Tests for single rolls."""

    def test_lowest_draw_gives_lowest_outcome(self, sequence_source):
        """Test a draw of 0 maps to the smallest outcome."""
        assert Sampler(D4_CDF, sequence_source([0.0])).roll() == 1

    def test_threshold_boundaries(self, sequence_source):
        """Test a draw equal to a cumulative step moves to the next outcome."""
        sampler = Sampler(D4_CDF, sequence_source([0.2499, 0.25, 0.5, 0.7499, 0.75]))
        assert [sampler.roll() for _ in range(5)] == [1, 2, 3, 3, 4]

    def test_highest_draw_gives_highest_outcome(self, sequence_source):
        """Test draws just below 1 map to the largest outcome."""
        assert Sampler(D4_CDF, sequence_source([0.9999999999])).roll() == 4

    def test_2d6_first_step(self, two_d6, sequence_source):
        """Test 2d6 switches from 2 to 3 at exactly 1/36."""
        sampler = Sampler(
            two_d6.cumulative_distribution,
            sequence_source([0.0, 1 / 36 - 1e-12, float(Fraction(1, 36)) + 1e-12]),
        )
        assert [sampler.roll() for _ in range(3)] == [2, 2, 3]

    def test_point_distribution(self, sequence_source):
        """Test a single outcome is always returned."""
        sampler = Sampler(((5, Fraction(1)),), sequence_source([0.0, 0.5, 0.99]))
        assert sampler.roll_many(3) == [5, 5, 5]

    def test_default_source_is_random_module(self):
        """Test the global random module is used when nothing is injected."""
        import random

        assert Sampler(D4_CDF).random_source is random

    def test_random_instances_are_sources(self, seeded_rng, sequence_source):
        """Test random.Random satisfies the protocol."""
        assert isinstance(seeded_rng, RandomSource)
        assert isinstance(sequence_source([]), RandomSource)


class TestSamplerRollMany:
    """Tests for repeated rolls."""

    def test_count(self, seeded_rng):
        """Test roll_many returns exactly count values."""
        assert len(Sampler(D4_CDF, seeded_rng).roll_many(17)) == 17

    def test_zero_count(self, sequence_source):
        """Test zero rolls never touches the source."""
        assert Sampler(D4_CDF, sequence_source([])).roll_many(0) == []

    def test_negative_count(self, sequence_source):
        """Test a negative count is rejected."""
        with pytest.raises(SemanticError) as exc_info:
            Sampler(D4_CDF, sequence_source([])).roll_many(-1)
        assert exc_info.value.kind == SemanticErrorKind.NEGATIVE_ROLL_COUNT

    def test_seeded_rolls_repeat(self):
        """Test equal seeds give equal rolls."""
        import random

        first = Sampler(D4_CDF, random.Random(3)).roll_many(20)
        second = Sampler(D4_CDF, random.Random(3)).roll_many(20)
        assert first == second


class TestSamplerFrequencies:
    """Statistical check of sampled frequencies."""

    def test_2d6_chi_square(self, two_d6, two_d6_table, seeded_rng):
        """Test 100000 rolls of 2d6 pass a chi-square test at p = 0.0001."""
        rolls = 100_000
        counts = dict.fromkeys(two_d6_table, 0)
        for value in Sampler(two_d6.cumulative_distribution, seeded_rng).roll_many(rolls):
            counts[value] += 1

        chi_square = sum(
            (counts[value] - rolls * float(p)) ** 2 / (rolls * float(p))
            for value, p in two_d6_table.items()
        )
        # Critical value for 10 degrees of freedom
        assert chi_square < 35.56
