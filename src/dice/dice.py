"""The built Dice value: a distribution plus everything derived from it."""

from __future__ import annotations

from dataclasses import dataclass, field
from fractions import Fraction
from typing import TYPE_CHECKING

from src.dice.distribution import ONE, ZERO, Distribution
from src.dice.sampler import RandomSource, Sampler
from src.dice.statistics import derive_statistics, standard_deviation

if TYPE_CHECKING:
    from src.dice.builder import DiceBuilder


@dataclass(frozen=True)
class ProbAll:
    """Every comparison probability for one value, computed together."""

    lt: Fraction
    lte: Fraction
    eq: Fraction
    gte: Fraction
    gt: Fraction


@dataclass(frozen=True)
class Dice:
    """An exact discrete probability distribution with its statistics.

    Always created by ``DiceBuilder.build()``. Probabilities are Fractions,
    so nothing here is subject to floating point drift.

    Attributes:
        builder_string: Notation that rebuilds an equivalent DiceBuilder.
        min: Smallest possible outcome.
        max: Largest possible outcome.
        mean: Exact expected value.
        variance: Exact variance.
        median: Smallest outcome whose cumulative probability reaches 1/2.
        modes: All most likely outcomes, ascending. ``mode`` gives them as a list.
        distribution: (outcome, probability) pairs, ascending.
        cumulative_distribution: (outcome, P(X <= outcome)) pairs, ascending.
        build_time: Milliseconds spent evaluating the expression.
    """

    builder_string: str
    min: int
    max: int
    mean: Fraction
    variance: Fraction
    median: int
    modes: tuple[int, ...]
    distribution: tuple[tuple[int, Fraction], ...]
    cumulative_distribution: tuple[tuple[int, Fraction], ...]
    build_time: float = field(default=0.0, compare=False)
    random_source: RandomSource | None = field(default=None, compare=False, repr=False)

    @classmethod
    def from_distribution(
        cls,
        distribution: Distribution,
        builder_string: str = "",
        build_time: float = 0.0,
        random_source: RandomSource | None = None,
    ) -> Dice:
        """Derive statistics for ``distribution`` and wrap them up."""
        stats = derive_statistics(distribution)
        return cls(
            builder_string=builder_string,
            min=stats.min,
            max=stats.max,
            mean=stats.mean,
            variance=stats.variance,
            median=stats.median,
            modes=stats.modes,
            distribution=distribution.items,
            cumulative_distribution=stats.cumulative_distribution,
            build_time=build_time,
            random_source=random_source,
        )

    @staticmethod
    def build_from_string(input: str, **build_options) -> Dice:
        """Parse ``input`` and build it. Same as ``build_from_string``."""
        from src.dice.builder import build_from_string

        return build_from_string(input, **build_options)

    @staticmethod
    def builder(input: str) -> DiceBuilder:
        """Parse ``input`` into a DiceBuilder without evaluating it."""
        from src.dice.builder import from_string

        return from_string(input)

    @property
    def mode(self) -> list[int]:
        """All most likely outcomes, as a fresh list."""
        return list(self.modes)

    @property
    def standard_deviation(self) -> float:
        return standard_deviation(self.variance)

    # ------------------------------------------------------------------
    # Sampling
    # ------------------------------------------------------------------

    def _sampler(self, random_source: RandomSource | None) -> Sampler:
        return Sampler(
            self.cumulative_distribution,
            random_source if random_source is not None else self.random_source,
        )

    def roll(self, random_source: RandomSource | None = None) -> int:
        """Roll once.

        Examples:
            >>> import random
            >>> dice = Dice.build_from_string("2d6")
            >>> 2 <= dice.roll(random.Random(7)) <= 12
            True
        """
        return self._sampler(random_source).roll()

    def roll_many(self, count: int, random_source: RandomSource | None = None) -> list[int]:
        """Roll ``count`` times.

        Raises:
            SemanticError: If ``count`` is negative.
        """
        return self._sampler(random_source).roll_many(count)

    # ------------------------------------------------------------------
    # Probabilities
    # ------------------------------------------------------------------

    def prob(self, value: int) -> Fraction:
        """P(X == value)."""
        for outcome, probability in self.distribution:
            if outcome == value:
                return probability
        return ZERO

    def prob_lte(self, value: int) -> Fraction:
        """P(X <= value)."""
        result = ZERO
        for outcome, running in self.cumulative_distribution:
            if outcome > value:
                break
            result = running
        return result

    def prob_lt(self, value: int) -> Fraction:
        """P(X < value)."""
        return self.prob_lte(value - 1)

    def prob_gte(self, value: int) -> Fraction:
        """P(X >= value)."""
        return ONE - self.prob_lt(value)

    def prob_gt(self, value: int) -> Fraction:
        """P(X > value)."""
        return ONE - self.prob_lte(value)

    def prob_all(self, value: int) -> ProbAll:
        """lt, lte, eq, gte and gt for ``value`` from a single cdf lookup."""
        lte = self.prob_lte(value)
        eq = self.prob(value)
        lt = lte - eq
        return ProbAll(lt=lt, lte=lte, eq=eq, gte=ONE - lt, gt=ONE - lte)

    def quantile(self, p: float | Fraction) -> int:
        """Smallest q with P(X <= q) >= p.

        Raises:
            ValueError: If ``p`` is negative.
        """
        if p < 0:
            raise ValueError(f"Quantile level must be non-negative, got {p}")
        if p >= 1:
            return self.max
        for outcome, running in self.cumulative_distribution:
            if running >= p:
                return outcome
        return self.max
