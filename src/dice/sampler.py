"""Inverse-CDF sampling from an exact distribution.

The random source is injected so tests can drive rolls deterministically.
Anything with a ``random() -> float`` method returning values in [0, 1)
works, including ``random.Random`` instances and the ``random`` module.
"""

import random
from bisect import bisect_right
from collections.abc import Sequence
from fractions import Fraction
from typing import Protocol, runtime_checkable

from src.dice.exceptions import SemanticError, SemanticErrorKind


@runtime_checkable
class RandomSource(Protocol):
    """Provider of uniform draws in [0, 1)."""

    def random(self) -> float:
        ...


class Sampler:
    """Draws outcomes from a cumulative distribution.

    Args:
        cumulative_distribution: (outcome, P(X <= outcome)) pairs in
            ascending order, ending at exactly 1.
        random_source: Where uniform draws come from. Defaults to the
            process-wide ``random`` module.
    """

    def __init__(
        self,
        cumulative_distribution: Sequence[tuple[int, Fraction]],
        random_source: RandomSource | None = None,
    ) -> None:
        self._outcomes = [outcome for outcome, _ in cumulative_distribution]
        self._thresholds = [running for _, running in cumulative_distribution]
        self.random_source = random_source if random_source is not None else random

    def roll(self) -> int:
        """Return the first outcome whose cumulative probability exceeds a uniform draw."""
        draw = self.random_source.random()
        # Fractions compare exactly against floats
        return self._outcomes[bisect_right(self._thresholds, draw)]

    def roll_many(self, count: int) -> list[int]:
        """Roll ``count`` independent times.

        Raises:
            SemanticError: If ``count`` is negative.
        """
        if count < 0:
            raise SemanticError(
                SemanticErrorKind.NEGATIVE_ROLL_COUNT,
                f"Roll count cannot be negative, got {count}",
            )
        return [self.roll() for _ in range(count)]
