"""Summary statistics of a finished distribution."""

from dataclasses import dataclass
from fractions import Fraction
from math import sqrt

from src.dice.distribution import Distribution, ZERO

HALF = Fraction(1, 2)


def standard_deviation(variance: Fraction) -> float:
    """Square root of an exact variance, as a float for display."""
    return sqrt(variance)


@dataclass(frozen=True)
class DistributionStatistics:
    """Statistics derived from a Distribution.

    Attributes:
        min: Smallest possible outcome.
        max: Largest possible outcome.
        mean: Exact expected value.
        variance: Exact variance.
        median: Smallest outcome whose cumulative probability reaches 1/2.
        modes: Every outcome with the highest probability, ascending.
        cumulative_distribution: (outcome, P(X <= outcome)) pairs, ending at 1.
    """

    min: int
    max: int
    mean: Fraction
    variance: Fraction
    median: int
    modes: tuple[int, ...]
    cumulative_distribution: tuple[tuple[int, Fraction], ...]

    @property
    def mode(self) -> list[int]:
        """The modes as a fresh list."""
        return list(self.modes)

    @property
    def standard_deviation(self) -> float:
        return standard_deviation(self.variance)


def cumulative_distribution(
    distribution: Distribution,
) -> tuple[tuple[int, Fraction], ...]:
    """Running sum of probability over ascending outcomes."""
    running = ZERO
    pairs = []
    for outcome, probability in distribution:
        running += probability
        pairs.append((outcome, running))
    return tuple(pairs)


def derive_statistics(distribution: Distribution) -> DistributionStatistics:
    """Compute min, max, mean, variance, median, mode and the cdf.

    Examples:
        >>> stats = derive_statistics(Distribution.uniform(1, 4))
        >>> stats.mean, stats.median, stats.mode
        (Fraction(5, 2), 2, [1, 2, 3, 4])
    """
    cumulative = cumulative_distribution(distribution)

    mean = sum((outcome * probability for outcome, probability in distribution), ZERO)
    variance = sum(
        ((outcome - mean) ** 2 * probability for outcome, probability in distribution),
        ZERO,
    )
    median = next(outcome for outcome, running in cumulative if running >= HALF)

    top = max(distribution.probabilities)
    modes = tuple(outcome for outcome, probability in distribution if probability == top)

    return DistributionStatistics(
        min=distribution.lowest,
        max=distribution.highest,
        mean=mean,
        variance=variance,
        median=median,
        modes=modes,
        cumulative_distribution=cumulative,
    )
