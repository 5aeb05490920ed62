"""Exact discrete probability distributions over integers.

Probabilities are ``fractions.Fraction`` values, so every operation is exact
no matter how deeply expressions nest. A Distribution is immutable: each
operation returns a new one.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from fractions import Fraction
from math import prod


ZERO = Fraction(0)
ONE = Fraction(1)


def _accumulate(
    pairs: Iterable[tuple[int, Fraction]],
) -> dict[int, Fraction]:
    """Sum probabilities of equal outcomes."""
    totals: dict[int, Fraction] = defaultdict(Fraction)
    for outcome, probability in pairs:
        totals[outcome] += probability
    return totals


class Distribution:
    """Probability mass function over integer outcomes.

    Invariants, checked on construction:
        - outcomes are unique and stored in ascending order
        - every stored probability is strictly positive
        - probabilities sum to exactly 1
    """

    __slots__ = ("_items", "_lookup", "_hash")

    def __init__(self, mapping: Mapping[int, Fraction]) -> None:
        items = tuple(
            (int(outcome), Fraction(probability))
            for outcome, probability in sorted(mapping.items())
            if probability != 0
        )
        if not items:
            raise ValueError("A distribution needs at least one outcome")
        if any(probability < 0 for _, probability in items):
            raise ValueError("Probabilities cannot be negative")
        total = sum((probability for _, probability in items), ZERO)
        if total != ONE:
            raise ValueError(f"Probabilities must sum to 1, got {total}")

        self._items = items
        self._lookup = dict(items)
        self._hash: int | None = None

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def point(cls, value: int) -> Distribution:
        """All probability on a single value."""
        return cls({value: ONE})

    @classmethod
    def uniform(cls, low: int, high: int) -> Distribution:
        """Fair die over the integer interval [low, high]."""
        if high < low:
            raise ValueError(f"Empty interval [{low}, {high}]")
        probability = Fraction(1, high - low + 1)
        return cls({value: probability for value in range(low, high + 1)})

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[int, Fraction]]) -> Distribution:
        """Build from (outcome, probability) pairs, merging duplicates."""
        return cls(_accumulate(pairs))

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def items(self) -> tuple[tuple[int, Fraction], ...]:
        """(outcome, probability) pairs in ascending outcome order."""
        return self._items

    @property
    def outcomes(self) -> tuple[int, ...]:
        return tuple(outcome for outcome, _ in self._items)

    @property
    def probabilities(self) -> tuple[Fraction, ...]:
        return tuple(probability for _, probability in self._items)

    @property
    def lowest(self) -> int:
        return self._items[0][0]

    @property
    def highest(self) -> int:
        return self._items[-1][0]

    def probability(self, outcome: int) -> Fraction:
        """P(X == outcome), zero for values outside the domain."""
        return self._lookup.get(outcome, ZERO)

    def __iter__(self) -> Iterator[tuple[int, Fraction]]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, outcome: object) -> bool:
        return outcome in self._lookup

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Distribution):
            return NotImplemented
        return self._items == other._items

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash(self._items)
        return self._hash

    def __repr__(self) -> str:
        body = ", ".join(f"{outcome}: {probability}" for outcome, probability in self._items)
        return f"Distribution({{{body}}})"

    # ------------------------------------------------------------------
    # Algebra
    # ------------------------------------------------------------------

    def pairwise(
        self, other: Distribution, operation: Callable[[int, int], int]
    ) -> Distribution:
        """Distribution of ``operation(X, Y)`` for independent X and Y."""
        return Distribution.from_pairs(
            (operation(left, right), p_left * p_right)
            for left, p_left in self._items
            for right, p_right in other._items
        )

    def convolve(self, other: Distribution) -> Distribution:
        """Distribution of X + Y."""
        return self.pairwise(other, lambda left, right: left + right)

    def product(self, other: Distribution) -> Distribution:
        """Distribution of X * Y."""
        return self.pairwise(other, lambda left, right: left * right)

    def negate(self) -> Distribution:
        """Distribution of -X."""
        return Distribution({-outcome: probability for outcome, probability in self._items})

    def scale(self, factor: int) -> Distribution:
        """Distribution of factor * X. A zero factor collapses to {0: 1}."""
        return Distribution.from_pairs(
            (outcome * factor, probability) for outcome, probability in self._items
        )

    def cdf(self, value: int) -> Fraction:
        """P(X <= value)."""
        return sum(
            (probability for outcome, probability in self._items if outcome <= value), ZERO
        )

    def survival(self, value: int) -> Fraction:
        """P(X >= value)."""
        return sum(
            (probability for outcome, probability in self._items if outcome >= value), ZERO
        )


def mixture(weighted: Iterable[tuple[Fraction, Distribution]]) -> Distribution:
    """Merge distributions, each scaled by its weight.

    The weights must sum to 1.
    """
    return Distribution.from_pairs(
        (outcome, weight * probability)
        for weight, distribution in weighted
        for outcome, probability in distribution
    )


def _running_cdf(distribution: Distribution, support: Sequence[int]) -> list[Fraction]:
    """P(X <= k) for every k in the ascending ``support``."""
    result = []
    items = distribution.items
    index = 0
    total = ZERO
    for value in support:
        while index < len(items) and items[index][0] <= value:
            total += items[index][1]
            index += 1
        result.append(total)
    return result


def maximum(distributions: Sequence[Distribution]) -> Distribution:
    """Distribution of max(X1, ..., Xn) for independent arguments.

    Uses P(max <= k) = prod P(Xi <= k) and differences over the union of all
    argument domains.

    Raises:
        ValueError: If ``distributions`` is empty.
    """
    if not distributions:
        raise ValueError("maximum() needs at least one distribution")
    support = sorted({outcome for dist in distributions for outcome in dist.outcomes})
    cdfs = [_running_cdf(dist, support) for dist in distributions]
    joint = [prod(column, start=ONE) for column in zip(*cdfs)]

    previous = ZERO
    masses = {}
    for value, cumulative in zip(support, joint):
        masses[value] = cumulative - previous
        previous = cumulative
    return Distribution(masses)


def minimum(distributions: Sequence[Distribution]) -> Distribution:
    """Distribution of min(X1, ..., Xn) for independent arguments.

    Uses P(min >= k) = prod P(Xi >= k) and differences over the union of all
    argument domains.

    Raises:
        ValueError: If ``distributions`` is empty.
    """
    if not distributions:
        raise ValueError("minimum() needs at least one distribution")
    support = sorted({outcome for dist in distributions for outcome in dist.outcomes})
    survivals = []
    for dist in distributions:
        # P(X >= k) = 1 - P(X <= k - 1); shift the running cdf by one slot
        below = [ZERO] + _running_cdf(dist, support)[:-1]
        survivals.append([ONE - cumulative for cumulative in below])
    joint = [prod(column, start=ONE) for column in zip(*survivals)]

    masses = {}
    for index, value in enumerate(support):
        following = joint[index + 1] if index + 1 < len(joint) else ZERO
        masses[value] = joint[index] - following
    return Distribution(masses)
