"""Distribution algebra engine.

Evaluates a parsed dice expression tree bottom-up into an exact
Distribution. Evaluation is pure: an Evaluator owns its memo cache and
nothing is shared between evaluations.

Cost notes:
    - Sums are full convolutions, O(|left| * |right|).
    - ``NdS`` and the combine operator both need convolution powers of a
      distribution. Powers are cached per (distribution, count) and built
      either from the previous count or by repeated squaring.
    - An optional domain ceiling turns runaway growth into an error.
"""

import logging

from src.dice.distribution import Distribution, maximum, minimum, mixture
from src.dice.exceptions import DomainTooLargeError, SemanticError, SemanticErrorKind
from src.dice.types import (
    Aggregate,
    AggregateKind,
    BinaryOp,
    BinaryOpKind,
    Constant,
    Die,
    Node,
    format_expression,
)

logger = logging.getLogger(__name__)


_ZERO_FOLD = Distribution.point(0)


class Evaluator:
    """Turns expression trees into distributions.

    Args:
        max_domain_size: Largest number of outcomes any intermediate
            distribution may have. None means unbounded.
    """

    def __init__(self, max_domain_size: int | None = None) -> None:
        self.max_domain_size = max_domain_size
        self._powers: dict[tuple[Distribution, int], Distribution] = {}

    def evaluate(self, node: Node) -> Distribution:
        """Evaluate ``node`` and every sub-expression beneath it.

        Raises:
            SemanticError: For dice with no sides, non-positive die counts,
                a combine whose count can be negative, or a tree nested
                deeper than the interpreter stack allows.
            DomainTooLargeError: If a distribution outgrows the ceiling.
        """
        try:
            return self._evaluate(node)
        except RecursionError:
            raise SemanticError(
                SemanticErrorKind.NESTING_TOO_DEEP,
                "Expression is nested too deeply to evaluate",
            ) from None

    def _evaluate(self, node: Node) -> Distribution:
        match node:
            case Constant(value=value):
                result = Distribution.point(value)
            case Die(count=count, sides=sides):
                result = self._die(count, sides)
            case BinaryOp():
                return self._binary_chain(node)
            case Aggregate(kind=kind, args=args):
                arguments = [self._evaluate(arg) for arg in args]
                if kind is AggregateKind.MIN:
                    result = minimum(arguments)
                else:
                    result = maximum(arguments)
            case _:
                raise TypeError(f"Not a dice expression node: {node!r}")
        return self._finish(node, result)

    def _finish(self, node: Node, result: Distribution) -> Distribution:
        self._check_size(len(result))
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%s -> %d outcomes", format_expression(node), len(result))
        return result

    def _binary_chain(self, node: BinaryOp) -> Distribution:
        """Fold a left-leaning run like ``a+b-c*d`` bottom-up with a loop.

        Flat sums parse into left-deep trees, so stack use here does not
        grow with their length.
        """
        spine = []
        current: Node = node
        while isinstance(current, BinaryOp):
            spine.append(current)
            current = current.left

        result = self._evaluate(current)
        for op in reversed(spine):
            result = self._finish(op, self._binary(op, result))
        return result

    def _binary(self, op: BinaryOp, left_dist: Distribution) -> Distribution:
        kind, left, right = op.kind, op.left, op.right
        if kind is BinaryOpKind.MULTIPLY:
            # Scalar scaling is detected on the tree, not on the evaluated domain
            if isinstance(left, Constant):
                return self._evaluate(right).scale(left.value)
            if isinstance(right, Constant):
                return left_dist.scale(right.value)
            return left_dist.product(self._evaluate(right))

        right_dist = self._evaluate(right)

        if kind is BinaryOpKind.ADD:
            return left_dist.convolve(right_dist)
        if kind is BinaryOpKind.SUBTRACT:
            return left_dist.convolve(right_dist.negate())
        return self._combine(left_dist, right_dist)

    def _die(self, count: int, sides: int) -> Distribution:
        if sides < 1:
            raise SemanticError(
                SemanticErrorKind.INVALID_DIE_SIDES,
                f"A die needs at least 1 side, got {sides}",
            )
        if count < 1:
            raise SemanticError(
                SemanticErrorKind.INVALID_DIE_COUNT,
                f"Number of dice must be at least 1, got {count}",
            )
        self._check_size(sides)
        return self.power(Distribution.uniform(1, sides), count)

    def _combine(self, counts: Distribution, sample: Distribution) -> Distribution:
        """Roll ``counts``, then sum that many independent copies of ``sample``."""
        if counts.lowest < 0:
            raise SemanticError(
                SemanticErrorKind.NEGATIVE_COMBINE_COUNT,
                f"Cannot roll a negative number of times (left side can be {counts.lowest})",
            )
        return mixture(
            (probability, self.power(sample, count)) for count, probability in counts
        )

    def power(self, distribution: Distribution, count: int) -> Distribution:
        """Distribution of the sum of ``count`` independent copies.

        The zero-fold sum is the point distribution at 0.
        """
        if count == 0:
            return _ZERO_FOLD
        if count == 1:
            return distribution

        key = (distribution, count)
        cached = self._powers.get(key)
        if cached is not None:
            logger.debug("Reusing %d-fold convolution power", count)
            return cached

        previous = self._powers.get((distribution, count - 1))
        if previous is not None:
            result = previous.convolve(distribution)
        else:
            half = self.power(distribution, count // 2)
            result = half.convolve(half)
            if count % 2:
                result = result.convolve(distribution)

        self._check_size(len(result))
        self._powers[key] = result
        return result

    def _check_size(self, size: int) -> None:
        if self.max_domain_size is not None and size > self.max_domain_size:
            raise DomainTooLargeError(size, self.max_domain_size)


def evaluate(node: Node, max_domain_size: int | None = None) -> Distribution:
    """Evaluate an expression tree with a fresh Evaluator.

    Examples:
        >>> from src.dice.types import Die
        >>> evaluate(Die(count=2, sides=2))
        Distribution({2: 1/4, 3: 1/2, 4: 1/4})
    """
    return Evaluator(max_domain_size=max_domain_size).evaluate(node)
