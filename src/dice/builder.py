"""Entry points: parse notation into a DiceBuilder, then build a Dice.

Usage:
    >>> builder = from_string("2d6+4")
    >>> dice = builder.build()
    >>> dice.mean
    Fraction(11, 1)
"""

from __future__ import annotations

import logging
import time

from src.dice.dice import Dice
from src.dice.engine import Evaluator
from src.dice.parser import parse_dice
from src.dice.sampler import RandomSource
from src.dice.types import Node, format_expression

logger = logging.getLogger(__name__)


class DiceBuilder:
    """A parsed dice expression waiting to be evaluated.

    Creating one only parses; the potentially expensive distribution
    arithmetic happens in ``build()``.
    """

    def __init__(self, expression: Node) -> None:
        self.expression = expression

    @classmethod
    def from_string(cls, input: str) -> DiceBuilder:
        """Parse ``input`` into a DiceBuilder.

        Raises:
            LexError: If the notation contains an unknown character.
            ParseError: If the notation is malformed.
        """
        return cls(parse_dice(input))

    @classmethod
    def build_from_string(cls, input: str, **build_options) -> Dice:
        """Shortcut for ``DiceBuilder.from_string(input).build()``."""
        return cls.from_string(input).build(**build_options)

    def build(
        self,
        *,
        max_domain_size: int | None = None,
        random_source: RandomSource | None = None,
    ) -> Dice:
        """Evaluate the expression and derive its statistics.

        Args:
            max_domain_size: Optional ceiling on the number of outcomes of any
                intermediate distribution.
            random_source: Default source of randomness for the Dice's rolls.

        Raises:
            SemanticError: If the expression cannot be evaluated.
            DomainTooLargeError: If ``max_domain_size`` is exceeded.
        """
        started = time.perf_counter()
        distribution = Evaluator(max_domain_size=max_domain_size).evaluate(self.expression)
        dice = Dice.from_distribution(
            distribution,
            builder_string=str(self),
            build_time=(time.perf_counter() - started) * 1000,
            random_source=random_source,
        )
        logger.debug(
            "Built %s: %d outcomes in %.2f ms", dice.builder_string, len(distribution), dice.build_time
        )
        return dice

    def reconstruct_string(self) -> str:
        """Notation that parses back into an equal DiceBuilder."""
        return format_expression(self.expression)

    def __str__(self) -> str:
        return self.reconstruct_string()

    def __repr__(self) -> str:
        return f"DiceBuilder({self.reconstruct_string()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DiceBuilder):
            return NotImplemented
        return self.expression == other.expression

    def __hash__(self) -> int:
        return hash(self.expression)


def from_string(input: str) -> DiceBuilder:
    """Parse notation into a DiceBuilder without evaluating it."""
    return DiceBuilder.from_string(input)


def build_from_string(input: str, **build_options) -> Dice:
    """Parse and build in one step.

    Keyword arguments are passed on to ``DiceBuilder.build``.

    Examples:
        >>> build_from_string("2d6").median
        7
    """
    return DiceBuilder.from_string(input).build(**build_options)
