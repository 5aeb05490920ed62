"""Dice expression tree type definitions.

Immutable dataclasses for the parsed form of a dice notation string.
The tree is a closed set of variants (see ``Node``); consumers dispatch on
it with a single ``match`` rather than per-class methods.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class BinaryOpKind(str, Enum):
    """Binary operators, by their notation symbol."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    COMBINE = "x"  # sample left, sum that many copies of right


class AggregateKind(str, Enum):
    """Aggregate functions over one or more sub-expressions."""

    MIN = "min"
    MAX = "max"


@dataclass(frozen=True)
class Constant:
    """A fixed integer value."""

    value: int


@dataclass(frozen=True)
class Die:
    """N fair dice with faces 1..sides, summed.

    Attributes:
        count: Number of dice rolled (e.g. 3 for 3d6).
        sides: Number of faces on each die.
    """

    count: int
    sides: int


@dataclass(frozen=True)
class BinaryOp:
    """Two sub-expressions joined by an operator."""

    kind: BinaryOpKind
    left: Node
    right: Node


@dataclass(frozen=True)
class Aggregate:
    """min(...) or max(...) over independent sub-expressions.

    Attributes:
        kind: MIN or MAX.
        args: At least one argument, in notation order.
    """

    kind: AggregateKind
    args: tuple[Node, ...]


Node = Union[Constant, Die, BinaryOp, Aggregate]


# Binding strength used when turning a tree back into notation
_ATOM = 3
_PRECEDENCE = {
    BinaryOpKind.MULTIPLY: 2,
    BinaryOpKind.COMBINE: 2,
    BinaryOpKind.ADD: 1,
    BinaryOpKind.SUBTRACT: 1,
}


def _binding(node: Node) -> int:
    if isinstance(node, BinaryOp):
        return _PRECEDENCE[node.kind]
    return _ATOM


def _format_binary(node: BinaryOp) -> str:
    # Walk the left spine while no parentheses are needed, so long flat sums
    # are rendered with a loop
    spine = [node]
    while (
        isinstance(spine[-1].left, BinaryOp)
        and _binding(spine[-1].left) >= _PRECEDENCE[spine[-1].kind]
    ):
        spine.append(spine[-1].left)

    innermost = spine[-1]
    parts = [format_expression(innermost.left)]
    if _binding(innermost.left) < _PRECEDENCE[innermost.kind]:
        parts[0] = f"({parts[0]})"

    for op in reversed(spine):
        right_text = format_expression(op.right)
        # Operators are left-associative: an equal-strength right child needs parens
        if _binding(op.right) <= _PRECEDENCE[op.kind]:
            right_text = f"({right_text})"
        parts.append(op.kind.value)
        parts.append(right_text)
    return "".join(parts)


def format_expression(node: Node) -> str:
    """Render an expression tree as dice notation.

    The result parses back into an equal tree.

    Examples:
        >>> format_expression(BinaryOp(BinaryOpKind.ADD, Die(2, 6), Constant(3)))
        '2d6+3'
        >>> format_expression(Aggregate(AggregateKind.MAX, (Die(1, 6), Die(1, 8))))
        'max(d6,d8)'
    """
    match node:
        case Constant(value=value):
            return str(value)
        case Die(count=1, sides=sides):
            return f"d{sides}"
        case Die(count=count, sides=sides):
            return f"{count}d{sides}"
        case BinaryOp():
            return _format_binary(node)
        case Aggregate(kind=kind, args=args):
            inner = ",".join(format_expression(arg) for arg in args)
            return f"{kind.value}({inner})"
    raise TypeError(f"Not a dice expression node: {node!r}")
