"""Exact probability distributions for dice notation.

Parses expressions like ``3d6``, ``d2xd6`` or ``max(d20,d20)+5`` and computes
their exact distribution, statistics, and samples.

Usage:
    >>> from src.dice import build_from_string
    >>> dice = build_from_string("2d6+3")
    >>> dice.min, dice.max, dice.mean
    (5, 15, Fraction(10, 1))
    >>> value = dice.roll()
"""

# Errors
from src.dice.exceptions import (
    DiceBuildingError,
    DomainTooLargeError,
    LexError,
    ParseError,
    ParseErrorKind,
    SemanticError,
    SemanticErrorKind,
)

# Expression tree
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

# Lexer & Parser
from src.dice.lexer import Lexer, Token, TokenKind, tokenize
from src.dice.parser import parse_dice

# Distribution algebra
from src.dice.distribution import Distribution, maximum, minimum, mixture
from src.dice.engine import Evaluator, evaluate

# Statistics & Sampling
from src.dice.statistics import DistributionStatistics, derive_statistics
from src.dice.sampler import RandomSource, Sampler

# Results
from src.dice.dice import Dice, ProbAll
from src.dice.builder import DiceBuilder, build_from_string, from_string

__all__ = [
    # Errors
    "DiceBuildingError",
    "DomainTooLargeError",
    "LexError",
    "ParseError",
    "ParseErrorKind",
    "SemanticError",
    "SemanticErrorKind",
    # Expression tree
    "Aggregate",
    "AggregateKind",
    "BinaryOp",
    "BinaryOpKind",
    "Constant",
    "Die",
    "Node",
    "format_expression",
    # Lexer & Parser
    "Lexer",
    "Token",
    "TokenKind",
    "tokenize",
    "parse_dice",
    # Distribution algebra
    "Distribution",
    "maximum",
    "minimum",
    "mixture",
    "Evaluator",
    "evaluate",
    # Statistics & Sampling
    "DistributionStatistics",
    "derive_statistics",
    "RandomSource",
    "Sampler",
    # Results
    "Dice",
    "ProbAll",
    "DiceBuilder",
    "build_from_string",
    "from_string",
]
