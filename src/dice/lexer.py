"""Dice notation tokenizer.

Splits notation like ``max(2d6+3, d20) x w4`` into tokens. Markers and
identifiers are case-insensitive and whitespace is skipped.
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from src.dice.exceptions import LexError


class TokenKind(str, Enum):
    """Kinds of token produced by the lexer."""

    INT = "int"
    DIE = "die"  # d or w
    COMBINE = "combine"  # x
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    MIN = "min"
    MAX = "max"
    LPAREN = "("
    RPAREN = ")"
    COMMA = ","
    END = "end"


@dataclass(frozen=True)
class Token:
    """A single lexical token.

    Attributes:
        kind: What the token is.
        text: The exact slice of input it came from ("" for END).
        position: UTF-8 byte offset of its first character.
    """

    kind: TokenKind
    text: str
    position: int

    @property
    def value(self) -> int:
        """Integer value of an INT token."""
        return int(self.text)


# Identifiers come before single letters so "max" is not read as m-a-x
_TOKEN_PATTERN = re.compile(
    r"""
    (?P<SPACE>\s+)
    |(?P<INT>[0-9]+)
    |(?P<MIN>min)
    |(?P<MAX>max)
    |(?P<DIE>[dw])
    |(?P<COMBINE>x)
    |(?P<PLUS>\+)
    |(?P<MINUS>-)
    |(?P<STAR>\*)
    |(?P<LPAREN>\()
    |(?P<RPAREN>\))
    |(?P<COMMA>,)
    """,
    re.IGNORECASE | re.VERBOSE,
)


def tokenize(text: str) -> Iterator[Token]:
    """Lazily yield the tokens of ``text``, ending with a single END token.

    Raises:
        LexError: On the first character no token matches.

    Examples:
        >>> [t.kind.value for t in tokenize("2d6 + 1")]
        ['int', 'die', 'int', '+', 'int', 'end']
    """
    index = 0
    byte_position = 0
    while index < len(text):
        match = _TOKEN_PATTERN.match(text, index)
        if not match:
            raise LexError(text[index], byte_position)

        chunk = match.group()
        if match.lastgroup != "SPACE":
            yield Token(TokenKind[match.lastgroup], chunk, byte_position)

        index = match.end()
        byte_position += len(chunk.encode("utf-8"))

    yield Token(TokenKind.END, "", byte_position)


class Lexer:
    """Restartable token stream over a notation string.

    Each call to ``iter()`` starts scanning again from the beginning, so the
    same Lexer can be walked more than once.
    """

    def __init__(self, text: str) -> None:
        self.text = text

    def __iter__(self) -> Iterator[Token]:
        return tokenize(self.text)

    def __repr__(self) -> str:
        return f"Lexer({self.text!r})"
