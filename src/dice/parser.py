"""Dice notation parser.

Recursive-descent parser turning notation like ``3d6+2``, ``d2xd6`` or
``max(d20,d20)-min(d6,d6)`` into an expression tree. The parser only builds
the tree; evaluating it is the engine's job.

Grammar, highest precedence first::

    Primary  := INT | DieTerm | '(' Expr ')' | ('min'|'max') '(' ExprList ')'
    DieTerm  := [INT] ('d'|'w') INT
    Unary    := '-'* Primary
    Term     := Unary (('x'|'*') Unary)*
    Expr     := Term (('+'|'-') Term)*
    ExprList := Expr (',' Expr)*
"""

import logging
from collections.abc import Iterator

from src.dice.exceptions import ParseError, ParseErrorKind
from src.dice.lexer import Lexer, Token, TokenKind
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


_TERM_OPERATORS = {
    TokenKind.STAR: BinaryOpKind.MULTIPLY,
    TokenKind.COMBINE: BinaryOpKind.COMBINE,
}

_EXPR_OPERATORS = {
    TokenKind.PLUS: BinaryOpKind.ADD,
    TokenKind.MINUS: BinaryOpKind.SUBTRACT,
}

_AGGREGATES = {
    TokenKind.MIN: AggregateKind.MIN,
    TokenKind.MAX: AggregateKind.MAX,
}


class _Parser:
    """Single-use parser with one token of lookahead."""

    def __init__(self, tokens: Iterator[Token]) -> None:
        self._tokens = tokens
        self._current = next(tokens)

    def _advance(self) -> Token:
        token = self._current
        if token.kind is not TokenKind.END:
            self._current = next(self._tokens)
        return token

    def _unexpected(self) -> ParseError:
        token = self._current
        return ParseError(ParseErrorKind.UNEXPECTED_TOKEN, token.position, token.text)

    def _expect(self, kind: TokenKind) -> Token:
        if self._current.kind is not kind:
            raise self._unexpected()
        return self._advance()

    def _close_paren(self, opening: Token) -> None:
        token = self._current
        if token.kind is TokenKind.RPAREN:
            self._advance()
            return
        if token.kind is TokenKind.END:
            raise ParseError(
                ParseErrorKind.UNMATCHED_PARENTHESIS, opening.position, opening.text
            )
        raise self._unexpected()

    def parse(self) -> Node:
        node = self._expr()
        token = self._current
        if token.kind is TokenKind.RPAREN:
            raise ParseError(ParseErrorKind.UNMATCHED_PARENTHESIS, token.position, token.text)
        if token.kind is not TokenKind.END:
            raise ParseError(ParseErrorKind.TRAILING_INPUT, token.position, token.text)
        return node

    def _expr(self) -> Node:
        node = self._term()
        while self._current.kind in _EXPR_OPERATORS:
            kind = _EXPR_OPERATORS[self._advance().kind]
            node = BinaryOp(kind, node, self._term())
        return node

    def _term(self) -> Node:
        node = self._unary()
        while self._current.kind in _TERM_OPERATORS:
            kind = _TERM_OPERATORS[self._advance().kind]
            node = BinaryOp(kind, node, self._unary())
        return node

    def _unary(self) -> Node:
        negations = 0
        while self._current.kind is TokenKind.MINUS:
            self._advance()
            negations += 1

        operand = self._primary()
        if negations % 2 == 0:
            return operand
        # Fold "-3" into a literal so it stays a scalar for multiplication
        if isinstance(operand, Constant):
            return Constant(-operand.value)
        return BinaryOp(BinaryOpKind.MULTIPLY, Constant(-1), operand)

    def _primary(self) -> Node:
        token = self._current

        if token.kind is TokenKind.INT:
            self._advance()
            if self._current.kind is TokenKind.DIE:
                self._advance()
                return Die(count=token.value, sides=self._expect(TokenKind.INT).value)
            return Constant(token.value)

        if token.kind is TokenKind.DIE:
            self._advance()
            return Die(count=1, sides=self._expect(TokenKind.INT).value)

        if token.kind is TokenKind.LPAREN:
            self._advance()
            node = self._expr()
            self._close_paren(token)
            return node

        if token.kind in _AGGREGATES:
            self._advance()
            opening = self._expect(TokenKind.LPAREN)
            if self._current.kind is TokenKind.RPAREN:
                raise ParseError(
                    ParseErrorKind.EMPTY_ARGUMENT_LIST, token.position, token.text
                )
            args = self._expr_list()
            self._close_paren(opening)
            return Aggregate(_AGGREGATES[token.kind], tuple(args))

        raise self._unexpected()

    def _expr_list(self) -> list[Node]:
        args = [self._expr()]
        while self._current.kind is TokenKind.COMMA:
            self._advance()
            args.append(self._expr())
        return args


def parse_dice(notation: str) -> Node:
    """Parse dice notation into an expression tree.

    Args:
        notation: Dice notation string (e.g., "2d6+3", "d2xd6", "max(d6,d6)").

    Returns:
        Root node of the parsed expression.

    Raises:
        LexError: If the notation contains a character outside the grammar.
        ParseError: If the tokens do not form a valid expression, or nest
            deeper than the interpreter stack allows.

    Examples:
        >>> parse_dice("2d6")
        Die(count=2, sides=6)
        >>> parse_dice("d2xd6")
        BinaryOp(kind=<BinaryOpKind.COMBINE: 'x'>, left=Die(count=1, sides=2), right=Die(count=1, sides=6))
    """
    parser = _Parser(iter(Lexer(notation)))
    try:
        node = parser.parse()
    except RecursionError:
        token = parser._current
        raise ParseError(
            ParseErrorKind.NESTING_TOO_DEEP, token.position, token.text
        ) from None
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Parsed %r into %s", notation, format_expression(node))
    return node
