"""Dice building exception definitions.

Every stage of the pipeline (lexer, parser, evaluator) reports failure by
raising a subclass of DiceBuildingError. Each subclass carries enough
structured data to tell the caller what went wrong and where.
"""

from enum import Enum


class DiceBuildingError(ValueError):
    """Base exception for anything that prevents building a Dice."""

    pass


class LexError(DiceBuildingError):
    """Unrecognized character in the input.

    Attributes:
        character: The offending character.
        position: UTF-8 byte offset of the character in the input.
    """

    def __init__(self, character: str, position: int) -> None:
        super().__init__(f"Unexpected character {character!r} at position {position}")
        self.character = character
        self.position = position


class ParseErrorKind(str, Enum):
    """What made a token sequence malformed."""

    UNEXPECTED_TOKEN = "unexpected_token"
    UNMATCHED_PARENTHESIS = "unmatched_parenthesis"
    EMPTY_ARGUMENT_LIST = "empty_argument_list"
    TRAILING_INPUT = "trailing_input"
    NESTING_TOO_DEEP = "nesting_too_deep"


class ParseError(DiceBuildingError):
    """Malformed token sequence.

    Attributes:
        kind: Category of the failure.
        position: Byte offset of the offending token.
        token: Text of the offending token ("" at end of input).
    """

    def __init__(self, kind: ParseErrorKind, position: int, token: str = "") -> None:
        shown = repr(token) if token else "end of input"
        super().__init__(f"{kind.value.replace('_', ' ')}: {shown} at position {position}")
        self.kind = kind
        self.position = position
        self.token = token


class SemanticErrorKind(str, Enum):
    """Structurally valid but meaningless requests."""

    INVALID_DIE_SIDES = "invalid_die_sides"
    INVALID_DIE_COUNT = "invalid_die_count"
    NEGATIVE_COMBINE_COUNT = "negative_combine_count"
    NEGATIVE_ROLL_COUNT = "negative_roll_count"
    NESTING_TOO_DEEP = "nesting_too_deep"


class SemanticError(DiceBuildingError):
    """Expression parsed fine but cannot be evaluated.

    Attributes:
        kind: Category of the failure.
        detail: Human readable explanation.
    """

    def __init__(self, kind: SemanticErrorKind, detail: str) -> None:
        super().__init__(detail)
        self.kind = kind
        self.detail = detail


class DomainTooLargeError(DiceBuildingError):
    """A distribution outgrew the configured domain ceiling.

    Attributes:
        size: Number of outcomes that would have been produced.
        limit: The configured ceiling.
    """

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(
            f"Distribution with {size} outcomes exceeds the domain limit of {limit}"
        )
        self.size = size
        self.limit = limit
