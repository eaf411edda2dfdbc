"""Token and position definitions for Xpanda.

Tokens are produced by the lexer and consumed by the parser. Each token
owns its payload and carries the positions at which it started and ended
so that the parser can report errors and stamp parameters with the
location of their `$` sign.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union


@dataclass(frozen=True)
class Position:
    """A location in the input.

    `index` is a character offset into the input string, `line` and `col`
    are 1-based. A new value is produced for every consumed character.
    """
    index: int = 0
    line: int = 1
    col: int = 1

    def advance(self, char: str) -> 'Position':
        if char == '\n':
            return Position(self.index + 1, self.line + 1, 1)
        return Position(self.index + 1, self.line, self.col + 1)

    def __str__(self) -> str:
        return f"{self.line}:{self.col}"


# Token types. Punctuation tokens use the character they are lexed from.
TEXT = 'TEXT'
IDENT = 'IDENT'
INDEX = 'INDEX'
OPEN_BRACE = '{'
CLOSE_BRACE = '}'
DOLLAR_SIGN = '$'
COLON = ':'
DASH = '-'
PLUS = '+'
QUESTION_MARK = '?'
POUND_SIGN = '#'
EXCLAMATION_MARK = '!'
CARET = '^'
COMMA = ','
TILDE = '~'

PUNCTUATION = frozenset({
    OPEN_BRACE, CLOSE_BRACE, DOLLAR_SIGN, COLON, DASH, PLUS,
    QUESTION_MARK, POUND_SIGN, EXCLAMATION_MARK,
})
CASE_MODIFIERS = frozenset({CARET, COMMA, TILDE})


@dataclass
class Token:
    type: str
    value: Union[str, int, None] = None
    start: Position = field(default_factory=Position, compare=False)
    end: Position = field(default_factory=Position, compare=False)

    def __str__(self) -> str:
        if self.type in (TEXT, IDENT):
            return f'"{self.value}"'
        if self.type == INDEX:
            return str(self.value)
        return f"'{self.type}'"


def describe(token: Optional[Token]) -> str:
    """Render a token (or the end of input) for an error message."""
    return 'EOF' if token is None else str(token)
