"""Context sensitive tokenizer for Xpanda.

The same characters mean different things inside and outside a
parameter: outside, everything but an unescaped `$` is text; inside,
braces, operators and identifiers are tokens of their own. Rather than a
stack of lexer states the mode is derived for every token from two pieces
of state: the brace nesting level and the previously produced token.

`$$` is the escape for a literal dollar sign. A `$` at the very end of
the input, or right before a line break, is literal text as well.
"""

from __future__ import annotations

from typing import Iterator, List, Optional

from .reader import StrRead
from .tokens import (
    Token, Position, TEXT, IDENT, INDEX, OPEN_BRACE, CLOSE_BRACE,
    DOLLAR_SIGN, POUND_SIGN, EXCLAMATION_MARK, PUNCTUATION, CASE_MODIFIERS,
)

# Indices are unsigned 64 bit values, anything larger is treated as 0.
MAX_INDEX = 2 ** 64 - 1

# Tokens after which an identifier or index may start.
IDENTIFIER_INTRODUCERS = frozenset({DOLLAR_SIGN, OPEN_BRACE, POUND_SIGN, EXCLAMATION_MARK})
# Tokens after which a case modifier may follow.
MODIFIER_INTRODUCERS = frozenset({IDENT, INDEX}) | CASE_MODIFIERS

LITERAL_DOLLARS = ('$', '$\n', '$\r')


def is_identifier_char(char: str) -> bool:
    return char.isalnum() or char == '_'


def parse_index(text: str) -> int:
    try:
        number = int(text)
    except ValueError:
        return 0
    return number if number <= MAX_INDEX else 0


class Lexer:
    def __init__(self, source: str):
        self.reader = StrRead(source)
        self.previous_token: Optional[Token] = None
        self.nesting_level = 0
        self.done = False

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            if token is None:
                return
            yield token

    @property
    def position(self) -> Position:
        return self.reader.position

    @property
    def previous_type(self) -> Optional[str]:
        return self.previous_token.type if self.previous_token is not None else None

    def in_param(self) -> bool:
        return self.nesting_level > 0 or self.previous_type == DOLLAR_SIGN

    def next_token(self) -> Optional[Token]:
        if self.done:
            return None
        start = self.reader.position
        if self.in_param():
            token = self.read_param()
        elif self.reader.peek_char() == '$' and not self.is_escaped() and not self.is_literal_dollar():
            token = self.read_param()
        else:
            token = self.read_text()
        if token is None:
            self.done = True
            return None
        token.start = start
        token.end = self.reader.position
        if token.type == OPEN_BRACE:
            self.nesting_level += 1
        elif token.type == CLOSE_BRACE:
            self.nesting_level = max(self.nesting_level - 1, 0)
        self.previous_token = token
        return token

    def is_escaped(self) -> bool:
        return self.reader.peek_count(2) == '$$'

    def is_literal_dollar(self) -> bool:
        return self.reader.peek_count(2) in LITERAL_DOLLARS

    def read_text(self) -> Optional[Token]:
        pieces: List[str] = []
        while True:
            if self.is_escaped():
                self.reader.consume_char()
                self.reader.consume_char()
                pieces.append('$')
                continue
            if self.is_literal_dollar():
                pieces.append(self.reader.consume_char())
                continue
            text = self.reader.consume_while(lambda c: c != '$')
            if not text:
                break
            pieces.append(text)
        if not pieces:
            return None
        return Token(TEXT, ''.join(pieces))

    def read_param(self) -> Optional[Token]:
        char = self.reader.peek_char()
        if char is None:
            return None
        previous = self.previous_type
        if char in PUNCTUATION and not (char == '$' and self.is_escaped()):
            self.reader.consume_char()
            return Token(char)
        if char in CASE_MODIFIERS and previous in MODIFIER_INTRODUCERS:
            self.reader.consume_char()
            return Token(char)
        if previous in IDENTIFIER_INTRODUCERS:
            if char.isnumeric():
                text = self.reader.consume_while(str.isnumeric)
                return Token(INDEX, parse_index(text))
            if is_identifier_char(char):
                return Token(IDENT, self.reader.consume_while(is_identifier_char))
        return self.read_param_text()

    def read_param_text(self) -> Optional[Token]:
        """Read free text inside a parameter, e.g. a default value.

        Stops at (without consuming) a closing brace or a line break.
        """
        pieces: List[str] = []
        while True:
            ahead = self.reader.peek_count(2)
            if ahead == '$$':
                self.reader.consume_char()
                self.reader.consume_char()
                pieces.append('$')
            elif ahead.startswith('$'):
                pieces.append(self.reader.consume_char())
            else:
                text = self.reader.consume_while(lambda c: c not in ('}', '\n', '$'))
                if not text:
                    break
                pieces.append(text)
        if not pieces:
            return None
        return Token(TEXT, ''.join(pieces))


def tokenize(source: str) -> List[Token]:
    """Convert the given input into a list of tokens."""
    return list(Lexer(source))
