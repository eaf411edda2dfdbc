from __future__ import annotations

from typing import Callable, Optional

from .tokens import Position


class StrRead:
    """Character reader over an input string.

    Offers single and multi character lookahead without consuming, and
    tracks the position of the next unread character. Running out of
    input is never an error: lookahead returns `None` or an empty string.
    """

    def __init__(self, source: str):
        self.source = source
        self.position = Position()

    def peek_char(self) -> Optional[str]:
        index = self.position.index
        if index < len(self.source):
            return self.source[index]
        return None

    def peek_count(self, n: int) -> str:
        # clipped at end of input
        index = self.position.index
        return self.source[index:index + n]

    def consume_char(self) -> Optional[str]:
        char = self.peek_char()
        if char is not None:
            self.position = self.position.advance(char)
        return char

    def consume_while(self, predicate: Callable[[str], bool]) -> str:
        start = self.position.index
        while True:
            char = self.peek_char()
            if char is None or not predicate(char):
                break
            self.consume_char()
        return self.source[start:self.position.index]
