from typing import Optional

from xpanda.tokens import Position


class XpandaError(Exception):
    """Base exception for errors raised while expanding text."""
    def __init__(self, message: str, position: Optional[Position] = None):
        super().__init__(message)
        self.message = message
        self.position = position if position is not None else Position()

    @property
    def line(self) -> int:
        return self.position.line

    @property
    def col(self) -> int:
        return self.position.col


class ParseError(XpandaError):
    """Raised when the input is not a well formed sequence of parameters."""


class EvalError(XpandaError):
    """Raised when a variable required by a parameter is unset."""


class VarSyntaxError(XpandaError, ValueError):
    """Raised for a variable definition that is not a NAME=value pair."""


class VarFileError(XpandaError):
    """Raised when a variable file cannot be read."""
