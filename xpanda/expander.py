"""Public entry points for Xpanda.

`Xpanda` substitutes the values of variables in text, similar to
`envsubst` and Bash parameter expansion. Instances are created through a
`Builder` that collects the variable sources::

    xpanda = (Xpanda.builder()
              .no_unset(True)
              .with_named_vars({'NAME': 'world'})
              .build())
    xpanda.expand('hello ${NAME:-nobody}')

Every call to `expand` lexes, parses and evaluates its input from
scratch; only the variable store is shared between calls.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, List, Mapping, Optional, TextIO

from .ast import Ast
from .environment import Environment
from .evaluator import Evaluator
from .lexer import Lexer
from .parser import Parser


class Builder:
    def __init__(self):
        self._no_unset = False
        self._named_vars: Dict[str, str] = {}
        self._positional_vars: List[str] = []
        self._debug_level = 0
        self._debug_fp: Optional[TextIO] = None

    def no_unset(self, no_unset: bool = True) -> 'Builder':
        """Make unset variables without a default an error instead of ''."""
        self._no_unset = no_unset
        return self

    def with_env_vars(self) -> 'Builder':
        """Add a snapshot of the process environment as named variables."""
        self._named_vars.update(os.environ)
        return self

    def with_named_vars(self, vars: Mapping[str, str]) -> 'Builder':
        self._named_vars.update(vars)
        return self

    def with_positional_vars(self, vars: Iterable[str]) -> 'Builder':
        self._positional_vars.extend(vars)
        return self

    def debug(self, level: int, fp: Optional[TextIO] = None) -> 'Builder':
        self._debug_level = level
        self._debug_fp = fp
        return self

    def build(self) -> 'Xpanda':
        environment = Environment(self._named_vars, self._positional_vars, self._no_unset)
        return Xpanda(environment, self._debug_level, self._debug_fp)


class Xpanda:
    def __init__(self, environment: Optional[Environment] = None, debug_level: int = 0,
                 debug_fp: Optional[TextIO] = None):
        self.environment = environment if environment is not None else Environment()
        self.evaluator = Evaluator(self.environment, debug_level, debug_fp)

    @staticmethod
    def builder() -> Builder:
        return Builder()

    def parse(self, text: str) -> Ast:
        return Parser(Lexer(text)).parse()

    def evaluate(self, ast: Ast) -> str:
        return self.evaluator.eval(ast)

    def expand(self, text: str) -> str:
        """Expand the given text by substituting the variables inside it.

        Raises `ParseError` if the text is badly formatted and `EvalError`
        if a required variable is unset.
        """
        return self.evaluate(self.parse(text))


def expand(text: str, named_vars: Optional[Mapping[str, str]] = None,
           positional_vars: Optional[Iterable[str]] = None, no_unset: bool = False) -> str:
    """Convenience function to expand a single string."""
    builder = Builder().no_unset(no_unset)
    if named_vars:
        builder.with_named_vars(named_vars)
    if positional_vars:
        builder.with_positional_vars(positional_vars)
    return builder.build().expand(text)
