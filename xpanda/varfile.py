"""Parsing of named variable definitions.

Named variables are given as `NAME=value` pairs, either on the command
line or one per line in a variable file. A definition is parsed with a
Lark LALR parser: the name is everything before the first `=` and the
value is the rest of the line, possibly empty and possibly containing
further `=` characters.

Variable files ignore blank lines. Later definitions override earlier
ones.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Tuple, Union

from lark import Lark, Transformer, UnexpectedInput

from .errors import VarFileError, VarSyntaxError
from .tokens import Position


VAR_GRAMMAR = r"""
    start: NAME "=" VALUE?

    NAME: /[^=\r\n]+/
    VALUE: /[^\r\n]+/
"""


VAR_PARSER = Lark(
    VAR_GRAMMAR,
    parser='lalr',
    maybe_placeholders=False,
)


class VarTransformer(Transformer):
    """Turns a parsed definition into a (name, value) tuple."""

    def start(self, items):
        name = str(items[0])
        value = str(items[1]) if len(items) > 1 else ''
        return (name, value)


def parse_named_arg(arg: str, line: int = 1) -> Tuple[str, str]:
    """Parse a single `NAME=value` definition."""
    try:
        tree = VAR_PARSER.parse(arg)
    except UnexpectedInput as e:
        column = getattr(e, 'column', 1)
        if not isinstance(column, int) or column < 1:
            column = 1
        message = "'=' character missing in key value pair"
        if arg.startswith('='):
            message = "variable name missing"
        raise VarSyntaxError(message, Position(0, line, column)) from e
    return VarTransformer().transform(tree)


def read_var_file(path: Union[str, Path]) -> Dict[str, str]:
    """Read every `NAME=value` definition from a variable file."""
    path = Path(path)
    variables: Dict[str, str] = {}
    try:
        with open(path, 'r', encoding='utf-8') as f:
            lines = f.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise VarFileError(f"{path}: {e}") from e
    for number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            name, value = parse_named_arg(line, number)
        except VarSyntaxError as e:
            raise VarSyntaxError(f"{path}:{number}: {e.message}", e.position) from e
        variables[name] = value
    return variables
