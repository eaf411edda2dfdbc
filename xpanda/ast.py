"""Abstract Syntax Tree (AST) definitions for Xpanda.

An input unit parses into an `Ast`: an ordered list of text and parameter
nodes. Parameters that take a default or alternative value hold another
node, so a default may itself contain a parameter (`${A-$B}`).

Parameter nodes carry the position of the `$` that introduced them. The
position is not part of node equality.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .tokens import Position


@dataclass
class Identifier:
    """Base class for the two kinds of variable references."""
    pass


@dataclass
class Named(Identifier):
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass
class Indexed(Identifier):
    index: int  # 0 means all positional variables

    def __str__(self) -> str:
        return str(self.index)


UPPER = 'upper'
LOWER = 'lower'
REVERSE = 'reverse'


@dataclass
class Modifier:
    kind: str  # 'upper', 'lower' or 'reverse'
    all: bool = False  # whole string instead of the first character


@dataclass
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass
class Text(Node):
    value: str


@dataclass
class Param(Node):
    """Base class for parameter expansions."""
    pass


@dataclass
class Simple(Param):
    identifier: Identifier
    modifier: Optional[Modifier] = None
    position: Optional[Position] = field(default=None, compare=False)


@dataclass
class Length(Param):
    identifier: Identifier
    position: Optional[Position] = field(default=None, compare=False)


@dataclass
class Arity(Param):
    position: Optional[Position] = field(default=None, compare=False)


@dataclass
class Ref(Param):
    identifier: Identifier
    position: Optional[Position] = field(default=None, compare=False)


@dataclass
class WithDefault(Param):
    identifier: Identifier
    default: Node
    treat_empty_as_unset: bool = False
    position: Optional[Position] = field(default=None, compare=False)


@dataclass
class WithAlt(Param):
    identifier: Identifier
    alt: Node
    treat_empty_as_unset: bool = False
    position: Optional[Position] = field(default=None, compare=False)


@dataclass
class WithError(Param):
    identifier: Identifier
    error: Optional[str] = None
    treat_empty_as_unset: bool = False
    position: Optional[Position] = field(default=None, compare=False)


@dataclass
class Ast:
    nodes: List[Node]
