"""Tree evaluator for Xpanda.

Walks an `Ast` and produces the substituted text, resolving identifiers
against an `Environment`. Unset is distinct from empty: `${VAR-x}` only
falls back when VAR has no value at all, while the `:` forms also treat
an empty value as unset. Lengths count characters, not bytes.
"""

from __future__ import annotations

import sys
from typing import Optional, TextIO

from .ast import (
    Ast, Node, Text, Identifier, Named, Modifier, Simple, Length, Arity,
    Ref, WithDefault, WithAlt, WithError, UPPER, LOWER, REVERSE,
)
from .environment import Environment
from .errors import EvalError
from .tokens import Position


def unset_message(identifier: Identifier, treat_empty_as_unset: bool = False) -> str:
    if treat_empty_as_unset:
        return f"'{identifier}' is unset or empty"
    return f"'{identifier}' is unset"


def swap_case(char: str) -> str:
    return char.lower() if char.isupper() else char.upper()


def apply_modifier(value: str, modifier: Modifier) -> str:
    if not value:
        return value
    if modifier.kind == UPPER:
        return value.upper() if modifier.all else value[0].upper() + value[1:]
    if modifier.kind == LOWER:
        return value.lower() if modifier.all else value[0].lower() + value[1:]
    if modifier.kind == REVERSE:
        if modifier.all:
            return ''.join(swap_case(c) for c in value)
        return swap_case(value[0]) + value[1:]
    raise ValueError(f"unknown modifier {modifier.kind}")


class Evaluator:
    """Evaluates parsed input against a variable store."""
    def __init__(self, environment: Environment, debug_level: int = 0,
                 debug_fp: Optional[TextIO] = None):
        self.environment = environment
        self.debug_level = debug_level
        self.debug_fp = debug_fp

    def debug(self, msg: str):
        if self.debug_level > 0:
            fp = self.debug_fp if self.debug_fp is not None else sys.stderr
            fp.write(msg + '\n')
            fp.flush()

    def eval(self, ast: Ast) -> str:
        if self.debug_level >= 1:
            self.debug(f"eval {len(ast.nodes)} node(s)")
        return ''.join(self.eval_node(node) for node in ast.nodes)

    def eval_node(self, node: Node) -> str:
        if isinstance(node, Text):
            return node.value
        if isinstance(node, Simple):
            value = self.eval_simple(node.identifier, node.position)
            if node.modifier is not None:
                value = apply_modifier(value, node.modifier)
            return value
        if isinstance(node, Length):
            value = self.resolve(node.identifier)
            if value is None:
                if self.environment.no_unset:
                    raise EvalError(unset_message(node.identifier), node.position)
                return '0'
            return str(len(value))
        if isinstance(node, Arity):
            return str(self.environment.arity)
        if isinstance(node, Ref):
            name = self.eval_simple(node.identifier, node.position)
            return self.eval_simple(Named(name), node.position)
        if isinstance(node, WithDefault):
            value = self.resolve_filtered(node.identifier, node.treat_empty_as_unset)
            if value is None:
                if self.debug_level >= 3:
                    self.debug(f"default for {node.identifier}")
                return self.eval_node(node.default)
            return value
        if isinstance(node, WithAlt):
            value = self.resolve_filtered(node.identifier, node.treat_empty_as_unset)
            if value is None:
                return ''
            if self.debug_level >= 3:
                self.debug(f"alternative for {node.identifier}")
            return self.eval_node(node.alt)
        if isinstance(node, WithError):
            value = self.resolve_filtered(node.identifier, node.treat_empty_as_unset)
            if value is None:
                if self.debug_level >= 3:
                    self.debug(f"error for {node.identifier}")
                message = node.error
                if message is None:
                    message = unset_message(node.identifier, node.treat_empty_as_unset)
                raise EvalError(message, node.position)
            return value
        raise TypeError(f"unsupported node {type(node).__name__}")

    def eval_simple(self, identifier: Identifier, position: Optional[Position]) -> str:
        value = self.resolve(identifier)
        if value is None:
            if self.environment.no_unset:
                raise EvalError(unset_message(identifier), position)
            return ''
        return value

    def resolve(self, identifier: Identifier) -> Optional[str]:
        value = self.environment.resolve(identifier)
        if self.debug_level >= 2:
            self.debug(f"resolve {identifier} -> {value!r}")
        return value

    def resolve_filtered(self, identifier: Identifier, treat_empty_as_unset: bool) -> Optional[str]:
        value = self.resolve(identifier)
        if treat_empty_as_unset and value == '':
            return None
        return value
