"""Recursive-descent parser for Xpanda.

The parser pulls tokens from a `Lexer` through a one token lookahead
buffer and builds an `Ast`. Grammar, informally::

    ast        := node*
    node       := TEXT | '$' param
    param      := '{' braced '}' | identifier
    braced     := '#' (identifier)?             length, or arity when empty
                | '!' identifier                indirect reference
                | identifier case_mod           ^ ^^ , ,, ~ ~~
                | identifier ':'? '-' node      default
                | identifier ':'? '+' node      alternative
                | identifier ':'? '?' TEXT?     error
                | identifier                    simple
    identifier := IDENT | INDEX

Parsing stops at the first error; there is no recovery and no partial
result. Errors carry the end position of the last consumed token.
"""

from __future__ import annotations

from typing import List, Optional

from .ast import (
    Ast, Node, Text, Param, Identifier, Named, Indexed, Modifier,
    Simple, Length, Arity, Ref, WithDefault, WithAlt, WithError,
    UPPER, LOWER, REVERSE,
)
from .errors import ParseError
from .lexer import Lexer
from .tokens import (
    Token, Position, describe, TEXT, IDENT, INDEX, OPEN_BRACE, CLOSE_BRACE,
    DOLLAR_SIGN, COLON, DASH, PLUS, QUESTION_MARK, POUND_SIGN,
    EXCLAMATION_MARK, CARET, COMMA, TILDE,
)

MODIFIER_KINDS = {CARET: UPPER, COMMA: LOWER, TILDE: REVERSE}

# Braced params nest through defaults and alternatives; deeper input is rejected.
MAX_NESTING = 100


class Parser:
    def __init__(self, lexer: Lexer):
        self.lexer = lexer
        self.lookahead: Optional[Token] = None
        self.position: Optional[Position] = None
        self.depth = 0

    def parse(self) -> Ast:
        nodes: List[Node] = []
        while self.peek_token() is not None:
            nodes.append(self.parse_node())
        return Ast(nodes)

    def peek_token(self) -> Optional[Token]:
        if self.lookahead is None:
            self.lookahead = self.lexer.next_token()
        return self.lookahead

    def next_token(self) -> Optional[Token]:
        token = self.peek_token()
        self.lookahead = None
        if token is not None:
            self.position = token.end
        return token

    def skip_token(self) -> None:
        self.next_token()

    def match(self, expected: str) -> bool:
        token = self.peek_token()
        return token is not None and token.type == expected

    def expect_token(self, expected: str) -> Token:
        token = self.next_token()
        if token is None:
            raise self.error(f"Expected '{expected}', found EOF")
        if token.type != expected:
            raise self.error(f"Expected '{expected}', found {token}")
        return token

    def error(self, message: str) -> ParseError:
        return ParseError(message, self.position)

    def parse_node(self) -> Node:
        token = self.peek_token()
        if token is None:
            raise self.error("Unexpected EOF")
        if token.type == TEXT:
            self.skip_token()
            return Text(token.value)
        if token.type == DOLLAR_SIGN:
            self.skip_token()
            return self.parse_param(token.start)
        raise self.error(f"Unexpected token {token}")

    def parse_param(self, start: Position) -> Param:
        if not self.match(OPEN_BRACE):
            return self.parse_simple_param(start)
        self.skip_token()
        self.depth += 1
        if self.depth > MAX_NESTING:
            raise self.error("Nesting too deep")
        token = self.peek_token()
        if token is None:
            raise self.error("Expected param, found EOF")
        if token.type == POUND_SIGN:
            param = self.parse_len_or_arity_param(start)
        elif token.type == EXCLAMATION_MARK:
            param = self.parse_ref_param(start)
        else:
            identifier = self.parse_identifier()
            following = self.peek_token()
            if following is None:
                raise self.error("Invalid param, unexpected EOF")
            if following.type in MODIFIER_KINDS:
                param = self.parse_case_param(identifier, start)
            else:
                param = self.parse_default_alt_error_or_simple_param(identifier, start)
        self.expect_token(CLOSE_BRACE)
        self.depth -= 1
        return param

    def parse_len_or_arity_param(self, start: Position) -> Param:
        self.expect_token(POUND_SIGN)
        token = self.peek_token()
        if token is None:
            raise self.error("Expected identifier or close brace, found EOF")
        if token.type == CLOSE_BRACE:
            return Arity(position=start)
        return Length(self.parse_identifier(), position=start)

    def parse_ref_param(self, start: Position) -> Ref:
        self.expect_token(EXCLAMATION_MARK)
        return Ref(self.parse_identifier(), position=start)

    def parse_default_alt_error_or_simple_param(self, identifier: Identifier, start: Position) -> Param:
        # ':' only ever precedes '-', '+' or '?'
        treat_empty_as_unset = False
        if self.match(COLON):
            self.skip_token()
            treat_empty_as_unset = True
        token = self.peek_token()
        if token is None:
            raise self.error("Invalid param, unexpected EOF")
        if token.type == DASH:
            self.skip_token()
            return WithDefault(identifier, self.parse_node(), treat_empty_as_unset, position=start)
        if token.type == PLUS:
            self.skip_token()
            return WithAlt(identifier, self.parse_node(), treat_empty_as_unset, position=start)
        if token.type == QUESTION_MARK:
            self.skip_token()
            message = None
            if self.match(TEXT):
                message = self.next_token().value
            return WithError(identifier, message, treat_empty_as_unset, position=start)
        if token.type == CLOSE_BRACE and not treat_empty_as_unset:
            return Simple(identifier, position=start)
        raise self.error(f"Invalid param, unexpected token {token}")

    def parse_case_param(self, identifier: Identifier, start: Position) -> Simple:
        token = self.next_token()
        doubled = self.match(token.type)
        if doubled:
            self.skip_token()
        modifier = Modifier(MODIFIER_KINDS[token.type], all=doubled)
        return Simple(identifier, modifier, position=start)

    def parse_simple_param(self, start: Position) -> Simple:
        return Simple(self.parse_identifier(), position=start)

    def parse_identifier(self) -> Identifier:
        token = self.next_token()
        if token is None:
            raise self.error("Expected identifier, found EOF")
        if token.type == IDENT:
            return Named(token.value)
        if token.type == INDEX:
            return Indexed(token.value)
        raise self.error(f"Expected identifier, found {describe(token)}")


def parse_text(source: str) -> Ast:
    """Parse the given input into an Ast."""
    return Parser(Lexer(source)).parse()
