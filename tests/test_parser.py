import pytest

from xpanda.ast import (
    Ast, Text, Named, Indexed, Modifier, Simple, Length, Arity, Ref,
    WithDefault, WithAlt, WithError,
)
from xpanda.errors import ParseError
from xpanda.parser import MAX_NESTING, parse_text
from xpanda.tokens import Position


def test_simple_params():
    assert parse_text("${VAR}") == Ast([Simple(Named('VAR'))])
    assert parse_text("$1") == Ast([Simple(Indexed(1))])
    assert parse_text("a $B c") == Ast([Text('a '), Simple(Named('B')), Text(' c')])


def test_default_and_alt():
    assert parse_text("${VAR:-x}") == Ast([WithDefault(Named('VAR'), Text('x'), True)])
    assert parse_text("${VAR-x}") == Ast([WithDefault(Named('VAR'), Text('x'), False)])
    assert parse_text("${VAR+$ALT}") == Ast([WithAlt(Named('VAR'), Simple(Named('ALT')), False)])
    assert parse_text("${A:-${B-c}}") == Ast([
        WithDefault(Named('A'), WithDefault(Named('B'), Text('c'), False), True),
    ])


def test_error_forms():
    assert parse_text("${1?msg}") == Ast([WithError(Indexed(1), 'msg', False)])
    assert parse_text("${VAR:?}") == Ast([WithError(Named('VAR'), None, True)])


def test_length_arity_ref():
    assert parse_text("${#VAR}") == Ast([Length(Named('VAR'))])
    assert parse_text("${#}") == Ast([Arity()])
    assert parse_text("${!VAR}") == Ast([Ref(Named('VAR'))])


def test_case_modifiers():
    assert parse_text("${VAR^}") == Ast([Simple(Named('VAR'), Modifier('upper', False))])
    assert parse_text("${VAR,,}") == Ast([Simple(Named('VAR'), Modifier('lower', True))])
    assert parse_text("${1~}") == Ast([Simple(Indexed(1), Modifier('reverse', False))])


def test_param_position_is_dollar_sign():
    ast = parse_text("ab ${X}\n  $Y")
    assert ast.nodes[1].position == Position(3, 1, 4)
    assert ast.nodes[3].position == Position(10, 2, 3)


@pytest.mark.parametrize('source, message, line, col', [
    ("${VAR", "Invalid param, unexpected EOF", 1, 6),
    ("${VAR-", "Unexpected EOF", 1, 7),
    ("${VAR ", 'Invalid param, unexpected token " "', 1, 6),
    ("${#", "Expected identifier or close brace, found EOF", 1, 4),
    ("${VAR-:def}", "Unexpected token ':'", 1, 7),
    ("${}", "Expected identifier, found '}'", 1, 4),
    ("${", "Expected param, found EOF", 1, 3),
    ("${VAR:}", "Invalid param, unexpected token '}'", 1, 7),
    ("${!}", "Expected identifier, found '}'", 1, 5),
    ("$ ", 'Expected identifier, found " "', 1, 3),
    ("${VAR^^^}", "Expected '}', found '^'", 1, 9),
    ("line\n${X", "Invalid param, unexpected EOF", 2, 4),
])
def test_syntax_errors(source, message, line, col):
    with pytest.raises(ParseError) as excinfo:
        parse_text(source)
    assert excinfo.value.message == message
    assert (excinfo.value.line, excinfo.value.col) == (line, col)


def nested_defaults(depth):
    return "${A-" * depth + "x" + "}" * depth


def test_nesting_limit():
    assert parse_text(nested_defaults(MAX_NESTING)).nodes[0].identifier == Named('A')
    with pytest.raises(ParseError) as excinfo:
        parse_text(nested_defaults(MAX_NESTING + 1))
    assert excinfo.value.message == "Nesting too deep"
    assert (excinfo.value.line, excinfo.value.col) == (1, 4 * MAX_NESTING + 3)


def test_very_deep_nesting_is_a_parse_error():
    with pytest.raises(ParseError):
        parse_text(nested_defaults(2000))
