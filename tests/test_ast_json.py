import json

import pytest

from xpanda.ast_json import ast_to_obj, ast_from_obj
from xpanda.parser import parse_text


SOURCES = [
    "plain",
    "a $B ${1} ${#} ${#C} ${!D}",
    "${A:-${B-deep}} ${C+alt} ${D:?msg} ${E?}",
    "${F^} ${G,,} ${H~~}",
]


@pytest.mark.parametrize('source', SOURCES)
def test_ast_json_round_trip(source):
    ast = parse_text(source)
    obj = json.loads(json.dumps(ast_to_obj(ast)))
    restored = ast_from_obj(obj)
    assert restored == ast
    positions = [getattr(n, 'position', None) for n in restored.nodes]
    assert positions == [getattr(n, 'position', None) for n in ast.nodes]


def test_ast_to_obj_shape():
    obj = ast_to_obj(parse_text("${VAR:-x}"))
    assert obj == {
        "type": "Ast",
        "nodes": [{
            "type": "WithDefault",
            "identifier": {"type": "Named", "name": "VAR"},
            "default": {"type": "Text", "value": "x"},
            "treat_empty_as_unset": True,
            "position": {"index": 0, "line": 1, "col": 1},
        }],
    }


def test_ast_from_obj_rejects_unknown_type():
    with pytest.raises(ValueError):
        ast_from_obj({"type": "Bogus"})
    with pytest.raises(ValueError):
        ast_from_obj({"type": "Simple", "identifier": {"type": "Bogus"}})
