"""JSON serialization/deserialization for the Xpanda AST.

This module converts between AST dataclasses and plain Python dict/list
structures suitable for JSON encoding. Parameter positions are kept so
that evaluating a deserialized AST reports errors at the original
location.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from .ast import (
    Ast,
    Node,
    Text,
    Identifier,
    Named,
    Indexed,
    Modifier,
    Simple,
    Length,
    Arity,
    Ref,
    WithDefault,
    WithAlt,
    WithError,
)
from .tokens import Position


def position_to_obj(p: Optional[Position]) -> Optional[Dict[str, int]]:
    if p is None:
        return None
    return {"index": p.index, "line": p.line, "col": p.col}


def position_from_obj(o: Optional[Dict[str, int]]) -> Optional[Position]:
    if o is None:
        return None
    return Position(o["index"], o["line"], o["col"])


def identifier_to_obj(identifier: Identifier) -> Dict[str, Any]:
    if isinstance(identifier, Named):
        return {"type": "Named", "name": identifier.name}
    if isinstance(identifier, Indexed):
        return {"type": "Indexed", "index": identifier.index}
    raise TypeError(f"Unsupported identifier for serialization: {type(identifier).__name__}")


def identifier_from_obj(o: Dict[str, Any]) -> Identifier:
    t = o.get("type")
    if t == "Named":
        return Named(o["name"])
    if t == "Indexed":
        return Indexed(o["index"])
    raise ValueError(f"Unknown identifier type: {t}")


def modifier_to_obj(m: Optional[Modifier]) -> Optional[Dict[str, Any]]:
    if m is None:
        return None
    return {"kind": m.kind, "all": m.all}


def modifier_from_obj(o: Optional[Dict[str, Any]]) -> Optional[Modifier]:
    if o is None:
        return None
    return Modifier(o["kind"], o.get("all", False))


def ast_to_obj(node: Any) -> Any:
    if isinstance(node, Ast):
        return {"type": "Ast", "nodes": [ast_to_obj(n) for n in node.nodes]}
    if isinstance(node, Text):
        return {"type": "Text", "value": node.value}
    if isinstance(node, Simple):
        return {
            "type": "Simple",
            "identifier": identifier_to_obj(node.identifier),
            "modifier": modifier_to_obj(node.modifier),
            "position": position_to_obj(node.position),
        }
    if isinstance(node, Length):
        return {
            "type": "Length",
            "identifier": identifier_to_obj(node.identifier),
            "position": position_to_obj(node.position),
        }
    if isinstance(node, Arity):
        return {"type": "Arity", "position": position_to_obj(node.position)}
    if isinstance(node, Ref):
        return {
            "type": "Ref",
            "identifier": identifier_to_obj(node.identifier),
            "position": position_to_obj(node.position),
        }
    if isinstance(node, WithDefault):
        return {
            "type": "WithDefault",
            "identifier": identifier_to_obj(node.identifier),
            "default": ast_to_obj(node.default),
            "treat_empty_as_unset": node.treat_empty_as_unset,
            "position": position_to_obj(node.position),
        }
    if isinstance(node, WithAlt):
        return {
            "type": "WithAlt",
            "identifier": identifier_to_obj(node.identifier),
            "alt": ast_to_obj(node.alt),
            "treat_empty_as_unset": node.treat_empty_as_unset,
            "position": position_to_obj(node.position),
        }
    if isinstance(node, WithError):
        return {
            "type": "WithError",
            "identifier": identifier_to_obj(node.identifier),
            "error": node.error,
            "treat_empty_as_unset": node.treat_empty_as_unset,
            "position": position_to_obj(node.position),
        }
    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(o: Any) -> Any:
    if not isinstance(o, dict):
        raise ValueError(f"Expected an AST object, got {type(o).__name__}")
    t = o.get("type")
    position = position_from_obj(o.get("position"))
    if t == "Ast":
        return Ast([ast_from_obj(n) for n in o.get("nodes", [])])
    if t == "Text":
        return Text(o["value"])
    if t == "Simple":
        return Simple(identifier_from_obj(o["identifier"]), modifier_from_obj(o.get("modifier")), position=position)
    if t == "Length":
        return Length(identifier_from_obj(o["identifier"]), position=position)
    if t == "Arity":
        return Arity(position=position)
    if t == "Ref":
        return Ref(identifier_from_obj(o["identifier"]), position=position)
    if t == "WithDefault":
        return WithDefault(
            identifier_from_obj(o["identifier"]),
            _node_from_obj(o["default"]),
            o.get("treat_empty_as_unset", False),
            position=position,
        )
    if t == "WithAlt":
        return WithAlt(
            identifier_from_obj(o["identifier"]),
            _node_from_obj(o["alt"]),
            o.get("treat_empty_as_unset", False),
            position=position,
        )
    if t == "WithError":
        return WithError(
            identifier_from_obj(o["identifier"]),
            o.get("error"),
            o.get("treat_empty_as_unset", False),
            position=position,
        )
    raise ValueError(f"Unknown node type: {t}")


def _node_from_obj(o: Any) -> Node:
    node = ast_from_obj(o)
    if not isinstance(node, Node):
        raise ValueError("Expected a node")
    return node
