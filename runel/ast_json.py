"""JSON serialization/deserialization for the Runel AST.

This module converts between Runel AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. It supports a full
round-trip for every node type and both value kinds.
"""

from __future__ import annotations

from typing import Any, Dict

from .ast import (
    Program,
    Assignment,
    ExpressionStatement,
    Binary,
    ValueLiteral,
    Variable,
    Operation,
)
from .types import NumberVal, StringVal, fits_int64


def value_to_obj(v: Any) -> Dict[str, Any]:
    if isinstance(v, NumberVal):
        return {"type": "Number", "value": v.value}
    if isinstance(v, StringVal):
        return {"type": "String", "value": v.value}
    raise ValueError(f"Unknown value: {v!r}")


def value_from_obj(o: Dict[str, Any]) -> Any:
    if o["type"] == "Number":
        n = int(o["value"])
        if not fits_int64(n):
            raise ValueError(f"Number out of 64-bit range: {n}")
        return NumberVal(n)
    if o["type"] == "String":
        return StringVal(str(o["value"]))
    raise ValueError(f"Unknown value type: {o['type']}")


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None

    if isinstance(node, Program):
        return {
            "type": "Program",
            "body": [ast_to_obj(n) for n in node.body],
            "lines": list(node.lines),
        }
    if isinstance(node, Assignment):
        return {"type": "Assignment", "name": node.name, "value": ast_to_obj(node.value)}
    if isinstance(node, ExpressionStatement):
        return {"type": "ExpressionStatement", "expression": ast_to_obj(node.expression)}
    if isinstance(node, Binary):
        return {
            "type": "Binary",
            "left": ast_to_obj(node.left),
            "op": node.op.name,
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, ValueLiteral):
        return {"type": "ValueLiteral", "value": value_to_obj(node.value)}
    if isinstance(node, Variable):
        return {"type": "Variable", "name": node.name}

    raise ValueError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    if not isinstance(obj, dict) or "type" not in obj:
        raise ValueError(f"Invalid AST object: {obj!r}")

    t = obj["type"]
    if t == "Program":
        body = [ast_from_obj(n) for n in obj["body"]]
        lines = list(obj.get("lines", []))
        if lines and len(lines) != len(body):
            raise ValueError(f"Program has {len(body)} statements but {len(lines)} line numbers")
        return Program(body=body, lines=lines)
    if t == "Assignment":
        return Assignment(name=obj["name"], value=ast_from_obj(obj["value"]))
    if t == "ExpressionStatement":
        return ExpressionStatement(expression=ast_from_obj(obj["expression"]))
    if t == "Binary":
        return Binary(
            left=ast_from_obj(obj["left"]),
            op=Operation[obj["op"]],
            right=ast_from_obj(obj["right"]),
        )
    if t == "ValueLiteral":
        return ValueLiteral(value=value_from_obj(obj["value"]))
    if t == "Variable":
        return Variable(name=obj["name"])

    raise ValueError(f"Unknown AST node type: {t}")
