"""JSON and YAML serialization for Logo AST trees.

Every node becomes a dictionary holding its class name under "_type", its
source position under "_position" (optional) and one entry per field.
Reading a tree back checks each field against the shape of the Logo AST:
loop and IF bodies must be Blocks, a number must not be a boolean, MAKE
targets must be Identifiers, and so on. Data that does not describe a
valid tree raises ValueError.

Example:
    from logo_interpreter.ast import getASTfromString, ast_to_json, ast_from_json

    ast = getASTfromString("FORWARD 10")
    json_str = ast_to_json(ast)
    ast_restored = ast_from_json(json_str)
"""

from __future__ import annotations

import json
from typing import Any

from ..keywords import QUERY_KEYWORDS
from ..position import Position
from .nodes import (
    ASTNode,
    Expression,
    Statement,
    Identifier,
    NumberLiteral,
    BooleanLiteral,
    VariableRef,
    QueryOp,
    UnaryMinusOp,
    AdditionOp,
    SubtractionOp,
    MultiplicationOp,
    DivisionOp,
    LessThanOp,
    GreaterThanOp,
    EqualityOp,
    InequalityOp,
    LogicalAndOp,
    LogicalOrOp,
    Block,
    Program,
    Command,
    Assignment,
    AddAssignment,
    IfStatement,
    WhileStatement,
    RepeatStatement,
)


_BINARY_OPS = [
    AdditionOp,
    SubtractionOp,
    MultiplicationOp,
    DivisionOp,
    LessThanOp,
    GreaterThanOp,
    EqualityOp,
    InequalityOp,
    LogicalAndOp,
    LogicalOrOp,
]

# Fields of each node class and what they hold: str, float or bool for
# plain values, a node class for a child node, [node class] for a list.
_NODE_FIELDS: dict[type[ASTNode], dict[str, Any]] = {
    Identifier: {"name": str},
    NumberLiteral: {"val": float},
    BooleanLiteral: {"val": bool},
    VariableRef: {"name": str},
    QueryOp: {"name": str},
    UnaryMinusOp: {"expr": Expression},
    **{cls: {"left": Expression, "right": Expression} for cls in _BINARY_OPS},
    Block: {"statements": [Statement]},
    Program: {"statements": [Statement]},
    Command: {"name": str, "arguments": [Expression]},
    Assignment: {"name": Identifier, "expr": Expression},
    AddAssignment: {"name": Identifier, "expr": Expression},
    IfStatement: {"condition": Expression, "body": Block},
    WhileStatement: {"condition": Expression, "body": Block},
    RepeatStatement: {"count": Expression, "body": Block},
}

# Registry mapping class names to their classes, for deserialization
_NODE_REGISTRY: dict[str, type[ASTNode]] = {cls.__name__: cls for cls in _NODE_FIELDS}

_UNKNOWN_POSITION = Position(origin="<unknown>", line=0, column=0)


def _serialize_position(position: Position) -> dict[str, Any]:
    """Serialize a Position to a dictionary."""
    return {
        "origin": position.origin,
        "line": position.line,
        "column": position.column,
        "offset": position.offset,
    }


def _serialize_node(node: ASTNode, include_position: bool) -> dict[str, Any]:
    """Serialize a single AST node to a dictionary."""
    fields = _NODE_FIELDS.get(type(node))
    if fields is None:
        raise TypeError(f"Unsupported type for serialization: {type(node)}")

    result: dict[str, Any] = {"_type": type(node).__name__}
    if include_position:
        result["_position"] = _serialize_position(node.position)

    for name, kind in fields.items():
        value = getattr(node, name)
        if isinstance(kind, list):
            result[name] = [_serialize_node(item, include_position) for item in value]
        elif isinstance(kind, type) and issubclass(kind, ASTNode):
            result[name] = _serialize_node(value, include_position)
        elif kind is float:
            result[name] = float(value)
        else:
            result[name] = value
    return result


def ast_to_dict(
    ast: ASTNode | list[ASTNode] | None,
    include_position: bool = True,
) -> dict[str, Any] | list[dict[str, Any]] | None:
    """Convert an AST to a Python dictionary (JSON-serializable).

    Args:
        ast: An AST node, list of AST nodes, or None.
        include_position: If True, include source position information (default: True).

    Returns:
        A dictionary representation of the AST, a list of dictionaries, or None.
    """
    if ast is None:
        return None
    elif isinstance(ast, list):
        return [_serialize_node(node, include_position) for node in ast]
    else:
        return _serialize_node(ast, include_position)


def ast_to_json(
    ast: ASTNode | list[ASTNode] | None,
    include_position: bool = True,
    indent: int | None = 2,
) -> str:
    """Serialize an AST to a JSON string.

    Args:
        ast: An AST node, list of AST nodes, or None.
        include_position: If True, include source position information (default: True).
        indent: Indentation level for pretty-printing. Use None for compact output.

    Returns:
        A JSON string representation of the AST.
    """
    data = ast_to_dict(ast, include_position=include_position)
    return json.dumps(data, indent=indent)


def _deserialize_position(data: Any) -> Position:
    """Deserialize a Position from a dictionary."""
    if not isinstance(data, dict):
        raise ValueError(f"'_position' must be a mapping, got {type(data).__name__}")
    try:
        return Position(
            origin=data["origin"],
            line=data["line"],
            column=data["column"],
            offset=data.get("offset", 0),
        )
    except KeyError as e:
        raise ValueError(f"'_position' is missing {e}") from None


def _deserialize_field(type_name: str, name: str, kind: Any, value: Any) -> Any:
    """Check one field value against its kind and rebuild it."""
    where = f"{type_name}.{name}"
    if isinstance(kind, list):
        if not isinstance(value, list):
            raise ValueError(f"{where} must be a list, got {type(value).__name__}")
        return [_deserialize_field(type_name, name, kind[0], item) for item in value]
    if isinstance(kind, type) and issubclass(kind, ASTNode):
        if not isinstance(value, dict):
            raise ValueError(f"{where} must be a node, got {type(value).__name__}")
        node = _deserialize_node(value)
        if not isinstance(node, kind):
            raise ValueError(f"{where} must be a {kind.__name__}, got {type(node).__name__}")
        return node
    if kind is bool:
        if not isinstance(value, bool):
            raise ValueError(f"{where} must be a boolean, got {value!r}")
        return value
    if kind is float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"{where} must be a number, got {value!r}")
        return float(value)
    if not isinstance(value, str):
        raise ValueError(f"{where} must be a string, got {value!r}")
    return value


def _deserialize_node(data: dict[str, Any]) -> ASTNode:
    """Deserialize a single AST node from a dictionary."""
    if not isinstance(data, dict):
        raise ValueError(f"Node data must be a mapping, got {type(data).__name__}")
    if "_type" not in data:
        raise ValueError("Missing '_type' field in node data")

    type_name = data["_type"]
    if type_name not in _NODE_REGISTRY:
        raise ValueError(f"Unknown node type: {type_name}")
    node_class = _NODE_REGISTRY[type_name]
    fields = _NODE_FIELDS[node_class]

    for key in data:
        if key not in fields and key not in ("_type", "_position"):
            raise ValueError(f"Unknown field '{key}' for {type_name}")

    kwargs: dict[str, Any] = {}
    for name, kind in fields.items():
        if name not in data:
            raise ValueError(f"{type_name} is missing field '{name}'")
        kwargs[name] = _deserialize_field(type_name, name, kind, data[name])

    if node_class is QueryOp and kwargs["name"] not in QUERY_KEYWORDS:
        raise ValueError(f"Unknown query: {kwargs['name']}")

    if "_position" in data:
        kwargs["position"] = _deserialize_position(data["_position"])
    else:
        kwargs["position"] = _UNKNOWN_POSITION
    return node_class(**kwargs)


def ast_from_dict(data: dict[str, Any] | list[dict[str, Any]] | None) -> ASTNode | list[ASTNode] | None:
    """Reconstruct an AST from a Python dictionary.

    Args:
        data: A dictionary, list of dictionaries, or None (as returned by ast_to_dict).

    Returns:
        An AST node, list of AST nodes, or None.

    Raises:
        ValueError: If the data contains an unknown node type or field, lacks
            a field, puts the wrong kind of value in a field (for example a
            REPEAT body that is not a Block), or describes a Command with an
            unknown name or the wrong number of arguments.
    """
    if data is None:
        return None
    elif isinstance(data, list):
        return [_deserialize_node(item) for item in data]
    else:
        return _deserialize_node(data)


def ast_from_json(json_str: str) -> ASTNode | list[ASTNode] | None:
    """Deserialize an AST from a JSON string (as returned by ast_to_json)."""
    data = json.loads(json_str)
    return ast_from_dict(data)


def _import_yaml(purpose: str):
    try:
        import yaml
    except ImportError:
        raise ImportError(
            f"PyYAML is required for YAML {purpose}. "
            "Install it with: pip install logo_interpreter[yaml]"
        )
    return yaml


def ast_to_yaml(
    ast: ASTNode | list[ASTNode] | None,
    include_position: bool = True,
) -> str:
    """Serialize an AST to a YAML string.

    Requires PyYAML to be installed: pip install logo_interpreter[yaml]

    Raises:
        ImportError: If PyYAML is not installed.
    """
    yaml = _import_yaml("serialization")
    data = ast_to_dict(ast, include_position=include_position)
    return yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)


def ast_from_yaml(yaml_str: str) -> ASTNode | list[ASTNode] | None:
    """Deserialize an AST from a YAML string (as returned by ast_to_yaml).

    Requires PyYAML to be installed: pip install logo_interpreter[yaml]

    Raises:
        ImportError: If PyYAML is not installed.
    """
    yaml = _import_yaml("deserialization")
    data = yaml.safe_load(yaml_str)
    return ast_from_dict(data)


# vim: set ts=4 sw=4 expandtab:
