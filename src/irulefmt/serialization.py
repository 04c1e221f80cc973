"""Tree serialization: JSON round-trip for irulefmt nodes.

Converts trees to/from JSON-compatible dicts. This is how trees built by an
external parser reach the ``irulefmt`` command.

Every node becomes a dict with a ``_type`` discriminator. Byte operands are
stored as strings decoded from UTF-8 with ``surrogateescape``, so any byte
sequence survives the round-trip.

Example:
    from irulefmt.serialization import to_json, from_json

    json_str = to_json(tree)
    assert from_json(json_str) == tree

Thread Safety:
    All functions are pure. Safe to call from any thread.

"""

import json
from dataclasses import fields, is_dataclass
from typing import Any

from irulefmt.errors import SerializationError
from irulefmt.nodes import (
    Ast,
    Block,
    Branch,
    Case,
    Comment,
    If,
    IfElse,
    IfElseIf,
    Log,
    Newline,
    Node,
    Pool,
    Procedure,
    Return,
    Set,
    Snat,
    SnatPool,
    Statement,
    Switch,
)

_ENCODING = "utf-8"
_ERRORS = "surrogateescape"

# Tree node classes, valid as a document root
_AST_TYPES: tuple[type, ...] = (
    Block,
    Comment,
    Procedure,
    If,
    IfElse,
    IfElseIf,
    Switch,
    Statement,
    Newline,
)

# Registry of type names to classes for deserialization
_NODE_TYPES: dict[str, type] = {
    cls.__name__: cls
    for cls in (
        *_AST_TYPES,
        Branch,
        Case,
        Set,
        Log,
        Snat,
        Node,
        Pool,
        SnatPool,
        Return,
    )
}


def to_dict(node: Any) -> dict[str, Any]:
    """Convert a node to a JSON-compatible dict.

    Works for tree nodes, statement kinds, and the Branch/Case helpers.

    Raises:
        SerializationError: If ``node`` is not an irulefmt node.

    """
    if not is_dataclass(node) or _NODE_TYPES.get(type(node).__name__) is not type(node):
        msg = f"Cannot serialize {type(node).__name__!r}"
        raise SerializationError(msg)

    result: dict[str, Any] = {"_type": type(node).__name__}
    for f in fields(node):
        result[f.name] = _serialize_value(getattr(node, f.name))
    return result


def _serialize_value(value: Any) -> Any:
    if isinstance(value, bytes):
        return value.decode(_ENCODING, _ERRORS)
    if isinstance(value, tuple):
        return [_serialize_value(item) for item in value]
    if value is None:
        return None
    return to_dict(value)


def from_dict(data: dict[str, Any]) -> Any:
    """Reconstruct a node from a dict produced by ``to_dict``.

    Raises:
        SerializationError: If ``_type`` is missing or unknown, or the
            fields do not match the node class.

    """
    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized node"
        raise SerializationError(msg)

    node_cls = _NODE_TYPES.get(type_name) if isinstance(type_name, str) else None
    if node_cls is None:
        msg = f"Unknown node type: {type_name!r}"
        raise SerializationError(msg)

    kwargs: dict[str, Any] = {}
    for f in fields(node_cls):
        if f.name not in data:
            continue
        kwargs[f.name] = _deserialize_value(data[f.name], f.name)

    try:
        return node_cls(**kwargs)
    except TypeError as e:
        msg = f"Invalid fields for {type_name}: {e}"
        raise SerializationError(msg) from e


def _deserialize_value(value: Any, field_name: str) -> Any:
    if isinstance(value, str):
        try:
            return value.encode(_ENCODING, _ERRORS)
        except UnicodeEncodeError as e:
            msg = f"Unencodable string in field {field_name!r}: {e.reason}"
            raise SerializationError(msg) from e
    if isinstance(value, list):
        return tuple(_deserialize_value(item, field_name) for item in value)
    if isinstance(value, dict):
        return from_dict(value)
    if value is None:
        return None
    msg = f"Unexpected {type(value).__name__} value in field {field_name!r}"
    raise SerializationError(msg)


def to_json(tree: Ast, *, indent: int | None = None) -> str:
    """Serialize a tree to a JSON string.

    Output is deterministic (sorted keys).

    """
    return json.dumps(to_dict(tree), sort_keys=True, indent=indent)


def from_json(data: str | bytes) -> Ast:
    """Deserialize a tree from a JSON string.

    Raises:
        SerializationError: If the data is not valid JSON or the root
            is not a tree node.

    """
    try:
        raw = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        msg = f"Invalid JSON: {e}"
        raise SerializationError(msg) from e

    if not isinstance(raw, dict):
        msg = f"Expected a JSON object, got {type(raw).__name__}"
        raise SerializationError(msg)

    node = from_dict(raw)
    if not isinstance(node, _AST_TYPES):
        msg = f"Expected a tree node, got {type(node).__name__}"
        raise SerializationError(msg)
    return node
