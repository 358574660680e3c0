"""Schema inference for arbitrary JSON values.

This module provides the structural type model used throughout jsonlens:
- infer_schema: infer a SchemaNode tree from a single JSON value
- merge_schema_nodes: combine two independently inferred nodes
- infer_schema_from_samples: fold several snapshots into one schema

Inference is total: every JSON value, including null and empty containers,
has a schema. Merging is pure and never mutates its inputs.

Known imprecisions:
- The element type of an empty array cannot be observed. Such arrays get a
  placeholder item schema of primitive 'string'.
- Merging a union with another union appends the second union as a single
  member instead of flattening it, so three-way merges are not guaranteed to
  produce the same member list in every order.
"""

from dataclasses import dataclass
from functools import reduce
from typing import Any, Dict, List, Optional, Tuple, Union

from jsonlens.common import json_kind

PRIMITIVE_KINDS = ('string', 'number', 'boolean', 'null')


class SchemaTypeBase:
    """Base class for schema types. Equality is structural."""

    kind: str = ''

    def __eq__(self, other):
        if not isinstance(other, SchemaTypeBase):
            return NotImplemented
        return schema_types_equal(self, other)

    __hash__ = None  # type: ignore


@dataclass(frozen=True, eq=False)
class PrimitiveType(SchemaTypeBase):
    """A scalar: one of 'string', 'number', 'boolean', 'null'."""
    type: str
    kind = 'primitive'


@dataclass(frozen=True, eq=False)
class ArrayType(SchemaTypeBase):
    """An array whose elements are all described by a single item schema."""
    item_schema: 'SchemaNode'
    kind = 'array'


@dataclass(frozen=True, eq=False)
class ObjectType(SchemaTypeBase):
    """An object with named fields."""
    fields: Dict[str, 'SchemaNode']
    kind = 'object'


@dataclass(frozen=True, eq=False)
class UnionType(SchemaTypeBase):
    """One of several shapes. Members are structurally distinct."""
    types: Tuple[SchemaTypeBase, ...]
    kind = 'union'


SchemaType = Union[PrimitiveType, ArrayType, ObjectType, UnionType]


@dataclass(frozen=True)
class SchemaNode:
    """Inferred type of one JSON position plus its optionality."""
    type: SchemaType
    optional: bool = False


def schema_types_equal(a: SchemaTypeBase, b: SchemaTypeBase) -> bool:
    """Compares two schema types structurally.

    Object fields are compared irrespective of key order and union members
    irrespective of member order.
    """
    if a is b:
        return True
    if a.kind != b.kind:
        return False
    if isinstance(a, PrimitiveType) and isinstance(b, PrimitiveType):
        return a.type == b.type
    if isinstance(a, ArrayType) and isinstance(b, ArrayType):
        return a.item_schema == b.item_schema
    if isinstance(a, ObjectType) and isinstance(b, ObjectType):
        if a.fields.keys() != b.fields.keys():
            return False
        return all(a.fields[key] == b.fields[key] for key in a.fields)
    if isinstance(a, UnionType) and isinstance(b, UnionType):
        if len(a.types) != len(b.types):
            return False
        remaining = list(b.types)
        for member in a.types:
            for index, candidate in enumerate(remaining):
                if schema_types_equal(member, candidate):
                    del remaining[index]
                    break
            else:
                return False
        return True
    return False


def _placeholder_item_schema() -> SchemaNode:
    return SchemaNode(PrimitiveType('string'), optional=False)


def infer_type(value: Any) -> SchemaType:
    """Infers the schema type for a single JSON value."""
    kind = json_kind(value)
    if kind == 'array':
        return infer_array_type(value)
    if kind == 'object':
        return ObjectType({key: SchemaNode(infer_type(item), optional=False)
                           for key, item in value.items()})
    if kind in PRIMITIVE_KINDS:
        return PrimitiveType(kind)
    # not a JSON value; callers must not pass these
    return PrimitiveType('string')


def infer_array_type(values: List[Any]) -> ArrayType:
    """Infers an array type by merging the schemas of all elements.

    An empty array yields the placeholder item schema.
    """
    if not values:
        return ArrayType(_placeholder_item_schema())
    item_nodes = [SchemaNode(infer_type(item), optional=False) for item in values]
    return ArrayType(reduce(merge_schema_nodes, item_nodes))


def infer_schema(value: Any) -> SchemaNode:
    """Infers the schema for a JSON value.

    Args:
        value: Parsed JSON value (as returned by json.loads)

    Returns:
        The root SchemaNode, never optional
    """
    return SchemaNode(infer_type(value), optional=False)


def infer_schema_from_samples(values: List[Any]) -> SchemaNode:
    """Infers one schema that covers several JSON snapshots.

    Args:
        values: Parsed JSON values, e.g. successive responses of one endpoint

    Returns:
        The merged SchemaNode
    """
    if not values:
        return _placeholder_item_schema()
    return reduce(merge_schema_nodes, (infer_schema(value) for value in values))


def merge_schema_nodes(a: SchemaNode, b: SchemaNode) -> SchemaNode:
    """Merges two schema nodes, combining their types and optional flags."""
    return SchemaNode(merge_schema_types(a.type, b.type), optional=a.optional or b.optional)


def merge_schema_types(a: SchemaType, b: SchemaType) -> SchemaType:
    """Merges two schema types into a common type or a union."""
    if schema_types_equal(a, b):
        return a

    if isinstance(a, ArrayType) and isinstance(b, ArrayType):
        return ArrayType(merge_schema_nodes(a.item_schema, b.item_schema))

    if isinstance(a, ObjectType) and isinstance(b, ObjectType):
        return ObjectType(_merge_fields(a.fields, b.fields))

    if isinstance(a, UnionType):
        return _merge_into_union(a, b)
    if isinstance(b, UnionType):
        return _merge_into_union(b, a)

    # different primitives, or different kinds
    return UnionType((a, b))


def _merge_fields(base_fields: Dict[str, SchemaNode],
                  new_fields: Dict[str, SchemaNode]) -> Dict[str, SchemaNode]:
    """Folds two field maps. Fields missing on either side become optional."""
    merged: Dict[str, SchemaNode] = {}
    for key, base_node in base_fields.items():
        new_node = new_fields.get(key)
        if new_node is None:
            merged[key] = SchemaNode(base_node.type, optional=True)
        else:
            merged[key] = merge_schema_nodes(base_node, new_node)
    for key, new_node in new_fields.items():
        if key not in base_fields:
            merged[key] = SchemaNode(new_node.type, optional=True)
    return merged


def _merge_into_union(union: UnionType, other: SchemaType) -> UnionType:
    """Adds a type to a union unless a structurally equal member exists."""
    if any(schema_types_equal(member, other) for member in union.types):
        return union
    return UnionType(union.types + (other,))


def format_type_string(schema_type: SchemaType, depth: int = 0) -> str:
    """Formats a schema type as a readable string.

    Examples: 'string', 'number[]', '{ id: number, name?: string, ... }',
    'string | null'.
    """
    if isinstance(schema_type, PrimitiveType):
        return schema_type.type
    if isinstance(schema_type, ArrayType):
        return f"{format_type_string(schema_type.item_schema.type, depth + 1)}[]"
    if isinstance(schema_type, ObjectType):
        if depth > 2:
            return "{ ... }"
        parts = []
        for key, node in list(schema_type.fields.items())[:3]:
            marker = '?' if node.optional else ''
            parts.append(f"{key}{marker}: {format_type_string(node.type, depth + 1)}")
        more = ", ..." if len(schema_type.fields) > 3 else ""
        return "{ " + ", ".join(parts) + more + " }"
    return " | ".join(format_type_string(member, depth + 1) for member in schema_type.types)


def schema_type_to_dict(schema_type: SchemaType) -> Dict[str, Any]:
    """Serializes a schema type to a JSON-ready dict tagged by 'kind'."""
    if isinstance(schema_type, PrimitiveType):
        return {"kind": "primitive", "type": schema_type.type}
    if isinstance(schema_type, ArrayType):
        return {"kind": "array", "itemSchema": schema_to_dict(schema_type.item_schema)}
    if isinstance(schema_type, ObjectType):
        return {"kind": "object",
                "fields": {key: schema_to_dict(node) for key, node in schema_type.fields.items()}}
    return {"kind": "union", "types": [schema_type_to_dict(member) for member in schema_type.types]}


def schema_to_dict(node: Optional[SchemaNode]) -> Optional[Dict[str, Any]]:
    """Serializes a SchemaNode tree to plain dicts."""
    if node is None:
        return None
    return {"type": schema_type_to_dict(node.type), "optional": node.optional}
