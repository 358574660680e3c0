"""Collects dot-notation field paths from an inferred schema.

Only object schemas are walked. Arrays are not traversed: to expose the
fields of array elements, pass the array's item schema (see
jsonlens.records.derive_item_schema).
"""

from dataclasses import dataclass
from typing import Callable, List, Optional

from jsonlens.schema_inference import ObjectType, PrimitiveType, SchemaNode, UnionType

FIELD_KINDS = ('string', 'number', 'boolean', 'unknown')


@dataclass(frozen=True)
class FilterableField:
    """A scalar leaf that filter rules can address."""
    path: str
    kind: str
    optional: bool


def _join(prefix: str, key: str) -> str:
    return f"{prefix}.{key}" if prefix else key


def _walk_leaves(schema: SchemaNode, visit: Callable[[SchemaNode, str], None], base_path: str = ''):
    """Calls visit(node, path) for every non-object node reachable through objects."""
    def walk(node: SchemaNode, path: str):
        if isinstance(node.type, ObjectType):
            for key, child in node.type.fields.items():
                walk(child, _join(path, key))
            return
        visit(node, path)

    walk(schema, base_path)


def collect_filterable_fields(schema: Optional[SchemaNode], base_path: str = '') -> List[FilterableField]:
    """Collects filterable scalar fields from a schema.

    Primitive leaves map to their kind ('null' maps to 'unknown'). A union leaf
    is included as 'unknown' only when all of its members are primitives.
    Array leaves are skipped.

    Args:
        schema: Schema to walk, typically an array item schema
        base_path: Optional prefix for every emitted path

    Returns:
        Fields in schema order
    """
    if schema is None:
        return []
    fields: List[FilterableField] = []

    def visit(node: SchemaNode, path: str):
        if isinstance(node.type, PrimitiveType):
            kind = node.type.type if node.type.type in FIELD_KINDS else 'unknown'
            fields.append(FilterableField(path, kind, node.optional))
        elif isinstance(node.type, UnionType):
            if all(isinstance(member, PrimitiveType) for member in node.type.types):
                fields.append(FilterableField(path, 'unknown', node.optional))

    _walk_leaves(schema, visit, base_path)
    return fields


def get_numeric_field_paths(schema: Optional[SchemaNode]) -> List[str]:
    """Returns paths whose type is number or a union containing number."""
    if schema is None:
        return []
    paths: List[str] = []

    def visit(node: SchemaNode, path: str):
        if isinstance(node.type, PrimitiveType) and node.type.type == 'number':
            paths.append(path)
        elif isinstance(node.type, UnionType):
            if any(isinstance(member, PrimitiveType) and member.type == 'number'
                   for member in node.type.types):
                paths.append(path)

    _walk_leaves(schema, visit)
    return paths


def collect_all_field_paths(schema: Optional[SchemaNode]) -> List[str]:
    """Returns every primitive or union leaf path, usable as a chart x axis."""
    if schema is None:
        return []
    paths: List[str] = []

    def visit(node: SchemaNode, path: str):
        if isinstance(node.type, (PrimitiveType, UnionType)):
            paths.append(path)

    _walk_leaves(schema, visit)
    return paths
