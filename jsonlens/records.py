"""Locates tabular data inside a JSON response body."""

from typing import Any, Dict, List, Optional

from jsonlens.schema_inference import ArrayType, ObjectType, SchemaNode


def is_array_of_objects(value: Any) -> bool:
    """True for a list whose elements are all objects or arrays."""
    return isinstance(value, list) and all(isinstance(item, (dict, list)) for item in value)


def extract_table_candidate(body: Any) -> Optional[List[Any]]:
    """Finds the rows to tabulate in a response body.

    Returns the body itself when it is a list of objects, otherwise the first
    field of an object body holding such a list, otherwise None.
    """
    if body is None:
        return None
    if is_array_of_objects(body):
        return body
    if isinstance(body, dict):
        for value in body.values():
            if is_array_of_objects(value):
                return value
    return None


def derive_item_schema(schema: Optional[SchemaNode]) -> Optional[SchemaNode]:
    """Returns the schema describing one row of the tabular data.

    For an array schema that is its item schema, for an object schema the item
    schema of its first array-typed field, otherwise the schema itself.
    """
    if schema is None:
        return None
    if isinstance(schema.type, ArrayType):
        return schema.type.item_schema
    if isinstance(schema.type, ObjectType):
        for field in schema.type.fields.values():
            if isinstance(field.type, ArrayType):
                return field.type.item_schema
    return schema


def infer_columns(rows: List[Dict[str, Any]]) -> List[str]:
    """Returns the union of row keys in first-seen order."""
    columns: Dict[str, None] = {}
    for row in rows:
        if isinstance(row, dict):
            for key in row:
                columns.setdefault(key, None)
    return list(columns)
