"""
Common utility functions for jsonlens.
"""

# pylint: disable=too-many-return-statements

import json
import os
from typing import Any, Dict, List, Union
import jinja2


JsonNode = Union[Dict[str, 'JsonNode'], List['JsonNode'], str, bool, int, float, None]


class _Missing:
    """Marker for a value that is absent, as opposed to a present null."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return 'MISSING'

    def __bool__(self):
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


MISSING: Any = _Missing()


def json_kind(value: Any) -> str:
    """
    Classify a JSON value.

    Returns one of 'null', 'boolean', 'number', 'string', 'array', 'object'.
    bool is checked before number since bool is a subclass of int.
    """
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'boolean'
    if isinstance(value, (int, float)):
        return 'number'
    if isinstance(value, str):
        return 'string'
    if isinstance(value, list):
        return 'array'
    if isinstance(value, dict):
        return 'object'
    return 'unknown'


def is_number(value: Any) -> bool:
    """True for int and float values, never for bool."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def json_equal(a: Any, b: Any) -> bool:
    """
    Deep structural equality for JSON values.

    Object comparison ignores key order, array comparison is positional.
    Kinds must match, so True != 1 and None != MISSING.
    """
    if a is MISSING or b is MISSING:
        return a is b
    kind = json_kind(a)
    if kind != json_kind(b):
        return False
    if kind == 'array':
        if len(a) != len(b):
            return False
        return all(json_equal(x, y) for x, y in zip(a, b))
    if kind == 'object':
        if len(a) != len(b):
            return False
        for key, value in a.items():
            if key not in b:
                return False
            if not json_equal(value, b[key]):
                return False
        return True
    return a == b


def stringify_value(value: Any) -> str:
    """Render a JSON value as text: true/false for booleans, compact JSON for containers.

    Whole floats lose their fractional part, so 2.0 renders as 2.
    """
    kind = json_kind(value)
    if kind == 'boolean':
        return 'true' if value else 'false'
    if kind == 'null':
        return 'null'
    if kind in ('array', 'object'):
        return json.dumps(value, separators=(',', ':'), ensure_ascii=False)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def split_path(path: str) -> List[str]:
    """Split a dot-notation field path into its segments."""
    return path.split('.')


def resolve_path(value: Any, path: str) -> Any:
    """
    Resolve a dot-notation path against a JSON value.

    Returns MISSING as soon as an intermediate value is not an object or
    lacks the key. A present null resolves to None.
    """
    current = value
    for key in split_path(path):
        if not isinstance(current, dict) or key not in current:
            return MISSING
        current = current[key]
    return current


def load_json_file(file_path: str) -> JsonNode:
    """
    Load a JSON document from a file.

    Raises:
        ValueError: If the file is empty or does not contain valid JSON.
    """
    with open(file_path, 'r', encoding='utf-8') as f:
        content = f.read().strip()
    if not content:
        raise ValueError(f"No JSON data found in {file_path}")
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {file_path}: {e}") from e


def load_json_argument(value: str) -> JsonNode:
    """
    Interpret a command argument as inline JSON text or as a path to a JSON file.
    """
    stripped = value.strip()
    if stripped.startswith('{') or stripped.startswith('['):
        try:
            return json.loads(stripped)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid inline JSON: {e}") from e
    return load_json_file(value)


def write_output(content: str, output_file_path: str):
    """Write text output to a file, creating the parent directory if needed."""
    output_dir = os.path.dirname(output_file_path)
    if output_dir and not os.path.exists(output_dir):
        os.makedirs(output_dir)
    with open(output_file_path, 'w', encoding='utf-8') as f:
        f.write(content)


def process_template(file_path: str, **kvargs) -> str:
    """
    Process a file as a Jinja2 template with the given object as input.

    Args:
        file_path (str): The path to the template, relative to the package.
        **kvargs: The keyword arguments to pass to the template.

    Returns:
        str: The processed template as a string.
    """
    file_dir = os.path.dirname(__file__)
    template_loader = jinja2.FileSystemLoader(searchpath=file_dir)
    template_env = jinja2.Environment(loader=template_loader, keep_trailing_newline=True)

    template = template_env.get_template(file_path)
    return template.render(**kvargs)

