"""Structural diff of two JSON values.

Objects are compared key by key over the union of both key sets. Arrays are
compared strictly by index: an insertion in the middle of an array shows up
as a run of changed positions followed by an added tail, not as a single
added element. A change of JSON kind (e.g. number to object) is reported as
'changed', the same as a value change of the same kind.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from jsonlens.common import MISSING, json_equal, json_kind, stringify_value

ADDED = 'added'
REMOVED = 'removed'
CHANGED = 'changed'
UNCHANGED = 'unchanged'

DIFF_STATUSES = (ADDED, REMOVED, CHANGED, UNCHANGED)


@dataclass(frozen=True)
class DiffNode:
    """How one JSON position differs between an old and a new value.

    old_value/new_value are MISSING when the position does not exist on
    that side. children is set for object comparisons and array_items for
    array comparisons.
    """
    status: str
    old_value: Any = MISSING
    new_value: Any = MISSING
    children: Optional[Dict[str, 'DiffNode']] = None
    array_items: Optional[List['DiffNode']] = None

    @property
    def is_leaf(self) -> bool:
        return self.children is None and self.array_items is None


def _composite_status(nodes) -> str:
    return CHANGED if any(node.status != UNCHANGED for node in nodes) else UNCHANGED


def diff_json(old_value: Any, new_value: Any) -> DiffNode:
    """Compares two JSON values and returns a DiffNode tree.

    Args:
        old_value: The previous JSON value
        new_value: The current JSON value

    Returns:
        The root DiffNode
    """
    old_kind = json_kind(old_value)
    new_kind = json_kind(new_value)

    if old_kind == 'array' and new_kind == 'array':
        items: List[DiffNode] = []
        for index in range(max(len(old_value), len(new_value))):
            if index >= len(old_value):
                items.append(DiffNode(ADDED, new_value=new_value[index]))
            elif index >= len(new_value):
                items.append(DiffNode(REMOVED, old_value=old_value[index]))
            else:
                items.append(diff_json(old_value[index], new_value[index]))
        return DiffNode(_composite_status(items), old_value, new_value, array_items=items)

    if old_kind == 'object' and new_kind == 'object':
        children: Dict[str, DiffNode] = {}
        for key, old_field in old_value.items():
            if key in new_value:
                children[key] = diff_json(old_field, new_value[key])
            else:
                children[key] = DiffNode(REMOVED, old_value=old_field)
        for key, new_field in new_value.items():
            if key not in old_value:
                children[key] = DiffNode(ADDED, new_value=new_field)
        return DiffNode(_composite_status(children.values()), old_value, new_value, children=children)

    status = UNCHANGED if json_equal(old_value, new_value) else CHANGED
    return DiffNode(status, old_value, new_value)


def diff_to_dict(node: DiffNode) -> Dict[str, Any]:
    """Serializes a DiffNode tree to plain dicts, omitting absent values."""
    result: Dict[str, Any] = {"status": node.status}
    if node.old_value is not MISSING:
        result["oldValue"] = node.old_value
    if node.new_value is not MISSING:
        result["newValue"] = node.new_value
    if node.children is not None:
        result["children"] = {key: diff_to_dict(child) for key, child in node.children.items()}
    if node.array_items is not None:
        result["arrayItems"] = [diff_to_dict(item) for item in node.array_items]
    return result


def summarize_diff(node: DiffNode) -> Dict[str, int]:
    """Counts leaf statuses in a diff tree.

    Composite nodes are not counted themselves. An added or removed object or
    array counts as one leaf.
    """
    counts = {status: 0 for status in DIFF_STATUSES}
    stack = [node]
    while stack:
        current = stack.pop()
        if current.children is not None:
            stack.extend(current.children.values())
        elif current.array_items is not None:
            stack.extend(current.array_items)
        else:
            counts[current.status] += 1
    return counts


def format_diff_value(value: Any) -> str:
    """Formats a value for display next to a diff entry."""
    if value is MISSING:
        return "undefined"
    kind = json_kind(value)
    if kind == 'null':
        return "null"
    if kind == 'string':
        return f'"{value}"'
    if kind == 'boolean':
        return "true" if value else "false"
    if kind == 'array':
        return f"[{len(value)} item{'' if len(value) == 1 else 's'}]"
    if kind == 'object':
        return f"{{{len(value)} key{'' if len(value) == 1 else 's'}}}"
    return stringify_value(value)
