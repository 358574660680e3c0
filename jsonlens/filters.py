"""Declarative filter rules evaluated against dynamically shaped records.

Rules address record fields by dot-notation paths (see
jsonlens.field_paths.collect_filterable_fields). A list of rules is
AND-composed: a record is kept only if it satisfies every rule.
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from jsonlens.common import MISSING, is_number, resolve_path, stringify_value
from jsonlens.field_paths import FilterableField

logger = logging.getLogger(__name__)

STRING_MODES = ('contains', 'startsWith')
EXISTS_MODES = ('exists', 'missing')


class InvalidFilterRuleError(ValueError):
    """
    Raised when a filter rule description cannot be turned into a rule.

    Attributes:
        message: Human-readable error description
        rule: The offending rule description
    """

    def __init__(self, message: str, rule: Any = None):
        self.message = message
        self.rule = rule
        super().__init__(message)


@dataclass(frozen=True)
class StringFilter:
    """Case-insensitive substring or prefix match."""
    path: str
    mode: str = 'contains'
    value: str = ''
    id: Optional[str] = None
    type = 'string'


@dataclass(frozen=True)
class NumberFilter:
    """Inclusive numeric range. A bound of None leaves that side open."""
    path: str
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    id: Optional[str] = None
    type = 'number'


@dataclass(frozen=True)
class BooleanFilter:
    """Exact boolean match."""
    path: str
    value: bool = True
    id: Optional[str] = None
    type = 'boolean'


@dataclass(frozen=True)
class ExistsFilter:
    """Presence test. 0, '' and false all count as present."""
    path: str
    mode: str = 'exists'
    id: Optional[str] = None
    type = 'exists'


FilterRule = Union[StringFilter, NumberFilter, BooleanFilter, ExistsFilter]


def matches_filter(value: Any, rule: FilterRule) -> bool:
    """Tests a resolved field value (possibly MISSING) against one rule."""
    if isinstance(rule, StringFilter):
        if value is MISSING or value is None:
            return False
        text = stringify_value(value).lower()
        term = rule.value.lower()
        if rule.mode == 'contains':
            return term in text
        return text.startswith(term)
    if isinstance(rule, NumberFilter):
        if not is_number(value):
            return False
        if rule.min_value is not None and value < rule.min_value:
            return False
        if rule.max_value is not None and value > rule.max_value:
            return False
        return True
    if isinstance(rule, BooleanFilter):
        return isinstance(value, bool) and value == rule.value
    if isinstance(rule, ExistsFilter):
        exists = value is not MISSING
        return exists if rule.mode == 'exists' else not exists
    return True


def apply_filters(records: List[Dict[str, Any]], rules: List[FilterRule]) -> List[Dict[str, Any]]:
    """Applies AND-composed filter rules to records.

    The input list is not modified; the returned list keeps the original
    relative order.

    Args:
        records: JSON objects, e.g. the rows of an array response
        rules: Filter rules

    Returns:
        A new list with the records that satisfy every rule
    """
    if not rules:
        return list(records)
    kept = [record for record in records
            if all(matches_filter(resolve_path(record, rule.path), rule) for rule in rules)]
    logger.debug("Filtered %s records to %s with %s rules", len(records), len(kept), len(rules))
    return kept


def default_filter_rule(field: FilterableField) -> FilterRule:
    """Creates the starting rule for a field, chosen by the field's kind."""
    rule_id = uuid.uuid4().hex
    if field.kind == 'string':
        return StringFilter(field.path, 'contains', '', id=rule_id)
    if field.kind == 'number':
        return NumberFilter(field.path, id=rule_id)
    if field.kind == 'boolean':
        return BooleanFilter(field.path, True, id=rule_id)
    return ExistsFilter(field.path, 'exists', id=rule_id)


def _optional_number(rule: Dict[str, Any], key: str) -> Optional[float]:
    bound = rule.get(key)
    if bound is None:
        return None
    if not is_number(bound):
        raise InvalidFilterRuleError(f"Filter bound '{key}' must be a number, got {bound!r}", rule)
    return bound


def filter_rule_from_dict(rule: Dict[str, Any]) -> FilterRule:
    """Builds a filter rule from its JSON description.

    Accepts {"type": "string", "path": ..., "mode": "contains"|"startsWith", "value": ...},
    {"type": "number", "path": ..., "min": ..., "max": ...},
    {"type": "boolean", "path": ..., "value": true|false} and
    {"type": "exists", "path": ..., "mode": "exists"|"missing"}. "id" is optional.

    Raises:
        InvalidFilterRuleError: If the description is malformed
    """
    if not isinstance(rule, dict):
        raise InvalidFilterRuleError(f"Filter rule must be an object, got {rule!r}", rule)
    path = rule.get('path')
    if not isinstance(path, str) or not path:
        raise InvalidFilterRuleError("Filter rule requires a non-empty 'path'", rule)
    rule_id = rule.get('id')
    rule_type = rule.get('type')

    if rule_type == 'string':
        mode = rule.get('mode', 'contains')
        if mode not in STRING_MODES:
            raise InvalidFilterRuleError(f"Unsupported string filter mode: {mode}", rule)
        value = rule.get('value', '')
        if not isinstance(value, str):
            raise InvalidFilterRuleError("String filter 'value' must be a string", rule)
        return StringFilter(path, mode, value, id=rule_id)
    if rule_type == 'number':
        return NumberFilter(path, _optional_number(rule, 'min'), _optional_number(rule, 'max'), id=rule_id)
    if rule_type == 'boolean':
        value = rule.get('value', True)
        if not isinstance(value, bool):
            raise InvalidFilterRuleError("Boolean filter 'value' must be true or false", rule)
        return BooleanFilter(path, value, id=rule_id)
    if rule_type == 'exists':
        mode = rule.get('mode', 'exists')
        if mode not in EXISTS_MODES:
            raise InvalidFilterRuleError(f"Unsupported exists filter mode: {mode}", rule)
        return ExistsFilter(path, mode, id=rule_id)
    raise InvalidFilterRuleError(f"Unsupported filter type: {rule_type}", rule)


def filter_rule_to_dict(rule: FilterRule) -> Dict[str, Any]:
    """Serializes a filter rule to its JSON description."""
    result: Dict[str, Any] = {"type": rule.type, "path": rule.path}
    if rule.id is not None:
        result["id"] = rule.id
    if isinstance(rule, StringFilter):
        result["mode"] = rule.mode
        result["value"] = rule.value
    elif isinstance(rule, NumberFilter):
        if rule.min_value is not None:
            result["min"] = rule.min_value
        if rule.max_value is not None:
            result["max"] = rule.max_value
    elif isinstance(rule, BooleanFilter):
        result["value"] = rule.value
    else:
        result["mode"] = rule.mode
    return result
