"""Filters the tabular data of a JSON file with declarative rules."""

import json
import logging
from typing import Any, List

from jsonlens.common import load_json_argument, load_json_file, write_output
from jsonlens.filters import InvalidFilterRuleError, apply_filters, filter_rule_from_dict
from jsonlens.records import extract_table_candidate

logger = logging.getLogger(__name__)


def load_records(input_file: str) -> List[Any]:
    """Loads a JSON file and returns the rows of its tabular data.

    Raises:
        ValueError: If the document holds no array of objects
    """
    records = extract_table_candidate(load_json_file(input_file))
    if records is None:
        raise ValueError(f"No array of objects found in {input_file}")
    return records


def filter_json_records(input_file: str, output_file: str, rules: str) -> None:
    """Applies filter rules to the records of a JSON file.

    Args:
        input_file: JSON file holding an array of objects, directly or in a field
        output_file: Output path for the kept records
        rules: A JSON array of rule objects, inline or as a file path
    """
    rule_list = load_json_argument(rules)
    if isinstance(rule_list, dict):
        rule_list = [rule_list]
    if not isinstance(rule_list, list):
        raise InvalidFilterRuleError("Filter rules must be a JSON array of rule objects", rule_list)
    parsed_rules = [filter_rule_from_dict(rule) for rule in rule_list]

    records = load_records(input_file)
    kept = apply_filters(records, parsed_rules)
    logger.info("Kept %s of %s records", len(kept), len(records))
    write_output(json.dumps(kept, indent=2), output_file)
