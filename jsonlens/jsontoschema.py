"""Infers schemas and field lists from JSON files.

This module provides:
- schema: Infer a schema from one or more JSON snapshots
- fields: List the filterable (or numeric) field paths of the tabular data
"""

import json
import logging
from typing import Any, List, Optional

from jsonlens.common import load_json_file, write_output
from jsonlens.field_paths import collect_filterable_fields, get_numeric_field_paths
from jsonlens.records import derive_item_schema, extract_table_candidate
from jsonlens.schema_inference import infer_schema, infer_schema_from_samples, schema_to_dict
from jsonlens.schematomd import SchemaToMarkdownConverter

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ('json', 'markdown')


def _load_samples(input_file: str, merge_files: Optional[List[str]]) -> List[Any]:
    values = [load_json_file(input_file)]
    for file_path in merge_files or []:
        values.append(load_json_file(file_path))
    return values


def convert_json_to_schema(
    input_file: str,
    schema_file: str,
    merge_files: Optional[List[str]] = None,
    item_schema: bool = False,
    output_format: str = 'json'
) -> None:
    """Infers a schema from JSON files.

    Args:
        input_file: JSON file to analyze
        schema_file: Output path for the schema
        merge_files: Further snapshots of the same endpoint, merged into one schema
        item_schema: Emit the schema of one row of the tabular data instead of the root
        output_format: 'json' or 'markdown'
    """
    if output_format not in OUTPUT_FORMATS:
        raise ValueError(f"Unsupported output format: {output_format}")

    values = _load_samples(input_file, merge_files)
    schema = infer_schema_from_samples(values)
    logger.info("Inferred schema from %s snapshot(s)", len(values))
    if item_schema:
        schema = derive_item_schema(schema)

    if output_format == 'markdown':
        SchemaToMarkdownConverter(schema, title='Item Schema' if item_schema else 'Schema').convert(schema_file)
    else:
        write_output(json.dumps(schema_to_dict(schema), indent=2), schema_file)


def list_json_fields(input_file: str, fields_file: str, numeric_only: bool = False) -> None:
    """Lists the field paths of the tabular data in a JSON file.

    Args:
        input_file: JSON file to analyze
        fields_file: Output path for the field list
        numeric_only: List only paths usable as a chart y axis
    """
    body = load_json_file(input_file)
    records = extract_table_candidate(body)
    schema = derive_item_schema(infer_schema(records if records is not None else body))
    if numeric_only:
        result: Any = get_numeric_field_paths(schema)
    else:
        result = [{"path": field.path, "kind": field.kind, "optional": field.optional}
                  for field in collect_filterable_fields(schema)]
    logger.info("Found %s field(s) in %s", len(result), input_file)
    write_output(json.dumps(result, indent=2), fields_file)
