"""Compares two JSON files and writes their structural diff."""

import json
import logging

from jsonlens.common import load_json_file, write_output
from jsonlens.difftomd import DiffToMarkdownConverter
from jsonlens.json_diff import diff_json, diff_to_dict, summarize_diff

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ('json', 'markdown', 'summary')


def convert_json_to_diff(
    old_file: str,
    new_file: str,
    diff_file: str,
    output_format: str = 'json'
) -> None:
    """Diffs two JSON documents.

    Args:
        old_file: The previous JSON document
        new_file: The current JSON document
        diff_file: Output path for the diff
        output_format: 'json' (full tree), 'markdown' (change list) or 'summary' (leaf counts)
    """
    if output_format not in OUTPUT_FORMATS:
        raise ValueError(f"Unsupported output format: {output_format}")
    if not new_file:
        raise ValueError("A second JSON document is required to compute a diff")

    diff = diff_json(load_json_file(old_file), load_json_file(new_file))
    summary = summarize_diff(diff)
    logger.info("Diff of %s and %s: %s", old_file, new_file, summary)

    if output_format == 'markdown':
        DiffToMarkdownConverter(diff).convert(diff_file)
    elif output_format == 'summary':
        write_output(json.dumps({"status": diff.status, **summary}, indent=2), diff_file)
    else:
        write_output(json.dumps(diff_to_dict(diff), indent=2), diff_file)
