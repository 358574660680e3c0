"""Builds chart points from the tabular data of a JSON file."""

import json
import logging
from typing import Optional

from jsonlens.chart_data import ChartConfig, build_chart_data, chart_config_from_dict, chart_data_to_list, default_chart_config
from jsonlens.common import write_output
from jsonlens.jsonfilter import load_records
from jsonlens.records import derive_item_schema
from jsonlens.schema_inference import infer_schema

logger = logging.getLogger(__name__)


def convert_json_to_chart(
    input_file: str,
    chart_file: str,
    x_field: Optional[str] = None,
    y_field: Optional[str] = None,
    chart_type: str = 'bar'
) -> None:
    """Writes the chart points of a JSON file's records.

    Axes that are not given are chosen from the inferred item schema.

    Args:
        input_file: JSON file holding an array of objects, directly or in a field
        chart_file: Output path for the chart document
        x_field: Path of the x axis value
        y_field: Path of the numeric y axis value
        chart_type: 'bar' or 'line'
    """
    records = load_records(input_file)
    config = chart_config_from_dict({"xField": x_field, "yField": y_field, "type": chart_type})
    if not config.x_field or not config.y_field:
        defaults = default_chart_config(derive_item_schema(infer_schema(records)))
        config = ChartConfig(config.x_field or defaults.x_field,
                             config.y_field or defaults.y_field,
                             config.type)
        logger.info("Using chart axes x=%s y=%s", config.x_field, config.y_field)

    points = build_chart_data(records, config)
    document = {
        "type": config.type,
        "xField": config.x_field,
        "yField": config.y_field,
        "data": chart_data_to_list(points)
    }
    write_output(json.dumps(document, indent=2), chart_file)
