"""Projects tabular records onto a two-axis numeric chart."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from jsonlens.common import MISSING, is_number, resolve_path, stringify_value
from jsonlens.field_paths import collect_all_field_paths, get_numeric_field_paths
from jsonlens.schema_inference import SchemaNode

logger = logging.getLogger(__name__)

CHART_TYPES = ('bar', 'line')


@dataclass(frozen=True)
class ChartConfig:
    """Which record paths feed the x and y axes."""
    x_field: Optional[str] = None
    y_field: Optional[str] = None
    type: str = 'bar'


@dataclass(frozen=True)
class ChartDatum:
    """One chart point. y is always numeric."""
    x: Union[str, int, float]
    y: Union[int, float]


def build_chart_data(records: List[Dict[str, Any]], config: ChartConfig) -> List[ChartDatum]:
    """Builds chart points from records.

    Records whose y value is not a number or whose x value is missing or null
    are skipped. x is kept as-is when numeric and stringified otherwise. Output
    order follows input order; nothing is sorted or aggregated.

    Args:
        records: JSON objects
        config: Axis configuration

    Returns:
        At most one point per record
    """
    if not config.x_field or not config.y_field:
        return []

    points: List[ChartDatum] = []
    skipped_non_numeric = 0
    skipped_missing_x = 0
    for record in records:
        y_value = resolve_path(record, config.y_field)
        if not is_number(y_value):
            skipped_non_numeric += 1
            continue
        x_value = resolve_path(record, config.x_field)
        if x_value is MISSING or x_value is None:
            skipped_missing_x += 1
            continue
        x = x_value if is_number(x_value) else stringify_value(x_value)
        points.append(ChartDatum(x, y_value))

    logger.debug("Chart data built from %s rows: %s points, %s skipped for non-numeric y, "
                 "%s skipped for missing x (x=%s, y=%s)",
                 len(records), len(points), skipped_non_numeric, skipped_missing_x,
                 config.x_field, config.y_field)
    return points


def default_chart_config(schema: Optional[SchemaNode]) -> ChartConfig:
    """Picks initial axes: the first numeric path for y and another leaf path for x."""
    numeric_paths = get_numeric_field_paths(schema)
    all_paths = collect_all_field_paths(schema)
    y_field = numeric_paths[0] if numeric_paths else None
    x_candidates = [path for path in all_paths if path != y_field]
    x_field = x_candidates[0] if x_candidates else None
    return ChartConfig(x_field, y_field, 'bar')


def chart_config_from_dict(config: Dict[str, Any]) -> ChartConfig:
    """Builds a ChartConfig from {"xField": ..., "yField": ..., "type": ...}.

    Raises:
        ValueError: If the chart type is not 'bar' or 'line'
    """
    chart_type = config.get('type') or 'bar'
    if chart_type not in CHART_TYPES:
        raise ValueError(f"Unsupported chart type: {chart_type}")
    return ChartConfig(config.get('xField'), config.get('yField'), chart_type)


def chart_data_to_list(points: List[ChartDatum]) -> List[Dict[str, Any]]:
    """Serializes chart points to plain dicts."""
    return [{"x": point.x, "y": point.y} for point in points]
