# querychart/services/data_analysis.py
"""Data shape analysis for query results."""

import logging
from typing import Any, Mapping, Sequence

from querychart.models.analysis import ColumnStats, ColumnType, DataShape
from querychart.utils.constants import MAX_SAMPLE_VALUES
from querychart.utils.values import distinct_key, is_number, parse_date, to_number

logger = logging.getLogger("data-analysis")


def collect_columns(rows: Sequence[Mapping[str, Any]]) -> list[str]:
    """Collect column names across rows.

    Keys of the first row come first; keys only present in later rows are
    appended in first-seen order.
    """
    columns: dict[str, None] = {}
    for row in rows:
        for key in row:
            columns.setdefault(key, None)

    if any(len(row) != len(columns) for row in rows):
        logger.warning(
            "Rows are heterogeneous: %d columns seen, some rows have fewer",
            len(columns)
        )
    return list(columns)


def infer_column_type(values: Sequence[Any]) -> ColumnType:
    """Infer a column type from its first non-null value."""
    for value in values:
        if value is None:
            continue
        if isinstance(value, bool):
            return "boolean"
        if is_number(value):
            return "number"
        if parse_date(value) is not None:
            return "date"
        return "string"
    return "string"


def _distinct(values: Sequence[Any]) -> list[Any]:
    seen: dict[Any, Any] = {}
    for value in values:
        seen.setdefault(distinct_key(value), value)
    return list(seen.values())


def analyze_column(values: Sequence[Any]) -> ColumnStats:
    """Compute statistics for one column."""
    non_null = [v for v in values if v is not None]
    distinct = _distinct(values)
    column_type = infer_column_type(non_null)

    stats = ColumnStats(
        type=column_type,
        unique=len(distinct),
        nulls=len(values) - len(non_null),
        sample=distinct[:MAX_SAMPLE_VALUES],
    )

    if column_type == "number":
        numbers = [n for n in (to_number(v) for v in non_null) if n is not None]
        if numbers:
            stats.min = min(numbers)
            stats.max = max(numbers)
            stats.avg = sum(numbers) / len(numbers)
    elif column_type == "date":
        dates = [d for d in (parse_date(v) for v in non_null) if d is not None]
        if dates:
            stats.min = min(dates)
            stats.max = max(dates)

    return stats


def analyze_data(rows: Sequence[Mapping[str, Any]]) -> DataShape:
    """Analyze the shape of a result set.

    Args:
        rows: The result rows.

    Returns:
        Row count plus per-column statistics. A key missing from a row
        counts as null for that row.
    """
    if not rows:
        return DataShape(row_count=0, columns={})

    columns = {
        name: analyze_column([row.get(name) for row in rows])
        for name in collect_columns(rows)
    }
    return DataShape(row_count=len(rows), columns=columns)
