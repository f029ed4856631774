"""Data models for querychart."""

from querychart.models.query import (
    GeneratedQuery,
    ErrorDetails,
    ActionResult,
    QueryRunResult,
)
from querychart.models.schema import (
    RelationshipType,
    ColumnDefinition,
    ForeignKeyReference,
    ForeignKey,
    TableDefinition,
    Relationship,
    SchemaDescription,
)
from querychart.models.analysis import (
    ColumnStats,
    DataShape,
)
from querychart.models.chart import (
    AxisOptions,
    ChartOptions,
    DatasetMapping,
    DataMapping,
    ChartPlan,
    ChartDataset,
    ChartData,
    ChartConfig,
)

__all__ = [
    "GeneratedQuery",
    "ErrorDetails",
    "ActionResult",
    "QueryRunResult",
    "RelationshipType",
    "ColumnDefinition",
    "ForeignKeyReference",
    "ForeignKey",
    "TableDefinition",
    "Relationship",
    "SchemaDescription",
    "ColumnStats",
    "DataShape",
    "AxisOptions",
    "ChartOptions",
    "DatasetMapping",
    "DataMapping",
    "ChartPlan",
    "ChartDataset",
    "ChartData",
    "ChartConfig",
]
