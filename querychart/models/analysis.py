# querychart/models/analysis.py
"""Result-set shape models."""

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from querychart.utils.constants import MAX_SAMPLE_VALUES


ColumnType = Literal["number", "string", "date", "boolean"]


class ColumnStats(BaseModel):
    """Statistics for a single result column."""

    type: ColumnType
    unique: int
    nulls: int
    min: Optional[Any] = None
    max: Optional[Any] = None
    avg: Optional[float] = None
    sample: list[Any] = Field(default_factory=list, max_length=MAX_SAMPLE_VALUES)


class DataShape(BaseModel):
    """Shape of a query result."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    row_count: int = 0
    columns: dict[str, ColumnStats] = Field(default_factory=dict)

    def numeric_columns(self) -> list[str]:
        return [name for name, stats in self.columns.items() if stats.type == "number"]
