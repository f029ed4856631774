# querychart/models/chart.py
"""Chart plan and chart configuration models.

A ``ChartPlan`` is what the generation provider proposes: chart type,
styling and a mapping from result fields to labels and datasets. A
``ChartConfig`` is the renderable result after the plan has been filled with
the actual row values.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


ChartType = Literal["bar", "line", "area", "scatter", "mixed"]
DatasetType = Literal["bar", "line", "area", "scatter"]


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AxisOptions(CamelModel):
    """Axis configuration."""

    key: Optional[str] = None
    label: Optional[str] = None
    format_fn: Optional[str] = None
    grid: Optional[bool] = None
    tick_rotation: Optional[int] = None
    position: Optional[Literal["left", "right", "top", "bottom"]] = None


class ThemeOptions(CamelModel):
    colors: list[str] = Field(default_factory=list)


class AnimationOptions(CamelModel):
    duration: int = 1000
    easing: str = "easeInOut"


class TooltipOptions(CamelModel):
    enabled: bool = True
    shared: bool = False


class LegendOptions(CamelModel):
    position: Literal["top", "bottom", "left", "right"] = "top"
    align: Literal["start", "center", "end"] = "center"


class ChartOptions(CamelModel):
    """Chart-wide styling and axis options."""

    title: str = ""
    subtitle: Optional[str] = None
    stacked: bool = False
    theme: ThemeOptions = Field(default_factory=ThemeOptions)
    animation: AnimationOptions = Field(default_factory=AnimationOptions)
    x_axis: Optional[AxisOptions] = None
    y_axis: list[AxisOptions] = Field(default_factory=list)
    tooltip: TooltipOptions = Field(default_factory=TooltipOptions)
    legend: LegendOptions = Field(default_factory=LegendOptions)


class DatasetMapping(CamelModel):
    """Maps one result field to a styled dataset."""

    name: str
    legend: Optional[str] = None
    value_field: str
    type: Optional[DatasetType] = None
    color: Optional[str] = None
    curved: Optional[bool] = None
    fill: Optional[bool] = None
    point_style: Optional[str] = None
    point_size: Optional[int] = None
    border_radius: Optional[int] = None
    stack: Optional[str] = None
    y_axis_id: Optional[str] = None


class DataMapping(CamelModel):
    """Which field provides labels and which fields become datasets."""

    label_field: str
    datasets: list[DatasetMapping] = Field(min_length=1)


class ChartPlan(CamelModel):
    """Structural chart plan returned by the generation provider."""

    type: ChartType
    options: ChartOptions = Field(default_factory=ChartOptions)
    data_mapping: DataMapping


class ChartDataset(CamelModel):
    """A materialized dataset."""

    label: str
    legend: Optional[str] = None
    data: list[Optional[float]]
    type: Optional[DatasetType] = None
    color: Optional[str] = None
    curved: Optional[bool] = None
    fill: Optional[bool] = None
    point_style: Optional[str] = None
    point_size: Optional[int] = None
    border_radius: Optional[int] = None
    stack: Optional[str] = None
    y_axis_id: Optional[str] = None


class ChartData(CamelModel):
    labels: list[str]
    datasets: list[ChartDataset] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_lengths(self) -> "ChartData":
        for dataset in self.datasets:
            if len(dataset.data) != len(self.labels):
                raise ValueError(
                    f"dataset '{dataset.label}' has {len(dataset.data)} values "
                    f"for {len(self.labels)} labels"
                )
        return self


class ChartConfig(CamelModel):
    """Final renderable chart configuration."""

    type: ChartType
    options: ChartOptions
    data: ChartData
