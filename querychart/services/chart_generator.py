# querychart/services/chart_generator.py
"""Chart configuration synthesis.

The generation provider only proposes a structural plan (chart type,
styling and which fields feed labels and datasets). Values are always filled
in here from the actual rows, so labels and datasets stay aligned no matter
what the model returns.
"""
import json
import logging
from typing import Any, Mapping, Optional, Sequence

from querychart.models.analysis import DataShape
from querychart.models.chart import (
    AxisOptions,
    ChartConfig,
    ChartData,
    ChartDataset,
    ChartOptions,
    ChartPlan,
    DataMapping,
    DatasetMapping,
)
from querychart.services.ai_client import GenerationProvider
from querychart.services.data_analysis import analyze_data
from querychart.services.formatters import FORMATTERS, format_value
from querychart.utils.constants import DEFAULT_CHART_COLORS
from querychart.utils.exceptions import ChartGenerationError, QueryChartError
from querychart.utils.values import to_number

logger = logging.getLogger("chart-generator")

CHART_GENERATION_PROMPT = """You are a data visualization expert. Given the shape of a query \
result and a few sample rows, design a chart that best answers the user's question.

Choose the chart type:
- 'bar' for comparing categories
- 'line' for trends over time
- 'area' for cumulative or part-to-whole relationships
- 'scatter' for correlations
- 'mixed' for combining bar and line datasets

Styling:
- Use a cohesive palette of tailwind color names (blue-500, emerald-400, ...)
- Add subtle animations, curved lines and rounded bars where they help
- Give the chart a clear title, descriptive axis labels and a sensible legend
- Use stacked datasets for part-to-whole data and a second y axis for
  series on a different scale

Value formatters (formatFn) for axes:
- 'currency' for monetary values (USD)
- 'number' for regular numbers (up to 2 decimals)
- 'compactNumber' for large numbers (1K, 1M, ...)
- 'date' for full dates (January 1, 2024)
- 'shortDate' for brief dates (Jan 1)
- 'percentage' for percentages
- 'string' for plain text

Data mapping:
- dataMapping.labelField is the field whose values label the x axis
- each dataset names the numeric field it plots in valueField
- only use field names that appear in the data shape
- never include data values in the response; they are filled in afterwards
"""

CHART_USER_PROMPT = """Data Shape:
{data_shape}

Sample Data (first {sample_count} rows):
{sample_data}

User's Question: {question}

Generate a chart plan that best visualizes the data to answer the question."""


def validate_plan(plan: ChartPlan, shape: DataShape) -> None:
    """Check that a plan only references fields present in the data.

    Raises:
        ValueError: If a label or value field is unknown, or a value field
            is not numeric.
    """
    mapping = plan.data_mapping
    fields = [mapping.label_field] + [d.value_field for d in mapping.datasets]
    missing = [f for f in dict.fromkeys(fields) if f not in shape.columns]
    if missing:
        raise ValueError(f"Chart plan references unknown fields: {', '.join(missing)}")

    non_numeric = [
        d.value_field for d in mapping.datasets
        if shape.columns[d.value_field].type != "number"
        and shape.columns[d.value_field].nulls < shape.row_count
    ]
    if non_numeric:
        raise ValueError(
            f"Chart plan plots non-numeric fields: {', '.join(dict.fromkeys(non_numeric))}"
        )

    axes = ([plan.options.x_axis] if plan.options.x_axis else []) + plan.options.y_axis
    for axis in axes:
        if axis.format_fn and axis.format_fn not in FORMATTERS:
            logger.info("Unknown formatter '%s', values will not be formatted", axis.format_fn)


def materialize_chart(
    plan: ChartPlan,
    rows: Sequence[Mapping[str, Any]],
    shape: DataShape
) -> ChartConfig:
    """Fill a chart plan with the row values.

    Args:
        plan: The structural plan.
        rows: The full result rows.
        shape: The rows' data shape.

    Returns:
        The chart configuration; every dataset has one value per label.
    """
    validate_plan(plan, shape)

    mapping = plan.data_mapping
    label_format = plan.options.x_axis.format_fn if plan.options.x_axis else None
    labels = [format_value(row.get(mapping.label_field), label_format) for row in rows]

    palette = plan.options.theme.colors or list(DEFAULT_CHART_COLORS)
    datasets = []
    for i, dataset in enumerate(mapping.datasets):
        datasets.append(ChartDataset(
            label=dataset.name,
            legend=dataset.legend,
            data=[to_number(row.get(dataset.value_field)) for row in rows],
            type=dataset.type,
            color=dataset.color or palette[i % len(palette)],
            curved=dataset.curved,
            fill=dataset.fill,
            point_style=dataset.point_style,
            point_size=dataset.point_size,
            border_radius=dataset.border_radius,
            stack=dataset.stack,
            y_axis_id=dataset.y_axis_id,
        ))

    return ChartConfig(
        type=plan.type,
        options=plan.options,
        data=ChartData(labels=labels, datasets=datasets),
    )


def build_canned_plan(shape: DataShape, title: str = "") -> ChartPlan:
    """Fixed minimal bar chart plan used without a generation provider.

    The first non-numeric column labels the bars and the first other
    numeric column is plotted.

    Raises:
        ValueError: If there is no numeric column to plot.
    """
    names = list(shape.columns)
    numeric = shape.numeric_columns()
    label_field = next((name for name in names if name not in numeric), names[0])
    value_field = next((name for name in numeric if name != label_field), None)
    if value_field is None:
        raise ValueError("No numeric column to plot")

    return ChartPlan(
        type="bar",
        options=ChartOptions(
            title=title,
            x_axis=AxisOptions(key=label_field, label=label_field),
            y_axis=[AxisOptions(key=value_field, label=value_field)],
        ),
        data_mapping=DataMapping(
            label_field=label_field,
            datasets=[DatasetMapping(name=value_field, value_field=value_field)],
        ),
    )


class ChartGenerator:
    """Synthesizes chart configurations for query results."""

    def __init__(
        self,
        provider: Optional[GenerationProvider],
        sample_rows: int = 3
    ):
        """Initialize the chart generator.

        Args:
            provider: The generation provider, or None for canned charts.
            sample_rows: Number of rows shown to the provider.
        """
        self.provider = provider
        self.sample_rows = sample_rows

    def build_user_prompt(
        self,
        shape: DataShape,
        rows: Sequence[Mapping[str, Any]],
        question: str
    ) -> str:
        sample = [dict(row) for row in rows[:self.sample_rows]]
        return CHART_USER_PROMPT.format(
            data_shape=json.dumps(shape.model_dump(mode="json", by_alias=True), indent=2),
            sample_count=len(sample),
            sample_data=json.dumps(sample, indent=2, default=str),
            question=question,
        )

    async def synthesize(
        self,
        rows: Sequence[Mapping[str, Any]],
        question: str
    ) -> ChartConfig:
        """Build a chart configuration for a non-empty result.

        Args:
            rows: The query result rows.
            question: The user's original question.

        Returns:
            The chart configuration.

        Raises:
            ChartGenerationError: If planning fails or the plan does not fit
                the data. Callers should skip charts for empty results.
        """
        if not rows:
            raise ChartGenerationError(question, "No rows to visualize")

        shape = analyze_data(rows)

        try:
            if self.provider is None:
                plan = build_canned_plan(shape, title=question)
            else:
                plan = await self.provider.generate_object(
                    CHART_GENERATION_PROMPT,
                    self.build_user_prompt(shape, rows, question),
                    ChartPlan
                )
            chart = materialize_chart(plan, rows, shape)
        except QueryChartError as e:
            raise ChartGenerationError(
                question, f"Failed to generate chart configuration: {e.message}"
            ) from e
        except ValueError as e:
            logger.warning("Chart plan rejected: %s", e)
            raise ChartGenerationError(
                question, f"Failed to generate chart configuration: {e}"
            ) from e
        except Exception as e:
            logger.error("Generation provider raised: %s", e)
            raise ChartGenerationError(
                question, f"Failed to generate chart configuration: {e}"
            ) from e

        logger.info(
            "Generated %s chart with %d datasets", chart.type, len(chart.data.datasets)
        )
        return chart
