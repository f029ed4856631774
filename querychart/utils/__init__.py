"""Utility modules for querychart."""

from querychart.utils.constants import ErrorCode, ERROR_MESSAGES
from querychart.utils.exceptions import (
    QueryChartError,
    SQLValidationError,
    DatabaseQueryError,
    QueryGenerationError,
    ChartGenerationError,
    SchemaLoadError,
    AIServiceError,
    ConfigurationError,
)

__all__ = [
    "ErrorCode",
    "ERROR_MESSAGES",
    "QueryChartError",
    "SQLValidationError",
    "DatabaseQueryError",
    "QueryGenerationError",
    "ChartGenerationError",
    "SchemaLoadError",
    "AIServiceError",
    "ConfigurationError",
]
