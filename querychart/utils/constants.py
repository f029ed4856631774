# querychart/utils/constants.py
"""Constants for querychart."""

from enum import Enum


class ErrorCode(str, Enum):
    """Error code enumeration."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    DB_ERROR = "DB_ERROR"
    GENERATION_ERROR = "GENERATION_ERROR"
    CHART_GENERATION_ERROR = "CHART_GENERATION_ERROR"
    SCHEMA_LOAD_ERROR = "SCHEMA_LOAD_ERROR"
    AI_SERVICE_ERROR = "AI_SERVICE_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.VALIDATION_ERROR: "Invalid query",
    ErrorCode.DB_ERROR: "Database query failed",
    ErrorCode.GENERATION_ERROR: "Failed to generate query",
    ErrorCode.CHART_GENERATION_ERROR: "Failed to generate chart configuration",
    ErrorCode.SCHEMA_LOAD_ERROR: "Failed to load the database schema",
    ErrorCode.AI_SERVICE_ERROR: "Generation provider call failed",
    ErrorCode.CONFIGURATION_ERROR: "Invalid configuration",
    ErrorCode.UNKNOWN_ERROR: "Unexpected error",
}

# Returned instead of a generated query when no provider is configured
CANNED_QUERY = "SELECT * FROM tracks LIMIT 5"

# Keywords whose presence anywhere in a candidate query rejects it
FORBIDDEN_KEYWORDS = (
    "drop",
    "delete",
    "insert",
    "update",
    "alter",
    "truncate",
    "create",
    "grant",
    "revoke",
)

DEFAULT_CHART_COLORS = (
    "blue-500",
    "emerald-500",
    "amber-500",
    "rose-500",
    "violet-500",
    "cyan-500",
)

MAX_SAMPLE_VALUES = 5
