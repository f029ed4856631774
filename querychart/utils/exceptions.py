# querychart/utils/exceptions.py
"""Exception classes for querychart."""

from querychart.utils.constants import ErrorCode, ERROR_MESSAGES


class QueryChartError(Exception):
    """Base exception class for querychart."""

    def __init__(
        self,
        code: ErrorCode,
        message: str | None = None,
        details: dict | None = None
    ):
        self.code = code
        self.message = message or ERROR_MESSAGES.get(code, "Unexpected error")
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Convert the exception to the error part of a result envelope.

        Returns:
            A dictionary with the message, code and details.
        """
        return {
            "message": self.message,
            "code": self.code.value,
            "details": self.details
        }


class SQLValidationError(QueryChartError):
    """Candidate query rejected by the safety validator."""

    def __init__(self, sql: str, reason: str):
        super().__init__(
            code=ErrorCode.VALIDATION_ERROR,
            message=f"Invalid query: {reason}",
            details={"sql": sql, "reason": reason}
        )


class DatabaseQueryError(QueryChartError):
    """Engine failure while executing an accepted query."""

    def __init__(self, query: str, message: str | None = None):
        super().__init__(
            code=ErrorCode.DB_ERROR,
            message=message,
            details={"query": query}
        )
        self.query = query


class QueryGenerationError(QueryChartError):
    """SQL generation failed."""

    def __init__(self, input_text: str, message: str | None = None):
        super().__init__(
            code=ErrorCode.GENERATION_ERROR,
            message=message,
            details={"input": input_text}
        )
        self.input_text = input_text


class ChartGenerationError(QueryChartError):
    """Chart planning or materialization failed."""

    def __init__(self, question: str, message: str | None = None):
        super().__init__(
            code=ErrorCode.CHART_GENERATION_ERROR,
            message=message,
            details={"question": question}
        )
        self.question = question


class SchemaLoadError(QueryChartError):
    """Schema load error."""

    def __init__(self, message: str):
        super().__init__(
            code=ErrorCode.SCHEMA_LOAD_ERROR,
            message=message
        )


class AIServiceError(QueryChartError):
    """Generation provider error."""

    def __init__(self, message: str):
        super().__init__(
            code=ErrorCode.AI_SERVICE_ERROR,
            message=message
        )


class ConfigurationError(QueryChartError):
    """Configuration error."""

    def __init__(self, message: str):
        super().__init__(
            code=ErrorCode.CONFIGURATION_ERROR,
            message=message
        )
