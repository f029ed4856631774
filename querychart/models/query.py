# querychart/models/query.py
"""Query-related data models."""

from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, Field

from querychart.models.chart import ChartConfig


T = TypeVar("T")


class GeneratedQuery(BaseModel):
    """Response schema the provider must honor for SQL generation."""

    query: str = Field(..., description="A single read-only PostgreSQL SELECT statement")


class ErrorDetails(BaseModel):
    """Error details model."""

    message: str
    code: str


class ActionResult(BaseModel, Generic[T]):
    """Uniform success/error envelope returned to callers."""

    success: bool
    data: Optional[T] = None
    error: Optional[ErrorDetails] = None

    @classmethod
    def ok(cls, data: T) -> "ActionResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, message: str, code: str) -> "ActionResult[T]":
        return cls(success=False, error=ErrorDetails(message=message, code=code))


class QueryRunResult(BaseModel):
    """Executed query with its rows and optional chart."""

    query: str
    rows: list[dict[str, Any]] = Field(default_factory=list)
    chart: Optional[ChartConfig] = None
