"""Service modules for querychart."""

from querychart.services.database import (
    create_pool,
    check_connection,
    ConnectionCheck,
    close_pool,
)
from querychart.services.catalog import CatalogReader, PostgresCatalog
from querychart.services.relationships import (
    RelationshipClassifier,
    HeuristicRelationshipClassifier,
)
from querychart.services.schema import SchemaService
from querychart.services.sql_validator import SQLValidator
from querychart.services.executor import QueryExecutor
from querychart.services.ai_client import (
    AIClient,
    GenerationProvider,
    create_generation_provider,
)
from querychart.services.query_generator import QueryGenerator, SQL_GENERATION_PROMPT
from querychart.services.data_analysis import analyze_data
from querychart.services.formatters import format_value
from querychart.services.chart_generator import ChartGenerator, CHART_GENERATION_PROMPT
from querychart.services.pipeline import QueryPipeline
from querychart.services.resilience import retry_async

__all__ = [
    # Database
    "create_pool",
    "check_connection",
    "ConnectionCheck",
    "close_pool",
    # Schema
    "CatalogReader",
    "PostgresCatalog",
    "RelationshipClassifier",
    "HeuristicRelationshipClassifier",
    "SchemaService",
    # SQL
    "SQLValidator",
    "QueryExecutor",
    # AI
    "AIClient",
    "GenerationProvider",
    "create_generation_provider",
    "QueryGenerator",
    "SQL_GENERATION_PROMPT",
    # Charts
    "analyze_data",
    "format_value",
    "ChartGenerator",
    "CHART_GENERATION_PROMPT",
    # Pipeline
    "QueryPipeline",
    # Resilience
    "retry_async",
]
