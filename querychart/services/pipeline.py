# querychart/services/pipeline.py
"""Caller-facing operations returning uniform result envelopes."""

import logging
from typing import Any, Optional

from querychart.models.chart import ChartConfig
from querychart.models.query import ActionResult, QueryRunResult
from querychart.services.chart_generator import ChartGenerator
from querychart.services.executor import QueryExecutor
from querychart.services.query_generator import QueryGenerator
from querychart.utils.constants import ErrorCode, ERROR_MESSAGES
from querychart.utils.exceptions import QueryChartError

logger = logging.getLogger("query-pipeline")


def _failure(error: Exception, fallback: str) -> ActionResult:
    if isinstance(error, QueryChartError):
        return ActionResult.fail(error.message, error.code.value)
    return ActionResult.fail(
        str(error) or fallback,
        ErrorCode.UNKNOWN_ERROR.value
    )


class QueryPipeline:
    """Generate, execute and chart queries.

    None of the operations raise; failures come back as error envelopes.
    """

    def __init__(
        self,
        generator: QueryGenerator,
        executor: QueryExecutor,
        chart_generator: ChartGenerator
    ):
        self.generator = generator
        self.executor = executor
        self.chart_generator = chart_generator

    async def generate_query(self, user_text: str) -> ActionResult[str]:
        """Translate a natural language request into SQL.

        Args:
            user_text: The user's request.

        Returns:
            An envelope holding the SQL string.
        """
        try:
            sql = await self.generator.generate(user_text)
            return ActionResult[str].ok(sql)
        except Exception as e:
            logger.error("Error generating query: %s", e)
            return _failure(e, ERROR_MESSAGES[ErrorCode.GENERATION_ERROR])

    async def run_query(
        self,
        sql: str,
        original_question: str
    ) -> ActionResult[QueryRunResult]:
        """Execute a query and chart its result.

        Chart failures leave ``chart`` unset instead of failing the call.

        Args:
            sql: The query to execute.
            original_question: The question the query answers.

        Returns:
            An envelope holding the query, rows and optional chart.
        """
        try:
            rows = await self.executor.execute(sql)
        except Exception as e:
            logger.error("Error executing query: %s", e)
            return _failure(e, ERROR_MESSAGES[ErrorCode.DB_ERROR])

        chart = await self._chart_or_none(rows, original_question)
        return ActionResult[QueryRunResult].ok(
            QueryRunResult(query=sql, rows=rows, chart=chart)
        )

    async def ask(self, user_text: str) -> ActionResult[QueryRunResult]:
        """Generate a query for a request, then run and chart it."""
        generated = await self.generate_query(user_text)
        if not generated.success:
            return ActionResult[QueryRunResult](success=False, error=generated.error)
        return await self.run_query(generated.data, user_text)

    async def _chart_or_none(
        self,
        rows: list[dict[str, Any]],
        question: str
    ) -> Optional[ChartConfig]:
        if not rows:
            logger.info("Empty result, skipping chart generation")
            return None

        try:
            return await self.chart_generator.synthesize(rows, question)
        except Exception as e:
            logger.warning("Chart generation failed, returning rows only: %s", e)
            return None
