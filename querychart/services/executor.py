# querychart/services/executor.py
"""Validated, read-only query execution."""

import logging
from typing import Any

import asyncpg

from querychart.services.sql_validator import SQLValidator
from querychart.utils.exceptions import DatabaseQueryError, SQLValidationError

logger = logging.getLogger("query-executor")


class QueryExecutor:
    """Runs queries that pass the safety validator."""

    def __init__(
        self,
        pool: asyncpg.Pool,
        validator: SQLValidator,
        timeout: int = 30
    ):
        """Initialize the executor.

        Args:
            pool: The database connection pool.
            validator: The SQL validator gating execution.
            timeout: Per-statement timeout in seconds.
        """
        self.pool = pool
        self.validator = validator
        self.timeout = timeout

    async def execute(self, query: str) -> list[dict[str, Any]]:
        """Validate and execute a query.

        The query text is executed exactly as given.

        Args:
            query: The SQL statement to run.

        Returns:
            The rows as dicts, columns in engine order.

        Raises:
            SQLValidationError: If the validator rejects the query.
            DatabaseQueryError: If the engine fails to run it.
        """
        is_valid, reason = self.validator.validate(query)
        if not is_valid:
            logger.warning("Query rejected: %s", reason)
            raise SQLValidationError(query, reason or "rejected")

        logger.info("Executing query: %s", query)

        try:
            async with self.pool.acquire() as conn:
                async with conn.transaction(readonly=True):
                    await conn.execute(
                        f"SET LOCAL statement_timeout = '{int(self.timeout)}s'"
                    )
                    records = await conn.fetch(query)
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as e:
            logger.error("Query execution failed: %s", e)
            raise DatabaseQueryError(query, f"Database query failed: {e}") from e

        rows = [dict(record.items()) for record in records]
        logger.debug("Query returned %d rows", len(rows))
        return rows
