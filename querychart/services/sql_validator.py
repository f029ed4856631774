# querychart/services/sql_validator.py
"""SQL validation services - read-only gate in front of execution."""

import logging
from typing import Optional, Sequence

import sqlglot
from sqlglot.errors import ParseError

from querychart.utils.constants import FORBIDDEN_KEYWORDS

logger = logging.getLogger("sql-validator")


class SQLValidator:
    """SQL safety validator.

    A fast reject-list filter, not a parser-backed guarantee. The keyword
    check is a plain substring match on the lower-cased text, so a query
    mentioning ``'update'`` in a literal or ``created_at`` as a column is
    rejected as well.
    """

    def __init__(
        self,
        forbidden_keywords: Optional[Sequence[str]] = None,
        parse_check: bool = True,
        dialect: str = "postgres"
    ):
        """Initialize the SQL validator.

        Args:
            forbidden_keywords: Substrings that reject a query anywhere.
            parse_check: Also reject text that does not parse as exactly one
                statement.
            dialect: sqlglot dialect used for the parse check.
        """
        self.forbidden_keywords = tuple(
            k.lower() for k in (forbidden_keywords or FORBIDDEN_KEYWORDS)
        )
        self.parse_check = parse_check
        self.dialect = dialect

    def validate(self, sql: str) -> tuple[bool, Optional[str]]:
        """Validate an SQL statement against the read-only policy.

        Args:
            sql: The SQL statement to validate.

        Returns:
            A tuple of (is_valid, reason). The reason is None when valid.
        """
        normalized = sql.strip().lower()

        if not normalized.startswith("select"):
            return False, "Only SELECT queries are allowed"

        for keyword in self.forbidden_keywords:
            if keyword in normalized:
                return False, f"Query contains forbidden keyword: {keyword}"

        if self.parse_check:
            return self._check_single_statement(sql)

        return True, None

    def _check_single_statement(self, sql: str) -> tuple[bool, Optional[str]]:
        """Reject text that is unparseable or holds several statements."""
        try:
            statements = [
                s for s in sqlglot.parse(sql, read=self.dialect) if s is not None
            ]
        except ParseError as e:
            logger.info("Rejected unparseable query: %s", e)
            return False, f"SQL syntax error: {e}"

        if len(statements) != 1:
            return False, "Only a single SELECT statement is allowed"

        return True, None
