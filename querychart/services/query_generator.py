# querychart/services/query_generator.py
"""Natural-language-to-SQL generation."""
import logging
from typing import Optional

from querychart.models.query import GeneratedQuery
from querychart.services.ai_client import GenerationProvider, extract_code_block
from querychart.utils.constants import CANNED_QUERY
from querychart.utils.exceptions import QueryChartError, QueryGenerationError

logger = logging.getLogger("query-generator")

SQL_GENERATION_PROMPT = """You are a PostgreSQL expert. Your task is to translate a user's request \
into a single SQL query that retrieves the data they want.

# Database Schema
{schema_info}

Interpreting the request:
- "X by Y" means grouping: GROUP BY Y and aggregate X.
- "most", "top", "highest" or "best" means ORDER BY the measure DESC with a LIMIT.
- "least", "bottom" or "lowest" means ORDER BY the measure ASC with a LIMIT.
- "recent" or "latest" means ORDER BY the relevant date column DESC.
- "between X and Y" means a range predicate (BETWEEN or >= / <=).
- Without an explicit limit on a list request, add LIMIT 100.

Constraints:
- Only use SELECT statements. Never modify data or schema.
- Return exactly one statement, with no trailing commentary.
- Only reference tables and columns that exist in the schema above.
- Give computed columns short, readable aliases.
- Return the query in the "query" field of the response object.
"""

SQL_USER_PROMPT = "Generate the query necessary to retrieve the data the user wants: {user_query}"


class QueryGenerator:
    """Builds SQL generation prompts and enforces the response shape."""

    def __init__(
        self,
        provider: Optional[GenerationProvider],
        schema_info: str
    ):
        """Initialize the query generator.

        Args:
            provider: The generation provider, or None for canned responses.
            schema_info: Serialized schema description for the prompt.
        """
        self.provider = provider
        self.schema_info = schema_info

    @property
    def uses_canned_responses(self) -> bool:
        return self.provider is None

    def build_system_prompt(self) -> str:
        return SQL_GENERATION_PROMPT.format(schema_info=self.schema_info)

    async def generate(self, user_query: str) -> str:
        """Generate an SQL statement from natural language.

        Args:
            user_query: The user's natural language request.

        Returns:
            The generated SQL statement.

        Raises:
            QueryGenerationError: If generation fails or yields no query.
        """
        logger.info("Generating SQL for user query: %s", user_query)

        if self.provider is None:
            return CANNED_QUERY

        try:
            result = await self.provider.generate_object(
                self.build_system_prompt(),
                SQL_USER_PROMPT.format(user_query=user_query),
                GeneratedQuery
            )
        except QueryChartError as e:
            raise QueryGenerationError(user_query, f"Failed to generate query: {e.message}") from e
        except Exception as e:
            logger.error("Generation provider raised: %s", e)
            raise QueryGenerationError(user_query, f"Failed to generate query: {e}") from e

        sql = extract_code_block(result.query, "sql").rstrip(";").strip()
        if not sql:
            raise QueryGenerationError(user_query, "Generation provider returned an empty query")

        logger.info("Generated query: %s", sql)
        return sql
