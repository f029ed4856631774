# querychart/tools/query.py
"""MCP query tool implementations."""

from mcp.server.fastmcp import FastMCP

from querychart.services.pipeline import QueryPipeline


def register_query_tools(mcp: FastMCP, pipeline: QueryPipeline) -> None:
    """Register the query tools with the MCP server.

    Args:
        mcp: The FastMCP server instance.
        pipeline: The query pipeline serving the tools.
    """

    @mcp.tool()
    async def generate_query(query: str) -> dict:
        """
        Translate a natural language request into a read-only SQL query.

        Args:
            query: What data the user wants, in natural language.

        Returns:
            {success, data: SQL string} or {success: false, error: {message, code}}.
        """
        result = await pipeline.generate_query(query)
        return result.model_dump(mode="json", by_alias=True)

    @mcp.tool()
    async def run_query(sql: str, question: str = "") -> dict:
        """
        Execute a read-only SQL query and build a chart for its result.

        Args:
            sql: The SELECT statement to run.
            question: The question the query answers, used for the chart.

        Returns:
            {success, data: {query, rows, chart}} or an error envelope.
        """
        result = await pipeline.run_query(sql, question)
        return result.model_dump(mode="json", by_alias=True)

    @mcp.tool()
    async def ask(query: str) -> dict:
        """
        Answer a natural language question with rows and a chart.

        Args:
            query: The question, in natural language.

        Returns:
            {success, data: {query, rows, chart}} or an error envelope.
        """
        result = await pipeline.ask(query)
        return result.model_dump(mode="json", by_alias=True)
