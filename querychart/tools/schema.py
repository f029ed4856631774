# querychart/tools/schema.py
"""MCP schema tool implementation."""

from mcp.server.fastmcp import FastMCP

from querychart.services.schema import SchemaService
from querychart.utils.exceptions import QueryChartError


def register_schema_tool(
    mcp: FastMCP,
    schema_service: SchemaService
) -> None:
    """Register the schema tool with the MCP server.

    Args:
        mcp: The FastMCP server instance.
        schema_service: The schema service instance.
    """

    @mcp.tool()
    async def get_schema(format: str = "summary") -> dict:
        """
        Get the database schema description.

        Args:
            format: Output format, "summary" for brief or "full" for complete details.

        Returns:
            Database schema information.
        """
        try:
            description = await schema_service.get_schema_description()
        except QueryChartError as e:
            return {"success": False, "error": e.to_dict()}

        if format == "full":
            return {"success": True, "data": description.to_prompt_dict()}

        tables_summary = [
            {
                "name": table.name,
                "columns_count": len(table.columns),
                "primary_key": table.primary_key,
            }
            for table in description.tables
        ]
        return {
            "success": True,
            "data": {
                "tables": tables_summary,
                "tables_count": len(tables_summary),
                "relationships_count": len(description.relationships),
            },
        }
