"""MCP tools for querychart."""

from querychart.tools.schema import register_schema_tool
from querychart.tools.query import register_query_tools

__all__ = [
    "register_schema_tool",
    "register_query_tools",
]
