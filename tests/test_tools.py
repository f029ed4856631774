# tests/test_tools.py
"""Tests for MCP tool registration."""

import pytest
from mcp.server.fastmcp import FastMCP

from querychart.services.chart_generator import ChartGenerator
from querychart.services.executor import QueryExecutor
from querychart.services.pipeline import QueryPipeline
from querychart.services.query_generator import QueryGenerator
from querychart.services.schema import SchemaService
from querychart.services.sql_validator import SQLValidator
from querychart.tools import register_query_tools, register_schema_tool


def tool_function(mcp, name):
    return mcp._tool_manager.get_tool(name).fn


class TestQueryTools:
    """Query tool tests."""

    def setup_method(self):
        """Set up test fixtures."""
        self.mcp = FastMCP("querychart-test")

    @pytest.mark.asyncio
    async def test_tools_registered(self, make_pool):
        """Test every query tool is exposed."""
        pipeline = QueryPipeline(
            QueryGenerator(None, "{}"),
            QueryExecutor(make_pool(), SQLValidator()),
            ChartGenerator(None),
        )
        register_query_tools(self.mcp, pipeline)

        names = {tool.name for tool in await self.mcp.list_tools()}
        assert {"generate_query", "run_query", "ask"} <= names

    @pytest.mark.asyncio
    async def test_run_query_returns_envelope(self, make_pool):
        """Test the tool returns the serialized envelope."""
        pipeline = QueryPipeline(
            QueryGenerator(None, "{}"),
            QueryExecutor(make_pool(rows=[{"name": "Rock", "tracks": 1297}]), SQLValidator()),
            ChartGenerator(None),
        )
        register_query_tools(self.mcp, pipeline)

        run_query = tool_function(self.mcp, "run_query")
        result = await run_query("SELECT name, tracks FROM genre_stats", "tracks per genre")

        assert result["success"] is True
        assert result["data"]["rows"] == [{"name": "Rock", "tracks": 1297}]
        assert result["data"]["chart"]["type"] == "bar"

    @pytest.mark.asyncio
    async def test_generate_query_error_envelope(self, make_pool, make_provider):
        """Test failures reach the caller as error envelopes."""
        pipeline = QueryPipeline(
            QueryGenerator(make_provider(error=RuntimeError("offline")), "{}"),
            QueryExecutor(make_pool(), SQLValidator()),
            ChartGenerator(None),
        )
        register_query_tools(self.mcp, pipeline)

        generate_query = tool_function(self.mcp, "generate_query")
        result = await generate_query("anything")

        assert result["success"] is False
        assert result["error"]["code"] == "GENERATION_ERROR"


class TestSchemaTool:
    """Schema tool tests."""

    def setup_method(self):
        """Set up test fixtures."""
        self.mcp = FastMCP("querychart-test")

    @pytest.mark.asyncio
    async def test_summary(self, chinook_catalog):
        """Test the summary format."""
        register_schema_tool(self.mcp, SchemaService(chinook_catalog, ["_drizzle_"]))

        result = await tool_function(self.mcp, "get_schema")()

        assert result["success"] is True
        assert result["data"]["tables_count"] == 3
        assert result["data"]["relationships_count"] == 2
        assert result["data"]["tables"][0] == {
            "name": "albums",
            "columns_count": 3,
            "primary_key": ["album_id"],
        }

    @pytest.mark.asyncio
    async def test_full(self, chinook_catalog):
        """Test the full format returns the prompt description."""
        register_schema_tool(self.mcp, SchemaService(chinook_catalog, ["_drizzle_"]))

        result = await tool_function(self.mcp, "get_schema")(format="full")

        assert set(result["data"]["schema"]) == {"tables", "relationships"}

    @pytest.mark.asyncio
    async def test_load_failure(self, chinook_catalog):
        """Test schema load errors become error envelopes."""
        chinook_catalog.fail_on = "list_tables"
        register_schema_tool(self.mcp, SchemaService(chinook_catalog))

        result = await tool_function(self.mcp, "get_schema")()

        assert result["success"] is False
        assert result["error"]["code"] == "SCHEMA_LOAD_ERROR"
