# querychart/main.py
"""Main entry point for the querychart MCP server."""

import argparse
import asyncio
import logging

import asyncpg
from mcp.server.fastmcp import FastMCP

from querychart.config import Settings
from querychart.services.ai_client import create_generation_provider
from querychart.services.catalog import PostgresCatalog
from querychart.services.chart_generator import ChartGenerator
from querychart.services.database import check_connection, close_pool, create_pool
from querychart.services.executor import QueryExecutor
from querychart.services.pipeline import QueryPipeline
from querychart.services.query_generator import QueryGenerator
from querychart.services.schema import SchemaService
from querychart.services.sql_validator import SQLValidator
from querychart.tools.query import register_query_tools
from querychart.tools.schema import register_schema_tool


logger = logging.getLogger("querychart")


async def build_services(
    settings: Settings,
    pool: asyncpg.Pool
) -> tuple[SchemaService, QueryPipeline]:
    """Construct every service once, wiring dependencies explicitly.

    Args:
        settings: Application settings.
        pool: The database connection pool.

    Returns:
        The schema service and the query pipeline.

    Raises:
        ConfigurationError: If production runs without provider credentials.
        SchemaLoadError: If the schema cannot be introspected.
    """
    provider = create_generation_provider(settings)

    schema_service = SchemaService(
        catalog=PostgresCatalog(pool, schema=settings.postgres_schema),
        excluded_prefixes=settings.excluded_table_prefixes
    )
    schema_text = await schema_service.get_schema_text()

    pipeline = QueryPipeline(
        generator=QueryGenerator(provider, schema_text),
        executor=QueryExecutor(
            pool=pool,
            validator=SQLValidator(),
            timeout=settings.query_timeout
        ),
        chart_generator=ChartGenerator(provider, sample_rows=settings.chart_sample_rows)
    )
    return schema_service, pipeline


async def run_server(settings: Settings, transport: str = "sse") -> None:
    """Run the MCP server.

    Args:
        settings: Application settings.
        transport: "sse" or "stdio".
    """
    mcp = FastMCP("querychart", host=settings.mcp_host, port=settings.mcp_port)

    logger.info("Initializing services (environment=%s)", settings.environment)
    pool = await create_pool(settings)

    try:
        status = await check_connection(pool)
        if status.connected:
            logger.info(
                "Connected to PostgreSQL %s (%.1f ms)",
                status.server_version, status.latency_ms
            )
        else:
            logger.warning("Database connectivity check failed: %s", status.error)

        schema_service, pipeline = await build_services(settings, pool)

        register_schema_tool(mcp, schema_service)
        register_query_tools(mcp, pipeline)

        logger.info("querychart server ready; starting event loop")
        if transport == "stdio":
            await mcp.run_stdio_async()
        else:
            await mcp.run_sse_async()
    finally:
        await close_pool(pool)


def main() -> None:
    """Main entry point for the server."""
    parser = argparse.ArgumentParser(description="Natural language to SQL and charts over MCP")
    parser.add_argument("--dsn", type=str, help="Database DSN")
    parser.add_argument("--api-key", type=str, help="OpenAI API Key")
    parser.add_argument("--base-url", type=str, help="OpenAI API Base URL")
    parser.add_argument("--model", type=str, help="OpenAI Model")
    parser.add_argument(
        "--environment",
        choices=["development", "production", "test"],
        help="Execution environment"
    )
    parser.add_argument(
        "--transport",
        choices=["sse", "stdio"],
        default="sse",
        help="MCP transport"
    )

    args = parser.parse_args()

    overrides = {
        "postgres_dsn": args.dsn,
        "openai_api_key": args.api_key,
        "openai_base_url": args.base_url,
        "openai_model": args.model,
        "environment": args.environment,
    }
    settings = Settings(**{k: v for k, v in overrides.items() if v is not None})

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )
    logger.info("Starting querychart server initialization")

    asyncio.run(run_server(settings, transport=args.transport))


if __name__ == "__main__":
    main()
