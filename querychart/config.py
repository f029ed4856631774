# querychart/config.py
"""Configuration management for querychart."""

from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


Environment = Literal["development", "production", "test"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="QUERYCHART_",
        env_file=".env",
        extra="ignore",
    )

    # PostgreSQL connection configuration
    postgres_dsn: str = ""
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_database: str = "chinook"
    postgres_user: str = "postgres"
    postgres_password: str = ""
    postgres_ssl: bool = False
    postgres_schema: str = "public"

    # OpenAI configuration
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    openai_base_url: Optional[str] = None
    openai_timeout: int = 30

    # Retry configuration
    retry_max_attempts: int = Field(default=3, ge=1)
    retry_base_delay: float = 1.0
    retry_max_delay: float = 30.0

    # Execution environment, controls canned responses
    environment: Environment = "development"

    # Query configuration
    query_timeout: int = 30

    # Schema introspection
    excluded_table_prefixes: list[str] = Field(
        default_factory=lambda: [
            "_drizzle_",
            "__drizzle_",
            "alembic_",
            "_prisma_",
            "flyway_",
        ]
    )

    # Chart generation
    chart_sample_rows: int = Field(default=3, ge=1, le=3)

    # Logging
    log_level: str = "INFO"

    # MCP configuration
    mcp_host: str = "0.0.0.0"
    mcp_port: int = 8989

    def get_dsn(self) -> str:
        """Get the database connection string.

        Returns:
            The DSN string for connecting to PostgreSQL.
        """
        if self.postgres_dsn and not self.postgres_dsn.startswith("${"):
            return self.postgres_dsn
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_database}"
        )

    def is_production(self) -> bool:
        return self.environment == "production"

    def has_ai_credentials(self) -> bool:
        """Check whether a generation provider key is configured."""
        return bool(self.openai_api_key.strip())

    def use_canned_responses(self) -> bool:
        """Check whether generation should short-circuit to canned output.

        Canned responses are only ever used outside production, when no
        provider credentials are present.
        """
        return not self.is_production() and not self.has_ai_credentials()
