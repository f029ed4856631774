# querychart/services/schema.py
"""Schema introspection services."""

import json
import logging
from typing import Optional, Sequence

from querychart.models.schema import (
    ColumnDefinition,
    ForeignKey,
    ForeignKeyReference,
    Relationship,
    SchemaDescription,
    TableDefinition,
)
from querychart.services.catalog import CatalogForeignKeyRow, CatalogReader
from querychart.services.relationships import (
    HeuristicRelationshipClassifier,
    RelationshipClassifier,
)
from querychart.utils.exceptions import SchemaLoadError

logger = logging.getLogger("schema-service")

# Internal catalog tables that never describe user data
SYSTEM_TABLE_PREFIXES = ("pg_", "sql_")


class SchemaService:
    """Builds schema descriptions from a live catalog."""

    def __init__(
        self,
        catalog: CatalogReader,
        excluded_prefixes: Sequence[str] = (),
        classifier: Optional[RelationshipClassifier] = None
    ):
        """Initialize the schema service.

        Args:
            catalog: The catalog reader to introspect.
            excluded_prefixes: Name prefixes of migration bookkeeping tables.
            classifier: Relationship classification strategy.
        """
        self.catalog = catalog
        self.excluded_prefixes = tuple(excluded_prefixes)
        self.classifier = classifier or HeuristicRelationshipClassifier()

    async def get_schema_description(self) -> SchemaDescription:
        """Introspect the database into a schema description.

        Returns:
            The schema description.

        Raises:
            SchemaLoadError: If any catalog read fails.
        """
        try:
            table_names = [
                name for name in await self.catalog.list_tables()
                if not self._is_excluded(name)
            ]
            tables = [await self._load_table(name) for name in table_names]
        except Exception as e:
            logger.error("Schema introspection failed: %s", e)
            raise SchemaLoadError(f"Failed to read database catalog: {e}") from e

        relationships = self._infer_relationships(tables)
        logger.info(
            "Described %d tables with %d relationships",
            len(tables), len(relationships)
        )
        return SchemaDescription(tables=tables, relationships=relationships)

    def format_schema_for_ai(self, description: SchemaDescription) -> str:
        """Format a schema description for prompt consumption.

        Args:
            description: The schema description to format.

        Returns:
            Indented JSON, stable for a given description.
        """
        return json.dumps(description.to_prompt_dict(), indent=2)

    async def get_schema_text(self) -> str:
        """Introspect and format in one step."""
        return self.format_schema_for_ai(await self.get_schema_description())

    def _is_excluded(self, table_name: str) -> bool:
        return table_name.startswith(SYSTEM_TABLE_PREFIXES + self.excluded_prefixes)

    async def _load_table(self, table_name: str) -> TableDefinition:
        """Load one table's columns, unique flags and foreign keys."""
        catalog_columns = await self.catalog.list_columns(table_name)

        unique_columns: set[str] = set()
        for index in await self.catalog.list_indexes(table_name):
            if index.unique:
                unique_columns.update(index.columns)

        columns = [
            ColumnDefinition(
                name=col.name,
                type=col.type.upper(),
                primary_key=col.pk > 0,
                not_null=col.not_null,
                default=col.default,
                unique=col.name in unique_columns,
            )
            for col in catalog_columns
        ]

        fk_rows = await self.catalog.list_foreign_keys(table_name)
        return TableDefinition(
            name=table_name,
            columns=columns,
            foreign_keys=self._group_foreign_keys(fk_rows),
        )

    def _group_foreign_keys(self, rows: list[CatalogForeignKeyRow]) -> list[ForeignKey]:
        """Group foreign key rows by constraint id, ordered by sequence."""
        groups: dict[int, list[CatalogForeignKeyRow]] = {}
        for row in rows:
            groups.setdefault(row.id, []).append(row)

        foreign_keys = []
        for constraint_id in sorted(groups):
            group = sorted(groups[constraint_id], key=lambda r: r.seq)
            foreign_keys.append(ForeignKey(
                columns=[r.from_column for r in group],
                references=ForeignKeyReference(
                    table=group[0].table,
                    columns=[r.to_column for r in group],
                ),
            ))
        return foreign_keys

    def _infer_relationships(self, tables: list[TableDefinition]) -> list[Relationship]:
        return [
            self.classifier.classify(table, fk, tables)
            for table in tables
            for fk in table.foreign_keys
        ]
