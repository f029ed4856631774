# querychart/services/catalog.py
"""Catalog readers used by schema introspection."""

import logging
from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable

import asyncpg

logger = logging.getLogger("catalog")


@dataclass(frozen=True)
class CatalogColumn:
    """Column metadata as reported by the catalog."""

    name: str
    type: str
    not_null: bool
    default: Optional[str]
    pk: int  # 1-based position in the primary key, 0 if not part of it


@dataclass(frozen=True)
class CatalogIndex:
    """Index metadata with its columns in key order."""

    name: str
    unique: bool
    columns: tuple[str, ...]


@dataclass(frozen=True)
class CatalogForeignKeyRow:
    """One column pair of a (possibly composite) foreign key constraint."""

    id: int
    seq: int
    table: str
    from_column: str
    to_column: str


@runtime_checkable
class CatalogReader(Protocol):
    """Read-only access to a database catalog."""

    async def list_tables(self) -> list[str]:
        """List user table names in a stable order."""
        ...

    async def list_columns(self, table: str) -> list[CatalogColumn]:
        """List columns of a table in ordinal order."""
        ...

    async def list_indexes(self, table: str) -> list[CatalogIndex]:
        """List indexes defined on a table."""
        ...

    async def list_foreign_keys(self, table: str) -> list[CatalogForeignKeyRow]:
        """List foreign key rows of a table, one row per column pair."""
        ...


class PostgresCatalog:
    """Catalog reader over a PostgreSQL connection pool."""

    def __init__(self, pool: asyncpg.Pool, schema: str = "public"):
        """Initialize the catalog reader.

        Args:
            pool: The database connection pool.
            schema: The schema whose tables are described.
        """
        self.pool = pool
        self.schema = schema

    async def list_tables(self) -> list[str]:
        async with self.pool.acquire() as conn:
            rows = await conn.fetch("""
                SELECT c.relname AS name
                FROM pg_catalog.pg_class c
                JOIN pg_catalog.pg_namespace n ON n.oid = c.relnamespace
                WHERE n.nspname = $1
                    AND n.nspname NOT IN ('pg_catalog', 'information_schema')
                    AND c.relkind IN ('r', 'p')
                    AND NOT c.relispartition
                ORDER BY c.relname
            """, self.schema)
        return [row["name"] for row in rows]

    async def list_columns(self, table: str) -> list[CatalogColumn]:
        async with self.pool.acquire() as conn:
            rows = await conn.fetch("""
                SELECT
                    a.attname AS name,
                    pg_catalog.format_type(a.atttypid, a.atttypmod) AS type,
                    a.attnotnull AS not_null,
                    pg_catalog.pg_get_expr(d.adbin, d.adrelid) AS default_value,
                    COALESCE(array_position(pk.indkey::int2[], a.attnum), 0) AS pk
                FROM pg_catalog.pg_attribute a
                JOIN pg_catalog.pg_class c ON c.oid = a.attrelid
                JOIN pg_catalog.pg_namespace n ON n.oid = c.relnamespace
                LEFT JOIN pg_catalog.pg_attrdef d
                    ON d.adrelid = a.attrelid AND d.adnum = a.attnum
                LEFT JOIN pg_catalog.pg_index pk
                    ON pk.indrelid = c.oid AND pk.indisprimary
                WHERE n.nspname = $1
                    AND c.relname = $2
                    AND a.attnum > 0
                    AND NOT a.attisdropped
                ORDER BY a.attnum
            """, self.schema, table)

        return [
            CatalogColumn(
                name=row["name"],
                type=row["type"],
                not_null=row["not_null"],
                default=row["default_value"],
                pk=row["pk"],
            )
            for row in rows
        ]

    async def list_indexes(self, table: str) -> list[CatalogIndex]:
        async with self.pool.acquire() as conn:
            rows = await conn.fetch("""
                SELECT
                    ic.relname AS name,
                    i.indisunique AS is_unique,
                    ARRAY(
                        SELECT a.attname
                        FROM unnest(i.indkey::int2[]) WITH ORDINALITY AS k(attnum, ord)
                        JOIN pg_catalog.pg_attribute a
                            ON a.attrelid = i.indrelid AND a.attnum = k.attnum
                        ORDER BY k.ord
                    ) AS columns
                FROM pg_catalog.pg_index i
                JOIN pg_catalog.pg_class ic ON ic.oid = i.indexrelid
                JOIN pg_catalog.pg_class c ON c.oid = i.indrelid
                JOIN pg_catalog.pg_namespace n ON n.oid = c.relnamespace
                WHERE n.nspname = $1 AND c.relname = $2
                ORDER BY ic.relname
            """, self.schema, table)

        return [
            CatalogIndex(
                name=row["name"],
                unique=row["is_unique"],
                columns=tuple(row["columns"]),
            )
            for row in rows
        ]

    async def list_foreign_keys(self, table: str) -> list[CatalogForeignKeyRow]:
        async with self.pool.acquire() as conn:
            rows = await conn.fetch("""
                SELECT
                    con.oid::bigint AS id,
                    (k.ord - 1)::int AS seq,
                    rc.relname AS ref_table,
                    fa.attname AS from_column,
                    ta.attname AS to_column
                FROM pg_catalog.pg_constraint con
                JOIN pg_catalog.pg_class c ON c.oid = con.conrelid
                JOIN pg_catalog.pg_namespace n ON n.oid = c.relnamespace
                JOIN pg_catalog.pg_class rc ON rc.oid = con.confrelid
                CROSS JOIN LATERAL unnest(con.conkey, con.confkey)
                    WITH ORDINALITY AS k(from_num, to_num, ord)
                JOIN pg_catalog.pg_attribute fa
                    ON fa.attrelid = con.conrelid AND fa.attnum = k.from_num
                JOIN pg_catalog.pg_attribute ta
                    ON ta.attrelid = con.confrelid AND ta.attnum = k.to_num
                WHERE con.contype = 'f'
                    AND n.nspname = $1
                    AND c.relname = $2
                ORDER BY con.oid, k.ord
            """, self.schema, table)

        return [
            CatalogForeignKeyRow(
                id=row["id"],
                seq=row["seq"],
                table=row["ref_table"],
                from_column=row["from_column"],
                to_column=row["to_column"],
            )
            for row in rows
        ]
