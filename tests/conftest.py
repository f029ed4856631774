"""Pytest configuration and fixtures for querychart tests."""

from contextlib import asynccontextmanager

import pytest

from querychart.services.catalog import (
    CatalogColumn,
    CatalogForeignKeyRow,
    CatalogIndex,
)


# Markers for test categorization
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (deselect with '-m \"not integration\"')"
    )
    config.addinivalue_line(
        "markers", "slow: marks tests as slow running tests"
    )


@pytest.fixture(scope="session")
def anyio_backend():
    """Set the async backend for anyio."""
    return "asyncio"


def pytest_collection_modifyitems(config, items):
    """Run unit tests before integration tests."""
    items.sort(key=lambda item: (item.get_closest_marker("integration") is not None, item.name))


class FakeCatalog:
    """In-memory catalog reader.

    ``tables`` maps a table name to a dict with ``columns``, ``indexes`` and
    ``foreign_keys`` lists of catalog rows.
    """

    def __init__(self, tables: dict, fail_on: str | None = None):
        self.tables = tables
        self.fail_on = fail_on

    def _check(self, operation: str):
        if self.fail_on == operation:
            raise RuntimeError(f"catalog read failed: {operation}")

    async def list_tables(self):
        self._check("list_tables")
        return list(self.tables)

    async def list_columns(self, table):
        self._check("list_columns")
        return list(self.tables[table].get("columns", []))

    async def list_indexes(self, table):
        self._check("list_indexes")
        return list(self.tables[table].get("indexes", []))

    async def list_foreign_keys(self, table):
        self._check("list_foreign_keys")
        return list(self.tables[table].get("foreign_keys", []))


class FakeConnection:
    def __init__(self, rows=None, error=None):
        self.rows = rows if rows is not None else []
        self.error = error
        self.executed: list[str] = []
        self.fetched: list[str] = []
        self.transactions: list[dict] = []

    @asynccontextmanager
    async def _transaction(self, **kwargs):
        self.transactions.append(kwargs)
        yield

    def transaction(self, **kwargs):
        return self._transaction(**kwargs)

    async def execute(self, sql):
        self.executed.append(sql)

    async def fetch(self, sql, *args):
        self.fetched.append(sql)
        if self.error is not None:
            raise self.error
        return self.rows


class FakePool:
    """Stands in for an asyncpg pool handing out one connection."""

    def __init__(self, rows=None, error=None):
        self.connection = FakeConnection(rows=rows, error=error)
        self.acquired = 0

    @asynccontextmanager
    async def _acquire(self):
        self.acquired += 1
        yield self.connection

    def acquire(self):
        return self._acquire()


class FakeProvider:
    """Generation provider returning a fixed object or raising."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls: list[dict] = []

    async def generate_object(self, system_prompt, user_prompt, response_model):
        self.calls.append({
            "system_prompt": system_prompt,
            "user_prompt": user_prompt,
            "response_model": response_model,
        })
        if self.error is not None:
            raise self.error
        if isinstance(self.response, dict):
            return response_model.model_validate(self.response)
        return self.response


def column(name, type_="INTEGER", pk=0, not_null=False, default=None):
    return CatalogColumn(name=name, type=type_, not_null=not_null, default=default, pk=pk)


def index(name, columns, unique=True):
    return CatalogIndex(name=name, unique=unique, columns=tuple(columns))


def fk_row(id_, seq, table, from_column, to_column):
    return CatalogForeignKeyRow(
        id=id_, seq=seq, table=table, from_column=from_column, to_column=to_column
    )


@pytest.fixture
def chinook_catalog():
    """A small slice of the Chinook music store schema."""
    return FakeCatalog({
        "albums": {
            "columns": [
                column("album_id", pk=1, not_null=True),
                column("title", "character varying(160)", not_null=True),
                column("artist_id", not_null=True),
            ],
            "indexes": [index("albums_pkey", ["album_id"])],
            "foreign_keys": [fk_row(20, 0, "artists", "artist_id", "artist_id")],
        },
        "artists": {
            "columns": [
                column("artist_id", pk=1, not_null=True),
                column("name", "character varying(120)"),
            ],
            "indexes": [
                index("artists_pkey", ["artist_id"]),
                index("artists_name_key", ["name"]),
            ],
        },
        "tracks": {
            "columns": [
                column("track_id", pk=1, not_null=True),
                column("name", "character varying(200)", not_null=True),
                column("album_id"),
                column("unit_price", "numeric(10,2)", not_null=True, default="0.99"),
            ],
            "indexes": [
                index("tracks_pkey", ["track_id"]),
                index("tracks_album_idx", ["album_id"], unique=False),
            ],
            "foreign_keys": [fk_row(30, 0, "albums", "album_id", "album_id")],
        },
        "_drizzle_migrations": {
            "columns": [column("id", pk=1)],
        },
    })


@pytest.fixture
def make_pool():
    return FakePool


@pytest.fixture
def make_provider():
    return FakeProvider


@pytest.fixture
def make_catalog():
    return FakeCatalog
