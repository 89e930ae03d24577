"""
Test configuration and fixtures for the LightBnB data-access layer.
Provides an in-memory fake connection pool, row factories and an optional
real PostgreSQL database for integration tests.
"""

import os
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional

import pytest

from config import DatabaseConfig
from db.connection import Database
from services.query_service import QueryService


class FakeCursor:
    """Records executed statements and serves queued results."""

    def __init__(self, connection: "FakeConnection"):
        self.connection = connection

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, sql, params=None):
        self.connection.executed.append((sql, params))
        if self.connection.errors:
            raise self.connection.errors.pop(0)

    def fetchone(self):
        rows = self.connection.next_result()
        return rows[0] if rows else None

    def fetchall(self):
        return self.connection.next_result()


class FakeConnection:
    """Stands in for a psycopg2 connection."""

    def __init__(self):
        self.executed: List[tuple] = []
        self.results: List[List[Dict[str, Any]]] = []
        self.errors: List[Exception] = []
        self.commits = 0
        self.rollbacks = 0
        self.closed = 0
        self.cursor_factories: List[Any] = []

    def cursor(self, cursor_factory=None):
        self.cursor_factories.append(cursor_factory)
        return FakeCursor(self)

    def next_result(self) -> List[Dict[str, Any]]:
        return self.results.pop(0) if self.results else []

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1

    @property
    def last_sql(self) -> Optional[str]:
        return self.executed[-1][0] if self.executed else None

    @property
    def last_params(self):
        return self.executed[-1][1] if self.executed else None


class FakePool:
    """Stands in for psycopg2.pool.ThreadedConnectionPool."""

    def __init__(self, minconn, maxconn, *args, **kwargs):
        self.minconn = minconn
        self.maxconn = maxconn
        self.kwargs = kwargs
        self.connection = FakeConnection()
        self.checked_out = 0
        self.returned: List[tuple] = []
        self.closed = False

    def getconn(self):
        self.checked_out += 1
        return self.connection

    def putconn(self, conn, close=False):
        self.checked_out -= 1
        self.returned.append((conn, close))

    def closeall(self):
        self.closed = True


@pytest.fixture
def db_config() -> DatabaseConfig:
    return DatabaseConfig(
        host="db.test", port=5433, dbname="lightbnb_test",
        user="tester", password="secret",
        min_connections=1, max_connections=3,
    )


@pytest.fixture
def fake_db(monkeypatch, db_config) -> Database:
    """A Database whose pool is a FakePool."""
    monkeypatch.setattr("db.connection.pool.ThreadedConnectionPool", FakePool)
    database = Database(db_config).open()
    yield database
    database.close()


@pytest.fixture
def fake_pool(fake_db) -> FakePool:
    return fake_db._pool


@pytest.fixture
def fake_conn(fake_pool) -> FakeConnection:
    return fake_pool.connection


@pytest.fixture
def service(fake_db) -> QueryService:
    return QueryService(fake_db)


# ── Row factories ─────────────────────────────────────────

class RowFactory:
    """Builds dict rows shaped like RealDictCursor output."""

    @staticmethod
    def user_row(**overrides) -> Dict[str, Any]:
        row = {
            "id": 1,
            "name": "Devin Sanders",
            "email": "tristanjacobs@gmail.com",
            "password": "password",
        }
        row.update(overrides)
        return row

    @staticmethod
    def property_row(**overrides) -> Dict[str, Any]:
        row = {
            "id": 1,
            "owner_id": 1,
            "title": "Speed lamp",
            "description": "description",
            "thumbnail_photo_url": "https://example.com/thumb.jpg",
            "cover_photo_url": "https://example.com/cover.jpg",
            "cost_per_night": 8500,
            "parking_spaces": 2,
            "number_of_bathrooms": 1,
            "number_of_bedrooms": 3,
            "country": "Canada",
            "street": "536 Namsub Highway",
            "city": "Vancouver",
            "province": "British Columbia",
            "post_code": "28142",
            "active": True,
        }
        row.update(overrides)
        return row

    @staticmethod
    def property_data(**overrides) -> Dict[str, Any]:
        data = RowFactory.property_row()
        del data["id"]
        del data["active"]
        data.update(overrides)
        return data

    @staticmethod
    def reservation_row(**overrides) -> Dict[str, Any]:
        row = RowFactory.property_row()
        row.update({
            "reservation_id": 10,
            "start_date": date(2026, 3, 1),
            "end_date": date(2026, 3, 5),
            "guest_id": 2,
            "average_rating": Decimal("4.2500000000000000"),
        })
        row.update(overrides)
        return row


@pytest.fixture
def rows() -> RowFactory:
    return RowFactory()


# ── Integration database ──────────────────────────────────

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL")

requires_database = pytest.mark.skipif(
    not TEST_DATABASE_URL,
    reason="TEST_DATABASE_URL not set; skipping PostgreSQL integration tests",
)


@pytest.fixture
def live_db():
    """A real Database with a freshly created schema, dropped afterwards."""
    from db.init_db import create_tables, drop_tables

    database = Database(DatabaseConfig.from_url(TEST_DATABASE_URL)).open()
    drop_tables(database)
    create_tables(database)
    try:
        yield database
    finally:
        drop_tables(database)
        database.close()


@pytest.fixture
def live_service(live_db) -> QueryService:
    return QueryService(live_db)
