"""
db/connection.py
----------------
Manages the PostgreSQL connection pool.
Uses psycopg2's ThreadedConnectionPool so operations can run from
several threads at once against one shared pool.
"""

from contextlib import contextmanager
from typing import Iterator, Optional

import psycopg2
from psycopg2 import pool

from config import DatabaseConfig
from utils.exceptions import (
    ConstraintViolationError,
    StoreError,
    StoreUnavailableError,
)
from utils.logger import get_logger

logger = get_logger(__name__)


class Database:
    """
    Handle on the relational store.

    Lifecycle: ``open()`` at startup, ``close()`` at shutdown. Can also be
    used as a context manager::

        with Database(DatabaseConfig.from_env()) as db:
            service = QueryService(db)
            ...
    """

    def __init__(self, config: Optional[DatabaseConfig] = None):
        self.config = config or DatabaseConfig.from_env()
        self._pool: Optional[pool.AbstractConnectionPool] = None

    @property
    def is_open(self) -> bool:
        return self._pool is not None

    def open(self) -> "Database":
        """
        Create the connection pool. Calling it on an open handle is a no-op.

        Raises:
            StoreUnavailableError: If the database is unreachable.
        """
        if self._pool is not None:
            return self
        try:
            self._pool = pool.ThreadedConnectionPool(
                self.config.min_connections,
                self.config.max_connections,
                **self.config.connect_kwargs(),
            )
        except psycopg2.OperationalError as e:
            logger.error(f"Failed to initialize database pool for {self.config!r}: {e}")
            raise StoreUnavailableError(f"Could not connect to database: {e}") from e
        logger.info(
            f"Database connection pool initialized "
            f"({self.config.host}:{self.config.port}/{self.config.dbname})."
        )
        return self

    def close(self) -> None:
        """Close all connections in the pool."""
        if self._pool is not None:
            self._pool.closeall()
            self._pool = None
            logger.info("Database connection pool closed.")

    def __enter__(self) -> "Database":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @contextmanager
    def connection(self) -> Iterator:
        """
        Check a connection out of the pool for the duration of one statement.

        Commits when the block exits normally and rolls back otherwise; the
        connection always goes back to the pool. psycopg2 errors are
        re-raised as StoreError subclasses.
        """
        if self._pool is None:
            raise StoreUnavailableError("Database pool not initialized. Call open() first.")
        try:
            conn = self._pool.getconn()
        except pool.PoolError as e:
            logger.error(f"No connection available: {e}")
            raise StoreUnavailableError(f"No connection available: {e}") from e

        broken = False
        try:
            yield conn
            conn.commit()
        except psycopg2.Error as e:
            broken = _rollback(conn)
            raise _translate(e) from e
        except BaseException:
            broken = _rollback(conn)
            raise
        finally:
            if self._pool is not None:
                self._pool.putconn(conn, close=broken or bool(conn.closed))


def _rollback(conn) -> bool:
    """Roll back; returns True when the connection is unusable afterwards."""
    if conn.closed:
        return True
    try:
        conn.rollback()
    except psycopg2.Error as e:
        logger.warning(f"Rollback failed, discarding connection: {e}")
        return True
    return False


def _translate(error: psycopg2.Error) -> StoreError:
    """Map a psycopg2 error onto the package's error taxonomy."""
    message = str(error).strip() or type(error).__name__
    if isinstance(error, psycopg2.IntegrityError):
        logger.error(f"Constraint violation: {message}")
        return ConstraintViolationError(message)
    if isinstance(error, (psycopg2.OperationalError, psycopg2.InterfaceError)):
        logger.error(f"Database unavailable: {message}")
        return StoreUnavailableError(message)
    logger.error(f"Query failed: {message}")
    return StoreError(message)
