"""Base repository class."""

from typing import Any

import duckdb
from loguru import logger

from app.repositories.db import get_db


class BaseRepository:
    """Base repository with common functionality.

    Pass `conn` to pin the repository to one connection (ETL transactions,
    tests); otherwise every call uses the calling thread's cursor.
    """

    def __init__(self, conn: duckdb.DuckDBPyConnection | None = None):
        self._conn = conn
        logger.debug("{} initialized", self.__class__.__name__)

    @property
    def db(self) -> duckdb.DuckDBPyConnection:
        return self._conn if self._conn is not None else get_db()

    def execute(self, query: str, params: list | None = None) -> Any:
        """Execute SQL query."""
        if params:
            return self.db.execute(query, params)
        return self.db.execute(query)

    def fetchall(self, query: str, params: list | None = None) -> list:
        """Execute and fetch all rows."""
        return self.execute(query, params).fetchall()

    def fetchone(self, query: str, params: list | None = None) -> Any:
        """Execute and fetch one row."""
        return self.execute(query, params).fetchone()
