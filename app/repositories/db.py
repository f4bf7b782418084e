"""DuckDB connection management.

One process-wide database connection; each thread works through its own
cursor on it (DuckDB connections are not safe to share across threads).
"""

import threading
from pathlib import Path

import duckdb
from loguru import logger

from app.models import ALL_DDL
from settings import DB_PATH

_local = threading.local()
_lock = threading.Lock()
_root: duckdb.DuckDBPyConnection | None = None
_path: str | None = None


def db_exists(path: str = DB_PATH) -> bool:
    """Check if database file exists."""
    return path == ":memory:" or Path(path).exists()


def _tables_exist(conn: duckdb.DuckDBPyConnection) -> bool:
    """Check if main tables already exist."""
    row = conn.execute(
        "SELECT COUNT(*) FROM information_schema.tables WHERE table_name = 'analytics_snapshot'"
    ).fetchone()
    return row[0] > 0


def init_tables(conn: duckdb.DuckDBPyConnection) -> None:
    """Initialize all tables from DDL statements (idempotent - uses IF NOT EXISTS)."""
    existed = _tables_exist(conn)
    for ddl in ALL_DDL:
        conn.execute(ddl)
    if not existed:
        logger.info("DB tables initialized")


def connect(path: str | None = None) -> duckdb.DuckDBPyConnection:
    """Open the process-wide database, creating tables on first use."""
    global _root, _path
    path = path or DB_PATH

    with _lock:
        if _root is not None and _path == path:
            return _root
        if _root is not None:
            _root.close()

        if not db_exists(path):
            logger.warning("DB not found: {}. Creating empty DB.", path)
        _root = duckdb.connect(path)
        _path = path
        init_tables(_root)
        logger.debug("DB connected: {}", path)
        return _root


def get_db() -> duckdb.DuckDBPyConnection:
    """Get thread-local cursor on the process database."""
    root = _root if _root is not None else connect()
    if getattr(_local, "root", None) is not root:
        _local.conn = root.cursor()
        _local.root = root
    return _local.conn


def close_db() -> None:
    """Close the process database (invalidates every thread's cursor)."""
    global _root, _path
    with _lock:
        if _root is not None:
            _root.close()
            logger.debug("DB connection closed: {}", _path)
        _root = None
        _path = None
    _local.conn = None
    _local.root = None
