"""
Database connection management for the API.

Provides get_db() / get_write_db() dependencies that open a per-request
SQLite connection and close it after the response is sent.  The database
path is resolved once at startup from the APP_DB_PATH environment variable
(default: advocates.sqlite) and may be overridden by create_app(db_path=...).
"""

import os
import sqlite3
from collections.abc import Generator
from pathlib import Path

from fastapi import HTTPException

from utils.database import init_schema, register_functions

_DB_PATH: Path = Path(os.getenv("APP_DB_PATH", "advocates.sqlite"))


def get_db_path() -> Path:
    """Return the configured database path."""
    return _DB_PATH


def set_db_path(db_path: Path) -> None:
    """Point all subsequent connections at *db_path*."""
    global _DB_PATH
    _DB_PATH = Path(db_path)


def _make_conn(db_path: Path) -> sqlite3.Connection:
    """Open a single SQLite connection with standard pragmas."""
    conn = sqlite3.connect(str(db_path), check_same_thread=False,
                           timeout=10)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA synchronous=NORMAL")
    conn.execute("PRAGMA foreign_keys=ON")
    conn.execute("PRAGMA busy_timeout=5000")
    register_functions(conn)
    return conn


def get_db() -> Generator[sqlite3.Connection, None, None]:
    """FastAPI dependency: yield a SQLite connection, close on exit.

    Raises HTTP 503 with a friendly message if the database file is
    missing, instead of letting sqlite create an empty one.

    Usage in a route::

        @router.get("/example")
        def example(conn=Depends(get_db)):
            ...
    """
    if not _DB_PATH.exists():
        raise HTTPException(
            status_code=503,
            detail=(
                f"Database not found at '{_DB_PATH}'. "
                "Run 'python build_advocates_db.py' or POST /api/v1/seed."
            ),
        )
    conn = _make_conn(_DB_PATH)
    try:
        yield conn
    finally:
        conn.close()


def get_write_db() -> Generator[sqlite3.Connection, None, None]:
    """FastAPI dependency for maintenance writes.

    Creates the database file and schema when missing.
    """
    _DB_PATH.parent.mkdir(parents=True, exist_ok=True)
    conn = _make_conn(_DB_PATH)
    try:
        init_schema(conn)
        yield conn
    finally:
        conn.close()
