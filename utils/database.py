"""Database utilities for the advocate directory.

Provides reusable functions for:
- Schema initialization and pragmas
- Batch insert operations
- Destructive reset of the directory tables
- Small query helpers
"""

import sqlite3
from pathlib import Path
from typing import List

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS advocates (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    first_name TEXT NOT NULL,
    last_name TEXT NOT NULL,
    city TEXT NOT NULL,
    degree TEXT NOT NULL,
    years_of_experience INTEGER NOT NULL CHECK (years_of_experience >= 0),
    phone_number TEXT NOT NULL,
    created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS specialties (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL UNIQUE
);

CREATE TABLE IF NOT EXISTS advocate_specialties (
    advocate_id INTEGER NOT NULL REFERENCES advocates(id) ON DELETE CASCADE,
    specialty_id INTEGER NOT NULL REFERENCES specialties(id) ON DELETE CASCADE,
    PRIMARY KEY (advocate_id, specialty_id)
);

CREATE INDEX IF NOT EXISTS idx_advocates_last_name ON advocates(last_name);
CREATE INDEX IF NOT EXISTS idx_advocates_city ON advocates(city);
CREATE INDEX IF NOT EXISTS idx_advocates_degree ON advocates(degree);
CREATE INDEX IF NOT EXISTS idx_advocates_years ON advocates(years_of_experience);
CREATE INDEX IF NOT EXISTS idx_advocate_specialties_specialty
    ON advocate_specialties(specialty_id);
"""

# Child tables first so foreign keys never dangle mid-reset.
DIRECTORY_TABLES = ("advocate_specialties", "specialties", "advocates")


def init_pragmas(conn: sqlite3.Connection) -> None:
    """Initialize SQLite performance and reliability pragmas.

    - WAL mode so readers are not blocked by a reseed
    - NORMAL synchronous mode for speed without data loss
    - Foreign keys enforced for the join table

    Args:
        conn: SQLite connection to configure
    """
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA synchronous=NORMAL")
    conn.execute("PRAGMA foreign_keys=ON")


def _casefold(value):
    return value.casefold() if isinstance(value, str) else value


def register_functions(conn: sqlite3.Connection) -> None:
    """Register the Unicode-aware ``casefold(text)`` SQL function.

    SQLite's built-in LOWER() only folds ASCII letters.
    """
    conn.create_function("casefold", 1, _casefold, deterministic=True)


def init_schema(conn: sqlite3.Connection) -> None:
    """Create the advocates, specialties and join tables if missing."""
    conn.executescript(SCHEMA_SQL)
    conn.commit()


def reset_tables(conn: sqlite3.Connection) -> None:
    """Delete every row from the directory tables and reset id counters.

    Does not commit; callers wrap this and the reinsert in one transaction.
    """
    for table in DIRECTORY_TABLES:
        conn.execute(f"DELETE FROM {table}")
    if table_exists(conn, "sqlite_sequence"):
        conn.execute(
            "DELETE FROM sqlite_sequence WHERE name IN ('advocates', 'specialties')"
        )


def batch_insert(conn: sqlite3.Connection, query: str, rows: List[tuple],
                 batch_size: int = 1000) -> int:
    """Execute batch insert operations without committing.

    Args:
        conn: SQLite connection
        query: SQL INSERT query with ? placeholders
        rows: List of tuples to insert
        batch_size: Number of rows per executemany() call (default: 1000)

    Returns:
        Total number of rows inserted

    Example:
        rows = [(1, 'name1'), (2, 'name2'), ...]
        batch_insert(conn, 'INSERT INTO specialties (id, name) VALUES (?, ?)', rows)
    """
    total_inserted = 0

    for i in range(0, len(rows), batch_size):
        batch = rows[i:i + batch_size]
        conn.executemany(query, batch)
        total_inserted += len(batch)

    return total_inserted


def get_table_count(conn: sqlite3.Connection, table: str) -> int:
    """Get row count for a table."""
    result = conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()
    return result[0] if result else 0


def table_exists(conn: sqlite3.Connection, table: str) -> bool:
    """Check if a table exists in the database.

    Args:
        conn: SQLite connection
        table: Table name

    Returns:
        True if table exists, False otherwise
    """
    cursor = conn.execute(
        "SELECT name FROM sqlite_master WHERE type='table' AND name=?",
        (table,)
    )
    return cursor.fetchone() is not None


def connect(db_path: Path) -> sqlite3.Connection:
    """Open a read-write connection with row access by column name."""
    conn = sqlite3.connect(str(db_path), check_same_thread=False, timeout=10)
    conn.row_factory = sqlite3.Row
    init_pragmas(conn)
    conn.execute("PRAGMA busy_timeout=5000")
    register_functions(conn)
    return conn
