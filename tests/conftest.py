"""
Pytest fixtures for advocate directory tests.

Provides the three-advocate example directory as an in-memory connection,
as a database file under tmp_path, and behind a FastAPI TestClient.
A larger generated directory is available for pagination tests.
"""

import sqlite3
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from utils.database import connect, init_schema  # noqa: E402
from utils.seed import SeedAdvocate, generate_advocates, insert_advocates  # noqa: E402


def _example_advocates() -> list[SeedAdvocate]:
    return [
        SeedAdvocate("Alice", "Smith", "Austin", "MD", 3, "5551234567", ["Bipolar"]),
        SeedAdvocate("Bob", "Smith", "Austin", "PhD", 12, "5559876543", ["Trauma"]),
        SeedAdvocate("Cara", "Jones", "Denver", "MD", 7, "5550001111",
                     ["Bipolar", "Trauma"]),
    ]


def _populate(conn: sqlite3.Connection, advocates: list[SeedAdvocate],
              specialty_names=()) -> None:
    init_schema(conn)
    insert_advocates(conn, advocates, specialty_names)
    conn.commit()


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture()
def example_advocates() -> list[SeedAdvocate]:
    """Alice Smith (id 1), Bob Smith (id 2), Cara Jones (id 3)."""
    return _example_advocates()


@pytest.fixture()
def db(example_advocates):
    """In-memory connection holding the three example advocates."""
    conn = connect(Path(":memory:"))
    _populate(conn, example_advocates)
    yield conn
    conn.close()


@pytest.fixture()
def large_db():
    """In-memory connection holding 137 generated advocates."""
    conn = connect(Path(":memory:"))
    _populate(conn, generate_advocates(137, seed=42))
    yield conn
    conn.close()


@pytest.fixture()
def db_path(tmp_path, example_advocates) -> Path:
    """Database file with the three example advocates."""
    path = tmp_path / "advocates.sqlite"
    conn = connect(path)
    _populate(conn, example_advocates)
    conn.close()
    return path


@pytest.fixture()
def app_client(db_path):
    """TestClient for an app pointed at the example database."""
    from fastapi.testclient import TestClient
    from api.app import create_app
    from api.routes.filters import clear_filter_cache

    clear_filter_cache()
    app = create_app(db_path=db_path)
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client
    clear_filter_cache()


@pytest.fixture()
def large_app_client(tmp_path):
    """TestClient for an app pointed at 137 generated advocates."""
    from fastapi.testclient import TestClient
    from api.app import create_app
    from api.routes.filters import clear_filter_cache

    path = tmp_path / "large.sqlite"
    conn = connect(path)
    _populate(conn, generate_advocates(137, seed=42))
    conn.close()

    clear_filter_cache()
    app = create_app(db_path=path)
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client
    clear_filter_cache()
