"""
Advocate Directory Database Builder

Creates (or recreates) the SQLite database behind the directory and fills
it with generated sample advocates.  The same seed always produces the
same rows, so demos and screenshots stay stable.

Usage:
    python build_advocates_db.py                      # 500 advocates
    python build_advocates_db.py --count 2000         # larger directory
    python build_advocates_db.py --db /tmp/adv.sqlite --seed 7

This is the command-line counterpart of POST /api/v1/seed and is just as
destructive: every existing advocate, specialty and join row is deleted.
"""

import argparse
import logging
import sqlite3
import sys
from pathlib import Path

from utils.config import AppConfig
from utils.database import connect, get_table_count
from utils.seed import DEFAULT_SEED, RESEED_LOCK, reseed_database

logger = logging.getLogger(__name__)

_cfg = AppConfig.from_env()
DEFAULT_DB_PATH = _cfg.db_path


def build_database(db_path: Path, count: int, seed: int = DEFAULT_SEED) -> dict[str, int]:
    """Create the schema at *db_path* and reseed it.

    Returns:
        Row counts as returned by reseed_database().
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = connect(db_path)
    try:
        with RESEED_LOCK:
            return reseed_database(conn, count, seed)
    finally:
        conn.close()


def main():
    """Parse command-line arguments and rebuild the directory database."""
    parser = argparse.ArgumentParser(description="Build the advocate directory database")
    parser.add_argument("--db", type=Path, default=DEFAULT_DB_PATH,
                        help=f"Database path (default: {DEFAULT_DB_PATH})")
    parser.add_argument("--count", type=int, default=_cfg.seed_count, metavar="N",
                        help=f"Number of advocates to generate (default: {_cfg.seed_count})")
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED,
                        help=f"Random seed (default: {DEFAULT_SEED})")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s %(message)s")

    if args.count < 0:
        parser.error("--count must be zero or positive")

    try:
        counts = build_database(args.db, args.count, args.seed)
    except sqlite3.Error as exc:
        print(f"ERROR: could not build {args.db}: {exc}")
        sys.exit(1)

    conn = connect(args.db)
    try:
        stored = get_table_count(conn, "advocates")
    finally:
        conn.close()

    print(f"Database: {args.db}")
    print(f"  Advocates:            {counts['advocates']:,} (stored: {stored:,})")
    print(f"  Specialties:          {counts['specialties']:,}")
    print(f"  Advocate specialties: {counts['advocateSpecialties']:,}")


if __name__ == "__main__":
    main()
