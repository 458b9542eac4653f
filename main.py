#!/usr/bin/env python3
"""
Advocate Directory: launch the web UI.

Usage:
    python main.py                          # http://localhost:8000
    python main.py --port 9000              # http://localhost:9000
    python main.py --host 127.0.0.1         # bind to localhost only
    python main.py --db /path/to/advocates.sqlite
    python main.py --seed                   # (re)build sample data first
    python main.py --reload                 # auto-reload on code changes
"""

from __future__ import annotations

import argparse
import os
import sys
import webbrowser
from pathlib import Path


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Launch the Advocate Directory web interface.",
    )
    parser.add_argument(
        "--host", default="0.0.0.0",
        help="Bind address (default: 0.0.0.0)",
    )
    parser.add_argument(
        "--port", type=int, default=int(os.getenv("APP_PORT", "8000")),
        help="Port to listen on (default: 8000 or APP_PORT env var)",
    )
    parser.add_argument(
        "--db", type=Path, default=None,
        help="Path to SQLite database (default: advocates.sqlite or APP_DB_PATH env var)",
    )
    parser.add_argument(
        "--seed", action="store_true",
        help="Rebuild the database with generated sample advocates before starting",
    )
    parser.add_argument(
        "--reload", action="store_true",
        help="Enable auto-reload on file changes (development mode)",
    )
    parser.add_argument(
        "--no-browser", action="store_true",
        help="Don't open a browser window automatically",
    )
    args = parser.parse_args()

    # Set DB path env var if provided via CLI
    if args.db is not None:
        os.environ["APP_DB_PATH"] = str(args.db)

    db_path = Path(os.getenv("APP_DB_PATH", "advocates.sqlite"))

    if args.seed:
        from build_advocates_db import build_database
        from utils.config import AppConfig
        counts = build_database(db_path, AppConfig.from_env().seed_count)
        print(f"Seeded {counts['advocates']:,} advocates into {db_path}")

    if not db_path.exists():
        print(f"Warning: Database not found at {db_path}")
        print("  Run 'python build_advocates_db.py' or 'python main.py --seed' first,")
        print("  or pass --db /path/to/your/database.sqlite")
        print()

    try:
        import uvicorn
    except ImportError:
        print("Error: uvicorn is not installed.")
        print("  pip install uvicorn[standard]")
        sys.exit(1)

    url = f"http://{'localhost' if args.host == '0.0.0.0' else args.host}:{args.port}"
    print(f"Starting Advocate Directory at {url}")
    print(f"Database: {db_path}")
    print()

    if not args.no_browser:
        # Open browser after a short delay to let the server start
        import threading
        threading.Timer(1.5, webbrowser.open, args=(url,)).start()

    uvicorn.run(
        "api.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level="info",
    )


if __name__ == "__main__":
    main()
