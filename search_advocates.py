"""
Advocate Directory Search Tool

Command-line view of the directory.  Reads the local SQLite database by
default, or a running API server with --url (pages are fetched through the
same pager/infinite-list model the UI uses).

Usage:
    python search_advocates.py                          # first page, default sort
    python search_advocates.py --search bipolar
    python search_advocates.py --city Austin --city Denver --sort-by yearsOfExperience
    python search_advocates.py --experience 21+ --order desc --limit 50
    python search_advocates.py --url http://localhost:8000 --all
    python search_advocates.py --options                # list filter values
"""

import argparse
import sys
from pathlib import Path

from client.api import AdvocatesClient, AdvocatesClientError
from client.infinite_list import InfiniteList
from client.models import FilterKey
from client.pager import AdvocatePager
from utils.columns import COMPACT_COLUMNS, DEFAULT_COLUMNS, ColumnSpec
from utils.config import AppConfig
from utils.database import connect
from utils.formatting import TableFormatter, format_count, truncate_text
from utils.query import (
    SORT_COLUMNS,
    get_filter_options,
    parse_filters,
    query_advocates,
)

_cfg = AppConfig.from_env()

CELL_WIDTH = 48


def _render_table(advocates: list[dict], columns: list[ColumnSpec]) -> str:
    table = TableFormatter(["ID"] + [c.label for c in columns])
    for advocate in advocates:
        table.add_row(
            [advocate["id"]]
            + [truncate_text(c.cell(advocate), CELL_WIDTH) for c in columns]
        )
    return table.to_string()


def _query_params(args: argparse.Namespace) -> dict:
    return {
        "search": args.search,
        "cities": args.city,
        "degrees": args.degree,
        "specialties": args.specialty,
        "experienceRanges": args.experience,
        "sortBy": args.sort_by,
        "sortOrder": args.order,
        "page": args.page,
        "limit": args.limit,
    }


def show_options(options: dict) -> None:
    """Print every city, degree and specialty."""
    for label, values in (("Cities", options["cities"]),
                          ("Degrees", options["degrees"]),
                          ("Specialties", options["specialties"])):
        print(f"\n  {label} ({len(values)})")
        print(f"  {'-' * 40}")
        for value in values:
            print(f"    {value}")


def search_local(db_path: Path, args: argparse.Namespace,
                 columns: list[ColumnSpec]) -> None:
    """Query the local database for a single page and print it."""
    filters = parse_filters(_query_params(args), default_limit=_cfg.page_size,
                            max_limit=_cfg.max_page_size)
    conn = connect(db_path)
    try:
        result = query_advocates(conn, filters)
    finally:
        conn.close()

    if not result.data:
        print("\n  No advocates match these filters.")
        return
    print()
    print(_render_table(result.data, columns))
    print()
    if result.total is not None:
        print(f"  {format_count(result.total)} matching advocates")
    if result.next_page is not None:
        print(f"  More results: --page {result.next_page}")
    else:
        print("  All advocates loaded")


def search_remote(base_url: str, args: argparse.Namespace,
                  columns: list[ColumnSpec]) -> None:
    """Walk pages from a running API server and print every loaded row."""
    filters = parse_filters(_query_params(args), default_limit=_cfg.page_size,
                            max_limit=_cfg.max_page_size)
    with AdvocatesClient(base_url, page_size=filters.limit) as client:
        pager = AdvocatePager(client.fetch_page, FilterKey.from_filters(filters))
        view = InfiniteList(pager, columns)
        pager.fetch_next_page()
        while args.all and pager.has_more and pager.error is None:
            # Scroll to the bottom of what is loaded to trigger the next page.
            loaded = len(pager.items)
            view.on_scroll(loaded * view.row_height, view.row_height)
            if len(pager.items) == loaded:
                break

        if pager.error is not None:
            print(f"ERROR: {pager.error}")
            if not pager.items:
                sys.exit(1)

        items = pager.items
        if not items:
            print("\n  No advocates match these filters.")
            return
        print()
        print(_render_table(items, view.columns))
        print()
        if pager.total is not None:
            print(f"  {format_count(len(items))} of {format_count(pager.total)} advocates loaded")
        if not pager.has_more:
            print("  All advocates loaded")


def main():
    parser = argparse.ArgumentParser(description="Search the advocate directory")
    parser.add_argument("--db", type=Path, default=_cfg.db_path,
                        help=f"Database path (default: {_cfg.db_path})")
    parser.add_argument("--url", default=None,
                        help="Query a running API server instead of the local database")
    parser.add_argument("--search", "-s", default=None,
                        help="Substring match on name, city or specialty")
    parser.add_argument("--city", action="append", default=None,
                        help="Filter by city (repeatable)")
    parser.add_argument("--degree", action="append", default=None,
                        help="Filter by degree (repeatable)")
    parser.add_argument("--specialty", action="append", default=None,
                        help="Filter by specialty name (repeatable)")
    parser.add_argument("--experience", action="append", default=None,
                        choices=["0-5", "6-10", "11-15", "16-20", "21+"],
                        help="Filter by years-of-experience range (repeatable)")
    parser.add_argument("--sort-by", default=None, choices=list(SORT_COLUMNS),
                        help="Sort field (default: lastName)")
    parser.add_argument("--order", default=None, choices=["asc", "desc"],
                        help="Sort order (default: asc)")
    parser.add_argument("--page", type=int, default=1, help="Page number (local mode)")
    parser.add_argument("--limit", type=int, default=None, help="Page size")
    parser.add_argument("--all", action="store_true",
                        help="Keep loading pages until the end (remote mode)")
    parser.add_argument("--compact", action="store_true",
                        help="Show name, city, degree and experience only")
    parser.add_argument("--options", action="store_true",
                        help="List available filter values and exit")
    args = parser.parse_args()

    columns = list(COMPACT_COLUMNS if args.compact else DEFAULT_COLUMNS)

    if args.url:
        try:
            if args.options:
                with AdvocatesClient(args.url) as client:
                    opts = client.fetch_filter_options()
                show_options({"cities": opts.cities, "degrees": opts.degrees,
                              "specialties": opts.specialties})
                return
            search_remote(args.url, args, columns)
        except AdvocatesClientError as exc:
            print(f"ERROR: {exc}")
            sys.exit(1)
        return

    if not args.db.exists():
        print(f"ERROR: Database not found: {args.db}")
        print("Run 'python build_advocates_db.py' first to build the database.")
        sys.exit(1)

    if args.options:
        conn = connect(args.db)
        try:
            show_options(get_filter_options(conn))
        finally:
            conn.close()
        return

    search_local(args.db, args, columns)


if __name__ == "__main__":
    main()
