"""
Filter option endpoint.

GET /api/v1/advocates/filters → distinct cities, degrees and specialties

The options describe the whole dataset, not the current result set, so they
are cached per database path and dropped by clear_filter_cache() whenever
the data is reseeded.
"""

import logging
import sqlite3

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from api.database import get_db, get_db_path
from api.models import FilterOptionsOut
from utils.cache import TTLCache
from utils.config import AppConfig
from utils.query import get_filter_options

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/advocates", tags=["advocates"])

_cfg = AppConfig.from_env()

_CACHE_HEADER = {"Cache-Control": f"public, max-age={_cfg.filter_cache_ttl}"}

_filter_cache: TTLCache = TTLCache(maxsize=8, ttl_seconds=_cfg.filter_cache_ttl)


def clear_filter_cache() -> None:
    """Forget cached filter options (called after a reseed)."""
    _filter_cache.clear()


def load_filter_options(conn: sqlite3.Connection) -> dict[str, list[str]]:
    """Return filter options for the configured database, cached."""
    return _filter_cache.get_or_load(
        str(get_db_path()), lambda: get_filter_options(conn)
    )


@router.get(
    "/filters",
    response_model=FilterOptionsOut,
    summary="List filter options",
)
def list_filter_options(conn: sqlite3.Connection = Depends(get_db)) -> JSONResponse:
    """Return every city, degree and specialty present in the directory."""
    try:
        data = load_filter_options(conn)
    except sqlite3.Error:
        logger.exception("Filter options query failed")
        raise HTTPException(status_code=500, detail="Failed to fetch filter options")
    return JSONResponse(content=data, headers=_CACHE_HEADER)
