"""
Maintenance endpoint: POST /api/v1/seed.

Deletes every advocate, specialty and join row and reinserts a freshly
generated set in one transaction.  Only one reseed may run at a time;
a second caller gets 409 instead of waiting.
"""

import logging
import sqlite3

from fastapi import APIRouter, Depends, HTTPException

from api.database import get_write_db
from api.models import SeedResponse
from api.routes.filters import clear_filter_cache
from utils.config import AppConfig
from utils.seed import RESEED_LOCK, reseed_database

logger = logging.getLogger(__name__)

router = APIRouter(tags=["maintenance"])

_cfg = AppConfig.from_env()


@router.post(
    "/seed",
    response_model=SeedResponse,
    summary="Reseed the directory",
    responses={409: {"description": "A reseed is already running"}},
)
def reseed(conn: sqlite3.Connection = Depends(get_write_db)) -> SeedResponse:
    """Replace all directory rows with generated sample data."""
    if not RESEED_LOCK.acquire(blocking=False):
        raise HTTPException(status_code=409, detail="Reseed already in progress")
    try:
        counts = reseed_database(conn, _cfg.seed_count)
    except sqlite3.Error:
        logger.exception("Reseed failed")
        raise HTTPException(status_code=500, detail="Failed to reseed database")
    finally:
        RESEED_LOCK.release()

    logger.info("Reseeded %d advocates", counts["advocates"])
    clear_filter_cache()
    return SeedResponse(**counts)
