"""
GET /api/v1/advocates endpoint.

Supports free-text search, city/degree/specialty/experience filters,
sorting and page-number pagination for infinite scroll.  Also handles the
GET /api/v1/advocates/{id} single-item endpoint.

Malformed parameters never produce a 4xx: every value is received as a
string and coerced by utils.query.parse_filters().
"""

import logging
import sqlite3

from fastapi import APIRouter, Depends, HTTPException, Query

from api.database import get_db
from api.models import AdvocateListResponse, AdvocateOut
from utils.config import AppConfig
from utils.query import get_advocate, parse_filters, query_advocates

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/advocates", tags=["advocates"])

_cfg = AppConfig.from_env()


@router.get(
    "",
    response_model=AdvocateListResponse,
    response_model_exclude_unset=True,
    summary="List advocates",
)
def list_advocates(
    page: str | None = Query(None, description="1-based page number (default 1)"),
    limit: str | None = Query(None, description="Page size (default 20)"),
    search: str | None = Query(None, description="Substring match on name, city or specialty"),
    cities: list[str] | None = Query(None, description="Comma-joined city names"),
    degrees: list[str] | None = Query(None, description="Comma-joined degrees"),
    specialties: list[str] | None = Query(None, description="Comma-joined specialty names (any match)"),
    experienceRanges: list[str] | None = Query(
        None, description="Comma-joined ranges: 0-5, 6-10, 11-15, 16-20, 21+",
    ),
    sortBy: str | None = Query(
        None, description="lastName | firstName | city | degree | yearsOfExperience",
    ),
    sortOrder: str | None = Query(None, description="asc | desc"),
    conn: sqlite3.Connection = Depends(get_db),
) -> AdvocateListResponse:
    """Return one page of advocates matching the filters.

    ``total`` is computed on page 1 only; later pages report ``hasMore``
    from whether the page came back full.
    """
    filters = parse_filters(
        {
            "page": page, "limit": limit, "search": search,
            "cities": cities, "degrees": degrees, "specialties": specialties,
            "experienceRanges": experienceRanges,
            "sortBy": sortBy, "sortOrder": sortOrder,
        },
        default_limit=_cfg.page_size,
        max_limit=_cfg.max_page_size,
    )
    try:
        result = query_advocates(conn, filters)
    except sqlite3.Error:
        logger.exception("Advocate query failed")
        raise HTTPException(status_code=500, detail="Failed to fetch advocates")

    # nextPage is omitted on the last page; total is always sent, null after page 1.
    paging = {"next_page": result.next_page} if result.next_page is not None else {}
    return AdvocateListResponse(
        data=[AdvocateOut(**a) for a in result.data],
        has_more=result.has_more,
        total=result.total,
        **paging,
    )


@router.get(
    "/{advocate_id:int}",
    response_model=AdvocateOut,
    summary="Get single advocate",
)
def get_advocate_detail(
    advocate_id: int,
    conn: sqlite3.Connection = Depends(get_db),
) -> AdvocateOut:
    """Return a single advocate by ID."""
    try:
        advocate = get_advocate(conn, advocate_id)
    except sqlite3.Error:
        logger.exception("Advocate lookup failed for id=%s", advocate_id)
        raise HTTPException(status_code=500, detail="Failed to fetch advocate")
    if advocate is None:
        raise HTTPException(status_code=404, detail=f"Advocate {advocate_id} not found")
    return AdvocateOut(**advocate)
