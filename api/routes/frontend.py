"""
Frontend HTML routes.

Serves the Jinja2 templates for the advocate directory UI: a filter sidebar
plus an HTMX-driven infinite list in table or card layout.

Routes:
    GET /                           → index.html (filters + first page)
    GET /partials/advocates         → partials/rows.html (one page of rows)
    GET /partials/advocates/{id}    → partials/detail.html (detail panel)

Each rows partial ends in either a sentinel that requests the next page
when scrolled into view (hx-trigger="revealed"), an "All advocates loaded"
row, or an error row with a retry button.  Filter changes swap the whole
list, so pages from different filters are never mixed.
"""

import logging
import sqlite3
from typing import Any
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from api.database import get_db
from api.routes.filters import load_filter_options
from utils.columns import DEFAULT_COLUMNS, ColumnSpec, select_columns
from utils.config import AppConfig, KnownValues
from utils.query import (
    SORT_COLUMNS,
    AdvocateFilters,
    get_advocate,
    parse_filters,
    query_advocates,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["frontend"])

_cfg = AppConfig.from_env()

VIEWS = ("table", "cards")

# Templates instance is set by create_app() after mounting.
_templates: Jinja2Templates | None = None


def set_templates(t: Jinja2Templates) -> None:
    global _templates
    _templates = t


def _tmpl() -> Jinja2Templates:
    if _templates is None:
        raise RuntimeError("Templates not initialised; call set_templates() first")
    return _templates


def _parse_view(request: Request) -> str:
    view = request.query_params.get("view", "table")
    return view if view in VIEWS else "table"


def _rows_url(filters: AdvocateFilters, page: int, view: str,
              columns: list[ColumnSpec]) -> str:
    params = list(filters.to_query_params(page=page).items())
    params.append(("view", view))
    if [c.key for c in columns] != [c.key for c in DEFAULT_COLUMNS]:
        params.extend(("columns", c.key) for c in columns)
    return "/partials/advocates?" + urlencode(params)


def _page_context(
    request: Request,
    conn: sqlite3.Connection,
) -> dict[str, Any]:
    """Query one page and build the rows-partial context."""
    filters = parse_filters(
        request.query_params,
        default_limit=_cfg.page_size,
        max_limit=_cfg.max_page_size,
    )
    view = _parse_view(request)
    columns = select_columns(request.query_params.getlist("columns"), DEFAULT_COLUMNS)
    context: dict[str, Any] = {
        "filters": filters,
        "view": view,
        "columns": columns,
        "advocates": [],
        "page": filters.page,
        "total": None,
        "has_more": False,
        "next_url": None,
        "error": None,
        "retry_url": _rows_url(filters, filters.page, view, columns),
    }
    try:
        result = query_advocates(conn, filters)
    except sqlite3.Error:
        logger.exception("Advocate query failed (page %d)", filters.page)
        context["error"] = "Failed to fetch advocates"
        return context

    context.update(
        advocates=result.data,
        total=result.total,
        has_more=result.has_more,
        next_url=(
            _rows_url(filters, result.next_page, view, columns)
            if result.next_page is not None else None
        ),
    )
    return context


# ── Routes ────────────────────────────────────────────────────────────────────

@router.get("/", response_class=HTMLResponse, include_in_schema=False)
def index(request: Request, conn: sqlite3.Connection = Depends(get_db)) -> HTMLResponse:
    """Directory page: filter sidebar and the first page of results."""
    try:
        options = load_filter_options(conn)
    except sqlite3.Error:
        logger.exception("Filter options query failed")
        options = {"cities": [], "degrees": [], "specialties": []}

    return _tmpl().TemplateResponse(
        request,
        "index.html",
        {
            "options": options,
            "experience_ranges": list(KnownValues.EXPERIENCE_RANGES),
            "sort_fields": list(SORT_COLUMNS),
            **_page_context(request, conn),
        },
    )


@router.get("/partials/advocates", response_class=HTMLResponse, include_in_schema=False)
def advocates_partial(
    request: Request,
    conn: sqlite3.Connection = Depends(get_db),
) -> HTMLResponse:
    """HTMX partial: one page of rows plus the sentinel/terminal row.

    Page 1 renders the whole list (summary, headers, rows) so a filter
    change replaces everything; later pages render bare rows that replace
    the previous sentinel.
    """
    context = _page_context(request, conn)
    template = "partials/list.html" if context["page"] == 1 else "partials/rows.html"
    return _tmpl().TemplateResponse(request, template, context)


@router.get(
    "/partials/advocates/{advocate_id:int}",
    response_class=HTMLResponse,
    include_in_schema=False,
)
def advocate_detail_partial(
    advocate_id: int,
    request: Request,
    conn: sqlite3.Connection = Depends(get_db),
) -> HTMLResponse:
    """HTMX partial: detail panel for a single advocate."""
    advocate = get_advocate(conn, advocate_id)
    if advocate is None:
        raise HTTPException(status_code=404, detail=f"Advocate {advocate_id} not found")

    return _tmpl().TemplateResponse(
        request,
        "partials/detail.html",
        {"advocate": advocate, "columns": DEFAULT_COLUMNS},
    )
