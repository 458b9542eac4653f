"""Shared SQL query builder for the advocate listing.

Turns query-string filters into one parameterized SELECT (joins, GROUP BY
aggregation of specialty names, deterministic ORDER BY, LIMIT/OFFSET) and one
COUNT query.  Used by api/routes/advocates.py, api/routes/frontend.py and
search_advocates.py.

Values are always bound as ``?`` parameters.  Column names only ever come
from the SORT_COLUMNS lookup table, never from user input.
"""

import sqlite3
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from utils.config import KnownValues
from utils.formatting import format_phone_number, initials
from utils.strings import (
    escape_like,
    normalize_whitespace,
    safe_positive_int,
    split_csv_values,
)

DEFAULT_SORT_BY = "lastName"
DEFAULT_SORT_ORDER = "asc"
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

# Sort field -> SQL column.  Unknown fields fall back to DEFAULT_SORT_BY.
SORT_COLUMNS: dict[str, str] = {
    "lastName": "a.last_name",
    "firstName": "a.first_name",
    "city": "a.city",
    "degree": "a.degree",
    "yearsOfExperience": "a.years_of_experience",
}

SORT_ORDERS = {"asc": "ASC", "desc": "DESC"}

# Largest value SQLite can bind as an INTEGER (LIMIT, OFFSET, id).
SQLITE_MAX_INT = 2**63 - 1

EXPERIENCE_RANGES = KnownValues.EXPERIENCE_RANGES

# GROUP_CONCAT separator: char(31), the ASCII unit separator.
_SPECIALTY_SEP = "\x1f"

_SELECT_COLUMNS = """
    a.id, a.first_name, a.last_name, a.city, a.degree,
    a.years_of_experience, a.phone_number, a.created_at,
    GROUP_CONCAT(sp.name, char(31)) AS specialty_names
"""

_SPECIALTY_EXISTS = (
    "EXISTS (SELECT 1 FROM advocate_specialties fas "
    "JOIN specialties fsp ON fsp.id = fas.specialty_id "
    "WHERE fas.advocate_id = a.id AND {condition})"
)


@dataclass(frozen=True)
class AdvocateFilters:
    """Normalized listing request: filters, sort and page."""
    search: str = ""
    cities: tuple[str, ...] = ()
    degrees: tuple[str, ...] = ()
    specialties: tuple[str, ...] = ()
    experience_ranges: tuple[str, ...] = ()
    sort_by: str = DEFAULT_SORT_BY
    sort_order: str = DEFAULT_SORT_ORDER
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def to_query_params(self, page: int | None = None) -> dict[str, str]:
        """Serialize back to the comma-joined query-string form.

        Empty filters are omitted so the resulting URL stays short.
        """
        params: dict[str, str] = {}
        if self.search:
            params["search"] = self.search
        for key, values in (
            ("cities", self.cities),
            ("degrees", self.degrees),
            ("specialties", self.specialties),
            ("experienceRanges", self.experience_ranges),
        ):
            if values:
                params[key] = ",".join(values)
        params["sortBy"] = self.sort_by
        params["sortOrder"] = self.sort_order
        params["page"] = str(page if page is not None else self.page)
        params["limit"] = str(self.limit)
        return params


@dataclass
class AdvocatePage:
    """One page of listing results plus continuation info."""
    data: list[dict[str, Any]] = field(default_factory=list)
    page: int = 1
    has_more: bool = False
    total: int | None = None

    @property
    def next_page(self) -> int | None:
        return self.page + 1 if self.has_more else None


def _get_param(params: Mapping, key: str) -> Any:
    """Fetch a raw value, collecting repeated keys when supported."""
    getlist = getattr(params, "getlist", None)
    if getlist is not None:
        values = getlist(key)
        if not values:
            return None
        return values if len(values) > 1 else values[0]
    return params.get(key)


def _get_scalar(params: Mapping, key: str) -> str | None:
    """Fetch a single string value; the first one wins when repeated."""
    value = _get_param(params, key)
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if value is None or isinstance(value, bool):
        return None
    return str(value)


def parse_filters(
    params: Mapping,
    default_limit: int = DEFAULT_PAGE_SIZE,
    max_limit: int = MAX_PAGE_SIZE,
) -> AdvocateFilters:
    """Coerce raw query parameters into AdvocateFilters.

    Malformed values are silently replaced by defaults; this never raises.
    A page whose offset would not fit in a SQLite INTEGER restarts at 1.

    Args:
        params: Mapping of query parameters.  Starlette's QueryParams and
            other multi-dicts with getlist() may repeat list keys.
        default_limit: Page size used when ``limit`` is missing or invalid.
        max_limit: Upper bound applied to ``limit``.

    Returns:
        AdvocateFilters with normalized values.
    """
    search = normalize_whitespace(_get_scalar(params, "search") or "")

    sort_by = _get_scalar(params, "sortBy")
    if sort_by not in SORT_COLUMNS:
        sort_by = DEFAULT_SORT_BY
    sort_order = (_get_scalar(params, "sortOrder") or "").lower()
    if sort_order not in SORT_ORDERS:
        sort_order = DEFAULT_SORT_ORDER

    experience = [
        label for label in split_csv_values(_get_param(params, "experienceRanges"))
        if label in EXPERIENCE_RANGES
    ]

    limit = min(safe_positive_int(_get_scalar(params, "limit"), default_limit),
                max_limit)

    page = safe_positive_int(_get_scalar(params, "page"), 1)
    if (page - 1) * limit > SQLITE_MAX_INT:
        page = 1

    return AdvocateFilters(
        search=search,
        cities=tuple(split_csv_values(_get_param(params, "cities"))),
        degrees=tuple(split_csv_values(_get_param(params, "degrees"))),
        specialties=tuple(split_csv_values(_get_param(params, "specialties"))),
        experience_ranges=tuple(experience),
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )


def _in_clause(column: str, values: tuple[str, ...] | list[str]) -> str:
    placeholders = ",".join("?" * len(values))
    return f"{column} IN ({placeholders})"


def build_where_clause(filters: AdvocateFilters) -> tuple[str, list[Any]]:
    """Build a SQL WHERE clause from listing filters.

    Categories are AND'ed together; values within one category are OR'ed.
    Search compares with the SQL function ``casefold`` registered by
    utils.database.register_functions(), so non-ASCII names match
    case-insensitively.

    Returns:
        Tuple of (where_clause_string, params_list). The where_clause_string
        starts with "WHERE " if any conditions exist, or is "" if none.
    """
    conditions: list[str] = []
    params: list[Any] = []

    if filters.search:
        pattern = f"%{escape_like(filters.search.casefold())}%"
        like = "LIKE ? ESCAPE '\\'"
        conditions.append(
            "("
            f"casefold(a.first_name) {like} OR "
            f"casefold(a.last_name) {like} OR "
            f"casefold(a.city) {like} OR "
            + _SPECIALTY_EXISTS.format(condition=f"casefold(fsp.name) {like}")
            + ")"
        )
        params.extend([pattern] * 4)

    if filters.cities:
        conditions.append(_in_clause("a.city", filters.cities))
        params.extend(filters.cities)

    if filters.degrees:
        conditions.append(_in_clause("a.degree", filters.degrees))
        params.extend(filters.degrees)

    if filters.specialties:
        conditions.append(_SPECIALTY_EXISTS.format(
            condition=_in_clause("fsp.name", filters.specialties)
        ))
        params.extend(filters.specialties)

    ranges: list[str] = []
    for label in filters.experience_ranges:
        bounds = EXPERIENCE_RANGES.get(label)
        if bounds is None:
            continue
        low, high = bounds
        if high is None:
            ranges.append("a.years_of_experience >= ?")
            params.append(low)
        else:
            ranges.append("a.years_of_experience BETWEEN ? AND ?")
            params.extend([low, high])
    if ranges:
        conditions.append("(" + " OR ".join(ranges) + ")")

    where = "WHERE " + " AND ".join(conditions) if conditions else ""
    return where, params


def build_order_clause(sort_by: str, sort_order: str) -> str:
    """Build a deterministic ORDER BY clause.

    Unknown fields/directions fall back to the defaults.  ``a.id ASC`` is
    always appended so rows with equal sort keys keep a stable order
    between page fetches.

    Returns:
        ORDER BY clause string, e.g. "ORDER BY a.last_name DESC, a.id ASC".
    """
    column = SORT_COLUMNS.get(sort_by, SORT_COLUMNS[DEFAULT_SORT_BY])
    direction = SORT_ORDERS.get(str(sort_order).lower(), "ASC")
    return f"ORDER BY {column} {direction}, a.id ASC"


def build_list_query(filters: AdvocateFilters) -> tuple[str, list[Any]]:
    """Build the page SELECT with specialty aggregation.

    Returns:
        Tuple of (sql, params) including LIMIT/OFFSET parameters.
    """
    where, params = build_where_clause(filters)
    order = build_order_clause(filters.sort_by, filters.sort_order)
    sql = (
        f"SELECT {_SELECT_COLUMNS} "
        "FROM advocates a "
        "LEFT JOIN advocate_specialties s ON s.advocate_id = a.id "
        "LEFT JOIN specialties sp ON sp.id = s.specialty_id "
        f"{where} "
        "GROUP BY a.id "
        f"{order} "
        "LIMIT ? OFFSET ?"
    )
    return sql, params + [filters.limit, filters.offset]


def build_count_query(filters: AdvocateFilters) -> tuple[str, list[Any]]:
    """Build the COUNT(*) query sharing the listing's WHERE clause."""
    where, params = build_where_clause(filters)
    return f"SELECT COUNT(*) FROM advocates a {where}", params


def row_to_advocate(row: Mapping) -> dict[str, Any]:
    """Convert a listing row into the API's camelCase advocate record."""
    raw_names = row["specialty_names"]
    specialties = sorted(set(raw_names.split(_SPECIALTY_SEP))) if raw_names else []
    phone = row["phone_number"]
    return {
        "id": row["id"],
        "firstName": row["first_name"],
        "lastName": row["last_name"],
        "city": row["city"],
        "degree": row["degree"],
        "yearsOfExperience": row["years_of_experience"],
        "phoneNumber": str(phone) if phone is not None else "",
        "createdAt": row["created_at"],
        "specialties": specialties,
        "initials": initials(row["first_name"], row["last_name"]),
        "formattedPhoneNumber": format_phone_number(phone),
    }


def query_advocates(conn: sqlite3.Connection, filters: AdvocateFilters) -> AdvocatePage:
    """Run the listing query for one page.

    The exact match count is only computed on page 1; later pages infer
    continuation from whether the page came back full.

    Args:
        conn: SQLite connection with ``row_factory = sqlite3.Row``.
        filters: Normalized listing request.

    Returns:
        AdvocatePage with data rows de-duplicated by id.
    """
    sql, params = build_list_query(filters)
    rows = conn.execute(sql, params).fetchall()

    data: list[dict[str, Any]] = []
    seen: set[int] = set()
    for row in rows:
        if row["id"] in seen:
            continue
        seen.add(row["id"])
        data.append(row_to_advocate(row))

    if filters.page == 1:
        count_sql, count_params = build_count_query(filters)
        total = conn.execute(count_sql, count_params).fetchone()[0]
        has_more = filters.offset + len(data) < total
    else:
        total = None
        has_more = len(data) == filters.limit

    return AdvocatePage(data=data, page=filters.page, has_more=has_more, total=total)


def get_advocate(conn: sqlite3.Connection, advocate_id: int) -> dict[str, Any] | None:
    """Return a single advocate record by id, or None."""
    if advocate_id > SQLITE_MAX_INT:
        return None
    row = conn.execute(
        f"SELECT {_SELECT_COLUMNS} "
        "FROM advocates a "
        "LEFT JOIN advocate_specialties s ON s.advocate_id = a.id "
        "LEFT JOIN specialties sp ON sp.id = s.specialty_id "
        "WHERE a.id = ? GROUP BY a.id",
        (advocate_id,),
    ).fetchone()
    return row_to_advocate(row) if row is not None else None


def get_filter_options(conn: sqlite3.Connection) -> dict[str, list[str]]:
    """Return sorted distinct cities, degrees and specialty names.

    Always reflects the full, unfiltered dataset.
    """
    cities = conn.execute(
        "SELECT DISTINCT city FROM advocates ORDER BY city"
    ).fetchall()
    degrees = conn.execute(
        "SELECT DISTINCT degree FROM advocates ORDER BY degree"
    ).fetchall()
    specialties = conn.execute(
        "SELECT name FROM specialties ORDER BY name"
    ).fetchall()
    return {
        "cities": [r[0] for r in cities],
        "degrees": [r[0] for r in degrees],
        "specialties": [r[0] for r in specialties],
    }
