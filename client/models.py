"""Client-side value types for the advocate listing."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from utils.query import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_SORT_BY,
    DEFAULT_SORT_ORDER,
    AdvocateFilters,
)


@dataclass(frozen=True)
class FilterKey:
    """Everything that selects a page sequence, minus the page itself.

    Two keys that compare equal share one page sequence; any difference
    restarts pagination from page 1.
    """
    search: str = ""
    cities: tuple[str, ...] = ()
    degrees: tuple[str, ...] = ()
    specialties: tuple[str, ...] = ()
    experience_ranges: tuple[str, ...] = ()
    sort_by: str = DEFAULT_SORT_BY
    sort_order: str = DEFAULT_SORT_ORDER

    @classmethod
    def from_filters(cls, filters: AdvocateFilters) -> FilterKey:
        return cls(
            search=filters.search,
            cities=filters.cities,
            degrees=filters.degrees,
            specialties=filters.specialties,
            experience_ranges=filters.experience_ranges,
            sort_by=filters.sort_by,
            sort_order=filters.sort_order,
        )

    def to_query_params(self, page: int, limit: int = DEFAULT_PAGE_SIZE) -> dict[str, str]:
        """Query string for *page* of this key's sequence."""
        return AdvocateFilters(
            search=self.search.strip(),
            cities=self.cities,
            degrees=self.degrees,
            specialties=self.specialties,
            experience_ranges=self.experience_ranges,
            sort_by=self.sort_by,
            sort_order=self.sort_order,
            page=page,
            limit=limit,
        ).to_query_params()


@dataclass
class PageResult:
    """One decoded ``GET /api/v1/advocates`` response."""
    data: list[dict[str, Any]] = field(default_factory=list)
    has_more: bool = False
    next_page: int | None = None
    total: int | None = None

    @classmethod
    def from_json(cls, body: dict[str, Any]) -> PageResult:
        return cls(
            data=list(body.get("data") or []),
            has_more=bool(body.get("hasMore", False)),
            next_page=body.get("nextPage"),
            total=body.get("total"),
        )


@dataclass(frozen=True)
class FilterOptions:
    cities: tuple[str, ...] = ()
    degrees: tuple[str, ...] = ()
    specialties: tuple[str, ...] = ()

    @classmethod
    def from_json(cls, body: dict[str, Any]) -> FilterOptions:
        return cls(
            cities=tuple(body.get("cities") or ()),
            degrees=tuple(body.get("degrees") or ()),
            specialties=tuple(body.get("specialties") or ()),
        )
