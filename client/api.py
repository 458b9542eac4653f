"""HTTP client for the advocate directory API.

Usage::

    with AdvocatesClient("http://localhost:8000") as client:
        pager = AdvocatePager(client.fetch_page)
        pager.fetch_next_page()
"""

import logging
from typing import Optional

import requests

from client.models import FilterKey, FilterOptions, PageResult
from utils.cache import TTLCache
from utils.http import SessionManager
from utils.query import DEFAULT_PAGE_SIZE

logger = logging.getLogger(__name__)

# Filter options rarely change; treat them as fresh for five minutes.
FILTER_OPTIONS_STALE_SECONDS = 300


class AdvocatesClientError(Exception):
    """A page or filter-options request failed (network, HTTP or decode)."""


class AdvocatesClient:
    """Thin wrapper over the list and filter-options endpoints."""

    def __init__(self, base_url: str, page_size: int = DEFAULT_PAGE_SIZE,
                 session_manager: Optional[SessionManager] = None,
                 options_stale_seconds: float = FILTER_OPTIONS_STALE_SECONDS):
        self.base_url = base_url.rstrip("/")
        self.page_size = page_size
        self._sessions = session_manager or SessionManager()
        self._options_cache = TTLCache(maxsize=1, ttl_seconds=options_stale_seconds)

    def _get(self, path: str, params: Optional[dict] = None) -> dict:
        url = f"{self.base_url}{path}"
        try:
            return self._sessions.get_json(url, params=params)
        except (requests.RequestException, ValueError) as exc:
            logger.warning("GET %s failed: %s", url, exc)
            raise AdvocatesClientError(f"Failed to fetch {path}: {exc}") from exc

    def fetch_page(self, key: FilterKey, page: int) -> PageResult:
        """Fetch one page of advocates for *key*."""
        body = self._get(
            "/api/v1/advocates",
            params=key.to_query_params(page, self.page_size),
        )
        return PageResult.from_json(body)

    def fetch_filter_options(self) -> FilterOptions:
        """Return the filter option lists, cached for the stale time."""
        return self._options_cache.get_or_load(
            "filter-options",
            lambda: FilterOptions.from_json(self._get("/api/v1/advocates/filters")),
        )

    def close(self) -> None:
        self._sessions.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
