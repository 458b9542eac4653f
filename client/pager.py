"""Infinite-query page cache for the advocate listing.

AdvocatePager keeps the pages fetched for the current FilterKey and hands
out their flattened concatenation.  Guarantees:

- Changing the key drops all pages and restarts from page 1.
- At most one page fetch is in flight; extra calls are ignored, so pages
  are always appended in request order.
- A fetch that finishes after the key changed is discarded.
- A failed fetch is recorded as ``error``; earlier pages stay available.

The fetch itself runs outside the lock so other threads (a scroll handler,
a filter change) can observe the in-flight state while it runs.
"""

import logging
import threading
from collections.abc import Callable
from typing import Any

from client.models import FilterKey, PageResult

logger = logging.getLogger(__name__)

PageFetcher = Callable[[FilterKey, int], PageResult]


class AdvocatePager:
    """Page cache keyed by FilterKey.

    Args:
        fetch_page: Callable ``(key, page) -> PageResult``; usually
            ``AdvocatesClient.fetch_page``.
        key: Initial filter key (defaults to no filters, default sort).
    """

    def __init__(self, fetch_page: PageFetcher, key: FilterKey | None = None) -> None:
        self._fetch_page = fetch_page
        self._lock = threading.Lock()
        self._key = key if key is not None else FilterKey()
        self._generation = 0
        self._pages: list[PageResult] = []
        self._in_flight = False
        self._error: Exception | None = None
        self._total: int | None = None

    # ── State ────────────────────────────────────────────────────────────────

    @property
    def key(self) -> FilterKey:
        return self._key

    @property
    def pages(self) -> list[PageResult]:
        with self._lock:
            return list(self._pages)

    @property
    def items(self) -> list[dict[str, Any]]:
        """All fetched advocates, page 1 first."""
        with self._lock:
            return [item for page in self._pages for item in page.data]

    @property
    def total(self) -> int | None:
        """Match count reported with page 1."""
        return self._total

    @property
    def error(self) -> Exception | None:
        return self._error

    @property
    def has_more(self) -> bool:
        with self._lock:
            return self._has_more()

    @property
    def is_fetching(self) -> bool:
        return self._in_flight

    @property
    def is_loading(self) -> bool:
        """True while the first page of the current key is in flight."""
        with self._lock:
            return self._in_flight and not self._pages

    @property
    def is_fetching_next_page(self) -> bool:
        with self._lock:
            return self._in_flight and bool(self._pages)

    def _has_more(self) -> bool:
        if not self._pages:
            return True
        return self._pages[-1].has_more

    # ── Actions ──────────────────────────────────────────────────────────────

    def set_key(self, key: FilterKey) -> bool:
        """Switch to *key*; returns False when the key is unchanged."""
        with self._lock:
            if key == self._key:
                return False
            self._key = key
            self._reset()
        logger.debug("Filter key changed; pagination restarted")
        return True

    def refresh(self) -> None:
        """Drop all pages for the current key (next fetch is page 1)."""
        with self._lock:
            self._reset()

    def _reset(self) -> None:
        self._generation += 1
        self._pages = []
        self._in_flight = False
        self._error = None
        self._total = None

    def fetch_next_page(self) -> bool:
        """Fetch and append the next page.

        Returns:
            True if a page was appended.  False if nothing was fetched
            (no more pages, a fetch already in flight), the fetch failed,
            or its result was stale.
        """
        with self._lock:
            if self._in_flight or not self._has_more():
                return False
            self._in_flight = True
            self._error = None
            generation = self._generation
            key = self._key
            page = len(self._pages) + 1

        try:
            result = self._fetch_page(key, page)
        except Exception as exc:
            with self._lock:
                if generation != self._generation:
                    return False
                self._in_flight = False
                self._error = exc
            logger.warning("Fetching page %d failed: %s", page, exc)
            return False

        with self._lock:
            if generation != self._generation:
                logger.debug("Discarding stale page %d", page)
                return False
            self._in_flight = False
            self._pages.append(result)
            if page == 1:
                self._total = result.total
        return True

    def retry(self) -> bool:
        """Re-attempt the page that failed; no-op without an error."""
        if self._error is None:
            return False
        return self.fetch_next_page()
