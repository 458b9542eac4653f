"""Windowed rendering model for an infinitely scrolling advocate list.

Only the rows inside the viewport (plus ``overscan`` rows on each side) are
materialized.  When the last materialized row reaches the end of the loaded
rows, the next page is requested from the pager; while it is in flight,
placeholder rows are appended.  Once the pager reports no more pages the
plan carries ``all_loaded`` so the UI can show its terminal row.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from client.pager import AdvocatePager
from utils.columns import DEFAULT_COLUMNS, ColumnSpec

ROW_HEIGHT = 53
OVERSCAN = 10
PLACEHOLDER_ROWS = 5


@dataclass
class VirtualRow:
    index: int
    top: int
    key: int | None = None
    cells: list[str] = field(default_factory=list)
    advocate: dict[str, Any] | None = None

    @property
    def placeholder(self) -> bool:
        return self.advocate is None


@dataclass
class RenderPlan:
    rows: list[VirtualRow]
    total_height: int
    loaded_count: int
    all_loaded: bool = False
    error: str | None = None
    requested_more: bool = False

    @property
    def placeholder_count(self) -> int:
        return sum(1 for r in self.rows if r.placeholder)


class InfiniteList:
    """Render plans for a pager's rows.

    Args:
        pager: Source of the flattened rows and paging state.
        columns: Column configuration used to produce each row's cells.
        row_height: Estimated row height in pixels.
        overscan: Extra rows rendered above and below the viewport.
        placeholder_rows: Skeleton rows shown while a page is in flight.
    """

    def __init__(self, pager: AdvocatePager,
                 columns: Sequence[ColumnSpec] = DEFAULT_COLUMNS,
                 row_height: int = ROW_HEIGHT,
                 overscan: int = OVERSCAN,
                 placeholder_rows: int = PLACEHOLDER_ROWS) -> None:
        if row_height <= 0:
            raise ValueError("row_height must be positive")
        self.pager = pager
        self.columns = list(columns)
        self.row_height = row_height
        self.overscan = max(0, overscan)
        self.placeholder_rows = max(0, placeholder_rows)

    @property
    def headers(self) -> list[str]:
        return [c.label for c in self.columns]

    def visible_range(self, count: int, scroll_top: float,
                      viewport_height: float) -> tuple[int, int]:
        """Half-open index range ``[start, end)`` to materialize."""
        if count <= 0:
            return 0, 0
        scroll_top = max(0.0, scroll_top)
        first = int(scroll_top // self.row_height)
        last = math.ceil((scroll_top + max(0.0, viewport_height)) / self.row_height)
        start = max(0, first - self.overscan)
        end = min(count, last + self.overscan)
        return min(start, end), end

    def render(self, scroll_top: float, viewport_height: float) -> RenderPlan:
        """Build the plan for the current scroll position without side effects."""
        items = self.pager.items
        loaded = len(items)
        pending = self.placeholder_rows if self.pager.is_fetching else 0
        count = loaded + pending

        start, end = self.visible_range(count, scroll_top, viewport_height)
        rows: list[VirtualRow] = []
        for index in range(start, end):
            top = index * self.row_height
            if index < loaded:
                advocate = items[index]
                rows.append(VirtualRow(
                    index=index,
                    top=top,
                    key=advocate["id"],
                    cells=[c.cell(advocate) for c in self.columns],
                    advocate=advocate,
                ))
            else:
                rows.append(VirtualRow(index=index, top=top))

        error = self.pager.error
        return RenderPlan(
            rows=rows,
            total_height=count * self.row_height,
            loaded_count=loaded,
            all_loaded=loaded > 0 and not self.pager.has_more,
            error=str(error) if error is not None else None,
        )

    def should_load_more(self, plan: RenderPlan) -> bool:
        """True when the viewport reached the end of the loaded rows."""
        if self.pager.is_fetching or not self.pager.has_more:
            return False
        if plan.error is not None:
            return False
        last_index = plan.rows[-1].index if plan.rows else -1
        return last_index >= plan.loaded_count - 1

    def on_scroll(self, scroll_top: float, viewport_height: float) -> RenderPlan:
        """Render, then request the next page if the end is in view."""
        plan = self.render(scroll_top, viewport_height)
        if self.should_load_more(plan):
            plan.requested_more = True
            self.pager.fetch_next_page()
        return plan
