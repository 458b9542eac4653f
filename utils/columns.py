"""Column configuration shared by every advocate list rendering.

The HTML table, the card layout, the command-line table and the client-side
InfiniteList all take a list of ColumnSpec instead of hard-coding fields, so
one rendering component serves every variant.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from utils.formatting import format_years, join_specialties


@dataclass(frozen=True)
class ColumnSpec:
    """One displayed column.

    Attributes:
        key: Stable identifier, also used as the CSS/data attribute.
        label: Header text.
        render: Callable turning an advocate record into cell text.
        sort_field: ``sortBy`` value when the column is sortable.
    """
    key: str
    label: str
    render: Callable[[dict[str, Any]], str]
    sort_field: str | None = None

    @property
    def sortable(self) -> bool:
        return self.sort_field is not None

    def cell(self, advocate: dict[str, Any]) -> str:
        return self.render(advocate)


DEFAULT_COLUMNS: tuple[ColumnSpec, ...] = (
    ColumnSpec(
        "name", "Name",
        lambda a: f"{a['firstName']} {a['lastName']}",
        sort_field="lastName",
    ),
    ColumnSpec("city", "City", lambda a: a["city"], sort_field="city"),
    ColumnSpec("degree", "Degree", lambda a: a["degree"], sort_field="degree"),
    ColumnSpec(
        "specialties", "Specialties",
        lambda a: join_specialties(a["specialties"]),
    ),
    ColumnSpec(
        "yearsOfExperience", "Experience",
        lambda a: format_years(a["yearsOfExperience"]),
        sort_field="yearsOfExperience",
    ),
    ColumnSpec("phone", "Phone", lambda a: a["formattedPhoneNumber"]),
)

# Narrow terminals: name, city, degree and experience only.
COMPACT_COLUMNS: tuple[ColumnSpec, ...] = tuple(
    c for c in DEFAULT_COLUMNS if c.key in {"name", "city", "degree", "yearsOfExperience"}
)


def select_columns(keys: Sequence[str] | None,
                   available: Sequence[ColumnSpec] = DEFAULT_COLUMNS) -> list[ColumnSpec]:
    """Return the columns named in *keys*, in the given order.

    Unknown keys are skipped; ``None`` or an empty selection yields all
    *available* columns.
    """
    if not keys:
        return list(available)
    by_key = {c.key: c for c in available}
    chosen = [by_key[k] for k in keys if k in by_key]
    return chosen or list(available)
