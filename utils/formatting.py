"""Output formatting utilities for the advocate directory.

Provides reusable functions for:
- Derived display fields (initials, formatted phone numbers)
- Text truncation for table cells
- Tabular report output for the command-line tools
"""

from typing import Any, List, Optional

from utils.patterns import PHONE_DIGITS


def format_phone_number(value: Any) -> str:
    """Format a 10-digit phone number for display.

    Args:
        value: Phone number as a digit string or integer

    Returns:
        "(555) 123-4567" for 10-digit input, the raw value as a string
        otherwise, or "-" for None.

    Examples:
        format_phone_number("5551234567") -> "(555) 123-4567"
        format_phone_number(5551234567) -> "(555) 123-4567"
        format_phone_number("12345") -> "12345"
    """
    if value is None:
        return "-"
    digits = str(value).strip()
    match = PHONE_DIGITS.match(digits)
    if not match:
        return digits
    return f"({match.group(1)}) {match.group(2)}-{match.group(3)}"


def initials(first_name: Optional[str], last_name: Optional[str]) -> str:
    """Return upper-case initials, e.g. ("Alice", "Smith") -> "AS"."""
    first = (first_name or "").strip()[:1]
    last = (last_name or "").strip()[:1]
    return (first + last).upper()


def format_count(value: Optional[int]) -> str:
    """Format a count with thousands separator.

    Examples:
        format_count(1234567) -> "1,234,567"
        format_count(None) -> "-"
    """
    if value is None:
        return "-"
    return f"{value:,d}"


def format_years(value: Optional[int]) -> str:
    """Format years of experience, e.g. 1 -> "1 year", 12 -> "12 years"."""
    if value is None:
        return "-"
    return f"{value} year" if value == 1 else f"{value} years"


def truncate_text(text: str, max_length: int = 100, suffix: str = "...") -> str:
    """Truncate text to maximum length with ellipsis.

    Args:
        text: Text to truncate
        max_length: Maximum length including suffix
        suffix: Suffix to add if truncated (default: "...")

    Returns:
        Truncated text if longer than max_length, original text otherwise

    Examples:
        truncate_text("Long text here", 10) -> "Long te..."
        truncate_text("Short", 10) -> "Short"
    """
    if len(text) <= max_length:
        return text
    return text[:max_length - len(suffix)] + suffix


def join_specialties(names: List[str], max_length: Optional[int] = None) -> str:
    """Join specialty names for a single table cell."""
    text = ", ".join(names) if names else "-"
    if max_length is not None:
        return truncate_text(text, max_length)
    return text


class TableFormatter:
    """Formats data as aligned tabular output."""

    def __init__(self, columns: List[str], column_widths: Optional[List[int]] = None):
        """Initialize table formatter.

        Args:
            columns: List of column headers
            column_widths: Optional list of column widths (auto-calculated if None)
        """
        self.columns = columns
        self.column_widths = column_widths or [len(col) for col in columns]
        self.rows: List[List[str]] = []

    def add_row(self, values: List[Any]) -> None:
        """Add a row to the table.

        Raises:
            ValueError: If value count doesn't match column count
        """
        if len(values) != len(self.columns):
            raise ValueError(f"Expected {len(self.columns)} values, got {len(values)}")

        str_values = []
        for i, val in enumerate(values):
            str_val = str(val) if val is not None else "-"
            str_values.append(str_val)
            if len(str_val) > self.column_widths[i]:
                self.column_widths[i] = len(str_val)

        self.rows.append(str_values)

    def _format_row(self, values: List[str], is_header: bool = False) -> str:
        cells = []
        for i, val in enumerate(values):
            width = self.column_widths[i]
            if is_header:
                cells.append(val.ljust(width))
            else:
                # Right-align numeric cells
                try:
                    float(val)
                    cells.append(val.rjust(width))
                except ValueError:
                    cells.append(val.ljust(width))

        return "  ".join(cells).rstrip()

    def to_string(self, show_header: bool = True, show_separator: bool = True) -> str:
        """Format table as multi-line string."""
        lines = []

        if show_header:
            lines.append(self._format_row(self.columns, is_header=True))
            if show_separator:
                sep = "  ".join("-" * w for w in self.column_widths)
                lines.append(sep)

        for row in self.rows:
            lines.append(self._format_row(row))

        return "\n".join(lines)

    def print_table(self, show_header: bool = True, show_separator: bool = True) -> None:
        """Print table to stdout."""
        print(self.to_string(show_header, show_separator))
