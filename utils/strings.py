"""String processing utilities for the advocate directory.

Query-string values arrive as raw text; these helpers coerce them into the
shapes the query builder expects without ever raising.
"""

from typing import Iterable, Optional

from utils.patterns import LIKE_SPECIAL_CHARS, POSITIVE_INT, WHITESPACE


def normalize_whitespace(s: str) -> str:
    """Normalize multiple whitespace characters to single spaces.

    Example:
        "  Alice \\t Smith " -> "Alice Smith"
    """
    return WHITESPACE.sub(' ', s).strip()


def escape_like(value: str) -> str:
    """Escape SQL LIKE wildcards (%, _) and the escape char itself.

    Uses backslash as the escape character, which must be specified
    in the LIKE clause with ESCAPE '\\'.

    Example:
        "100%_sure" -> "100\\%\\_sure"
    """
    return LIKE_SPECIAL_CHARS.sub(r'\\\1', value)


def split_csv_values(values: Optional[Iterable[str]]) -> list[str]:
    """Split comma-joined query values into a clean, de-duplicated list.

    Accepts either a single string or an iterable of strings (repeated
    query keys).  Blank entries are dropped; first occurrence wins.

    Examples:
        "Austin, Denver,,Austin" -> ["Austin", "Denver"]
        ["Austin", "Denver,Boise"] -> ["Austin", "Denver", "Boise"]
        None -> []
    """
    if values is None:
        return []
    if isinstance(values, str):
        values = [values]
    seen: dict[str, None] = {}
    for raw in values:
        if raw is None:
            continue
        for part in str(raw).split(","):
            part = part.strip()
            if part:
                seen.setdefault(part, None)
    return list(seen)


def safe_positive_int(val, default: int) -> int:
    """Parse a positive integer, returning *default* on anything else.

    Examples:
        "3" -> 3
        "abc" -> default
        "0" -> default
        None -> default
    """
    if val is None:
        return default
    if isinstance(val, bool):
        return default
    if isinstance(val, int):
        return val if val > 0 else default
    match = POSITIVE_INT.match(str(val))
    if not match:
        return default
    return int(match.group(1))
