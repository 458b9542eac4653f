"""Shared utilities for the advocate directory.

Used by the API routes, the command-line tools and the Python client.
"""

# Pattern definitions
from utils.patterns import (
    LIKE_SPECIAL_CHARS,
    PHONE_DIGITS,
    POSITIVE_INT,
    WHITESPACE,
)

# String utilities
from utils.strings import (
    escape_like,
    normalize_whitespace,
    safe_positive_int,
    split_csv_values,
)

# Database utilities
from utils.database import (
    DIRECTORY_TABLES,
    SCHEMA_SQL,
    batch_insert,
    connect,
    get_table_count,
    init_pragmas,
    init_schema,
    register_functions,
    reset_tables,
    table_exists,
)

# HTTP utilities
from utils.http import SessionManager

# Output formatting
from utils.formatting import (
    TableFormatter,
    format_count,
    format_phone_number,
    format_years,
    initials,
    join_specialties,
    truncate_text,
)

# Configuration
from utils.config import AppConfig, Config, KnownValues

# Caching
from utils.cache import TTLCache

__all__ = [
    # Patterns
    "LIKE_SPECIAL_CHARS",
    "PHONE_DIGITS",
    "POSITIVE_INT",
    "WHITESPACE",
    # Strings
    "escape_like",
    "normalize_whitespace",
    "safe_positive_int",
    "split_csv_values",
    # Database
    "DIRECTORY_TABLES",
    "SCHEMA_SQL",
    "batch_insert",
    "connect",
    "get_table_count",
    "init_pragmas",
    "init_schema",
    "register_functions",
    "reset_tables",
    "table_exists",
    # HTTP
    "SessionManager",
    # Formatting
    "TableFormatter",
    "format_count",
    "format_phone_number",
    "format_years",
    "initials",
    "join_specialties",
    "truncate_text",
    # Config
    "AppConfig",
    "Config",
    "KnownValues",
    # Cache
    "TTLCache",
]
