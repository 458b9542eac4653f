"""Pre-compiled regex patterns for the advocate directory.

All patterns are compiled once at module import.

Usage:
    from utils.patterns import PHONE_DIGITS

    if PHONE_DIGITS.match(value):
        ...
"""

import re

# Exactly ten digits, captured as area code / exchange / line number
PHONE_DIGITS = re.compile(r'^(\d{3})(\d{3})(\d{4})$')

# Whitespace normalization: multiple spaces/tabs/newlines
WHITESPACE = re.compile(r'\s+')

# Characters with special meaning inside a SQL LIKE pattern
LIKE_SPECIAL_CHARS = re.compile(r'([\\%_])')

# Positive decimal integer, optionally surrounded by whitespace
POSITIVE_INT = re.compile(r'^\s*\+?0*([1-9]\d*)\s*$')
