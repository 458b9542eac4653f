"""
Unit tests for utils/formatting.py

Tests all public functions: format_phone_number, initials, format_count,
format_years, truncate_text, join_specialties, TableFormatter.
No database, network, or file I/O required.
"""
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from utils.formatting import (
    format_phone_number,
    initials,
    format_count,
    format_years,
    truncate_text,
    join_specialties,
    TableFormatter,
)


# ── format_phone_number ───────────────────────────────────────────────────────

def test_format_phone_number_string():
    assert format_phone_number("5551234567") == "(555) 123-4567"


def test_format_phone_number_integer():
    assert format_phone_number(5551234567) == "(555) 123-4567"


def test_format_phone_number_short_passthrough():
    assert format_phone_number("12345") == "12345"


def test_format_phone_number_non_digits_passthrough():
    assert format_phone_number("555-123-4567") == "555-123-4567"


def test_format_phone_number_none():
    assert format_phone_number(None) == "-"


# ── initials ──────────────────────────────────────────────────────────────────

def test_initials_basic():
    assert initials("Alice", "Smith") == "AS"


def test_initials_lowercase_input():
    assert initials("bob", "jones") == "BJ"


@pytest.mark.parametrize("first,last,expected", [
    ("Alice", None, "A"),
    (None, "Smith", "S"),
    ("", "", ""),
    ("  cara ", " lee", "CL"),
])
def test_initials_partial(first, last, expected):
    assert initials(first, last) == expected


# ── format_count / format_years ───────────────────────────────────────────────

def test_format_count():
    assert format_count(1234567) == "1,234,567"
    assert format_count(0) == "0"
    assert format_count(None) == "-"


def test_format_years():
    assert format_years(1) == "1 year"
    assert format_years(12) == "12 years"
    assert format_years(0) == "0 years"
    assert format_years(None) == "-"


# ── truncate_text / join_specialties ──────────────────────────────────────────

def test_truncate_text_short():
    assert truncate_text("Short", 10) == "Short"


def test_truncate_text_long():
    assert truncate_text("Long text here", 10) == "Long te..."


def test_join_specialties():
    assert join_specialties(["Bipolar", "LGBTQ"]) == "Bipolar, LGBTQ"


def test_join_specialties_empty():
    assert join_specialties([]) == "-"


def test_join_specialties_truncated():
    assert len(join_specialties(["Bipolar", "LGBTQ", "Chronic pain"], max_length=12)) == 12


# ── TableFormatter ────────────────────────────────────────────────────────────

class TestTableFormatter:
    def test_header_and_rows(self):
        table = TableFormatter(["ID", "Name"])
        table.add_row([1, "Alice"])
        table.add_row([22, "Bob"])
        lines = table.to_string().splitlines()
        assert lines[0] == "ID  Name"
        assert lines[1] == "--  -----"
        assert lines[2] == " 1  Alice"
        assert lines[3] == "22  Bob"

    def test_none_rendered_as_dash(self):
        table = TableFormatter(["A"])
        table.add_row([None])
        assert table.to_string(show_header=False) == "-"

    def test_wrong_value_count(self):
        table = TableFormatter(["A", "B"])
        with pytest.raises(ValueError):
            table.add_row([1])

    def test_no_separator(self):
        table = TableFormatter(["Name"])
        table.add_row(["Alice"])
        assert table.to_string(show_separator=False).splitlines() == ["Name", "Alice"]

    def test_print_table(self, capsys):
        table = TableFormatter(["Name"])
        table.add_row(["Alice"])
        table.print_table()
        assert "Alice" in capsys.readouterr().out
