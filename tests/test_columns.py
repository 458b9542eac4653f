"""
Tests for utils/columns.py — column configuration for list renderings.
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from utils.columns import COMPACT_COLUMNS, DEFAULT_COLUMNS, ColumnSpec, select_columns

ALICE = {
    "id": 1,
    "firstName": "Alice",
    "lastName": "Smith",
    "city": "Austin",
    "degree": "MD",
    "yearsOfExperience": 3,
    "specialties": ["Bipolar", "LGBTQ"],
    "formattedPhoneNumber": "(555) 123-4567",
}


class TestDefaultColumns:
    def test_keys(self):
        assert [c.key for c in DEFAULT_COLUMNS] == [
            "name", "city", "degree", "specialties", "yearsOfExperience", "phone",
        ]

    def test_cells(self):
        assert [c.cell(ALICE) for c in DEFAULT_COLUMNS] == [
            "Alice Smith", "Austin", "MD", "Bipolar, LGBTQ", "3 years", "(555) 123-4567",
        ]

    def test_sortable(self):
        sortable = {c.key: c.sort_field for c in DEFAULT_COLUMNS if c.sortable}
        assert sortable == {
            "name": "lastName",
            "city": "city",
            "degree": "degree",
            "yearsOfExperience": "yearsOfExperience",
        }

    def test_compact(self):
        assert [c.key for c in COMPACT_COLUMNS] == ["name", "city", "degree", "yearsOfExperience"]


class TestSelectColumns:
    def test_none_returns_all(self):
        assert select_columns(None) == list(DEFAULT_COLUMNS)

    def test_order_follows_keys(self):
        assert [c.key for c in select_columns(["phone", "name"])] == ["phone", "name"]

    def test_unknown_keys_skipped(self):
        assert [c.key for c in select_columns(["bogus", "city"])] == ["city"]

    def test_only_unknown_falls_back(self):
        assert select_columns(["bogus"]) == list(DEFAULT_COLUMNS)

    def test_custom_available(self):
        custom = [ColumnSpec("id", "ID", lambda a: str(a["id"]))]
        chosen = select_columns(["id"], available=custom)
        assert chosen[0].cell(ALICE) == "1"
        assert not chosen[0].sortable
