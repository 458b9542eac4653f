"""
Tests for api/routes/frontend.py — HTML page and HTMX partials.

The rows partial is the server half of the infinite list: page 1 returns the
whole list, later pages return bare rows ending in a sentinel, an
"All advocates loaded" row, or an error row with a retry button.
"""
import sqlite3
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import api.routes.frontend as frontend_routes
from utils.columns import DEFAULT_COLUMNS
from utils.query import AdvocateFilters


class TestIndex:
    def test_returns_html(self, app_client):
        resp = app_client.get("/")
        assert resp.status_code == 200
        assert "text/html" in resp.headers["content-type"]

    def test_filter_form(self, app_client):
        html = app_client.get("/").text
        assert "<form" in html
        assert 'hx-get="/partials/advocates"' in html
        assert 'id="advocate-list"' in html
        assert 'id="detail-panel"' in html

    def test_filter_options_rendered(self, app_client):
        html = app_client.get("/").text
        assert "Denver" in html
        assert "PhD" in html
        assert "21+" in html

    def test_first_page_included(self, app_client):
        html = app_client.get("/").text
        assert "Alice Smith" in html
        assert "3 advocates found" in html

    def test_filters_from_query_string(self, app_client):
        html = app_client.get("/?cities=Denver").text
        assert "Cara Jones" in html
        assert "Alice Smith" not in html

    def test_missing_database(self, tmp_path):
        from fastapi.testclient import TestClient
        from api.app import create_app

        app = create_app(db_path=tmp_path / "missing.sqlite")
        with TestClient(app, raise_server_exceptions=False) as client:
            assert client.get("/").status_code == 503


class TestRowsPartial:
    def test_first_page_renders_list(self, app_client):
        html = app_client.get("/partials/advocates").text
        assert "<table" in html
        assert "<thead>" in html
        assert "3 advocates found" in html
        assert "All advocates loaded" in html
        assert 'hx-trigger="revealed"' not in html

    def test_headers_follow_columns(self, app_client):
        html = app_client.get("/partials/advocates").text
        for column in DEFAULT_COLUMNS:
            assert column.label in html

    def test_sort_state_marked(self, app_client):
        html = app_client.get("/partials/advocates?sortBy=city&sortOrder=desc").text
        assert 'aria-sort="descending"' in html

    def test_sentinel_requests_next_page(self, large_app_client):
        html = large_app_client.get("/partials/advocates").text
        assert 'hx-trigger="revealed"' in html
        assert "page=2" in html
        assert "137 advocates found" in html
        assert html.count('class="skeleton"') == 5

    def test_later_page_is_rows_only(self, large_app_client):
        html = large_app_client.get("/partials/advocates?page=2").text
        assert "<table" not in html
        assert "advocates found" not in html
        assert html.count("<tr data-id=") == 20
        assert "page=3" in html

    def test_last_page(self, large_app_client):
        html = large_app_client.get("/partials/advocates?page=7").text
        assert html.count("<tr data-id=") == 17
        assert "All advocates loaded" in html
        assert 'hx-trigger="revealed"' not in html

    def test_next_url_keeps_filters(self, large_app_client):
        html = large_app_client.get(
            "/partials/advocates?degrees=MD&sortBy=city&limit=5&view=cards"
        ).text
        assert "degrees=MD" in html
        assert "sortBy=city" in html
        assert "view=cards" in html

    def test_huge_page_renders_first_page(self, app_client):
        resp = app_client.get("/partials/advocates?page=99999999999999999999")
        assert resp.status_code == 200
        assert "3 advocates found" in resp.text

    def test_empty_result(self, app_client):
        html = app_client.get("/partials/advocates?search=zzzz").text
        assert "No advocates match these filters." in html
        assert "0 advocates found" in html

    def test_cards_view(self, app_client):
        html = app_client.get("/partials/advocates?view=cards").text
        assert 'class="cards"' in html
        assert html.count('<article class="card"') == 3
        assert "<table" not in html

    def test_unknown_view_falls_back(self, app_client):
        html = app_client.get("/partials/advocates?view=grid").text
        assert "<table" in html

    def test_column_selection(self, app_client):
        html = app_client.get("/partials/advocates?columns=name&columns=city").text
        assert "col-city" in html
        assert "col-phone" not in html

    def test_query_error_renders_retry(self, app_client, monkeypatch):
        def _fail(conn, filters):
            raise sqlite3.OperationalError("database is locked")

        monkeypatch.setattr(frontend_routes, "query_advocates", _fail)
        resp = app_client.get("/partials/advocates?page=2")
        assert resp.status_code == 200
        assert "Failed to fetch advocates" in resp.text
        assert "Retry" in resp.text
        assert 'hx-target="closest tr"' in resp.text

    def test_first_page_error_retries_whole_list(self, app_client, monkeypatch):
        def _fail(conn, filters):
            raise sqlite3.OperationalError("database is locked")

        monkeypatch.setattr(frontend_routes, "query_advocates", _fail)
        html = app_client.get("/partials/advocates").text
        assert "Unable to load advocates." in html
        assert 'hx-target="#advocate-list"' in html


class TestDetailPartial:
    def test_detail(self, app_client):
        html = app_client.get("/partials/advocates/1").text
        assert "Alice" in html
        assert "Smith" in html
        assert "(555) 123-4567" in html
        assert "3 years" in html
        assert "Bipolar" in html

    def test_not_found(self, app_client):
        assert app_client.get("/partials/advocates/999").status_code == 404

    def test_non_integer_id(self, app_client):
        assert app_client.get("/partials/advocates/abc").status_code == 404


class TestRowsUrl:
    def test_default_columns_omitted(self):
        url = frontend_routes._rows_url(AdvocateFilters(), 2, "table", list(DEFAULT_COLUMNS))
        assert url.startswith("/partials/advocates?")
        assert "page=2" in url
        assert "view=table" in url
        assert "columns=" not in url

    def test_custom_columns_kept(self):
        url = frontend_routes._rows_url(AdvocateFilters(), 2, "cards",
                                        list(DEFAULT_COLUMNS[:2]))
        assert "columns=name" in url
        assert "columns=city" in url


@pytest.mark.parametrize("view,expected", [("cards", "cards"), ("table", "table"), ("x", "table")])
def test_parse_view(view, expected):
    from starlette.requests import Request

    request = Request({"type": "http", "query_string": f"view={view}".encode(), "headers": []})
    assert frontend_routes._parse_view(request) == expected
