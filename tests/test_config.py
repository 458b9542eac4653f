"""
Tests for utils/config.py — Config base class, KnownValues and AppConfig.
"""
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from utils.config import AppConfig, Config, KnownValues, _env_int

_APP_VARS = (
    "APP_DB_PATH", "APP_PORT", "APP_HOST", "APP_LOG_FORMAT", "APP_CORS_ORIGINS",
    "APP_PAGE_SIZE", "APP_MAX_PAGE_SIZE", "APP_SEED_COUNT", "APP_FILTER_CACHE_TTL",
)


@pytest.fixture()
def clean_env(monkeypatch):
    for name in _APP_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestConfigBase:
    def test_to_dict_skips_private(self):
        cfg = Config()
        cfg.name = "directory"
        cfg._secret = "hidden"
        assert cfg.to_dict() == {"name": "directory"}


class TestKnownValues:
    def test_degrees(self):
        assert KnownValues.DEGREES == ("MD", "PhD", "MSW", "PsyD", "LCSW", "LPC", "LMFT")

    def test_specialty_count(self):
        assert len(KnownValues.SPECIALTIES) == 26
        assert len(set(KnownValues.SPECIALTIES)) == 26

    def test_experience_ranges(self):
        assert list(KnownValues.EXPERIENCE_RANGES) == ["0-5", "6-10", "11-15", "16-20", "21+"]
        assert KnownValues.EXPERIENCE_RANGES["21+"] == (21, None)


class TestEnvInt:
    def test_unset(self, clean_env):
        assert _env_int("APP_PAGE_SIZE", 20) == 20

    @pytest.mark.parametrize("raw,expected", [
        ("50", 50),
        ("abc", 20),
        ("0", 20),
        ("-5", 20),
    ])
    def test_values(self, clean_env, raw, expected):
        clean_env.setenv("APP_PAGE_SIZE", raw)
        assert _env_int("APP_PAGE_SIZE", 20) == expected


class TestAppConfig:
    def test_defaults(self, clean_env):
        cfg = AppConfig.from_env()
        assert cfg.db_path == Path("advocates.sqlite")
        assert cfg.api_port == 8000
        assert cfg.api_host == "127.0.0.1"
        assert cfg.log_format == "text"
        assert cfg.cors_origins == ["*"]
        assert cfg.page_size == 20
        assert cfg.max_page_size == 100
        assert cfg.seed_count == 500
        assert cfg.filter_cache_ttl == 300

    def test_env_overrides(self, clean_env, tmp_path):
        clean_env.setenv("APP_DB_PATH", str(tmp_path / "dir.sqlite"))
        clean_env.setenv("APP_PORT", "9000")
        clean_env.setenv("APP_LOG_FORMAT", "json")
        clean_env.setenv("APP_PAGE_SIZE", "25")
        clean_env.setenv("APP_SEED_COUNT", "40")
        cfg = AppConfig.from_env()
        assert cfg.db_path == tmp_path / "dir.sqlite"
        assert cfg.api_port == 9000
        assert cfg.log_format == "json"
        assert cfg.page_size == 25
        assert cfg.seed_count == 40

    def test_cors_origins_split(self, clean_env):
        clean_env.setenv("APP_CORS_ORIGINS", "http://a.test, http://b.test,")
        assert AppConfig.from_env().cors_origins == ["http://a.test", "http://b.test"]

    def test_to_dict(self, clean_env):
        data = AppConfig.from_env().to_dict()
        assert data["page_size"] == 20
        assert "db_path" in data
