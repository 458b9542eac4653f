"""Configuration management utilities for the advocate directory.

Provides reusable functions for:
- Managing environment-specific settings
- Organizing constants and known values
"""

import os as _os
from pathlib import Path
from typing import Any, Dict


class Config:
    """Base configuration class for organizing application settings."""

    def __init__(self):
        """Initialize configuration with default values."""
        pass

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary.

        Returns:
            Dictionary of all config attributes
        """
        return {k: v for k, v in self.__dict__.items() if not k.startswith("_")}


class KnownValues:
    """Container for the fixed reference values of the directory."""

    DEGREES = ("MD", "PhD", "MSW", "PsyD", "LCSW", "LPC", "LMFT")

    SPECIALTIES = (
        "Bipolar",
        "LGBTQ",
        "Medication/Prescribing",
        "Suicide History/Attempts",
        "General Mental Health (anxiety, depression, stress, grief, life transitions)",
        "Men's issues",
        "Relationship Issues (family, friends, couple, etc)",
        "Trauma & PTSD",
        "Personality disorders",
        "Personal growth",
        "Substance use/abuse",
        "Pediatrics",
        "Women's issues (post-partum, infertility, family planning)",
        "Chronic pain",
        "Weight loss & nutrition",
        "Eating disorders",
        "Diabetic Diet and nutrition",
        "Coaching (leadership, career, academic and wellness)",
        "Life coaching",
        "Obsessive-compulsive disorders",
        "Neuropsychological evaluations & testing (ADHD testing)",
        "Attention and Hyperactivity (ADHD)",
        "Sleep issues",
        "Schizophrenia and psychotic disorders",
        "Learning disorders",
        "Domestic abuse",
    )

    # Inclusive bounds; None means unbounded above.
    EXPERIENCE_RANGES: Dict[str, tuple] = {
        "0-5": (0, 5),
        "6-10": (6, 10),
        "11-15": (11, 15),
        "16-20": (16, 20),
        "21+": (21, None),
    }


def _env_int(name: str, default: int) -> int:
    """Read a positive integer env var, falling back to *default*."""
    raw = _os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


class AppConfig(Config):
    """Application-level configuration loaded from environment variables.

    All env vars have sensible defaults so the application works out of the
    box without any configuration.

    Environment variables:
        APP_DB_PATH: Path to the SQLite database file (default: advocates.sqlite)
        APP_PORT: API server port (default: 8000)
        APP_HOST: API server bind address (default: 127.0.0.1)
        APP_LOG_FORMAT: Logging format, "text" or "json" (default: text)
        APP_CORS_ORIGINS: Comma-separated allowed origins (default: *)
        APP_PAGE_SIZE: Default page size for advocate listings (default: 20)
        APP_MAX_PAGE_SIZE: Upper bound for the ``limit`` parameter (default: 100)
        APP_SEED_COUNT: Number of advocates generated by a reseed (default: 500)
        APP_FILTER_CACHE_TTL: Seconds to cache filter options (default: 300)
    """

    def __init__(self) -> None:
        super().__init__()
        self.db_path = Path(_os.getenv("APP_DB_PATH", "advocates.sqlite"))
        self.api_port = _env_int("APP_PORT", 8000)
        self.api_host = _os.getenv("APP_HOST", "127.0.0.1")
        self.log_format = _os.getenv("APP_LOG_FORMAT", "text")
        raw_origins = _os.getenv("APP_CORS_ORIGINS", "*")
        self.cors_origins: list[str] = (
            ["*"] if raw_origins == "*"
            else [o.strip() for o in raw_origins.split(",") if o.strip()]
        )
        self.page_size = _env_int("APP_PAGE_SIZE", 20)
        self.max_page_size = _env_int("APP_MAX_PAGE_SIZE", 100)
        self.seed_count = _env_int("APP_SEED_COUNT", 500)
        self.filter_cache_ttl = _env_int("APP_FILTER_CACHE_TTL", 300)

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create an AppConfig instance populated from environment variables."""
        return cls()
