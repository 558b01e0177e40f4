"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from environment
variables.  Defaults are provided for all fields.  The application
factory builds one instance and hands the relevant values to the
services explicitly; nothing below ``main`` reads the environment.
"""

import os
from dataclasses import dataclass, field


def _env_int(name: str, default: int) -> int:
    """Read an integer environment variable, falling back to ``default``.

    Empty, non‑numeric and non‑positive values are treated as unset so
    that a typo in ``.env`` does not take the service down.
    """
    raw = os.getenv(name, "")
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = field(default_factory=lambda: os.getenv("PROJECT_NAME", "Creature Catalog API"))
    api_version: str = field(default_factory=lambda: os.getenv("API_VERSION", "1.0.0"))
    environment: str = field(default_factory=lambda: os.getenv("ENVIRONMENT", "dev"))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    # Listening address for ``run.py``.
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: _env_int("PORT", 3000))

    # Path or connection string for the record store.  If a relative
    # path is provided, it will be resolved relative to the project root
    # by the ``db`` module.
    database_url: str = field(default_factory=lambda: os.getenv("DATABASE_URL", "creature_catalog.db"))

    # Page size used by ``GET /creatures`` when the caller omits ``limit``.
    default_limit: int = field(default_factory=lambda: _env_int("DEFAULT_LIMIT", 5))

    # Remote catalog used by the bulk importer.
    seed_source_url: str = field(
        default_factory=lambda: os.getenv("SEED_SOURCE_URL", "https://pokeapi.co/api/v2/pokemon")
    )
    seed_limit: int = field(default_factory=lambda: _env_int("SEED_LIMIT", 10))


def get_settings() -> Settings:
    """Build a fresh ``Settings`` from the current environment."""
    return Settings()
