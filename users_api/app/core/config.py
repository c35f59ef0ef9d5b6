"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts against a local SQLite file with demo data.  Override
them via environment variables in a real deployment.
"""

import os
from dataclasses import dataclass
from typing import Optional


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Users API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = _flag("DEBUG", "false")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    # Path to the SQLite database file.  If a relative path is provided,
    # it will be resolved relative to the project root by the ``db``
    # module.
    database_url: str = os.getenv("DATABASE_URL", "users.db")

    # Drop and recreate the ``User`` table on startup.  Useful for demos
    # that should always begin from the seed rows.
    reset_database: bool = _flag("RESET_DATABASE", "false")

    # Insert the demo users (1, 'Mimi') and (2, 'Mickey') when absent.
    seed_demo_data: bool = _flag("SEED_DEMO_DATA", "true")


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes defaults at import time, environment variables should be
# set before importing this module.
settings = Settings()
