"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API starts without any configuration; in a production deployment the
secret key and database location should always be overridden.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Vidly API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    # Optional path of a log file.  When empty only console logging is used.
    log_file: str = os.getenv("LOG_FILE", "")
    secret_key: str = os.getenv("SECRET_KEY", "change_me")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))

    # Path to the SQLite database file.  Relative paths are resolved
    # against the package root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "vidly.db")

    # Seconds a connection waits for the database write lock before the
    # operation fails.  Rental creation reports such a failure as a
    # transaction error instead of hanging.
    db_timeout: float = float(os.getenv("DB_TIMEOUT", "5"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.
settings = Settings()
