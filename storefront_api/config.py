"""
Storefront API - Application Configuration
============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by main.py (app factory) and Alembic; tests build their own
       Settings instance and pass it to create_app().
When:  Loaded once at module import time.

Database URL resolution:
    DATABASE_URL, when set, is used verbatim (tests point it at SQLite).
    Otherwise the URL is assembled from DB_HOST / DB_PORT / DB_USER /
    DB_PASS / DB_NAME for the aiomysql driver (MariaDB / MySQL).
"""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have development defaults matching the sample database.
    Attributes are grouped by concern.
    """

    # ── Database ──────────────────────────────────────────────────────────
    db_host: str = Field(default="127.0.0.1")
    db_port: int = Field(default=3306, ge=1, le=65535)
    db_user: str = Field(default="root")
    db_pass: str = Field(default="root")
    db_name: str = Field(default="sample")

    # Full SQLAlchemy async URL; takes precedence over the DB_* parts
    database_url: Optional[str] = Field(default=None)

    # Fixed-size pool: callers wait for a free connection up to db_pool_timeout
    db_pool_size: int = Field(default=5, ge=1, le=100)
    db_max_overflow: int = Field(default=0, ge=0, le=50)
    db_pool_timeout: float = Field(default=30.0, gt=0)
    db_pool_pre_ping: bool = Field(default=True)

    # Create missing tables on startup (development convenience)
    db_create_tables: bool = Field(default=False)

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Echo Function ─────────────────────────────────────────────────────
    # Empty URL: GET /say invokes the bundled handler in-process
    echo_function_url: str = Field(default="")
    echo_timeout: float = Field(default=10.0, gt=0)

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # DB_HOST and db_host both work
        "extra": "ignore",
    }

    @property
    def sqlalchemy_url(self) -> str:
        """Async SQLAlchemy URL for the configured database."""
        if self.database_url:
            return self.database_url
        return URL.create(
            drivername="mysql+aiomysql",
            username=self.db_user,
            password=self.db_pass,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        ).render_as_string(hide_password=False)

    @property
    def is_sqlite(self) -> bool:
        return self.sqlalchemy_url.startswith("sqlite")


# Process-wide settings read from the environment
settings = Settings()
