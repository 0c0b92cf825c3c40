"""
Pokemon API — Application Configuration
=========================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or a .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by the application factory, the store factory and Alembic.
When:  Loaded once at module import time.

Record store selection:
    DB_DRIVER picks the adapter and, for relational engines, the async
    SQLAlchemy driver:

        mysql       → mysql+aiomysql      (default port 3306)
        postgresql  → postgresql+asyncpg  (default port 5432)
        sqlite      → sqlite+aiosqlite    (DB_NAME is the file path)
        memory      → in-process store, no database

    DATABASE_URL, when set, replaces the URL assembled from the DB_* parts.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL, make_url


# Async SQLAlchemy driver for each supported relational engine
SQL_DRIVERS: Dict[str, str] = {
    "mysql": "mysql+aiomysql",
    "postgresql": "postgresql+asyncpg",
    "sqlite": "sqlite+aiosqlite",
}

DEFAULT_PORTS: Dict[str, int] = {
    "mysql": 3306,
    "postgresql": 5432,
}


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every setting has a development default, so the service starts against a
    local MySQL server with no configuration at all.
    """

    # ── Record Store ──────────────────────────────────────────────────────
    db_driver: str = Field(default="mysql", description="mysql, postgresql, sqlite or memory")
    db_host: str = Field(default="localhost")
    db_user: str = Field(default="root")
    db_password: str = Field(default="")
    db_name: str = Field(default="pokemondb")

    # None means "the driver's usual port" (see DEFAULT_PORTS)
    db_port: Optional[int] = Field(default=None, ge=1, le=65535)

    database_url: Optional[str] = Field(
        default=None,
        description="Full SQLAlchemy URL; overrides the DB_* connection parts",
    )

    # Seconds to wait while establishing a new connection
    db_connect_timeout: int = Field(default=10, ge=1, le=120)

    # Pool sizing is ignored for SQLite, which uses its dialect's pool
    db_pool_size: int = Field(default=10, ge=1, le=100)
    db_max_overflow: int = Field(default=5, ge=0, le=50)
    db_pool_pre_ping: bool = Field(default=True)

    # Create the pokemon table at startup (Alembic is the normal path)
    db_create_tables: bool = Field(default=False)

    @field_validator("db_driver")
    @classmethod
    def validate_db_driver(cls, v: str) -> str:
        """Ensures the driver is one the store factory knows how to build."""
        lower = v.lower()
        valid = set(SQL_DRIVERS) | {"memory"}
        if lower not in valid:
            raise ValueError(f"Invalid db_driver '{v}'. Must be one of: {sorted(valid)}")
        return lower

    # ── Server ────────────────────────────────────────────────────────────
    server_host: str = Field(default="0.0.0.0")
    port: int = Field(default=3002, ge=1, le=65535)

    # Comma-separated; "*" allows every origin
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

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

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @property
    def uses_sql_store(self) -> bool:
        return self.database_url is not None or self.db_driver in SQL_DRIVERS

    @property
    def effective_db_port(self) -> Optional[int]:
        if self.db_port is not None:
            return self.db_port
        return DEFAULT_PORTS.get(self.db_driver)

    @property
    def sqlalchemy_url(self) -> Union[str, URL]:
        """
        What:  The async SQLAlchemy URL for the configured record store.
        How:   DATABASE_URL wins; otherwise the URL is assembled with URL.create,
               which escapes special characters in the user name and password.

        Raises:
            ValueError: The in-memory driver has no database URL.
        """
        if self.database_url:
            return self.database_url
        if self.db_driver == "memory":
            raise ValueError("The memory driver does not use a database URL")
        if self.db_driver == "sqlite":
            return URL.create(SQL_DRIVERS["sqlite"], database=self.db_name)
        return URL.create(
            SQL_DRIVERS[self.db_driver],
            username=self.db_user,
            password=self.db_password or None,
            host=self.db_host,
            port=self.effective_db_port,
            database=self.db_name,
        )

    @property
    def connect_args(self) -> Dict[str, Any]:
        """Driver-specific keyword arguments carrying the connect timeout."""
        backend = self.sqlalchemy_backend
        if backend == "mysql":
            return {"connect_timeout": self.db_connect_timeout}
        if backend == "postgresql":
            return {"timeout": self.db_connect_timeout}
        return {}

    @property
    def sqlalchemy_backend(self) -> str:
        """Backend name of the URL in use (mysql, postgresql, sqlite, ...)."""
        return make_url(self.sqlalchemy_url).get_backend_name()


# Singleton instance — imported throughout the application
settings = Settings()
