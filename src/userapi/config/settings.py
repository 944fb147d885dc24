from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path
from typing import Literal
from functools import lru_cache

from sqlalchemy.engine import URL

from ..exceptions.base import ConfigurationError

DEFAULT_MIGRATIONS_PATH = Path(__file__).resolve().parent.parent / "database" / "alembic"


class Settings(BaseSettings):
    """
    Application settings loaded from environment.
    """

    # Environment
    ENV: Literal["development", "testing", "staging", "production"] = "development"

    # HTTP server
    HOST: str = "0.0.0.0"
    PORT: int = 1323
    REQUEST_TIMEOUT_SECONDS: float = 5.0

    # Database configuration: either a full URL or the Postgres parts
    DB_URL: str | None = None
    POSTGRES_DRIVER: str = "psycopg"
    POSTGRES_USERNAME: str | None = None
    POSTGRES_PASSWORD: str | None = None
    POSTGRES_HOST: str | None = None
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str | None = None

    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: float = 5.0

    # Migrations
    MIGRATIONS_PATH: Path | None = DEFAULT_MIGRATIONS_PATH

    # SQLAlchemy
    SQLALCHEMY_ECHO: bool = False

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_TO_STDOUT: bool = True
    LOG_DIR: Path | None = Path("/var/log/userapi")
    LOG_MAX_BYTES: int = 10_000_000  # 10 MB
    LOG_BACKUP_COUNT: int = 5
    ENABLE_SQL_LOGGING: bool = False

    # --- Derived settings ---
    @property
    def DATABASE_URL(self) -> str:
        """
        Return the store connection URL.

        `DB_URL` wins when set (also how tests point at SQLite). Otherwise the URL is
        assembled from the POSTGRES_* parts.

        Raises:
            ConfigurationError: if neither a full URL nor the host/user/db parts are set.
        """
        if self.DB_URL:
            return self.DB_URL

        if not (self.POSTGRES_USERNAME and self.POSTGRES_HOST and self.POSTGRES_DB):
            raise ConfigurationError(
                "No database URL configured: set DB_URL or POSTGRES_USERNAME/POSTGRES_HOST/POSTGRES_DB"
            )

        return URL.create(
            drivername=f"postgresql+{self.POSTGRES_DRIVER}",
            username=self.POSTGRES_USERNAME,
            password=self.POSTGRES_PASSWORD,
            host=self.POSTGRES_HOST,
            port=self.POSTGRES_PORT,
            database=self.POSTGRES_DB,
        ).render_as_string(hide_password=False)

    # --- Validators ---
    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: str | None) -> str | None:
        """Logging expects upper-case level names ("debug" -> "DEBUG")."""
        return v.upper() if isinstance(v, str) else v

    @field_validator("LOG_FORMAT", mode="before")
    def normalize_log_format(cls, v: str | None) -> str | None:
        return v.lower() if isinstance(v, str) else v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Cached so the entry point and the uvicorn reloader share one instance.
@lru_cache()
def get_settings() -> Settings:
    return Settings()
