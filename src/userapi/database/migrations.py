"""
Schema migration runner.

Applies every pending alembic revision found in `migrations_path` to the store
at `database_url`. Running it against an up-to-date schema is a no-op. Called
once by main.run() before the HTTP server starts; any failure is fatal.
"""
import logging
from pathlib import Path

from alembic import command
from alembic.config import Config

from userapi.exceptions.base import ConfigurationError

logger = logging.getLogger(__name__)


def make_alembic_config(database_url: str, migrations_path: str | Path) -> Config:
    """Build the alembic Config programmatically (no alembic.ini needed)."""
    config = Config()
    config.set_main_option("script_location", str(migrations_path))
    # ConfigParser interpolation: a literal '%' (URL-encoded password) must be doubled.
    config.set_main_option("sqlalchemy.url", database_url.replace("%", "%%"))
    return config


def run_migrations(database_url: str | None, migrations_path: str | Path | None) -> None:
    """
    Upgrade the schema to the latest revision.

    Raises:
        ConfigurationError: if the URL or the migrations path is missing.
    """
    if not migrations_path:
        raise ConfigurationError("No MIGRATIONS_PATH provided")
    if not database_url:
        raise ConfigurationError("No database URL provided")
    if not Path(migrations_path).is_dir():
        raise ConfigurationError(f"MIGRATIONS_PATH does not exist: {migrations_path}")

    logger.info("migrations.start", extra={"migrations_path": str(migrations_path)})
    command.upgrade(make_alembic_config(database_url, migrations_path), "head")
    logger.info("migrations.done")
