import logging
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL

_config_logger = logging.getLogger(__name__)

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Chess Customization API"
    app_version: str = "1.0.0"
    app_env: str = "development"
    port: int = 3000
    cors_origins: list[str] = ["*"]

    # Full connection URL — takes precedence over the DB_* parts below
    database_url: str | None = None

    # PostgreSQL connection parts
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str | None = None
    db_user: str = "postgres"
    db_password: str = "password"

    # Connection pool
    db_pool_size: int = 10
    db_idle_timeout_ms: int = 30000
    db_connection_timeout_ms: int = 2000

    # Startup connection retry
    db_max_retries: int = 3
    db_retry_delay_ms: int = 1000
    db_backoff_multiplier: float = 2.0

    # Logging — per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine — SQL queries
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_storage: str = "INFO"          # Repository + connection handling

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    @property
    def database_name(self) -> str:
        """Configured database name, with a separate default for the test environment."""
        if self.db_name:
            return self.db_name
        if self.app_env == "test":
            return "chess_customizations_test"
        return "chess_customizations"

    def resolved_database_url(self) -> str:
        """Return DATABASE_URL if set, otherwise compose one from the DB_* settings."""
        if self.database_url:
            return self.database_url
        url = URL.create(
            drivername="postgresql",
            username=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.database_name,
        )
        return url.render_as_string(hide_password=False)


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    settings = Settings()
    _config_logger.debug("Settings loaded for environment '%s'", settings.app_env)
    return settings
