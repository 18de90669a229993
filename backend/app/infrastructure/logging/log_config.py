"""Logging setup for the customization API.

The root level comes from LOG_LEVEL; SQL statements, uvicorn access lines
and the storage layer each get their own level so they can be quieted
independently.

Usage:
    from app.infrastructure.logging.log_config import setup_logging
    setup_logging(settings)   # once, from the lifespan
"""

import logging
import sys

from app.config import Settings, get_settings


# Settings field → logger names it controls
_CATEGORY_MAP: dict[str, list[str]] = {
    "log_level_sql": [
        "sqlalchemy.engine",
        "sqlalchemy.pool",
        "aiosqlite",
        "asyncpg",
    ],
    "log_level_uvicorn": [
        "uvicorn",
        "uvicorn.access",
        "uvicorn.error",
    ],
    "log_level_storage": [
        "app.infrastructure.database",
    ],
}

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(settings: Settings | None = None) -> None:
    """Apply the root and per-category log levels from ``settings``."""
    settings = settings or get_settings()

    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))

    # uvicorn installs its own handlers; tests and scripts need one here
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)

    for settings_field, logger_names in _CATEGORY_MAP.items():
        level = _parse_level(getattr(settings, settings_field, "INFO"))
        for name in logger_names:
            logging.getLogger(name).setLevel(level)

    logging.getLogger(__name__).debug(
        "Logging configured: root=%s sql=%s uvicorn=%s storage=%s",
        settings.log_level,
        settings.log_level_sql,
        settings.log_level_uvicorn,
        settings.log_level_storage,
    )


def _parse_level(raw: str) -> int:
    """Map a level name to its logging constant; unknown names fall back to INFO."""
    numeric = getattr(logging, raw.upper(), None)
    return numeric if isinstance(numeric, int) else logging.INFO
