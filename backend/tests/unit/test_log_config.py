"""Unit tests for the per-category logging setup."""

import logging

import pytest

from app.config import Settings
from app.infrastructure.logging.log_config import setup_logging

_TOUCHED = ("", "sqlalchemy.engine", "uvicorn.access", "app.infrastructure.database")


@pytest.fixture(autouse=True)
def restore_levels():
    saved = {name: logging.getLogger(name or None).level for name in _TOUCHED}
    yield
    for name, level in saved.items():
        logging.getLogger(name or None).setLevel(level)


def test_category_levels_follow_settings():
    settings = Settings(
        _env_file=None,
        log_level="DEBUG",
        log_level_sql="ERROR",
        log_level_uvicorn="WARNING",
        log_level_storage="INFO",
    )

    setup_logging(settings)

    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("sqlalchemy.engine").level == logging.ERROR
    assert logging.getLogger("uvicorn.access").level == logging.WARNING
    assert logging.getLogger("app.infrastructure.database").level == logging.INFO


def test_unknown_level_name_falls_back_to_info():
    setup_logging(Settings(_env_file=None, log_level_sql="LOUD"))

    assert logging.getLogger("sqlalchemy.engine").level == logging.INFO
