from .base import Base
from .session import (
    build_engine,
    build_session_factory,
    init_schema,
    tables_exist,
    verify_schema,
    wait_for_database,
)
from .models import ChessPieceModel, CustomizationModel

__all__ = [
    "Base",
    "build_engine",
    "build_session_factory",
    "init_schema",
    "tables_exist",
    "verify_schema",
    "wait_for_database",
    "ChessPieceModel",
    "CustomizationModel",
]
