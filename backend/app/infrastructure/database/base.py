"""SQLAlchemy ORM base shared by the customization tables."""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

# Deterministic names for keys the models don't name explicitly
NAMING_CONVENTION = {
    "pk": "pk_%(table_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
}


class Base(DeclarativeBase):
    """Base class for the customization ORM models."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)
