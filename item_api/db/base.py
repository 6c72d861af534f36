"""
SQLAlchemy declarative base and metadata for the item store.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for item ORM models. Enables Alembic migrations."""

    pass
