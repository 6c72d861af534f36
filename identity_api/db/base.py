"""
SQLAlchemy declarative base and metadata for the credential store.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for identity ORM models. Enables Alembic migrations."""

    pass
