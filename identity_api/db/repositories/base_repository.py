"""
Base repository - generic data access for the credential store.
Challenge: Keep driver errors out of the service layer.
Design: Integrity violations propagate unchanged so callers can map them to
business errors; every other SQLAlchemy failure becomes TransientStoreError.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Generic, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from identity_api.core.exceptions import TransientStoreError
from identity_api.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


@contextmanager
def store_errors(action: str) -> Iterator[None]:
    """Wrap infrastructure failures with context."""
    try:
        yield
    except IntegrityError:
        raise
    except SQLAlchemyError as exc:
        raise TransientStoreError(f"{action} failed") from exc


class BaseRepository(Generic[ModelType]):
    """Generic async repository. Subclasses define model-specific queries."""

    def __init__(self, session: AsyncSession, model: type[ModelType]):
        self.session = session
        self.model = model

    async def add(self, entity: ModelType) -> ModelType:
        """Persist and commit a new entity before the response is built."""
        with store_errors(f"insert {self.model.__tablename__}"):
            self.session.add(entity)
            await self.session.flush()  # Surface unique violations now
            await self.session.refresh(entity)
            await self.session.commit()
            return entity
