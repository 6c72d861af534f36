"""
Base repository - shared plumbing for item store access.
Design: Only inserts live here; reads and deletes are owner-scoped in ItemRepository,
so there is deliberately no unscoped get_by_id.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Generic, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from item_api.core.exceptions import TransientStoreError
from item_api.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


@contextmanager
def store_errors(action: str) -> Iterator[None]:
    """Wrap infrastructure failures with context; the raw driver message stays in the cause."""
    try:
        yield
    except SQLAlchemyError as exc:
        raise TransientStoreError(f"{action} failed") from exc


class BaseRepository(Generic[ModelType]):
    def __init__(self, session: AsyncSession, model: type[ModelType]):
        self.session = session
        self.model = model

    async def add(self, entity: ModelType) -> ModelType:
        """Persist and commit a new entity before the response is built."""
        with store_errors(f"insert {self.model.__tablename__}"):
            self.session.add(entity)
            await self.session.flush()
            await self.session.refresh(entity)
            await self.session.commit()
            return entity
