"""
Item repository - every query is filtered by owner.
Challenge: No code path may read or write another owner's rows.
"""

import uuid

from sqlalchemy import delete, select

from item_api.db.models.item import Item
from item_api.db.repositories.base_repository import BaseRepository, store_errors


class ItemRepository(BaseRepository[Item]):
    """Owner-scoped item queries. Uses the (id, owner_id) compound predicate for single rows."""

    def __init__(self, session):
        super().__init__(session, Item)

    async def list_for_owner(self, owner_id: uuid.UUID, *, offset: int = 0, limit: int = 50) -> list[Item]:
        with store_errors("list items"):
            result = await self.session.execute(
                select(Item)
                .where(Item.owner_id == owner_id)
                .order_by(Item.created_at, Item.id)
                .offset(offset)
                .limit(limit)
            )
            return list(result.scalars().all())

    async def get_owned(self, item_id: uuid.UUID, owner_id: uuid.UUID) -> Item | None:
        with store_errors("load item"):
            result = await self.session.execute(
                select(Item).where(Item.id == item_id, Item.owner_id == owner_id)
            )
            return result.scalar_one_or_none()

    async def save(self, item: Item) -> Item:
        """Commit changes to an item previously loaded through get_owned."""
        with store_errors("update item"):
            await self.session.flush()
            await self.session.refresh(item)
            await self.session.commit()
            return item

    async def delete_owned(self, item_id: uuid.UUID, owner_id: uuid.UUID) -> int:
        """Returns the number of rows removed (0 or 1)."""
        with store_errors("delete item"):
            result = await self.session.execute(
                delete(Item).where(Item.id == item_id, Item.owner_id == owner_id)
            )
            await self.session.commit()
            return result.rowcount
