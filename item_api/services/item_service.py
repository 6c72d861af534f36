"""
Item service - owner-scoped CRUD.
Challenge: Authorization comes first, every time; no store access happens for
an unauthorized request, and non-owners cannot tell an item exists.
Design: Each use case resolves the owner through AuthorizationGateway, then hits
ItemRepository with that owner. Endpoints stay thin.
"""

import logging
import uuid

from item_api.core.auth import AuthorizationGateway
from item_api.core.exceptions import NotFoundError, UnauthorizedError, ValidationError
from item_api.db.models.item import Item
from item_api.db.repositories.item_repository import ItemRepository

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 50
MAX_OFFSET = 2**31 - 1  # largest offset every supported driver binds as an integer
ITEM_NOT_FOUND = "item not found"


def _parse_item_id(item_id: str | uuid.UUID) -> uuid.UUID:
    """A malformed id can't match any row; report it like any missing item."""
    if isinstance(item_id, uuid.UUID):
        return item_id
    try:
        return uuid.UUID(item_id)
    except (ValueError, TypeError, AttributeError):
        raise NotFoundError(ITEM_NOT_FOUND)


class ItemService:
    """Handles item use cases: create, list, get, update, delete."""

    def __init__(
        self,
        item_repo: ItemRepository,
        gateway: AuthorizationGateway,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self.item_repo = item_repo
        self.gateway = gateway
        self.page_size = page_size

    async def _resolve_owner(self, token: str | None) -> uuid.UUID:
        claims = await self.gateway.authorize(token)
        try:
            return uuid.UUID(claims.user_id)
        except (ValueError, TypeError, AttributeError):
            logger.warning("rejecting claims with malformed subject %r", claims.user_id)
            raise UnauthorizedError("invalid subject")

    async def create_item(self, token: str | None, name: str, description: str = "") -> Item:
        owner_id = await self._resolve_owner(token)
        name = name.strip()
        if not name:
            raise ValidationError("name must not be empty")

        item = await self.item_repo.add(Item(name=name, description=description or "", owner_id=owner_id))
        logger.info("created item id=%s owner=%s", item.id, owner_id)
        return item

    async def list_items(self, token: str | None, offset: int = 0) -> list[Item]:
        """One fixed-size page of the caller's items, oldest first."""
        owner_id = await self._resolve_owner(token)
        if offset < 0:
            raise ValidationError("offset must not be negative")
        if offset > MAX_OFFSET:
            raise ValidationError(f"offset must be at most {MAX_OFFSET}")
        return await self.item_repo.list_for_owner(owner_id, offset=offset, limit=self.page_size)

    async def get_item(self, token: str | None, item_id: str | uuid.UUID) -> Item:
        owner_id = await self._resolve_owner(token)
        item = await self.item_repo.get_owned(_parse_item_id(item_id), owner_id)
        if item is None:
            raise NotFoundError(ITEM_NOT_FOUND)
        return item

    async def update_item(
        self,
        token: str | None,
        item_id: str | uuid.UUID,
        name: str | None = None,
        description: str | None = None,
    ) -> Item:
        owner_id = await self._resolve_owner(token)
        item = await self.item_repo.get_owned(_parse_item_id(item_id), owner_id)
        if item is None:
            raise NotFoundError(ITEM_NOT_FOUND)

        if name is not None:
            name = name.strip()
            if not name:
                raise ValidationError("name must not be empty")
            item.name = name
        if description is not None:
            item.description = description
        item = await self.item_repo.save(item)
        logger.info("updated item id=%s owner=%s", item.id, owner_id)
        return item

    async def delete_item(self, token: str | None, item_id: str | uuid.UUID) -> None:
        """Deleting a missing (or already deleted, or foreign) item is NotFoundError every time."""
        owner_id = await self._resolve_owner(token)
        removed = await self.item_repo.delete_owned(_parse_item_id(item_id), owner_id)
        if not removed:
            raise NotFoundError(ITEM_NOT_FOUND)
        logger.info("deleted item id=%s owner=%s", item_id, owner_id)
