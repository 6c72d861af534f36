# Repository pattern: services depend on these, never on raw sessions

from item_api.db.repositories.item_repository import ItemRepository

__all__ = ["ItemRepository"]
