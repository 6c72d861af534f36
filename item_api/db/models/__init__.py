from item_api.db.models.item import Item

__all__ = ["Item"]
