"""
Item model - the owned resource.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from item_api.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Item(Base):
    """
    Item entity. owner_id holds the identity service's user id; users live in
    another database, so ownership is enforced by every query predicate.
    """

    __tablename__ = "items"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    owner_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        return f"<Item(id={self.id}, name={self.name})>"
