"""Item request/response schemas - REST API contract."""

import uuid
from datetime import datetime

from pydantic import BaseModel


class ItemCreate(BaseModel):
    # Owner is never accepted from the body; it comes from the verified token.
    name: str
    description: str = ""


class ItemUpdate(BaseModel):
    name: str | None = None
    description: str | None = None


class ItemResponse(BaseModel):
    id: uuid.UUID
    name: str
    description: str
    owner_id: uuid.UUID
    created_at: datetime

    model_config = {"from_attributes": True}
