"""User request/response schemas - API contract for registration and login."""

import uuid
from datetime import datetime

from pydantic import BaseModel, EmailStr


class Credentials(BaseModel):
    # Plain str: a malformed email at login is just a failed login
    email: str
    password: str


class UserCreate(BaseModel):
    # Length policy is enforced by IdentityService so every caller gets the same errors.
    email: EmailStr
    password: str
    display_name: str


class UserResponse(BaseModel):
    """Public view of a user. Never includes the password hash."""

    id: uuid.UUID
    email: str
    display_name: str
    created_at: datetime

    model_config = {"from_attributes": True}
