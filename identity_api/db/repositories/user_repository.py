"""
User repository - encapsulates all credential store access.
"""

from sqlalchemy import select

from identity_api.db.models.user import User
from identity_api.db.repositories.base_repository import BaseRepository, store_errors


class UserRepository(BaseRepository[User]):
    """User-specific queries."""

    def __init__(self, session):
        super().__init__(session, User)

    async def get_by_email(self, email: str) -> User | None:
        """Find user by (already normalized) email - used for login and uniqueness checks."""
        with store_errors("load user by email"):
            result = await self.session.execute(select(User).where(User.email == email))
            return result.scalar_one_or_none()
