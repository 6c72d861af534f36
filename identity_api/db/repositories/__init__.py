# Repository pattern: services depend on these, never on raw sessions

from identity_api.db.repositories.user_repository import UserRepository

__all__ = ["UserRepository"]
