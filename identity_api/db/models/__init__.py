from identity_api.db.models.user import User

__all__ = ["User"]
