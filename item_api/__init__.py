"""Item service: owner-scoped CRUD authorized by the identity service."""

__version__ = "1.0.0"
