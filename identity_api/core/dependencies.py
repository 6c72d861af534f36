"""
FastAPI dependencies - wiring for the token manager and identity service.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from identity_api.config import get_settings
from identity_api.core.security import TokenManager
from identity_api.db.repositories.user_repository import UserRepository
from identity_api.db.session import DbSession
from identity_api.services.identity_service import IdentityService


@lru_cache
def get_token_manager() -> TokenManager:
    """Single TokenManager per process; the secret is read-only after start."""
    settings = get_settings()
    return TokenManager(
        settings.jwt_secret,
        ttl_seconds=settings.token_ttl_seconds,
        algorithm=settings.jwt_algorithm,
    )


def get_identity_service(
    session: DbSession,
    tokens: Annotated[TokenManager, Depends(get_token_manager)],
) -> IdentityService:
    """Factory for service with repository injection."""
    return IdentityService(UserRepository(session), tokens)


IdentityServiceDep = Annotated[IdentityService, Depends(get_identity_service)]
