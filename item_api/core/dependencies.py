"""
FastAPI dependencies - injection for the token validator and item service.
Design: One shared IdentityClient (and its connection pool) per process.
Tests replace get_token_validator through app.dependency_overrides.
"""

from typing import Annotated

from fastapi import Depends

from item_api.config import get_settings
from item_api.core.auth import AuthorizationGateway, IdentityClient, TokenValidator
from item_api.db.repositories.item_repository import ItemRepository
from item_api.db.session import DbSession
from item_api.services.item_service import ItemService

_identity_client: IdentityClient | None = None


async def get_token_validator() -> TokenValidator:
    """Lazily build the remote validator from settings. Async so it runs on the event loop."""
    global _identity_client
    if _identity_client is None:
        settings = get_settings()
        _identity_client = IdentityClient(
            settings.identity_url,
            timeout=settings.identity_timeout_seconds,
        )
    return _identity_client


async def close_token_validator() -> None:
    global _identity_client
    if _identity_client is not None:
        await _identity_client.aclose()
        _identity_client = None


def get_item_service(
    session: DbSession,
    validator: Annotated[TokenValidator, Depends(get_token_validator)],
) -> ItemService:
    """Factory for service with repository and gateway injection."""
    return ItemService(
        ItemRepository(session),
        AuthorizationGateway(validator),
        page_size=get_settings().page_size,
    )


ItemServiceDep = Annotated[ItemService, Depends(get_item_service)]
