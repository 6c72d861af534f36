"""
Pytest fixtures - isolated databases, clients for both services, token helpers.
Each service gets its own in-memory SQLite database, like production where the
two services never share a store.
"""

import uuid
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from identity_api.core.dependencies import get_token_manager
from identity_api.core.security import TokenManager
from identity_api.db.base import Base as IdentityBase
from identity_api.db.session import get_db as get_identity_db
from identity_api.main import app as identity_app
from item_api.core.auth import Claims, IdentityClient, Rejected
from item_api.core.dependencies import get_token_validator
from item_api.core.exceptions import IdentityUnavailableError
from item_api.db.base import Base as ItemBase
from item_api.db.session import get_db as get_item_db
from item_api.main import app as item_app

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_SECRET = "test-signing-secret"
TEST_PASSWORD = "changeme123"


class FakeValidator:
    """Deterministic TokenValidator: knows a fixed set of tokens, counts calls."""

    def __init__(self):
        self.tokens: dict[str, Claims] = {}
        self.calls = 0
        self.unavailable = False

    def grant(self, token: str, user_id: str | None = None, email: str = "") -> Claims:
        claims = Claims(user_id=user_id or str(uuid.uuid4()), email=email)
        self.tokens[token] = claims
        return claims

    async def validate(self, token: str):
        self.calls += 1
        if self.unavailable:
            raise IdentityUnavailableError("connection refused")
        claims = self.tokens.get(token)
        if claims is None:
            return Rejected("token is malformed")
        return claims


async def _session_for(metadata) -> AsyncGenerator[AsyncSession, None]:
    engine = create_async_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with maker() as session:
        yield session
    await engine.dispose()


@pytest_asyncio.fixture
async def identity_session() -> AsyncGenerator[AsyncSession, None]:
    async for session in _session_for(IdentityBase.metadata):
        yield session


@pytest_asyncio.fixture
async def item_session() -> AsyncGenerator[AsyncSession, None]:
    async for session in _session_for(ItemBase.metadata):
        yield session


@pytest.fixture
def token_manager() -> TokenManager:
    return TokenManager(TEST_SECRET, ttl_seconds=3600)


@pytest.fixture
def fake_validator() -> FakeValidator:
    return FakeValidator()


@pytest_asyncio.fixture
async def identity_client(identity_session: AsyncSession, token_manager: TokenManager):
    async def override_get_db():
        yield identity_session

    identity_app.dependency_overrides[get_identity_db] = override_get_db
    identity_app.dependency_overrides[get_token_manager] = lambda: token_manager
    async with AsyncClient(
        transport=ASGITransport(app=identity_app),
        base_url="http://identity",
    ) as ac:
        yield ac
    identity_app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def item_client(item_session: AsyncSession, fake_validator: FakeValidator):
    """Item API whose identity dependency is the in-memory FakeValidator."""

    async def override_get_db():
        yield item_session

    item_app.dependency_overrides[get_item_db] = override_get_db
    item_app.dependency_overrides[get_token_validator] = lambda: fake_validator
    async with AsyncClient(
        transport=ASGITransport(app=item_app),
        base_url="http://items",
    ) as ac:
        yield ac
    item_app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def linked_item_client(item_session: AsyncSession, identity_client: AsyncClient):
    """Item API that validates tokens by calling the real identity app in-process."""

    async def override_get_db():
        yield item_session

    remote = IdentityClient("http://identity", client=identity_client)
    item_app.dependency_overrides[get_item_db] = override_get_db
    item_app.dependency_overrides[get_token_validator] = lambda: remote
    async with AsyncClient(
        transport=ASGITransport(app=item_app),
        base_url="http://items",
    ) as ac:
        yield ac
    item_app.dependency_overrides.clear()


@pytest.fixture
def register_and_login(identity_client: AsyncClient):
    """Register a user through the API and return (user json, access token)."""

    async def _register_and_login(email: str, display_name: str = "Ann") -> tuple[dict, str]:
        r = await identity_client.post(
            "/api/v1/identity/register",
            json={"email": email, "password": TEST_PASSWORD, "display_name": display_name},
        )
        assert r.status_code == 201, r.text
        login = await identity_client.post(
            "/api/v1/identity/login",
            json={"email": email, "password": TEST_PASSWORD},
        )
        assert login.status_code == 200, login.text
        return r.json(), login.json()["access_token"]

    return _register_and_login
