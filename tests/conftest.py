"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator, Callable, Generator
from datetime import datetime, timezone
from pathlib import Path
from uuid import uuid4

# Disable rate limiting in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.entities.profile import Profile
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser
from infrastructure.memory.database import InMemoryDatabase
from infrastructure.memory.memory_uow import InMemoryUnitOfWork

CONFIRMED_AT = datetime(2026, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def database() -> InMemoryDatabase:
    """A fresh, empty in-memory database per test."""
    return InMemoryDatabase()


@pytest.fixture
def uow_factory(database: InMemoryDatabase) -> Callable[[], InMemoryUnitOfWork]:
    """Unit of Work factory bound to the per-test database."""

    def factory() -> InMemoryUnitOfWork:
        return InMemoryUnitOfWork(database)

    return factory


def _register(database: InMemoryDatabase, user: TokenUser) -> None:
    profile = Profile(
        id=user.id,
        email=user.email,
        display_name=user.display_name,
        email_confirmed_at=user.email_confirmed_at,
    )
    database.profiles[profile.id] = profile


@pytest.fixture
def test_user(database: InMemoryDatabase) -> TokenUser:
    """The tag owner in most tests, registered with a confirmed email."""
    user = TokenUser(
        id=uuid4(),
        email="owner@example.com",
        display_name="Owner",
        email_confirmed_at=CONFIRMED_AT,
    )
    _register(database, user)
    return user


@pytest.fixture
def other_user(database: InMemoryDatabase) -> TokenUser:
    """A second registered user with a confirmed email."""
    user = TokenUser(
        id=uuid4(),
        email="friend@example.com",
        display_name="Friend",
        email_confirmed_at=CONFIRMED_AT,
    )
    _register(database, user)
    return user


@pytest.fixture
def unconfirmed_user(database: InMemoryDatabase) -> TokenUser:
    """A registered user who has not confirmed their email yet."""
    user = TokenUser(id=uuid4(), email="pending@example.com", display_name="Pending")
    _register(database, user)
    return user


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key="test-secret-key",
        algorithm="HS256",
        expire_minutes=30,
    )


@pytest.fixture
def headers_for(auth_provider: JWTAuthProvider) -> Callable[[TokenUser], dict[str, str]]:
    """Build authorization headers for any user."""

    def _headers(user: TokenUser) -> dict[str, str]:
        return {"Authorization": f"Bearer {auth_provider.create_token(user)}"}

    return _headers


@pytest.fixture
def auth_headers(
    headers_for: Callable[[TokenUser], dict[str, str]], test_user: TokenUser
) -> dict[str, str]:
    """Authorization headers for the test user."""
    return headers_for(test_user)


@pytest.fixture
def app(
    uow_factory: Callable[[], InMemoryUnitOfWork],
    auth_provider: JWTAuthProvider,
) -> Generator[FastAPI, None, None]:
    """
    Create the application wired for tests.

    The app:
    - Uses the per-test in-memory database
    - Verifies tokens with the test auth provider (send ``headers_for(user)``)
    """
    from api.dependencies.auth import get_auth_provider
    from api.dependencies.uow import get_profile_service
    from api.v1.dependencies import get_sharing_service, get_tag_service
    from domain.services.profile_service import ProfileService
    from domain.services.sharing_service import SharingService
    from domain.services.tag_service import TagService
    from main import create_app

    app = create_app()

    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    app.dependency_overrides[get_tag_service] = lambda: TagService(uow_factory)
    app.dependency_overrides[get_sharing_service] = lambda: SharingService(uow_factory)
    app.dependency_overrides[get_profile_service] = lambda: ProfileService(uow_factory)

    yield app

    app.dependency_overrides.clear()


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def authenticated_client(
    client: AsyncClient, auth_headers: dict[str, str]
) -> AsyncClient:
    """The test client with the test user's token attached by default."""
    client.headers.update(auth_headers)
    return client
