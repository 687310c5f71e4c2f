"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator, Callable
from pathlib import Path
from uuid import uuid4

# Disable rate limiting in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser
from infrastructure.database.models import Base
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork

# Test database URL (SQLite in memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Fixed test user IDs for consistency
TEST_USER_ID = uuid4()
OTHER_USER_ID = uuid4()


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """A fresh in-memory database per test, shared by every connection."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
def uow_factory(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[[], SQLAlchemyUnitOfWork]:
    """Unit of Work factory bound to the test database."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    return factory


@pytest.fixture
def test_user() -> TokenUser:
    """Create a test user with fixed ID."""
    return TokenUser(
        id=TEST_USER_ID,
        email="owner@example.com",
        display_name="Team Owner",
    )


@pytest.fixture
def other_user() -> TokenUser:
    """A second user, the invitee in most scenarios."""
    return TokenUser(
        id=OTHER_USER_ID,
        email="invitee@example.com",
        display_name="Invitee",
    )


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

    def build(user: TokenUser) -> dict[str, str]:
        return {"Authorization": f"Bearer {auth_provider.create_token(user)}"}

    return build


@pytest.fixture
def auth_headers(
    headers_for: Callable[[TokenUser], dict[str, str]], test_user: TokenUser
) -> dict[str, str]:
    """Create authorization headers for the test user."""
    return headers_for(test_user)


@pytest.fixture
def other_headers(
    headers_for: Callable[[TokenUser], dict[str, str]], other_user: TokenUser
) -> dict[str, str]:
    """Create authorization headers for the second user."""
    return headers_for(other_user)


@pytest.fixture
def app(
    session_factory: async_sessionmaker[AsyncSession],
    uow_factory: Callable[[], SQLAlchemyUnitOfWork],
    auth_provider: JWTAuthProvider,
) -> FastAPI:
    """
    Create the application with database and auth overrides.

    - Services run against the in-memory SQLite database
    - Tokens are validated with the test secret, so each test can act as
      several users
    """
    from api.dependencies.auth import get_auth_provider
    from api.v1.dependencies import (
        get_invitation_service,
        get_membership_service,
        get_task_service,
    )
    from domain.services.invitation_service import InvitationService
    from domain.services.membership_service import MembershipService
    from domain.services.task_service import TaskService
    from infrastructure.database.session import get_async_session
    from main import create_app

    app = create_app()

    async def override_get_async_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    app.dependency_overrides[get_async_session] = override_get_async_session
    app.dependency_overrides[get_membership_service] = lambda: MembershipService(uow_factory)
    app.dependency_overrides[get_invitation_service] = lambda: InvitationService(uow_factory)
    app.dependency_overrides[get_task_service] = lambda: TaskService(uow_factory)
    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client. Pass auth headers per request."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()
