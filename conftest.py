import os
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

# Optional overrides for local test runs
from dotenv import load_dotenv

env_test_path = os.path.join(os.path.dirname(__file__), ".env.test")
if os.path.exists(env_test_path):
    load_dotenv(env_test_path, override=True)

# The suite runs against in-memory SQLite; set before any module builds the engine.
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
os.environ["DATABASE_URL"] = TEST_DATABASE_URL
os.environ.setdefault("ENVIRONMENT", "development")

from libs.common.config import get_settings  # noqa: E402
from libs.db.base import Base  # noqa: E402

# Import all models so metadata includes every table
from services.memberships_service import models as _membership_models  # noqa: E402,F401

# Clear cached settings to reload with new env vars
get_settings.cache_clear()
settings = get_settings()


@pytest_asyncio.fixture
async def test_engine():
    """
    Fresh in-memory database per test. StaticPool keeps the single connection
    alive so every session sees the same tables.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    session_factory = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def memberships_client(db_session) -> AsyncGenerator[AsyncClient, None]:
    """
    AsyncClient for the memberships app, with the DB overridden and a front
    desk user signed in. Tests swap the user with ``override_auth``.
    """
    from libs.auth.dependencies import get_current_user
    from libs.db.session import get_async_db
    from services.memberships_service.app.main import app
    from tests.conftest import make_user

    app.dependency_overrides[get_async_db] = lambda: db_session
    app.dependency_overrides[get_current_user] = lambda: make_user()

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def identity_provider():
    """A stand-in identity provider client; tests set its return values."""
    from unittest.mock import AsyncMock, MagicMock

    from services.staff_service.identity_client import IdentityProviderClient

    identity = MagicMock(spec=IdentityProviderClient)
    identity.list_organization_roles = AsyncMock(return_value=[])
    identity.create_organization_invitation = AsyncMock(return_value={"id": "inv_1"})
    identity.update_organization_membership = AsyncMock(return_value={})
    identity.update_user = AsyncMock(return_value={})
    return identity


@pytest_asyncio.fixture
async def staff_client(identity_provider) -> AsyncGenerator[AsyncClient, None]:
    from libs.auth.dependencies import get_current_user
    from services.staff_service.app.main import app
    from services.staff_service.identity_client import get_identity_client
    from tests.conftest import make_user

    app.dependency_overrides[get_identity_client] = lambda: identity_provider
    app.dependency_overrides[get_current_user] = lambda: make_user()

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
