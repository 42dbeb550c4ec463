"""
EarthSafe API - Test Configuration

Pytest fixtures and configuration.
"""

import os
import tempfile

# Settings are read at import time, so point them at test resources first
os.environ["DATABASE_URL_ASYNC"] = "sqlite+aiosqlite://"
os.environ["APP_ENV"] = "testing"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["USE_MOCK_DATA"] = "false"
os.environ["STORAGE_LOCAL_PATH"] = tempfile.mkdtemp(prefix="earthsafe-uploads-")

from typing import AsyncGenerator, Callable, Dict  # noqa: E402

import pytest_asyncio  # noqa: E402
from httpx import AsyncClient, ASGITransport  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import app.models  # noqa: E402,F401
from app.database import Base, get_async_session  # noqa: E402
from app.models.organization import (  # noqa: E402
    Membership,
    MembershipStatus,
    Organization,
    OrganizationType,
    OrgRole,
)
from app.models.user import User, UserRole  # noqa: E402
from app.utils.security import create_access_token, get_password_hash  # noqa: E402
from main import app  # noqa: E402


TEST_PASSWORD = "TestPassword123!"

@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh in-memory database for each test."""
    # StaticPool keeps a single connection, so every session sees the same database
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )
    async with session_factory() as session:
        yield session
        await session.rollback()

    await test_engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with database session override."""

    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_async_session] = override_get_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ===========================================
# DATA FIXTURES
# ===========================================

async def _create_user(db_session: AsyncSession, email: str, first_name: str, **kwargs) -> User:
    user = User(
        email=email,
        hashed_password=get_password_hash(TEST_PASSWORD),
        first_name=first_name,
        last_name="Moyo",
        role=kwargs.pop("role", UserRole.MINER),
        is_active=kwargs.pop("is_active", True),
        is_verified=True,
        **kwargs,
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> User:
    """Owner of the test organization."""
    return await _create_user(db_session, "owner@example.com", "Tendai", phone_number="+263771000001")


@pytest_asyncio.fixture
async def other_user(db_session: AsyncSession) -> User:
    """A user with no membership in the test organization."""
    return await _create_user(db_session, "outsider@example.com", "Rudo")


@pytest_asyncio.fixture
async def test_org(db_session: AsyncSession, test_user: User) -> Organization:
    """A mine owned by test_user."""
    org = Organization(
        name="Test Mine",
        type=OrganizationType.MINE,
        location="Kwekwe",
        commodity=["gold"],
        mining_license_number="ML-TEST-001",
        created_by_id=test_user.id,
    )
    db_session.add(org)
    await db_session.flush()
    db_session.add(Membership(
        user_id=test_user.id,
        org_id=org.id,
        role=OrgRole.OWNER,
        status=MembershipStatus.ACTIVE,
    ))
    await db_session.commit()
    await db_session.refresh(org)
    return org


@pytest_asyncio.fixture
async def add_member(db_session: AsyncSession) -> Callable:
    """Factory: add a user to an organization with a given role."""

    async def _add(org: Organization, user: User, role: OrgRole = OrgRole.MINER) -> Membership:
        membership = Membership(
            user_id=user.id,
            org_id=org.id,
            role=role,
            status=MembershipStatus.ACTIVE,
        )
        db_session.add(membership)
        await db_session.commit()
        await db_session.refresh(membership)
        return membership

    return _add


def headers_for(user: User) -> Dict[str, str]:
    token = create_access_token(data={"sub": str(user.id), "email": user.email})
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def auth_headers(test_user: User) -> dict:
    """Generate authorization headers for test user."""
    return headers_for(test_user)


@pytest_asyncio.fixture
async def other_headers(other_user: User) -> dict:
    return headers_for(other_user)


@pytest_asyncio.fixture
async def make_headers() -> Callable:
    """Factory: authorization headers for any user."""
    return headers_for
