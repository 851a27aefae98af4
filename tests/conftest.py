import os
import sys
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

sys.path.append(str(Path(__file__).parents[1] / "src"))

ENV_TEST_PATH = Path(__file__).parents[1] / ".env.test"


def _load_env_file(path: Path) -> None:
    if not path.exists():
        return
    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        os.environ.setdefault(key, value)


_load_env_file(ENV_TEST_PATH)

# Settings are read at import time, so these must be in place first.
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-access-secret")
os.environ.setdefault("JWT_REFRESH_SECRET", "test-refresh-secret")

from finboss.db.session import get_db  # noqa: E402
from finboss.main import app  # noqa: E402

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite://")

PASSWORD = "password123"


def _make_engine():
    if TEST_DATABASE_URL.startswith("sqlite"):
        # One shared in-memory database for every connection of the test.
        return create_async_engine(
            TEST_DATABASE_URL,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_async_engine(TEST_DATABASE_URL, echo=False)


@pytest.fixture(scope="function")
async def setup_database():
    """Create tables for tests that need the database, and drop them after.

    Not autouse, so pure unit tests run without a database.
    """
    from finboss.models import Base

    engine = _make_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def db_session(setup_database):
    """Provide test database session with fresh connection per test."""
    session_factory = async_sessionmaker(
        setup_database, class_=AsyncSession, expire_on_commit=False
    )
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def seeded_categories(db_session: AsyncSession):
    """Default categories, as inserted at application startup."""
    from finboss.services.category import seed_default_categories

    await seed_default_categories(db_session)


async def _create_user(db_session: AsyncSession, email: str, first_name: str):
    from finboss.core.security import hash_password
    from finboss.models.user import User
    from finboss.repositories.user import UserRepository

    repo = UserRepository(db_session)
    user = User(
        email=email,
        password_hash=hash_password(PASSWORD),
        first_name=first_name,
        last_name="Tester",
    )
    return await repo.create(user)


def _headers_for(user) -> dict[str, str]:
    from finboss.core.security import create_access_token

    token = create_access_token(user.id, user.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def test_user(db_session: AsyncSession):
    """Create a test user for authentication tests."""
    return await _create_user(db_session, "testuser@example.com", "Test")


@pytest.fixture
async def other_user(db_session: AsyncSession):
    """A second user, for ownership checks."""
    return await _create_user(db_session, "other@example.com", "Other")


@pytest.fixture
async def auth_headers(test_user):
    """Provide authentication headers with valid JWT token."""
    return _headers_for(test_user)


@pytest.fixture
async def other_headers(other_user):
    return _headers_for(other_user)


@pytest.fixture
async def client(db_session: AsyncSession):
    """Provide test client with database override."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
