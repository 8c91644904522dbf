"""Pytest configuration for all tests."""

import os

# Settings are read on first use; these must be in place before any import
# of inkpress touches get_settings().
os.environ.setdefault("INKPRESS_SECRET_KEY", "k3Jq9vXw2LpR7tYz4NbM8cFh6GdS1aQe5UiO0PlKjHgT")
os.environ.setdefault("INKPRESS_ENVIRONMENT", "testing")
os.environ.setdefault("INKPRESS_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("INKPRESS_PASSWORD_HASH_COST", "1")
os.environ.setdefault("INKPRESS_PASSWORD_HASH_MEMORY_KIB", "64")
os.environ.setdefault("INKPRESS_LOG_LEVEL", "WARNING")

from datetime import timedelta
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from inkpress.core.config import AuthConfig
from inkpress.infrastructure.auth import CredentialHasher, TokenIssuer, TokenVerifier
from inkpress.infrastructure.persistence.database import Base

TEST_SECRET = "test-signing-secret-0123456789-abcdefghij"


@pytest.fixture
def auth_config() -> AuthConfig:
    """Auth configuration with a cheap hash cost."""
    return AuthConfig(
        secret_key=TEST_SECRET,
        access_token_lifetime=timedelta(days=7),
        refresh_token_lifetime=timedelta(days=30),
        hash_time_cost=1,
        hash_memory_kib=64,
        hash_parallelism=1,
    )


@pytest.fixture
def hasher(auth_config: AuthConfig) -> CredentialHasher:
    return CredentialHasher(auth_config)


@pytest.fixture
def issuer(auth_config: AuthConfig) -> TokenIssuer:
    return TokenIssuer(auth_config)


@pytest.fixture
def verifier(auth_config: AuthConfig) -> TokenVerifier:
    return TokenVerifier(auth_config)


@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Session factory over a fresh in-memory SQLite database."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session.

    Uses an in-memory SQLite database for testing.
    """
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with overridden database dependency."""
    from inkpress.infrastructure.api.app import create_app
    from inkpress.infrastructure.persistence.database import get_db_session

    app = create_app()
    app.dependency_overrides[get_db_session] = lambda: db_session

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides = {}
