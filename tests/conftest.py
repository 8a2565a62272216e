"""Shared pytest fixtures for repository and API integration tests."""

from __future__ import annotations

import os

os.environ.setdefault("ENV", "test")
os.environ.setdefault("LOG_DIR", "")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-jobly-unit-tests")

from collections.abc import AsyncGenerator  # noqa: E402
from urllib.parse import quote_plus  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from sqlalchemy import text  # noqa: E402
from sqlalchemy.exc import SQLAlchemyError  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool  # noqa: E402

from jobly.db.base import Base  # noqa: E402
from tests.clients import client, fake_backend, fake_client  # noqa: E402,F401
from tests.factories import (  # noqa: E402,F401
    company_factory,
    job_factory,
    seeded,
    user_factory,
)


def _default_test_database_url() -> str:
    """Build the asyncpg URL for the test database from ``TEST_DB_*`` variables.

    Defaults to ``postgres@localhost:5432/jobly_test`` with the password taken
    from ``TEST_DB_PASSWORD`` or ``DB_PASSWORD``.
    """
    host = os.getenv("TEST_DB_HOST", "localhost")
    port = os.getenv("TEST_DB_PORT", "5432")
    user = os.getenv("TEST_DB_USER", os.getenv("DB_USER", "postgres"))
    name = os.getenv("TEST_DB_NAME", "jobly_test")
    password = os.getenv("TEST_DB_PASSWORD") or os.getenv("DB_PASSWORD", "")

    return (
        f"postgresql+asyncpg://{quote_plus(user)}:{quote_plus(password)}"
        f"@{host}:{port}/{name}"
    )


TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", _default_test_database_url())


@pytest_asyncio.fixture(scope="session")
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Provide an engine on the test database with the schema created.

    Skips every dependent test when the database cannot be reached.
    """
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)

    try:
        async with engine.begin() as connection:
            await connection.run_sync(Base.metadata.drop_all)
            await connection.run_sync(Base.metadata.create_all)
    except (SQLAlchemyError, OSError) as exc:
        await engine.dispose()
        pytest.skip(f"Test database unavailable: {exc}")

    try:
        yield engine
    finally:
        async with engine.begin() as connection:
            await connection.run_sync(Base.metadata.drop_all)
        await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Provide a per-test session; all tables are truncated afterwards."""
    session_maker = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_maker() as session:
        try:
            yield session
        finally:
            await session.rollback()
            await session.execute(
                text("TRUNCATE TABLE jobs, companies, users RESTART IDENTITY CASCADE")
            )
            await session.commit()
