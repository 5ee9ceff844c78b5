"""Pytest configuration for API tests."""

from collections.abc import AsyncGenerator
import os
from pathlib import Path
import sys

# Add api service root so ``src`` is importable
api_root = Path(__file__).parent.parent
sys.path.insert(0, str(api_root))

# Add project root for shared imports
project_root = api_root.parent.parent
sys.path.insert(0, str(project_root))

# The module-level engine in src.database is never connected in tests
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker  # noqa: E402

from shared.models import Base, Resource, User  # noqa: E402
from src.database import build_engine  # noqa: E402


@pytest.fixture
async def db_engine(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'claims.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(db_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session
        await session.rollback()


@pytest.fixture
def make_user(session_maker):
    """Insert a user and return it."""

    async def _make(github_username: str, display_name: str | None = None) -> User:
        async with session_maker() as session:
            user = User(github_username=github_username, display_name=display_name)
            session.add(user)
            await session.commit()
            await session.refresh(user)
            return user

    return _make


@pytest.fixture
def make_resource(session_maker):
    """Insert an unclaimed resource and return it."""

    async def _make(
        repository_url: str | None = "https://github.com/alice/resource",
        name: str = "resource",
        resource_id: int | None = None,
    ) -> Resource:
        async with session_maker() as session:
            resource = Resource(id=resource_id, name=name, repository_url=repository_url)
            session.add(resource)
            await session.commit()
            await session.refresh(resource)
            return resource

    return _make
