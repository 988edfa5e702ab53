"""Shared pytest fixtures: a fresh SQLite database per test, users and content."""

import os

os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from datetime import datetime, timedelta
from pathlib import Path
from typing import List, Optional

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import sessionmaker

from app.core.db import build_engine, get_db
from app.core.security import create_access_token
from app.db.models import Base
from app.db.repositories.content_repository import NewsRepository
from app.db.repositories.user_repository import UserRepository
from app.domains.content.entities import News
from app.domains.content.schemas import NewsCreate
from app.domains.identity.entities import User
from app.main import app


@pytest.fixture
async def engine(tmp_path: Path):
    """File-backed database so concurrent sessions see each other's commits."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'newsdesk.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


async def make_user(session: AsyncSession, username: str, role: str) -> User:
    user = User.create_user(
        email=f"{username}@example.com",
        username=username,
        password="Secret123",
        full_name=username.capitalize(),
        role=role
    )
    return await UserRepository(session).create(user)


@pytest.fixture
async def writer(session) -> User:
    return await make_user(session, "writer", "writer")


@pytest.fixture
async def other_writer(session) -> User:
    return await make_user(session, "other_writer", "writer")


@pytest.fixture
async def admin(session) -> User:
    return await make_user(session, "admin", "admin")


@pytest.fixture
async def reader(session) -> User:
    return await make_user(session, "reader", "user")


def auth_headers(user: User) -> dict:
    token = create_access_token(data={"sub": str(user.id), "role": user.role})
    return {"Authorization": f"Bearer {token}"}


def news_payload(title_en: str = "Hello World", **overrides) -> NewsCreate:
    data = {
        "title_en": title_en,
        "title_te": "హలో వరల్డ్",
        "description_en": "Body of the article",
        "description_te": "వ్యాసం",
        "category_en": "Politics",
        "category_te": "రాజకీయాలు",
        "tags_en": ["election"],
        "tags_te": ["ఎన్నికలు"],
        "main_url": "https://cdn.example.com/cover.jpg",
    }
    data.update(overrides)
    return NewsCreate(**data)


async def seed_news(
    session: AsyncSession,
    count: int,
    author: User,
    start: Optional[datetime] = None,
    step: timedelta = timedelta(minutes=1),
    prefix: str = "story",
    **overrides
) -> List[News]:
    """Insert ``count`` articles with increasing ``created_at`` (``step`` of zero gives ties)."""
    repository = NewsRepository(session)
    start = start or datetime(2024, 1, 1, 12, 0)
    items = []
    for index in range(count):
        payload = news_payload(f"{prefix} {index}", **overrides).model_dump()
        news = News(
            slug=f"{prefix}-{index}",
            posted_by=author.id,
            created_at=start + step * index,
            **payload
        )
        items.append(await repository.insert(news))
    return items


@pytest.fixture
async def client(session_factory):
    """HTTP client against the app, bound to the per-test database."""
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http_client:
        yield http_client
    app.dependency_overrides.clear()
