import json

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from app.core.config import settings


def _dumps(value) -> str:
    # Telugu tags stay readable, so ilike search can match them
    return json.dumps(value, ensure_ascii=False)


def build_engine(database_url: str, echo: bool = False):
    return create_async_engine(database_url, future=True, echo=echo, json_serializer=_dumps)


# Async engine
engine = build_engine(settings.database_url, echo=settings.sql_echo)

# Sessions
SessionLocal = sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


async def get_db():
    """Session per request for FastAPI dependency injection"""
    async with SessionLocal() as session:
        yield session
