from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.core.logging import get_logger

router = APIRouter(tags=["health"])

logger = get_logger(__name__)


@router.get("/health")
async def health(db: AsyncSession = Depends(get_db)):
    """Liveness plus a round trip to the database"""
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.warning("Health check could not reach the database", error=str(exc))
        return {"status": "degraded", "database": "unavailable"}

    return {"status": "ok", "database": "ok"}
