from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.http import (
    auth_router, comments_router, gallery_router, health_router,
    news_router, users_router, videos_router
)
from app.core.config import settings
from app.core.db import engine
from app.core.errors import NewsDeskError
from app.core.logging import get_logger, setup_logging
from app.db.models import Base

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("News desk started", database=engine.url.render_as_string(hide_password=True))
    yield
    await engine.dispose()


app = FastAPI(
    title="NewsDesk",
    description="Bilingual (English/Telugu) news publishing API",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(NewsDeskError)
async def news_desk_error_handler(request: Request, exc: NewsDeskError):
    if exc.status_code >= 500:
        logger.error("Request failed", path=request.url.path, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content={"status": "fail", "message": exc.message})


@app.exception_handler(PermissionError)
async def permission_error_handler(request: Request, exc: PermissionError):
    return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content={"status": "fail", "message": str(exc)})


app.include_router(health_router)
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(news_router)
app.include_router(gallery_router)
app.include_router(videos_router)
app.include_router(comments_router)


@app.get("/")
async def root():
    return {
        "message": "NewsDesk API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }
