from app.api.http.health import router as health_router
from app.api.http.auth import router as auth_router
from app.api.http.users import router as users_router
from app.api.http.news import router as news_router
from app.api.http.gallery import router as gallery_router
from app.api.http.videos import router as videos_router
from app.api.http.comments import router as comments_router

__all__ = [
    "health_router",
    "auth_router",
    "users_router",
    "news_router",
    "gallery_router",
    "videos_router",
    "comments_router"
]
