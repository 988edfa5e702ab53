from app.db.repositories.user_repository import UserRepository
from app.db.repositories.content_repository import (
    ContentRepository, NewsRepository, GalleryRepository, VideoRepository
)
from app.db.repositories.comment_repository import CommentRepository

__all__ = [
    "UserRepository",
    "ContentRepository",
    "NewsRepository",
    "GalleryRepository",
    "VideoRepository",
    "CommentRepository"
]
