from app.db.base import Base
from app.db.models.user import User
from app.db.models.content import News, Gallery, Video
from app.db.models.comment import Comment, CommentReaction

__all__ = [
    "Base",
    "User",
    "News",
    "Gallery",
    "Video",
    "Comment",
    "CommentReaction"
]
