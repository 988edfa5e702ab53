from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from app.db.base import utcnow

LANGUAGES = ("en", "te")

LIKE = "like"
DISLIKE = "dislike"


class CommentThread(BaseModel):
    """Top-level comments of one article in one language"""

    model_config = ConfigDict(frozen=True)

    news_id: int
    language: str


class Comment:
    """Reader comment on a news article; replies hang one level below the root"""

    def __init__(
        self,
        id: Optional[int],
        news_id: int,
        language: str,
        comment: str,
        posted_by: int,
        parent_id: Optional[int] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.id = id
        self.news_id = news_id
        self.language = language
        self.comment = comment
        self.posted_by = posted_by
        self.parent_id = parent_id
        self.created_at = created_at or utcnow()
        self.updated_at = updated_at or utcnow()
        self.likes = 0
        self.dislikes = 0
        self.replies: List["Comment"] = []

    @property
    def is_reply(self) -> bool:
        return self.parent_id is not None

    def can_be_deleted_by(self, user) -> bool:
        return user.is_admin or self.posted_by == user.id

    def reply(self, text: str, author_id: int) -> "Comment":
        """Reply in this comment's thread; replies to replies attach to the root"""
        return Comment(
            id=None,
            news_id=self.news_id,
            language=self.language,
            comment=text,
            posted_by=author_id,
            parent_id=self.parent_id if self.is_reply else self.id
        )

    def __repr__(self) -> str:
        return f"Comment(id={self.id}, news_id={self.news_id}, parent_id={self.parent_id})"
