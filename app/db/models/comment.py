from sqlalchemy import Column, ForeignKey, Index, Integer, String, Text, UniqueConstraint

from app.db.base import BaseModel


class Comment(BaseModel):
    __tablename__ = "comments"
    __table_args__ = (
        Index("ix_comments_thread_created_at_id", "news_id", "language", "created_at", "id"),
    )

    # Keyed by id, not slug: slugs change when an article is re-titled
    news_id = Column(Integer, ForeignKey("news.id", ondelete="CASCADE"), nullable=False, index=True)
    language = Column(String(2), nullable=False)
    comment = Column(Text, nullable=False)
    parent_id = Column(Integer, ForeignKey("comments.id", ondelete="CASCADE"), nullable=True, index=True)
    posted_by = Column(Integer, ForeignKey("users.id"), nullable=False)


class CommentReaction(BaseModel):
    """One like or dislike per user and comment"""

    __tablename__ = "comment_reactions"
    __table_args__ = (
        UniqueConstraint("comment_id", "user_id", name="uq_comment_reactions_comment_user"),
    )

    comment_id = Column(Integer, ForeignKey("comments.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    kind = Column(String(7), nullable=False)  # "like" or "dislike"
