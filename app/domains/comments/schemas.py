from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ReplyCreate(BaseModel):
    comment: str = Field(..., min_length=1, max_length=2000)

    @field_validator('comment')
    @classmethod
    def validate_comment(cls, v):
        if not v.strip():
            raise ValueError('Comment cannot be empty')
        return v.strip()


class CommentCreate(ReplyCreate):
    language: Literal["en", "te"] = "en"


class CommentResponse(BaseModel):
    id: int
    news_id: int
    language: str
    comment: str
    parent_id: Optional[int] = None
    posted_by: int
    created_at: datetime
    likes: int = 0
    dislikes: int = 0
    replies: List["CommentResponse"] = []

    model_config = ConfigDict(from_attributes=True)


class ReactionResponse(BaseModel):
    status: Literal["success"] = "success"
    message: str
    item: CommentResponse
