from typing import Literal

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.http.listing import PageQuery, page_response
from app.core.auth import get_current_user
from app.core.db import get_db
from app.domains.comments.schemas import CommentCreate, CommentResponse, ReactionResponse, ReplyCreate
from app.domains.comments.services import CommentService
from app.domains.content.schemas import ItemResponse, ListResponse, MessageResponse
from app.domains.identity.entities import User

router = APIRouter(prefix="/comments", tags=["comments"])


@router.post("/reply/{comment_id}", response_model=ItemResponse[CommentResponse], status_code=status.HTTP_201_CREATED)
async def reply_to_comment(
    comment_id: int,
    data: ReplyCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    comment = await CommentService(db).reply(comment_id, data, current_user)
    return {"status": "success", "item": CommentResponse.model_validate(comment)}


@router.get("/{news_slug}", response_model=ListResponse[CommentResponse])
async def list_comments(
    news_slug: str,
    language: Literal["en", "te"] = Query("en"),
    query: PageQuery = Depends(),
    db: AsyncSession = Depends(get_db)
):
    """Top-level comments of an article, newest first, with their replies"""
    page = await CommentService(db).list(news_slug, language, query.position(), query.limit)
    return page_response(page, CommentResponse)


@router.post("/{news_slug}", response_model=ItemResponse[CommentResponse], status_code=status.HTTP_201_CREATED)
async def add_comment(
    news_slug: str,
    data: CommentCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    comment = await CommentService(db).add(news_slug, data, current_user)
    return {"status": "success", "item": CommentResponse.model_validate(comment)}


@router.delete("/{comment_id}", response_model=MessageResponse)
async def delete_comment(
    comment_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    await CommentService(db).delete(comment_id, current_user)
    return {"status": "success", "message": "Comment deleted"}


@router.put("/{comment_id}/like", response_model=ReactionResponse)
async def like_comment(
    comment_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Like a comment; liking it again removes the like"""
    comment, liked = await CommentService(db).like(comment_id, current_user)
    message = "Liked successfully" if liked else "Like removed"
    return {"status": "success", "message": message, "item": CommentResponse.model_validate(comment)}


@router.put("/{comment_id}/dislike", response_model=ReactionResponse)
async def dislike_comment(
    comment_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Dislike a comment; disliking it again removes the dislike"""
    comment, disliked = await CommentService(db).dislike(comment_id, current_user)
    message = "Disliked successfully" if disliked else "Dislike removed"
    return {"status": "success", "message": message, "item": CommentResponse.model_validate(comment)}
