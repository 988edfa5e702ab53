from typing import Iterable, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.errors import NotFound
from app.core.logging import get_logger
from app.db.repositories.comment_repository import CommentRepository
from app.db.repositories.content_repository import NewsRepository
from app.domains.comments.entities import DISLIKE, LIKE, Comment, CommentThread
from app.domains.comments.schemas import CommentCreate, ReplyCreate
from app.domains.content.entities import News
from app.domains.content.pagination import Page, PaginationEngine, Position, SortOrder
from app.domains.identity.entities import User

logger = get_logger(__name__)


class CommentService:
    """Comment threads under news articles"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repository = CommentRepository(session)
        self.news_repository = NewsRepository(session)
        self.pages = PaginationEngine(self.repository, max_page_size=settings.max_page_size)

    async def add(self, news_slug: str, data: CommentCreate, author: User) -> Comment:
        news = await self._news(news_slug)

        comment = Comment(
            id=None,
            news_id=news.id,
            language=data.language,
            comment=data.comment,
            posted_by=author.id
        )
        created = await self.repository.create(comment)
        logger.info("Comment added", news_id=news.id, id=created.id, language=created.language)
        return created

    async def reply(self, parent_id: int, data: ReplyCreate, author: User) -> Comment:
        parent = await self.get(parent_id)
        created = await self.repository.create(parent.reply(data.comment, author.id))
        logger.info("Reply added", news_id=created.news_id, id=created.id, parent_id=created.parent_id)
        return created

    async def get(self, comment_id: int) -> Comment:
        comment = await self.repository.get_by_id(comment_id)
        if comment is None:
            raise NotFound("Comment not found")
        return comment

    async def delete(self, comment_id: int, user: User) -> int:
        """Delete a comment with its replies; returns the number of rows removed"""
        comment = await self.get(comment_id)
        if not comment.can_be_deleted_by(user):
            raise PermissionError("You don't have permission to delete this comment")

        removed = await self.repository.delete_with_replies(comment_id)
        logger.info("Comment deleted", id=comment_id, removed=removed)
        return removed

    async def like(self, comment_id: int, user: User) -> Tuple[Comment, bool]:
        return await self._react(comment_id, user, LIKE)

    async def dislike(self, comment_id: int, user: User) -> Tuple[Comment, bool]:
        return await self._react(comment_id, user, DISLIKE)

    async def _react(self, comment_id: int, user: User, kind: str) -> Tuple[Comment, bool]:
        """
        Toggle the user's reaction.

        Repeating the current reaction removes it; switching replaces the
        opposite one. Returns the comment with fresh counts and whether
        the reaction is now set.
        """
        comment = await self.get(comment_id)

        current = await self.repository.reaction_of(comment_id, user.id)
        reacted = current != kind
        await self.repository.set_reaction(comment_id, user.id, kind if reacted else None)
        logger.info("Comment reaction", id=comment_id, user_id=user.id, kind=kind, set=reacted)

        await self._attach_counts([comment])
        return comment, reacted

    async def list(
        self,
        news_slug: str,
        language: str = "en",
        position: Position = None,
        limit: int = settings.default_page_size,
        sort: Optional[SortOrder] = SortOrder.NEWEST
    ) -> Page:
        """One page of top-level comments, each carrying its replies newest first"""
        news = await self._news(news_slug)
        thread = CommentThread(news_id=news.id, language=language)
        page = await self.pages.list_page(thread, sort, position, limit)

        replies = await self.repository.replies_for([comment.id for comment in page.items])
        for comment in page.items:
            comment.replies = replies.get(comment.id, [])

        await self._attach_counts(page.items)
        return page

    async def _news(self, news_slug: str) -> News:
        news = await self.news_repository.get_by_slug(news_slug)
        if news is None:
            raise NotFound("News not found")
        return news

    async def _attach_counts(self, comments: Iterable[Comment]) -> None:
        flat = []
        for comment in comments:
            flat.append(comment)
            flat.extend(comment.replies)

        counts = await self.repository.reaction_counts([comment.id for comment in flat])
        for comment in flat:
            comment.likes, comment.dislikes = counts.get(comment.id, (0, 0))
