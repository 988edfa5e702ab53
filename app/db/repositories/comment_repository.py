from typing import Dict, List, Optional, Sequence, Tuple

from sqlalchemy import delete, func, or_, select
from sqlalchemy.exc import SQLAlchemyError

from app.core.errors import StoreUnavailable
from app.db.models.comment import Comment as CommentModel
from app.db.models.comment import CommentReaction as ReactionModel
from app.db.repositories.base import PagedRepository
from app.domains.comments.entities import DISLIKE, LIKE, Comment, CommentThread


class CommentRepository(PagedRepository):
    """Comments table; pages over the top-level comments of a thread"""

    model = CommentModel

    async def create(self, comment: Comment) -> Comment:
        row = CommentModel(
            news_id=comment.news_id,
            language=comment.language,
            comment=comment.comment,
            parent_id=comment.parent_id,
            posted_by=comment.posted_by,
            created_at=comment.created_at,
            updated_at=comment.updated_at
        )

        self.session.add(row)
        await self._commit()
        await self.session.refresh(row)
        return self._to_domain(row)

    async def get_by_id(self, comment_id: int) -> Optional[Comment]:
        result = await self._run(self._select().where(CommentModel.id == comment_id))
        row = result.scalar_one_or_none()
        return self._to_domain(row) if row else None

    async def replies_for(self, parent_ids: Sequence[int]) -> Dict[int, List[Comment]]:
        """Replies grouped by parent, newest first"""
        if not parent_ids:
            return {}

        query = self._ordered(
            self._select().where(CommentModel.parent_id.in_(list(parent_ids))),
            descending=True
        )
        result = await self._run(query)

        grouped: Dict[int, List[Comment]] = {}
        for row in result.scalars().all():
            grouped.setdefault(row.parent_id, []).append(self._to_domain(row))
        return grouped

    async def delete_with_replies(self, comment_id: int) -> int:
        """Remove a comment, its replies and their reactions in one transaction"""
        thread = or_(CommentModel.id == comment_id, CommentModel.parent_id == comment_id)

        await self._run(
            delete(ReactionModel).where(
                ReactionModel.comment_id.in_(select(CommentModel.id).where(thread))
            )
        )
        result = await self._run(delete(CommentModel).where(thread))
        await self._commit()
        return result.rowcount

    async def reaction_of(self, comment_id: int, user_id: int) -> Optional[str]:
        result = await self._run(
            select(ReactionModel.kind).where(
                ReactionModel.comment_id == comment_id,
                ReactionModel.user_id == user_id
            )
        )
        return result.scalar_one_or_none()

    async def set_reaction(self, comment_id: int, user_id: int, kind: Optional[str]) -> None:
        """Replace the user's reaction on a comment; ``None`` clears it"""
        await self._run(
            delete(ReactionModel).where(
                ReactionModel.comment_id == comment_id,
                ReactionModel.user_id == user_id
            )
        )
        if kind is not None:
            self.session.add(ReactionModel(comment_id=comment_id, user_id=user_id, kind=kind))
        await self._commit()

    async def reaction_counts(self, comment_ids: Sequence[int]) -> Dict[int, Tuple[int, int]]:
        """(likes, dislikes) per comment id"""
        if not comment_ids:
            return {}

        result = await self._run(
            select(ReactionModel.comment_id, ReactionModel.kind, func.count(ReactionModel.id))
            .where(ReactionModel.comment_id.in_(list(comment_ids)))
            .group_by(ReactionModel.comment_id, ReactionModel.kind)
        )

        counts: Dict[int, Tuple[int, int]] = {}
        for comment_id, kind, total in result.all():
            likes, dislikes = counts.get(comment_id, (0, 0))
            if kind == LIKE:
                likes = total
            elif kind == DISLIKE:
                dislikes = total
            counts[comment_id] = (likes, dislikes)
        return counts

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            raise StoreUnavailable("Comment store is unavailable") from exc

    def _conditions(self, criteria: CommentThread) -> list:
        return [
            CommentModel.news_id == criteria.news_id,
            CommentModel.language == criteria.language,
            CommentModel.parent_id.is_(None),
        ]

    def _to_domain(self, row) -> Comment:
        return Comment(
            id=row.id,
            news_id=row.news_id,
            language=row.language,
            comment=row.comment,
            posted_by=row.posted_by,
            parent_id=row.parent_id,
            created_at=row.created_at,
            updated_at=row.updated_at
        )
