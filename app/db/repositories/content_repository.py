from typing import Optional

from sqlalchemy import String, cast, delete, func, or_, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.core.errors import InvalidContent, SlugConflict, StoreUnavailable
from app.core.logging import get_logger
from app.db.base import utcnow
from app.db.models.comment import Comment as CommentModel
from app.db.models.comment import CommentReaction as ReactionModel
from app.db.models.content import Gallery as GalleryModel
from app.db.models.content import News as NewsModel
from app.db.models.content import Video as VideoModel
from app.db.repositories.base import PagedRepository
from app.domains.content.entities import ContentItem, Gallery, News, Video
from app.domains.content.filters import ContentFilter

logger = get_logger(__name__)


def is_slug_violation(exc: IntegrityError) -> bool:
    """Unique violation on the slug column (SQLite and PostgreSQL wording)"""
    return "slug" in str(exc.orig).lower()


class ContentRepository(PagedRepository):
    """Content store for one collection; the slug column is unique per table"""

    entity = ContentItem
    category_column = "category_en"
    search_columns: tuple = ()

    async def get_by_id(self, item_id: int) -> Optional[ContentItem]:
        result = await self._run(self._select().where(self.model.id == item_id))
        row = result.scalar_one_or_none()
        return self._to_domain(row) if row else None

    async def get_by_slug(self, slug: str) -> Optional[ContentItem]:
        result = await self._run(self._select().where(self.model.slug == slug))
        row = result.scalar_one_or_none()
        return self._to_domain(row) if row else None

    async def slug_exists(self, slug: str, exclude_id: Optional[int] = None) -> bool:
        query = select(self.model.id).where(self.model.slug == slug)
        if exclude_id is not None:
            query = query.where(self.model.id != exclude_id)

        result = await self._run(query.limit(1))
        return result.first() is not None

    async def insert(self, item: ContentItem) -> ContentItem:
        """Persist a new item; the row and its slug commit together or not at all"""
        row = self.model(
            slug=item.slug,
            posted_by=item.posted_by,
            created_at=item.created_at,
            updated_at=item.updated_at,
            **item.payload()
        )

        self.session.add(row)
        await self._commit(item.slug)
        await self.session.refresh(row)
        return self._to_domain(row)

    async def update_by_id(self, item_id: int, changes: dict) -> Optional[ContentItem]:
        values = dict(changes)
        values["updated_at"] = utcnow()

        try:
            result = await self.session.execute(
                update(self.model).where(self.model.id == item_id).values(**values)
            )
        except IntegrityError as exc:
            await self.session.rollback()
            self._raise_integrity(exc, values.get("slug"))
        except SQLAlchemyError as exc:
            await self.session.rollback()
            raise StoreUnavailable("Content store is unavailable") from exc

        await self._commit(values.get("slug"))

        if result.rowcount == 0:
            return None

        return await self.get_by_id(item_id)

    async def delete_by_id(self, item_id: int) -> bool:
        result = await self._run(delete(self.model).where(self.model.id == item_id))
        await self._commit()
        return result.rowcount > 0

    async def _commit(self, slug: Optional[str] = None) -> None:
        try:
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            self._raise_integrity(exc, slug)
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.error("Commit failed", table=self.model.__tablename__, error=str(exc))
            raise StoreUnavailable("Content store is unavailable") from exc

    def _raise_integrity(self, exc: IntegrityError, slug: Optional[str]) -> None:
        if slug is not None and is_slug_violation(exc):
            raise SlugConflict(slug) from exc
        logger.warning("Constraint violation", table=self.model.__tablename__, error=str(exc.orig))
        raise InvalidContent(f"Invalid {self.entity.kind} data") from exc

    def _conditions(self, criteria: ContentFilter) -> list:
        conditions = []

        if criteria.category:
            column = getattr(self.model, self.category_column)
            conditions.append(func.lower(column) == criteria.category.lower())

        if criteria.writer is not None:
            conditions.append(self.model.posted_by == criteria.writer)

        if criteria.search_text:
            pattern = f"%{criteria.search_text}%"
            conditions.append(or_(*[
                cast(getattr(self.model, name), String).ilike(pattern)
                for name in self.search_columns
            ]))

        since, before = criteria.created_bounds()
        if since is not None:
            conditions.append(self.model.created_at >= since)
        if before is not None:
            conditions.append(self.model.created_at < before)

        return conditions

    def _to_domain(self, row) -> ContentItem:
        return self.entity(
            id=row.id,
            slug=row.slug,
            posted_by=row.posted_by,
            created_at=row.created_at,
            updated_at=row.updated_at,
            **{name: getattr(row, name) for name in self.entity.payload_fields}
        )


class NewsRepository(ContentRepository):
    model = NewsModel
    entity = News
    search_columns = (
        "title_en", "title_te", "description_en", "description_te",
        "sub_category_en", "sub_category_te", "tags_en", "tags_te",
    )

    async def delete_by_id(self, item_id: int) -> bool:
        """Delete an article with its comment threads in a single transaction"""
        comments = select(CommentModel.id).where(CommentModel.news_id == item_id)

        await self._run(delete(ReactionModel).where(ReactionModel.comment_id.in_(comments)))
        await self._run(delete(CommentModel).where(CommentModel.news_id == item_id))
        result = await self._run(delete(self.model).where(self.model.id == item_id))
        await self._commit()
        return result.rowcount > 0


class GalleryRepository(ContentRepository):
    model = GalleryModel
    entity = Gallery
    search_columns = (
        "title_en", "title_te", "name_en", "name_te",
        "description_en", "description_te", "tags_en", "tags_te",
    )


class VideoRepository(ContentRepository):
    model = VideoModel
    entity = Video
    category_column = "category"
    search_columns = ("title_en", "title_te", "sub_category_en", "sub_category_te")
