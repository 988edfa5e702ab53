from typing import Optional

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.errors import NotFound
from app.core.logging import get_logger
from app.db.repositories.content_repository import (
    ContentRepository, GalleryRepository, NewsRepository, VideoRepository
)
from app.domains.content.entities import ContentItem, Video
from app.domains.content.filters import ContentFilter
from app.domains.content.pagination import Page, PaginationEngine, Position, SortOrder
from app.domains.content.slugs import SlugGenerator
from app.domains.identity.entities import User

logger = get_logger(__name__)


class ContentService:
    """Create, edit, look up and list one kind of slugged content"""

    repository_class = ContentRepository
    collection = "content"

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repository = self.repository_class(session)
        self.slugs = SlugGenerator(self.repository, self.collection)
        self.pages = PaginationEngine(self.repository, max_page_size=settings.max_page_size)

    async def create(self, data: BaseModel, author: User) -> ContentItem:
        if not author.can_publish:
            raise PermissionError(f"Only writers and admins can post {self.collection}")

        item = self.repository.entity(posted_by=author.id, **self._values(data.model_dump()))

        async def persist(slug: str) -> ContentItem:
            item.slug = slug
            return await self.repository.insert(item)

        created = await self.slugs.claim(item.title, persist)
        logger.info("Content created", collection=self.collection, id=created.id, slug=created.slug)
        return created

    async def edit(self, item_id: int, data: BaseModel, user: User) -> ContentItem:
        """
        Apply a partial update.

        The slug follows the English title: it is re-derived only when
        ``title_en`` is sent and differs from the stored one.
        """
        item = await self.get(item_id)
        if not item.can_be_changed_by(user):
            raise PermissionError(f"You don't have permission to edit this {self.repository.entity.kind}")

        changes = self._values(data.model_dump(exclude_unset=True, exclude_none=True))
        if not changes:
            return item

        new_title = changes.get("title_en")
        if new_title is not None and new_title != item.title_en:
            async def persist(slug: str) -> Optional[ContentItem]:
                return await self.repository.update_by_id(item_id, {**changes, "slug": slug})

            updated = await self.slugs.claim(new_title, persist, exclude_id=item_id)
            if updated is not None and updated.slug != item.slug:
                logger.info("Content re-slugged", collection=self.collection, id=item_id, old=item.slug, new=updated.slug)
        else:
            updated = await self.repository.update_by_id(item_id, changes)

        if updated is None:
            raise NotFound(f"{self.repository.entity.kind.capitalize()} not found")

        return updated

    async def delete(self, item_id: int, user: User) -> None:
        item = await self.get(item_id)
        if not item.can_be_changed_by(user):
            raise PermissionError(f"You don't have permission to delete this {self.repository.entity.kind}")

        if not await self.repository.delete_by_id(item_id):
            raise NotFound(f"{self.repository.entity.kind.capitalize()} not found")

        logger.info("Content deleted", collection=self.collection, id=item_id, slug=item.slug)

    async def get(self, item_id: int) -> ContentItem:
        item = await self.repository.get_by_id(item_id)
        if item is None:
            raise NotFound(f"{self.repository.entity.kind.capitalize()} not found")
        return item

    async def get_by_slug(self, slug: str) -> ContentItem:
        item = await self.repository.get_by_slug(slug)
        if item is None:
            raise NotFound(f"{self.repository.entity.kind.capitalize()} not found")
        return item

    async def list(
        self,
        criteria: ContentFilter,
        sort: SortOrder = SortOrder.NEWEST,
        position: Position = None,
        limit: int = settings.default_page_size
    ) -> Page:
        return await self.pages.list_page(criteria, sort, position, limit)

    def _values(self, payload: dict) -> dict:
        """Request payload to stored columns"""
        return payload


class NewsService(ContentService):
    repository_class = NewsRepository
    collection = "news"


class GalleryService(ContentService):
    repository_class = GalleryRepository
    collection = "gallery"


class VideoService(ContentService):
    repository_class = VideoRepository
    collection = "video"

    def _values(self, payload: dict) -> dict:
        values = dict(payload)
        yt_id = values.pop("yt_id", None)
        if yt_id:
            values.update(Video.youtube_urls(yt_id))
        return values
