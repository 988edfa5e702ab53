from datetime import datetime
from typing import List, Optional

from app.db.base import utcnow


class ContentItem:
    """Slugged content entity; subclasses list their payload fields"""

    kind = "content"
    payload_fields: tuple = ()

    def __init__(
        self,
        id: Optional[int] = None,
        slug: Optional[str] = None,
        posted_by: Optional[int] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.id = id
        self.slug = slug
        self.posted_by = posted_by
        self.created_at = created_at or utcnow()
        self.updated_at = updated_at or utcnow()

    @property
    def title(self) -> str:
        """Title the slug is derived from"""
        return self.title_en

    def payload(self) -> dict:
        return {name: getattr(self, name) for name in self.payload_fields}

    def can_be_changed_by(self, user) -> bool:
        """Authors edit their own items, admins edit everything"""
        return user.is_admin or (self.posted_by is not None and self.posted_by == user.id)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ContentItem) or other.kind != self.kind:
            return False
        return self.id == other.id

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id}, slug={self.slug})"


class News(ContentItem):
    kind = "news"
    payload_fields = (
        "title_en", "title_te", "description_en", "description_te",
        "category_en", "category_te", "sub_category_en", "sub_category_te",
        "tags_en", "tags_te", "main_url", "movie_rating",
    )

    def __init__(
        self,
        title_en: str,
        title_te: str,
        description_en: str,
        description_te: str,
        category_en: str,
        category_te: str,
        main_url: str,
        sub_category_en: str = "",
        sub_category_te: str = "",
        tags_en: Optional[List[str]] = None,
        tags_te: Optional[List[str]] = None,
        movie_rating: float = 0,
        **identity
    ):
        super().__init__(**identity)
        self.title_en = title_en
        self.title_te = title_te
        self.description_en = description_en
        self.description_te = description_te
        self.category_en = category_en
        self.category_te = category_te
        self.sub_category_en = sub_category_en or ""
        self.sub_category_te = sub_category_te or ""
        self.tags_en = list(tags_en or [])
        self.tags_te = list(tags_te or [])
        self.main_url = main_url
        self.movie_rating = movie_rating or 0


class Gallery(ContentItem):
    kind = "gallery"
    payload_fields = (
        "name_en", "name_te", "title_en", "title_te",
        "description_en", "description_te", "category_en", "category_te",
        "tags_en", "tags_te", "main_url", "gallery_pics",
    )

    def __init__(
        self,
        name_en: str,
        name_te: str,
        title_en: str,
        title_te: str,
        description_en: str,
        description_te: str,
        category_en: str,
        category_te: str,
        tags_en: Optional[List[str]] = None,
        tags_te: Optional[List[str]] = None,
        main_url: str = "",
        gallery_pics: Optional[List[str]] = None,
        **identity
    ):
        super().__init__(**identity)
        self.name_en = name_en
        self.name_te = name_te
        self.title_en = title_en
        self.title_te = title_te
        self.description_en = description_en
        self.description_te = description_te
        self.category_en = category_en
        self.category_te = category_te
        self.tags_en = list(tags_en or [])
        self.tags_te = list(tags_te or [])
        self.gallery_pics = list(gallery_pics or [])
        # The first picture doubles as the cover when none is given
        self.main_url = main_url or (self.gallery_pics[0] if self.gallery_pics else "")


class Video(ContentItem):
    kind = "video"
    payload_fields = (
        "title_en", "title_te", "category", "sub_category_en", "sub_category_te",
        "main_url", "video_url",
    )

    def __init__(
        self,
        title_en: str,
        title_te: str,
        main_url: str = "",
        video_url: str = "",
        category: str = "videos",
        sub_category_en: str = "",
        sub_category_te: str = "",
        **identity
    ):
        super().__init__(**identity)
        self.title_en = title_en
        self.title_te = title_te
        self.main_url = main_url
        self.video_url = video_url
        self.category = category or "videos"
        self.sub_category_en = sub_category_en or ""
        self.sub_category_te = sub_category_te or ""

    @staticmethod
    def youtube_urls(yt_id: str) -> dict:
        """Thumbnail and embed URLs for a YouTube video id"""
        return {
            "main_url": f"https://img.youtube.com/vi/{yt_id}/mqdefault.jpg",
            "video_url": f"https://www.youtube.com/embed/{yt_id}",
        }
