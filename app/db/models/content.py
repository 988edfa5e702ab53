from sqlalchemy import JSON, Column, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import declared_attr

from app.db.base import BaseModel


class ContentMixin:
    """Columns shared by every slugged content table"""

    # Each table is its own uniqueness domain for slugs
    slug = Column(String(255), unique=True, nullable=False)

    @declared_attr
    def posted_by(cls):
        return Column(Integer, ForeignKey("users.id"), index=True)

    @declared_attr
    def __table_args__(cls):
        # Backs the (created_at, id) seek used by cursor pagination
        return (Index(f"ix_{cls.__tablename__}_created_at_id", "created_at", "id"),)


class News(ContentMixin, BaseModel):
    __tablename__ = "news"

    title_en = Column(String(512), nullable=False)
    title_te = Column(String(512), nullable=False)
    description_en = Column(Text, nullable=False)
    description_te = Column(Text, nullable=False)
    category_en = Column(String(100), nullable=False, index=True)
    category_te = Column(String(100), nullable=False)
    sub_category_en = Column(String(100), default="")
    sub_category_te = Column(String(100), default="")
    tags_en = Column(JSON, default=list)
    tags_te = Column(JSON, default=list)
    main_url = Column(String(1024), nullable=False)
    movie_rating = Column(Float, default=0)


class Gallery(ContentMixin, BaseModel):
    __tablename__ = "galleries"

    name_en = Column(String(255), nullable=False)
    name_te = Column(String(255), nullable=False)
    title_en = Column(String(512), nullable=False)
    title_te = Column(String(512), nullable=False)
    description_en = Column(Text, nullable=False)
    description_te = Column(Text, nullable=False)
    category_en = Column(String(100), nullable=False, index=True)
    category_te = Column(String(100), nullable=False)
    tags_en = Column(JSON, default=list)
    tags_te = Column(JSON, default=list)
    main_url = Column(String(1024), default="")
    gallery_pics = Column(JSON, default=list)


class Video(ContentMixin, BaseModel):
    __tablename__ = "videos"

    title_en = Column(String(512), nullable=False)
    title_te = Column(String(512), nullable=False)
    category = Column(String(100), default="videos", index=True)
    sub_category_en = Column(String(100), default="")
    sub_category_te = Column(String(100), default="")
    main_url = Column(String(1024), default="")
    video_url = Column(String(1024), default="")
