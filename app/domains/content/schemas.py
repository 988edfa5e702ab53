from datetime import datetime
from typing import Generic, List, Literal, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

ItemT = TypeVar("ItemT")


class PayloadBase(BaseModel):
    """Shared validation for bilingual content payloads"""

    @field_validator(
        'title_en', 'title_te', 'name_en', 'name_te',
        'description_en', 'description_te', 'category_en', 'category_te',
        check_fields=False
    )
    @classmethod
    def validate_text(cls, v):
        if v is not None and not v.strip():
            raise ValueError('Value cannot be empty')
        return v.strip() if v else v

    @field_validator('tags_en', 'tags_te', mode='before', check_fields=False)
    @classmethod
    def split_tags(cls, v):
        """Tags arrive either as a list or as one comma-separated string"""
        if v is None:
            return v
        if isinstance(v, str):
            v = v.split(",")
        return [tag.strip() for tag in v if tag and tag.strip()]


class NewsCreate(PayloadBase):
    """Payload for posting a news article"""
    title_en: str = Field(..., min_length=1, max_length=512)
    title_te: str = Field(..., min_length=1, max_length=512)
    description_en: str = Field(..., min_length=1)
    description_te: str = Field(..., min_length=1)
    category_en: str = Field(..., min_length=1, max_length=100)
    category_te: str = Field(..., min_length=1, max_length=100)
    sub_category_en: str = Field(default="", max_length=100)
    sub_category_te: str = Field(default="", max_length=100)
    tags_en: List[str] = Field(default_factory=list)
    tags_te: List[str] = Field(default_factory=list)
    main_url: str = Field(..., min_length=1, max_length=1024)
    movie_rating: float = Field(default=0, ge=0, le=5)

    @model_validator(mode='after')
    def require_a_tag(self):
        if not self.tags_en and not self.tags_te:
            raise ValueError('At least one tag is required')
        return self


class NewsUpdate(PayloadBase):
    """Partial update; omitted fields keep their stored values"""
    title_en: Optional[str] = Field(None, min_length=1, max_length=512)
    title_te: Optional[str] = Field(None, min_length=1, max_length=512)
    description_en: Optional[str] = Field(None, min_length=1)
    description_te: Optional[str] = Field(None, min_length=1)
    category_en: Optional[str] = Field(None, min_length=1, max_length=100)
    category_te: Optional[str] = Field(None, min_length=1, max_length=100)
    sub_category_en: Optional[str] = Field(None, max_length=100)
    sub_category_te: Optional[str] = Field(None, max_length=100)
    tags_en: Optional[List[str]] = None
    tags_te: Optional[List[str]] = None
    main_url: Optional[str] = Field(None, min_length=1, max_length=1024)
    movie_rating: Optional[float] = Field(None, ge=0, le=5)


class GalleryCreate(PayloadBase):
    name_en: str = Field(..., min_length=1, max_length=255)
    name_te: str = Field(..., min_length=1, max_length=255)
    title_en: str = Field(..., min_length=1, max_length=512)
    title_te: str = Field(..., min_length=1, max_length=512)
    description_en: str = Field(..., min_length=1)
    description_te: str = Field(..., min_length=1)
    category_en: str = Field(..., min_length=1, max_length=100)
    category_te: str = Field(..., min_length=1, max_length=100)
    tags_en: List[str] = Field(default_factory=list)
    tags_te: List[str] = Field(default_factory=list)
    main_url: str = Field(default="", max_length=1024)
    gallery_pics: List[str] = Field(..., min_length=1)


class GalleryUpdate(PayloadBase):
    name_en: Optional[str] = Field(None, min_length=1, max_length=255)
    name_te: Optional[str] = Field(None, min_length=1, max_length=255)
    title_en: Optional[str] = Field(None, min_length=1, max_length=512)
    title_te: Optional[str] = Field(None, min_length=1, max_length=512)
    description_en: Optional[str] = Field(None, min_length=1)
    description_te: Optional[str] = Field(None, min_length=1)
    category_en: Optional[str] = Field(None, min_length=1, max_length=100)
    category_te: Optional[str] = Field(None, min_length=1, max_length=100)
    tags_en: Optional[List[str]] = None
    tags_te: Optional[List[str]] = None
    main_url: Optional[str] = Field(None, max_length=1024)
    gallery_pics: Optional[List[str]] = None


class VideoCreate(PayloadBase):
    """Videos are YouTube embeds; URLs are derived from the video id"""
    title_en: str = Field(..., min_length=1, max_length=512)
    title_te: str = Field(..., min_length=1, max_length=512)
    yt_id: str = Field(..., pattern=r"^[A-Za-z0-9_-]{6,20}$")
    category: str = Field(default="videos", max_length=100)
    sub_category_en: str = Field(default="", max_length=100)
    sub_category_te: str = Field(default="", max_length=100)


class VideoUpdate(PayloadBase):
    title_en: Optional[str] = Field(None, min_length=1, max_length=512)
    title_te: Optional[str] = Field(None, min_length=1, max_length=512)
    yt_id: Optional[str] = Field(None, pattern=r"^[A-Za-z0-9_-]{6,20}$")
    category: Optional[str] = Field(None, max_length=100)
    sub_category_en: Optional[str] = Field(None, max_length=100)
    sub_category_te: Optional[str] = Field(None, max_length=100)


class ContentResponse(BaseModel):
    id: int
    slug: str
    posted_by: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class NewsResponse(ContentResponse):
    title_en: str
    title_te: str
    description_en: str
    description_te: str
    category_en: str
    category_te: str
    sub_category_en: str
    sub_category_te: str
    tags_en: List[str]
    tags_te: List[str]
    main_url: str
    movie_rating: float


class GalleryResponse(ContentResponse):
    name_en: str
    name_te: str
    title_en: str
    title_te: str
    description_en: str
    description_te: str
    category_en: str
    category_te: str
    tags_en: List[str]
    tags_te: List[str]
    main_url: str
    gallery_pics: List[str]


class VideoResponse(ContentResponse):
    title_en: str
    title_te: str
    category: str
    sub_category_en: str
    sub_category_te: str
    main_url: str
    video_url: str


class OffsetPagination(BaseModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
    has_next_page: bool
    has_prev_page: bool


class CursorPagination(BaseModel):
    next_cursor: Optional[str] = None
    prev_cursor: Optional[str] = None
    has_more: bool
    has_prev_page: bool = False
    items_per_page: int


class ItemResponse(BaseModel, Generic[ItemT]):
    status: Literal["success"] = "success"
    item: ItemT


class ListResponse(BaseModel, Generic[ItemT]):
    status: Literal["success"] = "success"
    items: List[ItemT]
    pagination: Union[OffsetPagination, CursorPagination]


class MessageResponse(BaseModel):
    status: Literal["success"] = "success"
    message: str
