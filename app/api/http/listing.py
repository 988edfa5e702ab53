"""Query parameters and response shaping shared by every listing endpoint."""

from typing import Any, Dict, Optional, Type

from fastapi import Query
from pydantic import BaseModel

from app.core.config import settings
from app.domains.content.filters import ContentFilter
from app.domains.content.pagination import Direction, Page, Position, SortOrder, resolve_position


class PageQuery:
    """Position and size of the requested page (``page`` for offset mode, ``cursor`` otherwise)"""

    def __init__(
        self,
        page: Optional[int] = Query(None, description="1-based page number; switches to offset mode"),
        cursor: Optional[str] = Query(None, description="Opaque cursor from a previous response"),
        direction: Direction = Query(Direction.NEXT),
        limit: int = Query(settings.default_page_size)
    ):
        self.page = page
        self.cursor = cursor
        self.direction = direction
        self.limit = limit

    def position(self) -> Position:
        return resolve_position(self.limit, page=self.page, cursor=self.cursor, direction=self.direction)


class ListingQuery(PageQuery):
    def __init__(
        self,
        category: Optional[str] = Query(None),
        writer: Optional[int] = Query(None, description="Author user id"),
        search_text: Optional[str] = Query(None, alias="searchText"),
        time: Optional[str] = Query(None, description="e.g. 24h, week, 6months, above1year"),
        sort: SortOrder = Query(SortOrder.NEWEST),
        page: Optional[int] = Query(None, description="1-based page number; switches to offset mode"),
        cursor: Optional[str] = Query(None, description="Opaque cursor from a previous response"),
        direction: Direction = Query(Direction.NEXT),
        limit: int = Query(settings.default_page_size)
    ):
        super().__init__(page=page, cursor=cursor, direction=direction, limit=limit)
        self.category = category
        self.writer = writer
        self.search_text = search_text
        self.time = time
        self.sort = sort

    def criteria(self) -> ContentFilter:
        return ContentFilter.from_query(
            category=self.category,
            writer=self.writer,
            search_text=self.search_text,
            time=self.time
        )


def page_response(page: Page, schema: Type[BaseModel]) -> Dict[str, Any]:
    return {
        "status": "success",
        "items": [schema.model_validate(item) for item in page.items],
        "pagination": page.pagination(),
    }
