"""
Hybrid cursor/offset pagination over time-ordered collections.

Every listing is totally ordered by ``(created_at, id)``: ``created_at`` is
not unique, so ties are always broken by ``id`` in the same direction.

Cursor mode seeks past a compound watermark and is stable while the
collection changes. Offset mode (``page``/``page_size``) is kept for older
clients; inserts or deletes ahead of the requested page shift every later
item, so consecutive pages may skip or repeat items.
"""

import base64
import binascii
import json
import math
from datetime import datetime, timezone
from enum import Enum
from typing import Any, List, Optional, Protocol, Sequence, Union

from pydantic import BaseModel, ConfigDict

from app.core.errors import InvalidCursor, InvalidLimit, InvalidPage
from app.core.logging import get_logger

logger = get_logger(__name__)


class SortOrder(str, Enum):
    NEWEST = "newest"
    OLDEST = "oldest"

    @property
    def descending(self) -> bool:
        return self is SortOrder.NEWEST


class Direction(str, Enum):
    NEXT = "next"
    PREV = "prev"


class OffsetPosition(BaseModel):
    model_config = ConfigDict(frozen=True)

    page: int
    page_size: int


class CursorPosition(BaseModel):
    """Watermark naming the last item seen, plus the way to walk from it"""

    model_config = ConfigDict(frozen=True)

    created_at: datetime
    id: int
    direction: Direction = Direction.NEXT

    def encode(self) -> str:
        return encode_cursor(self.created_at, self.id)

    @classmethod
    def decode(cls, token: str, direction: Direction = Direction.NEXT) -> "CursorPosition":
        created_at, item_id = decode_cursor(token)
        return cls(created_at=created_at, id=item_id, direction=direction)


Position = Union[OffsetPosition, CursorPosition, None]


def encode_cursor(created_at: datetime, item_id: int) -> str:
    raw = json.dumps({"created_at": created_at.isoformat(), "id": item_id})
    return base64.urlsafe_b64encode(raw.encode()).rstrip(b"=").decode()


def decode_cursor(token: str) -> tuple:
    """Opaque token back to ``(created_at, id)``; timestamps come back as naive UTC"""
    try:
        padded = token + "=" * (-len(token) % 4)
        data = json.loads(base64.urlsafe_b64decode(padded.encode()))
        created_at = datetime.fromisoformat(data["created_at"])
        item_id = int(data["id"])
    except (binascii.Error, ValueError, KeyError, TypeError):
        raise InvalidCursor("Invalid cursor")

    if created_at.tzinfo is not None:
        created_at = created_at.astimezone(timezone.utc).replace(tzinfo=None)

    return created_at, item_id


def resolve_position(
    limit: int,
    page: Optional[int] = None,
    cursor: Optional[str] = None,
    direction: Direction = Direction.NEXT
) -> Position:
    """Pick exactly one pagination mode from request parameters"""
    if page is not None and cursor:
        raise InvalidCursor("Use either page or cursor, not both")

    if page is not None:
        return OffsetPosition(page=page, page_size=limit)

    if cursor:
        return CursorPosition.decode(cursor, direction)

    return None


class Seek:
    """Compound watermark handed to the store: rows strictly past (created_at, id)"""

    def __init__(self, created_at: datetime, id: int, descending: bool):
        self.created_at = created_at
        self.id = id
        self.descending = descending

    def __repr__(self) -> str:
        side = "<" if self.descending else ">"
        return f"Seek({side} ({self.created_at.isoformat()}, {self.id}))"


class PageSource(Protocol):
    """What the engine needs from a collection's store"""

    async def count(self, criteria: Any) -> int:
        ...

    async def find(
        self,
        criteria: Any,
        descending: bool,
        skip: int = 0,
        limit: Optional[int] = None,
        seek: Optional[Seek] = None
    ) -> List[Any]:
        ...


class OffsetPage:
    mode = "offset"

    def __init__(
        self,
        items: Sequence[Any],
        current_page: int,
        page_size: int,
        total_items: int
    ):
        self.items = list(items)
        self.current_page = current_page
        self.page_size = page_size
        self.total_items = total_items
        self.total_pages = math.ceil(total_items / page_size)

    @property
    def has_next_page(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_prev_page(self) -> bool:
        return self.current_page > 1

    @property
    def has_more(self) -> bool:
        return self.has_next_page

    def pagination(self) -> dict:
        return {
            "current_page": self.current_page,
            "total_pages": self.total_pages,
            "total_items": self.total_items,
            "items_per_page": self.page_size,
            "has_next_page": self.has_next_page,
            "has_prev_page": self.has_prev_page,
        }


class CursorPage:
    mode = "cursor"

    def __init__(
        self,
        items: Sequence[Any],
        limit: int,
        has_more: bool,
        next_cursor: Optional[str] = None,
        prev_cursor: Optional[str] = None
    ):
        self.items = list(items)
        self.limit = limit
        self.has_more = has_more
        self.next_cursor = next_cursor
        self.prev_cursor = prev_cursor

    def pagination(self) -> dict:
        return {
            "next_cursor": self.next_cursor,
            "prev_cursor": self.prev_cursor,
            "has_more": self.has_more,
            "has_prev_page": self.prev_cursor is not None,
            "items_per_page": self.limit,
        }


Page = Union[OffsetPage, CursorPage]


class PaginationEngine:
    """Serves one page of a collection in cursor or offset mode"""

    def __init__(self, store: PageSource, max_page_size: int = 100):
        self.store = store
        self.max_page_size = max_page_size

    async def list_page(
        self,
        criteria: Any,
        sort: SortOrder = SortOrder.NEWEST,
        position: Position = None,
        limit: int = 10
    ) -> Page:
        if isinstance(position, OffsetPosition):
            return await self._offset_page(criteria, sort, position)
        return await self._cursor_page(criteria, sort, position, self.check_limit(limit))

    def check_limit(self, limit: Any) -> int:
        if isinstance(limit, bool) or not isinstance(limit, int):
            raise InvalidLimit("Limit must be an integer")
        if limit < 1 or limit > self.max_page_size:
            raise InvalidLimit(f"Limit must be between 1 and {self.max_page_size}")
        return limit

    async def _offset_page(self, criteria: Any, sort: SortOrder, position: OffsetPosition) -> OffsetPage:
        page_size = self.check_limit(position.page_size)
        if isinstance(position.page, bool) or position.page < 1:
            raise InvalidPage("Page must be a positive integer")

        skip = (position.page - 1) * page_size
        total = await self.store.count(criteria)
        items = await self.store.find(criteria, descending=sort.descending, skip=skip, limit=page_size)

        return OffsetPage(items, current_page=position.page, page_size=page_size, total_items=total)

    async def _cursor_page(
        self,
        criteria: Any,
        sort: SortOrder,
        position: Optional[CursorPosition],
        limit: int
    ) -> CursorPage:
        backward = position is not None and position.direction is Direction.PREV
        # Walking backward mirrors the order and the inequality
        descending = sort.descending != backward

        seek = None
        if position is not None:
            seek = Seek(position.created_at, position.id, descending)

        rows = await self.store.find(criteria, descending=descending, limit=limit + 1, seek=seek)
        has_more = len(rows) > limit
        rows = rows[:limit]
        if backward:
            rows.reverse()

        next_cursor = prev_cursor = None
        if rows:
            next_cursor = encode_cursor(rows[-1].created_at, rows[-1].id)
            if position is not None:
                prev_cursor = encode_cursor(rows[0].created_at, rows[0].id)

        logger.debug("Cursor page served", seek=repr(seek), returned=len(rows), has_more=has_more)
        return CursorPage(rows, limit=limit, has_more=has_more, next_cursor=next_cursor, prev_cursor=prev_cursor)
