from app.domains.content.entities import ContentItem, News, Gallery, Video
from app.domains.content.filters import ContentFilter, TimeWindow
from app.domains.content.pagination import CursorPosition, Direction, OffsetPosition, SortOrder

__all__ = [
    "ContentItem", "News", "Gallery", "Video",
    "ContentFilter", "TimeWindow",
    "CursorPosition", "Direction", "OffsetPosition", "SortOrder",
]
