"""Listing filters built from query parameters."""

import calendar
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

from app.core.errors import InvalidFilter
from app.db.base import utcnow


class TimeWindow(str, Enum):
    LAST_24H = "24h"
    LAST_WEEK = "week"
    LAST_MONTH = "month"
    LAST_6_MONTHS = "6months"
    LAST_YEAR = "1year"
    LAST_2_YEARS = "2years"
    LAST_3_YEARS = "3years"


# Spellings still sent by older clients
_ALIASES = {
    "last24h": "24h",
    "last1week": "week",
    "last1month": "month",
    "last6months": "6months",
    "1week": "week",
    "1month": "month",
}

_MONTHS = {
    TimeWindow.LAST_MONTH: 1,
    TimeWindow.LAST_6_MONTHS: 6,
    TimeWindow.LAST_YEAR: 12,
    TimeWindow.LAST_2_YEARS: 24,
    TimeWindow.LAST_3_YEARS: 36,
}


def months_before(moment: datetime, months: int) -> datetime:
    """Same wall-clock time N calendar months earlier, day clamped to the month"""
    index = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def window_start(window: TimeWindow, now: datetime) -> datetime:
    if window is TimeWindow.LAST_24H:
        return now - timedelta(hours=24)
    if window is TimeWindow.LAST_WEEK:
        return now - timedelta(days=7)
    return months_before(now, _MONTHS[window])


def parse_time(value: str) -> Tuple[TimeWindow, bool]:
    """
    Parse a ``time`` query value.

    ``6months`` means created within the last six months, ``above6months``
    means created before that. Returns the window and the "older than" flag.
    """
    raw = value.strip().lower()
    older = raw.startswith("above")
    if older:
        raw = raw[len("above"):]
    raw = _ALIASES.get(raw, raw)

    try:
        return TimeWindow(raw), older
    except ValueError:
        raise InvalidFilter(f"Unknown time filter: {value}")


class ContentFilter(BaseModel):
    """Conjunction of optional listing constraints; built fresh per request"""

    model_config = ConfigDict(frozen=True)

    category: Optional[str] = None
    writer: Optional[int] = None
    search_text: Optional[str] = None
    window: Optional[TimeWindow] = None
    older_than_window: bool = False

    @classmethod
    def from_query(
        cls,
        category: Optional[str] = None,
        writer: Optional[int] = None,
        search_text: Optional[str] = None,
        time: Optional[str] = None
    ) -> "ContentFilter":
        window, older = parse_time(time) if time else (None, False)
        return cls(
            category=(category or "").strip() or None,
            writer=writer,
            search_text=(search_text or "").strip() or None,
            window=window,
            older_than_window=older
        )

    def created_bounds(self, now: Optional[datetime] = None) -> Tuple[Optional[datetime], Optional[datetime]]:
        """(created at or after, created strictly before) for the time window"""
        if self.window is None:
            return None, None

        cutoff = window_start(self.window, now or utcnow())
        if self.older_than_window:
            return None, cutoff
        return cutoff, None
