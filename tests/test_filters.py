"""Tests for listing filters built from query parameters."""

from datetime import datetime, timedelta

import pytest

from app.core.errors import InvalidFilter
from app.domains.content.filters import ContentFilter, TimeWindow, months_before, parse_time


class TestParseTime:
    """Test time window parsing."""

    @pytest.mark.parametrize("value,window", [
        ("24h", TimeWindow.LAST_24H),
        ("week", TimeWindow.LAST_WEEK),
        ("month", TimeWindow.LAST_MONTH),
        ("6months", TimeWindow.LAST_6_MONTHS),
        ("1year", TimeWindow.LAST_YEAR),
        ("2years", TimeWindow.LAST_2_YEARS),
        ("3years", TimeWindow.LAST_3_YEARS),
    ])
    def test_within_windows(self, value, window) -> None:
        """Test every window parses as a "within" window."""
        assert parse_time(value) == (window, False)

    def test_above_prefix(self) -> None:
        """Test the above prefix flips to "older than"."""
        assert parse_time("above6months") == (TimeWindow.LAST_6_MONTHS, True)
        assert parse_time("AboveWeek") == (TimeWindow.LAST_WEEK, True)

    @pytest.mark.parametrize("value,window", [
        ("last24h", TimeWindow.LAST_24H),
        ("last1week", TimeWindow.LAST_WEEK),
        ("last1month", TimeWindow.LAST_MONTH),
        ("last6months", TimeWindow.LAST_6_MONTHS),
    ])
    def test_legacy_aliases(self, value, window) -> None:
        """Test spellings from older clients are still accepted."""
        assert parse_time(value) == (window, False)

    @pytest.mark.parametrize("value", ["yesterday", "5years", "above", ""])
    def test_unknown_values_rejected(self, value) -> None:
        """Test unknown windows raise InvalidFilter."""
        with pytest.raises(InvalidFilter):
            parse_time(value)


class TestMonthsBefore:
    """Test calendar month arithmetic."""

    def test_plain_subtraction(self) -> None:
        """Test a mid-month date keeps its day."""
        assert months_before(datetime(2024, 8, 15, 9, 30), 6) == datetime(2024, 2, 15, 9, 30)

    def test_day_is_clamped(self) -> None:
        """Test the day is clamped to the shorter target month."""
        assert months_before(datetime(2024, 3, 31), 1) == datetime(2024, 2, 29)
        assert months_before(datetime(2023, 3, 31), 1) == datetime(2023, 2, 28)

    def test_crosses_years(self) -> None:
        """Test subtraction across year boundaries."""
        assert months_before(datetime(2024, 1, 10), 36) == datetime(2021, 1, 10)
        assert months_before(datetime(2024, 2, 10), 3) == datetime(2023, 11, 10)


class TestContentFilter:
    """Test the filter predicate."""

    def test_blank_values_are_dropped(self) -> None:
        """Test empty query values do not constrain the listing."""
        criteria = ContentFilter.from_query(category="  ", search_text="")
        assert criteria.category is None
        assert criteria.search_text is None
        assert criteria.created_bounds() == (None, None)

    def test_within_window_bounds(self) -> None:
        """Test a within window sets only a lower bound."""
        now = datetime(2024, 6, 1, 12, 0)
        criteria = ContentFilter.from_query(time="24h")
        assert criteria.created_bounds(now) == (now - timedelta(hours=24), None)

    def test_older_than_bounds(self) -> None:
        """Test an above window sets only an upper bound."""
        now = datetime(2024, 6, 1, 12, 0)
        criteria = ContentFilter.from_query(time="above1year")
        assert criteria.created_bounds(now) == (None, datetime(2023, 6, 1, 12, 0))

    def test_unknown_time_rejected(self) -> None:
        """Test building a filter with an unknown window fails."""
        with pytest.raises(InvalidFilter):
            ContentFilter.from_query(time="fortnight")
