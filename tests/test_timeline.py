"""Tests for time-range filtering."""

import pytest

from conftest import HOME, make_event
from matchpulse.core.constants import TimeRange
from matchpulse.domains.timeline import (
    filter_events_by_time_range,
    parse_time_range,
    split_halves,
)


@pytest.fixture
def events():
    return [make_event("pass", HOME, minute) for minute in (0, 12, 45, 46, 60, 90, 95)]


class TestFilterEventsByTimeRange:
    """Tests for filter_events_by_time_range."""

    def test_all(self, events):
        assert filter_events_by_time_range(events, "all") == events

    def test_default_is_all(self, events):
        assert filter_events_by_time_range(events) == events

    def test_first_half_includes_45(self, events):
        first = filter_events_by_time_range(events, TimeRange.FIRST_HALF)
        assert [e.minute for e in first] == [0, 12, 45]

    def test_second_half_starts_at_46(self, events):
        second = filter_events_by_time_range(events, "second_half")
        assert [e.minute for e in second] == [46, 60, 90, 95]

    def test_halves_partition(self, events):
        """first_half and second_half are disjoint and cover every event."""
        first = filter_events_by_time_range(events, "first_half")
        second = filter_events_by_time_range(events, "second_half")
        assert not {e.id for e in first} & {e.id for e in second}
        assert sorted(first + second, key=lambda e: e.minute) == events

    def test_preserves_order(self):
        events = [make_event("pass", HOME, m) for m in (30, 10, 20)]
        assert filter_events_by_time_range(events, "first_half") == events

    def test_unknown_selector_raises(self, events):
        with pytest.raises(ValueError, match="Invalid time range"):
            filter_events_by_time_range(events, "extra_time")


class TestHelpers:
    """Tests for parse_time_range and split_halves."""

    def test_parse_time_range(self):
        assert parse_time_range("first_half") is TimeRange.FIRST_HALF
        assert parse_time_range(TimeRange.ALL) is TimeRange.ALL

    def test_parse_time_range_lists_choices(self):
        with pytest.raises(ValueError, match="all, first_half, second_half"):
            parse_time_range("overtime")

    def test_split_halves_matches_filter(self, events):
        first, second = split_halves(events)
        assert first == filter_events_by_time_range(events, "first_half")
        assert second == filter_events_by_time_range(events, "second_half")
