"""Tests for entry data models.

**Feature: productivity-stats**
"""

from datetime import datetime, timedelta, timezone

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st
from pydantic import ValidationError

from doctracker.models import (
    DayType,
    EntryRecord,
    NonProductiveLine,
    ProductiveLine,
)

UTC = timezone.utc


class TestLineQuantityNormalization:
    """
    **Feature: productivity-stats, Property: Malformed Quantities**

    *For any* malformed count or minutes value, constructing a line never
    fails and the value becomes None.
    """

    @pytest.mark.parametrize(
        "raw",
        ["abc", "", -5, -0.5, float("nan"), float("inf"), True, [], {}, object()],
    )
    def test_malformed_count_becomes_none(self, raw):
        line = ProductiveLine(platform="X", count=raw, time_in_mins=raw)
        assert line.count is None
        assert line.time_in_mins is None

    def test_missing_quantities_are_none(self):
        line = ProductiveLine(platform="X")
        assert line.count is None
        assert line.time_in_mins is None

    def test_numeric_strings_are_parsed(self):
        line = ProductiveLine(count="12", time_in_mins=" 45 ")
        assert line.count == 12
        assert line.time_in_mins == 45

    def test_fractions_are_truncated(self):
        line = ProductiveLine(count=3.9, time_in_mins=10.2)
        assert line.count == 3
        assert line.time_in_mins == 10

    def test_aliases_accepted(self):
        line = ProductiveLine.model_validate(
            {"platform": "P", "docType": "Invoice", "queue": "Q", "count": 4, "timeInMins": 20}
        )
        assert line.doc_type == "Invoice"
        assert line.time_in_mins == 20
        assert line.model_dump(by_alias=True)["timeInMins"] == 20

    @given(
        raw=st.one_of(
            st.none(),
            st.booleans(),
            st.integers(),
            st.floats(allow_nan=True, allow_infinity=True),
            st.text(max_size=10),
        )
    )
    @settings(max_examples=200)
    def test_any_raw_value_is_accepted(self, raw):
        """*For any* raw value, the normalized count is None or a non-negative int."""
        line = ProductiveLine(count=raw)
        assert line.count is None or (isinstance(line.count, int) and line.count >= 0)

    def test_non_productive_duration_normalized(self):
        assert NonProductiveLine(duration="n/a").duration is None
        assert NonProductiveLine(duration="30").duration == 30.0
        assert NonProductiveLine.model_validate({"activityType": "Meeting"}).activity_type == "Meeting"


class TestEntryRecord:
    """Entry record construction and invariants."""

    def test_defaults(self):
        entry = EntryRecord(
            owner_id="u1",
            display_name="Ana",
            date=datetime(2026, 1, 5),
            day_type="Full Day",
        )
        assert entry.id is None
        assert entry.day_type == DayType.FULL_DAY
        assert entry.productive_lines == []
        assert entry.non_productive_lines == []
        assert entry.date.tzinfo is not None
        assert entry.created_at.tzinfo is not None

    def test_day_key_uses_utc_calendar_day(self):
        # 23:30 at UTC-5 is 04:30 the next day in UTC
        local = timezone(timedelta(hours=-5))
        entry = EntryRecord(
            owner_id="u1",
            display_name="Ana",
            date=datetime(2026, 1, 5, 23, 30, tzinfo=local),
            day_type=DayType.PTO,
        )
        assert entry.date == datetime(2026, 1, 6, 4, 30, tzinfo=UTC)
        assert entry.day_key == "2026-01-06"

    def test_invalid_day_type_rejected(self):
        with pytest.raises(ValidationError):
            EntryRecord(
                owner_id="u1",
                display_name="Ana",
                date=datetime(2026, 1, 5),
                day_type="Working",
            )

    def test_entry_is_frozen(self):
        entry = EntryRecord(
            owner_id="u1",
            display_name="Ana",
            date=datetime(2026, 1, 5),
            day_type="Half Day",
        )
        with pytest.raises(ValidationError):
            entry.owner_id = "u2"

    def test_camel_case_dump(self):
        entry = EntryRecord(
            owner_id="u1",
            display_name="Ana",
            date=datetime(2026, 1, 5),
            day_type="Half Day",
            productive_lines=[{"platform": "X", "count": 2}],
        )
        dumped = entry.model_dump(by_alias=True)
        assert dumped["ownerId"] == "u1"
        assert dumped["dayType"] == DayType.HALF_DAY
        assert dumped["productiveLines"][0]["count"] == 2
