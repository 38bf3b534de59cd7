"""Tests for the view display helpers."""

from datetime import date, datetime, timezone

from app.views.formatting import (
    compute_age,
    format_input_date,
    format_long_date,
    format_short_date,
    split_interests,
)


class TestComputeAge:
    def test_day_before_birthday(self):
        assert compute_age("1990-06-15", today=date(2020, 6, 14)) == 29

    def test_after_birthday(self):
        assert compute_age("1990-06-15", today=date(2020, 6, 20)) == 30

    def test_accepts_date_objects(self):
        assert compute_age(date(2000, 1, 1), today=date(2024, 1, 2)) == 24

    def test_born_today(self):
        assert compute_age("2024-03-01", today=date(2024, 3, 1)) == 0


class TestSplitInterests:
    def test_trims_and_drops_empty_segments(self):
        assert split_interests(" chess, code ,,gym ") == ["chess", "code", "gym"]

    def test_single_tag(self):
        assert split_interests("movies") == ["movies"]

    def test_empty(self):
        assert split_interests("") == []
        assert split_interests(None) == []


class TestDateFormats:
    def test_input_date_from_iso_datetime(self):
        assert format_input_date("1990-01-05T00:00:00.000Z") == "1990-01-05"

    def test_input_date_from_date(self):
        assert format_input_date("1990-01-05") == "1990-01-05"

    def test_short_date(self):
        assert format_short_date("1990-01-05") == "1/5/1990"

    def test_short_date_from_datetime(self):
        assert format_short_date(datetime(2024, 5, 1, 10, tzinfo=timezone.utc)) == "5/1/2024"

    def test_long_date(self):
        assert format_long_date("1990-01-05") == "January 5, 1990"
