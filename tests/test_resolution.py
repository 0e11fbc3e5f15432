"""Tests for config boundary parsing: zones, timestamps, durations."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest


class TestResolveTz:

    @pytest.mark.parametrize("name", [None, "", "UTC", "utc", "Z", "GMT"])
    def test_utc_aliases(self, name):
        from work_planner.resolution import resolve_tz

        assert resolve_tz(name) == timezone.utc

    @pytest.mark.parametrize(
        "name, offset",
        [("+02:00", timedelta(hours=2)), ("-0530", -timedelta(hours=5, minutes=30))],
    )
    def test_fixed_offsets(self, name, offset):
        from work_planner.resolution import resolve_tz

        assert resolve_tz(name).utcoffset(None) == offset

    @pytest.mark.parametrize("name", ["+25:00", "Mars/Olympus"])
    def test_invalid(self, name):
        from work_planner.resolution import resolve_tz

        with pytest.raises(ValueError):
            resolve_tz(name)


class TestParseTimestamp:

    def test_naive_takes_zone(self):
        from work_planner.resolution import parse_timestamp

        tz = timezone(timedelta(hours=2))
        assert parse_timestamp("2025-03-05 09:30", tz) == datetime(2025, 3, 5, 9, 30, tzinfo=tz)

    def test_date_only_is_midnight(self):
        from work_planner.resolution import parse_timestamp

        assert parse_timestamp("2025-03-05", timezone.utc) == datetime(
            2025, 3, 5, tzinfo=timezone.utc
        )

    def test_explicit_offset_kept(self):
        from work_planner.resolution import parse_timestamp

        dt = parse_timestamp("2025-03-05T12:00Z", timezone(timedelta(hours=2)))
        assert dt == datetime(2025, 3, 5, 12, tzinfo=timezone.utc)

    def test_garbage(self):
        from work_planner.resolution import parse_timestamp

        with pytest.raises(ValueError):
            parse_timestamp("next tuesday", timezone.utc)


class TestParseGranularity:

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("1h", timedelta(hours=1)),
            ("30m", timedelta(minutes=30)),
            ("1h30m", timedelta(minutes=90)),
            ("1h 30m", timedelta(minutes=90)),
            ("0.5h", timedelta(minutes=30)),
            ("90s", timedelta(seconds=90)),
            ("PT1H30M", timedelta(minutes=90)),
            ("pt45m", timedelta(minutes=45)),
        ],
    )
    def test_valid(self, text, expected):
        from work_planner.resolution import parse_granularity

        assert parse_granularity(text) == expected

    @pytest.mark.parametrize("text", ["", "h", "1 hour", "PT", "-1h"])
    def test_invalid(self, text):
        from work_planner.resolution import parse_granularity

        with pytest.raises(ValueError):
            parse_granularity(text)
