"""Tests for hylog.timestamps"""

from datetime import datetime, timezone

import pytest

from hylog.errors import InvalidArgumentError
from hylog.timestamps import (
    extract_timestamp,
    format_iso,
    format_utc,
    from_epoch_millis,
    to_epoch_millis,
)

UTC = timezone.utc


class TestExtractTimestamp:
    def test_iso_prefix(self):
        assert extract_timestamp("2024-01-01T00:00:00Z [INFO] hi") == datetime(2024, 1, 1, tzinfo=UTC)

    def test_iso_with_fraction(self):
        ts = extract_timestamp("2024-03-04T05:06:07.123Z [DBG] x")
        assert ts == datetime(2024, 3, 4, 5, 6, 7, 123000, tzinfo=UTC)

    def test_iso_long_fraction_truncated_to_micro(self):
        ts = extract_timestamp("2024-03-04T05:06:07.123456789Z")
        assert ts.microsecond == 123456

    def test_iso_lowercase(self):
        assert extract_timestamp("2024-01-01t00:00:00z") == datetime(2024, 1, 1, tzinfo=UTC)

    def test_utc_string(self):
        ts = extract_timestamp("Mon, 01 Jan 2024 10:20:30 GMT [ERROR] boom")
        assert ts == datetime(2024, 1, 1, 10, 20, 30, tzinfo=UTC)

    def test_numeric_is_epoch_millis(self):
        assert extract_timestamp("1704067200000 [LOG] hi") == datetime(2024, 1, 1, tzinfo=UTC)

    def test_short_digit_run_is_ignored(self):
        with pytest.raises(InvalidArgumentError):
            extract_timestamp("id 123456789 only")

    def test_found_anywhere(self):
        ts = extract_timestamp("prefix text 2024-01-01T00:00:00Z tail")
        assert ts == datetime(2024, 1, 1, tzinfo=UTC)

    def test_iso_wins_over_digits_inside(self):
        ts = extract_timestamp("2024-06-30T23:59:59Z")
        assert ts.year == 2024 and ts.month == 6

    def test_no_match_raises(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            extract_timestamp("[INFO] no timestamp")
        assert exc_info.value.code == -102

    def test_invalid_date_raises(self):
        with pytest.raises(InvalidArgumentError):
            extract_timestamp("2024-13-45T00:00:00Z")

    def test_entry_returns_stored_timestamp(self):
        stamp = datetime(2020, 5, 5, tzinfo=UTC)

        class _Entry:
            timestamp = stamp

        assert extract_timestamp(_Entry()) is stamp


class TestRenderHelpers:
    def test_format_iso_millis(self):
        dt = datetime(2024, 1, 2, 3, 4, 5, 678901, tzinfo=UTC)
        assert format_iso(dt) == "2024-01-02T03:04:05.678Z"

    def test_format_utc(self):
        assert format_utc(datetime(2024, 1, 1, tzinfo=UTC)) == "Mon, 01 Jan 2024 00:00:00 GMT"

    def test_epoch_millis(self):
        dt = datetime(2024, 1, 1, 0, 0, 0, 5000, tzinfo=UTC)
        assert to_epoch_millis(dt) == 1704067200005
        assert from_epoch_millis(1704067200005) == dt

    def test_rendered_forms_parse_back(self):
        dt = datetime(2023, 7, 14, 12, 30, 45, 250000, tzinfo=UTC)
        assert extract_timestamp(format_iso(dt)) == dt
        assert extract_timestamp(format_utc(dt)) == dt.replace(microsecond=0)
        assert extract_timestamp(str(to_epoch_millis(dt))) == dt
