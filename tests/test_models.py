"""Tests for models.py -- enums, constants, timestamp cursor."""

from datetime import datetime

import pytest

from psp_photo_organizer.models import (
    CONVERTIBLE_EXTENSIONS,
    IMAGE_EXTENSIONS,
    JPEG_EXTENSIONS,
    STAGE_ORDER,
    BatchResult,
    DirectoryResult,
    NamingMode,
    Stage,
    TimestampCursor,
)


class TestEnums:
    def test_naming_mode_values(self):
        assert NamingMode.COMIC == "comic"
        assert NamingMode.PHOTO == "photo"

    def test_stage_order(self):
        assert STAGE_ORDER == [
            Stage.SCAN,
            Stage.CONVERT,
            Stage.ORGANIZE,
            Stage.TIMESTAMP,
        ]


class TestExtensions:
    def test_image_extensions_cover_jpeg_and_convertible(self):
        assert IMAGE_EXTENSIONS == JPEG_EXTENSIONS | CONVERTIBLE_EXTENSIONS
        assert ".jpeg" in JPEG_EXTENSIONS
        assert ".png" in CONVERTIBLE_EXTENSIONS
        assert ".jpg" not in CONVERTIBLE_EXTENSIONS


class TestTimestampCursor:
    def test_round_trips_datetime(self):
        start = datetime(2025, 1, 1, 12, 30)
        cursor = TimestampCursor.from_datetime(start)
        assert cursor == TimestampCursor(2025, 1, 1, 12, 30)
        assert cursor.to_datetime() == start

    def test_drops_seconds(self):
        cursor = TimestampCursor.from_datetime(datetime(2025, 1, 1, 12, 30, 45))
        assert cursor.to_datetime() == datetime(2025, 1, 1, 12, 30)

    def test_five_minutes_same_hour(self):
        cursor = TimestampCursor(2025, 1, 1, 0, 0)
        minutes = []
        for _ in range(5):
            minutes.append((cursor.hour, cursor.minute))
            cursor = cursor.advance()
        assert minutes == [(0, 0), (0, 1), (0, 2), (0, 3), (0, 4)]

    def test_minute_carries_into_hour(self):
        cursor = TimestampCursor(2025, 1, 1, 10, 58)
        seen = [cursor, cursor.advance(), cursor.advance(2)]
        assert [(c.hour, c.minute) for c in seen] == [(10, 58), (10, 59), (11, 0)]

    def test_hour_carries_into_day(self):
        assert TimestampCursor(2025, 3, 14, 23, 59).advance() == TimestampCursor(
            2025, 3, 15, 0, 0
        )

    def test_day_carries_into_month_and_year(self):
        assert TimestampCursor(2024, 12, 31, 23, 59).advance() == TimestampCursor(
            2025, 1, 1, 0, 0
        )

    def test_leap_day(self):
        assert TimestampCursor(2024, 2, 28, 23, 59).advance() == TimestampCursor(
            2024, 2, 29, 0, 0
        )
        assert TimestampCursor(2025, 2, 28, 23, 59).advance() == TimestampCursor(
            2025, 3, 1, 0, 0
        )

    def test_span_longer_than_a_day(self):
        cursor = TimestampCursor(2025, 1, 1, 0, 0).advance(1440 * 3 + 61)
        assert cursor == TimestampCursor(2025, 1, 4, 1, 1)

    def test_never_moves_backwards(self):
        with pytest.raises(ValueError):
            TimestampCursor(2025, 1, 1, 0, 0).advance(-1)

    def test_ordering(self):
        a = TimestampCursor(2025, 1, 1, 0, 59)
        assert a < a.advance()

    def test_str(self):
        assert str(TimestampCursor(2025, 1, 2, 3, 4)) == "2025-01-02 03:04"


class TestResults:
    def test_batch_totals(self, tmp_path):
        a = DirectoryResult(source=tmp_path, target=tmp_path, organized=3, failed=1)
        b = DirectoryResult(source=tmp_path, target=tmp_path, organized=2)
        batch = BatchResult(processed=[a, b], skipped=["empty"])
        assert batch.organized == 5
        assert batch.failed == 1
