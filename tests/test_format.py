"""Tests for size and entry formatting."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from ossify._format import format_entry, format_size
from ossify._models import Entry, EntryKind


class TestFormatSize:
    @pytest.mark.parametrize(
        ("size", "expected"),
        [
            (0, "0B"),
            (512, "512B"),
            (1023, "1023B"),
            (1024, "1.0K"),
            (2048, "2.0K"),
            (4446, "4.3K"),
            (1_572_864, "1.5M"),
            (3 * 1024**3, "3.0G"),
            (2 * 1024**4, "2.0T"),
            (5 * 1024**5, "5120.0T"),
        ],
    )
    def test_format_size(self, size: int, expected: str) -> None:
        assert format_size(size) == expected

    def test_monotonic_within_unit(self) -> None:
        values = [float(format_size(n)[:-1]) for n in range(1024, 1024 * 1024, 4096)]
        assert values == sorted(values)


class TestFormatEntry:
    def test_short_is_path_only(self) -> None:
        assert format_entry(Entry("a/b.txt", EntryKind.FILE, 5)) == "a/b.txt"

    def test_long_file(self) -> None:
        modified = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        line = format_entry(Entry("a/b.txt", EntryKind.FILE, 2048, modified), long=True)
        assert line == "FILE   2.0K       2024-05-01T12:00:00+00:00 a/b.txt"

    def test_long_directory_unknown_time(self) -> None:
        line = format_entry(Entry("a/sub/", EntryKind.DIRECTORY), long=True)
        assert line == "DIR    -          Unknown a/sub/"
