"""Tests for Entry and Usage."""

from __future__ import annotations

import dataclasses
from datetime import datetime, timezone

import pytest

from ossify._models import Entry, EntryKind, Usage

NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


class TestEntry:
    def test_file_fields(self) -> None:
        e = Entry(path="a/b.txt", kind=EntryKind.FILE, size=10, modified=NOW)
        assert e.is_file
        assert not e.is_dir
        assert e.size == 10
        assert e.modified == NOW
        assert e.name == "b.txt"

    def test_directory_name_ignores_trailing_slash(self) -> None:
        e = Entry(path="a/sub/", kind=EntryKind.DIRECTORY)
        assert e.is_dir
        assert e.name == "sub"

    def test_directory_size_forced_to_zero(self) -> None:
        e = Entry(path="a/", kind=EntryKind.DIRECTORY, size=4096)
        assert e.size == 0

    def test_modified_defaults_to_none(self) -> None:
        assert Entry(path="x", kind=EntryKind.FILE).modified is None

    def test_frozen(self) -> None:
        e = Entry(path="x", kind=EntryKind.FILE)
        with pytest.raises(dataclasses.FrozenInstanceError):
            e.size = 3  # type: ignore[misc]

    def test_equality(self) -> None:
        assert Entry("x", EntryKind.FILE, 1) == Entry("x", EntryKind.FILE, 1)
        assert Entry("x", EntryKind.FILE, 1) != Entry("x", EntryKind.FILE, 2)


class TestUsage:
    def test_defaults(self) -> None:
        u = Usage()
        assert u.total_bytes == 0
        assert u.file_count == 0

    def test_addition(self) -> None:
        assert Usage(100, 1) + Usage(250, 2) == Usage(350, 3)

    def test_add_non_usage_unsupported(self) -> None:
        with pytest.raises(TypeError):
            Usage() + 1  # type: ignore[operator]
