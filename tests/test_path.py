"""Tests for the path algebra."""

from __future__ import annotations

import pytest

from ossify._path import join, name_of, normalize, relative, relative_to_root


class TestNormalize:
    def test_strips_leading_slash(self) -> None:
        assert normalize("/a/b") == "a/b"

    def test_strips_only_one_slash(self) -> None:
        assert normalize("//a") == "/a"

    def test_relative_path_unchanged(self) -> None:
        assert normalize("a/b/") == "a/b/"

    def test_empty(self) -> None:
        assert normalize("") == ""


class TestNameOf:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("a/b/c.txt", "c.txt"),
            ("a/b/", "b"),
            ("file.txt", "file.txt"),
            ("/", ""),
            ("", ""),
        ],
    )
    def test_name_of(self, path: str, expected: str) -> None:
        assert name_of(path) == expected


class TestJoin:
    def test_simple(self) -> None:
        assert join("a", "b.txt") == "a/b.txt"

    def test_base_with_trailing_slash(self) -> None:
        assert join("a/", "b.txt") == "a/b.txt"

    def test_name_with_leading_slash(self) -> None:
        assert join("a/", "/b.txt") == "a/b.txt"

    def test_empty_base(self) -> None:
        assert join("", "b.txt") == "b.txt"

    def test_empty_name(self) -> None:
        assert join("a/b", "") == "a/b"

    def test_keeps_trailing_slash_of_directory_name(self) -> None:
        assert join("a", "sub/") == "a/sub/"

    def test_keeps_absolute_base(self) -> None:
        assert join("/root", "x") == "/root/x"

    def test_collapses_repeated_separators(self) -> None:
        assert join("a//b", "c") == "a/b/c"


class TestRelative:
    def test_same_path_returns_file_name(self) -> None:
        assert relative("/a/b/c.txt", "/a/b/c.txt") == "c.txt"

    def test_descendant_strips_base_and_separator(self) -> None:
        assert relative("/a/b/c.txt", "/a/") == "b/c.txt"

    def test_base_without_trailing_slash(self) -> None:
        assert relative("data/sub/x.bin", "data") == "sub/x.bin"

    def test_directory_entry_keeps_trailing_slash(self) -> None:
        assert relative("data/sub/", "data/") == "sub/"

    def test_empty_base(self) -> None:
        assert relative("a/b.txt", "") == "a/b.txt"

    def test_mismatch_returns_full_path(self) -> None:
        assert relative("other/x.txt", "data/") == "other/x.txt"

    def test_mismatched_leading_slash_returns_full_path(self) -> None:
        assert relative("data/x.txt", "/data/") == "data/x.txt"

    def test_same_directory_returns_its_name(self) -> None:
        assert relative("data/sub/", "data/sub/") == "sub"


class TestRelativeToRoot:
    def test_same_path_returns_file_name(self) -> None:
        assert relative_to_root("/a/b/c.txt", "a/b/c.txt") == "c.txt"

    def test_leading_slash_ignored_on_both_sides(self) -> None:
        assert relative_to_root("/a/b/c.txt", "a") == "b/c.txt"
        assert relative_to_root("a/b/c.txt", "/a") == "b/c.txt"

    def test_trailing_slash_ignored(self) -> None:
        assert relative_to_root("a/b/c.txt", "a/b/") == "c.txt"

    def test_mismatch_returns_file_name(self) -> None:
        assert relative_to_root("x/y/z.txt", "a/b") == "z.txt"

    def test_partial_segment_is_a_mismatch(self) -> None:
        assert relative_to_root("database/x.txt", "data") == "x.txt"

    def test_empty_base(self) -> None:
        assert relative_to_root("/a/b.txt", "") == "a/b.txt"

    def test_empty_inputs(self) -> None:
        assert relative_to_root("", "") == ""
