"""Tests for PropertyPath and as_paths."""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from clone_utils.tree.paths import PropertyPath, as_paths


class TestPropertyPath:
    def test_parse_splits_segments(self) -> None:
        assert PropertyPath.parse("a.b.c").segments == ("a", "b", "c")

    def test_head_and_tail(self) -> None:
        path = PropertyPath.parse("a.b.c")
        assert path.head == "a"
        assert path.tail == "b.c"

    def test_single_segment_has_no_tail(self) -> None:
        path = PropertyPath.parse("name")
        assert path.tail is None

    def test_empty_segments_rejected(self) -> None:
        with pytest.raises(ValueError, match="at least one segment"):
            PropertyPath(())

    def test_frozen(self) -> None:
        path = PropertyPath.parse("a")
        with pytest.raises(FrozenInstanceError):
            path.segments = ("b",)  # type: ignore[misc]


class TestAsPaths:
    def test_bare_string(self) -> None:
        assert as_paths("a.b") == ("a.b",)

    def test_sequence_order_and_duplicates_kept(self) -> None:
        assert as_paths(["b", "a", "b"]) == ("b", "a", "b")

    def test_none(self) -> None:
        assert as_paths(None) == ()

    def test_empty_strings_dropped(self) -> None:
        assert as_paths(["", "a"]) == ("a",)

    def test_generator_accepted(self) -> None:
        assert as_paths(p for p in ["x", "y"]) == ("x", "y")
