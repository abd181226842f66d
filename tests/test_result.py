"""Tests for ComparisonResult frozen dataclass."""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from clone_utils.result import ComparisonResult


def make_result(**overrides: object) -> ComparisonResult:
    """Return a valid ComparisonResult, optionally overriding specific fields."""
    defaults: dict[str, object] = {
        "equal": False,
        "mismatched_paths": ["/a"],
        "unmatched_left": [],
        "unmatched_right": ["/b"],
    }
    defaults.update(overrides)
    return ComparisonResult(**defaults)  # type: ignore[arg-type]


class TestComparisonResult:
    def test_fields_accessible(self) -> None:
        result = make_result()
        assert result.equal is False
        assert result.mismatched_paths == ["/a"]
        assert result.unmatched_right == ["/b"]

    def test_frozen(self) -> None:
        result = make_result()
        with pytest.raises(FrozenInstanceError):
            result.equal = True  # type: ignore[misc]

    def test_equality_by_value(self) -> None:
        assert make_result() == make_result()
        assert make_result() != make_result(equal=True)
