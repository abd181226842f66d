"""ComparisonResult dataclass for tree comparison output.

This module provides the result type returned by compare() calls.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["ComparisonResult"]


@dataclass(frozen=True, slots=True)
class ComparisonResult:
    """Result of a compare() call.

    All paths are JSON Pointers (RFC 6901); the root is ``""``.

    Attributes:
        equal: True when the two trees are structurally equal.
        mismatched_paths: Paths present on both sides whose node kinds,
            scalar values or array lengths differ.
        unmatched_left: Paths of object members only the left tree has.
        unmatched_right: Paths of object members only the right tree has.
    """

    equal: bool
    mismatched_paths: list[str]
    unmatched_left: list[str]
    unmatched_right: list[str]
