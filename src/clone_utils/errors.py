"""Exceptions raised by clone-utils.

``CloneError`` is the one error kind callers need to handle.  It is always
raised ``from`` the exception that caused it, so the original pydantic error
stays reachable through ``__cause__``.
"""

from __future__ import annotations

from typing import Any

__all__ = ["CloneError", "ConversionError"]


class CloneError(Exception):
    """A clone, patch or comparison could not be completed."""

    code: str = "CLONE_ERROR"

    def __init__(
        self, message: str = "", *, details: dict[str, Any] | None = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details: dict[str, Any] = details or {}


class ConversionError(CloneError):
    """An object could not be encoded into a tree, or a tree decoded into a type."""

    code = "CONVERSION_ERROR"
