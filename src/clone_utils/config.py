"""EncoderConfig and the two shared encoding configurations.

EncoderConfig is a frozen (immutable) dataclass holding the options passed to
pydantic when objects are serialised into trees and validated back out of
them.  ``NON_NULL`` is used for encoding (null members are dropped) and
``NON_FAILING`` for decoding (lax validation, unknown fields ignored).  Both
are built once at import time and are safe to share between threads.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

__all__ = ["NON_FAILING", "NON_NULL", "EncoderConfig"]

_BYTES_MODES = ("utf8", "base64", "hex")
_TIMEDELTA_MODES = ("iso8601", "float")


@dataclass(frozen=True, slots=True)
class EncoderConfig:
    """Immutable configuration for the encode/decode steps.

    Attributes:
        exclude_none: When True, members whose value is None are omitted from
            the encoded tree.
        by_alias: Serialise pydantic fields under their alias.  Decoding
            accepts both aliases and field names only when the model sets
            ``populate_by_name``.
        strict: Validate in pydantic strict mode on decode.  Lax mode (the
            default) is needed to turn ISO strings back into datetimes and
            lists back into tuples or sets.
        bytes_mode: How ``bytes`` values are written into the tree.  Decoding
            always reads strings back as UTF-8 bytes, so only "utf8" round-trips.
        timedelta_mode: How ``timedelta`` values are written into the tree.
    """

    exclude_none: bool = False
    by_alias: bool = True
    strict: bool = False
    bytes_mode: Literal["utf8", "base64", "hex"] = "utf8"
    timedelta_mode: Literal["iso8601", "float"] = "iso8601"

    def __post_init__(self) -> None:
        if self.bytes_mode not in _BYTES_MODES:
            msg = f"bytes_mode must be one of {_BYTES_MODES}, got {self.bytes_mode!r}"
            raise ValueError(msg)
        if self.timedelta_mode not in _TIMEDELTA_MODES:
            msg = (
                f"timedelta_mode must be one of {_TIMEDELTA_MODES}, "
                f"got {self.timedelta_mode!r}"
            )
            raise ValueError(msg)


NON_NULL = EncoderConfig(exclude_none=True)
NON_FAILING = EncoderConfig()
