"""PropertyPath: dotted property identifiers used for exclusion and filtering.

A path such as ``"address.city"`` names the ``city`` member of the ``address``
member.  Paths are split lazily, one segment at a time, because a key may
itself legitimately contain a dot; the pruner always tries the full string as
a key before splitting it.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

__all__ = ["SEPARATOR", "PropertyPath", "as_paths"]

SEPARATOR = "."


@dataclass(frozen=True, slots=True)
class PropertyPath:
    """An ordered, non-empty sequence of path segments.

    Example::
        path = PropertyPath.parse("a.b.c")
        path.segments  # ("a", "b", "c")
        path.head      # "a"
        path.tail      # "b.c"
    """

    segments: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.segments:
            msg = "a property path needs at least one segment"
            raise ValueError(msg)

    @classmethod
    def parse(cls, dotted: str) -> PropertyPath:
        return cls(tuple(dotted.split(SEPARATOR)))

    @property
    def head(self) -> str:
        return self.segments[0]

    @property
    def tail(self) -> str | None:
        """Remaining segments rejoined with dots, or None for a single segment."""
        if len(self.segments) == 1:
            return None
        return SEPARATOR.join(self.segments[1:])


def as_paths(paths: str | Iterable[str] | None) -> tuple[str, ...]:
    """Normalise a path argument into a tuple of non-empty path strings.

    A bare string counts as a single path rather than a sequence of
    characters.  Order is preserved; duplicates are harmless and kept.
    """
    if paths is None:
        return ()
    if isinstance(paths, str):
        paths = (paths,)
    return tuple(path for path in paths if path)
