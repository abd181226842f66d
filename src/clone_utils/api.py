"""Public API functions for clone-utils.

Every call goes through one module-level ``Converter``, so the ``TypeAdapter``
for a type is built once and reused by later calls.  The converter guards its
adapter cache with a lock and is safe to share between threads; each call still
gets its own ``Cloner`` and its own trees.
"""

from __future__ import annotations

from typing import Any

from clone_utils.cloner import Cloner, Paths
from clone_utils.converter import Converter
from clone_utils.result import ComparisonResult

__all__ = [
    "compare",
    "deep_clone",
    "deep_equals",
    "deep_patch",
    "deep_patch_fields_only",
    "patch",
]

_CONVERTER = Converter()


def deep_clone(obj: Any, target_type: Any = None, ignored: Paths = ()) -> Any:
    """Return a deep copy of ``obj``, optionally as another type.

    Args:
        obj:         The object to clone.  None returns None.
        target_type: Type of the returned object.  Defaults to ``type(obj)``.
        ignored:     Dotted property paths to leave out, e.g.
                     ``["password", "address.city", "orders.total"]``.  A path
                     reaching into an array applies to every element.

    Returns:
        A new instance, or None.

    Raises:
        CloneError: If ``obj`` cannot be encoded or the result cannot be
            decoded into ``target_type``.
    """
    return Cloner(_CONVERTER).deep_clone(obj, target_type, ignored)


def deep_patch(
    origin: Any, patch: Any, target_type: Any = None, ignored: Paths = ()
) -> Any:
    """Merge the fields ``patch`` sets over ``origin``.

    Nested objects merge recursively; arrays on the patch replace the origin's
    arrays wholesale.  ``ignored`` paths of the patch are not merged.

    Returns:
        A new instance of ``target_type`` (default ``type(origin)``), or None
        when ``origin`` is None.
    """
    return Cloner(_CONVERTER).deep_patch(origin, patch, target_type, ignored)


def patch(origin: Any, patch: Any, target_type: Any = None, ignored: Paths = ()) -> Any:
    """Apply ``patch`` to a copy of ``origin`` as its own type, then retype it.

    Fields named in ``ignored`` are removed from the patch and never influence
    the origin.
    """
    return Cloner(_CONVERTER).patch(origin, patch, target_type, ignored)


def deep_patch_fields_only(
    origin: Any, patch: Any, target_type: Any = None, only_fields: Paths = ()
) -> Any:
    """Copy only the top-level ``only_fields`` of ``patch`` onto ``origin``.

    A listed field that ``patch`` does not set is cleared (set to null) on
    the result, whatever ``origin`` holds.
    """
    return Cloner(_CONVERTER).deep_patch_fields_only(
        origin, patch, target_type, only_fields
    )


def deep_equals(left: Any, right: Any, ignored: Paths = ()) -> bool:
    """Return True if both objects have equal fields, ignoring ``ignored``."""
    return Cloner(_CONVERTER).deep_equals(left, right, ignored)


def compare(left: Any, right: Any, ignored: Paths = ()) -> ComparisonResult:
    """Return a ``ComparisonResult`` describing where two objects differ."""
    return Cloner(_CONVERTER).compare(left, right, ignored)
