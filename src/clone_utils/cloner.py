"""Cloner: orchestrator that wires Converter + pruner + merge + TreeComparator.

Every operation follows the same pipeline: encode the inputs into fresh trees
(pruning excluded paths on the way), optionally merge a patch tree into the
origin tree, then decode the result into the requested type.  Inputs are never
mutated; each call builds and discards its own trees.

A ``None`` source object short-circuits to ``None`` for the clone and patch
operations.  Paths that do not exist are silently ignored.  Any failure to
encode or decode raises ``CloneError`` (via its ``ConversionError``
subclass) with the pydantic error as ``__cause__``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from clone_utils.comparator import TreeComparator
from clone_utils.converter import Converter
from clone_utils.result import ComparisonResult
from clone_utils.tree.builder import TreeBuilder
from clone_utils.tree.merge import merge_into
from clone_utils.tree.nodes import TreeNode

__all__ = ["Cloner"]

logger = logging.getLogger(__name__)

Paths = Iterable[str] | str


class Cloner:
    """Deep clone, patch and equality operations over the tree representation.

    A ``Cloner`` holds no per-call state; the ``TypeAdapter`` cache lives in
    its ``Converter``, which locks around it, so one instance (or one
    converter shared by several cloners) may be used from several threads.
    The module-level functions in ``clone_utils.api`` share a single converter.

    Example::

        from clone_utils.cloner import Cloner

        cloner = Cloner()
        copy = cloner.deep_clone(user, ignored=["password", "address.zip"])
        merged = cloner.deep_patch(user, UserPatch(email="new@example.com"))
        cloner.deep_equals(user, copy, ignored=["password", "address.zip"])  # True
    """

    def __init__(self, converter: Converter | None = None) -> None:
        """Initialise the cloner.

        Args:
            converter: The encode/decode collaborator.  Defaults to a fresh
                ``Converter()`` using the shared ``NON_NULL`` and
                ``NON_FAILING`` configurations.
        """
        self._converter = converter if converter is not None else Converter()
        self._comparator = TreeComparator()
        # Field-filtered patches must keep explicit nulls so they clear fields
        self._patch_builder = TreeBuilder(exclude_none=False)

    # ------------------------------------------------------------------
    # Cloning
    # ------------------------------------------------------------------

    def deep_clone(
        self, obj: Any, target_type: Any = None, ignored: Paths = ()
    ) -> Any:
        """Return a deep copy of ``obj`` without the ``ignored`` properties.

        Args:
            obj:         The object to clone (may be None).
            target_type: Type of the returned object.  Defaults to ``type(obj)``.
            ignored:     Dotted property paths to leave out of the copy.

        Returns:
            A new instance, or None if ``obj`` is None.
        """
        if obj is None:
            return None
        tree = self._converter.encode(obj, ignored)
        return self._converter.decode(tree, _resolve(target_type, obj))

    # ------------------------------------------------------------------
    # Patching
    # ------------------------------------------------------------------

    def deep_patch(
        self, origin: Any, patch: Any, target_type: Any = None, ignored: Paths = ()
    ) -> Any:
        """Merge the non-null fields of ``patch`` over ``origin``.

        Nested objects are merged recursively; arrays and scalars set on the
        patch replace the origin's value wholesale.  ``ignored`` paths are
        removed from the patch before merging, so they keep the origin's value.

        Returns:
            A new instance of ``target_type`` (default ``type(origin)``), or
            None if ``origin`` is None.
        """
        if origin is None:
            return None
        merged = merge_into(
            self._converter.encode(origin), self._patch_tree(patch, ignored)
        )
        return self._converter.decode(merged, _resolve(target_type, origin))

    def patch(
        self, origin: Any, patch: Any, target_type: Any = None, ignored: Paths = ()
    ) -> Any:
        """Apply ``patch`` to ``origin`` as ``origin``'s own type, then retype.

        Unlike ``deep_patch``, the merged tree is first decoded as
        ``type(origin)``: patch fields that type does not know are dropped
        before the result is converted to ``target_type``.  Fields named in
        ``ignored`` are removed from the patch entirely and never reach the
        origin.
        """
        if origin is None:
            return None
        merged = merge_into(
            self._converter.encode(origin), self._patch_tree(patch, ignored)
        )
        patched = self._converter.decode(merged, type(origin))
        if target_type is None or target_type is type(origin):
            return patched
        return self.deep_clone(patched, target_type)

    def deep_patch_fields_only(
        self,
        origin: Any,
        patch: Any,
        target_type: Any = None,
        only_fields: Paths = (),
    ) -> Any:
        """Copy only ``only_fields`` from ``patch`` onto ``origin``.

        Requested fields that ``patch`` does not set are written as null,
        clearing them on the result.  All other origin fields are preserved.
        Field names are top-level keys; dots are not split.
        """
        if origin is None:
            return None
        patch_map = self._converter.encode_filtered(patch, only_fields)
        logger.debug("field-filtered patch over %s", sorted(patch_map))
        merged = merge_into(
            self._converter.encode(origin), self._patch_builder.build(patch_map)
        )
        return self._converter.decode(merged, _resolve(target_type, origin))

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def deep_equals(self, left: Any, right: Any, ignored: Paths = ()) -> bool:
        """Return True if both objects encode to structurally equal trees.

        The same ``ignored`` paths are removed from both sides.  Objects of
        different types compare equal when their encoded fields are equal.
        ``None`` only equals ``None``.
        """
        return self._comparator.equals(
            self._converter.encode(left, ignored),
            self._converter.encode(right, ignored),
        )

    def compare(self, left: Any, right: Any, ignored: Paths = ()) -> ComparisonResult:
        """Like ``deep_equals`` but report where the two objects differ."""
        return self._comparator.diff(
            self._converter.encode(left, ignored),
            self._converter.encode(right, ignored),
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _patch_tree(self, patch: Any, ignored: Paths) -> TreeNode:
        # A missing patch changes nothing
        if patch is None:
            return TreeNode.object()
        return self._converter.encode(patch, ignored)


def _resolve(target_type: Any, source: Any) -> Any:
    return target_type if target_type is not None else type(source)
