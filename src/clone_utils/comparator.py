"""TreeComparator: structural equality and difference reporting for trees.

Equality rules:
- OBJECT nodes are equal when they have the same key set (order does not
  matter) and equal children under every key.
- ARRAY nodes are equal when they have the same length and equal children
  position by position.
- SCALAR nodes are equal when their values are equal.  ``bool`` never equals a
  number, even though ``True == 1`` in Python.  An ``int`` equals a ``float``
  of the same value (``1 == 1.0``): both are JSON numbers once encoded.
- Nodes of different kinds are never equal.
"""

from __future__ import annotations

from clone_utils.result import ComparisonResult
from clone_utils.tree.nodes import NodeType, ScalarValue, TreeNode

__all__ = ["TreeComparator"]


def _scalars_equal(left: ScalarValue, right: ScalarValue) -> bool:
    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    return left == right


def _pointer(parent: str, token: str | int) -> str:
    """Append one RFC 6901 reference token to a JSON Pointer."""
    escaped = str(token).replace("~", "~0").replace("/", "~1")
    return f"{parent}/{escaped}"


class TreeComparator:
    """Compares two trees structurally.

    Example::

        cmp = TreeComparator()
        cmp.equals(TreeNode.scalar(1), TreeNode.scalar(1))   # True
        cmp.diff(left_tree, right_tree).mismatched_paths     # ["/name"]
    """

    def equals(self, left: TreeNode, right: TreeNode) -> bool:
        """Return True if the two trees are structurally equal."""
        if left.node_type != right.node_type:
            return False

        if left.node_type == NodeType.OBJECT:
            if left.fields.keys() != right.fields.keys():
                return False
            return all(
                self.equals(child, right.fields[key])
                for key, child in left.fields.items()
            )

        if left.node_type == NodeType.ARRAY:
            if len(left.items) != len(right.items):
                return False
            return all(
                self.equals(a, b) for a, b in zip(left.items, right.items, strict=True)
            )

        return _scalars_equal(left.value, right.value)

    def diff(self, left: TreeNode, right: TreeNode) -> ComparisonResult:
        """Walk both trees and report every place where they differ.

        Arrays of different lengths are reported as a single mismatch at the
        array's path; their elements are not compared.
        """
        mismatched: list[str] = []
        unmatched_left: list[str] = []
        unmatched_right: list[str] = []

        self._walk(left, right, "", mismatched, unmatched_left, unmatched_right)

        return ComparisonResult(
            equal=not (mismatched or unmatched_left or unmatched_right),
            mismatched_paths=mismatched,
            unmatched_left=unmatched_left,
            unmatched_right=unmatched_right,
        )

    def _walk(
        self,
        left: TreeNode,
        right: TreeNode,
        path: str,
        mismatched: list[str],
        unmatched_left: list[str],
        unmatched_right: list[str],
    ) -> None:
        if left.node_type != right.node_type:
            mismatched.append(path)
            return

        if left.node_type == NodeType.OBJECT:
            for key, child in left.fields.items():
                other = right.fields.get(key)
                if other is None:
                    unmatched_left.append(_pointer(path, key))
                    continue
                self._walk(
                    child,
                    other,
                    _pointer(path, key),
                    mismatched,
                    unmatched_left,
                    unmatched_right,
                )
            unmatched_right.extend(
                _pointer(path, key) for key in right.fields if key not in left.fields
            )
            return

        if left.node_type == NodeType.ARRAY:
            if len(left.items) != len(right.items):
                mismatched.append(path)
                return
            for idx, (a, b) in enumerate(zip(left.items, right.items, strict=True)):
                self._walk(
                    a,
                    b,
                    _pointer(path, idx),
                    mismatched,
                    unmatched_left,
                    unmatched_right,
                )
            return

        if not _scalars_equal(left.value, right.value):
            mismatched.append(path)
