"""TreeBuilder: converts any JSON-compatible value into a TreeNode tree.

Uses recursive dispatch to convert dicts, lists/tuples, and scalar values into
a tree of TreeNode objects.  Input is expected to be the output of a
serialiser (see ``Converter.to_jsonable``), so object keys are strings and
every leaf is a str, int, float, bool or None.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from clone_utils.tree.nodes import TreeNode

__all__ = ["JsonValue", "TreeBuilder"]

# Type alias for valid JSON values
JsonValue = dict[str, Any] | list[Any] | str | int | float | bool | None


@dataclass(frozen=True, slots=True)
class TreeBuilder:
    """Converts any JSON-compatible value into a TreeNode tree.

    Attributes:
        exclude_none: When True, object members whose value is None are not
            emitted at all.  None elements inside arrays are always kept,
            because dropping them would shift positions.

    Example::
        builder = TreeBuilder(exclude_none=True)
        tree = builder.build({"name": "Ada", "nickname": None})
        # tree: OBJECT {"name": SCALAR("Ada")}
    """

    exclude_none: bool = False

    def build(self, value: JsonValue) -> TreeNode:
        """Convert a JSON value to a TreeNode tree.

        Args:
            value: dict (string keys), list, tuple, str, int, float, bool or None.

        Returns:
            A TreeNode tree rooted at the appropriate node type.

        Raises:
            TypeError: If value (or anything nested in it) is not JSON-compatible.
        """
        if isinstance(value, dict):
            return self._build_object(value)

        if isinstance(value, (list, tuple)):
            return TreeNode.array([self.build(item) for item in value])

        # bool is a subclass of int and is accepted by the same branch
        if value is None or isinstance(value, (str, int, float)):
            return TreeNode.scalar(value)

        raise TypeError(f"Unsupported JSON value type: {type(value)!r}")

    def _build_object(self, obj: dict[str, Any]) -> TreeNode:
        node = TreeNode.object()
        for key, val in obj.items():
            if not isinstance(key, str):
                raise TypeError(f"Object keys must be str, got {type(key)!r}")
            if val is None and self.exclude_none:
                continue
            node.set(key, self.build(val))
        return node
