"""TreeNode dataclass and NodeType StrEnum for the intermediate tree representation.

Every object handled by clone-utils is first turned into a tree of TreeNode
objects, then pruned, merged or compared, and finally decoded back into a
concrete type.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import StrEnum, auto
from typing import Any

__all__ = ["NodeType", "ScalarValue", "TreeNode"]

# Values a SCALAR node may hold
ScalarValue = str | int | float | bool | None


class NodeType(StrEnum):
    """Enumeration of the three structural node types.

    - OBJECT -> "object" : mapping of string keys to child nodes
    - ARRAY  -> "array"  : ordered sequence of child nodes
    - SCALAR -> "scalar" : a leaf value (string, number, bool, null)
    """

    OBJECT = auto()
    ARRAY = auto()
    SCALAR = auto()


@dataclass(slots=True, eq=False)
class TreeNode:
    """A node in the tree representation.

    Only OBJECT and ARRAY nodes carry children.  Structural equality lives in
    ``TreeComparator``; ``==`` on nodes is identity.

    Attributes:
        node_type: Which kind of node this is (see NodeType).
        value:     Scalar payload for SCALAR nodes; None for structural nodes.
        fields:    Children of an OBJECT node, in insertion order.
        items:     Children of an ARRAY node, in order.
    """

    node_type: NodeType
    value: ScalarValue = None
    fields: dict[str, TreeNode] = field(default_factory=dict)
    items: list[TreeNode] = field(default_factory=list)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def object(cls, fields: dict[str, TreeNode] | None = None) -> TreeNode:
        return cls(node_type=NodeType.OBJECT, fields=dict(fields or {}))

    @classmethod
    def array(cls, items: list[TreeNode] | None = None) -> TreeNode:
        return cls(node_type=NodeType.ARRAY, items=list(items or []))

    @classmethod
    def scalar(cls, value: ScalarValue) -> TreeNode:
        return cls(node_type=NodeType.SCALAR, value=value)

    # ------------------------------------------------------------------
    # Kind tests
    # ------------------------------------------------------------------

    @property
    def is_object(self) -> bool:
        return self.node_type == NodeType.OBJECT

    @property
    def is_array(self) -> bool:
        return self.node_type == NodeType.ARRAY

    @property
    def is_scalar(self) -> bool:
        return self.node_type == NodeType.SCALAR

    # ------------------------------------------------------------------
    # OBJECT operations
    # ------------------------------------------------------------------

    def has(self, key: str) -> bool:
        return key in self._require(NodeType.OBJECT).fields

    def get(self, key: str) -> TreeNode | None:
        return self._require(NodeType.OBJECT).fields.get(key)

    def set(self, key: str, child: TreeNode) -> None:
        self._require(NodeType.OBJECT).fields[key] = child

    def remove(self, key: str) -> TreeNode | None:
        """Remove and return the child at ``key``, or None if there is none."""
        return self._require(NodeType.OBJECT).fields.pop(key, None)

    # ------------------------------------------------------------------
    # ARRAY operations
    # ------------------------------------------------------------------

    def elements(self) -> Iterator[TreeNode]:
        return iter(self._require(NodeType.ARRAY).items)

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def to_python(self) -> Any:
        """Convert the tree back into plain dicts, lists and scalars."""
        if self.node_type == NodeType.OBJECT:
            return {key: child.to_python() for key, child in self.fields.items()}
        if self.node_type == NodeType.ARRAY:
            return [child.to_python() for child in self.items]
        return self.value

    def _require(self, node_type: NodeType) -> TreeNode:
        if self.node_type != node_type:
            msg = f"expected a {node_type} node, got {self.node_type}"
            raise TypeError(msg)
        return self
