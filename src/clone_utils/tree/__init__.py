"""Tree subpackage: the intermediate representation and its primitives.

Re-exports the public API for the tree module:
- TreeNode: dataclass representing a node in the tree
- NodeType: StrEnum of the three node kinds (OBJECT, ARRAY, SCALAR)
- TreeBuilder: converts any JSON-compatible value into a TreeNode tree
- PropertyPath: a dotted property path split into segments
- prune: removes properties named by dotted paths
- merge_into: overlays a patch tree onto an origin tree
"""

from clone_utils.tree.builder import TreeBuilder
from clone_utils.tree.merge import merge_into
from clone_utils.tree.nodes import NodeType, TreeNode
from clone_utils.tree.paths import PropertyPath, as_paths
from clone_utils.tree.pruner import prune

__all__ = [
    "NodeType",
    "PropertyPath",
    "TreeBuilder",
    "TreeNode",
    "as_paths",
    "merge_into",
    "prune",
]
