"""Path-based pruning: removes properties named by dotted paths from a tree.

Matching rules, applied per path in the given order:

1. An OBJECT node with a child keyed by the *full* path string loses that
   child.  Exact keys win over segment splitting, so a literal ``"a.b"`` key is
   removed while a nested ``a -> b`` is left alone.
2. Otherwise a dotted path is split into ``head`` and ``tail``; when the node
   has a ``head`` child, that child is pruned with ``tail`` and stored back.
3. An ARRAY node applies every path to each of its elements.
4. Anything else is silently ignored.  Missing segments never insert nodes.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from clone_utils.tree.nodes import NodeType, TreeNode
from clone_utils.tree.paths import PropertyPath, as_paths

__all__ = ["prune"]

logger = logging.getLogger(__name__)


def prune(node: TreeNode, paths: str | Iterable[str] | None) -> TreeNode:
    """Remove the properties named by ``paths`` from ``node`` in place.

    Args:
        node:  Root of the tree to prune.  Callers pass a freshly encoded tree,
               never one shared with another operation.
        paths: Dotted property paths.  A bare string is a single path.

    Returns:
        ``node`` itself, pruned.
    """
    return _prune(node, as_paths(paths))


def _prune(node: TreeNode, paths: tuple[str, ...]) -> TreeNode:
    if not paths:
        return node

    if node.node_type == NodeType.ARRAY:
        for element in node.elements():
            _prune(element, paths)
    elif node.node_type == NodeType.OBJECT:
        for path in paths:
            _prune_object(node, path)
    # SCALAR: nothing below it to remove
    return node


def _prune_object(node: TreeNode, path: str) -> None:
    if node.has(path):
        node.remove(path)
        logger.debug("pruned property %r", path)
        return

    parsed = PropertyPath.parse(path)
    if parsed.tail is None:
        return

    child = node.get(parsed.head)
    if child is None:
        logger.debug("ignored path %r: no property %r", path, parsed.head)
        return
    node.set(parsed.head, _prune(child, (parsed.tail,)))
