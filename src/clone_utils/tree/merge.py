"""Merge-patch: overlays one tree onto another.

OBJECT members are merged recursively; every other value (null and whole
arrays included) replaces the origin's value wholesale.  Arrays are never
merged element by element.
"""

from __future__ import annotations

import logging

from clone_utils.tree.nodes import TreeNode

__all__ = ["merge_into"]

logger = logging.getLogger(__name__)


def merge_into(origin: TreeNode, patch: TreeNode) -> TreeNode:
    """Merge ``patch`` into ``origin`` in place and return the merged tree.

    For each key of an OBJECT patch:
    - both sides OBJECT: merge recursively;
    - otherwise the patch value replaces the origin value at that key.
    Keys only present in ``origin`` are untouched; keys only present in
    ``patch`` are added.

    When either root is not an OBJECT the patch replaces the origin entirely
    and the patch tree is returned.
    """
    if not (origin.is_object and patch.is_object):
        logger.debug(
            "replacing %s root with %s patch", origin.node_type, patch.node_type
        )
        return patch

    for key, patch_child in patch.fields.items():
        origin_child = origin.get(key)
        if (
            origin_child is not None
            and origin_child.is_object
            and patch_child.is_object
        ):
            merge_into(origin_child, patch_child)
        else:
            origin.set(key, patch_child)
    return origin
