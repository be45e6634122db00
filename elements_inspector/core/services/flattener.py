from __future__ import annotations

"""Flatten an element tree into the ordered list of visible rows.

The projection is the pre-order traversal of the tree starting at the
configured root, descending into a node's children only when its expansion
flag is set. It is always rebuilt from scratch; there is no incremental
patching.
"""

import logging
from typing import List, Optional, Set, Tuple

from elements_inspector.core.models import FlatRow, FlattenedProjection, NodeId
from elements_inspector.core.tree_store import TreeStoreReader

logger = logging.getLogger(__name__)

__all__ = ["flatten"]


def flatten(tree_store: TreeStoreReader, root_id: Optional[NodeId]) -> FlattenedProjection:
    """Return the flattened projection of ``tree_store`` rooted at ``root_id``.

    Parameters
    ----------
    tree_store
        Any object exposing ``get_node(node_id)``.
    root_id
        Identity of the root row (level 1). ``None`` yields an empty projection.

    Notes
    -----
    - Identities absent from the store are skipped along with their subtree.
    - Each identity is emitted at most once, so malformed input (cycles,
      duplicate child references) still terminates.
    - The walk uses an explicit stack; depth is bounded by memory only.
    """
    if root_id is None:
        return FlattenedProjection.empty()

    rows: List[FlatRow] = []
    keys: List[NodeId] = []
    visited: Set[NodeId] = set()
    max_depth = 0

    stack: List[Tuple[NodeId, int]] = [(root_id, 1)]
    while stack:
        node_id, level = stack.pop()
        if node_id in visited:
            logger.debug("Skipping already visited node %r at level %d", node_id, level)
            continue
        node = tree_store.get_node(node_id)
        if node is None:
            continue
        visited.add(node_id)

        rows.append(FlatRow(node_id=node_id, node=node, level=level))
        keys.append(node_id)
        if level > max_depth:
            max_depth = level

        if node.has_children and node.expanded:
            # Reversed so the first child is popped first
            for child_id in reversed(node.children):
                stack.append((child_id, level + 1))

    return FlattenedProjection(rows=tuple(rows), keys=tuple(keys), max_depth=max_depth)
