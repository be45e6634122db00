from __future__ import annotations

"""Apply expansion toggle requests to an in-memory tree store.

A deep toggle is a store mutation like any other: the new flag is written on
every node of the subtree inside one batch, and the single notification that
follows triggers the usual full rebuild.
"""

import logging
from typing import List, Set

from elements_inspector.core.models import ExpandRequest, NodeId
from elements_inspector.core.tree_store import InMemoryTreeStore

logger = logging.getLogger(__name__)

__all__ = ["apply_expand_request", "set_subtree_expanded"]


def set_subtree_expanded(store: InMemoryTreeStore, node_id: NodeId, expanded: bool) -> int:
    """Assign ``expanded`` to ``node_id`` and all of its descendants.

    Returns the number of nodes whose flag changed. Missing descendants are
    skipped; cycles are cut by a visited set.
    """
    changed = 0
    visited: Set[NodeId] = set()
    stack: List[NodeId] = [node_id]
    with store.batch():
        while stack:
            current = stack.pop()
            if current in visited:
                continue
            visited.add(current)
            node = store.get_node(current)
            if node is None:
                continue
            if store.set_expanded(current, expanded):
                changed += 1
            stack.extend(node.children)
    return changed


def apply_expand_request(store: InMemoryTreeStore, request: ExpandRequest) -> bool:
    """Toggle the requested node; with ``deep`` the whole subtree follows.

    Returns False when the node is unknown.
    """
    node = store.get_node(request.node_id)
    if node is None:
        logger.debug("Expand request for unknown node %r ignored", request.node_id)
        return False
    new_state = not node.expanded
    if request.deep:
        changed = set_subtree_expanded(store, request.node_id, new_state)
        logger.debug(
            "%s subtree of %r (%d nodes changed)",
            "Expanded" if new_state else "Collapsed", request.node_id, changed,
        )
        return True
    store.set_expanded(request.node_id, new_state)
    return True
