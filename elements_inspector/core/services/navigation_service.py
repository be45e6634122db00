from __future__ import annotations

"""Keyboard navigation over the flattened projection.

The navigator holds no state: it maps (projection, store, selection, intent)
to at most one change request which the host applies. Every precondition
failure is a silent no-op (``None``) because the tree may change under an
in-flight key press during live inspection.
"""

import logging
from enum import Enum
from typing import Optional

from elements_inspector.core.models import (
    CopyRequest,
    ExpandRequest,
    FlattenedProjection,
    NodeId,
    Request,
    SelectionState,
    SelectRequest,
)
from elements_inspector.core.tree_store import TreeStoreReader

logger = logging.getLogger(__name__)

__all__ = ["NavigationIntent", "navigate", "find_parent_index"]


class NavigationIntent(Enum):
    MOVE_PREVIOUS = "move-previous"
    MOVE_NEXT = "move-next"
    COLLAPSE_OR_PARENT = "collapse-or-parent"
    EXPAND_OR_CHILD = "expand-or-child"
    COPY = "copy"


def find_parent_index(projection: FlattenedProjection, index: int) -> Optional[int]:
    """Scan backward from ``index`` for the nearest row one level up."""
    if index < 0 or index >= len(projection):
        return None
    target_level = projection.rows[index].level - 1
    for i in range(index, -1, -1):
        if projection.rows[i].level == target_level:
            return i
    return None


def navigate(
    projection: FlattenedProjection,
    tree_store: TreeStoreReader,
    selection: SelectionState,
    intent: NavigationIntent,
) -> Optional[Request]:
    """Return the request produced by ``intent``, or ``None`` for a no-op.

    Parameters
    ----------
    projection
        Current flattened projection.
    tree_store
        Store used to read the selected node's children and expansion flag.
    selection
        Current host selection; only ``selected`` is used.
    intent
        Directional or copy intent.
    """
    selected: Optional[NodeId] = selection.selected
    if selected is None:
        return None

    index = projection.index_of(selected)
    if index is None:
        logger.debug("Selected node %r is not visible; ignoring %s", selected, intent.value)
        return None

    node = tree_store.get_node(selected)
    if node is None:
        logger.debug("Selected node %r is missing from the store; ignoring %s", selected, intent.value)
        return None

    keys = projection.keys

    if intent is NavigationIntent.COPY:
        return CopyRequest(text=node.name)

    if intent is NavigationIntent.MOVE_PREVIOUS:
        if index == 0 or len(keys) == 1:
            return None
        return SelectRequest(keys[index - 1])

    if intent is NavigationIntent.MOVE_NEXT:
        if index == len(keys) - 1:
            return None
        return SelectRequest(keys[index + 1])

    if intent is NavigationIntent.COLLAPSE_OR_PARENT:
        if node.expanded:
            return ExpandRequest(selected, deep=False)
        parent_index = find_parent_index(projection, index)
        if parent_index is None:
            return None
        return SelectRequest(keys[parent_index])

    if intent is NavigationIntent.EXPAND_OR_CHILD:
        if not node.has_children:
            return None
        if node.expanded:
            return SelectRequest(node.children[0])
        return ExpandRequest(selected, deep=False)

    return None
