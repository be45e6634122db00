from __future__ import annotations

"""Tree store holding the inspected nodes.

The core services only need the read side (:class:`TreeStoreReader`). The
in-memory store below is the host-side implementation used by the controller,
the XML importer and the tests. Every shape mutation notifies subscribers
synchronously so that the projection can be rebuilt before anything reads it.
"""

import logging
from contextlib import contextmanager
from dataclasses import replace
from typing import Callable, Dict, Iterator, List, Optional, Protocol

from elements_inspector.core.models import Node, NodeId

logger = logging.getLogger(__name__)

__all__ = ["TreeStoreReader", "InMemoryTreeStore"]


class TreeStoreReader(Protocol):
    """Read interface consumed by the flattener, search and navigator."""

    def get_node(self, node_id: NodeId) -> Optional[Node]:
        ...


class InMemoryTreeStore:
    """Dict-backed tree store with synchronous change notification.

    Unknown identities are ignored by every mutator; no method raises for a
    missing node.
    """

    def __init__(self, nodes: Optional[List[Node]] = None) -> None:
        self._nodes: Dict[NodeId, Node] = {}
        self._subscribers: List[Callable[[], None]] = []
        self._batch_depth = 0
        self._pending = False
        for node in nodes or []:
            self._nodes[node.node_id] = node

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------
    def get_node(self, node_id: NodeId) -> Optional[Node]:
        if node_id is None:
            return None
        return self._nodes.get(node_id)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def node_ids(self) -> List[NodeId]:
        return list(self._nodes.keys())

    def iter_nodes(self) -> Iterator[Node]:
        return iter(list(self._nodes.values()))

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def add_node(self, node: Node) -> None:
        """Insert or replace ``node``."""
        self._nodes[node.node_id] = node
        self._notify()

    def replace_node(self, node: Node) -> bool:
        """Replace an existing node. Returns False when it is unknown or unchanged."""
        current = self._nodes.get(node.node_id)
        if current is None or current == node:
            return False
        self._nodes[node.node_id] = node
        self._notify()
        return True

    def remove_node(self, node_id: NodeId) -> bool:
        """Drop a node. References held by parents are left dangling."""
        if node_id not in self._nodes:
            return False
        del self._nodes[node_id]
        self._notify()
        return True

    def set_children(self, node_id: NodeId, children: List[NodeId]) -> bool:
        node = self._nodes.get(node_id)
        if node is None:
            return False
        return self.replace_node(replace(node, children=tuple(children)))

    def set_expanded(self, node_id: NodeId, expanded: bool) -> bool:
        """Set the expansion flag. Returns True if the flag changed."""
        node = self._nodes.get(node_id)
        if node is None or node.expanded == bool(expanded):
            return False
        return self.replace_node(replace(node, expanded=bool(expanded)))

    @contextmanager
    def batch(self) -> Iterator["InMemoryTreeStore"]:
        """Coalesce notifications of the enclosed mutations into one."""
        self._batch_depth += 1
        try:
            yield self
        finally:
            self._batch_depth -= 1
            if self._batch_depth == 0 and self._pending:
                self._pending = False
                self._fire()

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------
    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register ``callback`` for shape changes; returns an unsubscribe callable."""
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            try:
                self._subscribers.remove(callback)
            except ValueError:
                pass

        return _unsubscribe

    def _notify(self) -> None:
        if self._batch_depth > 0:
            self._pending = True
            return
        self._fire()

    def _fire(self) -> None:
        for callback in list(self._subscribers):
            callback()
