from __future__ import annotations

"""Core data structures for the elements inspector.

All models are immutable. Nodes are owned by a tree store and replaced
wholesale when they change; projections and result sets are produced fresh
by the services and never patched in place.
"""

from dataclasses import dataclass, field
from typing import Dict, Hashable, Optional, Tuple, Union

__all__ = [
    "NodeId",
    "Attribute",
    "Node",
    "FlatRow",
    "FlattenedProjection",
    "SearchResultSet",
    "SelectionState",
    "SelectRequest",
    "ExpandRequest",
    "HoverRequest",
    "CopyRequest",
    "Request",
]

NodeId = Hashable


@dataclass(frozen=True)
class Attribute:
    """A single ``name=value`` pair shown after the element name."""

    name: str
    value: str


@dataclass(frozen=True)
class Node:
    """One element of the inspected hierarchy.

    Attributes
    ----------
    node_id
        Opaque, stable and unique key of the element.
    name
        Display name (tag or component name).
    attributes
        Ordered attribute pairs.
    children
        Ordered child identities. A child may be missing from the store.
    expanded
        Whether the children are part of the flattened projection.
    decoration
        Optional decoration tag (``"litho"``, ``"accessibility"``, ...).
    """

    node_id: NodeId
    name: str
    attributes: Tuple[Attribute, ...] = ()
    children: Tuple[NodeId, ...] = ()
    expanded: bool = False
    decoration: Optional[str] = None

    @property
    def has_children(self) -> bool:
        return len(self.children) > 0

    def attribute(self, name: str) -> Optional[str]:
        """Return the value of the first attribute called ``name``."""
        for attr in self.attributes:
            if attr.name == name:
                return attr.value
        return None


@dataclass(frozen=True)
class FlatRow:
    node_id: NodeId
    node: Node
    level: int


@dataclass(frozen=True)
class FlattenedProjection:
    """Ordered, depth-tagged list of the currently visible nodes."""

    rows: Tuple[FlatRow, ...] = ()
    keys: Tuple[NodeId, ...] = ()
    max_depth: int = 0
    _index: Dict[NodeId, int] = field(default_factory=dict, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self._index and self.keys:
            object.__setattr__(self, "_index", {key: i for i, key in enumerate(self.keys)})

    def __len__(self) -> int:
        return len(self.rows)

    def index_of(self, node_id: Optional[NodeId]) -> Optional[int]:
        if node_id is None:
            return None
        return self._index.get(node_id)

    @classmethod
    def empty(cls) -> "FlattenedProjection":
        return cls()


@dataclass(frozen=True)
class SearchResultSet:
    """Active query plus the identities of the matching nodes."""

    query: str = ""
    matches: frozenset = frozenset()

    def contains(self, node_id: NodeId) -> bool:
        return node_id in self.matches

    def highlight_query(self, node_id: NodeId) -> Optional[str]:
        """Return the query for substring highlighting, only for matches."""
        if self.query and node_id in self.matches:
            return self.query
        return None

    @property
    def is_active(self) -> bool:
        return bool(self.query)


@dataclass(frozen=True)
class SelectionState:
    """Host-owned selection and hover/focus identities."""

    selected: Optional[NodeId] = None
    focused: Optional[NodeId] = None


# ---------------------------------------------------------------------------
# Change requests emitted by the core and applied by the host
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SelectRequest:
    node_id: NodeId


@dataclass(frozen=True)
class ExpandRequest:
    """Toggle the expansion flag of ``node_id``.

    With ``deep`` the new flag is applied to the node's whole subtree.
    """

    node_id: NodeId
    deep: bool = False


@dataclass(frozen=True)
class HoverRequest:
    node_id: Optional[NodeId]


@dataclass(frozen=True)
class CopyRequest:
    text: str


Request = Union[SelectRequest, ExpandRequest, HoverRequest, CopyRequest]
