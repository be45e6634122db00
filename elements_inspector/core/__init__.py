"""UI-agnostic core: tree model, flattening, search, navigation and row presentation."""

from .models import (  # noqa: F401
    Attribute,
    CopyRequest,
    ExpandRequest,
    FlatRow,
    FlattenedProjection,
    HoverRequest,
    Node,
    SearchResultSet,
    SelectionState,
    SelectRequest,
)
from .tree_store import InMemoryTreeStore, TreeStoreReader  # noqa: F401

__all__: list[str] = [
    "Attribute",
    "CopyRequest",
    "ExpandRequest",
    "FlatRow",
    "FlattenedProjection",
    "HoverRequest",
    "Node",
    "SearchResultSet",
    "SelectionState",
    "SelectRequest",
    "InMemoryTreeStore",
    "TreeStoreReader",
]
