"""Top-level package for the elements inspector.

The business logic lives in :mod:`elements_inspector.core` and is free of any
GUI toolkit import. Front-ends (the Tk app, tests, other hosts) should depend
on the public API re-exported here.
"""

from .core.models import Node, Attribute, SelectionState  # re-export for convenience
from .core.tree_store import InMemoryTreeStore
from .core.services import flatten, search, navigate, NavigationIntent, RowPresenter

__all__: list[str] = [
    "Node",
    "Attribute",
    "SelectionState",
    "InMemoryTreeStore",
    "flatten",
    "search",
    "navigate",
    "NavigationIntent",
    "RowPresenter",
]
