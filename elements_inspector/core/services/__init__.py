from __future__ import annotations

"""Pure services operating on a tree store and its flattened projection.

Every service here is a synchronous function (or a small stateless class)
of its inputs; the host owns selection, focus and search state.
"""

from .flattener import flatten  # noqa: F401
from .search_service import search, highlight_span  # noqa: F401
from .navigation_service import NavigationIntent, navigate  # noqa: F401
from .row_presenter import (  # noqa: F401
    ContextMenuEntry,
    ContextMenuExtension,
    RowPresentation,
    RowPresenter,
)
from .expansion_service import apply_expand_request  # noqa: F401

__all__: list[str] = [
    "flatten",
    "search",
    "highlight_span",
    "NavigationIntent",
    "navigate",
    "ContextMenuEntry",
    "ContextMenuExtension",
    "RowPresentation",
    "RowPresenter",
    "apply_expand_request",
]
