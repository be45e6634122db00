from __future__ import annotations

"""Search matching and substring highlighting.

A node matches when its name, or the value of one of its ``id``/``addr``
attributes, contains the query (case-insensitive). Only those attributes are
ever highlighted, even when another attribute contains the query.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Set

from elements_inspector.core.models import Node, NodeId, SearchResultSet
from elements_inspector.core.tree_store import TreeStoreReader

logger = logging.getLogger(__name__)

__all__ = [
    "HIGHLIGHTED_ATTRIBUTES",
    "HighlightSpan",
    "search",
    "node_matches",
    "highlight_span",
    "is_highlighted_attribute",
]

HIGHLIGHTED_ATTRIBUTES = frozenset({"id", "addr"})


@dataclass(frozen=True)
class HighlightSpan:
    """Content split around the highlighted occurrence of the query."""

    before: str
    match: str
    after: str


def is_highlighted_attribute(name: str) -> bool:
    return name in HIGHLIGHTED_ATTRIBUTES


def node_matches(node: Node, query: str) -> bool:
    """Return True if ``node`` matches ``query`` by name or ``id``/``addr`` value."""
    if not query:
        return False
    needle = query.lower()
    if needle in (node.name or "").lower():
        return True
    for attr in node.attributes:
        if is_highlighted_attribute(attr.name) and needle in (attr.value or "").lower():
            return True
    return False


def search(tree_store: TreeStoreReader, query: Optional[str], root_id: Optional[NodeId]) -> SearchResultSet:
    """Compute the match set of ``query`` over the tree below ``root_id``.

    The walk ignores expansion flags so collapsed matches are known too.
    An empty or ``None`` query returns an inactive result set.
    """
    if not query or root_id is None:
        return SearchResultSet(query="", matches=frozenset())

    matches: Set[NodeId] = set()
    visited: Set[NodeId] = set()
    stack: List[NodeId] = [root_id]
    while stack:
        node_id = stack.pop()
        if node_id in visited:
            continue
        node = tree_store.get_node(node_id)
        if node is None:
            continue
        visited.add(node_id)
        if node_matches(node, query):
            matches.add(node_id)
        stack.extend(node.children)

    logger.debug("Search %r matched %d of %d nodes", query, len(matches), len(visited))
    return SearchResultSet(query=query, matches=frozenset(matches))


def highlight_span(content: Optional[str], query: Optional[str]) -> Optional[HighlightSpan]:
    """Split ``content`` around the first case-insensitive occurrence of ``query``.

    Offsets are mapped back through the lowered text one character at a time,
    since some characters lower to more than one (``"İ"`` becomes two).
    Returns ``None`` when either side is empty or the query does not occur.
    """
    if not content or not query:
        return None
    needle = query.lower()
    lowered: List[str] = []
    origin: List[int] = []
    for i, char in enumerate(content):
        folded = char.lower()
        lowered.append(folded)
        origin.extend([i] * len(folded))
    pos = "".join(lowered).find(needle)
    if pos < 0:
        return None
    start = origin[pos]
    end = origin[pos + len(needle) - 1] + 1
    return HighlightSpan(before=content[:start], match=content[start:end], after=content[end:])
