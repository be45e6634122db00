from __future__ import annotations

"""Per-row presentation facts consumed by the renderer.

The presenter is UI-agnostic: it turns a row of the flattened projection,
the host selection and the active search results into a
:class:`RowPresentation`. Painting, fonts and colours stay in the UI layer.

Extension points are plain callables supplied by the caller:

- ``decorate_row(node)`` overrides decoration resolution entirely;
- ``decoration_resolver(tag)`` maps a decoration tag to an asset reference;
- ``ContextMenuExtension(label, click)`` entries are appended to the menu;
- ``on_copy(text)`` and ``on_expand(node_id, deep)`` back the built-in
  menu actions.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from elements_inspector.core.models import (
    FlattenedProjection,
    Node,
    NodeId,
    SearchResultSet,
    SelectionState,
)
from elements_inspector.core.services.search_service import (
    HighlightSpan,
    highlight_span,
    is_highlighted_attribute,
)

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_DECORATION_ASSETS",
    "resolve_decoration",
    "children_count",
    "AttributePresentation",
    "ContextMenuEntry",
    "ContextMenuExtension",
    "RowPresentation",
    "RowPresenter",
]

DEFAULT_DECORATION_ASSETS: Dict[str, str] = {
    "litho": "icons/litho-logo.png",
    "componentkit": "icons/componentkit-logo.png",
    "componentscript": "icons/componentscript-logo.png",
    "accessibility": "icons/accessibility.png",
}

# Background roles in precedence order
BACKGROUND_SELECTED = "selected"
BACKGROUND_QUERY_MATCH = "query-match"
BACKGROUND_FOCUSED = "focused"
BACKGROUND_EVEN = "even"
BACKGROUND_NONE = ""


def resolve_decoration(tag: Optional[str]) -> Optional[str]:
    """Map a decoration tag to its asset reference; unknown tags give ``None``."""
    if not tag:
        return None
    return DEFAULT_DECORATION_ASSETS.get(tag)


def children_count(projection: FlattenedProjection, index: int) -> int:
    """Number of visible descendant rows directly following row ``index``."""
    rows = projection.rows
    if index < 0 or index >= len(rows):
        return 0
    level = rows[index].level
    count = 0
    for row in rows[index + 1:]:
        if row.level <= level:
            break
        count += 1
    return count


@dataclass(frozen=True)
class AttributePresentation:
    name: str
    value: str
    highlight: Optional[HighlightSpan] = None


@dataclass(frozen=True)
class ContextMenuEntry:
    """One context menu item; separators carry no label nor action."""

    label: Optional[str] = None
    action: Optional[Callable[[], None]] = None
    separator: bool = False

    @classmethod
    def make_separator(cls) -> "ContextMenuEntry":
        return cls(separator=True)


@dataclass(frozen=True)
class ContextMenuExtension:
    """Caller-supplied menu entry; ``click`` receives the row's node id."""

    label: str
    click: Callable[[NodeId], None]


@dataclass(frozen=True)
class RowPresentation:
    node_id: NodeId
    node: Node
    index: int
    level: int
    indent: int
    selected: bool
    focused: bool
    is_even: bool
    is_query_match: bool
    highlight_text: Optional[str]
    name_highlight: Optional[HighlightSpan]
    attributes: Tuple[AttributePresentation, ...]
    children_count: int
    has_children: bool
    expanded: bool
    show_connector: bool
    background: str
    decoration: Any
    context_menu_entries: Tuple[ContextMenuEntry, ...]


class RowPresenter:
    """Compute :class:`RowPresentation` objects for a flattened projection.

    Parameters
    ----------
    alternate_row_color : bool
        When False, ``is_even`` is always False.
    decorate_row : Optional[Callable[[Node], Any]]
        Per-node decoration function; takes precedence over tags.
    decoration_resolver : Optional[Callable[[Optional[str]], Any]]
        Tag resolver used when ``decorate_row`` is absent. Defaults to
        :func:`resolve_decoration`.
    context_menu_extensions : Sequence[ContextMenuExtension]
        Entries appended after the built-in ones.
    on_copy : Optional[Callable[[str], None]]
        Clipboard writer backing the "Copy" entry.
    on_expand : Optional[Callable[[NodeId, bool], None]]
        Expansion toggle backing the "Expand"/"Collapse" entry.
    """

    def __init__(
        self,
        *,
        alternate_row_color: bool = True,
        decorate_row: Optional[Callable[[Node], Any]] = None,
        decoration_resolver: Optional[Callable[[Optional[str]], Any]] = None,
        context_menu_extensions: Sequence[ContextMenuExtension] = (),
        on_copy: Optional[Callable[[str], None]] = None,
        on_expand: Optional[Callable[[NodeId, bool], None]] = None,
    ) -> None:
        self.alternate_row_color = alternate_row_color
        self.decorate_row = decorate_row
        self.decoration_resolver = decoration_resolver or resolve_decoration
        self.context_menu_extensions: Tuple[ContextMenuExtension, ...] = tuple(context_menu_extensions)
        self.on_copy = on_copy
        self.on_expand = on_expand

    # ------------------------------------------------------------------
    def present_all(
        self,
        projection: FlattenedProjection,
        selection: SelectionState,
        search_results: Optional[SearchResultSet] = None,
    ) -> List[RowPresentation]:
        return [
            self.present(projection, i, selection, search_results)
            for i in range(len(projection))
        ]

    def present(
        self,
        projection: FlattenedProjection,
        index: int,
        selection: SelectionState,
        search_results: Optional[SearchResultSet] = None,
    ) -> RowPresentation:
        row = projection.rows[index]
        node = row.node

        is_query_match = search_results is not None and search_results.contains(row.node_id)
        highlight_text = search_results.highlight_query(row.node_id) if is_query_match else None

        attributes = tuple(
            AttributePresentation(
                name=attr.name,
                value=attr.value,
                highlight=(
                    highlight_span(attr.value, highlight_text)
                    if is_highlighted_attribute(attr.name)
                    else None
                ),
            )
            for attr in node.attributes
        )

        selected = selection.selected is not None and selection.selected == row.node_id
        focused = selection.focused is not None and selection.focused == row.node_id
        is_even = self.alternate_row_color and index % 2 == 0
        has_children = node.has_children

        return RowPresentation(
            node_id=row.node_id,
            node=node,
            index=index,
            level=row.level,
            indent=row.level - 1,
            selected=selected,
            focused=focused,
            is_even=is_even,
            is_query_match=is_query_match,
            highlight_text=highlight_text,
            name_highlight=highlight_span(node.name, highlight_text),
            attributes=attributes,
            children_count=children_count(projection, index),
            has_children=has_children,
            expanded=node.expanded,
            show_connector=(selected or focused) and has_children and node.expanded,
            background=self._background(selected, is_query_match, focused, is_even),
            decoration=self.decoration_for(node),
            context_menu_entries=self.context_menu_for(row.node_id, node),
        )

    # ------------------------------------------------------------------
    def decoration_for(self, node: Node) -> Any:
        if self.decorate_row is not None:
            return self.decorate_row(node)
        return self.decoration_resolver(node.decoration)

    def context_menu_for(self, node_id: NodeId, node: Node) -> Tuple[ContextMenuEntry, ...]:
        """Built-in entries (separator, Copy, Expand/Collapse) plus extensions."""
        copy_text = f"{node.name} id={node_id}"
        entries: List[ContextMenuEntry] = [
            ContextMenuEntry.make_separator(),
            ContextMenuEntry(label="Copy", action=lambda text=copy_text: self._copy(text)),
            ContextMenuEntry(
                label="Collapse" if node.expanded else "Expand",
                action=lambda nid=node_id: self._expand(nid),
            ),
        ]
        for extension in self.context_menu_extensions:
            entries.append(
                ContextMenuEntry(
                    label=extension.label,
                    action=lambda ext=extension, nid=node_id: ext.click(nid),
                )
            )
        return tuple(entries)

    # ------------------------------------------------------------------
    @staticmethod
    def _background(selected: bool, is_query_match: bool, focused: bool, is_even: bool) -> str:
        if selected:
            return BACKGROUND_SELECTED
        if is_query_match:
            return BACKGROUND_QUERY_MATCH
        if focused:
            return BACKGROUND_FOCUSED
        if is_even:
            return BACKGROUND_EVEN
        return BACKGROUND_NONE

    def _copy(self, text: str) -> None:
        if self.on_copy is None:
            logger.debug("No clipboard collaborator; dropping copy of %r", text)
            return
        self.on_copy(text)

    def _expand(self, node_id: NodeId) -> None:
        if self.on_expand is None:
            logger.debug("No expansion handler; dropping toggle of %r", node_id)
            return
        self.on_expand(node_id, False)
