from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, List, Optional, Protocol

from elements_inspector.core.keymap import KeyEvent, intent_for_key
from elements_inspector.core.models import (
    CopyRequest,
    ExpandRequest,
    FlattenedProjection,
    HoverRequest,
    NodeId,
    Request,
    SearchResultSet,
    SelectionState,
    SelectRequest,
)
from elements_inspector.core.services.expansion_service import apply_expand_request
from elements_inspector.core.services.flattener import flatten
from elements_inspector.core.services.navigation_service import NavigationIntent, navigate
from elements_inspector.core.services.row_presenter import RowPresentation, RowPresenter
from elements_inspector.core.services.search_service import search
from elements_inspector.core.tree_store import InMemoryTreeStore

logger = logging.getLogger(__name__)

__all__ = ["Clipboard", "ElementsController"]


class Clipboard(Protocol):
    def write_text(self, text: str) -> None:
        ...


class ElementsController:
    """Host-side owner of selection, focus and search state.

    The controller is the single source of truth the core services read from
    and the sink for the requests they emit. It contains no UI toolkit code.

    Parameters
    ----------
    tree_store : InMemoryTreeStore
        Store holding the inspected nodes. The controller subscribes to it and
        rebuilds the projection synchronously on every shape change.
    root_id : Optional[NodeId]
        Identity of the root row.
    presenter : Optional[RowPresenter]
        Row presenter. Its ``on_copy``/``on_expand`` hooks are wired to the
        controller when left unset.
    clipboard : Optional[Clipboard]
        Clipboard collaborator used by the copy shortcut and the "Copy" menu entry.
    on_change : Optional[Callable[[], None]]
        Listener invoked after every state change (e.g. to repaint).

    Notes
    -----
    - Navigation and request handling never raise for stale identities; they
      are no-ops instead.
    - Exceptions raised by ``on_change`` or the clipboard are logged and not
      propagated so they never reach the GUI event loop.
    """

    def __init__(
        self,
        tree_store: InMemoryTreeStore,
        root_id: Optional[NodeId] = None,
        *,
        presenter: Optional[RowPresenter] = None,
        clipboard: Optional[Clipboard] = None,
        on_change: Optional[Callable[[], None]] = None,
    ) -> None:
        self.tree_store = tree_store
        self.root_id: Optional[NodeId] = root_id
        self.clipboard = clipboard
        self.on_change = on_change

        self.presenter = presenter or RowPresenter()
        if self.presenter.on_copy is None:
            self.presenter.on_copy = self.copy_text
        if self.presenter.on_expand is None:
            self.presenter.on_expand = self.toggle_expanded

        self.selection = SelectionState()
        self.search_results = SearchResultSet()
        self._projection = FlattenedProjection.empty()

        self._unsubscribe = tree_store.subscribe(self._on_store_changed)
        self.rebuild()

    # ---------------------------------------------------------------------------------
    # Projection
    # ---------------------------------------------------------------------------------

    @property
    def projection(self) -> FlattenedProjection:
        return self._projection

    def rebuild(self) -> None:
        """Recompute the projection from the root; assigned only once complete."""
        self._projection = flatten(self.tree_store, self.root_id)
        if self.search_results.is_active:
            self.search_results = search(self.tree_store, self.search_results.query, self.root_id)
        logger.debug("Rebuilt projection: %d rows, max depth %d", len(self._projection), self._projection.max_depth)

    def set_root(self, root_id: Optional[NodeId]) -> None:
        self.root_id = root_id
        self.rebuild()
        self._changed()

    def close(self) -> None:
        """Stop listening to the tree store."""
        self._unsubscribe()

    def rows(self) -> List[RowPresentation]:
        return self.presenter.present_all(self._projection, self.selection, self.search_results)

    # ---------------------------------------------------------------------------------
    # Selection / hover / search
    # ---------------------------------------------------------------------------------

    def select(self, node_id: Optional[NodeId]) -> None:
        if node_id == self.selection.selected:
            return
        self.selection = replace(self.selection, selected=node_id)
        self._changed()

    def set_hover(self, node_id: Optional[NodeId]) -> None:
        if node_id == self.selection.focused:
            return
        self.selection = replace(self.selection, focused=node_id)
        self._changed()

    def set_search_query(self, query: Optional[str]) -> SearchResultSet:
        self.search_results = search(self.tree_store, query, self.root_id)
        self._changed()
        return self.search_results

    def select_next_match(self, direction: str = "next") -> Optional[NodeId]:
        """Move the selection to the next (or previous) visible matching row.

        Wraps around the projection. Matches hidden under collapsed nodes are
        skipped. Returns the newly selected id, or None when nothing matches.
        """
        keys = self._projection.keys
        visible = [i for i, key in enumerate(keys) if self.search_results.contains(key)]
        if not visible:
            return None
        current = self._projection.index_of(self.selection.selected)
        if direction == "prev":
            before = [i for i in visible if current is None or i < current]
            target = before[-1] if before else visible[-1]
        else:
            after = [i for i in visible if current is None or i > current]
            target = after[0] if after else visible[0]
        self.select(keys[target])
        return keys[target]

    # ---------------------------------------------------------------------------------
    # Input handling
    # ---------------------------------------------------------------------------------

    def handle_key(self, event: KeyEvent) -> bool:
        """Translate and apply a key press. Returns True if the key is bound."""
        intent = intent_for_key(event)
        if intent is None:
            return False
        self.handle_intent(intent)
        return True

    def handle_intent(self, intent: NavigationIntent) -> Optional[Request]:
        request = navigate(self._projection, self.tree_store, self.selection, intent)
        if request is not None:
            self.apply_request(request)
        return request

    def apply_request(self, request: Request) -> None:
        if isinstance(request, SelectRequest):
            self.select(request.node_id)
        elif isinstance(request, ExpandRequest):
            self.toggle_expanded(request.node_id, request.deep)
        elif isinstance(request, HoverRequest):
            self.set_hover(request.node_id)
        elif isinstance(request, CopyRequest):
            self.copy_text(request.text)
        else:
            logger.warning("Unsupported request %r", request)

    def toggle_expanded(self, node_id: NodeId, deep: bool = False) -> bool:
        """Toggle expansion; the store notification triggers the rebuild."""
        return apply_expand_request(self.tree_store, ExpandRequest(node_id, deep))

    def copy_text(self, text: str) -> None:
        if self.clipboard is None:
            logger.debug("No clipboard available; dropping %r", text)
            return
        try:
            self.clipboard.write_text(text)
        except Exception:
            logger.exception("Clipboard write failed")

    # ---------------------------------------------------------------------------------
    # Internals
    # ---------------------------------------------------------------------------------

    def _on_store_changed(self) -> None:
        self.rebuild()
        self._changed()

    def _changed(self) -> None:
        if self.on_change is None:
            return
        try:
            self.on_change()
        except Exception:
            logger.exception("Change listener failed")
