# -*- coding: utf-8 -*-
"""Tk-based GUI front-end for the elements inspector.

Exposes the :class:`ElementsInspectorApp` widget, which is instantiated by ``run.py``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import tkinter as tk
from tkinter import ttk

from elements_inspector.config import ConfigManager
from elements_inspector.core.models import NodeId
from elements_inspector.core.services.row_presenter import ContextMenuExtension, RowPresenter
from elements_inspector.core.tree_store import InMemoryTreeStore
from elements_inspector.ui.common.clipboard import TkClipboard
from elements_inspector.ui.common.decoration_images import DecorationImageCache
from elements_inspector.ui.controllers.elements_controller import ElementsController
from elements_inspector.ui.widgets.elements_tree import ElementsTreeWidget
from elements_inspector.ui.widgets.search_widget import SearchBar

logger = logging.getLogger(__name__)

__all__ = ["ElementsInspectorApp"]


class ElementsInspectorApp:
    """Main application widget: search bar, element rows and a status line."""

    def __init__(
        self,
        root: tk.Tk,
        tree_store: InMemoryTreeStore,
        root_id: Optional[NodeId],
        *,
        settings: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.root = root
        self.settings = settings if settings is not None else ConfigManager().get_inspector_config()

        self.clipboard = TkClipboard(root)
        presenter = RowPresenter(
            alternate_row_color=bool(self.settings.get("alternate_row_color", True)),
            context_menu_extensions=[
                ContextMenuExtension(label="Expand All", click=self._expand_subtree),
                ContextMenuExtension(label="Copy Path", click=self._copy_path),
            ],
        )
        self.controller = ElementsController(
            tree_store,
            root_id,
            presenter=presenter,
            clipboard=self.clipboard,
        )

        frame = ttk.Frame(root, padding=6)
        frame.pack(fill="both", expand=True)
        frame.columnconfigure(0, weight=1)
        frame.rowconfigure(1, weight=1)

        self.search = SearchBar(
            frame,
            on_query_changed=self._on_search_changed,
            on_step=self._on_search_navigate,
        )
        self.search.grid(row=0, column=0, sticky="ew", pady=(0, 6))

        self.tree = ElementsTreeWidget(
            frame,
            self.controller,
            row_height=int(self.settings.get("row_height", 23)),
            indent_width=int(self.settings.get("indent_width", 12)),
            decoration_images=DecorationImageCache(self.settings.get("asset_dir", "assets")),
        )
        self.tree.grid(row=1, column=0, sticky="nsew")

        self.status_var = tk.StringVar(value="")
        ttk.Label(frame, textvariable=self.status_var, anchor="w").grid(row=2, column=0, sticky="ew", pady=(6, 0))

        self.controller.on_change = self._on_controller_changed
        if root_id is not None and self.controller.selection.selected is None:
            self.controller.select(root_id)
        self._on_controller_changed()
        self.tree.focus_tree()

        root.bind("<Control-f>", lambda _e: self.search.focus_entry(), add="+")
        logger.info("Inspector ready: %d elements, %d visible rows", len(tree_store), len(self.controller.projection))

    # ------------------------------------------------------------------
    def _on_controller_changed(self) -> None:
        self.tree.refresh()
        projection = self.controller.projection
        parts = [f"{len(projection)} rows", f"depth {projection.max_depth}"]
        results = self.controller.search_results
        if results.is_active:
            parts.append(f"{len(results.matches)} matches for '{results.query}'")
        self.search.set_match_count(len(results.matches) if results.is_active else None)
        selected = self.controller.tree_store.get_node(self.controller.selection.selected)
        if selected is not None:
            parts.append(f"selected: {selected.name}")
        self.status_var.set("  |  ".join(parts))

    def _on_search_changed(self, term: str) -> None:
        self.controller.set_search_query(term)

    def _on_search_navigate(self, direction: str) -> None:
        self.controller.select_next_match(direction)
        index = self.controller.projection.index_of(self.controller.selection.selected)
        if index is not None:
            self.tree.ensure_visible(index)

    def _expand_subtree(self, node_id: NodeId) -> None:
        node = self.controller.tree_store.get_node(node_id)
        if node is None:
            return
        if node.expanded:
            # A deep toggle on an expanded node would collapse it; expand it first
            self.controller.toggle_expanded(node_id)
        self.controller.toggle_expanded(node_id, deep=True)

    def _copy_path(self, node_id: NodeId) -> None:
        """Copy the names from the root down to ``node_id``, separated by ``/``."""
        projection = self.controller.projection
        index = projection.index_of(node_id)
        if index is None:
            return
        names = [projection.rows[index].node.name]
        level = projection.rows[index].level
        for i in range(index - 1, -1, -1):
            row = projection.rows[i]
            if row.level == level - 1:
                names.append(row.node.name)
                level = row.level
        self.controller.copy_text("/" + "/".join(reversed(names)))
