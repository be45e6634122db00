from __future__ import annotations

import logging
import sys
import tkinter as tk
from tkinter import font as tkfont
from tkinter import ttk
from typing import List, Optional

from elements_inspector.core.keymap import KeyEvent
from elements_inspector.core.models import HoverRequest
from elements_inspector.core.services.row_presenter import RowPresentation
from elements_inspector.core.services.search_service import HighlightSpan
from elements_inspector.ui.common import style_colors
from elements_inspector.ui.common.decoration_images import DecorationImageCache
from elements_inspector.ui.controllers.elements_controller import ElementsController
from elements_inspector.ui.dialogs.context_menu import RowContextMenu

logger = logging.getLogger(__name__)

__all__ = ["ElementsTreeWidget"]

# Tk event.state modifier bits
_STATE_SHIFT = 0x0001
_STATE_CONTROL = 0x0004
if sys.platform == "darwin":
    _STATE_META = 0x0008
    _STATE_ALT = 0x0010
else:
    _STATE_META = 0x0040
    _STATE_ALT = 0x0008

_CHEVRON_WIDTH = 16


class ElementsTreeWidget(ttk.Frame):
    """Canvas-based list painting the rows of an :class:`ElementsController`.

    The widget only paints and forwards input: it never decides navigation,
    expansion or highlighting. Only rows inside the viewport are drawn, so
    large projections stay cheap to repaint.

    Interactions:
        - Arrow keys and the copy shortcut go to ``controller.handle_key``.
        - Click selects the row; clicking the chevron toggles it.
        - Double-click toggles expansion; with Alt the whole subtree follows.
        - Pointer motion updates the hovered row.
        - Right click shows the row's context menu entries.
    """

    def __init__(
        self,
        master: "tk.Widget",
        controller: ElementsController,
        *,
        row_height: int = 23,
        indent_width: int = 12,
        decoration_images: Optional[DecorationImageCache] = None,
    ) -> None:
        super().__init__(master)
        self.controller = controller
        self.row_height = max(12, int(row_height))
        self.indent_width = max(4, int(indent_width))
        self._images = decoration_images or DecorationImageCache()
        self._menu = RowContextMenu(self)
        self._rows: List[RowPresentation] = []

        self._font = tkfont.nametofont("TkFixedFont")

        self._canvas = tk.Canvas(self, background="#FFFFFF", highlightthickness=0, takefocus=1)
        self._vsb = ttk.Scrollbar(self, orient="vertical", command=self._on_scrollbar)
        self._canvas.configure(yscrollcommand=self._vsb.set)
        self._canvas.grid(row=0, column=0, sticky="nsew")
        self._vsb.grid(row=0, column=1, sticky="ns")
        self.columnconfigure(0, weight=1)
        self.rowconfigure(0, weight=1)

        self._canvas.bind("<Configure>", lambda _e: self._paint(), add="+")
        self._canvas.bind("<KeyPress>", self._on_key_press, add="+")
        self._canvas.bind("<Button-1>", self._on_click, add="+")
        self._canvas.bind("<Double-1>", self._on_double_click, add="+")
        self._canvas.bind("<Button-3>", self._on_context_menu, add="+")
        if sys.platform == "darwin":
            self._canvas.bind("<Button-2>", self._on_context_menu, add="+")
        self._canvas.bind("<Motion>", self._on_motion, add="+")
        self._canvas.bind("<Leave>", self._on_leave, add="+")
        self._canvas.bind("<MouseWheel>", self._on_mouse_wheel, add="+")
        self._canvas.bind("<Button-4>", lambda _e: self._scroll_units(-3), add="+")
        self._canvas.bind("<Button-5>", lambda _e: self._scroll_units(3), add="+")

        self.refresh()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def refresh(self) -> None:
        """Re-read the controller rows and repaint the viewport."""
        self._rows = self.controller.rows()
        total_height = len(self._rows) * self.row_height
        self._canvas.configure(scrollregion=(0, 0, max(1, self._canvas.winfo_width()), total_height))
        self._paint()

    def row_index_at(self, y: int) -> Optional[int]:
        index = int(self._canvas.canvasy(y) // self.row_height)
        if 0 <= index < len(self._rows):
            return index
        return None

    def ensure_visible(self, index: int) -> None:
        if not self._rows:
            return
        top = index * self.row_height
        bottom = top + self.row_height
        view_top = self._canvas.canvasy(0)
        view_bottom = view_top + self._canvas.winfo_height()
        total = len(self._rows) * self.row_height
        if top < view_top:
            self._canvas.yview_moveto(top / total)
        elif bottom > view_bottom:
            self._canvas.yview_moveto(max(0, bottom - self._canvas.winfo_height()) / total)
        self._paint()

    def focus_tree(self) -> None:
        self._canvas.focus_set()

    # ------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------
    def _visible_range(self) -> range:
        height = max(self._canvas.winfo_height(), self.row_height)
        first = max(0, int(self._canvas.canvasy(0) // self.row_height))
        last = min(len(self._rows), first + height // self.row_height + 2)
        return range(first, last)

    def _paint(self) -> None:
        self._canvas.delete("all")
        width = max(self._canvas.winfo_width(), 1)
        visible = self._visible_range()
        for index in visible:
            self._paint_row(self._rows[index], width)
        # Connector lines go on top of the following rows' backgrounds
        for index in visible:
            row = self._rows[index]
            if row.show_connector:
                self._paint_connector(row)

    def _paint_row(self, row: RowPresentation, width: int) -> None:
        y0 = row.index * self.row_height
        y_mid = y0 + self.row_height // 2
        self._canvas.create_rectangle(
            0, y0, width, y0 + self.row_height,
            fill=style_colors.background_for(row.background), width=0,
        )
        fg = style_colors.text_color(row.selected, row.focused)
        x = 4 + row.indent * self.indent_width

        if row.has_children:
            chevron = "▾" if row.expanded else "▸"
            self._canvas.create_text(
                x + _CHEVRON_WIDTH // 2, y_mid, text=chevron, anchor="center",
                fill=style_colors.TEXT_INVERTED if row.selected or row.focused else style_colors.CHEVRON,
            )
        x += _CHEVRON_WIDTH

        image = self._images.get(row.decoration)
        if image is not None:
            self._canvas.create_image(x, y_mid, image=image, anchor="w")
            x += image.width() + 5

        x = self._paint_text(x, y_mid, row.node.name, row.name_highlight, fg, row.selected)
        for attr in row.attributes:
            x += self._font.measure(" ")
            key_color = fg if row.selected or row.focused else style_colors.ATTRIBUTE_KEY
            value_color = fg if row.selected or row.focused else style_colors.ATTRIBUTE_VALUE
            x = self._paint_text(x, y_mid, attr.name, None, key_color, row.selected)
            x = self._paint_text(x, y_mid, "=", None, fg, row.selected)
            x = self._paint_text(x, y_mid, attr.value, attr.highlight, value_color, row.selected)

    def _paint_text(
        self,
        x: int,
        y: int,
        content: str,
        span: Optional[HighlightSpan],
        fg: str,
        selected: bool,
    ) -> int:
        """Draw ``content`` at ``x`` with an optional highlighted span; return the new x."""
        if span is None:
            self._canvas.create_text(x, y, text=content, anchor="w", font=self._font, fill=fg)
            return x + self._font.measure(content)
        for part, highlighted in ((span.before, False), (span.match, True), (span.after, False)):
            if not part:
                continue
            part_width = self._font.measure(part)
            if highlighted:
                self._canvas.create_rectangle(
                    x, y - self.row_height // 2 + 3, x + part_width, y + self.row_height // 2 - 3,
                    fill=style_colors.HIGHLIGHT_BACKGROUND, width=0,
                )
            self._canvas.create_text(
                x, y, text=part, anchor="w", font=self._font,
                fill=style_colors.HIGHLIGHT_TEXT if highlighted and selected else fg,
            )
            x += part_width
        return x

    def _paint_connector(self, row: RowPresentation) -> None:
        x = 4 + row.indent * self.indent_width + _CHEVRON_WIDTH // 2
        top = row.index * self.row_height + self.row_height - 3
        bottom = top + row.children_count * self.row_height - 4
        if bottom > top:
            self._canvas.create_line(x, top, x, bottom, fill=style_colors.CONNECTOR_LINE, width=2)

    # ------------------------------------------------------------------
    # Scrolling
    # ------------------------------------------------------------------
    def _on_scrollbar(self, *args) -> None:
        self._canvas.yview(*args)
        self._paint()

    def _scroll_units(self, units: int) -> None:
        self._canvas.yview_scroll(units, "units")
        self._paint()

    def _on_mouse_wheel(self, event: tk.Event) -> None:
        delta = getattr(event, "delta", 0) or 0
        if delta:
            self._scroll_units(-1 if delta > 0 else 1)

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------
    def _on_key_press(self, event: tk.Event) -> Optional[str]:
        state = int(getattr(event, "state", 0) or 0)
        key_event = KeyEvent(
            key=str(getattr(event, "keysym", "") or ""),
            ctrl=bool(state & _STATE_CONTROL),
            meta=bool(state & _STATE_META),
            alt=bool(state & _STATE_ALT),
            shift=bool(state & _STATE_SHIFT),
        )
        if not self.controller.handle_key(key_event):
            return None
        index = self.controller.projection.index_of(self.controller.selection.selected)
        if index is not None:
            self.ensure_visible(index)
        return "break"

    def _on_click(self, event: tk.Event) -> None:
        self._canvas.focus_set()
        index = self.row_index_at(event.y)
        if index is None:
            return
        row = self._rows[index]
        chevron_left = 4 + row.indent * self.indent_width
        if row.has_children and chevron_left <= self._canvas.canvasx(event.x) < chevron_left + _CHEVRON_WIDTH:
            self.controller.toggle_expanded(row.node_id, deep=self._alt_pressed(event))
            return
        self.controller.select(row.node_id)

    def _on_double_click(self, event: tk.Event) -> str:
        index = self.row_index_at(event.y)
        if index is not None:
            self.controller.toggle_expanded(self._rows[index].node_id, deep=self._alt_pressed(event))
        return "break"

    def _on_motion(self, event: tk.Event) -> None:
        index = self.row_index_at(event.y)
        self.controller.apply_request(HoverRequest(self._rows[index].node_id if index is not None else None))

    def _on_leave(self, _event: tk.Event) -> None:
        self.controller.apply_request(HoverRequest(None))

    def _on_context_menu(self, event: tk.Event) -> None:
        index = self.row_index_at(event.y)
        if index is None:
            return
        self._menu.popup(event, self._rows[index].context_menu_entries)

    @staticmethod
    def _alt_pressed(event: tk.Event) -> bool:
        return bool(int(getattr(event, "state", 0) or 0) & _STATE_ALT)
