"""Search bar shown above the element rows.

Typing updates the query on every keystroke; the controller recomputes the
match set and the rows repaint with the highlighted substrings. The bar also
shows how many elements match and steps through the visible ones.
"""

from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Callable, Literal, Optional

__all__ = ["SearchBar"]

Direction = Literal["prev", "next"]


class SearchBar(ttk.Frame):
    """Query entry with a match counter and previous/next stepping.

    Parameters
    ----------
    master : tk.Widget
        Owning widget.
    on_query_changed : Optional[Callable[[str], None]]
        Receives the new query text. Repeated identical values are dropped.
    on_step : Optional[Callable[[Direction], None]]
        Receives ``"next"`` (Return, down arrow button) or ``"prev"``
        (Shift+Return, up arrow button).

    Notes
    -----
    Escape empties the query, which disables highlighting.
    """

    def __init__(
        self,
        master: "tk.Widget",
        *,
        on_query_changed: Optional[Callable[[str], None]] = None,
        on_step: Optional[Callable[[Direction], None]] = None,
    ) -> None:
        super().__init__(master)
        self._on_query_changed = on_query_changed
        self._on_step = on_step
        self._last_query = ""

        self._query = tk.StringVar(master=self, value="")
        self._status = tk.StringVar(master=self, value="")

        ttk.Label(self, text="Find").pack(side="left", padx=(0, 6))
        self._entry = ttk.Entry(self, textvariable=self._query)
        self._entry.pack(side="left", fill="x", expand=True)
        ttk.Label(self, textvariable=self._status, width=12, anchor="e").pack(side="left", padx=6)
        for text, direction in (("▲", "prev"), ("▼", "next")):
            ttk.Button(self, text=text, width=2, command=lambda d=direction: self.step(d)).pack(side="left")
        ttk.Button(self, text="✕", width=2, command=self.clear).pack(side="left", padx=(4, 0))

        self._query.trace_add("write", self._on_write)
        self._entry.bind("<Return>", lambda _e: self._step_from_key("next"), add="+")
        self._entry.bind("<KP_Enter>", lambda _e: self._step_from_key("next"), add="+")
        self._entry.bind("<Shift-Return>", lambda _e: self._step_from_key("prev"), add="+")
        self._entry.bind("<Escape>", lambda _e: self.clear(), add="+")

    # ------------------------------------------------------------------
    @property
    def query(self) -> str:
        return self._query.get()

    def set_query(self, query: Optional[str]) -> None:
        self._query.set(query or "")

    def clear(self) -> None:
        self.set_query("")

    def step(self, direction: Direction) -> None:
        if self._on_step is not None and direction in ("prev", "next"):
            self._on_step(direction)

    def set_match_count(self, count: Optional[int]) -> None:
        """Show ``count`` matches; ``None`` hides the counter."""
        if count is None:
            self._status.set("")
        elif count == 1:
            self._status.set("1 match")
        else:
            self._status.set(f"{count} matches")

    @property
    def match_status(self) -> str:
        return self._status.get()

    def focus_entry(self) -> None:
        self._entry.focus_set()
        self._entry.select_range(0, "end")

    # ------------------------------------------------------------------
    def _on_write(self, *_args) -> None:
        query = self._query.get()
        if query == self._last_query:
            return
        self._last_query = query
        if self._on_query_changed is not None:
            self._on_query_changed(query)

    def _step_from_key(self, direction: Direction) -> str:
        self.step(direction)
        return "break"
