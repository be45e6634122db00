"""Right-click menu for element rows.

The row presenter decides what the menu contains; this module only turns the
ordered :class:`ContextMenuEntry` tuple into a native ``tk.Menu`` and pops it
up under the pointer. Actions run through :meth:`RowContextMenu._invoke`, so
a failing callback is logged and never reaches the Tk event loop.
"""

from __future__ import annotations

import logging
import tkinter as tk
from typing import Callable, Optional, Sequence

from elements_inspector.core.services.row_presenter import ContextMenuEntry

logger = logging.getLogger(__name__)

__all__ = ["RowContextMenu"]


class RowContextMenu:
    """Owner of at most one posted menu for ``owner``."""

    def __init__(self, owner: tk.Misc) -> None:
        self._owner = owner
        self._posted: Optional[tk.Menu] = None

    def build_menu(self, entries: Sequence[ContextMenuEntry]) -> tk.Menu:
        menu = tk.Menu(self._owner, tearoff=False)
        for entry in entries:
            if entry.separator:
                menu.add_separator()
            elif entry.action is None:
                menu.add_command(label=entry.label or "", state=tk.DISABLED)
            else:
                menu.add_command(label=entry.label or "", command=lambda a=entry.action: self._invoke(a))
        return menu

    def popup(self, event: tk.Event, entries: Sequence[ContextMenuEntry]) -> None:
        """Show ``entries`` at the screen position of ``event``."""
        self.dismiss()
        if not entries:
            return
        menu = self.build_menu(entries)
        menu.bind("<FocusOut>", lambda _e: self.dismiss(), add="+")
        self._posted = menu
        try:
            menu.tk_popup(int(getattr(event, "x_root", 0) or 0), int(getattr(event, "y_root", 0) or 0))
        finally:
            menu.grab_release()

    def dismiss(self) -> None:
        menu, self._posted = self._posted, None
        if menu is None:
            return
        try:
            menu.unpost()
            menu.destroy()
        except tk.TclError:
            # Already gone with its owner
            pass

    def _invoke(self, action: Callable[[], None]) -> None:
        try:
            action()
        except Exception:
            logger.exception("Context menu action failed")
        finally:
            self.dismiss()
