from __future__ import annotations

import logging
import tkinter as tk

logger = logging.getLogger(__name__)

__all__ = ["TkClipboard"]


class TkClipboard:
    """Clipboard collaborator backed by the Tk clipboard of ``widget``."""

    def __init__(self, widget: tk.Misc) -> None:
        self._widget = widget

    def write_text(self, text: str) -> None:
        self._widget.clipboard_clear()
        self._widget.clipboard_append(text)
        # Keep the content after the window goes away
        self._widget.update_idletasks()
        logger.debug("Copied %d characters to clipboard", len(text))
