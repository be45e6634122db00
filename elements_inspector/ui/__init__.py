"""Tk front-end of the elements inspector.

The controller package is toolkit-free and safe to import anywhere; widgets
and dialogs import :mod:`tkinter` and are loaded from their own modules.
"""

from .controllers.elements_controller import ElementsController  # noqa: F401

__all__: list[str] = [
    "ElementsController",
]
