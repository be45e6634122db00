"""UI controllers mediating between widgets and the core services.

Controllers hold transient UI state (selection, hover, search) and contain
no toolkit code.
"""

from .elements_controller import ElementsController

__all__: list[str] = ["ElementsController"]
