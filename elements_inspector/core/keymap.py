from __future__ import annotations

"""Translate named key events into navigation intents."""

import sys
from dataclasses import dataclass
from typing import Dict, Optional

from elements_inspector.core.services.navigation_service import NavigationIntent

__all__ = ["KeyEvent", "intent_for_key"]

_DIRECTIONAL_KEYS: Dict[str, NavigationIntent] = {
    "Up": NavigationIntent.MOVE_PREVIOUS,
    "ArrowUp": NavigationIntent.MOVE_PREVIOUS,
    "Down": NavigationIntent.MOVE_NEXT,
    "ArrowDown": NavigationIntent.MOVE_NEXT,
    "Left": NavigationIntent.COLLAPSE_OR_PARENT,
    "ArrowLeft": NavigationIntent.COLLAPSE_OR_PARENT,
    "Right": NavigationIntent.EXPAND_OR_CHILD,
    "ArrowRight": NavigationIntent.EXPAND_OR_CHILD,
}


@dataclass(frozen=True)
class KeyEvent:
    """A discrete key press with its modifier flags."""

    key: str
    ctrl: bool = False
    meta: bool = False
    alt: bool = False
    shift: bool = False


def intent_for_key(event: KeyEvent, platform: Optional[str] = None) -> Optional[NavigationIntent]:
    """Return the intent bound to ``event`` or ``None`` when it is not handled.

    The copy shortcut is Cmd+C on macOS and Ctrl+C elsewhere.
    """
    platform = platform or sys.platform
    if event.key in ("c", "C"):
        copy_modifier = event.meta if platform == "darwin" else event.ctrl
        return NavigationIntent.COPY if copy_modifier else None
    return _DIRECTIONAL_KEYS.get(event.key)
