from __future__ import annotations

from typing import Dict

# Row background per presentation role (see RowPresentation.background)
ROW_BACKGROUNDS: Dict[str, str] = {
    "selected": "#4A90E2",
    "query-match": "#E4D7F5",
    "focused": "#00CF52",
    "even": "#F6F7F9",
    "": "#FFFFFF",
}

ROW_HOVER_BACKGROUND = "#EBF1FB"

TEXT_DEFAULT = "#4D3A73"
TEXT_INVERTED = "#FFFFFF"
ATTRIBUTE_KEY = "#E5533D"
ATTRIBUTE_VALUE = "#3E4C59"
HIGHLIGHT_BACKGROUND = "#FFF1A8"
HIGHLIGHT_TEXT = "#4D3A73"
CHEVRON = "#B7BCC4"
CONNECTOR_LINE = "#D3D7DC"


def text_color(selected: bool, focused: bool) -> str:
    return TEXT_INVERTED if selected or focused else TEXT_DEFAULT


def background_for(role: str, hovered: bool = False) -> str:
    """Return the fill for a row role; hover only affects unselected rows."""
    if hovered and role not in ("selected", "focused"):
        return ROW_HOVER_BACKGROUND
    return ROW_BACKGROUNDS.get(role, ROW_BACKGROUNDS[""])
