"""Terminal-independent view state: layout, scrolling, selection and the update loop."""

from .layout import PanelLayout
from .model import (
    ContentLoaded,
    CopyToClipboard,
    KeyPressed,
    LoadSource,
    MouseAction,
    MouseButton,
    MouseEvent,
    Panel,
    Quit,
    Resized,
    SourcesChanged,
    ViewSettings,
    WatchModel,
    selection_indicator,
    sidebar_entries,
    status_text,
    update,
    visible_lines,
)
from .selection import Position, SelectionMode, SelectionState, apply_highlight, extract_text, screen_to_content_position
from .viewport import Viewport

__all__ = [
    "ContentLoaded",
    "CopyToClipboard",
    "KeyPressed",
    "LoadSource",
    "MouseAction",
    "MouseButton",
    "MouseEvent",
    "Panel",
    "PanelLayout",
    "Position",
    "Quit",
    "Resized",
    "SelectionMode",
    "SelectionState",
    "SourcesChanged",
    "ViewSettings",
    "Viewport",
    "WatchModel",
    "apply_highlight",
    "extract_text",
    "screen_to_content_position",
    "selection_indicator",
    "sidebar_entries",
    "status_text",
    "update",
    "visible_lines",
]
