"""Watch view state machine.

The whole view is one immutable ``WatchModel``. Input arrives as messages and
``update`` returns the next model plus a list of commands for the host to run
asynchronously (load a source, copy to the clipboard, quit). Results of those
commands come back as messages; nothing here performs I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Sequence, Union

from ..buffer.cell import Color, StyledLine
from ..utils.config import Config, config
from .layout import PanelLayout
from .selection import (
    Position,
    SelectionState,
    apply_highlight,
    extract_text,
    screen_to_content_position,
)
from .viewport import Viewport

SELECTION_INDICATOR = "SELECTING · C: copy · Esc: cancel"
KEY_HINTS = "Tab: switch | j/k: scroll | u/d: page | g/G: top/bottom | q: quit"

QUIT_KEYS = frozenset({"q", "ctrl+c"})

# key -> Viewport method
SCROLL_KEYS = {
    "up": "scroll_up",
    "k": "scroll_up",
    "down": "scroll_down",
    "j": "scroll_down",
    "u": "half_page_up",
    "d": "half_page_down",
    "pageup": "page_up",
    "pagedown": "page_down",
    "g": "goto_top",
    "home": "goto_top",
    "G": "goto_bottom",
    "end": "goto_bottom",
}


class Panel(Enum):
    SIDEBAR = "sidebar"
    CONTENT = "content"


class MouseButton(Enum):
    NONE = "none"
    LEFT = "left"
    MIDDLE = "middle"
    RIGHT = "right"
    WHEEL_UP = "wheel_up"
    WHEEL_DOWN = "wheel_down"


class MouseAction(Enum):
    PRESS = "press"
    RELEASE = "release"
    MOTION = "motion"


# Messages


@dataclass(frozen=True)
class KeyPressed:
    key: str


@dataclass(frozen=True)
class MouseEvent:
    x: int
    y: int
    button: MouseButton = MouseButton.LEFT
    action: MouseAction = MouseAction.PRESS


@dataclass(frozen=True)
class Resized:
    width: int
    height: int


@dataclass(frozen=True)
class SourcesChanged:
    names: tuple[str, ...]


@dataclass(frozen=True)
class ContentLoaded:
    source_index: int
    lines: tuple[StyledLine, ...]


Message = Union[KeyPressed, MouseEvent, Resized, SourcesChanged, ContentLoaded]


# Commands


@dataclass(frozen=True)
class CopyToClipboard:
    text: str


@dataclass(frozen=True)
class LoadSource:
    index: int


@dataclass(frozen=True)
class Quit:
    pass


Command = Union[CopyToClipboard, LoadSource, Quit]


@dataclass(frozen=True)
class ViewSettings:
    sidebar_width: int = 23
    min_content_width: int = 20
    edge_scroll_margin: int = 1
    selection_color: Color = Color.palette(238)
    status_rows: int = 1
    follow: bool = True

    @classmethod
    def from_config(cls, cfg: Config = config, status_rows: int = 1, follow: bool = True) -> ViewSettings:
        return cls(
            sidebar_width=cfg.sidebar_width,
            min_content_width=cfg.min_content_width,
            edge_scroll_margin=cfg.edge_scroll_margin,
            selection_color=Color.palette(cfg.selection_color),
            status_rows=status_rows,
            follow=follow,
        )


@dataclass(frozen=True)
class WatchModel:
    settings: ViewSettings = field(default_factory=ViewSettings.from_config)
    width: int = 0
    height: int = 0
    sources: tuple[str, ...] = ()
    active_source: int = 0
    shown_source: int | None = None
    lines: tuple[StyledLine, ...] = ()
    viewport: Viewport = Viewport()
    selection: SelectionState = SelectionState()
    sidebar_offset: int = 0
    focused: Panel = Panel.CONTENT

    @property
    def layout(self) -> PanelLayout:
        return PanelLayout(
            width=self.width,
            height=self.height,
            sidebar_width=self.settings.sidebar_width,
            min_content_width=self.settings.min_content_width,
            status_rows=self.settings.status_rows,
        )

    def content_position(self, x: int, y: int) -> Position:
        return screen_to_content_position(x, y, self.layout, self.viewport.offset, self.lines)

    @property
    def selected_text(self) -> str:
        return extract_text(self.lines, self.selection)


Update = tuple[WatchModel, list[Command]]


def update(model: WatchModel, msg: Message) -> Update:
    """Apply one message; return the new model and the commands it triggers."""
    if isinstance(msg, KeyPressed):
        return _on_key(model, msg.key)
    if isinstance(msg, MouseEvent):
        return _on_mouse(model, msg)
    if isinstance(msg, Resized):
        return _on_resize(model, msg)
    if isinstance(msg, SourcesChanged):
        return _on_sources(model, msg)
    if isinstance(msg, ContentLoaded):
        return _on_content(model, msg)
    return model, []


def _on_key(model: WatchModel, key: str) -> Update:
    if model.selection.active:
        if key == "escape":
            return replace(model, selection=SelectionState()), []
        if key == "c":
            text = model.selected_text
            commands: list[Command] = [CopyToClipboard(text)] if text else []
            return replace(model, selection=SelectionState()), commands
        if key not in QUIT_KEYS:
            return model, []

    if key in QUIT_KEYS:
        return model, [Quit()]
    if key == "tab":
        focused = Panel.CONTENT if model.focused is Panel.SIDEBAR else Panel.SIDEBAR
        return replace(model, focused=focused), []

    if model.focused is Panel.SIDEBAR:
        if key in ("up", "k"):
            return _select_source(model, model.active_source - 1)
        if key in ("down", "j"):
            return _select_source(model, model.active_source + 1)

    method = SCROLL_KEYS.get(key)
    if method is None:
        return model, []
    return replace(model, viewport=getattr(model.viewport, method)()), []


def _on_mouse(model: WatchModel, event: MouseEvent) -> Update:
    layout = model.layout
    in_sidebar = layout.in_sidebar(event.x)
    left_release = event.button is MouseButton.LEFT and event.action is MouseAction.RELEASE

    if model.selection.active and in_sidebar and left_release:
        model = replace(model, selection=SelectionState())

    if event.button in (MouseButton.WHEEL_UP, MouseButton.WHEEL_DOWN):
        step = -1 if event.button is MouseButton.WHEEL_UP else 1
        if in_sidebar:
            return _scroll_sidebar(model, step), []
        return replace(model, viewport=model.viewport.scroll_down(step)), []

    if in_sidebar:
        if left_release:
            row = event.y - layout.content_top
            index = model.sidebar_offset + row
            if 0 <= row < layout.content_height and index < len(model.sources):
                return _select_source(model, index)
        return model, []

    selection = model.selection
    if event.action is MouseAction.PRESS and event.button is MouseButton.LEFT:
        return replace(model, selection=SelectionState.begin(model.content_position(event.x, event.y))), []

    if event.action is MouseAction.MOTION and selection.dragging:
        model = replace(model, selection=selection.drag_to(model.content_position(event.x, event.y)))
        viewport = _edge_scroll(model, event.y)
        if viewport != model.viewport:
            model = replace(model, viewport=viewport)
            model = replace(model, selection=model.selection.drag_to(model.content_position(event.x, event.y)))
        return model, []

    if event.action is MouseAction.RELEASE and selection.dragging and event.button is MouseButton.LEFT:
        return replace(model, selection=selection.release(model.content_position(event.x, event.y))), []

    return model, []


def _edge_scroll(model: WatchModel, y: int) -> Viewport:
    """Scroll one line when a drag is within the margin of the content's top or bottom edge."""
    layout = model.layout
    margin = model.settings.edge_scroll_margin
    relative = y - layout.content_top
    viewport = model.viewport
    if relative <= margin and not viewport.at_top:
        return viewport.scroll_up()
    if relative >= layout.content_height - 1 - margin and not viewport.at_bottom:
        return viewport.scroll_down()
    return viewport


def _on_resize(model: WatchModel, msg: Resized) -> Update:
    model = replace(model, width=max(0, msg.width), height=max(0, msg.height))
    model = replace(model, viewport=model.viewport.resize(model.layout.content_height))
    return replace(model, sidebar_offset=_clamp_sidebar_offset(model, model.sidebar_offset)), []


def _on_sources(model: WatchModel, msg: SourcesChanged) -> Update:
    names = tuple(msg.names)
    active = min(model.active_source, max(0, len(names) - 1))
    model = replace(model, sources=names, active_source=active)
    if names and model.shown_source is None:
        return model, [LoadSource(active)]
    return model, []


def _on_content(model: WatchModel, msg: ContentLoaded) -> Update:
    if msg.source_index != model.active_source:
        # Result of a load that was superseded by a newer selection
        return model, []

    lines = tuple(msg.lines)
    selection = model.selection
    if model.settings.follow:
        viewport = model.viewport.replace_content(len(lines))
    else:
        viewport = replace(model.viewport, total_lines=len(lines)).scroll_to(model.viewport.offset)
    if msg.source_index != model.shown_source:
        viewport = viewport.goto_bottom() if model.settings.follow else viewport.goto_top()
        selection = SelectionState()

    return replace(
        model,
        lines=lines,
        shown_source=msg.source_index,
        viewport=viewport,
        selection=selection,
    ), []


def _select_source(model: WatchModel, index: int) -> Update:
    if not model.sources:
        return model, []
    index = min(max(0, index), len(model.sources) - 1)
    if index == model.active_source:
        return model, []
    model = replace(model, active_source=index, sidebar_offset=_offset_showing(model, index))
    return model, [LoadSource(index)]


def _sidebar_rows(model: WatchModel) -> int:
    return max(0, model.layout.content_height)


def _clamp_sidebar_offset(model: WatchModel, offset: int) -> int:
    return min(max(0, offset), max(0, len(model.sources) - _sidebar_rows(model)))


def _offset_showing(model: WatchModel, index: int) -> int:
    rows = _sidebar_rows(model)
    offset = model.sidebar_offset
    if index < offset:
        offset = index
    elif rows and index >= offset + rows:
        offset = index - rows + 1
    return _clamp_sidebar_offset(model, offset)


def _scroll_sidebar(model: WatchModel, step: int) -> WatchModel:
    return replace(model, sidebar_offset=_clamp_sidebar_offset(model, model.sidebar_offset + step))


def visible_lines(model: WatchModel) -> list[StyledLine]:
    """Lines to paint in the content panel, with the selection highlighted."""
    lines: Sequence[StyledLine] = model.lines
    if not model.selection.is_empty:
        lines = apply_highlight(model.lines, model.selection, model.settings.selection_color)
    return [lines[i] for i in model.viewport.visible_range()]


def sidebar_entries(model: WatchModel) -> list[tuple[str, bool]]:
    """Visible ``(name, is_active)`` pairs for the sidebar."""
    rows = _sidebar_rows(model)
    window = range(model.sidebar_offset, min(len(model.sources), model.sidebar_offset + rows))
    return [(model.sources[i], i == model.active_source) for i in window]


def selection_indicator(model: WatchModel) -> str:
    return SELECTION_INDICATOR if not model.selection.is_empty else ""


def status_text(model: WatchModel) -> str:
    viewport = model.viewport
    if viewport.total_lines == 0:
        position = "empty"
    else:
        position = f"{viewport.offset + 1}/{viewport.total_lines} {round(viewport.scroll_percent * 100)}%"
    return f"{KEY_HINTS} | {position}"
