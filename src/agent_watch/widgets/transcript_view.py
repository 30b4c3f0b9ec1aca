"""Two-panel transcript widget: a source list beside a scrollable, selectable buffer.

The widget holds a single ``WatchModel`` and never mutates it in place. Every
Textual event is turned into a model message, passed through ``update``, and
the resulting commands are carried out here: clipboard copies, background
source loads and quitting.
"""

from __future__ import annotations

from typing import Sequence

from rich.console import RenderableType
from rich.panel import Panel as RichPanel
from rich.table import Table
from rich.text import Text
from textual import events, work
from textual.binding import Binding
from textual.message import Message
from textual.widget import Widget
from textual.worker import get_current_worker

from agent_watch.buffer.cell import StyledLine
from agent_watch.buffer.rich_text import to_rich_lines
from agent_watch.utils.diff_format import INDENT
from agent_watch.utils.error_handling import log_ui_error
from agent_watch.utils.logger import log
from agent_watch.utils.sources import Source, load_source_lines
from agent_watch.view.model import (
    Command,
    ContentLoaded,
    CopyToClipboard,
    KeyPressed,
    LoadSource,
    Message as ModelMessage,
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
    update,
    visible_lines,
)

FOCUSED_BORDER = "bright_cyan"
UNFOCUSED_BORDER = "grey42"

# Textual reports mouse buttons as numbers
_BUTTONS = {
    1: MouseButton.LEFT,
    2: MouseButton.MIDDLE,
    3: MouseButton.RIGHT,
}


class TranscriptView(Widget, can_focus=True):
    """Sidebar of sources plus the active source's content with mouse selection."""

    DEFAULT_CSS = """
    TranscriptView {
        width: 1fr;
        height: 1fr;
    }
    """

    # Tab would otherwise move Textual focus away from the widget
    BINDINGS = [
        Binding("tab", "toggle_panel", "Switch panel", show=False, priority=True),
    ]

    class SourceLoaded(Message):
        """Posted from the loader thread with a source's rendered lines."""

        def __init__(self, index: int, lines: tuple[StyledLine, ...]) -> None:
            super().__init__()
            self.index = index
            self.lines = lines

    class Changed(Message):
        """Posted after any model change so the screen can refresh its footer."""

        def __init__(self, view: TranscriptView) -> None:
            super().__init__()
            self.view = view

    def __init__(self, sources: Sequence[Source] = (), *, follow: bool = True, id: str | None = None) -> None:
        super().__init__(id=id)
        self.sources: list[Source] = list(sources)
        self._model = WatchModel(settings=ViewSettings.from_config(status_rows=0, follow=follow))

    @property
    def model(self) -> WatchModel:
        return self._model

    @property
    def active_source(self) -> Source | None:
        if not self.sources:
            return None
        return self.sources[self._model.active_source]

    def on_mount(self) -> None:
        self.dispatch(Resized(self.size.width, self.size.height))
        self.dispatch(SourcesChanged(tuple(s.name for s in self.sources)))

    def dispatch(self, msg: ModelMessage) -> None:
        """Run ``msg`` through the model, repaint, and execute resulting commands."""
        model, commands = update(self._model, msg)
        changed = model != self._model
        self._model = model
        for command in commands:
            self._execute(command)
        if changed:
            self.refresh()
            self.post_message(self.Changed(self))

    def set_sources(self, sources: Sequence[Source]) -> None:
        self.sources = list(sources)
        self.dispatch(SourcesChanged(tuple(s.name for s in self.sources)))

    def reload(self) -> None:
        """Reload the active source, e.g. after its files changed on disk."""
        if self.sources:
            self._load(self._model.active_source)

    def _execute(self, command: Command) -> None:
        if isinstance(command, CopyToClipboard):
            try:
                self.app.copy_to_clipboard(command.text)
            except OSError as e:
                log_ui_error("transcript view", "copying selection", e)
                return
            log.debug(f"[VIEW] Copied {len(command.text)} characters")
            self.notify("Copied selection to clipboard", timeout=2)
        elif isinstance(command, LoadSource):
            self._load(command.index)
        elif isinstance(command, Quit):
            self.app.exit()

    def _load(self, index: int) -> None:
        if 0 <= index < len(self.sources):
            width = max(0, self._model.layout.content_width - len(INDENT))
            self._load_worker(index, self.sources[index], width)

    @work(thread=True, exclusive=True, group="source-load")
    def _load_worker(self, index: int, source: Source, width: int) -> None:
        lines = load_source_lines(source, width)
        if not get_current_worker().is_cancelled:
            self.post_message(self.SourceLoaded(index, lines))

    def on_transcript_view_source_loaded(self, message: SourceLoaded) -> None:
        message.stop()
        self.dispatch(ContentLoaded(message.index, message.lines))

    # Input translation

    def on_resize(self, event: events.Resize) -> None:
        self.dispatch(Resized(event.size.width, event.size.height))

    def on_key(self, event: events.Key) -> None:
        event.stop()
        self.dispatch(KeyPressed(event.key))

    def action_toggle_panel(self) -> None:
        self.dispatch(KeyPressed("tab"))

    def on_mouse_down(self, event: events.MouseDown) -> None:
        button = _BUTTONS.get(event.button, MouseButton.NONE)
        if button is MouseButton.LEFT:
            self.capture_mouse()
        self.dispatch(MouseEvent(event.x, event.y, button, MouseAction.PRESS))

    def on_mouse_move(self, event: events.MouseMove) -> None:
        if self._model.selection.dragging:
            self.dispatch(MouseEvent(event.x, event.y, MouseButton.LEFT, MouseAction.MOTION))

    def on_mouse_up(self, event: events.MouseUp) -> None:
        button = _BUTTONS.get(event.button, MouseButton.LEFT)
        if button is MouseButton.LEFT:
            self.release_mouse()
        self.dispatch(MouseEvent(event.x, event.y, button, MouseAction.RELEASE))

    def on_mouse_scroll_up(self, event: events.MouseScrollUp) -> None:
        event.stop()
        self.dispatch(MouseEvent(event.x, event.y, MouseButton.WHEEL_UP, MouseAction.PRESS))

    def on_mouse_scroll_down(self, event: events.MouseScrollDown) -> None:
        event.stop()
        self.dispatch(MouseEvent(event.x, event.y, MouseButton.WHEEL_DOWN, MouseAction.PRESS))

    # Painting

    def _border(self, panel: Panel) -> str:
        return FOCUSED_BORDER if self._model.focused is panel else UNFOCUSED_BORDER

    def _sidebar(self) -> RichPanel:
        rows = []
        for name, active in sidebar_entries(self._model):
            row = Text(name, no_wrap=True, overflow="ellipsis", end="")
            if active:
                row.stylize("bold reverse")
            rows.append(row)
        layout = self._model.layout
        return RichPanel(
            Text("\n", end="").join(rows),
            title="Sources",
            border_style=self._border(Panel.SIDEBAR),
            width=layout.left_width,
            height=layout.panel_height,
            padding=0,
        )

    def _content(self) -> RichPanel:
        source = self.active_source
        layout = self._model.layout
        body = Text("\n", end="").join(to_rich_lines(visible_lines(self._model)))
        return RichPanel(
            body,
            title=Text(source.name) if source is not None else "No source",
            subtitle=selection_indicator(self._model) or None,
            border_style=self._border(Panel.CONTENT),
            width=layout.right_width,
            height=layout.panel_height,
            padding=0,
        )

    def render(self) -> RenderableType:
        if self._model.width <= 0 or self._model.height <= 0:
            return Text("")
        layout = self._model.layout
        grid = Table.grid(padding=0)
        grid.add_column(width=layout.left_width, no_wrap=True)
        grid.add_column(width=layout.right_width, no_wrap=True)
        grid.add_row(self._sidebar(), self._content())
        return grid
