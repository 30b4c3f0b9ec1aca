"""Watch screen: live view of agent transcripts and file diffs.

The transcript view fills the screen between the header and footer. A
filesystem observer (watchdog) follows the files of the active source and
reloads them when they change; switching sources moves the observer.

Key bindings: Tab (Switch panel), j/k (Scroll or pick source), u/d (Half page),
g/G (Top/Bottom), drag (Select), c (Copy selection), Esc (Cancel), q (Quit).
"""

from __future__ import annotations

from typing import Callable, Sequence

from rich.markup import escape
from textual.app import ComposeResult
from textual.css.query import NoMatches

from agent_watch.utils.base_screen import BaseScreen
from agent_watch.utils.config import config
from agent_watch.utils.error_handling import log_generic_error, log_watchdog_error
from agent_watch.utils.logger import log
from agent_watch.utils.sources import Source
from agent_watch.utils.watchdog import start_observer
from agent_watch.view.model import KEY_HINTS, selection_indicator, status_text
from agent_watch.widgets.transcript_view import TranscriptView


class WatchScreen(BaseScreen):
    """Sources sidebar plus the active transcript, reloaded live from disk."""

    def __init__(self, sources: Sequence[Source], *, follow: bool = True):
        super().__init__(page_name="Watch")
        self.sources = list(sources)
        self.follow = follow
        self._watched: Source | None = None
        self._stop_observer: Callable[[], None] | None = None

    def compose_main_content(self) -> ComposeResult:
        yield TranscriptView(self.sources, follow=self.follow, id="transcript")

    def _view(self) -> TranscriptView | None:
        try:
            return self.query_one("#transcript", TranscriptView)
        except NoMatches:
            return None

    def get_footer_text(self) -> str:
        view = self._view()
        if view is None:
            return escape(KEY_HINTS)
        text = escape(status_text(view.model))
        indicator = selection_indicator(view.model)
        if indicator:
            text = f"[bold orange1]{escape(indicator)}[/bold orange1] | {text}"
        return text

    def on_mount(self) -> None:
        view = self._view()
        if view is None:
            return
        self.safe_set_focus(view)
        self._follow_active_source(view)

    def on_unmount(self) -> None:
        self._stop_watching()

    def on_transcript_view_changed(self, message: TranscriptView.Changed) -> None:
        self._update_footer()
        self._follow_active_source(message.view)

    def _follow_active_source(self, view: TranscriptView) -> None:
        source = view.active_source
        self.sub_title = source.name if source is not None else ""
        if source is None or source == self._watched:
            return
        self._stop_watching()
        self._watched = source
        try:
            _, self._stop_observer = start_observer(
                source.paths, self._on_files_changed, debounce_ms=config.debounce_ms
            )
        except OSError as e:
            log_watchdog_error(", ".join(source.paths), "starting observer", e)
            self._stop_observer = None

    def _stop_watching(self) -> None:
        stop = self._stop_observer
        self._stop_observer = None
        self._watched = None
        if stop is not None:
            stop()

    def _on_files_changed(self) -> None:
        # Called from the watchdog timer thread
        log.debug("[WATCH] Source files changed, reloading")
        try:
            self.app.call_from_thread(self._reload)
        except RuntimeError as e:
            # App already shutting down
            log_generic_error("watch screen", "scheduling reload", e, prefix="WATCH")

    def _reload(self) -> None:
        view = self._view()
        if view is not None:
            view.reload()
