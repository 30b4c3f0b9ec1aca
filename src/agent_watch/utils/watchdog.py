from __future__ import annotations

import os
import threading
from typing import Callable, Iterable

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .error_handling import log_watchdog_error
from .logger import log

WATCHED_EVENTS = ("modified", "created", "moved", "deleted")


class _DebouncedHandler(FileSystemEventHandler):
    """Coalesces bursts of events on the watched files into one callback."""

    def __init__(self, callback: Callable[[], None], files: Iterable[str], debounce_ms: int = 300) -> None:
        self._callback = callback
        self._files = {os.path.abspath(f) for f in files}
        self._debounce = max(0, int(debounce_ms)) / 1000.0
        self._timer: threading.Timer | None = None
        self._lock = threading.Lock()

    def _schedule(self) -> None:
        def fire() -> None:
            try:
                self._callback()
            except (RuntimeError, OSError) as e:
                log_watchdog_error("callback", "running change callback", e)

        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(self._debounce, fire)
            self._timer.daemon = True
            self._timer.start()

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def concerns(self, event: FileSystemEvent) -> bool:
        paths = [getattr(event, "src_path", ""), getattr(event, "dest_path", "")]
        return any(p and os.path.abspath(os.fsdecode(p)) in self._files for p in paths)

    # Watchdog hooks
    def on_any_event(self, event: FileSystemEvent):  # type: ignore[override]
        if event.event_type not in WATCHED_EVENTS or not self.concerns(event):
            return
        log.debug("[WATCHDOG] Event:", event.event_type, "on", event.src_path)
        self._schedule()


def start_observer(
    files: Iterable[str], on_change: Callable[[], None], *, debounce_ms: int = 300
) -> tuple[object, Callable[[], None]]:
    """
    Watch ``files`` and call ``on_change`` (debounced) when any of them changes.

    The parent directories are watched non-recursively so files that are
    replaced by rename, or created after startup, are still seen.
    Returns (observer, stop_fn); stop_fn() is idempotent and cancels any
    pending debounced callback.
    """
    files = [os.path.abspath(f) for f in files]
    handler = _DebouncedHandler(on_change, files, debounce_ms=debounce_ms)
    observer = Observer()
    for directory in sorted({os.path.dirname(f) for f in files}):
        if not os.path.isdir(directory):
            log.warning(f"[WATCHDOG] Skipping missing directory: {directory}")
            continue
        log.debug(f"[WATCHDOG] Watching directory: {directory}")
        observer.schedule(handler, directory, recursive=False)
    observer.start()

    _stopped = False
    _lock = threading.Lock()

    def stop() -> None:
        nonlocal _stopped
        with _lock:
            if _stopped:
                return
            _stopped = True
        handler.cancel()
        try:
            observer.stop()
            observer.join(timeout=0.5)
        except RuntimeError as e:
            log_watchdog_error(", ".join(files), "stopping observer", e)

    return observer, stop
