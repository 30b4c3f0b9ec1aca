import os
import sys
from typing import Iterator
from unittest.mock import Mock

import pytest
from textual.events import Key

# Ensure local src path is importable
_here = os.path.dirname(os.path.dirname(__file__))
_src = os.path.join(_here, "src")
if os.path.isdir(_src) and _src not in sys.path:
    sys.path.insert(0, _src)

from agent_watch.buffer.cell import StyledLine  # noqa: E402
from agent_watch.view.model import Resized, SourcesChanged, ViewSettings, WatchModel, update  # noqa: E402

SAMPLE_TRANSCRIPT = (
    "\x1b[1m$ pytest -q\x1b[0m\n"
    "\x1b[32m....\x1b[0m\x1b[31mF\x1b[0m\n"
    "FAILED tests/test_app.py::test_exit - AssertionError\n"
    "\x1b[38;5;208m1 failed\x1b[0m, 4 passed in 0.12s\n"
)


@pytest.fixture
def sample_transcript(tmp_path) -> str:
    """A transcript file with a few lines of colored test-runner output."""
    path = tmp_path / "session.log"
    path.write_text(SAMPLE_TRANSCRIPT, encoding="utf-8")
    return str(path)


@pytest.fixture
def diff_pair(tmp_path) -> Iterator[tuple[str, str]]:
    """An (old, new) file pair differing in one line."""
    old = tmp_path / "app_old.py"
    new = tmp_path / "app.py"
    old.write_text("import os\n\ndef main():\n    return 0\n", encoding="utf-8")
    new.write_text("import os\n\ndef main():\n    return 1\n", encoding="utf-8")
    yield str(old), str(new)


def make_lines(*texts: str) -> tuple[StyledLine, ...]:
    """Plain styled lines for view tests."""
    return tuple(StyledLine.from_text(t) for t in texts)


def make_model(
    width: int = 80,
    height: int = 24,
    lines: tuple[StyledLine, ...] = (),
    sources: tuple[str, ...] = ("session.log",),
    **settings,
) -> WatchModel:
    """A sized model showing ``lines`` as source 0, scrolled to the top.

    Layout with the defaults: sidebar 23 columns, content text starts at
    x=24, y=1, and 21 rows of text are visible (24 - 1 status - 2 borders).
    """
    model = WatchModel(settings=ViewSettings(**settings))
    model, _ = update(model, Resized(width, height))
    model, _ = update(model, SourcesChanged(sources))
    viewport = model.viewport.replace_content(len(lines)).goto_top()
    return WatchModel(
        settings=model.settings,
        width=model.width,
        height=model.height,
        sources=model.sources,
        active_source=0,
        shown_source=0,
        lines=tuple(lines),
        viewport=viewport,
    )


def create_mock_key_event(key: str, **kwargs) -> Mock:
    """Create a mock keyboard event for testing.

    Args:
        key: The key string (e.g., "escape", "j", "k")
        **kwargs: Additional attributes for the mock event

    Returns:
        Mock Key event object
    """
    mock_event = Mock(spec=Key)
    mock_event.key = key
    mock_event.char = key if len(key) == 1 else None
    mock_event.is_printable = len(key) == 1 and key.isprintable()

    for attr_name, attr_value in kwargs.items():
        setattr(mock_event, attr_name, attr_value)

    return mock_event


def create_mock_mouse_event(event_type, x: int, y: int, **kwargs) -> Mock:
    """Create a mock mouse event of ``event_type`` at widget cell (x, y)."""
    mock_event = Mock(spec=event_type)
    mock_event.x = x
    mock_event.y = y

    for attr_name, attr_value in kwargs.items():
        setattr(mock_event, attr_name, attr_value)

    return mock_event
