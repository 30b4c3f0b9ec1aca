"""Watchable sources and how their files become styled lines.

A transcript source is one file of captured terminal output (ANSI escapes
allowed). A diff source is an ``(old, new)`` pair of files rendered as a
summary row followed by unified diff rows; an empty old side is shown as a
newly written file.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum

from ..buffer.ansi import parse_styled_lines
from ..buffer.cell import CellStyle, Color, StyledLine
from .config import config
from .diff_format import (
    format_diff,
    format_diff_summary,
    format_write_content,
    format_write_summary,
)
from .io import ERROR_LINE, safe_read_file
from .logger import log

SUMMARY_STYLE = CellStyle(fg=Color.palette(245))
ERROR_STYLE = CellStyle(fg=Color.basic(1), bold=True)


class SourceKind(Enum):
    TRANSCRIPT = "transcript"
    DIFF = "diff"


@dataclass(frozen=True)
class Source:
    name: str
    kind: SourceKind
    paths: tuple[str, ...]

    @classmethod
    def transcript(cls, path: str) -> Source:
        return cls(os.path.basename(path) or path, SourceKind.TRANSCRIPT, (path,))

    @classmethod
    def diff(cls, old_path: str, new_path: str) -> Source:
        name = os.path.basename(new_path) or new_path
        return cls(f"{name} (diff)", SourceKind.DIFF, (old_path, new_path))


def _error_lines() -> tuple[StyledLine, ...]:
    return (StyledLine.from_text(ERROR_LINE, ERROR_STYLE),)


def _load_transcript(path: str) -> tuple[StyledLine, ...]:
    result = safe_read_file(path)
    if not result.success:
        return _error_lines()

    text = result.content
    if text.endswith("\n"):
        text = text[:-1]
    if not text:
        return ()

    lines = parse_styled_lines(text, tab_size=config.tab_size)
    limit = config.max_render_lines
    if len(lines) > limit:
        log.debug(f"[SOURCES] {path}: keeping last {limit} of {len(lines)} lines")
        lines = lines[-limit:]
    return tuple(lines)


def _load_diff(old_path: str, new_path: str, width: int) -> tuple[StyledLine, ...]:
    old = safe_read_file(old_path)
    new = safe_read_file(new_path)
    if not new.success:
        return _error_lines()

    # A missing or empty old file means the new one was just written
    if not old.success or not old.content.strip():
        rows = [StyledLine.from_text(format_write_summary(new.content), SUMMARY_STYLE)]
        rows.extend(format_write_content(new.content, max_width=width))
        return tuple(rows)

    rows = [StyledLine.from_text(format_diff_summary(old.content, new.content), SUMMARY_STYLE)]
    rows.extend(format_diff(old.content, new.content, max_width=width))
    return tuple(rows)


def load_source_lines(source: Source, width: int = 0) -> tuple[StyledLine, ...]:
    """Read ``source`` from disk and render it; unreadable files yield an error row.

    ``width`` bounds diff rows (0 means unbounded); transcript lines are kept
    whole and cropped at paint time.
    """
    log.debug(f"[SOURCES] Loading {source.name} ({source.kind.value})")
    if source.kind is SourceKind.DIFF:
        old_path, new_path = source.paths
        return _load_diff(old_path, new_path, width)
    return _load_transcript(source.paths[0])
