"""Render edits and file writes from tool calls as styled, line-numbered rows."""

from __future__ import annotations

from ..buffer.cell import CellStyle, Color, StyledLine
from .config import config
from .diff_engine import DiffOp, compute_diff, extract_hunks

INDENT = "    "
HUNK_SEPARATOR = f"{INDENT}..."
TRUNCATION_MARKER = f"{INDENT}... (more lines)"

DIM_STYLE = CellStyle(fg=Color.palette(240))
DELETE_STYLE = CellStyle(fg=Color.from_hex("#FF6B6B"), bg=Color.from_hex("#3D1B1B"))
INSERT_STYLE = CellStyle(fg=Color.from_hex("#98FB98"), bg=Color.from_hex("#1B3D1B"))

_MARKERS = {
    DiffOp.EQUAL: "   ",
    DiffOp.DELETE: " - ",
    DiffOp.INSERT: " + ",
}
_STYLES = {
    DiffOp.EQUAL: DIM_STYLE,
    DiffOp.DELETE: DELETE_STYLE,
    DiffOp.INSERT: INSERT_STYLE,
}


def _fit(display: str, max_width: int) -> str:
    if max_width > 0 and len(display) > max_width:
        return display[:max(0, max_width - 3)] + "..."
    return display


def _row(display: str, style: CellStyle) -> StyledLine:
    return StyledLine.from_text(INDENT + display, style)


def format_diff(
    old_text: str,
    new_text: str,
    max_width: int = 0,
    *,
    context_lines: int | None = None,
    gap_threshold: int | None = None,
    max_lines: int | None = None,
) -> list[StyledLine]:
    """Render the change from ``old_text`` to ``new_text`` as unified diff rows.

    Each row is ``<indent><line number><marker><content>``; hunks are split by a
    ``...`` row and output beyond ``max_lines`` rows is replaced by a single
    "more lines" marker.
    """
    context_lines = config.context_lines if context_lines is None else context_lines
    gap_threshold = config.gap_threshold if gap_threshold is None else gap_threshold
    max_lines = config.max_diff_lines if max_lines is None else max_lines

    diff = compute_diff(old_text.split("\n"), new_text.split("\n"))
    hunks = extract_hunks(diff, context_lines, gap_threshold)
    if not hunks:
        return []

    widest = max(d.line_number for hunk in hunks for d in hunk)
    number_width = len(str(widest))

    rows: list[StyledLine] = []
    truncated = False
    for hunk_index, hunk in enumerate(hunks):
        if hunk_index > 0:
            if len(rows) >= max_lines:
                truncated = True
                break
            rows.append(StyledLine.from_text(HUNK_SEPARATOR, DIM_STYLE))

        for d in hunk:
            if len(rows) >= max_lines:
                truncated = True
                break
            content = d.content.rstrip(" \t")
            display = f"{d.line_number:>{number_width}}{_MARKERS[d.op]}{content}"
            rows.append(_row(_fit(display, max_width), _STYLES[d.op]))

        if truncated:
            break

    if truncated:
        rows.append(StyledLine.from_text(TRUNCATION_MARKER, DIM_STYLE))
    return rows


def _count_non_blank(text: str) -> int:
    return sum(1 for line in text.split("\n") if line.strip())


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def format_diff_summary(old_text: str, new_text: str) -> str:
    """One-line summary of an edit, counting non-blank lines on each side."""
    old_count = _count_non_blank(old_text)
    new_count = _count_non_blank(new_text)

    if old_count == 0 and new_count > 0:
        return f"└ Added {_plural(new_count, 'line')}"
    if new_count == 0 and old_count > 0:
        return f"└ Removed {_plural(old_count, 'line')}"
    return f"└ -{old_count} +{new_count} lines"


def format_write_summary(content: str) -> str:
    if not content.strip():
        return "└ Empty file"
    line_count = len(content.split("\n"))
    return f"└ {_plural(line_count, 'line')}"


def format_write_content(content: str, max_width: int = 0, max_lines: int | None = None) -> list[StyledLine]:
    """Line-numbered preview of newly written file content."""
    if not content.strip():
        return []
    max_lines = config.max_diff_lines if max_lines is None else max_lines

    lines = content.split("\n")
    number_width = len(str(len(lines)))

    rows: list[StyledLine] = []
    for number, line in enumerate(lines, start=1):
        if len(rows) >= max_lines:
            rows.append(StyledLine.from_text(TRUNCATION_MARKER, DIM_STYLE))
            break
        content_line = line.rstrip(" \t")
        display = f"{number:>{number_width}}   {content_line}"
        rows.append(_row(_fit(display, max_width), DIM_STYLE))
    return rows
