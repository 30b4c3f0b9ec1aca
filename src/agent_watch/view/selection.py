"""Mouse-driven text selection over a buffer of styled lines.

Selection positions are content coordinates (line index, character offset),
not screen coordinates, so scrolling the viewport never moves a selection.
Out-of-range positions are clamped, never rejected.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Sequence

from ..buffer.cell import Color, StyledLine
from .layout import PanelLayout


@dataclass(frozen=True, order=True)
class Position:
    """A location in content: ``row`` is the line index, ``col`` the character offset."""

    row: int = 0
    col: int = 0


class SelectionMode(Enum):
    INACTIVE = "inactive"
    IDLE = "idle"
    DRAGGING = "dragging"


@dataclass(frozen=True)
class SelectionState:
    active: bool = False
    dragging: bool = False
    anchor: Position = Position()
    current: Position = Position()

    @classmethod
    def begin(cls, position: Position) -> SelectionState:
        """A fresh drag anchored (and currently) at ``position``."""
        return cls(active=True, dragging=True, anchor=position, current=position)

    @property
    def mode(self) -> SelectionMode:
        if not self.active:
            return SelectionMode.INACTIVE
        return SelectionMode.DRAGGING if self.dragging else SelectionMode.IDLE

    @property
    def is_empty(self) -> bool:
        return not self.active or self.anchor == self.current

    def normalized(self) -> tuple[Position, Position]:
        """Return ``(start, end)`` ordered by (row, col)."""
        if self.anchor <= self.current:
            return self.anchor, self.current
        return self.current, self.anchor

    def drag_to(self, position: Position) -> SelectionState:
        return replace(self, current=position)

    def release(self, position: Position) -> SelectionState:
        """Finish the drag at ``position``; a click without movement deactivates."""
        finished = replace(self, current=position, dragging=False)
        if finished.anchor == finished.current:
            return SelectionState()
        return finished


def screen_to_content_position(
    x: int, y: int, layout: PanelLayout, scroll_offset: int, lines: Sequence[StyledLine]
) -> Position:
    """Map a screen cell to a content position.

    Removes the sidebar and panel border from ``x`` and the top border from
    ``y``, adds the scroll offset, then clamps the row to the buffer and the
    column to that line's length (the caret slot after its last character).
    """
    col = max(0, x - layout.content_left)
    row = max(0, y - layout.content_top + scroll_offset)

    if not lines:
        return Position(0, 0)
    row = min(row, len(lines) - 1)
    col = min(col, len(lines[row]))
    return Position(row, col)


def _clamped_range(lines: Sequence[StyledLine], selection: SelectionState) -> tuple[Position, Position] | None:
    if selection.is_empty or not lines:
        return None
    start, end = selection.normalized()
    if start.row >= len(lines):
        return None
    if end.row >= len(lines):
        last = len(lines) - 1
        end = Position(last, len(lines[last]))
    return start, end


def _row_span(line: StyledLine, row: int, start: Position, end: Position) -> tuple[int, int]:
    first = min(start.col, len(line)) if row == start.row else 0
    last = min(end.col, len(line)) if row == end.row else len(line)
    return first, last


def extract_text(lines: Sequence[StyledLine], selection: SelectionState) -> str:
    """Plain text covered by the selection, rows joined with newlines."""
    bounds = _clamped_range(lines, selection)
    if bounds is None:
        return ""
    start, end = bounds

    parts = []
    for row in range(start.row, end.row + 1):
        line = lines[row]
        first, last = _row_span(line, row, start, end)
        parts.append(line[first:last].plain if first < last else "")
    return "\n".join(parts)


def apply_highlight(
    lines: Sequence[StyledLine], selection: SelectionState, color: Color
) -> list[StyledLine]:
    """Return ``lines`` with the selected cells on a ``color`` background.

    The input is never modified; an inactive or empty selection yields an
    equal copy of it.
    """
    result = list(lines)
    bounds = _clamped_range(lines, selection)
    if bounds is None:
        return result
    start, end = bounds

    for row in range(start.row, end.row + 1):
        first, last = _row_span(lines[row], row, start, end)
        if first < last:
            result[row] = lines[row].with_selection(first, last, color)
    return result
