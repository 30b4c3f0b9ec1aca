"""Styled cell model shared by the parser, renderer, diff formatter and views.

A ``StyledLine`` is an immutable row of ``Cell`` values, one per visible
column. Nothing in a StyledLine is an escape sequence; ANSI only exists at the
edges (see ``agent_watch.buffer.ansi``).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, overload


class ColorType(Enum):
    """How the payload of a ``Color`` is interpreted."""

    NONE = "none"
    BASIC = "basic"  # 0-15, the 8 standard colors plus their bright variants
    PALETTE_256 = "palette"  # 0-255 xterm palette
    TRUE_COLOR = "truecolor"  # packed 0xRRGGBB


_MAX_VALUE = {
    ColorType.NONE: 0,
    ColorType.BASIC: 15,
    ColorType.PALETTE_256: 255,
    ColorType.TRUE_COLOR: 0xFFFFFF,
}


@dataclass(frozen=True)
class Color:
    """A terminal color tagged by its kind."""

    type: ColorType = ColorType.NONE
    value: int = 0

    def __post_init__(self):
        if not 0 <= self.value <= _MAX_VALUE[self.type]:
            raise ValueError(f"color value {self.value} out of range for {self.type.value}")

    @classmethod
    def basic(cls, index: int) -> Color:
        return cls(ColorType.BASIC, index)

    @classmethod
    def palette(cls, index: int) -> Color:
        return cls(ColorType.PALETTE_256, index)

    @classmethod
    def rgb(cls, red: int, green: int, blue: int) -> Color:
        for component in (red, green, blue):
            if not 0 <= component <= 255:
                raise ValueError(f"RGB component {component} out of range")
        return cls(ColorType.TRUE_COLOR, (red << 16) | (green << 8) | blue)

    @classmethod
    def from_hex(cls, code: str) -> Color:
        """Build a truecolor from ``#RRGGBB``."""
        digits = code.lstrip("#")
        if len(digits) != 6:
            raise ValueError(f"expected #RRGGBB, got {code!r}")
        return cls(ColorType.TRUE_COLOR, int(digits, 16))

    @property
    def is_default(self) -> bool:
        return self.type is ColorType.NONE

    @property
    def components(self) -> tuple[int, int, int]:
        """Red, green and blue of a truecolor value."""
        return (self.value >> 16) & 0xFF, (self.value >> 8) & 0xFF, self.value & 0xFF


DEFAULT_COLOR = Color()


@dataclass(frozen=True)
class CellStyle:
    """Visual attributes of a single cell. Compared by value."""

    fg: Color = DEFAULT_COLOR
    bg: Color = DEFAULT_COLOR
    bold: bool = False
    italic: bool = False

    @property
    def is_default(self) -> bool:
        return self == DEFAULT_STYLE

    def with_background(self, color: Color) -> CellStyle:
        return replace(self, bg=color)


DEFAULT_STYLE = CellStyle()


@dataclass(frozen=True)
class Cell:
    """One character and its style."""

    char: str
    style: CellStyle = DEFAULT_STYLE

    def __post_init__(self):
        if len(self.char) != 1:
            raise ValueError(f"a cell holds exactly one character, got {self.char!r}")


class StyledLine(tuple):
    """An immutable sequence of cells; its length is its visible column count."""

    __slots__ = ()

    def __new__(cls, cells: Iterable[Cell] = ()):
        return super().__new__(cls, cells)

    @classmethod
    def from_text(cls, text: str, style: CellStyle = DEFAULT_STYLE) -> StyledLine:
        return cls(Cell(ch, style) for ch in text)

    @property
    def plain(self) -> str:
        """The text without any styling."""
        return "".join(cell.char for cell in self)

    def __str__(self) -> str:
        return self.plain

    def __repr__(self) -> str:
        return f"StyledLine({self.plain!r})"

    @overload
    def __getitem__(self, index: int) -> Cell: ...

    @overload
    def __getitem__(self, index: slice) -> StyledLine: ...

    def __getitem__(self, index):
        result = super().__getitem__(index)
        if isinstance(index, slice):
            return StyledLine(result)
        return result

    def __add__(self, other):
        return StyledLine(tuple(self) + tuple(other))

    def with_style(self, style: CellStyle) -> StyledLine:
        """Return the same characters, all carrying ``style``."""
        return StyledLine(Cell(cell.char, style) for cell in self)

    def with_selection(self, start: int, end: int, color: Color) -> StyledLine:
        """Return a copy whose cells in ``[start, end)`` use ``color`` as background.

        Foreground, bold and italic are kept so highlighted text stays legible.
        """
        start = max(0, start)
        end = min(len(self), end)
        if start >= end:
            return self
        cells = list(self)
        for i in range(start, end):
            cell = cells[i]
            cells[i] = Cell(cell.char, cell.style.with_background(color))
        return StyledLine(cells)

    def render(self) -> str:
        """Encode as a minimal ANSI string."""
        from .ansi import render_styled_line

        return render_styled_line(self)
