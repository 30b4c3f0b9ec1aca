"""Styled terminal buffer: cells, lines and their ANSI encoding."""

from .ansi import parse_styled_line, parse_styled_lines, render_styled_line, render_styled_lines, strip_ansi
from .cell import DEFAULT_COLOR, DEFAULT_STYLE, Cell, CellStyle, Color, ColorType, StyledLine

__all__ = [
    "Cell",
    "CellStyle",
    "Color",
    "ColorType",
    "DEFAULT_COLOR",
    "DEFAULT_STYLE",
    "StyledLine",
    "parse_styled_line",
    "parse_styled_lines",
    "render_styled_line",
    "render_styled_lines",
    "strip_ansi",
]
