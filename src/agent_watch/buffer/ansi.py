"""ANSI/SGR decoding and encoding for styled lines.

Parsing favors robustness: agent tool output is untrusted, so malformed,
unterminated or unsupported sequences are consumed without emitting cells and
never raise. Rendering emits the smallest set of SGR sequences that reproduces
the line: a new sequence only where the style changes.
"""

from __future__ import annotations

from typing import Iterable

from .cell import DEFAULT_COLOR, DEFAULT_STYLE, Cell, CellStyle, Color, ColorType, StyledLine

ESC = "\x1b"
BEL = "\x07"
RESET = f"{ESC}[0m"

DEFAULT_TAB_SIZE = 8


def parse_styled_line(text: str, tab_size: int = DEFAULT_TAB_SIZE) -> StyledLine:
    """Decode ``text`` into cells, applying SGR sequences to a running style.

    Only SGR (``ESC [ ... m``) affects styling. Other CSI sequences, OSC strings
    (``ESC ] ... BEL``) and two-byte escapes are consumed silently, as are
    control characters other than TAB, which expands to the next tab stop.
    """
    cells: list[Cell] = []
    style = DEFAULT_STYLE
    i = 0
    n = len(text)

    while i < n:
        ch = text[i]

        if ch == ESC:
            if i + 1 >= n:
                break
            introducer = text[i + 1]
            if introducer == "[":
                end = _find_csi_terminator(text, i + 2)
                if end is None:
                    # Unterminated: swallow the rest of the input
                    break
                if text[end] == "m":
                    style = apply_sgr(style, text[i + 2:end])
                i = end + 1
            elif introducer == "]":
                i = _skip_osc(text, i + 2)
            else:
                i += 2
            continue

        if ch == "\t":
            width = max(1, tab_size)
            pad = width - (len(cells) % width)
            cells.extend(Cell(" ", style) for _ in range(pad))
        elif ch >= " " and ch != "\x7f":
            cells.append(Cell(ch, style))
        i += 1

    return StyledLine(cells)


def parse_styled_lines(text: str, tab_size: int = DEFAULT_TAB_SIZE) -> list[StyledLine]:
    """Split ``text`` on newlines and decode each line independently."""
    return [parse_styled_line(line, tab_size) for line in text.split("\n")]


def strip_ansi(text: str) -> str:
    """Return the visible characters of ``text``."""
    return parse_styled_line(text).plain


def _find_csi_terminator(text: str, start: int) -> int | None:
    for j in range(start, len(text)):
        c = text[j]
        if ("a" <= c <= "z") or ("A" <= c <= "Z"):
            return j
    return None


def _skip_osc(text: str, start: int) -> int:
    """Return the index just past an OSC string's terminator (BEL or ESC \\)."""
    j = start
    n = len(text)
    while j < n:
        if text[j] == BEL:
            return j + 1
        if text[j] == ESC and j + 1 < n and text[j + 1] == "\\":
            return j + 2
        j += 1
    return n


def _parse_params(params: str) -> list[int | None]:
    """Split an SGR parameter string; empty means 0, garbage becomes None."""
    values: list[int | None] = []
    for part in params.split(";"):
        if part == "":
            values.append(0)
        elif part.isascii() and part.isdigit():
            values.append(int(part))
        else:
            values.append(None)
    return values


def apply_sgr(style: CellStyle, params: str) -> CellStyle:
    """Return ``style`` updated by one SGR parameter list (the text between ``[`` and ``m``)."""
    codes = _parse_params(params)
    fg, bg, bold, italic = style.fg, style.bg, style.bold, style.italic

    i = 0
    while i < len(codes):
        code = codes[i]
        i += 1
        if code is None:
            continue
        if code == 0:
            fg, bg, bold, italic = DEFAULT_COLOR, DEFAULT_COLOR, False, False
        elif code == 1:
            bold = True
        elif code == 3:
            italic = True
        elif code == 22:
            bold = False
        elif code == 23:
            italic = False
        elif 30 <= code <= 37:
            fg = Color.basic(code - 30)
        elif 40 <= code <= 47:
            bg = Color.basic(code - 40)
        elif 90 <= code <= 97:
            fg = Color.basic(code - 90 + 8)
        elif 100 <= code <= 107:
            bg = Color.basic(code - 100 + 8)
        elif code == 39:
            fg = DEFAULT_COLOR
        elif code == 49:
            bg = DEFAULT_COLOR
        elif code in (38, 48):
            color, consumed = _extended_color(codes, i)
            i += consumed
            if color is not None:
                if code == 38:
                    fg = color
                else:
                    bg = color
        # Anything else (dim, underline, blink, ...) is not modelled

    return CellStyle(fg=fg, bg=bg, bold=bold, italic=italic)


def _extended_color(codes: list[int | None], i: int) -> tuple[Color | None, int]:
    """Decode the tail of a 38/48 sequence starting at ``codes[i]``.

    Returns the color (or None when malformed) and how many codes were used.
    """
    if i >= len(codes):
        return None, 0
    mode = codes[i]
    if mode == 5:
        if i + 1 >= len(codes):
            return None, len(codes) - i
        index = codes[i + 1]
        if index is None or index > 255:
            return None, 2
        return Color.palette(index), 2
    if mode == 2:
        if i + 3 >= len(codes):
            return None, len(codes) - i
        rgb = codes[i + 1:i + 4]
        if any(c is None or c > 255 for c in rgb):
            return None, 4
        return Color.rgb(*rgb), 4
    return None, 1


def color_parameters(color: Color, background: bool) -> list[str]:
    """SGR parameters selecting ``color`` as foreground or background."""
    if color.type is ColorType.NONE:
        return []
    if color.type is ColorType.BASIC:
        base = 40 if background else 30
        if color.value >= 8:
            return [str(base + 60 + color.value - 8)]
        return [str(base + color.value)]
    lead = "48" if background else "38"
    if color.type is ColorType.PALETTE_256:
        return [lead, "5", str(color.value)]
    r, g, b = color.components
    return [lead, "2", str(r), str(g), str(b)]


def sgr_parameters(style: CellStyle) -> list[str]:
    """SGR parameters that produce ``style`` starting from the default style."""
    params: list[str] = []
    if style.bold:
        params.append("1")
    if style.italic:
        params.append("3")
    params.extend(color_parameters(style.fg, background=False))
    params.extend(color_parameters(style.bg, background=True))
    return params


def render_styled_line(line: Iterable[Cell]) -> str:
    """Encode cells as text with SGR sequences emitted only on style changes."""
    out: list[str] = []
    current = DEFAULT_STYLE

    for cell in line:
        if cell.style != current:
            if cell.style.is_default:
                out.append(RESET)
            else:
                if not current.is_default:
                    out.append(RESET)
                out.append(f"{ESC}[{';'.join(sgr_parameters(cell.style))}m")
            current = cell.style
        out.append(cell.char)

    if not current.is_default:
        out.append(RESET)
    return "".join(out)


def render_styled_lines(lines: Iterable[StyledLine]) -> str:
    return "\n".join(render_styled_line(line) for line in lines)
