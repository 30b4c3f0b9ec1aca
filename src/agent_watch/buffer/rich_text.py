"""Convert styled lines into Rich ``Text`` for painting inside Textual widgets."""

from __future__ import annotations

from typing import Iterable

from rich.color import Color as RichColor
from rich.style import Style
from rich.text import Text

from .cell import CellStyle, Color, ColorType, StyledLine


def to_rich_color(color: Color) -> RichColor | None:
    if color.type is ColorType.NONE:
        return None
    if color.type is ColorType.TRUE_COLOR:
        return RichColor.from_rgb(*color.components)
    return RichColor.from_ansi(color.value)


def to_rich_style(style: CellStyle) -> Style:
    if style.is_default:
        return Style.null()
    return Style(
        color=to_rich_color(style.fg),
        bgcolor=to_rich_color(style.bg),
        bold=style.bold or None,
        italic=style.italic or None,
    )


def to_rich_text(line: StyledLine) -> Text:
    """Build a Text with one span per run of equally styled cells."""
    text = Text(no_wrap=True, overflow="crop", end="")
    run_start = 0
    for i in range(1, len(line) + 1):
        if i == len(line) or line[i].style != line[run_start].style:
            chunk = "".join(cell.char for cell in line[run_start:i])
            text.append(chunk, style=to_rich_style(line[run_start].style))
            run_start = i
    return text


def to_rich_lines(lines: Iterable[StyledLine]) -> list[Text]:
    return [to_rich_text(line) for line in lines]
