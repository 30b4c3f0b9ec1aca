"""Scroll state for a panel showing a window of content lines."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Viewport:
    """First visible row (``offset``) over ``total_lines`` with ``height`` rows visible.

    Every operation returns a new Viewport whose offset lies in
    ``[0, max(0, total_lines - height)]``.
    """

    height: int = 0
    total_lines: int = 0
    offset: int = 0

    @property
    def max_offset(self) -> int:
        return max(0, self.total_lines - max(0, self.height))

    @property
    def at_top(self) -> bool:
        return self.offset <= 0

    @property
    def at_bottom(self) -> bool:
        return self.offset >= self.max_offset

    @property
    def scroll_percent(self) -> float:
        """Scroll position as 0.0-1.0; content that fits counts as fully scrolled."""
        if self.max_offset == 0:
            return 1.0
        return self.offset / self.max_offset

    def visible_range(self) -> range:
        return range(self.offset, min(self.offset + max(0, self.height), self.total_lines))

    def scroll_to(self, offset: int) -> Viewport:
        return replace(self, offset=min(max(0, offset), self.max_offset))

    def scroll_up(self, lines: int = 1) -> Viewport:
        return self.scroll_to(self.offset - lines)

    def scroll_down(self, lines: int = 1) -> Viewport:
        return self.scroll_to(self.offset + lines)

    def page_up(self) -> Viewport:
        return self.scroll_up(max(1, self.height))

    def page_down(self) -> Viewport:
        return self.scroll_down(max(1, self.height))

    def half_page_up(self) -> Viewport:
        return self.scroll_up(max(1, self.height // 2))

    def half_page_down(self) -> Viewport:
        return self.scroll_down(max(1, self.height // 2))

    def goto_top(self) -> Viewport:
        return self.scroll_to(0)

    def goto_bottom(self) -> Viewport:
        return self.scroll_to(self.max_offset)

    def resize(self, height: int) -> Viewport:
        return replace(self, height=max(0, height)).scroll_to(self.offset)

    def replace_content(self, total_lines: int) -> Viewport:
        """Swap in content of a new length.

        A viewport that was showing the bottom keeps following it; otherwise the
        offset is preserved (clamped to the new content).
        """
        following = self.at_bottom
        updated = replace(self, total_lines=max(0, total_lines))
        if following:
            return updated.goto_bottom()
        return updated.scroll_to(self.offset)
