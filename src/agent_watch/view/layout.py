"""Panel geometry for the watch view.

Maps the terminal size to a sidebar and a bordered content panel above the
status rows, and answers which panel a screen cell falls in.
"""

from __future__ import annotations

from dataclasses import dataclass

BORDER = 1
MIN_SIDEBAR_WIDTH = 10
MIN_PANEL_HEIGHT = 3


@dataclass(frozen=True)
class PanelLayout:
    """Geometry of the two-panel watch view: a sidebar and a bordered content panel.

    ``width``/``height`` are the full area in cells; ``status_rows`` are taken
    from the bottom for a status line.
    """

    width: int
    height: int
    sidebar_width: int = 23
    min_content_width: int = 20
    status_rows: int = 1

    @property
    def panel_height(self) -> int:
        return max(MIN_PANEL_HEIGHT, self.height - self.status_rows)

    @property
    def content_height(self) -> int:
        """Rows of text visible inside the content panel's borders."""
        return self.panel_height - 2 * BORDER

    @property
    def left_width(self) -> int:
        if self.width - self.sidebar_width < self.min_content_width:
            return max(MIN_SIDEBAR_WIDTH, self.width - self.min_content_width)
        return self.sidebar_width

    @property
    def right_width(self) -> int:
        return max(self.min_content_width, self.width - self.left_width)

    @property
    def content_width(self) -> int:
        return self.right_width - 2 * BORDER

    @property
    def content_left(self) -> int:
        """Screen column of the first text column in the content panel."""
        return self.left_width + BORDER

    @property
    def content_top(self) -> int:
        """Screen row of the first text row in the content panel."""
        return BORDER

    def in_sidebar(self, x: int) -> bool:
        return x < self.left_width
