from textual.widgets import Header as TextualHeader


class Header(TextualHeader):
    """Application header; shows the screen title and the active source as subtitle."""

    DEFAULT_CSS = """
    Header {
        dock: top;
        background: $panel-darken-2;
        text-style: bold;
        height: 1;
    }
    """

    def __init__(self, page_name: str = "", show_clock: bool = False):
        super().__init__(show_clock=show_clock)
        self.page_name = page_name
