"""Base screen class shared by Agent Watch screens.

Every screen follows the same composition: Header + main content + Footer.
"""

from textual.app import ComposeResult
from textual.css.query import NoMatches
from textual.screen import Screen

from agent_watch.utils.logger import log
from agent_watch.widgets.footer import Footer
from agent_watch.widgets.header import Header


class BaseScreen(Screen):
    """Base class for all Agent Watch screens.

    Subclasses implement compose_main_content() and get_footer_text(); the
    header and footer are composed here.
    """

    def __init__(self, page_name: str):
        super().__init__()
        self.page_name = page_name
        self.title = f"Agent Watch — {page_name}"

    def compose(self) -> ComposeResult:
        yield Header(page_name=self.page_name)
        yield from self.compose_main_content()
        yield Footer(text=self.get_footer_text())

    def compose_main_content(self) -> ComposeResult:
        """Define the main content area for this screen."""
        raise NotImplementedError("Subclasses must implement compose_main_content()")

    def get_footer_text(self) -> str:
        """Footer markup for this screen."""
        raise NotImplementedError("Subclasses must implement get_footer_text()")

    def _update_footer(self) -> None:
        try:
            self.query_one(Footer).set_text(self.get_footer_text())
        except NoMatches as e:
            log.debug(f"Footer not mounted yet: {e}")

    def safe_set_focus(self, widget) -> None:
        """Set focus on widget, logging instead of raising if it is gone."""
        try:
            self.set_focus(widget)
        except (AttributeError, RuntimeError) as e:
            log(f"Failed to set focus: {e}")
