import argparse
import os
import sys

from textual.app import App

from agent_watch.screens.watch_screen import WatchScreen
from agent_watch.utils.config import config
from agent_watch.utils.logger import log
from agent_watch.utils.sources import Source


class ValidationError(Exception):
    """Invalid command-line input."""


class WatchApp(App):
    BINDINGS = []
    DEFAULT_CSS = """
    App {
        background: $surface-darken-3;
    }

    Screen {
        background: $surface-darken-3;
        width: 100%;
        height: 100%;
    }
    """

    def __init__(self, sources: list[Source], follow: bool = True):
        """Initialize the Agent Watch application.

        Args:
            sources: Transcripts and diff pairs to show in the sidebar
            follow: Keep the view pinned to the end of growing content
        """
        super().__init__()
        self.theme = "textual-dark"
        self.sources = sources
        self.follow = follow

    def on_mount(self):
        """Push the watch screen to begin the application UI."""
        self.push_screen(WatchScreen(self.sources, follow=self.follow))


def _create_argument_parser():
    """Create and configure the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="agent-watch",
        description="Agent Watch: live viewer for agent transcripts and file diffs",
    )
    parser.add_argument("files", nargs="*", metavar="FILE", help="Transcript files (ANSI text) to watch")
    parser.add_argument(
        "--diff",
        nargs=2,
        action="append",
        metavar=("OLD", "NEW"),
        default=[],
        help="Show the changes from OLD to NEW (may be repeated)",
    )
    parser.add_argument(
        "--no-follow",
        dest="follow",
        action="store_false",
        help="Do not jump to the end of content when it grows",
    )
    return parser


def _apply_environment_overrides(args):
    """Fall back to AGENT_WATCH_FILES when no files were given on the command line."""
    if not args.files and not args.diff:
        env_files = os.environ.get("AGENT_WATCH_FILES", "")
        args.files = [f for f in env_files.split(os.pathsep) if f]


def _validate_paths(paths):
    for path in paths:
        if not os.path.isfile(path):
            raise ValidationError(f"File not found: {path}")


def _build_sources(args) -> list[Source]:
    """Validate inputs and turn them into sources; raises ValidationError."""
    if not args.files and not args.diff:
        raise ValidationError("No files to watch. Pass FILE arguments, --diff OLD NEW, or set AGENT_WATCH_FILES.")
    _validate_paths(args.files)
    # The old side of a diff may not exist yet (a newly written file)
    _validate_paths(new for _old, new in args.diff)

    sources = [Source.transcript(path) for path in args.files]
    sources.extend(Source.diff(old, new) for old, new in args.diff)
    return sources


def _validate_configuration(args) -> list[Source]:
    """Validate all user inputs, exiting with status 1 on error."""
    try:
        log.debug(f"Configuration: {config!r}")
        return _build_sources(args)
    except ValidationError as e:
        log(f"Configuration validation failed: {e}")
        sys.stderr.write(f"Configuration Error: {e}\n")
        sys.stderr.write("Use --help for usage information.\n")
        sys.exit(1)


def main(argv=None):
    """Main entry point for Agent Watch."""
    parser = _create_argument_parser()
    args = parser.parse_args(argv)

    _apply_environment_overrides(args)
    sources = _validate_configuration(args)

    # The TUI owns the terminal from here on
    log.set_console_output(False)
    try:
        WatchApp(sources, follow=args.follow).run()
    finally:
        log.set_console_output(True)


if __name__ == "__main__":
    main()
