"""agent_watch: terminal viewer for live agent transcripts and file diffs.

Captured terminal output is parsed into styled cells, laid out beside a list
of watched sources, and kept up to date as the files change on disk.
"""

__version__ = "0.1.0"
