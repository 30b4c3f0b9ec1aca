from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from .error_handling import log_file_error
from .logger import log

ERROR_LINE = "[Error reading file]"


@dataclass
class FileReadResult:
    """Result of file reading operations with consistent error handling."""
    success: bool
    content: str = ""
    encoding: str = ""
    error_message: str = ""
    lines: list[str] = field(default_factory=list)


DEFAULT_ENCODINGS: tuple[str, ...] = (
    "utf-8",
    "utf-8-sig",
    "cp1252",
    "latin-1",
)


def read_text(
    path: str, encodings: Iterable[str] = DEFAULT_ENCODINGS, ignore_on_last: bool = True
) -> tuple[str, str]:
    """
    Read a text file trying multiple encodings in order.

    Returns (text, used_encoding). Raises OSError when the file cannot be
    opened. If every strict attempt fails and ignore_on_last is True, the last
    encoding is retried with errors="ignore".
    """
    last_enc = None
    for enc in encodings:
        last_enc = enc
        try:
            with open(path, encoding=enc, newline="") as f:
                return f.read(), enc
        except UnicodeDecodeError:
            continue
    if ignore_on_last and last_enc:
        with open(path, encoding=last_enc, errors="ignore", newline="") as f:
            log.debug(f"[IO] Decoded with ignore: {path} ({last_enc})")
            return f.read(), f"{last_enc}+ignore"
    raise UnicodeDecodeError(last_enc or "", b"", 0, 0, f"no encoding could decode {path}")


def safe_read_file(file_path: str, default_content: str = "") -> FileReadResult:
    """Read a file, reporting failures in the result instead of raising.

    Args:
        file_path: Path to the file to read
        default_content: Content to return on error (default: empty string)

    Returns:
        FileReadResult with success status, content, and error details. On
        failure ``lines`` holds a single error marker row.
    """
    if not file_path:
        return FileReadResult(
            success=False,
            content=default_content,
            error_message="No file path provided",
            lines=[ERROR_LINE],
        )

    try:
        content, encoding = read_text(file_path)
    except (OSError, UnicodeDecodeError) as e:
        log_file_error(file_path, "reading", e)
        return FileReadResult(
            success=False,
            content=default_content,
            error_message=f"Error reading {file_path}: {e}",
            lines=[ERROR_LINE],
        )

    return FileReadResult(
        success=True,
        content=content,
        encoding=encoding,
        lines=content.splitlines(),
    )
