"""Standardized error logging helpers for Agent Watch.

The pure buffer, diff and view modules never raise on untrusted input; the
I/O and Textual layers catch what they can recover from and report it here so
every failure line in the debug log has the same shape.
"""

from typing import Optional

from .logger import log


def log_file_error(file_path: str, operation: str, exception: Exception) -> None:
    """Log file operation errors with consistent formatting.

    Args:
        file_path: Path to the file that caused the error
        operation: Description of the operation (e.g., "reading", "watching")
        exception: The exception that was raised
    """
    error_type = type(exception).__name__
    log.error(f"[IO] Failed {operation} {file_path}: {error_type}: {exception}")


def log_ui_error(component: str, action: str, exception: Exception) -> None:
    """Log UI component errors with consistent formatting.

    Args:
        component: Name of the UI component (e.g., "transcript view", "footer")
        action: The action being performed (e.g., "copying selection")
        exception: The exception that was raised
    """
    error_type = type(exception).__name__
    log.error(f"[UI] Failed {action} on {component}: {error_type}: {exception}")


def log_watchdog_error(path: str, operation: str, exception: Exception) -> None:
    """Log file watching errors with consistent formatting."""
    error_type = type(exception).__name__
    log.error(f"[WATCHDOG] Failed {operation} for {path}: {error_type}: {exception}")


def log_generic_error(context: str, operation: str, exception: Exception, prefix: Optional[str] = None) -> None:
    """Log errors that don't fit the other categories.

    Args:
        context: Context where the error occurred (e.g., "source loader")
        operation: The operation being performed
        exception: The exception that was raised
        prefix: Optional log prefix for categorization
    """
    error_type = type(exception).__name__
    prefix_str = f"[{prefix}] " if prefix else ""
    log.error(f"{prefix_str}Error in {context} during {operation}: {error_type}: {exception}")
