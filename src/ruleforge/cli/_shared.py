"""Shared CLI utilities for commands.

This module provides common utilities used across CLI command implementations:
- Standardized exit codes
- Exception to exit code mapping
- Markdown table formatting
"""

from enum import IntEnum
from typing import Never

from pytablewriter import MarkdownTableWriter
from rich.console import Console
from rich.markup import escape

from ruleforge.exceptions import (
    ConfigError,
    DraftParseError,
    IdeaNotFoundError,
    LifecycleIOError,
)

__all__ = [
    "ExitCode",
    "exit_code_for_exception",
    "exit_with_error",
    "format_table",
    "get_error_console",
]


class ExitCode(IntEnum):
    """Standard exit codes for ruleforge CLI commands."""

    SUCCESS = 0
    LOAD_ERROR = 1
    VALIDATION_ERROR = 2
    NOT_FOUND = 3
    IO_ERROR = 4
    INTERNAL_ERROR = 5


def exit_code_for_exception(exc: BaseException) -> ExitCode:
    """Map an exception to the exit code a command should return."""
    if isinstance(exc, IdeaNotFoundError):
        return ExitCode.NOT_FOUND
    if isinstance(exc, ConfigError):
        return ExitCode.LOAD_ERROR
    if isinstance(exc, (LifecycleIOError, DraftParseError, OSError)):
        return ExitCode.IO_ERROR
    if isinstance(exc, ValueError):
        return ExitCode.VALIDATION_ERROR
    return ExitCode.INTERNAL_ERROR


def format_table(headers: list[str], rows: list[list[str]]) -> str:
    """Format data as a Markdown table.

    Args:
        headers: Column headers for the table.
        rows: List of rows, where each row is a list of cell values.

    Returns:
        Markdown table string representation.
    """
    writer = MarkdownTableWriter(
        headers=headers,
        value_matrix=rows,
        margin=1,
    )
    return writer.dumps()


def get_error_console() -> Console:
    """Get a Rich console configured for error output to stderr."""
    return Console(stderr=True)


def exit_with_error(
    message: str,
    code: ExitCode = ExitCode.INTERNAL_ERROR,
    *,
    console: Console | None = None,
) -> Never:
    """Print an error message and exit with the specified code.

    Args:
        message: The error message to display.
        code: The exit code to use (defaults to INTERNAL_ERROR).
        console: Optional Rich console for output. If not provided,
            a new stderr console will be created.

    Raises:
        SystemExit: Always raised with the specified exit code.
    """
    if console is None:
        console = get_error_console()

    console.print(f"[red]Error:[/red] {escape(message)}")
    raise SystemExit(code)
