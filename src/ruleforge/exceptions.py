"""Ruleforge exceptions."""

from pathlib import Path


class RuleforgeError(Exception):
    """Base exception for Ruleforge errors."""


class ConfigError(RuleforgeError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


# =============================================================================
# Lifecycle Exceptions
# =============================================================================


class LifecycleError(RuleforgeError):
    """Base exception for draft lifecycle errors."""


class IdeaNotFoundError(LifecycleError, KeyError):
    """Raised when a named idea file cannot be read.

    Attributes:
        idea_file: Name of the idea file under the ideas directory.
        path: Full path that was looked up.
    """

    def __init__(
        self,
        message: str,
        *,
        idea_file: str,
        path: Path | None = None,
    ) -> None:
        """Initialize with error message and idea context.

        Args:
            message: Human-readable error message.
            idea_file: Name of the idea file that was not found.
            path: Full path that was looked up.
        """
        super().__init__(message)
        self.idea_file: str = idea_file
        self.path: Path | None = path

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0]) if self.args else ""


class DraftParseError(LifecycleError, ValueError):
    """Raised when a draft file is not a valid draft mapping.

    Attributes:
        path: Path to the draft file.
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Path,
        cause: Exception | None = None,
    ) -> None:
        """Initialize with error message and parse context.

        Args:
            message: Human-readable error message.
            path: Path to the draft file.
            cause: The underlying exception, if any.
        """
        super().__init__(message)
        self.path: Path = path
        self.cause: Exception | None = cause


class LifecycleIOError(LifecycleError):
    """Raised when a lifecycle file cannot be read or written.

    Attributes:
        path: Path to the file that caused the error.
        operation: The operation that failed ("read", "write", "delete").
        cause: The underlying exception that caused this error.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Path,
        operation: str,
        cause: Exception | None = None,
    ) -> None:
        """Initialize with error message and I/O context.

        Args:
            message: Human-readable error message.
            path: Path to the file that caused the error.
            operation: The operation that failed ("read", "write", "delete").
            cause: The underlying exception that caused this error.
        """
        super().__init__(message)
        self.path: Path = path
        self.operation: str = operation
        self.cause: Exception | None = cause
