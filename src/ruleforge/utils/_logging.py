"""Logging utilities for ruleforge.

This module provides a standalone structlog logger factory that writes
JSON-formatted or text-formatted logs to a project's log file. Loggers are
self-contained and do not modify global structlog configuration.
"""

import logging
from os import getenv
from pathlib import Path
from typing import Literal, cast

import structlog
from structlog.typing import FilteringBoundLogger

from ._paths import get_cli_log_file

LogFormatType = Literal["json", "text"]

DEBUG_ENV_VAR = "RULEFORGE_DEBUG"
LOG_LEVEL_ENV_VAR = "RULEFORGE_LOG_LEVEL"


def _get_log_level() -> int:
    """Get the log level from environment variables.

    Checks RULEFORGE_DEBUG first (sets DEBUG if present), then
    RULEFORGE_LOG_LEVEL. Defaults to INFO if neither is set.

    Returns:
        The logging level as an integer.
    """
    if getenv(DEBUG_ENV_VAR, None):
        return logging.DEBUG

    log_levels = logging.getLevelNamesMapping()
    return log_levels.get(getenv(LOG_LEVEL_ENV_VAR, "info").upper(), logging.INFO)


def _log_level_from_string(level: str, *, respect_env: bool = False) -> int:
    """Convert a log level string to a logging level integer.

    Args:
        level: Log level string (debug, info, warning, error).
        respect_env: If True, RULEFORGE_DEBUG overrides to DEBUG level.

    Returns:
        The logging level as an integer.
    """
    if respect_env and getenv(DEBUG_ENV_VAR, None):
        return logging.DEBUG

    log_levels = logging.getLevelNamesMapping()
    return log_levels.get(level.upper(), logging.INFO)


def _create_logger(
    log_file_path: str,
    *,
    log_level: int | None = None,
    log_format: LogFormatType = "json",
) -> FilteringBoundLogger:
    """Create a standalone structlog logger writing to the specified file.

    Args:
        log_file_path: Path to the log file (will be opened in append mode).
        log_level: Override log level (uses env vars if not specified).
        log_format: Output format, either "json" or "text".

    Returns:
        A configured FilteringBoundLogger instance.
    """
    log_path = Path(log_file_path)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    effective_level = log_level if log_level is not None else _get_log_level()
    logger_factory = structlog.WriteLoggerFactory(
        file=log_path.open("a", encoding="utf-8")
    )

    processors: list[structlog.typing.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if log_format == "json":
        processors.append(structlog.processors.dict_tracebacks)
        processors.append(structlog.processors.JSONRenderer())
    else:
        # Text format: "timestamp [level] event key=value ..."
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    wrapper_class = structlog.make_filtering_bound_logger(effective_level)

    return cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            logger_factory(),
            processors=processors,
            wrapper_class=wrapper_class,
            context_class=dict,
        ),
    )


def create_cli_logger(
    base_dir: Path,
    *,
    level: str | None = None,
    log_format: LogFormatType = "json",
    log_file: str = "",
    command: str = "",
) -> FilteringBoundLogger:
    """Create a logger for CLI commands.

    Writes structured logs to either the given file or the project's default
    CLI log file at .ruleforge/logs/cli.log. The command name is bound to
    every entry.

    The log level is determined by (in order of precedence):
    1. RULEFORGE_DEBUG environment variable (if set, enables DEBUG level)
    2. The `level` parameter (if provided)
    3. RULEFORGE_LOG_LEVEL environment variable
    4. Default: INFO

    Args:
        base_dir: Project root; relative `log_file` paths resolve against it.
        level: Log level threshold (debug, info, warning, error).
        log_format: Output format, either "json" or "text".
        log_file: Path to log file (uses the default if empty).
        command: Name of the CLI command for context.

    Returns:
        A FilteringBoundLogger instance configured for CLI logging.
    """
    effective_file = base_dir / log_file if log_file else get_cli_log_file(base_dir)

    effective_level: int | None = None
    if level is not None:
        effective_level = _log_level_from_string(level, respect_env=True)

    logger = _create_logger(
        str(effective_file),
        log_level=effective_level,
        log_format=log_format,
    )

    if command:
        return logger.bind(command=command)
    return logger
