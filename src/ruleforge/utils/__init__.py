"""Shared utilities: project discovery and logging."""

from ruleforge.utils._logging import (
    DEBUG_ENV_VAR,
    LOG_LEVEL_ENV_VAR,
    LogFormatType,
    create_cli_logger,
)
from ruleforge.utils._paths import (
    PROJECT_CONFIG_FILENAME,
    find_project_root,
    get_cli_log_file,
    get_log_dir,
    get_ruleforge_dir,
    get_worktree_root,
)

__all__ = [
    "DEBUG_ENV_VAR",
    "LOG_LEVEL_ENV_VAR",
    "PROJECT_CONFIG_FILENAME",
    "LogFormatType",
    "create_cli_logger",
    "find_project_root",
    "get_cli_log_file",
    "get_log_dir",
    "get_ruleforge_dir",
    "get_worktree_root",
]
