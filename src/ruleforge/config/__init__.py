"""Ruleforge configuration.

Example:
    >>> from pathlib import Path
    >>> from ruleforge.config import Config
    >>> config = Config.load(Path.cwd())
    >>> config.lifecycle.rules_dir
    '.cursor/rules'
"""

from ruleforge.exceptions import ConfigError, ConfigLoadError

from ._load import safe_load_config
from ._loader import ENV_OVERRIDES, deep_merge, parse_env_vars, read_toml_file
from ._models import Config, LifecycleConfig, LogFormat, LoggingConfig, LogLevel

__all__ = [
    "ENV_OVERRIDES",
    "Config",
    "ConfigError",
    "ConfigLoadError",
    "LifecycleConfig",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "deep_merge",
    "parse_env_vars",
    "read_toml_file",
    "safe_load_config",
]
