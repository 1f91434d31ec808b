# pyright: reportAny=false, reportExplicitAny=false
"""Configuration models.

Pydantic models for the `.ruleforge.toml` project file. Every section is
optional; missing keys take the defaults below.
"""

from enum import StrEnum
from pathlib import Path
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ruleforge.config._loader import deep_merge, parse_env_vars, read_toml_file
from ruleforge.exceptions import ConfigLoadError
from ruleforge.lifecycle import DEFAULT_TRIGGERS, RULE_VERSION, StageLayout
from ruleforge.utils import PROJECT_CONFIG_FILENAME


class LogLevel(StrEnum):
    """Log level threshold values.

    Values are ordered from most verbose (debug) to least verbose (error).
    """

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    """Log output format values."""

    JSON = "json"
    TEXT = "text"


class LoggingConfig(BaseModel):
    """Logging configuration section.

    Attributes:
        level: Log level threshold.
        format: Log output format.
        file: Log file path relative to the project root. Empty selects
            `.ruleforge/logs/cli.log`.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.JSON
    file: str = ""


class LifecycleConfig(BaseModel):
    """Lifecycle configuration section.

    Attributes:
        docs_dir: Directory holding `ideas/` and the draft stage directories.
        rules_dir: Directory receiving compiled `.mdc` rules.
        rule_version: Version string written into every rule header.
        triggers: Trigger tags written into every rule header.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    docs_dir: str = "docs"
    rules_dir: str = ".cursor/rules"
    rule_version: str = RULE_VERSION
    triggers: tuple[str, ...] = DEFAULT_TRIGGERS

    def layout(self, base_dir: Path) -> StageLayout:
        """Build the stage layout for a project root."""
        return StageLayout(base_dir, docs_dir=self.docs_dir, rules_dir=self.rules_dir)


class Config(BaseModel):
    """Ruleforge configuration.

    Attributes:
        logging: Logging settings.
        lifecycle: Stage layout and rule header settings.
        sources: Default source patterns for `ruleforge compile`.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    lifecycle: LifecycleConfig = Field(default_factory=LifecycleConfig)
    sources: tuple[str, ...] = ()

    @classmethod
    def from_dict(
        cls, data: dict[str, Any], *, path: Path | None = None
    ) -> "Config":
        """Build a configuration from a raw dictionary.

        Args:
            data: Raw configuration values.
            path: Source file, for error context.

        Raises:
            ConfigLoadError: If the values fail validation.
        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            location = f" in {path}" if path is not None else ""
            msg = f"Invalid configuration{location}: {e}"
            raise ConfigLoadError(msg, path=path) from e

    @classmethod
    def load(
        cls,
        project_root: Path,
        *,
        config_path: Path | None = None,
        include_env: bool = True,
        overrides: dict[str, Any] | None = None,
    ) -> "Config":
        """Load configuration for a project.

        Sources, lowest precedence first: built-in defaults, the config file,
        environment variables, `overrides`. The config file is `config_path`
        when given, otherwise the project's `.ruleforge.toml` (if present).

        Args:
            project_root: Project root directory.
            config_path: Explicit config file used instead of the project's.
            include_env: Whether to apply RULEFORGE_* environment variables.
            overrides: Highest-precedence values, e.g. from CLI flags.

        Raises:
            FileNotFoundError: If config_path is given but does not exist.
            ConfigLoadError: If the config file cannot be parsed or the
                merged values fail validation.
        """
        path = config_path
        if path is None:
            project_file = project_root / PROJECT_CONFIG_FILENAME
            path = project_file if project_file.is_file() else None
        data: dict[str, Any] = read_toml_file(path) if path is not None else {}
        if include_env:
            data = deep_merge(data, parse_env_vars())
        if overrides:
            data = deep_merge(data, overrides)
        return cls.from_dict(data, path=path)
