# ruff: noqa: TC003  # Path needed at runtime for dataclass field
"""CLI context for global state management.

The CLIContext is set once by the root command and made available to every
subcommand via contextvars.
"""

import contextvars
from dataclasses import dataclass, field
from pathlib import Path

from rich.console import Console
from structlog.typing import FilteringBoundLogger

from ruleforge.config import Config
from ruleforge.lifecycle import LifecyclePromoter, StageLayout

from ._reporter import ConsoleReporter

_current_cli_context: contextvars.ContextVar["CLIContext | None"] = (
    contextvars.ContextVar("cli_context", default=None)
)


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Global CLI context with configuration and options.

    Attributes:
        config: Loaded configuration object.
        project_root: Resolved project root path.
        console: Console receiving command output.
        verbose: Show each processing step.
        quiet: Suppress non-essential output.
        config_error: Error message if config loading failed.
        logger: Structured logger for CLI commands (writes to file only).
    """

    config: Config = field(repr=False)
    project_root: Path = field(default_factory=Path.cwd)
    console: Console = field(default_factory=Console, repr=False)
    verbose: bool = False
    quiet: bool = False
    config_error: str | None = None
    logger: FilteringBoundLogger | None = field(default=None, repr=False)

    @classmethod
    def get_current(cls) -> "CLIContext":
        """Get current active CLIContext, or create a default if not set."""
        ctx = _current_cli_context.get()
        if ctx is not None:
            return ctx
        return cls(config=Config())

    @classmethod
    def set_current(cls, ctx: "CLIContext") -> None:
        """Set the current active CLIContext."""
        _current_cli_context.set(ctx)

    @classmethod
    def reset(cls) -> None:
        """Reset to default context."""
        _current_cli_context.set(None)

    @property
    def layout(self) -> StageLayout:
        """Stage layout for the project root and configured directories."""
        return self.config.lifecycle.layout(self.project_root)

    def reporter(self) -> ConsoleReporter:
        """Create a reporter printing to this context's console."""
        return ConsoleReporter(
            self.console,
            base_dir=self.project_root,
            logger=self.logger,
            verbose=self.verbose,
            quiet=self.quiet,
        )

    def promoter(self) -> LifecyclePromoter:
        """Create a promoter configured from this context."""
        lifecycle = self.config.lifecycle
        return LifecyclePromoter(
            self.project_root,
            layout=self.layout,
            reporter=self.reporter(),
            rule_version=lifecycle.rule_version,
            triggers=lifecycle.triggers,
        )
