"""The command-line interface for ruleforge."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing

from pathlib import Path
from typing import Annotated, cast

from cyclopts import App, Parameter
from rich.console import Console
from rich.markup import escape

from ruleforge.config import safe_load_config
from ruleforge.utils import LogFormatType, create_cli_logger, find_project_root

from ._commands import register_commands
from ._context import CLIContext

_HELP = "Turn idea documents into drafts and editor rule files."


def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    exit_on_error: bool = True,
) -> App:
    """Build the CLI application.

    Run it through `app.meta(tokens)` so global options are parsed and the
    CLIContext is set before a command executes.
    """
    if console is None:
        console = Console()
    if error_console is None:
        error_console = Console(stderr=True)
    app = App(
        name="ruleforge",
        help=_HELP,
        help_on_error=True,
        console=console,
        error_console=error_console,
        exit_on_error=exit_on_error,
    )

    @app.meta.default
    def _default(  # pyright: ignore[reportUnusedFunction]
        *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
        verbose: Annotated[bool, Parameter(help="Show each processing step")] = False,
        quiet: Annotated[bool, Parameter(help="Suppress non-essential output")] = False,
        config: Annotated[
            Path | None, Parameter(name="--config", help="Path to config file")
        ] = None,
        project_root: Annotated[
            Path | None, Parameter(name="--project-root", help="Path to project root")
        ] = None,
    ) -> None:
        """Launch ruleforge with global options.

        Args:
            tokens: Command tokens to pass to subcommands.
            verbose: Show each processing step and log at debug level.
            quiet: Suppress non-essential output.
            config: Explicit path to config file.
            project_root: Path to project root directory.
        """
        root = (
            project_root.resolve() if project_root is not None else find_project_root()
        )

        overrides: dict[str, object] | None = None
        if verbose:
            overrides = {"logging": {"level": "debug"}}

        loaded_config, config_error = safe_load_config(
            root, config_path=config, overrides=overrides
        )
        if config_error is not None:
            error_console.print(f"[yellow]Warning:[/yellow] {escape(config_error)}")

        cli_logger = create_cli_logger(
            root,
            level=loaded_config.logging.level.value,
            log_format=cast("LogFormatType", loaded_config.logging.format.value),
            log_file=loaded_config.logging.file,
            command=tokens[0] if tokens else "",
        )
        cli_logger.debug("cli_start", tokens=list(tokens), project_root=str(root))

        ctx = CLIContext(
            config=loaded_config,
            project_root=root,
            console=console,
            verbose=verbose,
            quiet=quiet,
            config_error=config_error,
            logger=cli_logger,
        )
        CLIContext.set_current(ctx)

        try:
            app(tokens)
        finally:
            CLIContext.reset()

    register_commands(app)
    return app


def main() -> None:
    """Default entrypoint for the `ruleforge` CLI."""
    app = create_app()
    app.meta()


if __name__ == "__main__":
    main()
