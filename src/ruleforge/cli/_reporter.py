from pathlib import Path

from rich.console import Console
from rich.markup import escape
from structlog.typing import FilteringBoundLogger

from ruleforge.lifecycle import LifecycleStage, LoggingReporter


class ConsoleReporter:
    """Reporter that prints progress with rich and mirrors it to the CLI log.

    Attributes:
        _console: Output console.
        _base_dir: Paths are shown relative to this directory when possible.
        _log: Logging reporter, or None when no logger is configured.
        _verbose: Print processing steps.
        _quiet: Suppress per-file output; warnings are still shown.
    """

    __slots__ = ("_base_dir", "_console", "_log", "_quiet", "_verbose")

    def __init__(
        self,
        console: Console,
        *,
        base_dir: Path,
        logger: FilteringBoundLogger | None = None,
        verbose: bool = False,
        quiet: bool = False,
    ) -> None:
        self._console = console
        self._base_dir = base_dir
        self._log = LoggingReporter(logger) if logger is not None else None
        self._verbose = verbose
        self._quiet = quiet

    def _display(self, path: Path) -> str:
        if path.is_relative_to(self._base_dir):
            return path.relative_to(self._base_dir).as_posix()
        return str(path)

    def stage(self, message: str) -> None:
        if self._log is not None:
            self._log.stage(message)
        if self._verbose and not self._quiet:
            self._console.print(f"[dim]{message}...[/dim]")

    def created(self, path: Path, stage: LifecycleStage) -> None:
        if self._log is not None:
            self._log.created(path, stage)
        if not self._quiet:
            display = escape(self._display(path))
            self._console.print(f"[green]Created[/green] {display}")

    def warning(self, message: str, *, path: Path | None = None) -> None:
        if self._log is not None:
            self._log.warning(message, path=path)
        self._console.print(f"[yellow]Warning:[/yellow] {escape(message)}")

    def complete(self, count: int, stage: LifecycleStage) -> None:
        if self._log is not None:
            self._log.complete(count, stage)
