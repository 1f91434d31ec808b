"""Progress reporting for lifecycle operations.

The pipeline never prints or logs on its own. Each entry point accepts a
Reporter and calls it as work progresses; the default reporter discards
everything.
"""

from pathlib import Path
from typing import Protocol, runtime_checkable

from structlog.typing import FilteringBoundLogger

from ruleforge.lifecycle._models import LifecycleStage

__all__ = ["LoggingReporter", "NullReporter", "Reporter"]


@runtime_checkable
class Reporter(Protocol):
    """Observer notified of lifecycle progress."""

    def stage(self, message: str) -> None:
        """A processing step started."""
        ...

    def created(self, path: Path, stage: LifecycleStage) -> None:
        """A file was written at a stage."""
        ...

    def warning(self, message: str, *, path: Path | None = None) -> None:
        """A per-file problem was skipped."""
        ...

    def complete(self, count: int, stage: LifecycleStage) -> None:
        """An entry point finished with a result count."""
        ...


class NullReporter:
    """Reporter that ignores every notification."""

    def stage(self, message: str) -> None:
        pass

    def created(self, path: Path, stage: LifecycleStage) -> None:
        pass

    def warning(self, message: str, *, path: Path | None = None) -> None:
        pass

    def complete(self, count: int, stage: LifecycleStage) -> None:
        pass


class LoggingReporter:
    """Reporter that forwards notifications to a structlog logger."""

    __slots__ = ("_logger",)

    def __init__(self, logger: FilteringBoundLogger) -> None:
        self._logger = logger

    def stage(self, message: str) -> None:
        self._logger.info("lifecycle.stage", message=message)

    def created(self, path: Path, stage: LifecycleStage) -> None:
        self._logger.info("lifecycle.created", path=str(path), stage=stage.value)

    def warning(self, message: str, *, path: Path | None = None) -> None:
        self._logger.warning(
            "lifecycle.skipped",
            message=message,
            path=str(path) if path is not None else None,
        )

    def complete(self, count: int, stage: LifecycleStage) -> None:
        self._logger.info("lifecycle.complete", count=count, stage=stage.value)
