"""Draft emission: turning topic units into numbered draft records."""

import re
from collections.abc import Callable
from pathlib import Path
from typing import Final

import pendulum

from ruleforge.lifecycle._models import DraftRecord, LifecycleStage, TopicUnit
from ruleforge.lifecycle._naming import app_name_from_idea, sequence_number
from ruleforge.lifecycle._reporting import NullReporter, Reporter
from ruleforge.lifecycle._storage import StageLayout, write_draft

__all__ = [
    "DEFAULT_DESCRIPTION",
    "DraftEmitter",
    "clean_content",
    "infer_description",
    "infer_title",
    "today",
]

DEFAULT_DESCRIPTION: Final = "Implementation details"
UNTITLED: Final = "Untitled"

_TITLE_MARKUP = re.compile(r"^[#*\s]+")

# Ordered (pattern, title) tables; the first match wins.
_IDEAS_TITLES: Final = tuple(
    (re.compile(re.escape(name), re.IGNORECASE), name)
    for name in (
        "Core Features",
        "Technical Architecture",
        "Frontend Design",
        "Data Management",
        "Deployment",
        "Development",
        "Maintenance",
    )
)

_RULES_TITLES: Final = (
    (re.compile(r"^Let'?s\s+create", re.IGNORECASE), "Overview and Goals"),
    (re.compile(r"^We should implement", re.IGNORECASE), "Core Components"),
    (re.compile(r"should support commands", re.IGNORECASE), "User Commands"),
    (re.compile(r"needs to handle", re.IGNORECASE), "Integration Features"),
    (re.compile(r"use a database", re.IGNORECASE), "Data Management"),
    (re.compile(r"built using", re.IGNORECASE), "Technical Stack"),
)

# Ordered (phrase, description) tables; matched case-sensitively.
_IDEAS_DESCRIPTIONS: Final = (
    ("Core Features", "Core features and functionality"),
    ("Technical Architecture", "System architecture and components"),
    ("Frontend Design", "User interface and experience"),
    ("Data Management", "Data storage and handling"),
    ("Deployment", "Deployment and runtime requirements"),
    ("Development", "Development setup and procedures"),
    ("Maintenance", "Maintenance and monitoring"),
)

_RULES_DESCRIPTIONS: Final = (
    ("should implement", "Core implementation requirements"),
    ("should support", "Supported user interactions"),
    ("needs to handle", "Required integration features"),
    ("use a database", "Database specifications"),
    ("built using", "Technical architecture"),
)


def today() -> str:
    """Current UTC date as YYYY-MM-DD."""
    return pendulum.now("UTC").to_date_string()


def _check_stage(stage: LifecycleStage) -> None:
    if not stage.is_draft:
        msg = f"Drafts can only be emitted at a draft stage, not {stage.value!r}"
        raise ValueError(msg)


def _split_lead(text: str) -> tuple[str, str]:
    lines = [line for line in text.split("\n") if line.strip()]
    if not lines:
        return "", ""
    lead = _TITLE_MARKUP.sub("", lines[0]).strip()
    return lead, "\n".join(lines[1:]).strip()


def infer_title(text: str, stage: LifecycleStage) -> str:
    """Infer a canonical title for a topic.

    The first non-empty line (without heading or emphasis markup) is the
    default. It is replaced when the remaining lines match one of the
    stage's known section phrases.

    Args:
        text: Topic text.
        stage: Draft stage being emitted.

    Returns:
        The inferred title.
    """
    _check_stage(stage)
    title, rest = _split_lead(text)
    table = _IDEAS_TITLES if stage is LifecycleStage.IDEAS_DRAFT else _RULES_TITLES
    for pattern, canonical in table:
        if pattern.search(rest):
            return canonical
    return title or UNTITLED


def infer_description(text: str, stage: LifecycleStage) -> str:
    """Infer a short description for a topic.

    Falls back to DEFAULT_DESCRIPTION when no phrase of the stage's table
    occurs below the first line.
    """
    _check_stage(stage)
    _, rest = _split_lead(text)
    table = (
        _IDEAS_DESCRIPTIONS
        if stage is LifecycleStage.IDEAS_DRAFT
        else _RULES_DESCRIPTIONS
    )
    for phrase, description in table:
        if phrase in rest:
            return description
    return DEFAULT_DESCRIPTION


def clean_content(text: str) -> str:
    """Trim every line and drop blank ones."""
    return "\n".join(line.strip() for line in text.split("\n") if line.strip())


class DraftEmitter:
    """Renders topic units into draft records and writes them to a stage.

    Emission is purely additive: it never reads or removes sibling files, so
    callers clear the target stage beforehand for a clean regenerate.
    """

    __slots__ = ("_clock", "_layout", "_reporter")

    def __init__(
        self,
        layout: StageLayout,
        *,
        clock: Callable[[], str] | None = None,
        reporter: Reporter | None = None,
    ) -> None:
        """Initialize the emitter.

        Args:
            layout: Stage directory layout to write into.
            clock: Returns today's date as YYYY-MM-DD. Defaults to UTC now.
            reporter: Progress observer. Defaults to a no-op reporter.
        """
        self._layout = layout
        self._clock = clock or today
        self._reporter = reporter or NullReporter()

    def build(
        self,
        unit: TopicUnit,
        ordinal: int,
        idea_file: str,
        stage: LifecycleStage = LifecycleStage.RULES_DRAFT,
    ) -> DraftRecord:
        """Build the draft record for a topic without writing it.

        Args:
            unit: Topic to render.
            ordinal: Zero-based position among sibling topics of this pass.
            idea_file: Source idea filename, used for the app name.
            stage: Target draft stage.

        Returns:
            The draft record.
        """
        text = unit.text
        title = infer_title(text, stage)
        description = infer_description(text, stage)
        app_name = app_name_from_idea(idea_file)
        return DraftRecord(
            title=title,
            description=f"{description} for the {app_name} application",
            content=clean_content(text),
            last_updated=self._clock(),
            stage=stage,
            sequence=sequence_number(ordinal),
        )

    def emit(
        self,
        unit: TopicUnit,
        ordinal: int,
        idea_file: str,
        stage: LifecycleStage = LifecycleStage.RULES_DRAFT,
    ) -> tuple[DraftRecord, Path]:
        """Build a draft record and write it to its stage directory.

        Returns:
            The record and the path it was written to.

        Raises:
            LifecycleIOError: If the file cannot be written.
        """
        record = self.build(unit, ordinal, idea_file, stage)
        path = write_draft(self._layout, record)
        self._reporter.created(path, stage)
        return record, path

    def emit_record(self, record: DraftRecord) -> Path:
        """Write an already-built record and report it."""
        path = write_draft(self._layout, record)
        self._reporter.created(path, record.stage)
        return path
