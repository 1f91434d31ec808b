"""Data models for the draft lifecycle.

This module defines the lifecycle stages, the ephemeral classification types
(TopicUnit, StackProfile), and the persisted records (DraftRecord,
RuleArtifact) that flow between stages.
"""

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Final

from ruleforge.lifecycle._naming import DRAFT_EXTENSION, draft_filename

__all__ = [
    "DEFAULT_TRIGGERS",
    "DRAFT_EXTENSION",
    "RULE_EXTENSION",
    "RULE_VERSION",
    "ApproveResult",
    "Classification",
    "DraftRecord",
    "DraftStatus",
    "GenerateResult",
    "LifecycleStage",
    "RuleArtifact",
    "StackProfile",
    "TopicUnit",
]


RULE_EXTENSION: Final = "mdc"
RULE_VERSION: Final = "1.0"
DEFAULT_TRIGGERS: Final = ("file_change", "file_open")


class LifecycleStage(StrEnum):
    """Ordered lifecycle stages a piece of content moves through."""

    IDEA = "idea"
    IDEAS_DRAFT = "ideas-draft"
    RULES_DRAFT = "rules-draft"
    FINAL_RULE = "final-rule"

    def next(self) -> "LifecycleStage":
        """Return the stage that follows this one.

        Raises:
            ValueError: If this is the final stage.
        """
        members = list(LifecycleStage)
        position = members.index(self)
        if position == len(members) - 1:
            msg = f"Stage {self.value!r} has no successor"
            raise ValueError(msg)
        return members[position + 1]

    @property
    def is_draft(self) -> bool:
        """Whether records at this stage are YAML drafts."""
        return self in (LifecycleStage.IDEAS_DRAFT, LifecycleStage.RULES_DRAFT)


class DraftStatus(StrEnum):
    """Status values for draft records."""

    DRAFT = "draft"


@dataclass(frozen=True, slots=True)
class TopicUnit:
    """One classified chunk of an idea document.

    Attributes:
        heading: Heading line of the section the unit came from (may be empty).
        body: Content below the heading.
    """

    heading: str
    body: str

    @property
    def text(self) -> str:
        """Heading and body joined the way the emitter reads them."""
        if not self.heading:
            return self.body
        if not self.body:
            return self.heading
        return f"{self.heading}\n\n{self.body}"


@dataclass(frozen=True, slots=True)
class Classification:
    """Result of classifying an idea document."""

    topics: tuple[TopicUnit, ...]
    needs_expansion: bool


@dataclass(frozen=True, slots=True)
class StackProfile:
    """Technology flags detected in an idea document."""

    react: bool = False
    vue: bool = False
    angular: bool = False
    svelte: bool = False
    node: bool = False
    python: bool = False
    ruby: bool = False
    go: bool = False
    sql: bool = False
    nosql: bool = False
    auth: bool = False
    api: bool = False
    mobile: bool = False
    desktop: bool = False

    @property
    def primary_frontend(self) -> str:
        """Frontend framework used for scaffold snippets (default react)."""
        primary = "react"
        for name in ("vue", "angular", "svelte"):
            if getattr(self, name):
                primary = name
        return primary

    @property
    def primary_backend(self) -> str:
        """Backend framework used for scaffold snippets (default node)."""
        primary = "node"
        for name in ("python", "ruby", "go"):
            if getattr(self, name):
                primary = name
        return primary


@dataclass(frozen=True, slots=True)
class DraftRecord:
    """A numbered draft at the ideas-draft or rules-draft stage.

    The stage is not serialized; on disk it is implied by the directory
    holding the file.

    Attributes:
        title: Canonical human-readable title.
        description: One-line description.
        status: Draft status.
        version: Draft version, starting at 1.
        last_updated: ISO date (YYYY-MM-DD) of the last write.
        content: Newline-normalized body.
        stage: Lifecycle stage the record belongs to.
        sequence: 100-stepped sequence number.
    """

    title: str
    description: str
    content: str
    last_updated: str
    stage: LifecycleStage = LifecycleStage.IDEAS_DRAFT
    sequence: int = 100
    status: DraftStatus = DraftStatus.DRAFT
    version: int = 1

    @property
    def filename(self) -> str:
        """File name of the record inside its stage directory."""
        return draft_filename(self.sequence, self.title)

    def to_dict(self) -> dict[str, str | int]:
        """Serializable mapping in the on-disk key order."""
        return {
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
            "version": self.version,
            "last_updated": self.last_updated,
            "content": self.content,
        }


@dataclass(frozen=True, slots=True)
class RuleArtifact:
    """A final rule consumed by an AI editor integration.

    Attributes:
        name: Rule name, the source base filename with its numeric prefix.
        description: Rule description.
        globs: File applicability patterns (never empty).
        content: Rule body.
        version: Rule format version.
        triggers: Trigger tags.
    """

    name: str
    description: str
    globs: tuple[str, ...]
    content: str
    version: str = RULE_VERSION
    triggers: tuple[str, ...] = DEFAULT_TRIGGERS

    def __post_init__(self) -> None:
        if not self.globs:
            msg = f"Rule {self.name!r} must have at least one glob"
            raise ValueError(msg)

    @property
    def filename(self) -> str:
        """File name of the rule inside the final-rule directory."""
        return f"{self.name}.{RULE_EXTENSION}"


@dataclass(frozen=True, slots=True)
class GenerateResult:
    """Outcome of promoting one idea into drafts.

    Attributes:
        drafts_generated: Number of draft files written.
        stage: Stage the drafts were written to.
        needs_expansion: Whether the classifier synthesized a scaffold.
        files: Paths written, in emission order.
    """

    drafts_generated: int
    stage: LifecycleStage
    needs_expansion: bool = False
    files: tuple[Path, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class ApproveResult:
    """Outcome of promoting drafts one stage forward.

    Attributes:
        rules_generated: Count reported to the caller. For ideas-draft
            sources this is the number of files present in rules-draft after
            the pass; for rules-draft sources it is the number processed.
        source: Stage the inputs were read from.
        target: Stage the outputs were written to.
        files: Paths written by this call, in order.
    """

    rules_generated: int
    source: LifecycleStage
    target: LifecycleStage
    files: tuple[Path, ...] = field(default_factory=tuple)
