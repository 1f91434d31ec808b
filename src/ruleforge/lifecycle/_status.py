"""Per-idea lifecycle status.

Drafts and rules do not record which idea produced them, so an idea's state
is inferred from files in each stage whose names contain the idea's base
name.
"""

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from ruleforge.lifecycle._models import DRAFT_EXTENSION, RULE_EXTENSION, LifecycleStage
from ruleforge.lifecycle._storage import StageLayout

__all__ = ["IdeaState", "IdeaStatus", "idea_status", "list_ideas", "stage_counts"]


class IdeaState(StrEnum):
    """How far an idea has progressed."""

    NEW = "new"
    HAS_IMPLEMENTATION_DRAFTS = "has implementation drafts"
    HAS_RULE_DRAFTS = "has rule drafts"
    READY = "ready"

    @property
    def next_step(self) -> str:
        """Suggested next action for an idea in this state."""
        return _NEXT_STEPS[self]


_NEXT_STEPS: dict[IdeaState, str] = {
    IdeaState.NEW: "Generate implementation drafts",
    IdeaState.HAS_IMPLEMENTATION_DRAFTS: "Convert to rule drafts",
    IdeaState.HAS_RULE_DRAFTS: "Create final rules",
    IdeaState.READY: "Done",
}


@dataclass(frozen=True, slots=True)
class IdeaStatus:
    """Lifecycle status of one idea file.

    Attributes:
        idea_file: Name of the file under the ideas directory.
        state: Inferred state.
        idea_drafts: Matching files in ideas-draft.
        rule_drafts: Matching files in rules-draft.
        rules: Matching final rules.
    """

    idea_file: str
    state: IdeaState
    idea_drafts: int = 0
    rule_drafts: int = 0
    rules: int = 0


def list_ideas(layout: StageLayout) -> list[str]:
    """Names of all idea files, sorted. Empty if the directory is missing."""
    directory = layout.directory(LifecycleStage.IDEA)
    if not directory.is_dir():
        return []
    return sorted(path.name for path in directory.iterdir() if path.is_file())


def _count(directory: Path, stem: str, extension: str) -> int:
    if not directory.is_dir():
        return 0
    matches = directory.glob(f"*.{extension}")
    return sum(1 for path in matches if stem in path.name and path.is_file())


def idea_status(layout: StageLayout, idea_file: str) -> IdeaStatus:
    """Infer the lifecycle state of one idea.

    Rule drafts take precedence over implementation drafts; an idea counts
    as ready only when final rules match and no drafts do.
    """
    stem = Path(idea_file).stem
    idea_drafts = _count(
        layout.directory(LifecycleStage.IDEAS_DRAFT), stem, DRAFT_EXTENSION
    )
    rule_drafts = _count(
        layout.directory(LifecycleStage.RULES_DRAFT), stem, DRAFT_EXTENSION
    )
    rules = _count(layout.directory(LifecycleStage.FINAL_RULE), stem, RULE_EXTENSION)

    if rule_drafts > 0:
        state = IdeaState.HAS_RULE_DRAFTS
    elif idea_drafts > 0:
        state = IdeaState.HAS_IMPLEMENTATION_DRAFTS
    elif rules > 0:
        state = IdeaState.READY
    else:
        state = IdeaState.NEW

    return IdeaStatus(
        idea_file=idea_file,
        state=state,
        idea_drafts=idea_drafts,
        rule_drafts=rule_drafts,
        rules=rules,
    )


def stage_counts(layout: StageLayout) -> dict[LifecycleStage, int]:
    """Number of files currently held by each stage directory."""
    counts: dict[LifecycleStage, int] = {}
    for stage in LifecycleStage:
        directory = layout.directory(stage)
        counts[stage] = (
            sum(1 for path in directory.iterdir() if path.is_file())
            if directory.is_dir()
            else 0
        )
    return counts
