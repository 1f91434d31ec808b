"""Lifecycle promotion: idea → ideas-draft → rules-draft → final rule.

The promoter is a single-actor, read-then-write state machine over one
project's stage directories. It never deletes source-stage files and does not
guard against concurrent invocations on the same tree; callers clear a target
stage (see `clear_stage`) before regenerating it.
"""

from collections.abc import Callable
from pathlib import Path
from typing import Final

from ruleforge.exceptions import DraftParseError, IdeaNotFoundError, LifecycleIOError
from ruleforge.lifecycle._classifier import classify, is_simple_idea
from ruleforge.lifecycle._compiler import RuleCompiler
from ruleforge.lifecycle._emitter import DraftEmitter, today
from ruleforge.lifecycle._models import (
    DEFAULT_TRIGGERS,
    RULE_VERSION,
    ApproveResult,
    DraftRecord,
    GenerateResult,
    LifecycleStage,
    TopicUnit,
)
from ruleforge.lifecycle._naming import sequence_number
from ruleforge.lifecycle._reporting import NullReporter, Reporter
from ruleforge.lifecycle._storage import StageLayout, list_drafts, load_draft

__all__ = ["CORE_FEATURES_DESCRIPTION", "CORE_FEATURES_TITLE", "LifecyclePromoter"]

CORE_FEATURES_TITLE: Final = "Core Features"
CORE_FEATURES_DESCRIPTION: Final = "Core features and functionality"


class LifecyclePromoter:
    """Promotes content one lifecycle stage forward.

    Attributes:
        _layout: Stage directory layout.
        _reporter: Progress observer.
        _clock: Returns today's date as YYYY-MM-DD.
        _emitter: Draft emitter writing into the layout.
        _compiler: Rule compiler writing into the layout.
    """

    __slots__: Final = ("_clock", "_compiler", "_emitter", "_layout", "_reporter")

    def __init__(
        self,
        base_dir: Path,
        *,
        layout: StageLayout | None = None,
        reporter: Reporter | None = None,
        clock: Callable[[], str] | None = None,
        rule_version: str = RULE_VERSION,
        triggers: tuple[str, ...] = DEFAULT_TRIGGERS,
    ) -> None:
        """Initialize the promoter.

        Args:
            base_dir: Project root holding the stage directories.
            layout: Stage layout. Defaults to the standard layout at base_dir.
            reporter: Progress observer. Defaults to a no-op reporter.
            clock: Date source for `last_updated`. Defaults to UTC today.
            rule_version: Version string written into final rules.
            triggers: Trigger tags written into final rules.
        """
        self._layout = layout if layout is not None else StageLayout(base_dir)
        self._reporter = reporter or NullReporter()
        self._clock = clock or today
        self._emitter = DraftEmitter(
            self._layout, clock=self._clock, reporter=self._reporter
        )
        self._compiler = RuleCompiler(
            self._layout,
            version=rule_version,
            triggers=triggers,
            reporter=self._reporter,
        )

    @property
    def layout(self) -> StageLayout:
        """Stage directory layout."""
        return self._layout

    # -------------------------------------------------------------------------
    # idea -> draft
    # -------------------------------------------------------------------------

    def _read_idea(self, idea_file: str) -> str:
        path = self._layout.directory(LifecycleStage.IDEA) / idea_file
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            msg = f"Could not read idea file {idea_file!r}: {e}"
            raise IdeaNotFoundError(msg, idea_file=idea_file, path=path) from e

    def generate_drafts(
        self,
        idea_file: str,
        *,
        stage: LifecycleStage = LifecycleStage.IDEAS_DRAFT,
        force: bool = False,
    ) -> GenerateResult:
        """Promote one idea document into numbered drafts.

        Short unstructured ideas become a single draft; everything else is
        classified into topic units first.

        Args:
            idea_file: Name of a file under the ideas directory.
            stage: Draft stage to write (ideas-draft or rules-draft).
            force: Accepted for the CLI request shape; clearing the target
                stage is the caller's job.

        Returns:
            Count and paths of the drafts written.

        Raises:
            IdeaNotFoundError: If the idea file cannot be read.
            ValueError: If `stage` is not a draft stage.
            LifecycleIOError: If a draft cannot be written.
        """
        if not stage.is_draft:
            msg = f"Drafts can only be generated at a draft stage, not {stage.value!r}"
            raise ValueError(msg)

        self._layout.ensure()
        _ = force  # Unused here; the caller clears target stages
        self._reporter.stage(f"Reading idea file {idea_file}")
        content = self._read_idea(idea_file)

        if not content.strip():
            self._reporter.warning(f"Idea file {idea_file} is empty")
            self._reporter.complete(0, stage)
            return GenerateResult(drafts_generated=0, stage=stage)

        self._reporter.stage("Analyzing content")
        if is_simple_idea(content):
            topics: tuple[TopicUnit, ...] = (TopicUnit(heading="", body=content),)
            expanded = False
        else:
            classification = classify(content)
            topics = classification.topics
            expanded = classification.needs_expansion

        self._reporter.stage("Generating drafts")
        files: list[Path] = []
        for ordinal, unit in enumerate(topics):
            _, path = self._emitter.emit(unit, ordinal, idea_file, stage)
            files.append(path)

        self._reporter.complete(len(files), stage)
        return GenerateResult(
            drafts_generated=len(files),
            stage=stage,
            needs_expansion=expanded,
            files=tuple(files),
        )

    # -------------------------------------------------------------------------
    # draft -> next stage
    # -------------------------------------------------------------------------

    def _resolve_inputs(
        self, source: LifecycleStage, draft_file: str | None
    ) -> list[Path]:
        directory = self._layout.directory(source)
        if draft_file is None:
            return list_drafts(self._layout, source)

        path = directory / draft_file
        if not path.is_file():
            self._reporter.warning(f"File not found: {path}", path=path)
            return []
        return [path]

    def _promote_idea_drafts(self, inputs: list[Path]) -> list[Path]:
        files: list[Path] = []
        for position, path in enumerate(inputs):
            try:
                draft = load_draft(path, LifecycleStage.IDEAS_DRAFT)
            except (DraftParseError, LifecycleIOError) as e:
                self._reporter.warning(str(e), path=path)
                continue

            # Keyed on the source position so sibling drafts never collide
            record = DraftRecord(
                title=CORE_FEATURES_TITLE,
                description=CORE_FEATURES_DESCRIPTION,
                content=draft.content,
                last_updated=self._clock(),
                stage=LifecycleStage.RULES_DRAFT,
                sequence=sequence_number(position),
            )
            files.append(self._emitter.emit_record(record))
        return files

    def approve_drafts(
        self,
        *,
        draft_file: str | None = None,
        source: LifecycleStage = LifecycleStage.RULES_DRAFT,
        force: bool = False,
    ) -> ApproveResult:
        """Promote drafts from `source` to the following stage.

        A missing named draft or an empty source stage is a zero result, not
        an error.

        Args:
            draft_file: Single draft to promote. All drafts when None.
            source: ideas-draft (promote to rules-draft) or rules-draft
                (compile to final rules).
            force: Accepted for the CLI request shape; clearing the target
                stage is the caller's job.

        Returns:
            For ideas-draft sources, the number of drafts present in
            rules-draft after the pass; for rules-draft sources, the number of
            inputs processed.

        Raises:
            ValueError: If `source` is not a draft stage.
            LifecycleIOError: If an output file cannot be written.
        """
        if not source.is_draft:
            msg = f"Only draft stages can be approved, not {source.value!r}"
            raise ValueError(msg)

        target = source.next()
        self._layout.ensure()
        _ = force  # Unused here; the caller clears target stages
        self._reporter.stage(f"Processing {self._layout.relative(source)}")

        inputs = self._resolve_inputs(source, draft_file)
        if not inputs:
            self._reporter.warning(
                f"No draft files found in {self._layout.relative(source)}/"
            )
            self._reporter.complete(0, target)
            return ApproveResult(rules_generated=0, source=source, target=target)

        if source is LifecycleStage.IDEAS_DRAFT:
            self._reporter.stage("Converting ideas to rules drafts")
            files = self._promote_idea_drafts(inputs)
            count = len(list_drafts(self._layout, LifecycleStage.RULES_DRAFT))
        else:
            self._reporter.stage("Generating rules")
            written = self._compiler.compile_files(inputs)
            files = [path for _, path in written]
            count = len(inputs)

        self._reporter.complete(count, target)
        return ApproveResult(
            rules_generated=count, source=source, target=target, files=tuple(files)
        )

    def compile_sources(self, sources: list[Path]) -> list[Path]:
        """Compile arbitrary resolved source files straight to final rules."""
        self._layout.ensure()
        written = self._compiler.compile_files(sources)
        self._reporter.complete(len(written), LifecycleStage.FINAL_RULE)
        return [path for _, path in written]
