# pyright: reportUnusedCallResult=false
# ruff: noqa: A002, D415, FBT002
"""Lifecycle commands: draft, approve, compile, status, clean."""

from enum import StrEnum
from typing import Annotated, Never

from cyclopts import App, Parameter
from rich.markup import escape

from ruleforge.exceptions import RuleforgeError
from ruleforge.lifecycle import (
    LifecycleStage,
    clear_stage,
    idea_status,
    list_ideas,
    resolve_sources,
    stage_counts,
)

from ._context import CLIContext
from ._shared import ExitCode, exit_code_for_exception, exit_with_error, format_table

__all__ = ["DraftType", "register_commands"]


class DraftType(StrEnum):
    """Which draft stage a command works on."""

    IDEAS = "ideas"
    RULES = "rules"

    @property
    def stage(self) -> LifecycleStage:
        """The draft stage this type names."""
        if self is DraftType.IDEAS:
            return LifecycleStage.IDEAS_DRAFT
        return LifecycleStage.RULES_DRAFT


_CLEANABLE_STAGES = (
    LifecycleStage.IDEAS_DRAFT,
    LifecycleStage.RULES_DRAFT,
    LifecycleStage.FINAL_RULE,
)


def _clear(ctx: CLIContext, stage: LifecycleStage) -> int:
    removed = clear_stage(ctx.layout, stage)
    if ctx.logger is not None:
        ctx.logger.info("stage_cleared", stage=stage.value, removed=removed)
    if removed and ctx.verbose:
        ctx.console.print(
            f"[dim]Removed {removed} file(s) from {ctx.layout.relative(stage)}/[/dim]"
        )
    return removed


def _fail(ctx: CLIContext, exc: Exception) -> Never:
    if ctx.logger is not None:
        ctx.logger.error(
            "command_failed", error=str(exc), error_type=type(exc).__name__
        )
    exit_with_error(str(exc), exit_code_for_exception(exc), console=ctx.console)


# =============================================================================
# draft
# =============================================================================


def _draft(
    idea: str,
    /,
    *,
    type: Annotated[
        DraftType,
        Parameter(
            name=["--type", "-t"], help="Draft stage to generate (ideas, rules)"
        ),
    ] = DraftType.IDEAS,
    force: Annotated[
        bool, Parameter(name=["--force", "-f"], help="Clear the target stage first")
    ] = False,
) -> None:
    """Generate numbered drafts from an idea document

    Reads IDEA from the ideas directory and writes one draft per topic.
    """
    ctx = CLIContext.get_current()
    stage = type.stage

    try:
        if force:
            _clear(ctx, stage)
        result = ctx.promoter().generate_drafts(idea, stage=stage, force=force)
    except (RuleforgeError, ValueError, OSError) as e:
        _fail(ctx, e)

    target = ctx.layout.relative(stage)
    if result.drafts_generated == 0:
        ctx.console.print(f"[yellow]No drafts generated in {target}/[/yellow]")
        return

    ctx.console.print(
        f"[green]Created {result.drafts_generated} draft(s)[/green] in {target}/"
    )
    if result.needs_expansion:
        ctx.console.print(
            "[dim]The idea was short, so it was expanded into a project "
            "scaffold. Review and edit the drafts before approving.[/dim]"
        )


# =============================================================================
# approve
# =============================================================================


def _approve(
    *,
    draft: Annotated[
        str | None,
        Parameter(name=["--draft", "-d"], help="Promote a single draft file"),
    ] = None,
    type: Annotated[
        DraftType,
        Parameter(
            name=["--type", "-t"], help="Draft stage to promote (ideas, rules)"
        ),
    ] = DraftType.RULES,
    force: Annotated[
        bool, Parameter(name=["--force", "-f"], help="Overwrite existing output")
    ] = False,
) -> None:
    """Promote drafts to the next lifecycle stage

    Ideas drafts become rules drafts; rules drafts become final rules. The
    target stage is cleared before promotion.
    """
    ctx = CLIContext.get_current()
    source = type.stage
    target = source.next()

    try:
        _clear(ctx, target)
        result = ctx.promoter().approve_drafts(
            draft_file=draft, source=source, force=force
        )
    except (RuleforgeError, ValueError, OSError) as e:
        _fail(ctx, e)

    target_dir = ctx.layout.relative(target)
    if result.rules_generated == 0:
        ctx.console.print(f"[yellow]Nothing promoted to {target_dir}/[/yellow]")
        return

    noun = "rules draft(s)" if target is LifecycleStage.RULES_DRAFT else "rule(s)"
    ctx.console.print(
        f"[green]Generated {result.rules_generated} {noun}[/green] in {target_dir}/"
    )


# =============================================================================
# compile
# =============================================================================


def _compile(*sources: str) -> None:
    """Compile files straight to rules

    Each SOURCE is a path or glob pattern relative to the project root.
    Without arguments the configured `sources` are used.
    """
    ctx = CLIContext.get_current()
    patterns = list(sources) or list(ctx.config.sources)
    if not patterns:
        exit_with_error(
            "No sources given and none configured",
            ExitCode.VALIDATION_ERROR,
            console=ctx.console,
        )

    reporter = ctx.reporter()
    paths = resolve_sources(patterns, ctx.project_root, reporter=reporter)
    if not paths:
        ctx.console.print("[yellow]No source files matched[/yellow]")
        return

    try:
        written = ctx.promoter().compile_sources(paths)
    except (RuleforgeError, OSError) as e:
        _fail(ctx, e)

    rules_dir = ctx.layout.relative(LifecycleStage.FINAL_RULE)
    if not written:
        ctx.console.print(f"[yellow]No rules generated in {rules_dir}/[/yellow]")
        return
    ctx.console.print(
        f"[green]Generated {len(written)} rule(s)[/green] in {rules_dir}/"
    )


# =============================================================================
# status
# =============================================================================


def _status() -> None:
    """Show the lifecycle status of every idea"""
    ctx = CLIContext.get_current()
    layout = ctx.layout
    ideas = list_ideas(layout)

    if not ideas:
        ideas_dir = layout.relative(LifecycleStage.IDEA)
        ctx.console.print("No ideas found. To get started:")
        ctx.console.print(f"  1. Create a file in {ideas_dir}/")
        ctx.console.print("  2. Write your idea in plain text")
        ctx.console.print("  3. Run `ruleforge draft <file>`")
        return

    rows = []
    for idea in ideas:
        entry = idea_status(layout, idea)
        rows.append([entry.idea_file, entry.state.value, entry.state.next_step])
    ctx.console.print(escape(format_table(["Idea", "Status", "Next step"], rows)))

    counts = stage_counts(layout)
    summary = ", ".join(
        f"{layout.relative(stage)}: {counts[stage]}" for stage in _CLEANABLE_STAGES
    )
    ctx.console.print(f"[dim]{escape(summary)}[/dim]")


# =============================================================================
# clean
# =============================================================================


def _clean(*stages: LifecycleStage) -> None:
    """Remove generated files from stage directories

    Accepts ideas-draft, rules-draft and final-rule. Without arguments all
    three are cleared. Idea documents are never removed.
    """
    ctx = CLIContext.get_current()
    targets = stages or _CLEANABLE_STAGES

    if LifecycleStage.IDEA in targets:
        exit_with_error(
            "Idea documents cannot be cleaned",
            ExitCode.VALIDATION_ERROR,
            console=ctx.console,
        )

    total = 0
    try:
        for stage in targets:
            removed = _clear(ctx, stage)
            total += removed
            if not ctx.quiet:
                ctx.console.print(
                    f"Removed {removed} file(s) from {ctx.layout.relative(stage)}/"
                )
    except (RuleforgeError, OSError) as e:
        _fail(ctx, e)

    if total == 0:
        ctx.console.print("[yellow]Nothing to clean[/yellow]")


def register_commands(app: App) -> None:
    app.command(_draft, name="draft")
    app.command(_approve, name="approve")
    app.command(_compile, name="compile")
    app.command(_status, name="status")
    app.command(_clean, name="clean")
