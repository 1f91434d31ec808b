"""Ruleforge draft lifecycle.

This package turns idea documents in `docs/ideas/` into numbered drafts and
finally into `.mdc` rule files, through the stages idea → ideas-draft →
rules-draft → final-rule.
"""

from ruleforge.lifecycle._classifier import (
    classify,
    is_complex,
    is_simple_idea,
    needs_expansion,
    split_sections,
    split_subtopics,
)
from ruleforge.lifecycle._compiler import (
    FALLBACK_GLOBS,
    GLOB_RULES,
    NO_DESCRIPTION,
    GlobRule,
    RuleCompiler,
    compile_rule,
    infer_globs,
    parse_rule_source,
    render_mdc,
    resolve_sources,
)
from ruleforge.lifecycle._emitter import (
    DEFAULT_DESCRIPTION,
    DraftEmitter,
    clean_content,
    infer_description,
    infer_title,
)
from ruleforge.lifecycle._models import (
    DEFAULT_TRIGGERS,
    RULE_EXTENSION,
    RULE_VERSION,
    ApproveResult,
    Classification,
    DraftRecord,
    DraftStatus,
    GenerateResult,
    LifecycleStage,
    RuleArtifact,
    StackProfile,
    TopicUnit,
)
from ruleforge.lifecycle._naming import draft_filename, sequence_number, slugify
from ruleforge.lifecycle._promoter import LifecyclePromoter
from ruleforge.lifecycle._reporting import LoggingReporter, NullReporter, Reporter
from ruleforge.lifecycle._stack import SCAFFOLD_SECTIONS, detect_stack, render_scaffold
from ruleforge.lifecycle._status import (
    IdeaState,
    IdeaStatus,
    idea_status,
    list_ideas,
    stage_counts,
)
from ruleforge.lifecycle._storage import (
    StageLayout,
    clear_stage,
    dump_draft,
    list_drafts,
    load_draft,
    write_draft,
)

__all__ = [
    "DEFAULT_DESCRIPTION",
    "DEFAULT_TRIGGERS",
    "FALLBACK_GLOBS",
    "GLOB_RULES",
    "NO_DESCRIPTION",
    "RULE_EXTENSION",
    "RULE_VERSION",
    "SCAFFOLD_SECTIONS",
    "ApproveResult",
    "Classification",
    "DraftEmitter",
    "DraftRecord",
    "DraftStatus",
    "GenerateResult",
    "GlobRule",
    "IdeaState",
    "IdeaStatus",
    "LifecyclePromoter",
    "LifecycleStage",
    "LoggingReporter",
    "NullReporter",
    "Reporter",
    "RuleArtifact",
    "RuleCompiler",
    "StackProfile",
    "StageLayout",
    "TopicUnit",
    "classify",
    "clean_content",
    "clear_stage",
    "compile_rule",
    "detect_stack",
    "draft_filename",
    "dump_draft",
    "idea_status",
    "infer_description",
    "infer_globs",
    "infer_title",
    "is_complex",
    "is_simple_idea",
    "list_drafts",
    "list_ideas",
    "load_draft",
    "needs_expansion",
    "parse_rule_source",
    "render_mdc",
    "render_scaffold",
    "resolve_sources",
    "sequence_number",
    "slugify",
    "split_sections",
    "split_subtopics",
    "stage_counts",
    "write_draft",
]
