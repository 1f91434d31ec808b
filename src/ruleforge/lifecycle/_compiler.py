# pyright: reportAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""Rule compilation: drafts and documents to `.mdc` rule files.

Each source file becomes one rule. The rule body and description come from
the draft YAML when the file is a draft; any other text is used verbatim.
Applicability globs are inferred from an ordered table of category cues.
"""

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final

import yaml
from pathspec import PathSpec
from pathspec.patterns.gitwildmatch import GitWildMatchPattern

from ruleforge.lifecycle._models import (
    DEFAULT_TRIGGERS,
    RULE_VERSION,
    LifecycleStage,
    RuleArtifact,
)
from ruleforge.lifecycle._reporting import NullReporter, Reporter
from ruleforge.lifecycle._storage import StageLayout, atomic_write

__all__ = [
    "DEFAULT_IGNORE_PATTERNS",
    "FALLBACK_GLOBS",
    "GLOB_RULES",
    "NO_DESCRIPTION",
    "GlobRule",
    "RuleCompiler",
    "compile_rule",
    "expand_braces",
    "infer_globs",
    "parse_rule_source",
    "render_mdc",
    "resolve_sources",
]

NO_DESCRIPTION: Final = "No description provided"


@dataclass(frozen=True, slots=True)
class GlobRule:
    """One row of the glob inference table.

    Attributes:
        category: Category name, for display and tests.
        filename_cues: Substrings looked for in the rule name.
        content_cues: Substrings looked for in the lowercased source text.
        globs: Patterns assigned when the row matches.
    """

    category: str
    filename_cues: tuple[str, ...]
    content_cues: tuple[str, ...]
    globs: tuple[str, ...]

    def matches(self, name: str, lowered: str) -> bool:
        """Whether the row applies to a rule name and lowercased content."""
        return any(cue in name for cue in self.filename_cues) or any(
            cue in lowered for cue in self.content_cues
        )


GLOB_RULES: Final[tuple[GlobRule, ...]] = (
    GlobRule(
        category="frontend",
        filename_cues=("frontend",),
        content_cues=("frontend", "react", "vue"),
        globs=(
            "src/components/**/*.{tsx,jsx}",
            "src/pages/**/*.{tsx,jsx}",
            "src/hooks/**/*.ts",
            "src/styles/**/*.{css,scss}",
            "src/types/**/*.ts",
        ),
    ),
    GlobRule(
        category="technical-architecture",
        filename_cues=("technical-architecture",),
        content_cues=("backend", "api"),
        globs=(
            "src/api/**/*.ts",
            "src/services/**/*.ts",
            "src/middleware/**/*.ts",
            "src/config/**/*.ts",
            "src/types/**/*.ts",
        ),
    ),
    GlobRule(
        category="data-management",
        filename_cues=("data-management",),
        content_cues=("database", "schema"),
        globs=(
            "src/models/**/*.ts",
            "src/db/**/*.ts",
            "prisma/**/*.prisma",
            "migrations/**/*.sql",
            "src/types/**/*.ts",
        ),
    ),
    GlobRule(
        category="deployment",
        filename_cues=("deployment",),
        content_cues=(),
        globs=(
            "Dockerfile",
            "docker-compose*.yml",
            ".env*",
            "scripts/deploy/**/*",
            "config/**/*.{json,yaml,yml}",
        ),
    ),
    GlobRule(
        category="development",
        filename_cues=("development",),
        content_cues=(),
        globs=(
            "package.json",
            "tsconfig.json",
            ".env*",
            "scripts/**/*",
            "tests/**/*.{ts,tsx}",
        ),
    ),
    GlobRule(
        category="maintenance",
        filename_cues=("maintenance",),
        content_cues=(),
        globs=(
            "scripts/backup/**/*",
            "scripts/monitor/**/*",
            "logs/**/*",
            "config/**/*.{json,yaml,yml}",
            ".github/**/*",
        ),
    ),
    GlobRule(
        category="core-features",
        filename_cues=("core-features",),
        content_cues=(),
        globs=(
            "src/**/*.{ts,tsx}",
            "docs/**/*.md",
            "README.md",
            "CONTRIBUTING.md",
            "CHANGELOG.md",
        ),
    ),
)
"""Ordered glob inference table; the first matching row wins."""

FALLBACK_GLOBS: Final = (
    "src/**/*.{ts,tsx,js,jsx}",
    "docs/**/*.md",
    "**/*.{yaml,yml,json}",
)
"""Globs assigned when no row of GLOB_RULES matches."""


def infer_globs(name: str, content: str) -> tuple[str, ...]:
    """Infer applicability globs for a rule.

    Args:
        name: Rule name (source base filename without extension).
        content: Full source text.

    Returns:
        The globs of the first matching GLOB_RULES row, or FALLBACK_GLOBS.
    """
    lowered = content.lower()
    for rule in GLOB_RULES:
        if rule.matches(name, lowered):
            return rule.globs
    return FALLBACK_GLOBS


def _single_line(text: str) -> str:
    return " ".join(text.split())


def parse_rule_source(text: str) -> tuple[str, str]:
    """Extract the description and body of a rule source.

    Draft YAML yields its `description` and `content` fields. Anything that
    is not a YAML mapping, or a mapping without those fields, falls back to
    NO_DESCRIPTION and the raw text.

    Returns:
        Tuple of (description, body).
    """
    try:
        data: Any = yaml.safe_load(text)  # pyright: ignore[reportExplicitAny]
    except (yaml.YAMLError, ValueError, TypeError, RecursionError):
        # Invalid timestamps surface as ValueError, deep nesting as RecursionError
        return NO_DESCRIPTION, text

    if not isinstance(data, dict):
        return NO_DESCRIPTION, text

    description = data.get("description")
    content = data.get("content")

    description_text = _single_line(str(description)) if description else ""
    body = content if isinstance(content, str) and content.strip() else text
    return description_text or NO_DESCRIPTION, body


def compile_rule(
    path: Path,
    text: str,
    *,
    version: str = RULE_VERSION,
    triggers: Sequence[str] = DEFAULT_TRIGGERS,
) -> RuleArtifact:
    """Build the rule artifact for one source file.

    Args:
        path: Source path; its base filename (numeric prefix kept) is the
            rule name.
        text: Source text.
        version: Rule format version.
        triggers: Trigger tags.

    Returns:
        The rule artifact. Never raises for malformed content.
    """
    name = path.stem
    description, body = parse_rule_source(text)
    return RuleArtifact(
        name=name,
        description=description,
        globs=infer_globs(name, text),
        content=body,
        version=version,
        triggers=tuple(triggers),
    )


def render_mdc(artifact: RuleArtifact) -> str:
    """Render a rule artifact as `.mdc` text: header block then body."""
    header = "\n".join(
        (
            "---",
            f"name: {artifact.name}",
            f"description: {artifact.description}",
            f'version: "{artifact.version}"',
            f"globs: {', '.join(artifact.globs)}",
            f"triggers: {', '.join(artifact.triggers)}",
            "---",
        )
    )
    return f"{header}\n{artifact.content}"


# =============================================================================
# Source resolution
# =============================================================================

DEFAULT_IGNORE_PATTERNS: Final = ("node_modules/", "dist/")

_BRACES = re.compile(r"\{([^{}]*)\}")


def expand_braces(pattern: str) -> list[str]:
    """Expand `{a,b}` alternations, which pathlib globbing does not support.

    Example:
        >>> expand_braces("src/**/*.{ts,tsx}")
        ['src/**/*.ts', 'src/**/*.tsx']
    """
    match = _BRACES.search(pattern)
    if match is None:
        return [pattern]
    head, tail = pattern[: match.start()], pattern[match.end() :]
    expanded: list[str] = []
    for option in match.group(1).split(","):
        expanded.extend(expand_braces(f"{head}{option}{tail}"))
    return expanded


def resolve_sources(
    patterns: Iterable[str],
    base_dir: Path,
    *,
    ignore: Iterable[str] = DEFAULT_IGNORE_PATTERNS,
    reporter: Reporter | None = None,
) -> list[Path]:
    """Resolve literal paths and glob patterns to an ordered, deduplicated list.

    A pattern naming an existing file is taken as is. Otherwise it is
    globbed relative to `base_dir`, skipping directories and anything the
    ignore patterns match. Invalid patterns are reported and skipped.

    Args:
        patterns: Paths or glob patterns, absolute or relative to base_dir.
        base_dir: Project root.
        ignore: Gitignore-style patterns to exclude from glob matches.
        reporter: Progress observer.

    Returns:
        Absolute file paths in first-seen order.
    """
    reporter = reporter or NullReporter()
    ignore_spec = PathSpec.from_lines(GitWildMatchPattern, list(ignore))

    seen: set[Path] = set()
    result: list[Path] = []

    def add(path: Path) -> None:
        resolved = path.resolve()
        if resolved not in seen:
            seen.add(resolved)
            result.append(resolved)

    for pattern in patterns:
        direct = Path(pattern) if Path(pattern).is_absolute() else base_dir / pattern
        if direct.is_file():
            add(direct)
            continue

        for expanded in expand_braces(pattern):
            try:
                matches = sorted(base_dir.glob(expanded))
            except (ValueError, NotImplementedError) as e:
                reporter.warning(f"Invalid source pattern {pattern!r}: {e}")
                break
            for match in matches:
                if not match.is_file():
                    continue
                relative = match.relative_to(base_dir).as_posix()
                if ignore_spec.match_file(relative):
                    continue
                add(match)

    return result


# =============================================================================
# Compiler
# =============================================================================


class RuleCompiler:
    """Compiles source files into rule files in the final-rule directory."""

    __slots__ = ("_layout", "_reporter", "_triggers", "_version")

    def __init__(
        self,
        layout: StageLayout,
        *,
        version: str = RULE_VERSION,
        triggers: Sequence[str] = DEFAULT_TRIGGERS,
        reporter: Reporter | None = None,
    ) -> None:
        self._layout = layout
        self._version = version
        self._triggers = tuple(triggers)
        self._reporter = reporter or NullReporter()

    @property
    def output_dir(self) -> Path:
        """Directory receiving compiled rules."""
        return self._layout.directory(LifecycleStage.FINAL_RULE)

    def _read_source(self, path: Path) -> str | None:
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            self._reporter.warning(f"Could not read {path.name}: {e}", path=path)
            return None
        if not text.strip():
            self._reporter.warning(f"Skipping empty file {path.name}", path=path)
            return None
        return text.strip()

    def compile_files(self, paths: Iterable[Path]) -> list[tuple[RuleArtifact, Path]]:
        """Compile every readable source into a rule file.

        Unreadable and empty files are reported and skipped; malformed drafts
        fall back to their raw text. Existing rules with the same name are
        overwritten. Sources sharing a base filename overwrite each other in
        input order.

        Args:
            paths: Source files.

        Returns:
            (artifact, written path) pairs, after every write has completed.

        Raises:
            LifecycleIOError: If a rule file cannot be written.
        """
        _ = self.output_dir.mkdir(parents=True, exist_ok=True)

        artifacts: list[RuleArtifact] = []
        for path in paths:
            text = self._read_source(path)
            if text is None:
                continue
            artifacts.append(
                compile_rule(path, text, version=self._version, triggers=self._triggers)
            )

        written: list[tuple[RuleArtifact, Path]] = []
        for artifact in artifacts:
            target = self.output_dir / artifact.filename
            atomic_write(target, render_mdc(artifact))
            self._reporter.created(target, LifecycleStage.FINAL_RULE)
            written.append((artifact, target))
        return written
