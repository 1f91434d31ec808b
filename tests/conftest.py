"""Shared test fixtures for ruleforge tests."""

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import pytest
from rich.console import Console

from ruleforge.lifecycle import LifecycleStage, StageLayout

FIXED_DATE = "2025-01-15"


@dataclass(frozen=True, slots=True)
class RuleforgeProject:
    """Paths for a test project with the standard stage layout."""

    root: Path
    layout: StageLayout

    @property
    def ideas_dir(self) -> Path:
        return self.layout.directory(LifecycleStage.IDEA)

    @property
    def ideas_draft_dir(self) -> Path:
        return self.layout.directory(LifecycleStage.IDEAS_DRAFT)

    @property
    def rules_draft_dir(self) -> Path:
        return self.layout.directory(LifecycleStage.RULES_DRAFT)

    @property
    def rules_dir(self) -> Path:
        return self.layout.directory(LifecycleStage.FINAL_RULE)

    def write_idea(self, name: str, content: str) -> Path:
        """Write an idea document under docs/ideas/."""
        path = self.ideas_dir / name
        _ = path.parent.mkdir(parents=True, exist_ok=True)
        _ = path.write_text(content, encoding="utf-8")
        return path

    def write_draft(self, stage: LifecycleStage, name: str, content: str) -> Path:
        """Write a raw file into a stage directory."""
        path = self.layout.directory(stage) / name
        _ = path.parent.mkdir(parents=True, exist_ok=True)
        _ = path.write_text(content, encoding="utf-8")
        return path


@pytest.fixture
def project(tmp_path: Path) -> RuleforgeProject:
    """Create a project root with an empty docs/ideas/ directory.

    Structure:
        tmp_path/
            project/
                docs/
                    ideas/
    """
    root = tmp_path / "project"
    layout = StageLayout(root)
    layout.directory(LifecycleStage.IDEA).mkdir(parents=True)
    return RuleforgeProject(root=root, layout=layout)


@pytest.fixture
def fixed_clock() -> Callable[[], str]:
    """Clock returning a constant date for deterministic drafts."""
    return lambda: FIXED_DATE


@pytest.fixture
def console() -> Console:
    return Console(
        width=120,
        force_terminal=True,
        highlight=False,
        color_system=None,
        legacy_windows=False,
    )
