from pathlib import Path

import pytest
from pytest_mock import MockerFixture

from ruleforge.lifecycle import (
    FALLBACK_GLOBS,
    GLOB_RULES,
    NO_DESCRIPTION,
    LifecycleStage,
    RuleArtifact,
    RuleCompiler,
    compile_rule,
    infer_globs,
    parse_rule_source,
    render_mdc,
    resolve_sources,
)
from ruleforge.lifecycle._compiler import expand_braces

from tests.conftest import RuleforgeProject

CORE_FEATURES_GLOBS = next(
    rule.globs for rule in GLOB_RULES if rule.category == "core-features"
)


class TestInferGlobs:
    @pytest.mark.parametrize(
        ("name", "category"),
        [
            ("300-frontend-design", "frontend"),
            ("200-technical-architecture", "technical-architecture"),
            ("400-data-management", "data-management"),
            ("500-deployment", "deployment"),
            ("600-development", "development"),
            ("700-maintenance", "maintenance"),
            ("100-core-features", "core-features"),
        ],
    )
    def test_filename_cues(self, name: str, category: str) -> None:
        expected = next(rule.globs for rule in GLOB_RULES if rule.category == category)

        assert infer_globs(name, "neutral text") == expected

    def test_content_cue_for_frontend(self) -> None:
        globs = infer_globs("100-notes", "Built with React and hooks")

        assert globs[0] == "src/components/**/*.{tsx,jsx}"

    def test_content_cue_for_backend(self) -> None:
        globs = infer_globs("100-notes", "The Backend exposes endpoints")

        assert "src/api/**/*.ts" in globs

    def test_content_cue_for_database(self) -> None:
        assert "prisma/**/*.prisma" in infer_globs("100-notes", "the schema is small")

    def test_first_matching_row_wins(self) -> None:
        # Frontend content beats a later filename cue
        assert infer_globs("100-deployment", "a vue app")[0].startswith(
            "src/components/"
        )

    def test_fallback(self) -> None:
        assert infer_globs("100-notes", "nothing relevant") == FALLBACK_GLOBS


class TestParseRuleSource:
    def test_draft_yields_description_and_content(self) -> None:
        text = "title: T\ndescription: Core stuff\ncontent: |\n  body line\n"

        assert parse_rule_source(text) == ("Core stuff", "body line\n")

    def test_plain_text_falls_back(self) -> None:
        text = "# Heading\n\nSome markdown: with a colon"

        assert parse_rule_source(text) == (NO_DESCRIPTION, text)

    def test_invalid_yaml_falls_back(self) -> None:
        text = "key: [unclosed"

        assert parse_rule_source(text) == (NO_DESCRIPTION, text)

    def test_scalar_and_list_fall_back(self) -> None:
        assert parse_rule_source("just words") == (NO_DESCRIPTION, "just words")
        assert parse_rule_source("- a\n- b") == (NO_DESCRIPTION, "- a\n- b")

    def test_mapping_without_content_keeps_raw_text(self) -> None:
        text = "description: Only a description"

        assert parse_rule_source(text) == ("Only a description", text)

    def test_multiline_description_is_collapsed(self) -> None:
        text = "description: |\n  first\n  second\ncontent: body"

        assert parse_rule_source(text)[0] == "first second"

    def test_invalid_timestamp_falls_back(self) -> None:
        text = "last_updated: 2025-13-45\ncontent: body"

        description, _ = parse_rule_source(text)

        assert description == NO_DESCRIPTION

    def test_deeply_nested_text_falls_back(self) -> None:
        text = "[" * 3000

        artifact = compile_rule(Path("100-x.md"), text)

        assert artifact.description == NO_DESCRIPTION
        assert artifact.content == text


class TestCompileRule:
    def test_name_keeps_numeric_prefix(self, tmp_path: Path) -> None:
        path = tmp_path / "200-core-features.yaml"

        artifact = compile_rule(path, "content: Core features and functionality")

        assert artifact.name == "200-core-features"
        assert artifact.filename == "200-core-features.mdc"
        assert artifact.globs == CORE_FEATURES_GLOBS
        assert artifact.content == "Core features and functionality"
        assert artifact.version == "1.0"
        assert artifact.triggers == ("file_change", "file_open")

    def test_custom_version_and_triggers(self, tmp_path: Path) -> None:
        artifact = compile_rule(
            tmp_path / "x.md", "text", version="2.0", triggers=["manual"]
        )

        assert artifact.version == "2.0"
        assert artifact.triggers == ("manual",)


class TestRenderMdc:
    def test_header_then_body(self) -> None:
        artifact = RuleArtifact(
            name="100-core-features",
            description="Core things",
            globs=("a/**", "b.md"),
            content="Body text",
        )

        assert render_mdc(artifact) == (
            "---\n"
            "name: 100-core-features\n"
            "description: Core things\n"
            'version: "1.0"\n'
            "globs: a/**, b.md\n"
            "triggers: file_change, file_open\n"
            "---\n"
            "Body text"
        )

    def test_artifact_requires_globs(self) -> None:
        with pytest.raises(ValueError, match="at least one glob"):
            _ = RuleArtifact(name="x", description="d", globs=(), content="c")


class TestExpandBraces:
    def test_single_group(self) -> None:
        assert expand_braces("src/*.{ts,tsx}") == ["src/*.ts", "src/*.tsx"]

    def test_multiple_groups(self) -> None:
        assert expand_braces("{a,b}/{c,d}") == ["a/c", "a/d", "b/c", "b/d"]

    def test_no_group(self) -> None:
        assert expand_braces("docs/**/*.md") == ["docs/**/*.md"]


class TestResolveSources:
    def test_literal_paths_and_globs(self, tmp_path: Path) -> None:
        (tmp_path / "docs").mkdir()
        for name in ("b.md", "a.md", "c.txt"):
            _ = (tmp_path / "docs" / name).write_text("x", encoding="utf-8")

        paths = resolve_sources(["docs/c.txt", "docs/*.md", "docs/a.md"], tmp_path)

        assert [p.name for p in paths] == ["c.txt", "a.md", "b.md"]

    def test_ignores_node_modules_and_dist(self, tmp_path: Path) -> None:
        for directory in ("src", "node_modules/pkg", "dist"):
            (tmp_path / directory).mkdir(parents=True)
            _ = (tmp_path / directory / "rule.md").write_text("x", encoding="utf-8")

        paths = resolve_sources(["**/*.md"], tmp_path)

        assert [p.relative_to(tmp_path).as_posix() for p in paths] == ["src/rule.md"]

    def test_brace_patterns(self, tmp_path: Path) -> None:
        for name in ("a.yaml", "b.yml", "c.json"):
            _ = (tmp_path / name).write_text("x", encoding="utf-8")

        paths = resolve_sources(["*.{yaml,yml}"], tmp_path)

        assert sorted(p.name for p in paths) == ["a.yaml", "b.yml"]

    def test_invalid_pattern_is_reported(
        self, tmp_path: Path, mocker: MockerFixture
    ) -> None:
        reporter = mocker.Mock()

        paths = resolve_sources(["/absolute/*.md"], tmp_path, reporter=reporter)

        assert paths == []
        reporter.warning.assert_called_once()

    def test_no_matches(self, tmp_path: Path) -> None:
        assert resolve_sources(["missing/*.md"], tmp_path) == []


class TestRuleCompiler:
    def test_compiles_drafts_into_rules_dir(self, project: RuleforgeProject) -> None:
        source = project.write_draft(
            LifecycleStage.RULES_DRAFT,
            "200-core-features.yaml",
            'content: "Core features and functionality"\n',
        )
        compiler = RuleCompiler(project.layout)

        written = compiler.compile_files([source])

        target = project.rules_dir / "200-core-features.mdc"
        assert [path for _, path in written] == [target]
        text = target.read_text(encoding="utf-8")
        assert "globs: " + ", ".join(CORE_FEATURES_GLOBS) in text
        assert text.endswith("---\nCore features and functionality")

    def test_skips_empty_and_unreadable_files(
        self, project: RuleforgeProject, mocker: MockerFixture
    ) -> None:
        empty = project.write_draft(LifecycleStage.RULES_DRAFT, "100-empty.yaml", "  ")
        missing = project.rules_draft_dir / "200-missing.yaml"
        good = project.write_draft(LifecycleStage.RULES_DRAFT, "300-good.md", "Hello")
        reporter = mocker.Mock()
        compiler = RuleCompiler(project.layout, reporter=reporter)

        written = compiler.compile_files([empty, missing, good])

        assert [artifact.name for artifact, _ in written] == ["300-good"]
        assert reporter.warning.call_count == 2

    def test_overwrites_existing_rule(self, project: RuleforgeProject) -> None:
        source = project.write_draft(LifecycleStage.RULES_DRAFT, "100-x.md", "new")
        project.rules_dir.mkdir(parents=True)
        _ = (project.rules_dir / "100-x.mdc").write_text("old", encoding="utf-8")

        _ = RuleCompiler(project.layout).compile_files([source])

        assert (project.rules_dir / "100-x.mdc").read_text(
            encoding="utf-8"
        ).endswith("\nnew")
