from ruleforge.lifecycle import SCAFFOLD_SECTIONS, StackProfile, detect_stack
from ruleforge.lifecycle._stack import (
    backend_snippet,
    database_snippet,
    frontend_types_snippet,
    render_scaffold,
    ui_component_snippet,
)


class TestDetectStack:
    def test_empty_text_sets_no_flags(self) -> None:
        assert detect_stack("") == StackProfile()

    def test_todo_app_with_login_and_postgres(self) -> None:
        profile = detect_stack(
            "build me a todo app with user login and a postgres database"
        )

        assert profile.auth
        assert profile.sql
        assert not profile.nosql
        assert not profile.api

    def test_matching_is_case_insensitive(self) -> None:
        profile = detect_stack("A Django backend with a GraphQL API")

        assert profile.python
        assert profile.api

    def test_requires_word_boundaries(self) -> None:
        # "going" and "authority" must not trigger go or auth
        profile = detect_stack("going forward with authority")

        assert not profile.go
        assert not profile.auth

    def test_multiword_mobile_pattern(self) -> None:
        assert detect_stack("built with react native").mobile


class TestStackProfile:
    def test_defaults_to_react_and_node(self) -> None:
        profile = StackProfile()

        assert profile.primary_frontend == "react"
        assert profile.primary_backend == "node"

    def test_last_matching_frontend_wins(self) -> None:
        profile = StackProfile(vue=True, svelte=True)

        assert profile.primary_frontend == "svelte"

    def test_last_matching_backend_wins(self) -> None:
        profile = StackProfile(python=True, go=True)

        assert profile.primary_backend == "go"


class TestSnippets:
    def test_backend_snippet_uses_api_variant(self) -> None:
        snippet = backend_snippet(StackProfile(python=True, api=True))

        assert snippet.startswith("```python")
        assert "API implementation" in snippet

    def test_default_backend_snippet_is_node(self) -> None:
        assert "Node.js backend" in backend_snippet(StackProfile())

    def test_sql_takes_precedence_over_nosql(self) -> None:
        snippet = database_snippet(StackProfile(sql=True, nosql=True))

        assert snippet.startswith("```sql")

    def test_generic_database_snippet(self) -> None:
        assert "Database schema" in database_snippet(StackProfile())

    def test_frontend_snippets_follow_primary_frontend(self) -> None:
        profile = StackProfile(vue=True)

        assert "Vue types" in frontend_types_snippet(profile)
        assert ui_component_snippet(profile).startswith("```vue")


class TestRenderScaffold:
    def test_contains_every_section_in_order(self) -> None:
        scaffold = render_scaffold("A small idea")
        positions = [scaffold.index(f"# {name}\n") for name in SCAFFOLD_SECTIONS]

        assert positions == sorted(positions)

    def test_idea_is_placed_under_overview(self) -> None:
        scaffold = render_scaffold("  A small idea  \n")

        assert "## Overview\nA small idea\n" in scaffold

    def test_conditional_lines_follow_profile(self) -> None:
        profile = StackProfile(auth=True, sql=True)
        scaffold = render_scaffold("todo app", profile)

        assert "- User authentication and profiles\n" in scaffold
        assert "- SQL database for structured data\n" in scaffold
        assert "- RESTful API endpoints" not in scaffold
        assert "- NoSQL database for flexible data" not in scaffold
        assert "- Mobile app support" not in scaffold
        assert "- Desktop app support" not in scaffold

    def test_profile_detected_from_idea_when_omitted(self) -> None:
        scaffold = render_scaffold("an electron desktop client for a REST api")

        assert "- Desktop app support\n" in scaffold
        assert "- RESTful API endpoints\n" in scaffold

    def test_fixed_lines_always_present(self) -> None:
        scaffold = render_scaffold("x")

        assert "- Core business logic\n- Data persistence\n- Error handling\n" in (
            scaffold
        )
        assert scaffold.endswith("- Security scanning")
