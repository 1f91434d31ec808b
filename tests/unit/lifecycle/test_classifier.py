from ruleforge.lifecycle import (
    SCAFFOLD_SECTIONS,
    StackProfile,
    TopicUnit,
    classify,
    is_complex,
    is_simple_idea,
    needs_expansion,
    split_sections,
    split_subtopics,
)

NOTES_IDEA = "build me a todo app with user login and a postgres database"

STRUCTURED_IDEA = """# Core Features
Users can create and complete tasks.

# Data Management
Tasks are stored per user.
"""


class TestIsComplex:
    def test_code_fence_is_complex(self) -> None:
        assert is_complex("short\n```\ncode\n```")

    def test_subsection_heading_is_complex(self) -> None:
        assert is_complex("## Details\nmore")

    def test_long_text_with_heading_is_complex(self) -> None:
        assert is_complex("# Title\n" + "x" * 600)

    def test_short_text_with_heading_is_not_complex(self) -> None:
        assert not is_complex("# Title\nshort body")

    def test_long_text_without_heading_is_not_complex(self) -> None:
        assert not is_complex("x" * 600)


class TestNeedsExpansion:
    def test_short_text_needs_expansion(self) -> None:
        assert needs_expansion(NOTES_IDEA)

    def test_complex_text_never_needs_expansion(self) -> None:
        assert not needs_expansion("```\nx\n```")

    def test_links_trigger_expansion(self) -> None:
        text = "# Idea\n" + "see https://example.com for details " * 5

        assert needs_expansion(text)

    def test_headingless_text_needs_expansion(self) -> None:
        assert needs_expansion("word " * 50)

    def test_long_text_with_heading_and_no_links(self) -> None:
        text = "# Idea\n" + "plain words " * 20

        assert not needs_expansion(text)


class TestIsSimpleIdea:
    def test_short_plain_text_is_simple(self) -> None:
        assert is_simple_idea(NOTES_IDEA)

    def test_long_text_is_not_simple(self) -> None:
        assert not is_simple_idea("x" * 1000)

    def test_code_fence_is_not_simple(self) -> None:
        assert not is_simple_idea("```")

    def test_subsection_is_not_simple(self) -> None:
        assert not is_simple_idea("## Sub")


class TestSplitSections:
    def test_splits_before_top_level_headings(self) -> None:
        sections = split_sections(STRUCTURED_IDEA)

        assert len(sections) == 2
        assert sections[0].startswith("# Core Features")
        assert sections[1].startswith("# Data Management")

    def test_subsection_headings_do_not_split(self) -> None:
        sections = split_sections("# A\ntext\n## B\nmore")

        assert len(sections) == 1

    def test_preamble_before_first_heading_is_its_own_section(self) -> None:
        sections = split_sections("intro\n# A\nbody")

        assert sections == ["intro\n", "# A\nbody"]

    def test_text_without_headings_is_one_section(self) -> None:
        assert split_sections("plain") == ["plain"]


class TestSplitSubtopics:
    def test_splits_on_subtopic_sentences(self) -> None:
        body = (
            "Let's create a CLI.\n"
            "We should implement a parser.\n"
            "The tool should support commands like add.\n"
            "We'll use SQLite."
        )

        parts = split_subtopics(body)

        assert len(parts) == 4
        assert parts[1].startswith("We should implement")
        assert parts[3].startswith("We'll use")

    def test_body_without_markers_is_unsplit(self) -> None:
        assert split_subtopics("just text") == ["just text"]


class TestClassify:
    def test_short_headingless_idea_expands_to_scaffold(self) -> None:
        result = classify(NOTES_IDEA)

        assert result.needs_expansion
        assert len(result.topics) == 1
        body = result.topics[0].body
        for name in SCAFFOLD_SECTIONS:
            assert f"# {name}\n" in body
        assert "- User authentication and profiles" in body
        assert "- SQL database for structured data" in body
        assert NOTES_IDEA in body

    def test_substantial_headingless_idea_is_kept_whole(self) -> None:
        content = "  " + "```\ncode\n```\nexplanation " * 3 + "  "

        result = classify(content)

        assert not result.needs_expansion
        assert result.topics == (TopicUnit(heading="", body=content.strip()),)

    def test_sections_become_units(self) -> None:
        result = classify(STRUCTURED_IDEA)

        assert [unit.heading for unit in result.topics] == [
            "# Core Features",
            "# Data Management",
        ]
        assert result.topics[0].body == "Users can create and complete tasks."

    def test_sections_with_empty_body_are_dropped(self) -> None:
        result = classify("# Empty\n\n# Full\nbody text")

        assert [unit.heading for unit in result.topics] == ["# Full"]

    def test_subtopics_are_prefixed_with_section_heading(self) -> None:
        content = (
            "# Plan\n"
            "We should implement storage.\n"
            "The app needs to handle sync.\n"
        )

        result = classify(content)

        assert len(result.topics) == 2
        assert all(unit.heading == "# Plan" for unit in result.topics)
        assert result.topics[0].text == "# Plan\n\nWe should implement storage."
        assert result.topics[1].body == "The app needs to handle sync."

    def test_code_fenced_content_is_never_expanded(self) -> None:
        content = "Some notes\n```python\nprint('hi')\n```\n"

        result = classify(content)

        assert not result.needs_expansion
        assert "SQL database" not in result.topics[0].body

    def test_empty_content_never_raises(self) -> None:
        result = classify("")

        assert result.needs_expansion
        assert len(result.topics) == 1

    def test_detector_drives_the_scaffold(self) -> None:
        def detector(text: str) -> StackProfile:
            return StackProfile(python=True, api=True, sql=True)

        result = classify("a small tool", detector=detector)

        body = result.topics[0].body
        assert "- SQL database for structured data" in body
        assert "# Python API implementation will go here" in body
