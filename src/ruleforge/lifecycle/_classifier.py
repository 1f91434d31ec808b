"""Heuristic classification of idea documents into topic units.

Classification is pattern based. A document is either expanded into the
synthetic scaffold (short or unstructured text), kept whole (unstructured but
substantial text), or split on top-level headings and sub-topic sentences.
"""

import re
from collections.abc import Callable
from typing import Final

from ruleforge.lifecycle._models import Classification, StackProfile, TopicUnit
from ruleforge.lifecycle._stack import detect_stack, render_scaffold

__all__ = [
    "COMPLEX_LENGTH",
    "SHORT_LENGTH",
    "SIMPLE_IDEA_LENGTH",
    "classify",
    "is_complex",
    "is_simple_idea",
    "needs_expansion",
    "split_sections",
    "split_subtopics",
]

SHORT_LENGTH: Final = 100
"""Content shorter than this always needs expansion (unless complex)."""

COMPLEX_LENGTH: Final = 500
"""Content longer than this with a heading marker is complex."""

SIMPLE_IDEA_LENGTH: Final = 1000
"""Ideas shorter than this without structure skip classification entirely."""

_CODE_FENCE: Final = "```"
_SUBSECTION_MARKER: Final = "##"
_HEADING_MARKER: Final = "#"
_LINK_MARKERS: Final = ("http://", "https://")

_TOP_LEVEL_HEADING = re.compile(r"(?=^#[^#])", re.MULTILINE)
"""Zero-width split point before a line starting with exactly one `#`."""

_SUBTOPIC_MARKER = re.compile(
    r"(?=^We should|^The .* should|^The .* needs|^We'll use)", re.MULTILINE
)
"""Zero-width split point before sentences that open a sub-topic."""


def is_complex(content: str) -> bool:
    """Whether content already carries enough structure to never be expanded.

    Content is complex when it has a fenced code block, a subsection heading,
    or is long and has at least one heading marker.
    """
    return (
        _CODE_FENCE in content
        or _SUBSECTION_MARKER in content
        or (len(content) > COMPLEX_LENGTH and _HEADING_MARKER in content)
    )


def needs_expansion(content: str) -> bool:
    """Whether content should be expanded into the synthetic scaffold.

    True when the content is not complex and is short, contains bare links,
    or has no heading marker at all.
    """
    if is_complex(content):
        return False
    return (
        len(content) < SHORT_LENGTH
        or any(marker in content for marker in _LINK_MARKERS)
        or _HEADING_MARKER not in content
    )


def is_simple_idea(content: str) -> bool:
    """Whether an idea is short and unstructured enough to be one topic."""
    return (
        len(content) < SIMPLE_IDEA_LENGTH
        and _CODE_FENCE not in content
        and _SUBSECTION_MARKER not in content
    )


def _split_before(pattern: re.Pattern[str], text: str) -> list[str]:
    parts = pattern.split(text)
    # A match at offset zero yields an empty leading part
    if parts and not parts[0]:
        parts = parts[1:]
    return parts or [text]


def split_sections(content: str) -> list[str]:
    """Split content before every top-level heading line."""
    return _split_before(_TOP_LEVEL_HEADING, content)


def split_subtopics(body: str) -> list[str]:
    """Split a section body before sentences that open a sub-topic."""
    return _split_before(_SUBTOPIC_MARKER, body)


def _section_units(section: str) -> list[TopicUnit]:
    heading, _, rest = section.partition("\n")
    heading = heading.strip()
    body = rest.strip()
    if not body:
        return []

    subtopics = split_subtopics(body)
    if len(subtopics) == 1:
        return [TopicUnit(heading=heading, body=body)]

    return [
        TopicUnit(heading=heading, body=sub.strip()) for sub in subtopics if sub.strip()
    ]


def classify(
    content: str, *, detector: Callable[[str], StackProfile] = detect_stack
) -> Classification:
    """Classify an idea document into ordered topic units.

    Args:
        content: Raw idea document text.
        detector: Builds the StackProfile used when a scaffold is synthesized.

    Returns:
        Classification holding the topic units in document order and whether
        the content needed expansion. Never raises; content without any
        structure degrades to a single unit.
    """
    expand = needs_expansion(content)
    sections = split_sections(content)

    if len(sections) == 1 and not sections[0].strip().startswith(_HEADING_MARKER):
        if expand:
            scaffold = render_scaffold(content, detector(content))
            return Classification(
                topics=(TopicUnit(heading="", body=scaffold),),
                needs_expansion=True,
            )
        return Classification(
            topics=(TopicUnit(heading="", body=content.strip()),),
            needs_expansion=False,
        )

    topics = [unit for section in sections for unit in _section_units(section)]
    return Classification(topics=tuple(topics), needs_expansion=expand)
