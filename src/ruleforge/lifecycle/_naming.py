"""Naming utilities for draft files: slugs, sequence numbers, filenames."""

import re
from typing import Final

DRAFT_EXTENSION: Final = "yaml"

SEQUENCE_STEP: Final = 100
"""Gap between generated sequence numbers, leaving room for manual inserts."""

SEQUENCE_WIDTH: Final = 3
"""Minimum number of digits in a sequence prefix."""

_SLUG_INVALID_RUNS = re.compile(r"[^a-z0-9]+")
_IDEA_EXTENSION = re.compile(r"\.(md|yaml)$")


def slugify(text: str) -> str:
    """Convert a title to a filename slug.

    Args:
        text: Title to slugify.

    Returns:
        Lowercase slug with runs of other characters collapsed to one hyphen.

    Example:
        >>> slugify("Technical Architecture")
        'technical-architecture'
    """
    slug = _SLUG_INVALID_RUNS.sub("-", text.lower()).strip("-")
    return slug or "untitled"


def sequence_number(ordinal: int) -> int:
    """Sequence number for the topic at a zero-based position."""
    if ordinal < 0:
        msg = f"Invalid ordinal: {ordinal} (expected >= 0)"
        raise ValueError(msg)
    return (ordinal + 1) * SEQUENCE_STEP


def format_sequence(sequence: int) -> str:
    """Zero-pad a sequence number to three digits."""
    return str(sequence).zfill(SEQUENCE_WIDTH)


def draft_filename(sequence: int, title: str) -> str:
    """Generate the `NNN-slug.yaml` filename for a draft.

    Example:
        >>> draft_filename(200, "Frontend Design")
        '200-frontend-design.yaml'
    """
    return f"{format_sequence(sequence)}-{slugify(title)}.{DRAFT_EXTENSION}"


def app_name_from_idea(idea_file: str) -> str:
    """Derive the application name used in draft descriptions.

    Example:
        >>> app_name_from_idea("todo_app-v2.md")
        'todo app v2'
    """
    name = _IDEA_EXTENSION.sub("", idea_file)
    return name.replace("-", " ").replace("_", " ")
