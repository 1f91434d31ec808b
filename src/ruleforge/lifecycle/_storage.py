# pyright: reportAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""Stage directory layout and draft file I/O.

Lifecycle stages are explicit on in-memory records; this module is the thin
boundary that maps stages to directories and records to YAML files. All
writes use an atomic temp-file-and-rename pattern.
"""

import re
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final

import yaml

from ruleforge.exceptions import DraftParseError, LifecycleIOError
from ruleforge.lifecycle._models import (
    DRAFT_EXTENSION,
    DraftRecord,
    DraftStatus,
    LifecycleStage,
)

__all__ = [
    "StageLayout",
    "atomic_write",
    "clear_stage",
    "dump_draft",
    "list_drafts",
    "load_draft",
    "parse_draft",
    "write_draft",
]

_SEQUENCE_PREFIX = re.compile(r"^(\d+)-")

_DEFAULT_DOCS_DIR: Final = "docs"
_DEFAULT_RULES_DIR: Final = ".cursor/rules"


@dataclass(frozen=True, slots=True)
class StageLayout:
    """Maps lifecycle stages to directories under a project base directory.

    Attributes:
        base_dir: Project root.
        docs_dir: Directory (relative to base_dir) holding ideas and drafts.
        rules_dir: Directory (relative to base_dir) receiving final rules.
    """

    base_dir: Path
    docs_dir: str = _DEFAULT_DOCS_DIR
    rules_dir: str = _DEFAULT_RULES_DIR

    def directory(self, stage: LifecycleStage) -> Path:
        """Directory holding the records of a stage."""
        if stage is LifecycleStage.FINAL_RULE:
            return self.base_dir / self.rules_dir
        if stage is LifecycleStage.IDEA:
            return self.base_dir / self.docs_dir / "ideas"
        return self.base_dir / self.docs_dir / stage.value

    def relative(self, stage: LifecycleStage) -> str:
        """Stage directory relative to the base directory, for messages."""
        return self.directory(stage).relative_to(self.base_dir).as_posix()

    def ensure(self) -> None:
        """Create every stage directory that does not exist yet."""
        for stage in LifecycleStage:
            _ = self.directory(stage).mkdir(parents=True, exist_ok=True)


# =============================================================================
# Low-level I/O
# =============================================================================


def atomic_write(path: Path, content: str) -> None:
    """Write text to a file atomically.

    Args:
        path: Destination file path.
        content: Text to write.

    Raises:
        LifecycleIOError: If the write fails.
    """
    temp_path: Path | None = None
    try:
        _ = path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            delete=False,
            suffix=".tmp",
            encoding="utf-8",
        ) as f:
            _ = f.write(content)
            temp_path = Path(f.name)

        _ = temp_path.replace(path)

    except OSError as e:
        if temp_path is not None:
            temp_path.unlink(missing_ok=True)
        msg = f"Failed to write file: {e}"
        raise LifecycleIOError(msg, path=path, operation="write", cause=e) from e


class _DraftDumper(yaml.SafeDumper):
    """Safe dumper that writes multi-line strings as literal blocks."""


def _represent_str(dumper: yaml.SafeDumper, data: str) -> yaml.ScalarNode:
    if "\n" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", data)


_DraftDumper.add_representer(str, _represent_str)


# =============================================================================
# Draft serialization
# =============================================================================


def dump_draft(record: DraftRecord) -> str:
    """Serialize a draft record to YAML text."""
    return yaml.dump(
        record.to_dict(),
        Dumper=_DraftDumper,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )


def _sequence_from_filename(filename: str) -> int:
    match = _SEQUENCE_PREFIX.match(filename)
    return int(match.group(1)) if match else 0


def parse_draft(
    text: str,
    *,
    path: Path,
    stage: LifecycleStage,
) -> DraftRecord:
    """Parse YAML draft text into a DraftRecord.

    Args:
        text: YAML document text.
        path: Path the text was read from (for errors and the sequence).
        stage: Stage the file belongs to.

    Returns:
        The parsed record. Missing optional fields take their defaults.

    Raises:
        DraftParseError: If the text cannot be loaded or is not a YAML mapping.
    """
    try:
        data: Any = yaml.safe_load(text)  # pyright: ignore[reportExplicitAny]
    except (yaml.YAMLError, ValueError, TypeError, RecursionError) as e:
        # Invalid timestamps surface as ValueError, deep nesting as RecursionError
        msg = f"Invalid draft YAML in {path.name}: {e}"
        raise DraftParseError(msg, path=path, cause=e) from e

    if not isinstance(data, dict):
        msg = f"Expected a YAML mapping in {path.name}, got {type(data).__name__}"
        raise DraftParseError(msg, path=path)

    try:
        version = int(data.get("version", 1))
    except (TypeError, ValueError) as e:
        msg = f"Invalid draft version in {path.name}: {data.get('version')!r}"
        raise DraftParseError(msg, path=path, cause=e) from e

    content = data.get("content")
    return DraftRecord(
        title=str(data.get("title") or ""),
        description=str(data.get("description") or ""),
        content="" if content is None else str(content),
        last_updated=str(data.get("last_updated") or ""),
        stage=stage,
        sequence=_sequence_from_filename(path.name),
        status=DraftStatus.DRAFT,
        version=version,
    )


def load_draft(path: Path, stage: LifecycleStage) -> DraftRecord:
    """Read and parse a draft file.

    Raises:
        LifecycleIOError: If the file cannot be read.
        DraftParseError: If the content is not a draft mapping.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        msg = f"Failed to read draft: {e}"
        raise LifecycleIOError(msg, path=path, operation="read", cause=e) from e
    return parse_draft(text, path=path, stage=stage)


def write_draft(layout: StageLayout, record: DraftRecord) -> Path:
    """Write a draft record into its stage directory, replacing any same name.

    Returns:
        Path of the written file.
    """
    if not record.stage.is_draft:
        msg = f"Cannot write a draft record at stage {record.stage.value!r}"
        raise ValueError(msg)
    path = layout.directory(record.stage) / record.filename
    atomic_write(path, dump_draft(record))
    return path


def list_drafts(layout: StageLayout, stage: LifecycleStage) -> list[Path]:
    """List draft files of a stage, sorted by name."""
    directory = layout.directory(stage)
    if not directory.is_dir():
        return []
    return sorted(
        p for p in directory.glob(f"*.{DRAFT_EXTENSION}") if p.is_file()
    )


def clear_stage(layout: StageLayout, stage: LifecycleStage) -> int:
    """Delete every file in a stage directory.

    The idea stage holds author-maintained input and is never cleared.

    Returns:
        Number of files removed.

    Raises:
        ValueError: If asked to clear the idea stage.
        LifecycleIOError: If a file cannot be removed.
    """
    if stage is LifecycleStage.IDEA:
        msg = "The idea stage is read-only and cannot be cleared"
        raise ValueError(msg)

    directory = layout.directory(stage)
    if not directory.is_dir():
        return 0

    removed = 0
    for path in sorted(directory.iterdir()):
        if not path.is_file():
            continue
        try:
            path.unlink()
        except OSError as e:
            msg = f"Failed to remove file: {e}"
            raise LifecycleIOError(msg, path=path, operation="delete", cause=e) from e
        removed += 1
    return removed
