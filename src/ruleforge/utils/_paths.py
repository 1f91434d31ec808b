from pathlib import Path

from dulwich.errors import NotGitRepository
from dulwich.repo import Repo

PROJECT_CONFIG_FILENAME = ".ruleforge.toml"
"""Per-project configuration file, looked up at the project root."""

RULEFORGE_DIRNAME = ".ruleforge"


def get_worktree_root(start: Path | None = None) -> Path:
    """Get the root directory of the Git worktree containing `start`.

    Raises:
        NotGitRepository: If `start` is not inside a Git worktree.
    """
    repo = Repo.discover(str(start) if start is not None else ".")
    # repo.path is the working directory for non-bare repositories
    path_str = repo.path.decode() if isinstance(repo.path, bytes) else repo.path
    return Path(path_str)


def _is_project_root(path: Path) -> bool:
    return (path / PROJECT_CONFIG_FILENAME).is_file() or (
        path / "docs" / "ideas"
    ).is_dir()


def find_project_root(start: Path | None = None) -> Path:
    """Find the project root for `start` (default: the current directory).

    The nearest ancestor holding `.ruleforge.toml` or `docs/ideas/` wins.
    Failing that, the enclosing Git worktree root is used, and failing that,
    `start` itself.

    Args:
        start: Directory to search from.

    Returns:
        Absolute project root.
    """
    origin = (start or Path.cwd()).resolve()
    for candidate in (origin, *origin.parents):
        if _is_project_root(candidate):
            return candidate

    try:
        return get_worktree_root(origin).resolve()
    except NotGitRepository:
        return origin


def get_ruleforge_dir(base_dir: Path) -> Path:
    """Get the path to the .ruleforge/ state directory of a project."""
    return base_dir / RULEFORGE_DIRNAME


def get_log_dir(base_dir: Path) -> Path:
    """Get the path to the logs/ directory inside .ruleforge/."""
    return get_ruleforge_dir(base_dir) / "logs"


def get_cli_log_file(base_dir: Path) -> Path:
    """Get the path to the CLI log file inside .ruleforge/logs/."""
    return get_log_dir(base_dir) / "cli.log"
