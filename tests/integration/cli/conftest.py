from collections.abc import Callable

import pytest
from rich.console import Console

from ruleforge.cli import create_app
from ruleforge.config import ENV_OVERRIDES

from tests.conftest import RuleforgeProject


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (*ENV_OVERRIDES, "RULEFORGE_DEBUG"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def ruleforge_cli(project: RuleforgeProject, console: Console) -> Callable[..., int]:
    """Run the CLI against the test project and return the exit code.

    Global options go through the meta app, so the project root is always
    passed explicitly.
    """
    app = create_app(console=console, error_console=console)

    def _run(*args: str) -> int:
        try:
            app.meta(["--project-root", str(project.root), *args])
        except SystemExit as e:
            return e.code if isinstance(e.code, int) else 1
        else:
            return 0

    return _run
