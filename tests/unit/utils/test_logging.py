"""Unit tests for logging utilities."""

import json
import logging
from pathlib import Path

import pytest
from pyfakefs.fake_filesystem import FakeFilesystem

from ruleforge.utils import create_cli_logger
from ruleforge.utils._logging import (
    _create_logger,
    _get_log_level,
    _log_level_from_string,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("RULEFORGE_DEBUG", raising=False)
    monkeypatch.delenv("RULEFORGE_LOG_LEVEL", raising=False)


class TestCreateLogger:
    def test_creates_log_directory_if_missing(self, fs: FakeFilesystem) -> None:
        log_path = Path("/logs/test.log")
        assert not log_path.parent.exists()

        _ = _create_logger(str(log_path))

        assert log_path.parent.exists()

    def test_default_format_is_json(self, fs: FakeFilesystem) -> None:
        logger = _create_logger("/logs/test.log")

        logger.info("test_event", key="value")

        entry = json.loads(Path("/logs/test.log").read_text().splitlines()[0])
        assert entry["event"] == "test_event"
        assert entry["key"] == "value"
        assert entry["level"] == "info"
        assert "timestamp" in entry

    def test_text_format(self, fs: FakeFilesystem) -> None:
        logger = _create_logger("/logs/test.log", log_format="text")

        logger.info("test_event", key="value")

        log_content = Path("/logs/test.log").read_text()
        assert "test_event" in log_content
        assert "key=value" in log_content

    def test_filters_below_level(self, fs: FakeFilesystem) -> None:
        logger = _create_logger("/logs/test.log", log_level=logging.WARNING)

        logger.info("quiet")
        logger.warning("loud")

        log_content = Path("/logs/test.log").read_text()
        assert "quiet" not in log_content
        assert "loud" in log_content


class TestLogLevels:
    def test_default_is_info(self) -> None:
        assert _get_log_level() == logging.INFO

    def test_debug_env_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RULEFORGE_DEBUG", "1")
        monkeypatch.setenv("RULEFORGE_LOG_LEVEL", "error")

        assert _get_log_level() == logging.DEBUG

    def test_level_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RULEFORGE_LOG_LEVEL", "warning")

        assert _get_log_level() == logging.WARNING

    def test_unknown_string_is_info(self) -> None:
        assert _log_level_from_string("chatty") == logging.INFO

    def test_respect_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RULEFORGE_DEBUG", "1")

        assert _log_level_from_string("error") == logging.ERROR
        assert _log_level_from_string("error", respect_env=True) == logging.DEBUG


class TestCreateCliLogger:
    def test_writes_to_default_file_with_command(self, fs: FakeFilesystem) -> None:
        logger = create_cli_logger(Path("/project"), command="draft")

        logger.info("cli_start")

        log_file = Path("/project/.ruleforge/logs/cli.log")
        entry = json.loads(log_file.read_text().splitlines()[0])
        assert entry["event"] == "cli_start"
        assert entry["command"] == "draft"

    def test_relative_log_file_resolves_against_base(
        self, fs: FakeFilesystem
    ) -> None:
        logger = create_cli_logger(Path("/project"), log_file="logs/run.log")

        logger.info("hello")

        assert Path("/project/logs/run.log").exists()
        assert not Path("/project/.ruleforge").exists()

    def test_level_parameter(self, fs: FakeFilesystem) -> None:
        logger = create_cli_logger(Path("/project"), level="error")

        logger.warning("dropped")
        logger.error("kept")

        log_content = Path("/project/.ruleforge/logs/cli.log").read_text()
        assert "dropped" not in log_content
        assert "kept" in log_content
