"""Unit tests for logging configuration."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from datetime import datetime, timedelta
from pathlib import Path
from unittest.mock import patch

import pytest

from crd_browser.logging.config import (
    HANDLER_NAME,
    RETENTION_DAYS,
    _cleanup_old_logs,
    _setup_file_logging,
    configure_logging,
    get_logger,
)


@pytest.fixture(autouse=True)
def _reset_root_logger() -> Iterator[None]:
    """Remove handlers added by configure_logging after each test."""
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    yield
    for handler in root.handlers:
        if handler not in original_handlers:
            handler.close()
    root.handlers = original_handlers
    root.setLevel(original_level)


def _installed_handlers() -> list[logging.Handler]:
    return [h for h in logging.getLogger().handlers if h.get_name() == HANDLER_NAME]


def _age(path: Path, days: int) -> None:
    old_time = (datetime.now() - timedelta(days=days)).timestamp()
    os.utime(path, (old_time, old_time))


@pytest.mark.unit
class TestCleanupOldLogs:
    """Tests for _cleanup_old_logs function."""

    def test_returns_early_when_log_dir_missing(self, tmp_path: Path) -> None:
        with patch("crd_browser.logging.config.LOG_DIR", tmp_path / "nonexistent"):
            _cleanup_old_logs()

    def test_deletes_old_log_files(self, tmp_path: Path) -> None:
        """Rotated files older than RETENTION_DAYS are removed."""
        log_file = tmp_path / "crdb.log.1"
        log_file.write_text("old log data")
        _age(log_file, RETENTION_DAYS + 5)

        with patch("crd_browser.logging.config.LOG_DIR", tmp_path):
            _cleanup_old_logs()

        assert not log_file.exists()

    def test_keeps_recent_and_unrelated_files(self, tmp_path: Path) -> None:
        recent = tmp_path / "crdb.log"
        recent.write_text("recent log data")
        unrelated = tmp_path / "other.log"
        unrelated.write_text("not ours")
        _age(unrelated, RETENTION_DAYS + 5)

        with patch("crd_browser.logging.config.LOG_DIR", tmp_path):
            _cleanup_old_logs()

        assert recent.exists()
        assert unrelated.exists()

    def test_ignores_os_errors(self, tmp_path: Path) -> None:
        log_file = tmp_path / "crdb.log.1"
        log_file.write_text("data")
        _age(log_file, RETENTION_DAYS + 5)

        with (
            patch("crd_browser.logging.config.LOG_DIR", tmp_path),
            patch.object(Path, "unlink", side_effect=OSError("permission denied")),
        ):
            _cleanup_old_logs()


@pytest.mark.unit
class TestSetupFileLogging:
    """Tests for _setup_file_logging function."""

    def test_creates_log_directory_and_handler(self, tmp_path: Path) -> None:
        log_dir = tmp_path / "logs"

        with (
            patch("crd_browser.logging.config.LOG_DIR", log_dir),
            patch("crd_browser.logging.config.LOG_FILE", log_dir / "crdb.log"),
        ):
            _setup_file_logging()

        assert log_dir.exists()
        assert len(_installed_handlers()) == 1


@pytest.mark.unit
class TestConfigureLogging:
    """Tests for configure_logging function."""

    @pytest.mark.parametrize(
        ("kwargs", "level"),
        [
            ({}, logging.WARNING),
            ({"verbose": True}, logging.INFO),
            ({"debug": True}, logging.DEBUG),
            ({"verbose": True, "debug": True}, logging.DEBUG),
        ],
    )
    def test_console_level(self, kwargs: dict[str, bool], level: int) -> None:
        configure_logging(log_to_file=False, **kwargs)

        handlers = _installed_handlers()
        assert len(handlers) == 1
        assert handlers[0].level == level

    def test_json_output(self) -> None:
        configure_logging(json_output=True, log_to_file=False)

        assert len(_installed_handlers()) == 1

    def test_repeated_calls_do_not_stack_handlers(self) -> None:
        configure_logging(log_to_file=False)
        configure_logging(verbose=True, log_to_file=False)

        handlers = _installed_handlers()
        assert len(handlers) == 1
        assert handlers[0].level == logging.INFO

    def test_file_logging_adds_file_handler(self, isolated_home: Path) -> None:
        configure_logging()

        assert len(_installed_handlers()) == 2
        assert (isolated_home / "state").exists()

    @pytest.mark.parametrize(("debug", "level"), [(False, logging.WARNING), (True, logging.DEBUG)])
    def test_httpx_logger_level(self, debug: bool, level: int) -> None:
        configure_logging(debug=debug, log_to_file=False)

        assert logging.getLogger("httpx").level == level


@pytest.mark.unit
class TestGetLogger:
    """Tests for get_logger function."""

    def test_returns_logger(self) -> None:
        assert get_logger("test") is not None

    def test_binds_initial_context(self) -> None:
        logger = get_logger("test", component="store", resource="pods")
        assert logger is not None
