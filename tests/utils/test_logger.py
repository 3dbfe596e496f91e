"""Unit tests for logger setup."""

import logging
from pathlib import Path

from boxoffice.utils import logger as logger_module
from boxoffice.utils.logger import (
    _LOGGERS_CACHE,
    _get_log_file_path,
    configure_logging,
    setup_logger,
)


class TestSetupLogger:
    @staticmethod
    def test_returns_logger(tmp_path: Path) -> None:
        logger = setup_logger("test.boxoffice.unique1", log_dir=tmp_path)
        assert isinstance(logger, logging.Logger)
        assert logger.name == "test.boxoffice.unique1"
        assert logger.propagate is False

    @staticmethod
    def test_console_and_file_handlers(tmp_path: Path) -> None:
        logger = setup_logger("test.boxoffice.unique2", log_dir=tmp_path)
        kinds = {type(h) for h in logger.handlers}
        assert logging.FileHandler in kinds
        assert logging.StreamHandler in kinds

    @staticmethod
    def test_level_set(tmp_path: Path) -> None:
        logger = setup_logger("test.boxoffice.unique3", level=logging.DEBUG, log_dir=tmp_path)
        assert logger.level == logging.DEBUG

    @staticmethod
    def test_cache_returns_same_instance(tmp_path: Path) -> None:
        first = setup_logger("test.boxoffice.cached", log_dir=tmp_path)
        second = setup_logger("test.boxoffice.cached", log_dir=tmp_path)
        assert first is second
        assert "test.boxoffice.cached" in _LOGGERS_CACHE


class TestLogFilePath:
    @staticmethod
    def test_dated_filename(tmp_path: Path) -> None:
        path = _get_log_file_path("boxoffice.api", tmp_path / "nested")
        assert path.parent == tmp_path / "nested"
        assert path.parent.is_dir()
        assert path.name.startswith("boxoffice_api_")
        assert path.suffix == ".log"


class TestConfigureLogging:
    @staticmethod
    def test_idempotent() -> None:
        configure_logging()
        configure_logging()
        assert logger_module._STRUCTLOG_CONFIGURED is True
