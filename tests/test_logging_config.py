"""
Tests for logging_config module.
"""

import logging
from datetime import datetime, time, timedelta

import pytest

from src.infra.logging_config import LOGGER_NAME, DailyFileHandler, daily_log_path, setup_logging


@pytest.fixture(autouse=True)
def clean_logger():
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    yield
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()


class TestDailyFileHandler:
    """Tests for DailyFileHandler class."""

    def test_handler_creates_log_directory(self, tmp_path):
        log_dir = tmp_path / "new_logs"
        assert not log_dir.exists()

        handler = DailyFileHandler(log_dir=str(log_dir))
        assert log_dir.exists()
        handler.close()

    def test_handler_emits_record(self, tmp_path):
        handler = DailyFileHandler(log_dir=str(tmp_path))
        handler.setFormatter(logging.Formatter('%(message)s'))

        record = logging.LogRecord(
            name="test",
            level=logging.INFO,
            pathname="",
            lineno=0,
            msg="Test message",
            args=(),
            exc_info=None
        )
        handler.emit(record)
        handler.close()

        log_files = list(tmp_path.glob("storyweaver_*.log"))
        assert len(log_files) == 1
        assert "Test message" in log_files[0].read_text()

    def test_file_not_created_before_first_record(self, tmp_path):
        handler = DailyFileHandler(log_dir=str(tmp_path))
        handler.close()

        assert list(tmp_path.iterdir()) == []

    def test_record_from_next_day_goes_to_new_file(self, tmp_path):
        handler = DailyFileHandler(log_dir=str(tmp_path))
        handler.setFormatter(logging.Formatter('%(message)s'))
        today = handler.day
        tomorrow = today + timedelta(days=1)

        first = logging.makeLogRecord({"msg": "before midnight"})
        second = logging.makeLogRecord({"msg": "after midnight"})
        second.created = datetime.combine(tomorrow, time(0, 0, 5)).timestamp()
        handler.emit(first)
        handler.emit(second)
        handler.close()

        assert handler.day == tomorrow
        assert "before midnight" in daily_log_path(tmp_path, today).read_text()
        assert daily_log_path(tmp_path, tomorrow).read_text().strip() == "after midnight"


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_returns_named_logger(self, tmp_path):
        logger = setup_logging("INFO", log_dir=str(tmp_path))

        assert isinstance(logger, logging.Logger)
        assert logger.name == "storyweaver"

    def test_sets_correct_log_level(self):
        assert setup_logging("DEBUG", log_dir=None).level == logging.DEBUG
        assert setup_logging("WARNING", log_dir=None).level == logging.WARNING

    def test_console_only_without_log_dir(self):
        logger = setup_logging("INFO", log_dir=None)

        assert len(logger.handlers) == 1
        assert not isinstance(logger.handlers[0], logging.FileHandler)

    def test_file_handler_with_log_dir(self, tmp_path):
        logger = setup_logging("INFO", log_dir=str(tmp_path))

        assert any(isinstance(h, DailyFileHandler) for h in logger.handlers)

    def test_reconfiguration_does_not_duplicate_handlers(self):
        setup_logging("INFO", log_dir=None)
        logger = setup_logging("INFO", log_dir=None)

        assert len(logger.handlers) == 1

    def test_prevents_propagation(self):
        assert setup_logging("INFO", log_dir=None).propagate is False
