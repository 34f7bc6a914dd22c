"""
Logging configuration module.

Console output plus one log file per calendar day:
<LOG_DIR>/storyweaver_YYYYMMDD_<START_HHMMSS>.log
"""

import logging
import os
from datetime import date, datetime
from pathlib import Path
from typing import Optional

LOGGER_NAME = "storyweaver"

# Shared by every handler so a restart is the only thing that changes HHMMSS
PROCESS_STARTED = datetime.now()


def daily_log_path(log_dir: Path, day: date, started: datetime = PROCESS_STARTED) -> Path:
    return log_dir / f"{LOGGER_NAME}_{day:%Y%m%d}_{started:%H%M%S}.log"


class DailyFileHandler(logging.FileHandler):
    """
    File handler that writes each record into the file for the day it was
    created, opening the next day's file on the first record past midnight.
    """

    def __init__(self, log_dir: str = "logs", encoding: str = "utf-8"):
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.day = date.today()
        super().__init__(daily_log_path(self.log_dir, self.day), mode="a", encoding=encoding, delay=True)

    def emit(self, record: logging.LogRecord) -> None:
        record_day = datetime.fromtimestamp(record.created).date()
        if record_day != self.day:
            self._switch_to(record_day)
        super().emit(record)

    def _switch_to(self, day: date) -> None:
        self.acquire()
        try:
            if self.stream is not None:
                self.stream.close()
                self.stream = None
            self.day = day
            # FileHandler reopens baseFilename lazily on the next emit
            self.baseFilename = os.path.abspath(daily_log_path(self.log_dir, day))
        finally:
            self.release()


def setup_logging(log_level: str = "INFO", log_dir: Optional[str] = "logs") -> logging.Logger:
    """
    Configure the storyweaver logger and return it.

    Args:
        log_level (str): Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir (Optional[str]): Directory for daily log files. None disables
            the file handler (console only).

    Returns:
        logging.Logger: Configured logger instance
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)

    # Avoid duplicate lines through the root logger (uvicorn installs its own)
    logger.propagate = False

    if logger.handlers:
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()

    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    console_handler = logging.StreamHandler()
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_dir:
        file_handler = DailyFileHandler(log_dir=log_dir)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
        logger.info(f"Logging started - level: {log_level}, file: {file_handler.baseFilename}")
    else:
        logger.info(f"Logging started - level: {log_level}, console only")

    return logger
