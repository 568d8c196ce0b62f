"""Logger setup: Rich console output plus a private append-only log file."""

import logging
import os
from pathlib import Path

from rich.logging import RichHandler

from popos_postinstall.config import Config
from popos_postinstall.ui import console

LOGGER_NAME: str = "popos_postinstall"
LOG_FORMAT: str = "[%(asctime)s] [%(levelname)s] %(message)s"
LOG_DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"
LOG_FILE_MODE: int = 0o600


def get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


def prepare_log_file(log_file: Path) -> Path:
    """
    Make sure the log file exists, is private and writable.

    Must run before any install step so command output can be appended to it.
    """
    log_file = Path(log_file)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    log_file.touch(exist_ok=True)
    os.chmod(str(log_file), LOG_FILE_MODE)
    if not os.access(str(log_file), os.W_OK):
        raise PermissionError(f"Log file {log_file} is not writable")
    return log_file


def setup_logger(config: Config) -> logging.Logger:
    """Set up and configure the logger."""
    log_file = prepare_log_file(config.log_file)

    logger = get_logger()
    logger.setLevel(logging.DEBUG)

    # Remove any existing handlers
    for h in logger.handlers[:]:
        logger.removeHandler(h)
        h.close()

    console_handler = RichHandler(
        console=console, rich_tracebacks=True, show_path=False
    )
    console_handler.setLevel(logging.DEBUG if config.verbose else logging.INFO)
    logger.addHandler(console_handler)

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
    logger.addHandler(file_handler)

    logger.debug(f"Logging to {log_file}")
    return logger
