import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

import colorlog

from pooled_sql.config import LoggingConfig, config

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE_NAME = "pooled_sql.log"

# Executor state tracing is DEBUG-level; keep driver chatter out of it
QUIET_LOGGERS = ("asyncio", "aiosqlite")


def _console_formatter(use_color: bool) -> logging.Formatter:
    if not use_color:
        return logging.Formatter(LOG_FORMAT)
    return colorlog.ColoredFormatter(
        "%(log_color)s" + LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        log_colors={
            'DEBUG': 'cyan',
            'INFO': 'green',
            'WARNING': 'yellow',
            'ERROR': 'red',
            'CRITICAL': 'red,bg_white',
        }
    )


def setup_logging(logging_config: Optional[LoggingConfig] = None) -> None:
    """
    Route pooled_sql logs to the console and a rotating file.

    Args:
        logging_config: Settings to apply; the process-wide config.logging when omitted
    """
    logging_config = logging_config or config.logging

    log_dir = Path(logging_config.log_dir)
    os.makedirs(log_dir, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging_config.level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(_console_formatter(logging_config.use_color))
    root_logger.addHandler(console_handler)

    file_handler = RotatingFileHandler(
        log_dir / LOG_FILE_NAME,
        maxBytes=logging_config.max_size_mb * 1024 * 1024,
        backupCount=logging_config.backup_count
    )
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(file_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
