"""
Logging configuration for the Document Print Service.

Log Format:
    2026-10-18 10:15:30 [INFO    ] [MainThread] docprint_service.app - Application starting
    2026-10-18 10:15:31 [INFO    ] [Thread-3] docprint_service.executor - Running browser command: ...

Usage:
    from docprint_service.logging_config import setup_logging

    setup_logging(log_level='INFO', log_file='printer.log')
"""

import logging
import sys
import threading
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = '%(asctime)s [%(levelname)-8s] [%(thread_name)s] %(name)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

MAX_LOG_BYTES = 5 * 1024 * 1024
BACKUP_COUNT = 3


class ThreadContextFilter(logging.Filter):
    """Adds the current thread name to every record (one thread per request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.thread_name = threading.current_thread().name
        return True


def setup_logging(log_level: Union[int, str] = logging.INFO,
                  log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the root logger: console always, rotating file when log_file is set.

    Safe to call more than once; previously installed handlers are replaced.
    """
    root = logging.getLogger()
    root.setLevel(log_level)

    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    context_filter = ThreadContextFilter()

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    console.addFilter(context_filter)
    root.addHandler(console)

    if log_file:
        try:
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                log_file, maxBytes=MAX_LOG_BYTES, backupCount=BACKUP_COUNT, encoding='utf-8'
            )
        except OSError as e:
            root.warning("Could not open log file %s, logging to console only: %s", log_file, e)
        else:
            file_handler.setFormatter(formatter)
            file_handler.addFilter(context_filter)
            root.addHandler(file_handler)

    # werkzeug request lines are noise at INFO
    logging.getLogger('werkzeug').setLevel(logging.WARNING)

    return root
