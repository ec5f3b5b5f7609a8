"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/log_utils.py
Run log: every INFO event of the `dupelink` logger tree goes to the console
and is appended to the log file at the scan root, one timestamped line each.
"""
import logging
import sys
from pathlib import Path
from typing import Callable

from dupelink.exceptions import StartupError

LOG_FORMAT = "[%(asctime)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
PACKAGE_LOGGER = "dupelink"


def configure_run_logging(log_path: Path, console: bool = True) -> Callable[[], None]:
    """
    Attach the console and log-file handlers to the package logger.

    Returns a teardown callable that detaches and closes the handlers again.
    Raises StartupError if the log file cannot be opened.
    """
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    try:
        file_handler = logging.FileHandler(str(log_path), mode="a", encoding="utf-8", errors="backslashreplace")
    except OSError as e:
        raise StartupError(f"Cannot create log file {log_path}: {e}") from e
    file_handler.setFormatter(formatter)
    file_handler.setLevel(logging.INFO)

    handlers = [file_handler]
    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        console_handler.setLevel(logging.INFO)
        handlers.append(console_handler)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    previous_level = package_logger.level
    previous_propagate = package_logger.propagate
    package_logger.setLevel(logging.INFO)
    package_logger.propagate = False
    for handler in handlers:
        package_logger.addHandler(handler)

    def teardown() -> None:
        for h in handlers:
            package_logger.removeHandler(h)
            h.close()
        package_logger.setLevel(previous_level)
        package_logger.propagate = previous_propagate

    return teardown
