"""
Logging utilities for podcomplete.

Diagnostics are written to stderr. Stdout belongs to the completion protocol
read by the shell, so nothing but suggestions and the directive line may go there.
"""

import json
import logging
import os
import sys
import traceback
from typing import Optional

# Accepted values of --log-level
LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL
}

LOG_FORMATS = ("text", "json")

CONSOLE_FORMAT = "podcomplete: %(levelname)s: %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger("podcomplete")


class JsonFormatter(logging.Formatter):
    """One JSON document per record, for output read by other tools."""

    def format(self, record):
        document = {
            "timestamp": self.formatTime(record),
            "logger": record.name,
            "level": record.levelname,
            "message": record.getMessage(),
            "module": record.module,
            "line": record.lineno,
        }
        if record.exc_info:
            exc_type, exc_value, exc_traceback = record.exc_info
            document["exception"] = {
                "type": exc_type.__name__,
                "value": str(exc_value),
                "traceback": traceback.format_tb(exc_traceback),
            }
        return json.dumps(document)


def _file_handler(path: str, formatter: logging.Formatter) -> logging.FileHandler:
    directory = os.path.dirname(os.path.abspath(path))
    if directory:
        os.makedirs(directory, exist_ok=True)
    handler = logging.FileHandler(path)
    handler.setFormatter(formatter)
    return handler


def configure_logging(
    level: str = "warning",
    log_file: Optional[str] = None,
    quiet: bool = False,
    verbose: bool = False,
    json_format: bool = False
) -> None:
    """
    Configure the ``podcomplete`` logger

    Args:
        level: Log level (debug, info, warning, error, critical)
        log_file: Also write records to this file
        quiet: No console handler at all; only errors reach the log file
        verbose: Debug level with timestamps on the console
        json_format: Write JSON documents instead of text lines
    """
    if verbose:
        level = "debug"
    elif quiet and level in ("info", "warning"):
        level = "error"

    log_level = LOG_LEVELS.get(level.lower(), logging.WARNING)
    logger.setLevel(log_level)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    if json_format:
        console_formatter = file_formatter = JsonFormatter()
    else:
        console_formatter = logging.Formatter(FILE_FORMAT if verbose else CONSOLE_FORMAT)
        file_formatter = logging.Formatter(FILE_FORMAT)

    if not quiet:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(console_formatter)
        console_handler.setLevel(log_level)
        logger.addHandler(console_handler)

    if log_file:
        file_handler = _file_handler(log_file, file_formatter)
        file_handler.setLevel(log_level)
        logger.addHandler(file_handler)

    logger.debug(f"Logging configured: level={level}, log_file={log_file}, quiet={quiet}, json_format={json_format}")

