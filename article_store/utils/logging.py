"""Logging configuration utilities.

Provides a single function to initialize the root logger with a consistent
format for the command line tool and for build scripts that import the
package.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Literal, Optional

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
LOG_OUTPUT = os.environ.get("LOG_OUTPUT", "stderr").lower()
LOG_FILE_PATH = os.environ.get("LOG_FILE_PATH", "logs/article-store.log")
LOG_FORMAT = os.environ.get("LOG_FORMAT", "text").lower()

LogOutput = Literal["stderr", "file", "both"]
LogFormat = Literal["text", "json"]

_TEXT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


class JsonFormatter(logging.Formatter):
    """One JSON object per line; message text is escaped by ``json.dumps``."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def configure_logging(
    level: str | int | None = None,
    output: LogOutput | None = None,
    file_path: str | None = None,
    log_format: LogFormat | None = None,
    module: Optional[str] = None,
) -> None:
    """Configure application logging.

    Parameters
    ----------
    level:
        Logging level as a string (e.g., "INFO") or numeric value.
    output:
        Logging output destination: "stderr", "file", or "both".
    file_path:
        Path to the log file if output is "file" or "both".
    log_format:
        Logging format: "text" or "json".
    module:
        Optional module name to set a specific logger level for; if not
        provided, config applies to the root logger only.
    """
    # Resolved at call time so values from a .env file loaded in main() apply
    if level is None:
        level = os.environ.get("LOG_LEVEL", LOG_LEVEL)
    if isinstance(level, str):
        level = level.upper()
    if log_format is None:
        log_format = (os.environ.get("LOG_FORMAT") or LOG_FORMAT).lower()
    if output is None:
        output = (os.environ.get("LOG_OUTPUT") or LOG_OUTPUT).lower()
    if file_path is None:
        file_path = os.environ.get("LOG_FILE_PATH") or LOG_FILE_PATH

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    formatter = logging.Formatter(_TEXT_FORMAT) if log_format == "text" else JsonFormatter()

    if output in ["stderr", "both"]:
        # stdout is reserved for --json output
        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setFormatter(formatter)
        root_logger.addHandler(stream_handler)

    if output in ["file", "both"]:
        log_dir = os.path.dirname(file_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(file_path, maxBytes=5 * 1024 * 1024, backupCount=3)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    if module:
        logging.getLogger(module).setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(name)
