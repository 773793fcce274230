"""
Logging setup for the command line.

Library modules only create module-level loggers; handlers are attached here,
once, by the entry point:

- console handler on stderr (stdout carries the JSON graph dump)
- optional rotating file handler
- "text" or "json" record formatting
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from logging import Handler
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, List, Literal, Optional

from .constants import LoggingConfig
from .errors import VocabularyError

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class JSONFormatter(logging.Formatter):
    """
    One JSON object per log record.

    A VocabularyError passed as ``extra={"error": e}`` is expanded into
    ``error_type`` plus whichever of its location attributes are set
    (line_number, status_code, url, class_iri), so a failed load can be
    traced to the offending line or address without parsing the message.
    """

    _ERROR_ATTRIBUTES = ("line_number", "status_code", "url", "class_iri")

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc).strftime(
            LoggingConfig.JSON_DATE_FORMAT
        )
        payload: Dict[str, Any] = {
            "timestamp": timestamp,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        error = getattr(record, "error", None)
        if isinstance(error, VocabularyError):
            payload["error_type"] = type(error).__name__
            for attribute in self._ERROR_ATTRIBUTES:
                value = getattr(error, attribute, None)
                if value is not None:
                    payload[attribute] = value

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False)


_MANAGED_HANDLERS: List[Handler] = []


def _clear_managed_handlers() -> None:
    """Remove handlers that were added by this module."""
    root_logger = logging.getLogger()
    for handler in _MANAGED_HANDLERS:
        root_logger.removeHandler(handler)
        handler.close()
    _MANAGED_HANDLERS.clear()


def setup_logging(
    level: LogLevel = LoggingConfig.DEFAULT_LOG_LEVEL,
    log_file: Optional[str] = None,
    fmt: str = LoggingConfig.DEFAULT_FORMAT_STYLE,
) -> Optional[str]:
    """
    Configure the root logger.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional log file path; rotated at LoggingConfig.MAX_LOG_FILE_MB.
        fmt: "text" or "json".

    Returns:
        The log file path in use, or None when logging to console only.
    """
    log_level = getattr(logging, str(level).upper(), logging.INFO)

    style = str(fmt).lower()
    if style not in LoggingConfig.SUPPORTED_FORMATS:
        style = LoggingConfig.DEFAULT_FORMAT_STYLE

    formatter: logging.Formatter
    if style == "json":
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(fmt=LoggingConfig.LOG_FORMAT, datefmt=LoggingConfig.DATE_FORMAT)

    handlers: List[Handler] = []
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    actual_log_file = None
    if log_file:
        try:
            log_dir = os.path.dirname(log_file)
            if log_dir and not os.path.exists(log_dir):
                os.makedirs(log_dir, exist_ok=True)
            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=LoggingConfig.MAX_LOG_FILE_MB * 1024 * 1024,
                backupCount=LoggingConfig.LOG_BACKUP_COUNT,
                encoding='utf-8',
            )
            file_handler.setFormatter(formatter)
            handlers.append(file_handler)
            actual_log_file = log_file
        except OSError as e:
            print(f"Warning: Could not create log file {log_file}: {e}", file=sys.stderr)
            print("  Logging to console only", file=sys.stderr)

    _clear_managed_handlers()
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in handlers:
        root_logger.addHandler(handler)
        _MANAGED_HANDLERS.append(handler)

    if actual_log_file:
        logging.getLogger(__name__).info(f"Logging to: {actual_log_file}")
    return actual_log_file
