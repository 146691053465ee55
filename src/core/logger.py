"""
Centralized logging configuration for the Variant Attribute Service.

Provides a unified logging interface with:
- Structured logging with correlation IDs
- Console (development) and JSON (production) formats
- Optional file output
- Performance logging for slow operations
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

from src.config import config
from src.utils.correlation_id import get_correlation_id

SERVICE_NAME = config.service_name
ENVIRONMENT = config.environment
LOG_LEVEL = config.effective_log_level
LOG_FORMAT = config.effective_log_format
LOG_TO_FILE = config.log_to_file
LOG_TO_CONSOLE = config.log_to_console
LOG_FILE_PATH = config.effective_log_file_path


class StructuredLogger:
    """
    Logger with structured entries, correlation IDs and a metadata payload.
    """

    def __init__(self):
        self.service_name = SERVICE_NAME
        self.environment = ENVIRONMENT
        self._logger = logging.getLogger(SERVICE_NAME)
        self._setup_logging()

    def _setup_logging(self):
        """Configure the service logger with handlers"""
        self._logger.handlers.clear()
        self._logger.setLevel(getattr(logging, LOG_LEVEL))
        self._logger.propagate = False

        if LOG_TO_CONSOLE:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(getattr(logging, LOG_LEVEL))

            if LOG_FORMAT == "json":
                console_handler.setFormatter(JSONFormatter())
            else:
                console_handler.setFormatter(ConsoleFormatter())

            self._logger.addHandler(console_handler)

        if LOG_TO_FILE:
            log_dir = os.path.dirname(LOG_FILE_PATH)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)

            file_handler = logging.FileHandler(LOG_FILE_PATH)
            file_handler.setLevel(getattr(logging, LOG_LEVEL))
            file_handler.setFormatter(JSONFormatter())  # Always JSON for files

            self._logger.addHandler(file_handler)

    def _build_log_entry(
        self,
        level: str,
        message: str,
        correlation_id: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
        **kwargs
    ) -> Dict[str, Any]:
        """Build structured log entry"""
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": level.upper(),
            "service": self.service_name,
            "environment": self.environment,
            "message": message,
            "correlationId": correlation_id or get_correlation_id(),
        }

        if metadata:
            entry["metadata"] = metadata

        entry.update(kwargs)

        return entry

    def _log(
        self,
        level: str,
        message: str,
        correlation_id: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
        **kwargs
    ):
        """Internal logging method"""
        log_entry = self._build_log_entry(
            level, message, correlation_id, metadata, **kwargs
        )

        log_method = getattr(self._logger, level.lower())

        if LOG_FORMAT == "json":
            log_method(json.dumps(log_entry, default=str))
        else:
            # 'message' would clash with the LogRecord attribute
            extra_data = {k: v for k, v in log_entry.items() if k != "message"}
            log_method(message, extra=extra_data)

    def debug(
        self,
        message: str,
        correlation_id: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
        **kwargs
    ):
        """Debug level logging"""
        self._log("DEBUG", message, correlation_id, metadata, **kwargs)

    def info(
        self,
        message: str,
        correlation_id: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
        **kwargs
    ):
        """Info level logging"""
        self._log("INFO", message, correlation_id, metadata, **kwargs)

    def warning(
        self,
        message: str,
        correlation_id: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
        **kwargs
    ):
        """Warning level logging"""
        self._log("WARNING", message, correlation_id, metadata, **kwargs)

    def error(
        self,
        message: str,
        correlation_id: Optional[str] = None,
        error: Optional[Union[str, Exception]] = None,
        metadata: Optional[Dict[str, Any]] = None,
        **kwargs
    ):
        """Error level logging"""
        if metadata is None:
            metadata = {}

        if error:
            if isinstance(error, Exception):
                metadata["error"] = {
                    "type": type(error).__name__,
                    "message": str(error),
                }
            else:
                metadata["error"] = {"message": str(error)}

        self._log("ERROR", message, correlation_id, metadata, **kwargs)


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging"""

    RESERVED = {
        'name', 'msg', 'args', 'created', 'filename', 'funcName',
        'levelname', 'levelno', 'lineno', 'module', 'msecs',
        'message', 'pathname', 'process', 'processName',
        'relativeCreated', 'thread', 'threadName', 'exc_info',
        'exc_text', 'stack_info', 'taskName',
    }

    def format(self, record):
        message = record.getMessage()
        if message.startswith("{"):
            # Already serialized by StructuredLogger in json mode
            return message

        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "service": SERVICE_NAME,
            "message": message,
        }

        for key, value in record.__dict__.items():
            if key not in self.RESERVED:
                log_data[key] = value

        return json.dumps(log_data, default=str)


class ConsoleFormatter(logging.Formatter):
    """Colored console formatter for development"""

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'
    }

    def format(self, record):
        color = self.COLORS.get(record.levelname, self.COLORS['RESET'])
        reset = self.COLORS['RESET']

        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S')
        correlation_id = getattr(record, "correlationId", None)
        suffix = f" [{correlation_id}]" if correlation_id else ""

        return f"{color}[{timestamp}] {record.levelname}{reset} - {record.getMessage()}{suffix}"


# Create and export the logger instance
logger = StructuredLogger()
