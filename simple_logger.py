import os
import traceback
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class LogLevel(Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"

    @property
    def rank(self) -> int:
        return _RANKS[self]

    @classmethod
    def parse(cls, value: Any) -> "LogLevel":
        """Accept a LogLevel or its (case-insensitive) name."""
        if isinstance(value, LogLevel):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise ValueError(f"Unknown log level: {value!r}") from None


_RANKS = {
    LogLevel.DEBUG: 10,
    LogLevel.INFO: 20,
    LogLevel.WARNING: 30,
    LogLevel.ERROR: 40,
}


class Slogger:
    log_path = "logs/northwind_admin.log"
    min_level = LogLevel.INFO

    @classmethod
    def configure(cls, log_path: Optional[str] = None, level: Any = None) -> None:
        """
        Point the logger at a file and set the minimum level written.

        Args:
            log_path: Path of the log file (parent directories are created on first write)
            level: Minimum LogLevel, or its name ("DEBUG", "info", ...)
        """
        if log_path:
            cls.log_path = log_path
        if level is not None:
            cls.min_level = LogLevel.parse(level)

    @classmethod
    def _ensure_log_directory(cls):
        """Ensure that the logs directory exists."""
        log_dir = os.path.dirname(cls.log_path)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir, exist_ok=True)

    @classmethod
    def _write(cls, line: str) -> None:
        cls._ensure_log_directory()
        with open(cls.log_path, "a", encoding="utf-8") as f:
            f.write(line)

    @classmethod
    def log(cls, message: str, level: LogLevel = LogLevel.INFO, context: Optional[Dict[str, Any]] = None):
        """
        Log a message with an optional level and context.

        Entries below the configured minimum level are dropped.

        Args:
            message: The message to log
            level: The log level (DEBUG, INFO, WARNING, ERROR)
            context: Optional dictionary of contextual information
        """
        if level.rank < cls.min_level.rank:
            return

        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        log_message = f"{timestamp} - {level.value} - {message}"

        if context:
            context_str = " | ".join(f"{k}={v}" for k, v in context.items())
            log_message += f" | {context_str}"

        cls._write(log_message + "\n")

    @classmethod
    def debug(cls, message: str, context: Optional[Dict[str, Any]] = None):
        """Log a debug message."""
        cls.log(message, LogLevel.DEBUG, context)

    @classmethod
    def info(cls, message: str, context: Optional[Dict[str, Any]] = None):
        """Log an info message."""
        cls.log(message, LogLevel.INFO, context)

    @classmethod
    def warning(cls, message: str, context: Optional[Dict[str, Any]] = None):
        """Log a warning message."""
        cls.log(message, LogLevel.WARNING, context)

    @classmethod
    def error(cls, message: str, context: Optional[Dict[str, Any]] = None):
        """Log an error message."""
        cls.log(message, LogLevel.ERROR, context)

    @classmethod
    def exception(cls, e: Exception, message: str = "Exception occurred", context: Optional[Dict[str, Any]] = None):
        """
        Log an exception with its traceback.

        Args:
            e: The exception to log
            message: Describes what was being attempted when it was raised
            context: Optional dictionary of contextual information
        """
        exc_type = type(e).__name__
        error_context = dict(context or {})
        error_context.update({
            "exception_type": exc_type,
            "exception_message": str(e),
        })

        cls.error(f"{message}: {exc_type} - {e}", error_context)

        # traceback on its own lines for readability
        tb = "".join(traceback.format_exception(type(e), e, e.__traceback__))
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        cls._write(f"{timestamp} - {LogLevel.ERROR.value} - TRACEBACK:\n{tb}\n")
