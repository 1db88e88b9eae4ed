"""
Logging and error handling framework for hetki.

This module provides:
- Structured logging configuration
- Custom exception classes
- Context-aware logging utilities
- Performance logging for pipeline stages
"""

import functools
import json
import logging
import sys
import time
import traceback
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any


class LogLevel(str, Enum):
    """Log level enumeration for type safety."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogContext(str, Enum):
    """Log context categories for structured logging."""

    MANIFEST = "manifest"
    OBSERVER = "observer"
    PLANNER = "planner"
    EXECUTOR = "executor"
    BACKEND = "backend"
    RECONCILER = "reconciler"
    CONFIG = "config"
    CLI = "cli"


class HetkiException(Exception):
    """Base exception class for all hetki errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.timestamp = datetime.now(timezone.utc)


@dataclass(frozen=True)
class FieldError:
    """A single validation failure addressed by a dotted field path."""

    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class ManifestError(HetkiException):
    """Errors reading or decoding a workspace manifest."""

    pass


class ManifestNotFoundError(ManifestError):
    """The requested workspace manifest could not be located."""

    pass


class ManifestValidationError(ManifestError):
    """A manifest decoded but failed structural validation.

    Every failure is collected, so ``errors`` enumerates all of them and the
    message renders one per line.
    """

    def __init__(self, errors: list[FieldError], context: dict[str, Any] | None = None):
        self.errors = list(errors)
        lines = "\n  - ".join(str(e) for e in self.errors)
        super().__init__(f"workspace validation failed:\n  - {lines}", context)


class ConfigurationError(HetkiException):
    """Errors related to configuration and setup."""

    pass


class BackendError(HetkiException):
    """Errors related to the multiplexer backend."""

    pass


class BackendNotFoundError(BackendError):
    """The multiplexer binary is not available."""

    pass


class TmuxCommandError(BackendError):
    """A tmux invocation failed. Stderr is preserved verbatim."""

    def __init__(
        self,
        message: str,
        args: list[str] | None = None,
        returncode: int | None = None,
        stderr: str = "",
        script: str | None = None,
    ):
        context: dict[str, Any] = {"args": args or [], "returncode": returncode}
        if script is not None:
            context["script"] = script
        super().__init__(message, context)
        self.command_args = args or []
        self.returncode = returncode
        self.stderr = stderr
        self.script = script


class ServerNotRunningError(TmuxCommandError):
    """The tmux server is not running."""

    pass


class AttachError(BackendError):
    """Attaching or switching to a session failed."""

    pass


class StructuredFormatter(logging.Formatter):
    """Custom formatter for structured JSON logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if hasattr(record, "context"):
            log_data["context"] = record.context

        # Exclude standard LogRecord attributes and our own fields
        standard_fields = {
            "name",
            "msg",
            "args",
            "levelname",
            "levelno",
            "pathname",
            "filename",
            "module",
            "exc_info",
            "exc_text",
            "stack_info",
            "lineno",
            "funcName",
            "created",
            "msecs",
            "relativeCreated",
            "thread",
            "threadName",
            "processName",
            "process",
            "taskName",
            "getMessage",
            "context",
        }

        for key, value in record.__dict__.items():
            if key not in standard_fields and not key.startswith("_"):
                log_data[key] = value

        if record.exc_info and record.exc_info[0] is not None:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": traceback.format_exception(*record.exc_info),
            }

        return json.dumps(log_data, default=str)


class ContextualLogger:
    """Logger with context management for structured logging."""

    def __init__(self, name: str, context: LogContext):
        self.logger = logging.getLogger(name)
        self.context = context.value

    def _log(
        self, level: int, message: str, extra_context: dict[str, Any] | None = None
    ) -> None:
        """Internal logging method with context injection."""
        extra: dict[str, Any] = {"context": self.context}
        if extra_context:
            extra.update(extra_context)

        self.logger.log(level, message, extra=extra)

    def debug(self, message: str, **kwargs) -> None:
        """Log debug message with context."""
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs) -> None:
        """Log info message with context."""
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs) -> None:
        """Log warning message with context."""
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, exception: Exception | None = None, **kwargs) -> None:
        """Log error message with context and optional exception."""
        if exception:
            self.logger.error(
                message,
                exc_info=exception,
                extra={"context": self.context, **kwargs},
            )
        else:
            self._log(logging.ERROR, message, kwargs)


def get_logger(name: str, context: LogContext) -> ContextualLogger:
    """Get a contextual logger instance."""
    return ContextualLogger(name, context)


def setup_logging(
    log_level: str | LogLevel = LogLevel.WARNING,
    log_file: Path | None = None,
    enable_structured: bool = False,
    enable_console: bool = True,
) -> None:
    """
    Setup logging configuration.

    Console output always goes to stderr; stdout is left to command output.

    Args:
        log_level: Minimum log level to capture
        log_file: Optional file path for log output
        enable_structured: Use JSON structured logging format
        enable_console: Enable console output
    """
    if isinstance(log_level, LogLevel):
        log_level = log_level.value

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)

    plain = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    handlers: list[logging.Handler] = []

    if enable_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(
            StructuredFormatter() if enable_structured else plain
        )
        handlers.append(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(StructuredFormatter() if enable_structured else plain)
        handlers.append(file_handler)

    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    root_logger.setLevel(getattr(logging, log_level.upper()))
    for handler in handlers:
        root_logger.addHandler(handler)

    # libtmux logs every command it runs at debug level
    logging.getLogger("libtmux").setLevel(logging.WARNING)


def log_performance(log_context: LogContext = LogContext.RECONCILER):
    """Decorator to log how long a pipeline stage took."""

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger(func.__module__, log_context)

            start_time = time.time()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.debug(
                    f"Performance: {func.__name__} failed",
                    function=func.__name__,
                    execution_time=time.time() - start_time,
                    status="error",
                    error=str(e),
                )
                raise

            logger.debug(
                f"Performance: {func.__name__} completed",
                function=func.__name__,
                execution_time=time.time() - start_time,
                status="success",
            )
            return result

        return wrapper

    return decorator
