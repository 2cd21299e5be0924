"""Logging configuration for the cartoon RSS generator."""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

# Record attributes set by the logging module itself; anything else on a
# record came in through ``extra``.
_RESERVED_ATTRS = set(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime"}


def _context_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _RESERVED_ATTRS and not key.startswith("_")
    }


class StructuredFormatter(logging.Formatter):
    """Custom formatter for structured JSON logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as structured JSON."""
        log_entry = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        # Execution context and any keyword extras
        log_entry.update(_context_fields(record))

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class ConsoleFormatter(logging.Formatter):
    """Plain ``[timestamp] LEVEL message`` console lines."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now(UTC).isoformat(timespec="milliseconds")
        level = record.levelname.ljust(7)
        line = f"[{timestamp}] {level} {record.getMessage()}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def escape_workflow_data(message: str) -> str:
    """Encode a message as single-line GitHub workflow command data."""
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class GitHubAnnotationHandler(logging.StreamHandler):
    """Emit GitHub Actions workflow commands for leveled log records."""

    COMMANDS = {
        logging.ERROR: "error",
        logging.WARNING: "warning",
        logging.INFO: "notice",
    }

    def __init__(self, stream=None):
        super().__init__(stream or sys.stdout)
        self.setLevel(logging.INFO)

    def format(self, record: logging.LogRecord) -> str:
        level = logging.ERROR if record.levelno >= logging.ERROR else record.levelno
        command = self.COMMANDS.get(level, "notice")
        message = escape_workflow_data(record.getMessage())
        return f"::{command}::{message}"


class ExecutionLogger:
    """Logger with execution context and structured logging."""

    def __init__(self, execution_id: str, component: str = "main"):
        """Initialize execution logger.

        Args:
            execution_id: Unique identifier for this execution
            component: Component name (e.g., 'fetcher', 'extractor')
        """
        self.execution_id = execution_id
        self.component = component
        self.logger = logging.getLogger(f"cartoon_rss.{component}")
        self.start_time: datetime | None = None
        self.end_time: datetime | None = None

    def _log_with_context(
        self, level: int, message: str, exc_info: bool = False, **kwargs
    ) -> None:
        """Log message with execution context."""
        extra = {
            "execution_id": self.execution_id,
            "component": self.component,
            **kwargs,
        }
        self.logger.log(level, message, extra=extra, exc_info=exc_info)

    def info(self, message: str, **kwargs) -> None:
        """Log info message with context."""
        self._log_with_context(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs) -> None:
        """Log warning message with context."""
        self._log_with_context(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs) -> None:
        """Log error message with context."""
        self._log_with_context(logging.ERROR, message, **kwargs)

    def debug(self, message: str, **kwargs) -> None:
        """Log debug message with context."""
        self._log_with_context(logging.DEBUG, message, **kwargs)

    def log_execution_start(self, **kwargs) -> None:
        """Log execution start with timestamp."""
        self.start_time = datetime.now(UTC)
        self.info(
            f"Starting {self.component} execution",
            execution_start=self.start_time.isoformat(),
            **kwargs,
        )

    def log_execution_end(self, success: bool = True, **kwargs) -> None:
        """Log execution end with timestamp and duration."""
        self.end_time = datetime.now(UTC)

        duration_seconds = None
        if self.start_time:
            duration_seconds = (self.end_time - self.start_time).total_seconds()

        self.info(
            f"Completed {self.component} execution",
            execution_end=self.end_time.isoformat(),
            execution_duration_seconds=duration_seconds,
            execution_success=success,
            **kwargs,
        )

    def log_metrics(self, metrics: dict[str, Any]) -> None:
        """Log execution metrics."""
        self.info("Execution metrics", metrics=metrics)


def setup_logging(
    verbose: bool = False,
    ci: bool = False,
    log_level: str = "INFO",
    log_format: str = "text",
    stream=None,
) -> None:
    """Setup logging for the application.

    Args:
        verbose: Show non-error messages on the console
        ci: Also emit GitHub Actions annotations
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_format: ``text`` for console lines, ``json`` for structured records
        stream: Output stream (defaults to stdout)
    """
    level = getattr(logging, log_level.upper())
    stream = stream or sys.stdout

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(stream)
    console_handler.setLevel(level if verbose else logging.ERROR)
    if log_format == "json":
        console_handler.setFormatter(StructuredFormatter())
    else:
        console_handler.setFormatter(ConsoleFormatter())
    root_logger.addHandler(console_handler)

    if ci:
        root_logger.addHandler(GitHubAnnotationHandler(stream))

    package_logger = logging.getLogger("cartoon_rss")
    package_logger.setLevel(level)
    package_logger.propagate = True

    # requests/urllib3 chatter stays out of the feed log
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def create_execution_logger(
    component: str, execution_id: str | None = None
) -> ExecutionLogger:
    """Create an execution logger for a component.

    Args:
        component: Component name
        execution_id: Optional execution ID (will generate one if not provided)

    Returns:
        ExecutionLogger instance
    """
    if not execution_id:
        execution_id = f"exec_{datetime.now(UTC).strftime('%Y%m%d_%H%M%S_%f')}"

    return ExecutionLogger(execution_id, component)
