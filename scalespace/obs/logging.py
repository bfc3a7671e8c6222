"""
Structured JSON logging for scalespace.

Provides consistent, structured logging for layout operations with
timing and geometric context for observability.
"""

import json
import logging
import time
from typing import Any, Dict, Optional
from datetime import datetime, timezone


# Attributes present on every LogRecord; anything else came in via ``extra``
_RESERVED_ATTRS = {
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname',
    'filename', 'module', 'lineno', 'funcName', 'created',
    'msecs', 'relativeCreated', 'thread', 'threadName',
    'processName', 'process', 'getMessage', 'exc_info',
    'exc_text', 'stack_info', 'taskName', 'message', 'asctime'
}


class JsonFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs logs in a consistent JSON format with:
    - Standard fields: timestamp, level, logger, message
    - Performance: duration_ms (for timed operations)
    - Geometric context: coordinates, bound, visual angles, etc.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith('_'):
                log_entry[key] = value

        # default=str keeps quantities and other odd extras from breaking a log line
        return json.dumps(log_entry, ensure_ascii=False, separators=(',', ':'), default=str)


class StructuredLogger:
    """
    Structured logger with layout context support.

    Provides methods for logging common layout operations with
    consistent structure.
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def object_added(self, coordinates: Dict[str, int], shape: str, object_count: int):
        """Log an object accepted into a layout."""
        self.logger.debug(
            "Object added to layout",
            extra={
                "operation": "object_added",
                "coordinates": coordinates,
                "shape": shape,
                "object_count": object_count
            }
        )

    def object_rejected(self, coordinates: Dict[str, int], coordinate_bound: int, failed_axes: list):
        """Log an object refused because it falls outside the grid."""
        self.logger.info(
            "Object rejected: outside coordinate bound",
            extra={
                "operation": "object_rejected",
                "coordinates": coordinates,
                "coordinate_bound": coordinate_bound,
                "failed_axes": failed_axes
            }
        )

    def degenerate_geometry(self, relation: str, **values: float):
        """Log a visual-angle relation evaluated at a singular point."""
        self.logger.warning(
            f"Degenerate geometry in {relation}",
            extra={
                "operation": "degenerate_geometry",
                "relation": relation,
                **values
            }
        )

    def startup_event(self, component: str, status: str, details: Optional[Dict[str, Any]] = None):
        """Log a startup step, e.g. the effective configuration."""
        level = logging.ERROR if status == "error" else logging.INFO
        self.logger.log(
            level,
            f"Startup: {component} {status}",
            extra={
                "operation": "startup",
                "component": component,
                "status": status,
                **(details or {})
            }
        )

    @staticmethod
    def _categorize_performance(duration_ms: float) -> str:
        """Categorize performance for easy filtering."""
        if duration_ms < 1:
            return "fast"
        elif duration_ms < 10:
            return "normal"
        elif duration_ms < 100:
            return "slow"
        else:
            return "very_slow"


def setup_logging(level: str = "INFO", enable_json: bool = True) -> None:
    """
    Setup structured logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        enable_json: Whether to use JSON formatting
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        handlers=[],
        force=True
    )

    console_handler = logging.StreamHandler()

    if enable_json:
        console_handler.setFormatter(JsonFormatter())
    else:
        # Simple formatter for development
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.addHandler(console_handler)

    # pint is chatty about redefinitions at DEBUG
    logging.getLogger("pint").setLevel(logging.WARNING)


class TimedOperation:
    """Context manager for timing operations with automatic logging."""

    def __init__(self, logger: StructuredLogger, operation_name: str,
                 level: int = logging.INFO, **context):
        self.logger = logger
        self.operation_name = operation_name
        self.level = level
        self.context = context
        self.start_time: Optional[float] = None
        self.duration_ms: Optional[float] = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration_ms = (time.perf_counter() - self.start_time) * 1000

        if exc_type is None:
            self.logger.logger.log(
                self.level,
                f"Operation completed: {self.operation_name}",
                extra={
                    "operation": self.operation_name,
                    "duration_ms": round(self.duration_ms, 3),
                    "performance_category": StructuredLogger._categorize_performance(self.duration_ms),
                    **self.context
                }
            )
        else:
            self.logger.logger.error(
                f"Operation failed: {self.operation_name}",
                extra={
                    "operation": self.operation_name,
                    "duration_ms": round(self.duration_ms, 3),
                    "error_type": exc_type.__name__,
                    "error_message": str(exc_val) if exc_val else None,
                    **self.context
                }
            )
