"""Structured logging configuration for RSS Aggregator."""

import json
import logging
import sys
import time
from datetime import UTC, datetime
from typing import Any

from .models import RenderResult

COMPONENTS = ("main", "aggregator", "index")


class StructuredFormatter(logging.Formatter):
    """Render each record as one JSON object per line."""

    CONTEXT_FIELDS = (
        "execution_id",
        "component",
        "feed_url",
        "output_file",
        "root",
        "reason",
        "error",
        "metrics",
        "duration_seconds",
        "success",
    )

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        entry.update(
            (name, getattr(record, name))
            for name in self.CONTEXT_FIELDS
            if hasattr(record, name)
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


class ExecutionLogger:
    """Logger bound to one run and one component.

    Every record carries ``execution_id`` and ``component`` so the records of
    a run can be grouped after the fact.
    """

    def __init__(self, execution_id: str, component: str = "main"):
        self.execution_id = execution_id
        self.component = component
        self.logger = logging.getLogger(f"rss_aggregator.{component}")
        self._started: float | None = None

    def _emit(self, level: int, message: str, fields: dict[str, Any]) -> None:
        fields.update(execution_id=self.execution_id, component=self.component)
        self.logger.log(level, message, extra=fields)

    def debug(self, message: str, **fields) -> None:
        self._emit(logging.DEBUG, message, fields)

    def info(self, message: str, **fields) -> None:
        self._emit(logging.INFO, message, fields)

    def warning(self, message: str, **fields) -> None:
        self._emit(logging.WARNING, message, fields)

    def error(self, message: str, **fields) -> None:
        self._emit(logging.ERROR, message, fields)

    def log_execution_start(self, **fields) -> None:
        self._started = time.monotonic()
        self.info(f"Starting {self.component} run", **fields)

    def log_execution_end(self, success: bool = True, **fields) -> None:
        """Log the end of the run with its duration since the start record."""
        duration = None
        if self._started is not None:
            duration = round(time.monotonic() - self._started, 6)
        self.info(
            f"Finished {self.component} run",
            success=success,
            duration_seconds=duration,
            **fields,
        )

    def log_feed_result(self, feed_url: str, result: RenderResult) -> None:
        """Log one feed outcome; rejected and failed feeds are warnings."""
        fields = {"feed_url": feed_url, "output_file": result.label}
        if result.success:
            self.info(result.message, **fields)
        else:
            self.warning(result.message, reason=result.reason, **fields)

    def log_metrics(self, metrics: dict[str, Any]) -> None:
        self.info("Run metrics", metrics=metrics)


def setup_structured_logging(log_level: str = "INFO") -> None:
    """Send JSON records to stderr at ``log_level``.

    stdout is left to the progress lines.
    """
    level = getattr(logging, log_level.upper())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(StructuredFormatter())
    root_logger.addHandler(handler)

    for name in ("rss_aggregator", *(f"rss_aggregator.{c}" for c in COMPONENTS)):
        logging.getLogger(name).setLevel(level)


def create_execution_logger(
    component: str, execution_id: str | None = None
) -> ExecutionLogger:
    """Create an execution logger, generating an execution ID when none is given."""
    if not execution_id:
        execution_id = f"exec_{datetime.now(UTC).strftime('%Y%m%d_%H%M%S_%f')}"
    return ExecutionLogger(execution_id, component)
