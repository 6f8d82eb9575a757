"""Structured logging infrastructure for the API layer.

Provides JSON-formatted logging for production and human-readable
logging for development, plus a BookLogger helper for book generation events.
"""

import json
import logging
import sys
from datetime import datetime, timezone

# Structured fields copied from `extra=` into the JSON output
_EXTRA_FIELDS = ("request_id", "stage", "duration", "model", "error_type", "failed_at_stage")


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f") + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for name in _EXTRA_FIELDS:
            if hasattr(record, name):
                log_data[name] = getattr(record, name)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False)


def configure_logging(json_format: bool = True, level: int = logging.INFO) -> None:
    """Configure structured logging for the application."""
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )

    root_logger.addHandler(handler)


class BookLogger:
    """Logger for book generation events with structured fields."""

    def __init__(self):
        self.logger = logging.getLogger("book_generation")

    def generation_started(self, request_id: str, model: str = None) -> None:
        self.logger.info(
            "Book generation started",
            extra={"request_id": request_id, "stage": "started", "model": model},
        )

    def stage_completed(self, request_id: str, stage: str, duration: float = None) -> None:
        extra = {"request_id": request_id, "stage": stage}
        if duration:
            extra["duration"] = round(duration, 2)
        self.logger.info(f"Stage completed: {stage}", extra=extra)

    def generation_completed(self, request_id: str, duration: float) -> None:
        self.logger.info(
            "Book generation completed",
            extra={"request_id": request_id, "stage": "completed", "duration": round(duration, 2)},
        )

    def generation_failed(self, request_id: str, error: Exception, stage: str = None) -> None:
        extra = {"request_id": request_id, "stage": "failed", "error_type": type(error).__name__}
        if stage:
            extra["failed_at_stage"] = stage
        self.logger.error(f"Book generation failed: {error}", extra=extra, exc_info=error)

    def fallback_used(self, request_id: str, reason: str) -> None:
        self.logger.warning(
            f"Using offline fallback: {reason}",
            extra={"request_id": request_id, "stage": "fallback"},
        )


# Global book logger instance
book_logger = BookLogger()
