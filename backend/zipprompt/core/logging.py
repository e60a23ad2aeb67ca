"""
Structured logging for archive processing.

Each record is a single JSON object so upload and pipeline events can be
grepped or shipped without a custom parser:

    {"message": "Archive processed", "level": "info", "upload_id": 3, "total_files": 12, ...}
"""
import logging
import json
import time
from contextlib import contextmanager
from typing import Any, Dict


class StructuredLogger:
    """
    Wraps a stdlib logger; keyword arguments become JSON fields.

    Fields given to bind() are repeated on every record of the returned logger,
    which is how one upload's events are tied together.
    """

    def __init__(self, name: str, fields: Dict[str, Any] = None):
        self.logger = logging.getLogger(name)
        self.fields: Dict[str, Any] = fields or {}

    def bind(self, **fields) -> "StructuredLogger":
        return StructuredLogger(self.logger.name, {**self.fields, **fields})

    def log(self, level: int, message: str, **fields):
        if not self.logger.isEnabledFor(level):
            return
        record = {
            "message": message,
            "level": logging.getLevelName(level).lower(),
            **self.fields,
            **fields,
            "timestamp": time.time(),
        }
        self.logger.log(level, json.dumps(record, default=str))

    def debug(self, message: str, **fields):
        self.log(logging.DEBUG, message, **fields)

    def info(self, message: str, **fields):
        self.log(logging.INFO, message, **fields)

    def warning(self, message: str, **fields):
        self.log(logging.WARNING, message, **fields)


@contextmanager
def log_duration(operation: str, logger: StructuredLogger, **fields):
    """
    Log how long the wrapped block took, at debug level.

    Nothing is logged when the block raises; whoever handles the
    exception reports it.
    """
    start = time.perf_counter()
    yield
    logger.debug(
        f"{operation} completed",
        operation=operation,
        duration_ms=round((time.perf_counter() - start) * 1000, 2),
        **fields
    )


def log_archive_event(logger: StructuredLogger, event_type: str, success: bool = True, **fields):
    """Record an upload outcome ("processed", "rejected"); failures log at WARNING"""
    logger.log(
        logging.INFO if success else logging.WARNING,
        f"Archive {event_type}",
        event_type=event_type,
        success=success,
        **fields
    )


def get_logger(name: str) -> StructuredLogger:
    return StructuredLogger(name)
