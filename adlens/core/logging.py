"""ADLENS — Structured JSON Logging.

Every module logs through a child of the `adlens` logger. One stdout handler
sits on that parent, so a line is written once however many modules log.
"""

import json
import logging
import sys
import time
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator

from adlens.config import settings

ROOT_LOGGER = "adlens"

# Context keys copied from `extra=` into the JSON line
LOG_FIELDS = ("source", "view", "row_count", "duration_ms", "status_code")


class JSONFormatter(logging.Formatter):
    """One JSON object per line: level, logger, message and pipeline context."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (key, record.__dict__[key]) for key in LOG_FIELDS if key in record.__dict__
        )
        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        # Enums and dates in context values
        return json.dumps(entry, default=str, ensure_ascii=False)


def _root_logger() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JSONFormatter())
        root.addHandler(handler)
        root.propagate = False
    root.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    return root


def get_logger(name: str) -> logging.Logger:
    """Return `adlens.<name>`, writing through the shared JSON handler."""
    _root_logger()
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


@contextmanager
def log_duration(logger: logging.Logger, message: str, **fields: Any) -> Iterator[Dict[str, Any]]:
    """Log `message` with `duration_ms` once the block completes.

    The yielded dict holds the format fields of `message`; the block may add
    to it. Fields named in LOG_FIELDS also travel as structured context.
    """
    started = time.perf_counter()
    yield fields
    extra = {key: value for key, value in fields.items() if key in LOG_FIELDS}
    extra["duration_ms"] = round((time.perf_counter() - started) * 1000, 1)
    logger.info(message.format(**fields), extra=extra)
