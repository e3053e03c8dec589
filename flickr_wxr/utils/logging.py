"""
Run logging for conversions.

Console output goes through Rich. A run can also keep a log file beside the
WXR document it writes, either as JSON Lines or as plain text. Every record
carries the converter event it belongs to, so a run can be audited later:

    {"time": "...", "level": "INFO", "event": "photos_loaded",
     "message": "Loaded 8 photos from 9 files", "files": 9, "photos": 8, ...}

Per-record warnings from the loader and mapper arrive through their module
loggers and have no event.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from rich.logging import RichHandler

from ..config import LoggingConfig
from ..core.types import ConversionStats

LOGGER_NAME = "flickr_wxr"

EVENTS = frozenset(
    {
        "conversion_start",
        "albums_loaded",
        "photos_loaded",
        "document_built",
        "document_written",
        "conversion_complete",
        "conversion_failed",
    }
)

# Attributes every LogRecord has; anything else came in through ``extra``.
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


def log_path(cfg: LoggingConfig, output_path: Path) -> Path | None:
    """Where the run log for ``output_path`` goes, or None when file logging is off."""
    if not cfg.file:
        return None
    return output_path.parent / cfg.filename


def setup_logging(cfg: LoggingConfig, output_path: Path | None = None) -> logging.Logger:
    """Configure the package logger for one run.

    Args:
        cfg: Logging settings
        output_path: The WXR file being written; the log file sits beside it

    Returns:
        The configured ``flickr_wxr`` logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    level = _level_from_string(cfg.level)
    logger.setLevel(level)
    close_logging(logger)
    logger.propagate = False

    if cfg.console:
        console_handler = RichHandler(rich_tracebacks=True, show_time=False, markup=False)
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(console_handler)

    path = log_path(cfg, output_path) if output_path is not None else None
    if path is not None:
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(JsonlFormatter() if cfg.format == "jsonl" else EventFormatter())
        logger.addHandler(file_handler)

    return logger


def close_logging(logger: logging.Logger) -> None:
    """Flush and detach every handler so log files are released."""
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def log_event(
    logger: logging.Logger | None,
    event: str,
    message: str,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    """Log one converter event with structured fields.

    Raises:
        ValueError: If ``event`` is not one of EVENTS
    """
    if event not in EVENTS:
        raise ValueError(f"Unknown log event: {event}")
    if logger is None:
        return
    logger.log(level, message, extra={"event": event, **fields})


def log_summary(logger: logging.Logger | None, stats: ConversionStats) -> None:
    """Log the end-of-run counters as a single conversion_complete event."""
    skipped = stats.malformed + stats.invalid_dates
    message = (
        f"Wrote {stats.posts} posts, {stats.attachments} attachments and {stats.tags} tags"
        f" ({skipped} records skipped, {stats.missing_assets} posts without image)"
    )
    log_event(logger, "conversion_complete", message, **stats.as_dict())


def event_fields(record: logging.LogRecord) -> dict[str, Any]:
    """The structured fields a record was logged with, without its event name."""
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _RECORD_ATTRS and key != "event"
    }


class JsonlFormatter(logging.Formatter):
    """One JSON object per line: time, level, event, message, then event fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "event": getattr(record, "event", None),
            "message": record.getMessage(),
        }
        payload.update(event_fields(record))
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


class EventFormatter(logging.Formatter):
    """Plain-text lines: ``time LEVEL [event] message key=value ...``."""

    def format(self, record: logging.LogRecord) -> str:
        parts = [self.formatTime(record), record.levelname]
        event = getattr(record, "event", None)
        if event:
            parts.append(f"[{event}]")
        parts.append(record.getMessage())
        parts.extend(f"{key}={value}" for key, value in event_fields(record).items())
        line = " ".join(parts)
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def _level_from_string(level: str) -> int:
    return getattr(logging, level.upper(), logging.INFO)
