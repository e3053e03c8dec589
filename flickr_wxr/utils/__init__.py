"""
Shared utility functions.

This package contains the run logging used by the runner and the CLI.
"""

from .logging import (
    EVENTS,
    EventFormatter,
    JsonlFormatter,
    close_logging,
    log_event,
    log_path,
    log_summary,
    setup_logging,
)

__all__ = [
    "EVENTS",
    "EventFormatter",
    "JsonlFormatter",
    "close_logging",
    "log_event",
    "log_path",
    "log_summary",
    "setup_logging",
]
