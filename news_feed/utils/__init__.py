"""
Shared utility functions.

This package contains utility code used across multiple
pipeline stages.
"""

from .logging import (
    JsonlFormatter,
    TopicFormatter,
    get_logger,
    log_event,
    setup_logging,
    truncate_text,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "log_event",
    "truncate_text",
    "JsonlFormatter",
    "TopicFormatter",
]
