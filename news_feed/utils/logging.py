"""
Logging for pipeline runs.

Everything logs under the "news_feed" logger. Structured fields travel as
``extra`` on the record (see log_event): the console shows them as a topic
prefix, the JSONL file keeps all of them.
"""

from __future__ import annotations

from datetime import datetime, timezone
import json
import logging
from pathlib import Path
from typing import Any

from rich.logging import RichHandler

from ..config import LoggingConfig
from ..core.dates import format_timestamp


LOGGER_NAME = "news_feed"

# Attributes every LogRecord carries; anything else was passed as extra.
_RECORD_ATTRS = frozenset(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {"message", "asctime"}


def setup_logging(cfg: LoggingConfig, log_dir: Path | None = None) -> logging.Logger:
    """Configure the package logger for one run.

    Calling it again replaces the previous handlers, so a long-lived process
    can reconfigure between runs without duplicating output.

    Args:
        cfg: Logging configuration
        log_dir: Directory for the log file, overriding cfg.directory

    Returns:
        The configured "news_feed" logger
    """
    level = _level_from_string(cfg.level)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = False

    if cfg.console:
        logger.addHandler(_console_handler(level))
    if cfg.file:
        logger.addHandler(_file_handler(cfg, Path(log_dir or cfg.directory), level))

    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    if not name:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def log_event(logger: logging.Logger | None, message: str, level: int = logging.INFO, **fields: Any) -> None:
    """Log message with structured fields; a None logger drops the event."""
    if logger is None:
        return
    logger.log(level, message, extra=fields)


def truncate_text(text: str, max_chars: int = 100) -> str:
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + "..."


class TopicFormatter(logging.Formatter):
    """Console formatter that prefixes the message with the record's topic."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        topic = getattr(record, "topic", None)
        if topic:
            return f"[{topic}] {message}"
        return message


class JsonlFormatter(logging.Formatter):
    """One JSON object per line: record time, level, logger, message and extras."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": format_timestamp(datetime.fromtimestamp(record.created, tz=timezone.utc)),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(record_extras(record))
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=_json_default)


def record_extras(record: logging.LogRecord) -> dict[str, Any]:
    return {key: value for key, value in record.__dict__.items() if key not in _RECORD_ATTRS}


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return format_timestamp(value)
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    return str(value)


def _console_handler(level: int) -> logging.Handler:
    handler = RichHandler(rich_tracebacks=True, show_time=False, show_level=True)
    handler.setLevel(level)
    handler.setFormatter(TopicFormatter("%(message)s"))
    return handler


def _file_handler(cfg: LoggingConfig, directory: Path, level: int) -> logging.Handler:
    directory.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(directory / cfg.filename, encoding="utf-8")
    handler.setLevel(level)
    if cfg.format == "jsonl":
        handler.setFormatter(JsonlFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    return handler


def _level_from_string(level: str) -> int:
    return getattr(logging, level.upper(), logging.INFO)
