"""Tests for logging setup and the JSONL formatter."""

from __future__ import annotations

from datetime import datetime, timezone
import json
import logging

from news_feed.config import LoggingConfig
from news_feed.utils.logging import JsonlFormatter, TopicFormatter, log_event, setup_logging, truncate_text


def test_jsonl_formatter_includes_extras():
    record = logging.LogRecord("news_feed", logging.INFO, __file__, 1, "Fetched %d", (3,), None)
    record.event = "source_fetched"
    record.topic = "sports"

    payload = json.loads(JsonlFormatter().format(record))

    assert payload["message"] == "Fetched 3"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "news_feed"
    assert payload["event"] == "source_fetched"
    assert payload["topic"] == "sports"
    assert "msg" not in payload


def test_setup_logging_writes_jsonl_file(tmp_path):
    cfg = LoggingConfig(console=False, file=True, format="jsonl", filename="run.jsonl")
    logger = setup_logging(cfg, tmp_path)

    log_event(logger, "Pipeline start", event="pipeline_start", topics=["politics"])
    for handler in logger.handlers:
        handler.flush()

    lines = (tmp_path / "run.jsonl").read_text(encoding="utf-8").splitlines()
    payload = json.loads(lines[-1])
    assert payload["event"] == "pipeline_start"
    assert payload["topics"] == ["politics"]

    setup_logging(LoggingConfig(console=False, file=False))


def test_log_event_without_logger_is_noop():
    log_event(None, "ignored", event="nothing")


def test_truncate_text():
    assert truncate_text("short", 10) == "short"
    assert truncate_text("x" * 20, 10) == "x" * 10 + "..."


def test_jsonl_timestamp_is_record_time_and_datetimes_serialize():
    record = logging.LogRecord("news_feed", logging.INFO, __file__, 1, "Published", (), None)
    record.created = datetime(2026, 10, 19, 12, 0, 0, 250000, tzinfo=timezone.utc).timestamp()
    record.updated = datetime(2026, 10, 19, 11, 0, tzinfo=timezone.utc)
    record.urls = {"https://x/b", "https://x/a"}

    payload = json.loads(JsonlFormatter().format(record))

    assert payload["timestamp"] == "2026-10-19T12:00:00.250Z"
    assert payload["updated"] == "2026-10-19T11:00:00.000Z"
    assert payload["urls"] == ["https://x/a", "https://x/b"]


def test_console_formatter_prefixes_topic():
    formatter = TopicFormatter("%(message)s")
    record = logging.LogRecord("news_feed", logging.INFO, __file__, 1, "Fetched 3 articles", (), None)
    assert formatter.format(record) == "Fetched 3 articles"

    record.topic = "sports"
    assert formatter.format(record) == "[sports] Fetched 3 articles"


def test_setup_logging_replaces_handlers(tmp_path):
    cfg = LoggingConfig(console=True, file=True, filename="run.log", format="plain")

    setup_logging(cfg, tmp_path)
    logger = setup_logging(cfg, tmp_path)

    assert len(logger.handlers) == 2
    assert logger.propagate is False
    setup_logging(LoggingConfig(console=False, file=False))
