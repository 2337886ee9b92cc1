"""
Main pipeline orchestration for the news feed.

This module coordinates one run:
1. Build the source catalog
2. For each topic, in catalog order: fetch, dedup, claim, extract, summarize
3. Publish each topic with read-merge-write-verify
4. Rebuild the all-topics aggregate from the stored topic datasets

Topics run one after another and share only the set of claimed URLs. A failing
topic is recorded in its RunResult and never stops the topics after it.
"""

from __future__ import annotations

from datetime import datetime
import asyncio
import logging
import threading
from typing import Any, Mapping, Sequence

import httpx
from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)

from .catalog import build_catalog
from .config import AppConfig
from .core.dates import format_timestamp, utc_now
from .core.types import FeedSource, RunResult
from .processors.topic_processor import RunCancelled, TopicProcessor
from .storage.base import BlobStore
from .storage.gateway import DatasetGateway, PublishOutcome, create_store
from .utils.logging import log_event, setup_logging

__all__ = ["RunCancelled", "build_failure_summary", "build_run_summary", "run_pipeline"]

CANCELLED = "cancelled"


def run_pipeline(
    cfg: AppConfig,
    store: BlobStore | None = None,
    sources: Mapping[str, Sequence[FeedSource]] | None = None,
    show_progress: bool = False,
    console: Console | None = None,
    cancel_event: threading.Event | None = None,
    now: datetime | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[RunResult]:
    """Run the complete ingestion pipeline once.

    Args:
        cfg: Application configuration
        store: Blob store to publish to (built from cfg.storage if None)
        sources: Topic -> feed sources (built from cfg.sources if None)
        show_progress: Whether to display progress bars
        console: Rich console for output (creates default if None)
        cancel_event: Set from another thread to stop between topics or batches
        now: Reference time for timestamps and retention (defaults to now)
        transport: Optional httpx transport override

    Returns:
        One RunResult per topic in catalog order, then the aggregate's result
        (omitted when the run was cancelled)
    """
    logger = setup_logging(cfg.logging)
    catalog = sources if sources is not None else build_catalog(cfg.sources)
    aggregate_topic = cfg.storage.aggregate_topic
    if aggregate_topic in catalog:
        raise ValueError(f"'{aggregate_topic}' is reserved for the aggregate dataset")

    store = store if store is not None else create_store(cfg.storage)
    gateway = DatasetGateway(store, cfg.storage, cfg.retention, logger)
    processor = TopicProcessor(cfg, logger, transport)
    claimed_urls: set[str] = set()

    log_event(
        logger,
        "Pipeline start",
        event="pipeline_start",
        topics=list(catalog),
        sources=sum(len(feeds) for feeds in catalog.values()),
        max_articles=cfg.retention.max_articles,
        age_filter=cfg.retention.age_filter,
        max_age_hours=cfg.retention.horizon_hours,
    )

    results: list[RunResult] = []
    cancelled = False

    def _run_topic(topic: str, feeds: Sequence[FeedSource], on_batch=None) -> RunResult:
        nonlocal cancelled
        if cancelled or (cancel_event is not None and cancel_event.is_set()):
            cancelled = True
            return RunResult(topic=topic, success=False, error=CANCELLED)
        try:
            output = asyncio.run(
                processor.process(topic, feeds, claimed_urls, cancel_event, on_batch=on_batch, now=now)
            )
            outcome = gateway.publish(topic, output.articles, now=now)
        except RunCancelled:
            cancelled = True
            log_event(logger, f"Run cancelled during {topic}", level=logging.WARNING, event="run_cancelled", topic=topic)
            return RunResult(topic=topic, success=False, error=CANCELLED)
        except Exception as exc:
            logger.error(
                f"Topic {topic} failed: {exc}",
                exc_info=True,
                extra={"event": "topic_failed", "topic": topic, "error": str(exc)},
            )
            return RunResult(topic=topic, success=False, error=str(exc) or type(exc).__name__)
        return _to_result(topic, outcome)

    def _run_aggregate() -> RunResult:
        try:
            outcome = gateway.publish_aggregate(list(catalog), now=now)
        except Exception as exc:
            logger.error(
                f"Aggregate failed: {exc}",
                exc_info=True,
                extra={"event": "aggregate_failed", "topic": aggregate_topic, "error": str(exc)},
            )
            return RunResult(topic=aggregate_topic, success=False, error=str(exc) or type(exc).__name__)
        return _to_result(aggregate_topic, outcome)

    if not show_progress:
        for topic, feeds in catalog.items():
            results.append(_run_topic(topic, feeds))
        if not cancelled:
            results.append(_run_aggregate())
    else:
        console = console or Console()
        progress = Progress(
            SpinnerColumn(),
            TextColumn("{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TimeElapsedColumn(),
            console=console,
        )
        with progress:
            topic_task = progress.add_task("Topics", total=len(catalog) + 1)
            for topic, feeds in catalog.items():
                article_task = progress.add_task(f"  {topic}", total=None)
                result = _run_topic(
                    topic,
                    feeds,
                    on_batch=lambda n, task=article_task: progress.advance(task, n),
                )
                results.append(result)
                progress.update(article_task, total=result.total_articles or 1, completed=result.total_articles or 1)
                progress.advance(topic_task, 1)
            if not cancelled:
                results.append(_run_aggregate())
            progress.advance(topic_task, 1)

    summary = build_run_summary(results)["summary"]
    log_event(
        logger,
        f"Pipeline complete: {summary['successful']}/{summary['total_categories']} published",
        event="pipeline_complete",
        cancelled=cancelled,
        **summary,
    )
    return results


def build_run_summary(results: Sequence[RunResult], now: datetime | None = None) -> dict[str, Any]:
    """Build the JSON payload reported to whoever triggered the run.

    A run that completed reports success=True even when some topics failed;
    those show up in summary.failed and in their own results entry. Use
    build_failure_summary when run_pipeline itself raised.
    """
    successful = [r for r in results if r.success]
    failed = [r for r in results if not r.success]
    return {
        "success": True,
        "message": "Pipeline completed" if not failed else "Pipeline completed with failures",
        "timestamp": format_timestamp(now or utc_now()),
        "summary": {
            "total_categories": len(results),
            "successful": len(successful),
            "failed": len(failed),
            "total_articles": sum(r.total_articles for r in results),
        },
        "results": [r.to_dict() for r in results],
    }


def build_failure_summary(error: BaseException | str, now: datetime | None = None) -> dict[str, Any]:
    """Build the trigger payload for a run that aborted before completing."""
    return {
        "success": False,
        "message": "Pipeline failed",
        "error": str(error),
        "timestamp": format_timestamp(now or utc_now()),
    }


def _to_result(topic: str, outcome: PublishOutcome) -> RunResult:
    merge = outcome.merge
    return RunResult(
        topic=topic,
        success=True,
        total_articles=len(merge.dataset.articles),
        new_articles=merge.new_count,
        removed_articles=merge.removed_count,
        verified=outcome.verified,
        location=outcome.location,
    )
