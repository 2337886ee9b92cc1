"""
Per-topic pipeline: fetch feeds, dedup, claim, extract and summarize.

A topic is processed in two phases:
1. All feed sources are fetched concurrently (bounded by source_concurrency),
   each under its own hard timeout, and their items concatenated in catalog order.
2. Surviving items are extracted and summarized in fixed-size batches; a batch
   starts only after the previous one has fully finished.

Failures below the topic level (a source, a page) are logged and degrade the
output instead of aborting it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
import asyncio
import logging
import threading
from typing import Callable, Sequence

import httpx

from ..config import AppConfig
from ..core.dates import normalize_published, utc_now
from ..core.dedup import claim_urls, dedup_items
from ..core.types import Article, ExtractedContent, FeedSource, RawItem
from ..fetch.extractor import extract_content
from ..fetch.feeds import fetch_feed
from ..fetch.fetcher import build_client
from ..fetch.images import favicon_url
from ..summarize import summarize
from ..utils.logging import get_logger, log_event, truncate_text


class RunCancelled(Exception):
    """Raised when a run is cancelled between batches or topics."""

    def __init__(self, topic: str) -> None:
        super().__init__(f"Run cancelled while processing {topic}")
        self.topic = topic


@dataclass
class TopicStats:
    """Counters collected while processing one topic.

    Attributes:
        sources: Feed sources attempted
        sources_empty: Sources that contributed no items, whether they failed or were empty
        items: Items parsed across all sources
        duplicates: Items dropped by within-topic dedup
        claimed_elsewhere: Items dropped because an earlier topic owns the URL
        extract_failed: Articles summarized from their title only
    """
    sources: int = 0
    sources_empty: int = 0
    items: int = 0
    duplicates: int = 0
    claimed_elsewhere: int = 0
    extract_failed: int = 0


@dataclass
class TopicOutput:
    topic: str
    articles: list[Article] = field(default_factory=list)
    stats: TopicStats = field(default_factory=TopicStats)


class TopicProcessor:
    """Turns a topic's feed sources into summarized articles.

    Args:
        cfg: Application configuration
        logger: Logger for per-source and per-article events
        transport: Optional httpx transport (tests inject httpx.MockTransport)
    """

    def __init__(
        self,
        cfg: AppConfig,
        logger: logging.Logger | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.cfg = cfg
        self.logger = logger or get_logger("processor")
        self.transport = transport

    async def process(
        self,
        topic: str,
        sources: Sequence[FeedSource],
        claimed_urls: set[str],
        cancel_event: threading.Event | None = None,
        on_batch: Callable[[int], None] | None = None,
        now: datetime | None = None,
    ) -> TopicOutput:
        """Process one topic end to end, short of persistence.

        Args:
            topic: Topic name
            sources: The topic's feed sources, in catalog order
            claimed_urls: Run-scoped set of URLs owned by earlier topics; the
                URLs this topic keeps are added to it
            cancel_event: Checked before each extraction batch
            on_batch: Called with the batch size after each batch completes
            now: Fallback publication time for items without a timestamp

        Returns:
            TopicOutput with articles in item order

        Raises:
            RunCancelled: If cancel_event is set before a batch starts
        """
        fetched_at = now or utc_now()
        stats = TopicStats(sources=len(sources))
        max_connections = max(self.cfg.fetch.source_concurrency, self.cfg.extract.batch_size)

        async with build_client(self.cfg.fetch, max_connections, self.transport) as client:
            raw_items = await self._fetch_sources(client, sources, stats)
            stats.items = len(raw_items)

            unique = dedup_items(
                raw_items,
                title_similarity=self.cfg.dedup.title_similarity_enabled,
                threshold=self.cfg.dedup.title_similarity_threshold,
            )
            stats.duplicates = len(raw_items) - len(unique)

            owned = claim_urls(unique, claimed_urls)
            stats.claimed_elsewhere = len(unique) - len(owned)

            log_event(
                self.logger,
                f"{topic}: {len(owned)} items to process",
                event="topic_items",
                topic=topic,
                items=stats.items,
                duplicates=stats.duplicates,
                claimed_elsewhere=stats.claimed_elsewhere,
                owned=len(owned),
            )

            articles: list[Article] = []
            batch_size = max(1, self.cfg.extract.batch_size)
            for start in range(0, len(owned), batch_size):
                if cancel_event is not None and cancel_event.is_set():
                    raise RunCancelled(topic)
                batch = owned[start : start + batch_size]
                built = await asyncio.gather(
                    *(self._build_article(client, topic, item, fetched_at, stats) for item in batch)
                )
                articles.extend(built)
                if on_batch is not None:
                    on_batch(len(batch))

        return TopicOutput(topic=topic, articles=articles, stats=stats)

    async def _fetch_sources(
        self,
        client: httpx.AsyncClient,
        sources: Sequence[FeedSource],
        stats: TopicStats,
    ) -> list[RawItem]:
        semaphore = asyncio.Semaphore(max(1, self.cfg.fetch.source_concurrency))

        async def _fetch_single(source: FeedSource) -> list[RawItem]:
            async with semaphore:
                try:
                    items = await asyncio.wait_for(
                        fetch_feed(client, source, self.cfg.fetch, self.logger),
                        timeout=self.cfg.fetch.source_timeout_seconds,
                    )
                except asyncio.TimeoutError:
                    log_event(
                        self.logger,
                        f"Timeout fetching {source.display_name}",
                        level=logging.WARNING,
                        event="source_timeout",
                        topic=source.topic,
                        source=source.display_name,
                        url=source.endpoint,
                    )
                    items = []
            if not items:
                stats.sources_empty += 1
            return items

        # gather preserves argument order, so items stay in catalog order.
        results = await asyncio.gather(*(_fetch_single(source) for source in sources))
        return [item for items in results for item in items]

    async def _build_article(
        self,
        client: httpx.AsyncClient,
        topic: str,
        item: RawItem,
        fetched_at: datetime,
        stats: TopicStats,
    ) -> Article:
        try:
            content = await extract_content(client, item.url, self.cfg.fetch, self.cfg.extract, self.logger)
        except Exception as exc:
            log_event(
                self.logger,
                f"Extraction crashed for {truncate_text(item.url, 80)}",
                level=logging.WARNING,
                event="extract_error",
                topic=topic,
                url=item.url,
                error=f"{type(exc).__name__}: {exc}",
            )
            content = ExtractedContent(error=str(exc))

        if not content.text:
            stats.extract_failed += 1

        image = item.image_url or content.image_url
        if image is None and self.cfg.extract.favicon_fallback:
            image = favicon_url(item.url)

        return Article(
            title=item.title,
            url=item.url,
            summary=summarize(content.text, item.title, self.cfg.summary),
            image=image,
            published_at=normalize_published(item.published_raw, fetched_at),
            source=item.source,
            topic=topic,
        )
