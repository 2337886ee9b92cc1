"""
Read-merge-write persistence of topic datasets.

Every publish follows the same protocol:
1. Read the stored dataset (a missing key means a first run)
2. Merge the new articles into it under the retention rules
3. Write the merged dataset and make it public
4. Verify by re-reading metadata and content

Write failures propagate so the caller can fail the topic. Verification
failures do not: they are logged and reported as verified=False.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
import logging
from typing import Iterable

from ..config import RetentionConfig, StorageConfig, get_store_root
from ..core.dates import utc_now
from ..core.merge import MergeResult, merge_articles
from ..core.types import Article, TopicDataset
from ..utils.logging import get_logger, log_event
from .base import BlobNotFound, BlobStore, StorageError
from .codec import decode_dataset, encode_dataset
from .local import LocalBlobStore
from .memory import MemoryBlobStore


@dataclass
class PublishOutcome:
    """Result of publishing one dataset.

    Attributes:
        key: Store key written
        merge: The merge that produced the written dataset
        verified: Whether the read-back matched what was written
        location: Public URL of the dataset
    """
    key: str
    merge: MergeResult
    verified: bool
    location: str


def create_store(cfg: StorageConfig) -> BlobStore:
    """Build the blob store selected by configuration."""
    if cfg.backend == "local":
        return LocalBlobStore(get_store_root(cfg), public_base_url=cfg.public_base_url)
    if cfg.backend == "memory":
        return MemoryBlobStore()
    raise ValueError(f"Unsupported storage backend: {cfg.backend}")


class DatasetGateway:
    """Publishes topic datasets to a blob store.

    Args:
        store: Backing blob store
        storage_cfg: Key layout and write headers
        retention_cfg: Caps and retention horizon applied on every merge
        logger: Logger for publish and verification events
    """

    def __init__(
        self,
        store: BlobStore,
        storage_cfg: StorageConfig | None = None,
        retention_cfg: RetentionConfig | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.store = store
        self.storage_cfg = storage_cfg or StorageConfig()
        self.retention_cfg = retention_cfg or RetentionConfig()
        self.logger = logger or get_logger("storage")

    def key_for(self, topic: str) -> str:
        return f"{self.storage_cfg.key_prefix}news_{topic}.json"

    def read(self, topic: str) -> TopicDataset | None:
        """Read a topic's stored dataset.

        Returns:
            The dataset, or None if nothing has been published yet

        Raises:
            StorageError: If the stored payload cannot be decoded
        """
        key = self.key_for(topic)
        try:
            data = self.store.get(key)
        except BlobNotFound:
            return None
        return decode_dataset(data, topic)

    def publish(self, topic: str, articles: Iterable[Article], now: datetime | None = None) -> PublishOutcome:
        """Merge articles into the stored dataset for topic and write it back."""
        now = now or utc_now()
        existing = self.read(topic)
        if existing is None:
            log_event(self.logger, f"No stored dataset for {topic}, starting fresh", event="dataset_missing", topic=topic)

        merge = merge_articles(
            topic,
            articles,
            existing.articles if existing else [],
            max_articles=self.retention_cfg.max_articles,
            max_age_hours=self.retention_cfg.horizon_hours,
            now=now,
        )
        return self._write_and_verify(topic, merge)

    def publish_aggregate(self, topics: Iterable[str], now: datetime | None = None) -> PublishOutcome:
        """Rebuild the all-topics dataset from the stored topic datasets.

        The aggregate is derived fresh on every run rather than merged into
        the previous aggregate, so articles dropped from every topic also
        leave the aggregate. Topics that cannot be read are skipped.
        """
        now = now or utc_now()
        aggregate_topic = self.storage_cfg.aggregate_topic

        collected: list[Article] = []
        for topic in topics:
            if topic == aggregate_topic:
                continue
            try:
                dataset = self.read(topic)
            except StorageError as exc:
                log_event(
                    self.logger,
                    f"Skipping {topic} in aggregate: {exc}",
                    level=logging.WARNING,
                    event="aggregate_skip",
                    topic=topic,
                    error=str(exc),
                )
                continue
            if dataset is not None:
                collected.extend(dataset.articles)

        previous_urls = self._previous_urls(aggregate_topic)
        merge = merge_articles(
            aggregate_topic,
            collected,
            [],
            max_articles=self.retention_cfg.aggregate_max_articles,
            max_age_hours=self.retention_cfg.horizon_hours,
            now=now,
        )
        merge.new_count = len({a.url for a in merge.dataset.articles} - previous_urls)
        return self._write_and_verify(aggregate_topic, merge)

    def verify(self, key: str, expected_count: int) -> bool:
        """Check that the stored object at key holds expected_count articles."""
        try:
            meta = self.store.metadata(key)
            data = self.store.get(key)
            stored = decode_dataset(data)
        except (StorageError, OSError) as exc:
            log_event(
                self.logger,
                f"Verification failed for {key}: {exc}",
                level=logging.WARNING,
                event="verify_failed",
                key=key,
                error=str(exc),
            )
            return False

        if len(stored.articles) != expected_count or meta.size != len(data):
            log_event(
                self.logger,
                f"Verification mismatch for {key}: expected {expected_count}, found {len(stored.articles)}",
                level=logging.WARNING,
                event="verify_failed",
                key=key,
                expected=expected_count,
                found=len(stored.articles),
                size=meta.size,
            )
            return False

        log_event(
            self.logger,
            f"Verified {key}: {expected_count} articles, {meta.size} bytes",
            level=logging.DEBUG,
            event="verify_ok",
            key=key,
            size=meta.size,
            updated=meta.updated,
        )
        return True

    def _write_and_verify(self, topic: str, merge: MergeResult) -> PublishOutcome:
        key = self.key_for(topic)
        payload = encode_dataset(merge.dataset)
        self.store.put(key, payload, self.storage_cfg.content_type, self.storage_cfg.cache_control)
        self.store.make_public(key)

        verified = self.verify(key, len(merge.dataset.articles))
        location = self.store.public_url(key)
        log_event(
            self.logger,
            f"Published {topic}: {len(merge.dataset.articles)} articles "
            f"({merge.new_count} new, {merge.removed_count} removed)",
            event="topic_published",
            topic=topic,
            key=key,
            total=len(merge.dataset.articles),
            new=merge.new_count,
            evicted=merge.evicted_count,
            expired=merge.expired_count,
            verified=verified,
        )
        return PublishOutcome(key=key, merge=merge, verified=verified, location=location)

    def _previous_urls(self, topic: str) -> set[str]:
        try:
            previous = self.read(topic)
        except StorageError:
            return set()
        return {a.url for a in previous.articles} if previous else set()
