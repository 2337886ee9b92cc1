"""
Merge freshly processed articles into a previously published dataset.

The merge is the heart of the read-merge-write protocol:
1. Concatenate new + existing articles
2. Keep one article per URL, preferring the later published_at
3. Optionally drop articles older than the retention horizon
4. Sort by published_at descending
5. Evict the oldest articles beyond the size cap
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Iterable

from .dates import format_timestamp, utc_now
from .types import Article, TopicDataset

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


@dataclass
class MergeResult:
    """Outcome of a merge.

    Attributes:
        dataset: The merged dataset ready to be written
        new_count: Articles whose URL was not in the existing dataset
        evicted_count: Articles dropped by the size cap
        expired_count: Articles dropped by the retention horizon
    """
    dataset: TopicDataset
    new_count: int = 0
    evicted_count: int = 0
    expired_count: int = 0

    @property
    def removed_count(self) -> int:
        return self.evicted_count + self.expired_count


def merge_articles(
    topic: str,
    new_articles: Iterable[Article],
    existing: Iterable[Article],
    *,
    max_articles: int,
    max_age_hours: float | None = None,
    now: datetime | None = None,
) -> MergeResult:
    """Merge new articles into existing ones and enforce retention.

    Args:
        topic: Topic name for the resulting dataset
        new_articles: Articles produced by this run
        existing: Articles currently stored for the topic
        max_articles: Size cap; the most recent articles are kept
        max_age_hours: Retention horizon, or None to disable age filtering
        now: Reference time for retention and updated_at (defaults to now)

    Returns:
        MergeResult with the sorted dataset and bookkeeping counts
    """
    now = now or utc_now()
    new_list = list(new_articles)
    existing_list = list(existing)
    existing_urls = {article.url for article in existing_list}

    merged = dedup_latest([*new_list, *existing_list])

    expired = 0
    if max_age_hours is not None:
        horizon = now - timedelta(hours=max_age_hours)
        kept = [a for a in merged if _is_within(a, horizon)]
        expired = len(merged) - len(kept)
        merged = kept

    merged = sort_by_recency(merged)

    evicted = max(0, len(merged) - max_articles)
    if evicted:
        merged = merged[:max_articles]

    final_urls = {article.url for article in merged}
    new_count = len({a.url for a in new_list if a.url not in existing_urls} & final_urls)

    return MergeResult(
        dataset=TopicDataset(topic=topic, updated_at=format_timestamp(now), articles=merged),
        new_count=new_count,
        evicted_count=evicted,
        expired_count=expired,
    )


def dedup_latest(articles: Iterable[Article]) -> list[Article]:
    """Keep one article per URL, preferring the later published_at.

    Ties keep the first copy encountered. An unparseable timestamp ranks below
    any parseable one. The surviving article takes the position of the URL's
    first occurrence.
    """
    by_url: dict[str, Article] = {}
    for article in articles:
        current = by_url.get(article.url)
        if current is None or _recency(article) > _recency(current):
            by_url[article.url] = article
    return list(by_url.values())


def sort_by_recency(articles: Iterable[Article]) -> list[Article]:
    """Stable sort by published_at descending; unparseable timestamps last."""
    return sorted(articles, key=_recency, reverse=True)


def _recency(article: Article) -> datetime:
    return article.published_datetime or _OLDEST


def _is_within(article: Article, horizon: datetime) -> bool:
    published = article.published_datetime
    if published is None:
        return False
    return published >= horizon
