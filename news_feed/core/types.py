"""
Core data types for the news feed pipeline.

This module defines the data structures passed between pipeline stages:
- FeedSource: One configured feed endpoint for a topic
- RawItem: An item stub parsed from a feed
- ExtractedContent: Full text and cover image pulled from an article page
- Article: The published value object, identified by its URL
- TopicDataset: The persisted, sorted article list for one topic
- RunResult: Per-topic audit record for a pipeline run
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .dates import parse_timestamp


@dataclass(frozen=True)
class FeedSource:
    """A single feed endpoint in the source catalog.

    Attributes:
        topic: The topic bucket this feed contributes to (e.g., "politics")
        endpoint: The RSS/Atom feed URL
        display_name: Human-readable publisher name, stored as the article source
    """
    topic: str
    endpoint: str
    display_name: str


@dataclass
class RawItem:
    """An item parsed from a feed, before extraction and summarization.

    Attributes:
        title: Cleaned item title
        url: Canonical article URL (the dedup identity)
        published_raw: The timestamp string exactly as the feed reported it, or None
        image_url: Image embedded in the feed item, if any
        source: Display name of the feed that produced the item
    """
    title: str
    url: str
    published_raw: str | None = None
    image_url: str | None = None
    source: str = ""


@dataclass
class ExtractedContent:
    """Result of fetching and extracting one article page.

    An empty text means extraction failed; callers degrade to the title.

    Attributes:
        text: Whitespace-normalized body text, truncated to the configured maximum
        image_url: Cover image discovered on the page, if any
        status_code: HTTP status of the last attempt, or None for network failures
        error: Error message when extraction failed, None otherwise
    """
    text: str = ""
    image_url: str | None = None
    status_code: int | None = None
    error: str | None = None


@dataclass(frozen=True)
class Article:
    """A summarized article as stored in a topic dataset.

    Articles are never mutated. During merge an article can only be replaced
    by another instance with the same URL and a newer published_at.

    Attributes:
        title: Article headline
        url: Canonical URL, the identity key
        summary: Extractive summary (or the title when no text was available)
        image: Cover image URL, or None
        published_at: ISO 8601 timestamp, or the raw feed value when unparseable
        source: Publisher display name
        topic: Topic the article was published under
    """
    title: str
    url: str
    summary: str
    image: str | None
    published_at: str
    source: str
    topic: str = ""

    @property
    def published_datetime(self) -> datetime | None:
        """Parsed published_at, or None when the value is unparseable."""
        return parse_timestamp(self.published_at)


@dataclass
class TopicDataset:
    """The persisted article list for one topic.

    Articles are kept sorted by published_at descending, unique by URL and
    never longer than the configured cap.
    """
    topic: str
    updated_at: str
    articles: list[Article] = field(default_factory=list)


@dataclass
class RunResult:
    """Audit record for one topic in a pipeline run.

    success is False only when the topic could not be published. verified is
    False when the write went through but the read-back check did not match.
    """
    topic: str
    success: bool
    total_articles: int = 0
    new_articles: int = 0
    removed_articles: int = 0
    verified: bool = False
    error: str | None = None
    location: str | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "category": self.topic,
            "success": self.success,
            "total_articles": self.total_articles,
            "new_articles": self.new_articles,
            "removed_articles": self.removed_articles,
            "verified": self.verified,
            "url": self.location or "",
        }
        if self.error is not None:
            payload["error"] = self.error
        return payload
