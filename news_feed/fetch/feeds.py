"""
Feed fetching and parsing into RawItem stubs.

fetch_feed never raises: timeouts, non-2xx responses and malformed payloads
are logged and produce an empty list, so one bad source never aborts a topic.
"""

from __future__ import annotations

from datetime import datetime, timezone
import logging
from typing import Any, Mapping

import feedparser
import httpx

from ..config import FetchConfig
from ..core.dates import parse_timestamp
from ..core.types import FeedSource, RawItem
from ..utils.logging import log_event
from ..utils.text import clean_text
from .fetcher import build_headers, fetch_once
from .images import feed_item_image


FEED_ACCEPT = "application/rss+xml, application/atom+xml, application/xml, text/xml, */*"


async def fetch_feed(
    client: httpx.AsyncClient,
    source: FeedSource,
    cfg: FetchConfig,
    logger: logging.Logger | None = None,
) -> list[RawItem]:
    """Fetch and parse one feed.

    Args:
        client: Shared async client
        source: Feed to fetch
        cfg: Fetch configuration
        logger: Logger for per-source events

    Returns:
        Items with a non-empty title and URL, in feed order; empty on any failure
    """
    result = await fetch_once(
        client,
        source.endpoint,
        cfg.feed_timeout_seconds,
        build_headers(cfg, FEED_ACCEPT),
    )
    if not result.ok:
        log_event(
            logger,
            f"Failed to fetch from {source.display_name}: {result.error}",
            level=logging.WARNING,
            event="source_failed",
            topic=source.topic,
            source=source.display_name,
            url=source.endpoint,
            status_code=result.status_code,
            error=result.error,
        )
        return []

    try:
        items = parse_feed(result.body or b"", source)
    except Exception as exc:
        log_event(
            logger,
            f"Failed to parse feed from {source.display_name}: {exc}",
            level=logging.WARNING,
            event="source_failed",
            topic=source.topic,
            source=source.display_name,
            url=source.endpoint,
            error=f"{type(exc).__name__}: {exc}",
        )
        return []
    if items is None:
        log_event(
            logger,
            f"Malformed feed from {source.display_name}",
            level=logging.WARNING,
            event="source_malformed",
            topic=source.topic,
            source=source.display_name,
            url=source.endpoint,
        )
        return []

    log_event(
        logger,
        f"Fetched {len(items)} articles from {source.display_name}",
        event="source_fetched",
        topic=source.topic,
        source=source.display_name,
        count=len(items),
    )
    return items


def parse_feed(payload: bytes | str, source: FeedSource) -> list[RawItem] | None:
    """Parse an RSS or Atom payload into RawItems.

    Returns:
        The parsed items, or None when the payload is not a usable feed
        (a parse error with no recoverable entries)
    """
    parsed = feedparser.parse(payload)
    entries = parsed.get("entries") or []
    if parsed.get("bozo") and not entries:
        return None
    if not entries and not parsed.get("version"):
        return None

    items: list[RawItem] = []
    for entry in entries:
        item = _entry_to_item(entry, source)
        if item is not None:
            items.append(item)
    return items


def _entry_to_item(entry: Mapping[str, Any], source: FeedSource) -> RawItem | None:
    title = clean_text(entry.get("title"))
    url = _entry_url(entry)
    if not title or not url:
        return None
    return RawItem(
        title=title,
        url=url,
        published_raw=_entry_published(entry),
        image_url=feed_item_image(entry),
        source=source.display_name,
    )


def _entry_url(entry: Mapping[str, Any]) -> str:
    link = (entry.get("link") or "").strip()
    if link:
        return link
    guid = (entry.get("id") or "").strip()
    if guid.startswith(("http://", "https://")):
        return guid
    return ""


def _entry_published(entry: Mapping[str, Any]) -> str | None:
    raw = None
    for key in ("published", "updated", "created"):
        value = entry.get(key)
        if isinstance(value, str) and value.strip():
            raw = value.strip()
            break
    if raw is not None and parse_timestamp(raw) is not None:
        return raw
    # feedparser understands more date dialects than we do; prefer its reading.
    for key in ("published_parsed", "updated_parsed"):
        struct = entry.get(key)
        if struct:
            return datetime(*struct[:6], tzinfo=timezone.utc).isoformat()
    return raw
