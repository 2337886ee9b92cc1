"""Tests for the per-topic fetch/extract/summarize stage."""

from __future__ import annotations

import asyncio
import logging
import threading

import pytest

from news_feed.config import AppConfig
from news_feed.core.types import FeedSource
from news_feed.processors import RunCancelled, TopicProcessor

from fakes import BASE_TIME, FakeWeb, article_page, long_body, rss_feed, rss_item


FEED_A = FeedSource(topic="politics", endpoint="https://a.example.com/rss", display_name="Source A")
FEED_B = FeedSource(topic="politics", endpoint="https://b.example.com/rss", display_name="Source B")


def _cfg() -> AppConfig:
    cfg = AppConfig()
    cfg.fetch.retry_delay_seconds = 0
    cfg.logging.console = False
    return cfg


def _process(web, sources, claimed=None, cfg=None, cancel_event=None):
    processor = TopicProcessor(cfg or _cfg(), logging.getLogger("test_processor"), web.transport)
    claimed = claimed if claimed is not None else set()
    return asyncio.run(processor.process("politics", sources, claimed, cancel_event, now=BASE_TIME))


def test_process_builds_articles_in_catalog_order():
    web = FakeWeb()
    web.add_feed(
        FEED_A.endpoint,
        rss_feed(
            rss_item("A1", "https://a.example.com/1", BASE_TIME, media="https://img.example.com/a1.jpg"),
            rss_item("A2", "https://a.example.com/2"),
        ),
    )
    web.add_feed(FEED_B.endpoint, rss_feed(rss_item("B1", "https://b.example.com/1", BASE_TIME)))
    web.add("https://a.example.com/1", article_page(long_body(4), og_image="https://img.example.com/page.jpg"))
    web.add("https://a.example.com/2", article_page(long_body(4), og_image="https://img.example.com/page2.jpg"))
    web.add("https://b.example.com/1", article_page(long_body(4)))

    output = _process(web, [FEED_A, FEED_B])

    assert [a.url for a in output.articles] == [
        "https://a.example.com/1",
        "https://a.example.com/2",
        "https://b.example.com/1",
    ]
    first, second, third = output.articles
    assert first.image == "https://img.example.com/a1.jpg"
    assert second.image == "https://img.example.com/page2.jpg"
    assert third.image is None
    assert first.source == "Source A"
    assert first.topic == "politics"
    assert first.published_at == "2026-10-19T12:00:00.000Z"
    assert second.published_at == "2026-10-19T12:00:00.000Z"
    assert first.summary != first.title
    assert len(first.summary.split()) <= 40


def test_failing_source_does_not_abort_topic():
    web = FakeWeb()
    web.add(FEED_A.endpoint, "down", status=500)
    web.add_feed(FEED_B.endpoint, rss_feed(rss_item("B1", "https://b.example.com/1")))
    web.add("https://b.example.com/1", article_page(long_body(3)))

    output = _process(web, [FEED_A, FEED_B])

    assert [a.url for a in output.articles] == ["https://b.example.com/1"]
    assert output.stats.sources == 2
    assert output.stats.sources_empty == 1


def test_slow_source_times_out():
    cfg = _cfg()
    cfg.fetch.source_timeout_seconds = 0.05
    web = FakeWeb()
    web.add(FEED_A.endpoint, rss_feed(rss_item("Late", "https://a.example.com/late")), delay=1.0)
    web.add_feed(FEED_B.endpoint, rss_feed(rss_item("B1", "https://b.example.com/1")))
    web.add("https://b.example.com/1", article_page(long_body(3)))

    output = _process(web, [FEED_A, FEED_B], cfg=cfg)

    assert [a.url for a in output.articles] == ["https://b.example.com/1"]
    assert output.stats.sources_empty == 1


def test_forbidden_page_falls_back_to_title_without_retry():
    web = FakeWeb()
    web.add_feed(FEED_A.endpoint, rss_feed(rss_item("Locked story", "https://a.example.com/locked")))
    web.add("https://a.example.com/locked", "denied", status=403)

    output = _process(web, [FEED_A])

    assert len(output.articles) == 1
    assert output.articles[0].summary == "Locked story"
    assert output.stats.extract_failed == 1
    assert web.count("https://a.example.com/locked") == 1


def test_duplicates_and_claimed_urls_are_dropped():
    web = FakeWeb()
    web.add_feed(
        FEED_A.endpoint,
        rss_feed(
            rss_item("Shared", "https://x.example.com/shared"),
            rss_item("Owned elsewhere", "https://x.example.com/claimed"),
        ),
    )
    web.add_feed(FEED_B.endpoint, rss_feed(rss_item("Shared again", "https://x.example.com/shared")))
    web.add("https://x.example.com/shared", article_page(long_body(3)))
    claimed = {"https://x.example.com/claimed"}

    output = _process(web, [FEED_A, FEED_B], claimed=claimed)

    assert [a.title for a in output.articles] == ["Shared"]
    assert output.stats.duplicates == 1
    assert output.stats.claimed_elsewhere == 1
    assert claimed == {"https://x.example.com/claimed", "https://x.example.com/shared"}
    assert web.count("https://x.example.com/claimed") == 0


def test_batches_preserve_item_order():
    cfg = _cfg()
    cfg.extract.batch_size = 2
    web = FakeWeb()
    urls = [f"https://a.example.com/{i}" for i in range(5)]
    web.add_feed(FEED_A.endpoint, rss_feed(*(rss_item(f"Story {i}", url) for i, url in enumerate(urls))))
    for url in urls:
        web.add(url, article_page(long_body(3)))

    output = _process(web, [FEED_A], cfg=cfg)

    assert [a.url for a in output.articles] == urls


def test_page_fetches_never_exceed_batch_size():
    """A batch starts only after the previous one has finished."""
    cfg = _cfg()
    cfg.extract.batch_size = 2
    web = FakeWeb()
    urls = [f"https://a.example.com/{i}" for i in range(6)]
    web.add_feed(FEED_A.endpoint, rss_feed(*(rss_item(f"Story {i}", url) for i, url in enumerate(urls))))
    for url in urls:
        web.add(url, article_page(long_body(3)), delay=0.02)

    output = _process(web, [FEED_A], cfg=cfg)

    assert len(output.articles) == 6
    assert web.peak_in_flight == 2


def test_feed_fetches_bounded_by_source_concurrency():
    cfg = _cfg()
    cfg.fetch.source_concurrency = 2
    web = FakeWeb()
    sources = [
        FeedSource(topic="politics", endpoint=f"https://feed{i}.example.com/rss", display_name=f"Feed {i}")
        for i in range(5)
    ]
    for source in sources:
        web.add(source.endpoint, rss_feed(), content_type="application/rss+xml", delay=0.02)

    output = _process(web, sources, cfg=cfg)

    assert output.stats.sources == 5
    assert web.peak_in_flight == 2


def test_malformed_source_url_does_not_abort_topic():
    broken = FeedSource(topic="politics", endpoint="http://[::1/rss", display_name="Broken")
    web = FakeWeb()
    web.add_feed(FEED_B.endpoint, rss_feed(rss_item("B1", "https://b.example.com/1")))
    web.add("https://b.example.com/1", article_page(long_body(3)))

    output = _process(web, [broken, FEED_B])

    assert [a.url for a in output.articles] == ["https://b.example.com/1"]
    assert output.stats.sources_empty == 1


def test_cancel_before_batch_raises():
    web = FakeWeb()
    web.add_feed(FEED_A.endpoint, rss_feed(rss_item("Story", "https://a.example.com/1")))
    cancel = threading.Event()
    cancel.set()

    with pytest.raises(RunCancelled):
        _process(web, [FEED_A], cancel_event=cancel)

    assert web.count("https://a.example.com/1") == 0


def test_favicon_fallback_is_opt_in():
    cfg = _cfg()
    cfg.extract.favicon_fallback = True
    web = FakeWeb()
    web.add_feed(FEED_A.endpoint, rss_feed(rss_item("Story", "https://a.example.com/1")))
    web.add("https://a.example.com/1", article_page(long_body(3)))

    output = _process(web, [FEED_A], cfg=cfg)

    assert output.articles[0].image == "https://www.google.com/s2/favicons?domain=a.example.com&sz=256"
