"""End-to-end tests for the run orchestrator with a fake web and in-memory store."""

from __future__ import annotations

import threading

from news_feed.catalog import build_catalog
from news_feed.config import AppConfig
from news_feed.runner import build_failure_summary, build_run_summary, run_pipeline
from news_feed.storage import DatasetGateway, MemoryBlobStore, StorageError

from fakes import BASE_TIME, FakeWeb, article_page, hours_ago, long_body, rss_feed, rss_item


POLITICS_FEED = "https://politics.example.com/rss"
SPORTS_FEED = "https://sports.example.com/rss"
SHARED = "https://news.example.com/shared"

SOURCES = build_catalog(
    {
        "politics": [{"url": POLITICS_FEED, "name": "Politics Daily"}],
        "sports": [{"url": SPORTS_FEED, "name": "Sports Daily"}],
    }
)


class FailingTopicStore(MemoryBlobStore):
    def __init__(self, failing_key: str) -> None:
        super().__init__()
        self.failing_key = failing_key

    def put(self, key, data, content_type, cache_control=None):
        if key == self.failing_key:
            raise StorageError("bucket unavailable")
        super().put(key, data, content_type, cache_control)


def _cfg() -> AppConfig:
    cfg = AppConfig()
    cfg.fetch.retry_delay_seconds = 0
    cfg.logging.console = False
    return cfg


def _web() -> FakeWeb:
    web = FakeWeb()
    web.add_feed(
        POLITICS_FEED,
        rss_feed(
            rss_item("Budget approved", "https://politics.example.com/1", hours_ago(1)),
            rss_item("Shared story", SHARED, hours_ago(2)),
        ),
    )
    web.add_feed(
        SPORTS_FEED,
        rss_feed(
            rss_item("Derby tonight", "https://sports.example.com/1", hours_ago(3)),
            rss_item("Shared story", SHARED, hours_ago(2)),
        ),
    )
    for url in ("https://politics.example.com/1", SHARED, "https://sports.example.com/1"):
        web.add(url, article_page(long_body(4)))
    return web


def _run(store, web=None, cfg=None, cancel_event=None):
    web = web or _web()
    return run_pipeline(
        cfg or _cfg(),
        store=store,
        sources=SOURCES,
        cancel_event=cancel_event,
        now=BASE_TIME,
        transport=web.transport,
    )


def test_run_publishes_topics_and_aggregate():
    store = MemoryBlobStore()

    results = _run(store)

    assert [r.topic for r in results] == ["politics", "sports", "general"]
    assert all(r.success and r.verified for r in results)
    assert [r.total_articles for r in results] == [2, 1, 3]
    assert [r.new_articles for r in results] == [2, 1, 3]
    assert store.keys() == ["news/news_general.json", "news/news_politics.json", "news/news_sports.json"]

    gateway = DatasetGateway(store)
    politics = {a.url for a in gateway.read("politics").articles}
    sports = {a.url for a in gateway.read("sports").articles}
    general = [a.url for a in gateway.read("general").articles]
    assert SHARED in politics
    assert SHARED not in sports
    assert politics.isdisjoint(sports)
    assert general == ["https://politics.example.com/1", SHARED, "https://sports.example.com/1"]


def test_second_run_is_idempotent():
    store = MemoryBlobStore()
    _run(store)
    first = store.get("news/news_politics.json")

    results = _run(store)

    assert [r.new_articles for r in results] == [0, 0, 0]
    assert [r.removed_articles for r in results] == [0, 0, 0]
    assert [r.total_articles for r in results] == [2, 1, 3]
    assert store.get("news/news_politics.json") == first


def test_failed_topic_does_not_stop_the_run():
    store = FailingTopicStore("news/news_politics.json")

    results = _run(store)

    politics, sports, general = results
    assert politics.success is False
    assert politics.error == "bucket unavailable"
    assert sports.success is True
    assert general.success is True
    assert general.total_articles == 1


def test_corrupt_dataset_fails_only_its_topic():
    store = MemoryBlobStore()
    store.put("news/news_sports.json", b"not json", "application/json")

    results = _run(store)

    assert results[0].success is True
    assert results[1].success is False
    assert store.get("news/news_sports.json") == b"not json"
    assert results[2].success is True


def test_cancelled_run_skips_remaining_topics_and_aggregate():
    store = MemoryBlobStore()
    cancel = threading.Event()
    cancel.set()

    results = _run(store, cancel_event=cancel)

    assert [r.topic for r in results] == ["politics", "sports"]
    assert all(not r.success and r.error == "cancelled" for r in results)
    assert store.keys() == []


def test_dead_sources_publish_empty_datasets():
    web = FakeWeb()
    web.add(POLITICS_FEED, "down", status=503)
    web.add(SPORTS_FEED, "down", status=503)
    store = MemoryBlobStore()

    results = _run(store, web=web)

    assert all(r.success for r in results)
    assert [r.total_articles for r in results] == [0, 0, 0]


def test_run_summary_payload():
    store = FailingTopicStore("news/news_politics.json")
    results = _run(store)

    summary = build_run_summary(results, now=BASE_TIME)

    assert summary["success"] is True
    assert summary["message"] == "Pipeline completed with failures"
    assert summary["timestamp"] == "2026-10-19T12:00:00.000Z"
    assert summary["summary"] == {
        "total_categories": 3,
        "successful": 2,
        "failed": 1,
        "total_articles": 2,
    }
    assert summary["results"][0]["category"] == "politics"
    assert summary["results"][0]["error"] == "bucket unavailable"
    assert "error" not in summary["results"][1]
    assert summary["results"][1]["url"] == "memory://news/news_sports.json"


def test_clean_run_summary_message():
    summary = build_run_summary(_run(MemoryBlobStore()), now=BASE_TIME)

    assert summary["success"] is True
    assert summary["message"] == "Pipeline completed"
    assert summary["summary"]["failed"] == 0


def test_failure_summary_for_aborted_run():
    summary = build_failure_summary(ValueError("catalog may not contain 'general'"), now=BASE_TIME)

    assert summary == {
        "success": False,
        "message": "Pipeline failed",
        "error": "catalog may not contain 'general'",
        "timestamp": "2026-10-19T12:00:00.000Z",
    }
