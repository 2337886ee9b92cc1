"""Tests for shuffled pagination over published datasets."""

from __future__ import annotations

import random

import pytest

from news_feed.serve import DatasetNotFound, InvalidPageRequest, shuffled_page
from news_feed.storage import DatasetGateway, MemoryBlobStore

from fakes import BASE_TIME, hours_ago, make_article


def _gateway_with(count: int, topic: str = "sports") -> DatasetGateway:
    gateway = DatasetGateway(MemoryBlobStore())
    articles = [make_article(f"https://x/{i}", hours_ago(i), topic=topic) for i in range(count)]
    gateway.publish(topic, articles, now=BASE_TIME)
    return gateway


def test_repeated_reads_shuffle_same_articles_without_writing():
    gateway = _gateway_with(30)
    key = gateway.key_for("sports")
    before = gateway.store.get(key)

    first = shuffled_page(gateway, "sports", limit=30, rng=random.Random(1))
    second = shuffled_page(gateway, "sports", limit=30, rng=random.Random(2))

    first_urls = [a["url"] for a in first["articles"]]
    second_urls = [a["url"] for a in second["articles"]]
    assert sorted(first_urls) == sorted(second_urls)
    assert first_urls != second_urls
    assert gateway.store.get(key) == before
    assert first["shuffled"] is True
    assert first["updated_at"] == "2026-10-19T12:00:00.000Z"


def test_pagination_fields():
    gateway = _gateway_with(120)

    response = shuffled_page(gateway, "sports", page=3, limit=50, rng=random.Random(0))

    assert len(response["articles"]) == 20
    assert response["pagination"] == {
        "page": 3,
        "limit": 50,
        "total_articles": 120,
        "total_pages": 3,
        "has_next": False,
        "has_prev": True,
    }


def test_page_past_the_end_is_empty():
    response = shuffled_page(_gateway_with(5), "sports", page=4, limit=2)

    assert response["articles"] == []
    assert response["pagination"]["total_pages"] == 3


def test_aggregate_category_is_accepted():
    gateway = _gateway_with(3, topic="general")

    response = shuffled_page(gateway, "general")

    assert response["pagination"]["total_articles"] == 3
    assert response["pagination"]["has_next"] is False
    assert response["pagination"]["has_prev"] is False


@pytest.mark.parametrize(
    "category,page,limit",
    [("weather", 1, 50), ("sports", 0, 50), ("sports", 1, 0), ("sports", 1, 801)],
)
def test_invalid_requests(category, page, limit):
    with pytest.raises(InvalidPageRequest):
        shuffled_page(_gateway_with(1), category, page=page, limit=limit)


def test_unpublished_category_is_not_found():
    with pytest.raises(DatasetNotFound):
        shuffled_page(DatasetGateway(MemoryBlobStore()), "politics")
