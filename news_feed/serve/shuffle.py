"""
Read-side shuffled pagination over a published dataset.

Every call shuffles its own copy of the stored articles, so two callers asking
for the same page see the same article set in different orders. The stored
dataset is only read, never written.
"""

from __future__ import annotations

import random
from typing import Any, Iterable

from ..catalog import build_catalog
from ..core.dates import format_timestamp, utc_now
from ..storage.codec import article_to_dict
from ..storage.gateway import DatasetGateway


MAX_LIMIT = 800


class InvalidPageRequest(ValueError):
    """The category, page or limit of a request is not acceptable."""


class DatasetNotFound(LookupError):
    """No dataset has been published for the requested category."""


def shuffled_page(
    gateway: DatasetGateway,
    category: str,
    page: int = 1,
    limit: int = 50,
    rng: random.Random | None = None,
    topics: Iterable[str] | None = None,
) -> dict[str, Any]:
    """Return one page of a category's articles in random order.

    Args:
        gateway: Gateway used to read the stored dataset
        category: A catalog topic or the aggregate topic
        page: 1-based page number
        limit: Page size, between 1 and 800
        rng: Random source (seeded in tests)
        topics: Accepted topics; defaults to the built-in catalog

    Returns:
        Response payload with the page of articles and pagination info

    Raises:
        InvalidPageRequest: For an unknown category or out-of-range page/limit
        DatasetNotFound: If the category has never been published
    """
    allowed = set(topics) if topics is not None else set(build_catalog())
    allowed.add(gateway.storage_cfg.aggregate_topic)
    if category not in allowed:
        raise InvalidPageRequest(f"Invalid category: {category}. Valid: {', '.join(sorted(allowed))}")
    if page < 1 or limit < 1 or limit > MAX_LIMIT:
        raise InvalidPageRequest(f"page must be >= 1, limit must be 1-{MAX_LIMIT}")

    dataset = gateway.read(category)
    if dataset is None:
        raise DatasetNotFound(f"No articles found for category: {category}")

    articles = list(dataset.articles)
    (rng or random.Random()).shuffle(articles)

    total = len(articles)
    total_pages = (total + limit - 1) // limit
    start = (page - 1) * limit
    return {
        "category": category,
        "updated_at": dataset.updated_at,
        "articles": [article_to_dict(article) for article in articles[start : start + limit]],
        "pagination": {
            "page": page,
            "limit": limit,
            "total_articles": total,
            "total_pages": total_pages,
            "has_next": page < total_pages,
            "has_prev": page > 1,
        },
        "shuffled": True,
        "timestamp": format_timestamp(utc_now()),
    }
