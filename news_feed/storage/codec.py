"""
Wire format for published topic datasets.

    {"category": str, "updated_at": ISO-8601,
     "articles": [{"title", "url", "summary", "image", "published_at", "source"}]}

Encoded as indented UTF-8 JSON. Unknown fields are ignored on read.
"""

from __future__ import annotations

import json
from typing import Any

from ..core.types import Article, TopicDataset
from .base import StorageError


ARTICLE_FIELDS = ("title", "url", "summary", "image", "published_at", "source")


def encode_dataset(dataset: TopicDataset) -> bytes:
    payload = {
        "category": dataset.topic,
        "updated_at": dataset.updated_at,
        "articles": [article_to_dict(article) for article in dataset.articles],
    }
    return json.dumps(payload, ensure_ascii=False, indent=2).encode("utf-8")


def decode_dataset(data: bytes, topic: str | None = None) -> TopicDataset:
    """Decode a stored payload.

    Args:
        data: Raw bytes as read from the store
        topic: Expected topic, used when the payload has no category

    Raises:
        StorageError: If the payload is not a dataset object
    """
    try:
        raw = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise StorageError(f"Stored dataset is not valid JSON: {exc}") from exc

    if not isinstance(raw, dict) or not isinstance(raw.get("articles", []), list):
        raise StorageError("Stored dataset has an unexpected shape")

    category = raw.get("category") or topic or ""
    articles = []
    for item in raw.get("articles", []):
        article = article_from_dict(item, category)
        if article is not None:
            articles.append(article)

    return TopicDataset(topic=category, updated_at=str(raw.get("updated_at") or ""), articles=articles)


def article_to_dict(article: Article) -> dict[str, Any]:
    return {name: getattr(article, name) for name in ARTICLE_FIELDS}


def article_from_dict(item: Any, topic: str = "") -> Article | None:
    if not isinstance(item, dict):
        return None
    url = item.get("url")
    if not isinstance(url, str) or not url:
        return None
    image = item.get("image")
    return Article(
        title=str(item.get("title") or ""),
        url=url,
        summary=str(item.get("summary") or ""),
        image=image if isinstance(image, str) and image else None,
        published_at=str(item.get("published_at") or ""),
        source=str(item.get("source") or ""),
        topic=topic,
    )
