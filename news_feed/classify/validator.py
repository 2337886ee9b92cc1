"""
Strict one-topic-per-article validation over published datasets.

enforce_categories walks topics in priority order (most specific first) and
keeps an article under a topic only if its text mentions one of the topic's
keywords and no earlier topic already kept the same URL. The catch-all topic
keeps whatever reaches it.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Sequence

from ..core.types import Article
from ..utils.logging import log_event
from .keywords import CATCH_ALL, CATEGORY_PRIORITY, KEYWORDS


def enforce_categories(
    categories: Mapping[str, Sequence[Article]],
    bodies: Mapping[str, str] | None = None,
    priority: Sequence[str] = CATEGORY_PRIORITY,
    logger: logging.Logger | None = None,
) -> dict[str, list[Article]]:
    """Assign every article to at most one topic.

    Args:
        categories: Topic -> articles as currently published
        bodies: Optional URL -> full body text, matched alongside title and summary
        priority: Topic processing order; topics absent from it are processed
            afterwards, in input order, without keyword checks
        logger: Logger for per-topic counts

    Returns:
        Topic -> kept articles, in the input order of each topic
    """
    bodies = bodies or {}
    order = [topic for topic in priority if topic in categories]
    order += [topic for topic in categories if topic not in order]

    seen_urls: set[str] = set()
    cleaned: dict[str, list[Article]] = {}
    for topic in order:
        articles = categories[topic]
        kept: list[Article] = []
        for article in articles:
            if article.url in seen_urls:
                continue
            if not matches_topic(article, topic, bodies.get(article.url, "")):
                continue
            kept.append(article)
            seen_urls.add(article.url)
        cleaned[topic] = kept
        log_event(
            logger,
            f"{topic}: kept {len(kept)} of {len(articles)}",
            level=logging.DEBUG,
            event="category_enforced",
            topic=topic,
            kept=len(kept),
            removed=len(articles) - len(kept),
        )
    return cleaned


def matches_topic(article: Article, topic: str, body: str = "") -> bool:
    """Whether the article's text mentions any keyword of topic.

    Topics without a keyword list (including the catch-all) accept everything.
    """
    keywords = KEYWORDS.get(topic)
    if topic == CATCH_ALL or not keywords:
        return True
    text = f"{article.title} {article.summary} {body}".lower()
    return any(keyword in text for keyword in keywords)


def find_cross_topic_duplicates(categories: Mapping[str, Iterable[Article]]) -> dict[str, list[str]]:
    """Find URLs published under more than one topic.

    Returns:
        URL -> topics containing it, for URLs in two or more topics
    """
    topics_by_url: dict[str, list[str]] = {}
    for topic, articles in categories.items():
        for article in articles:
            owners = topics_by_url.setdefault(article.url, [])
            if topic not in owners:
                owners.append(topic)
    return {url: owners for url, owners in topics_by_url.items() if len(owners) > 1}
