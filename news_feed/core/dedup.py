"""
Item deduplication by canonical URL, fuzzy title, and run-wide claims.

This module removes duplicate feed items in three ways:
1. Exact URL matches within a topic (first occurrence wins)
2. Optional fuzzy title similarity (same story syndicated under different URLs)
3. URLs already claimed by an earlier topic in the same run
"""

from __future__ import annotations

from typing import Iterable

from rapidfuzz import fuzz

from .types import RawItem


def dedup_by_url(items: Iterable[RawItem]) -> list[RawItem]:
    """Remove items whose URL was already seen, preserving order."""
    seen_urls: set[str] = set()
    kept: list[RawItem] = []
    for item in items:
        if item.url in seen_urls:
            continue
        seen_urls.add(item.url)
        kept.append(item)
    return kept


def dedup_items(
    items: Iterable[RawItem],
    title_similarity: bool = False,
    threshold: int = 92,
) -> list[RawItem]:
    """Remove duplicate items from a topic's concatenated feed output.

    Deduplication happens in two passes:
    1. Remove exact URL duplicates
    2. If enabled, remove items whose title is similar to an already kept one

    Args:
        items: Items in catalog order
        title_similarity: Whether to run the fuzzy title pass
        threshold: Similarity threshold (0-100) for fuzzy title matching

    Returns:
        Deduplicated list of items, preserving original order
    """
    unique = dedup_by_url(items)
    if not title_similarity:
        return unique

    kept: list[RawItem] = []
    titles: list[str] = []
    for item in unique:
        if _is_similar_title(item.title, titles, threshold):
            continue
        titles.append(item.title)
        kept.append(item)
    return kept


def claim_urls(items: Iterable[RawItem], claimed: set[str]) -> list[RawItem]:
    """Keep only items whose URL no earlier topic has claimed, and claim them.

    The claimed set is shared across all topics of a run and only ever grows,
    so the first topic (in iteration order) to see a URL owns it.

    Args:
        items: Deduplicated items for the current topic
        claimed: Run-scoped set of URLs, updated in place

    Returns:
        Items that this topic now owns
    """
    owned: list[RawItem] = []
    for item in items:
        if item.url in claimed:
            continue
        claimed.add(item.url)
        owned.append(item)
    return owned


def _is_similar_title(title: str, titles: list[str], threshold: int) -> bool:
    """Check if a title is similar to any title in the given list.

    Uses rapidfuzz's ratio function which calculates the Levenshtein
    distance as a similarity percentage.
    """
    for existing in titles:
        if fuzz.ratio(title, existing) >= threshold:
            return True
    return False
