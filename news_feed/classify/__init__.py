"""Keyword-based topic validation."""

from .keywords import CATCH_ALL, CATEGORY_PRIORITY, KEYWORDS
from .validator import enforce_categories, find_cross_topic_duplicates, matches_topic

__all__ = [
    "CATCH_ALL",
    "CATEGORY_PRIORITY",
    "KEYWORDS",
    "enforce_categories",
    "find_cross_topic_duplicates",
    "matches_topic",
]
