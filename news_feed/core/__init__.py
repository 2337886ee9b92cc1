"""
Core domain models and business logic.

This package contains data types and the dedup/merge rules that are
independent of any specific pipeline stage.
"""

from .types import Article, ExtractedContent, FeedSource, RawItem, RunResult, TopicDataset
from .dedup import claim_urls, dedup_by_url, dedup_items
from .merge import MergeResult, dedup_latest, merge_articles, sort_by_recency

__all__ = [
    "Article",
    "ExtractedContent",
    "FeedSource",
    "RawItem",
    "RunResult",
    "TopicDataset",
    "claim_urls",
    "dedup_by_url",
    "dedup_items",
    "MergeResult",
    "dedup_latest",
    "merge_articles",
    "sort_by_recency",
]
