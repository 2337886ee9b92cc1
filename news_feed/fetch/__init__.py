"""
Feed fetching and article extraction.

This package handles HTTP fetching, feed parsing, page content
extraction and image discovery.
"""

from .fetcher import FetchResult, build_client, fetch_once, fetch_with_retry
from .feeds import fetch_feed, parse_feed
from .extractor import extract_content, extract_from_html
from .images import favicon_url, feed_item_image, normalize_image_url, page_cover_image

__all__ = [
    "FetchResult",
    "build_client",
    "fetch_once",
    "fetch_with_retry",
    "fetch_feed",
    "parse_feed",
    "extract_content",
    "extract_from_html",
    "favicon_url",
    "feed_item_image",
    "normalize_image_url",
    "page_cover_image",
]
