"""
Image discovery for feed items and article pages.

Feed items are checked in a fixed order: structured media field, enclosure,
thumbnail field, explicit image field, then the first inline <img> in the
item's embedded HTML. Article pages are checked against an ordered list of
metadata tags and DOM selectors.
"""

from __future__ import annotations

from typing import Any, Mapping
from urllib.parse import urlparse

from bs4 import BeautifulSoup


# Ordered from most to least reliable.
PAGE_IMAGE_SELECTORS = [
    "meta[property='og:image']",
    "meta[name='twitter:image']",
    "meta[property='og:image:secure_url']",
    "link[rel='image_src']",
    "article img",
    ".article-image img",
    ".featured-image img",
    ".wp-post-image",
    ".entry-content img",
    ".post-thumbnail img",
    "img[class*='article']",
    "img[class*='hero']",
    "img[class*='featured']",
    "img[class*='cover']",
    "figure img",
    ".main-image img",
    "#main-image",
]

IMAGE_ATTRIBUTES = ("content", "src", "data-src", "href")


def normalize_image_url(value: Any) -> str | None:
    """Return an absolute http(s) image URL, or None.

    Protocol-relative URLs ("//cdn...") are upgraded to https. Relative paths
    are rejected rather than resolved against the page URL.
    """
    if not isinstance(value, str):
        return None
    url = value.strip()
    if not url:
        return None
    if url.startswith("//"):
        url = f"https:{url}"
    if not url.startswith(("http://", "https://")):
        return None
    return url


def first_inline_image(html: str | None) -> str | None:
    """Return the src of the first <img> in an HTML fragment."""
    if not html or "<img" not in html:
        return None
    soup = BeautifulSoup(html, "html.parser")
    img = soup.find("img", src=True)
    if img is None:
        return None
    return normalize_image_url(img.get("src"))


def feed_item_image(entry: Mapping[str, Any]) -> str | None:
    """Discover the image embedded in a parsed feed entry.

    Args:
        entry: A feedparser entry (dict-like)

    Returns:
        The first usable image URL in discovery order, or None
    """
    for candidate in _media_urls(entry.get("media_content")):
        if candidate:
            return candidate

    for enclosure in entry.get("enclosures") or []:
        mime = (enclosure.get("type") or "").lower()
        if mime and not mime.startswith("image/"):
            continue
        url = normalize_image_url(enclosure.get("href") or enclosure.get("url"))
        if url:
            return url

    for candidate in _media_urls(entry.get("media_thumbnail")):
        if candidate:
            return candidate

    for field in ("image", "thumbnail"):
        url = _field_url(entry.get(field))
        if url:
            return url

    url = first_inline_image(entry.get("summary"))
    if url:
        return url

    for content in entry.get("content") or []:
        url = first_inline_image(content.get("value"))
        if url:
            return url
    return None


def page_cover_image(soup: BeautifulSoup) -> str | None:
    """Discover a cover image on a parsed article page.

    Candidates that resolve to relative paths are skipped and the search
    continues with the next selector.
    """
    for selector in PAGE_IMAGE_SELECTORS:
        element = soup.select_one(selector)
        if element is None:
            continue
        for attr in IMAGE_ATTRIBUTES:
            raw = element.get(attr)
            if not raw:
                continue
            url = normalize_image_url(raw)
            if url:
                return url
            break
    return None


def favicon_url(page_url: str) -> str | None:
    """Publisher favicon used as a last-resort card image."""
    host = urlparse(page_url).hostname
    if not host:
        return None
    return f"https://www.google.com/s2/favicons?domain={host}&sz=256"


def _media_urls(value: Any) -> list[str | None]:
    if not value:
        return []
    if isinstance(value, Mapping):
        value = [value]
    return [normalize_image_url(item.get("url")) for item in value if isinstance(item, Mapping)]


def _field_url(value: Any) -> str | None:
    if isinstance(value, str):
        return normalize_image_url(value)
    if isinstance(value, Mapping):
        return normalize_image_url(value.get("href") or value.get("url"))
    return None
