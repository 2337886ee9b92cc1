"""
Article page extraction with multiple fallback strategies.

This module provides a chain of body-text extraction methods:
1. selectors: Ordered structural CSS selectors for the article container (default)
2. paragraphs: Concatenation of every <p> on the page (default fallback)
3. trafilatura: Purpose-built main-content extraction (opt-in)
4. readability: Mozilla's readability algorithm (opt-in)

It also discovers a cover image and wraps everything behind a bounded-retry
page fetch that gives up immediately on authorization failures.
"""

from __future__ import annotations

import logging
from typing import Callable

from bs4 import BeautifulSoup
import httpx
from readability import Document
import trafilatura

from ..config import ExtractConfig, FetchConfig
from ..core.types import ExtractedContent
from ..utils.logging import log_event
from ..utils.text import normalize_whitespace
from .fetcher import AUTH_STATUS, build_headers, fetch_with_retry
from .images import page_cover_image


PAGE_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"

CONTENT_SELECTORS = [
    "article",
    ".article-content",
    ".article-body",
    ".post-content",
    ".entry-content",
    "main",
    ".content",
]

BOILERPLATE_SELECTORS = [
    "script",
    "style",
    "noscript",
    "nav",
    "header",
    "footer",
    "aside",
    ".ad",
    ".advertisement",
    ".comments",
]


async def extract_content(
    client: httpx.AsyncClient,
    url: str,
    fetch_cfg: FetchConfig,
    extract_cfg: ExtractConfig,
    logger: logging.Logger | None = None,
) -> ExtractedContent:
    """Fetch an article page and extract its body text and cover image.

    Never raises. Failures produce an ExtractedContent with empty text and
    the error recorded, so the caller can fall back to a title summary.

    Args:
        client: Shared async client
        url: Article URL
        fetch_cfg: Fetch configuration (timeout, retries, retry delay)
        extract_cfg: Extraction configuration (method chain, size bounds)
        logger: Logger for extraction events

    Returns:
        ExtractedContent with text and optional image
    """
    result = await fetch_with_retry(client, url, fetch_cfg, build_headers(fetch_cfg, PAGE_ACCEPT))

    if not result.ok:
        if result.status_code in AUTH_STATUS:
            message = f"Access denied for {url[:80]}, skipping"
        else:
            message = f"Failed to extract from {url[:80]}: {result.error}"
        log_event(
            logger,
            message,
            level=logging.WARNING,
            event="extract_failed",
            url=url,
            status_code=result.status_code,
            attempts=result.attempts,
            error=result.error,
        )
        return ExtractedContent(text="", status_code=result.status_code, error=result.error)

    text, image = extract_from_html(result.text or "", extract_cfg)
    if len(text) < 50:
        log_event(
            logger,
            f"Short content ({len(text)} chars) from {url[:80]}",
            level=logging.DEBUG,
            event="extract_short",
            url=url,
            chars=len(text),
        )
    return ExtractedContent(text=text, image_url=image, status_code=result.status_code)


def extract_from_html(html: str, cfg: ExtractConfig) -> tuple[str, str | None]:
    """Extract normalized body text and a cover image from page HTML.

    The image is looked up before boilerplate removal since header and meta
    tags are where most publishers put it.

    Returns:
        Tuple of (text truncated to cfg.max_chars, image URL or None)
    """
    soup = BeautifulSoup(html, "html.parser")
    image = page_cover_image(soup)

    for tag in soup.select(", ".join(BOILERPLATE_SELECTORS)):
        # Nested matches are already gone once their ancestor is decomposed.
        if tag.decomposed:
            continue
        tag.decompose()

    text = extract_text(soup, html, cfg.methods, cfg.min_chars) or ""
    return normalize_whitespace(text)[: cfg.max_chars], image


def extract_text(
    soup: BeautifulSoup,
    html: str,
    methods: list[str],
    min_chars: int = 100,
) -> str | None:
    """Extract plain text using a chain of extractors.

    Tries each extraction method in order until one produces non-empty
    output.

    Args:
        soup: Parsed page with boilerplate already removed
        html: The original HTML, for extractors that parse it themselves
        methods: Ordered list of extraction method names
        min_chars: Minimum plausible length for a selector match

    Returns:
        Extracted text, or None if all methods fail

    Examples:
        >>> extract_text(soup, html, ["selectors", "paragraphs"])
        "Article content here..."
    """
    for method in methods:
        extractor = _get_extractor(method)
        if not extractor:
            continue
        text = extractor(soup, html, min_chars)
        if text and text.strip():
            return text.strip()
    return None


def _get_extractor(name: str) -> Callable[[BeautifulSoup, str, int], str | None] | None:
    """Get the extractor function for a given method name."""
    if name == "selectors":
        return _extract_selectors
    if name == "paragraphs":
        return _extract_paragraphs
    if name == "trafilatura":
        return _extract_trafilatura
    if name == "readability":
        return _extract_readability
    return None


def _extract_selectors(soup: BeautifulSoup, html: str, min_chars: int) -> str | None:
    """Text of the first structural container that matches.

    Matches shorter than min_chars are treated as no match, since they are
    usually teasers or empty wrappers.
    """
    for selector in CONTENT_SELECTORS:
        elements = soup.select(selector)
        if not elements:
            continue
        text = normalize_whitespace(" ".join(el.get_text(" ") for el in elements))
        if len(text) < min_chars:
            return None
        return text
    return None


def _extract_paragraphs(soup: BeautifulSoup, html: str, min_chars: int) -> str | None:
    text = normalize_whitespace(" ".join(p.get_text(" ") for p in soup.find_all("p")))
    return text or None


def _extract_trafilatura(soup: BeautifulSoup, html: str, min_chars: int) -> str | None:
    return trafilatura.extract(html)


def _extract_readability(soup: BeautifulSoup, html: str, min_chars: int) -> str | None:
    doc = Document(html)
    content = BeautifulSoup(doc.summary(), "html.parser")
    return normalize_whitespace(content.get_text(" ")) or None
