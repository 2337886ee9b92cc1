"""Text cleanup shared by feed parsing and summarization."""

from __future__ import annotations

import html
import re


_TAG_RE = re.compile(r"<[^>]*>")
_URL_RE = re.compile(r"https?://\S+")
_EMAIL_RE = re.compile(r"[\w.-]+@[\w.-]+\.\w+")
_LEADING_REF_RE = re.compile(r"^[\[\(]\d+[\]\)]\s*")
_DOTS_RE = re.compile(r"\.{2,}")
_SPACE_BEFORE_PUNCT_RE = re.compile(r"\s+([.,!?;:])")


def clean_text(text: str | None) -> str:
    """Decode entities and strip markup, URLs and e-mail addresses.

    Examples:
        >>> clean_text("Rome &amp; Milan <b>today</b>")
        'Rome & Milan today'
    """
    if not text:
        return ""
    cleaned = html.unescape(text)
    cleaned = _TAG_RE.sub("", cleaned)
    cleaned = _URL_RE.sub("", cleaned)
    cleaned = _EMAIL_RE.sub("", cleaned)
    cleaned = _LEADING_REF_RE.sub("", cleaned.strip())
    cleaned = _DOTS_RE.sub(".", cleaned)
    cleaned = " ".join(cleaned.split())
    cleaned = _SPACE_BEFORE_PUNCT_RE.sub(r"\1", cleaned)
    return cleaned.strip()


def normalize_whitespace(text: str) -> str:
    return " ".join(text.split())
