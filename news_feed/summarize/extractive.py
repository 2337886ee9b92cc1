"""
Extractive summarization with a fixed scoring heuristic.

Sentences are scored on position, length and newsworthy keywords, then the
best ones are packed into a word budget. The transform is pure and
deterministic: the same text and title always give the same summary.
"""

from __future__ import annotations

from dataclasses import dataclass
import re

from ..config import SummaryConfig
from ..utils.text import clean_text


_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")

POSITION_WEIGHT = 0.4
LENGTH_WEIGHT = 0.4
KEYWORD_WEIGHT = 0.2

ELLIPSIS = "..."


@dataclass
class ScoredSentence:
    """A candidate sentence with its score and word count."""
    text: str
    score: float
    words: int


def summarize(text: str | None, title: str, cfg: SummaryConfig | None = None) -> str:
    """Build an extractive summary of an article.

    Args:
        text: Extracted body text (may be empty when extraction failed)
        title: Article title, used when the text yields no usable sentence
        cfg: Summary bounds and keyword list (defaults apply when omitted)

    Returns:
        A summary of at most cfg.max_words words, or the title

    Examples:
        >>> summarize("", "Parliament approves the budget")
        'Parliament approves the budget'
    """
    cfg = cfg or SummaryConfig()
    fallback = clean_text(title) or (title or "").strip()

    sentences = split_sentences(clean_text(text), cfg.min_sentence_chars)
    if not sentences:
        return fallback

    ranked = sorted(score_sentences(sentences, cfg.keywords), key=lambda s: s.score, reverse=True)
    return _pack(ranked, cfg.min_words, cfg.max_words)


def split_sentences(text: str, min_chars: int = 20) -> list[str]:
    """Split on terminal punctuation and drop short fragments."""
    if not text:
        return []
    parts = (part.strip() for part in _SENTENCE_SPLIT_RE.split(text))
    return [part for part in parts if len(part) > min_chars]


def score_sentences(sentences: list[str], keywords: list[str]) -> list[ScoredSentence]:
    """Score sentences as 0.4*position + 0.4*length + 0.2*keyword."""
    total = len(sentences)
    lowered_keywords = [kw.lower() for kw in keywords]
    scored: list[ScoredSentence] = []
    for index, sentence in enumerate(sentences):
        words = len(sentence.split())
        position = 1.0 - (index / total)
        lowered = sentence.lower()
        hits = sum(1 for kw in lowered_keywords if kw in lowered)
        keyword = min(1.0, hits * 0.1)
        score = (
            POSITION_WEIGHT * position
            + LENGTH_WEIGHT * length_score(words)
            + KEYWORD_WEIGHT * keyword
        )
        scored.append(ScoredSentence(text=sentence, score=score, words=words))
    return scored


def length_score(words: int) -> float:
    """1.0 for 10-30 words, proportionally lower outside that band."""
    if 10 <= words <= 30:
        return 1.0
    if words < 10:
        return words / 10
    return 30 / words


def _pack(ranked: list[ScoredSentence], min_words: int, max_words: int) -> str:
    parts: list[str] = []
    count = 0
    for sentence in ranked:
        if count + sentence.words > max_words:
            continue
        parts.append(f"{sentence.text}.")
        count += sentence.words
        if count >= min_words:
            break

    if parts:
        return " ".join(parts)

    # Every sentence overshoots the budget on its own.
    words = ranked[0].text.split()
    return " ".join(words[:max_words]) + ELLIPSIS
