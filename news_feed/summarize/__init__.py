"""
Extractive summarization.

Summaries are built from the article's own sentences; no text is generated.
"""

from .extractive import ScoredSentence, length_score, score_sentences, split_sentences, summarize

__all__ = [
    "ScoredSentence",
    "length_score",
    "score_sentences",
    "split_sentences",
    "summarize",
]
