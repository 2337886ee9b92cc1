"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- FetchConfig: HTTP settings for feeds and article pages
- ExtractConfig: Body text and image extraction settings
- SummaryConfig: Extractive summary bounds
- DedupConfig: Fuzzy title deduplication
- RetentionConfig: Size caps and optional age filtering
- StorageConfig: Blob store backend and key layout
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
import os
from typing import Any

import yaml


@dataclass
class FetchConfig:
    """Configuration for HTTP fetching of feeds and article pages.

    Attributes:
        feed_timeout_seconds: HTTP timeout for one feed request
        source_timeout_seconds: Hard cap on one source, including parsing
        page_timeout_seconds: HTTP timeout for one article page request
        retries: Retry attempts for article pages after the initial failure
        retry_delay_seconds: Fixed delay between article page attempts
        source_concurrency: Number of feeds fetched in parallel within a topic
        trust_env: Whether to respect system proxy settings
        user_agent: HTTP User-Agent header string
        accept_language: Accept-Language header sent to publishers
    """

    feed_timeout_seconds: float = 10.0
    source_timeout_seconds: float = 15.0
    page_timeout_seconds: float = 5.0
    retries: int = 2
    retry_delay_seconds: float = 0.5
    source_concurrency: int = 4
    trust_env: bool = True
    user_agent: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    )
    accept_language: str = "it-IT,it;q=0.9,en;q=0.8"


@dataclass
class ExtractConfig:
    """Configuration for article page extraction.

    Attributes:
        methods: Ordered extraction chain ("selectors", "paragraphs",
            "trafilatura", "readability")
        min_chars: Selector matches shorter than this fall through to the next method
        max_chars: Maximum characters of body text kept for summarization
        batch_size: Articles extracted concurrently per batch
        favicon_fallback: Use the publisher favicon when no image was found
    """

    methods: list[str] = field(default_factory=lambda: ["selectors", "paragraphs"])
    min_chars: int = 100
    max_chars: int = 3000
    batch_size: int = 10
    favicon_fallback: bool = False


@dataclass
class SummaryConfig:
    """Configuration for extractive summarization.

    Attributes:
        min_words: Stop adding sentences once the summary reaches this many words
        max_words: Never exceed this many words (hard-truncated if unavoidable)
        min_sentence_chars: Sentences this short or shorter are discarded
        keywords: Newsworthy terms that raise a sentence's score
    """

    min_words: int = 30
    max_words: int = 40
    min_sentence_chars: int = 20
    keywords: list[str] = field(
        default_factory=lambda: [
            "announced",
            "revealed",
            "confirmed",
            "new",
            "first",
            "major",
            "government",
            "team",
            "victory",
        ]
    )


@dataclass
class DedupConfig:
    """Configuration for within-topic deduplication beyond exact URLs.

    Attributes:
        title_similarity_enabled: Drop items whose titles nearly match a kept item
        title_similarity_threshold: Fuzzy match threshold (0-100)
    """

    title_similarity_enabled: bool = False
    title_similarity_threshold: int = 92


@dataclass
class RetentionConfig:
    """Configuration for dataset retention.

    Attributes:
        max_articles: Cap for each topic dataset
        aggregate_max_articles: Cap for the all-topics dataset
        age_filter: Whether to drop articles older than max_age_hours
        max_age_hours: Retention horizon used when age_filter is on
    """

    max_articles: int = 350
    aggregate_max_articles: int = 800
    age_filter: bool = False
    max_age_hours: float = 72.0

    @property
    def horizon_hours(self) -> float | None:
        return self.max_age_hours if self.age_filter else None


@dataclass
class StorageConfig:
    """Configuration for the blob store holding published datasets.

    Attributes:
        backend: "local" for a filesystem directory, "memory" for a dry run
        root: Root directory for the local backend
        key_prefix: Prefix prepended to every dataset key
        aggregate_topic: Reserved topic name of the all-topics dataset
        content_type: Content type recorded on write
        cache_control: Cache-Control recorded on write
        public_base_url: Base URL used to build public links, if any
    """

    backend: str = "local"
    root: str = "out/store"
    key_prefix: str = "news/"
    aggregate_topic: str = "general"
    content_type: str = "application/json"
    cache_control: str = "public, max-age=300"
    public_base_url: str | None = None


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the main log file
        directory: Directory for the log file
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "run.jsonl"
    directory: str = "out/logs"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections.

    sources, when set, replaces the built-in catalog and maps each topic to a
    list of {"url": ..., "name": ...} entries.
    """

    fetch: FetchConfig = field(default_factory=FetchConfig)
    extract: ExtractConfig = field(default_factory=ExtractConfig)
    summary: SummaryConfig = field(default_factory=SummaryConfig)
    dedup: DedupConfig = field(default_factory=DedupConfig)
    retention: RetentionConfig = field(default_factory=RetentionConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    sources: dict[str, list[dict[str, str]]] | None = None


_SECTIONS = {
    "fetch": FetchConfig,
    "extract": ExtractConfig,
    "summary": SummaryConfig,
    "dedup": DedupConfig,
    "retention": RetentionConfig,
    "storage": StorageConfig,
    "logging": LoggingConfig,
}


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update(value)
        else:
            data[key] = value
    return _fromdict(data)


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    sections = {name: cls(**data[name]) for name, cls in _SECTIONS.items()}
    return AppConfig(**sections, sources=data.get("sources"))


def get_store_root(cfg: StorageConfig) -> str:
    """Get the local store root from the environment or config."""
    return os.getenv("NEWS_FEED_STORE_ROOT") or cfg.root
