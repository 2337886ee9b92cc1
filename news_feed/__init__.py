"""
News Feed - topic datasets built from RSS/Atom feeds.

This package fetches many publisher feeds per topic, extracts and summarizes
each article, and republishes a bounded, deduplicated JSON dataset per topic
plus an all-topics aggregate.

Main entry point is the CLI via `news-feed run` command.

Example:
    $ news-feed run --store-root out/store --output out/summary.json
"""

__all__ = ["__version__", "AppConfig", "load_config", "build_catalog", "run_pipeline", "build_run_summary"]
__version__ = "0.1.0"

from .catalog import build_catalog
from .config import AppConfig, load_config
from .runner import build_run_summary, run_pipeline
