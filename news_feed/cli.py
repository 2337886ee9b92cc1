"""
Command-line interface for the news feed pipeline.

Uses Typer to provide commands for a pipeline run, a shuffled page read and
a category audit of the published datasets. Loads .env files so that
NEWS_FEED_STORE_ROOT can be set per deployment.
"""

from __future__ import annotations

from pathlib import Path
import json
import random

from dotenv import load_dotenv
import typer
from rich.console import Console
from rich.table import Table

from .catalog import build_catalog
from .classify import enforce_categories, find_cross_topic_duplicates
from .config import AppConfig, load_config
from .runner import build_failure_summary, build_run_summary, run_pipeline
from .serve import DatasetNotFound, InvalidPageRequest, shuffled_page
from .storage import DatasetGateway, create_store
from .utils.logging import setup_logging

app = typer.Typer(add_completion=False)
console = Console()


def _load(config: Path | None, store_root: Path | None = None) -> AppConfig:
    load_dotenv()
    cfg = load_config(str(config) if config else None)
    if store_root is not None:
        cfg.storage.backend = "local"
        cfg.storage.root = str(store_root)
    return cfg


@app.command()
def run(
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, help="YAML config file."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Also write the run summary JSON here."),
    store_root: Path | None = typer.Option(None, "--store-root", help="Publish to this local directory."),
    progress: bool = typer.Option(True, "--progress/--no-progress"),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    log_format: str | None = typer.Option(None, "--log-format", help="Log file format: jsonl or plain."),
    log_file: bool | None = typer.Option(None, "--log-file/--no-log-file", help="Enable or disable file logging."),
    age_filter: bool | None = typer.Option(
        None, "--age-filter/--no-age-filter", help="Drop articles older than retention.max_age_hours."
    ),
    max_articles: int | None = typer.Option(None, "--max-articles", help="Per-topic article cap."),
):
    """Fetch every topic, publish the merged datasets and print the run summary."""
    cfg = _load(config, store_root)

    if log_level:
        cfg.logging.level = log_level
    if log_format:
        cfg.logging.format = log_format
    if log_file is not None:
        cfg.logging.file = log_file
    if age_filter is not None:
        cfg.retention.age_filter = age_filter
    if max_articles is not None:
        cfg.retention.max_articles = max_articles

    try:
        results = run_pipeline(cfg, show_progress=progress, console=console)
    except Exception as exc:
        _emit(build_failure_summary(exc), output)
        raise typer.Exit(code=1)
    _emit(build_run_summary(results), output)


def _emit(summary: dict, output: Path | None) -> None:
    payload = json.dumps(summary, ensure_ascii=False, indent=2)
    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(f"{payload}\n", encoding="utf-8")
    console.print_json(payload)


@app.command()
def page(
    category: str = typer.Argument(..., help="Topic name, or the aggregate topic."),
    page_number: int = typer.Option(1, "--page", "-p", help="1-based page number."),
    limit: int = typer.Option(50, "--limit", "-l", help="Articles per page (1-800)."),
    seed: int | None = typer.Option(None, "--seed", help="Seed the shuffle for a reproducible order."),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, help="YAML config file."),
    store_root: Path | None = typer.Option(None, "--store-root", help="Read from this local directory."),
):
    """Print one shuffled page of a published dataset as JSON."""
    cfg = _load(config, store_root)
    gateway = DatasetGateway(create_store(cfg.storage), cfg.storage, cfg.retention)
    rng = random.Random(seed) if seed is not None else None

    try:
        response = shuffled_page(
            gateway,
            category,
            page=page_number,
            limit=limit,
            rng=rng,
            topics=build_catalog(cfg.sources),
        )
    except InvalidPageRequest as exc:
        console.print(f"[red]Invalid request[/red]: {exc}")
        raise typer.Exit(code=2)
    except DatasetNotFound as exc:
        console.print(f"[red]Not found[/red]: {exc}")
        raise typer.Exit(code=1)

    console.print_json(json.dumps(response, ensure_ascii=False))


@app.command()
def validate(
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, help="YAML config file."),
    store_root: Path | None = typer.Option(None, "--store-root", help="Read from this local directory."),
):
    """Audit published datasets for cross-topic duplicates and off-topic articles.

    Exits with status 1 when a URL is published under more than one topic.
    """
    cfg = _load(config, store_root)
    logger = setup_logging(cfg.logging)
    gateway = DatasetGateway(create_store(cfg.storage), cfg.storage, cfg.retention, logger)

    categories = {}
    for topic in build_catalog(cfg.sources):
        dataset = gateway.read(topic)
        if dataset is not None:
            categories[topic] = dataset.articles

    enforced = enforce_categories(categories, logger=logger)
    duplicates = find_cross_topic_duplicates(categories)

    table = Table(title="Category audit")
    table.add_column("Topic")
    table.add_column("Published", justify="right")
    table.add_column("Valid", justify="right")
    table.add_column("Rejected", justify="right")
    for topic, articles in categories.items():
        kept = len(enforced.get(topic, []))
        table.add_row(topic, str(len(articles)), str(kept), str(len(articles) - kept))
    console.print(table)

    if duplicates:
        console.print(f"[red]{len(duplicates)} URLs appear in more than one topic[/red]")
        for url, topics in duplicates.items():
            console.print(f"  {url}: {', '.join(topics)}")
        raise typer.Exit(code=1)
    console.print("[green]No cross-topic duplicates[/green]")


if __name__ == "__main__":
    app()
