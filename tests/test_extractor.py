"""Tests for page extraction, cover images and retry behavior."""

from __future__ import annotations

import asyncio
import logging

from news_feed.config import ExtractConfig, FetchConfig
from news_feed.fetch.extractor import extract_content, extract_from_html
from news_feed.fetch.fetcher import build_client

from fakes import FakeWeb, article_page, long_body


URL = "https://news.example.com/story"


def _fetch_cfg() -> FetchConfig:
    cfg = FetchConfig()
    cfg.retry_delay_seconds = 0
    return cfg


def _extract(web: FakeWeb, url: str = URL):
    async def _run():
        async with build_client(_fetch_cfg(), 4, web.transport) as client:
            return await extract_content(
                client, url, _fetch_cfg(), ExtractConfig(), logging.getLogger("test_extractor")
            )

    return asyncio.run(_run())


def test_extract_prefers_article_container_and_drops_boilerplate():
    body = long_body(4)
    text, image = extract_from_html(article_page(body), ExtractConfig())

    assert text == body
    assert "Subscribe now" not in text
    assert "Copyright" not in text
    assert image is None


def test_extract_falls_back_to_paragraphs_when_container_is_short():
    html = (
        "<html><body><article>Teaser only</article>"
        f"<div><p>{long_body(2)}</p><p>Second paragraph of the story.</p></div></body></html>"
    )

    text, _ = extract_from_html(html, ExtractConfig())

    assert text.startswith("The regional council")
    assert "Teaser only" not in text
    assert text.endswith("Second paragraph of the story.")


def test_extract_truncates_to_max_chars():
    cfg = ExtractConfig()
    cfg.max_chars = 50

    text, _ = extract_from_html(article_page(long_body(6)), cfg)

    assert len(text) == 50


def test_extract_without_any_text_is_empty():
    text, _ = extract_from_html("<html><body><script>var x = 1;</script></body></html>", ExtractConfig())
    assert text == ""


def test_cover_image_from_open_graph():
    _, image = extract_from_html(article_page(long_body(2), og_image="https://img.example.com/og.jpg"), ExtractConfig())
    assert image == "https://img.example.com/og.jpg"


def test_cover_image_protocol_relative_is_upgraded():
    _, image = extract_from_html(article_page(long_body(2), og_image="//img.example.com/og.jpg"), ExtractConfig())
    assert image == "https://img.example.com/og.jpg"


def test_cover_image_relative_candidate_is_skipped():
    html = (
        '<html><head><meta property="og:image" content="/static/og.jpg"></head><body>'
        f'<article><img src="https://img.example.com/inline.jpg"><p>{long_body(2)}</p></article>'
        "</body></html>"
    )

    _, image = extract_from_html(html, ExtractConfig())

    assert image == "https://img.example.com/inline.jpg"


def test_extract_content_success():
    web = FakeWeb()
    web.add(URL, article_page(long_body(3), og_image="https://img.example.com/og.jpg"))

    content = _extract(web)

    assert content.text == long_body(3)
    assert content.image_url == "https://img.example.com/og.jpg"
    assert content.status_code == 200
    assert content.error is None


def test_extract_content_forbidden_is_not_retried():
    web = FakeWeb()
    web.add(URL, "denied", status=403)

    content = _extract(web)

    assert content.text == ""
    assert content.status_code == 403
    assert web.count(URL) == 1


def test_extract_content_not_found_is_not_retried():
    web = FakeWeb()
    web.add(URL, "missing", status=404)

    content = _extract(web)

    assert content.text == ""
    assert web.count(URL) == 1


def test_extract_content_retries_server_errors():
    web = FakeWeb()
    web.add(URL, "busy", status=503)
    web.add(URL, "busy", status=500)
    web.add(URL, article_page(long_body(2)))

    content = _extract(web)

    assert content.text == long_body(2)
    assert web.count(URL) == 3


def test_extract_content_gives_up_after_retry_budget():
    web = FakeWeb()
    web.add(URL, "busy", status=500)

    content = _extract(web)

    assert content.text == ""
    assert content.error == "HTTP Error: 500"
    assert web.count(URL) == 3
