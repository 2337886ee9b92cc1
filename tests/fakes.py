"""Fake web and feed builders shared by the tests."""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone
from email.utils import format_datetime
from xml.sax.saxutils import escape

import httpx

from news_feed.core.types import Article


BASE_TIME = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


class FakeWeb:
    """Routes requests to canned responses and records every call.

    A route can hold a single response or a list of responses; a list is
    consumed in order and its last entry repeats. peak_in_flight records the
    most requests that were being served at once.
    """

    def __init__(self) -> None:
        self.routes: dict[str, list[tuple[int, str, str, float]]] = {}
        self.calls: list[str] = []
        self.in_flight = 0
        self.peak_in_flight = 0

    def add(
        self,
        url: str,
        body: str = "",
        status: int = 200,
        content_type: str = "text/html; charset=utf-8",
        delay: float = 0.0,
    ) -> None:
        self.routes.setdefault(url, []).append((status, body, content_type, delay))

    def add_feed(self, url: str, xml: str) -> None:
        self.add(url, xml, content_type="application/rss+xml; charset=utf-8")

    def count(self, url: str) -> int:
        return self.calls.count(url)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)

    async def _handle(self, request: httpx.Request) -> httpx.Response:
        self.in_flight += 1
        self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
        try:
            return await self._respond(request)
        finally:
            self.in_flight -= 1

    async def _respond(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.calls.append(url)
        responses = self.routes.get(url)
        if not responses:
            return httpx.Response(404, text="not found")
        index = min(self.count(url), len(responses)) - 1
        status, body, content_type, delay = responses[index]
        if delay:
            await asyncio.sleep(delay)
        return httpx.Response(status, content=body.encode("utf-8"), headers={"content-type": content_type})


def rss_item(
    title: str,
    link: str,
    published: datetime | None = None,
    description: str = "",
    enclosure: str | None = None,
    media: str | None = None,
) -> str:
    parts = [f"<title>{escape(title)}</title>", f"<link>{escape(link)}</link>"]
    if published is not None:
        parts.append(f"<pubDate>{format_datetime(published)}</pubDate>")
    if description:
        parts.append(f"<description><![CDATA[{description}]]></description>")
    if enclosure:
        parts.append(f'<enclosure url="{escape(enclosure)}" type="image/jpeg" length="0"/>')
    if media:
        parts.append(f'<media:content url="{escape(media)}" medium="image"/>')
    return f"<item>{''.join(parts)}</item>"


def rss_feed(*items: str, title: str = "Test Feed") -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<rss version="2.0" xmlns:media="http://search.yahoo.com/mrss/">'
        f"<channel><title>{escape(title)}</title><link>https://news.example.com/</link>"
        f"{''.join(items)}</channel></rss>"
    )


def article_page(body: str, og_image: str | None = None) -> str:
    meta = f'<meta property="og:image" content="{og_image}">' if og_image else ""
    return (
        f"<html><head><title>Page</title>{meta}</head><body>"
        "<nav>Home | Politics | Sports | Subscribe now</nav>"
        f"<article><p>{body}</p></article>"
        "<footer>Copyright Example Media</footer>"
        "</body></html>"
    )


def long_body(sentences: int = 6) -> str:
    base = [
        "The regional council approved the budget after a long debate on public spending",
        "Officials said the plan would fund schools and roads across the province next year",
        "Opposition members criticised the timing of the vote and asked for more scrutiny",
        "Local businesses welcomed the decision and expect new contracts in the spring",
        "Analysts expect the measure to reduce waiting times in public offices by autumn",
        "The final text will be published in the official bulletin within two weeks",
    ]
    return ". ".join(base[i % len(base)] for i in range(sentences)) + "."


def make_article(
    url: str,
    published: datetime | str | None = None,
    title: str | None = None,
    topic: str = "politics",
) -> Article:
    if isinstance(published, datetime):
        published_at = published.strftime("%Y-%m-%dT%H:%M:%S.000Z")
    elif published is None:
        published_at = BASE_TIME.strftime("%Y-%m-%dT%H:%M:%S.000Z")
    else:
        published_at = published
    return Article(
        title=title or f"Title for {url}",
        url=url,
        summary=f"Summary for {url}",
        image=None,
        published_at=published_at,
        source="Example",
        topic=topic,
    )


def hours_ago(hours: float, base: datetime = BASE_TIME) -> datetime:
    return base - timedelta(hours=hours)
