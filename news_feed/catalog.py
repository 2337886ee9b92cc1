"""
Static source catalog: topic -> list of (feed URL, display name).

The catalog is immutable configuration built once at startup. Topic order
matters: topics are processed in this order and the first topic to claim a
URL keeps it for the run.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from .core.types import FeedSource


DEFAULT_SOURCES: dict[str, list[tuple[str, str]]] = {
    "politics": [
        ("https://www.ansa.it/sito/notizie/politica/politica_rss.xml", "ANSA Politics"),
        ("https://www.repubblica.it/rss/politica/rss2.0.xml", "La Repubblica Politics"),
        ("https://xml2.corriereobjects.it/rss/politica.xml", "Corriere Politica"),
        ("https://www.lastampa.it/rss/politica", "La Stampa Politics"),
        ("https://www.ilsole24ore.com/rss/italia.xml", "Il Sole 24 Ore Italia"),
        ("https://www.agi.it/politica/rss", "AGI Politics"),
        ("https://www.adnkronos.com/rss/politica.xml", "Adnkronos Politics"),
        ("https://www.rainews.it/rss/politica.xml", "RaiNews Politics"),
        ("https://tg24.sky.it/politica/rss", "Sky TG24 Politics"),
        ("https://www.fanpage.it/politica/feed/", "Fanpage Politics"),
        ("https://www.ilpost.it/feed/", "Il Post"),
        ("https://www.ilfattoquotidiano.it/feed/", "Il Fatto Quotidiano"),
        ("https://www.huffingtonpost.it/rss/", "Huffington Post Italia"),
    ],
    "sports": [
        ("https://www.gazzetta.it/rss/calcio.xml", "Gazzetta Sport"),
        ("https://www.corrieredellosport.it/rss/home.xml", "Corriere Sport"),
        ("https://www.ansa.it/sito/notizie/sport/sport_rss.xml", "ANSA Sport"),
        ("https://www.tuttosport.com/rss/", "Tuttosport"),
        ("https://www.calciomercato.com/rss/", "Calciomercato"),
        ("https://sport.sky.it/rss/homepage.xml", "Sky Sport"),
        ("https://www.sportmediaset.mediaset.it/rss/homepage.xml", "Sport Mediaset"),
        ("https://www.rainews.it/rss/sport.xml", "RaiNews Sport"),
        ("https://tg24.sky.it/sport/rss", "Sky TG24 Sport"),
        ("https://www.fanpage.it/sport/feed/", "Fanpage Sport"),
        ("https://www.repubblica.it/rss/sport/rss2.0.xml", "La Repubblica Sport"),
        ("https://www.eurosport.it/rss.xml", "Eurosport Italia"),
    ],
    "technology": [
        ("https://www.ansa.it/sito/notizie/tecnologia/tecnologia_rss.xml", "ANSA Tech"),
        ("https://www.hwupgrade.it/rss/news.xml", "HWUpgrade"),
        ("https://www.tomshw.it/feed", "Tom's Hardware"),
        ("https://www.punto-informatico.it/feed/", "Punto Informatico"),
        ("https://www.agi.it/innovazione/rss", "AGI Tech"),
        ("https://www.rainews.it/rss/tecnologia.xml", "RaiNews Tech"),
        ("https://www.wired.it/feed/rss", "Wired Italia"),
        ("https://www.dday.it/rss", "DDay.it"),
    ],
    "entertainment": [
        ("https://www.ansa.it/sito/notizie/cultura/cultura_rss.xml", "ANSA Culture"),
        ("https://www.repubblica.it/rss/spettacoli/rss2.0.xml", "La Repubblica Entertainment"),
        ("https://www.cinematographe.it/feed/", "Cinematographe"),
        ("https://www.comingsoon.it/rss/cinema.rss", "Coming Soon Cinema"),
        ("https://www.agi.it/cultura/rss", "AGI Culture"),
        ("https://www.fanpage.it/spettacolo/feed/", "Fanpage Entertainment"),
        ("https://www.mymovies.it/rss/", "MyMovies"),
        ("https://www.rockol.it/rss", "Rockol Music"),
    ],
    "business": [
        ("https://www.ilsole24ore.com/rss/economia.xml", "Il Sole 24 Ore"),
        ("https://www.ansa.it/sito/notizie/economia/economia_rss.xml", "ANSA Business"),
        ("https://www.repubblica.it/rss/economia/rss2.0.xml", "La Repubblica Economy"),
        ("https://www.corriere.it/rss/economia.xml", "Corriere Economia"),
        ("https://www.agi.it/economia/rss", "AGI Business"),
        ("https://www.adnkronos.com/rss/economia.xml", "Adnkronos Business"),
        ("https://tg24.sky.it/economia/rss", "Sky TG24 Business"),
        ("https://www.milanofinanza.it/rss", "Milano Finanza"),
        ("https://www.startmag.it/feed/", "StartMag"),
    ],
    "world": [
        ("https://www.ansa.it/sito/notizie/mondo/mondo_rss.xml", "ANSA World"),
        ("https://www.repubblica.it/rss/esteri/rss2.0.xml", "La Repubblica World"),
        ("https://www.corriere.it/rss/esteri.xml", "Corriere Esteri"),
        ("https://www.ilpost.it/feed/", "Il Post International"),
        ("https://www.lastampa.it/rss/esteri", "La Stampa World"),
        ("https://www.ilfattoquotidiano.it/feed/", "Il Fatto World"),
        ("https://www.agi.it/estero/rss", "AGI World"),
        ("https://www.adnkronos.com/rss/esteri.xml", "Adnkronos World"),
        ("https://www.rainews.it/rss/mondo.xml", "RaiNews World"),
        ("https://tg24.sky.it/mondo/rss", "Sky TG24 World"),
    ],
    "crime": [
        ("https://www.ansa.it/sito/notizie/cronaca/cronaca_rss.xml", "ANSA Crime"),
        ("https://www.repubblica.it/rss/cronaca/rss2.0.xml", "La Repubblica Crime"),
        ("https://www.corriere.it/rss/cronache.xml", "Corriere Cronache"),
        ("https://www.agi.it/cronaca/rss", "AGI Crime"),
        ("https://www.adnkronos.com/rss/cronaca.xml", "Adnkronos Crime"),
        ("https://www.fanpage.it/cronaca/feed/", "Fanpage Crime"),
        ("https://www.rainews.it/rss/cronaca.xml", "RaiNews Crime"),
    ],
    "automotive": [
        ("https://www.quattroruote.it/rss/news.xml", "Quattroruote"),
        ("https://www.autoblog.it/feed/", "Autoblog"),
        ("https://www.omniauto.it/feed/", "OmniAuto"),
        ("https://www.alvolante.it/rss", "Al Volante"),
        ("https://www.automoto.it/feed", "AutoMoto"),
        ("https://www.auto.it/rss/news", "Auto.it"),
        ("https://motori.corriere.it/rss/home.xml", "Corriere Motori"),
    ],
    "lifestyle": [
        ("https://www.lacucinaitaliana.it/rss", "La Cucina Italiana"),
        ("https://www.dissapore.com/feed/", "Dissapore"),
        ("https://www.donnamoderna.com/rss/", "Donna Moderna"),
        ("https://www.elle.com/it/rss/", "Elle Italia"),
        ("https://www.grazia.it/rss/", "Grazia"),
        ("https://www.marieclaire.com/it/rss/", "Marie Claire Italia"),
        ("https://www.vanityfair.it/feed", "Vanity Fair Italia"),
        ("https://www.vogue.it/feed", "Vogue Italia"),
        ("https://www.gamberorosso.it/feed/", "Gambero Rosso"),
    ],
}


def build_catalog(
    sources: Mapping[str, list[dict[str, str]]] | None = None,
) -> Mapping[str, tuple[FeedSource, ...]]:
    """Build the immutable topic -> sources mapping.

    Args:
        sources: Optional override from config, mapping each topic to a list of
            {"url": ..., "name": ...} entries. When omitted the built-in
            catalog is used.

    Returns:
        A read-only mapping preserving topic order

    Raises:
        ValueError: If an override entry has no URL
    """
    if sources is None:
        raw = {
            topic: [{"url": url, "name": name} for url, name in entries]
            for topic, entries in DEFAULT_SOURCES.items()
        }
    else:
        raw = dict(sources)

    catalog: dict[str, tuple[FeedSource, ...]] = {}
    for topic, entries in raw.items():
        feeds = []
        for entry in entries or []:
            url = (entry.get("url") or "").strip()
            if not url:
                raise ValueError(f"Source for topic '{topic}' is missing a url")
            name = (entry.get("name") or url).strip()
            feeds.append(FeedSource(topic=topic, endpoint=url, display_name=name))
        catalog[topic] = tuple(feeds)
    return MappingProxyType(catalog)
