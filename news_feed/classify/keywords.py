"""Topic keyword lists (Italian + English) used by the category validator."""

from __future__ import annotations


# Most specific first. "general" is the catch-all and has no keywords.
CATEGORY_PRIORITY: tuple[str, ...] = (
    "politics",
    "crime",
    "automotive",
    "sports",
    "technology",
    "entertainment",
    "business",
    "world",
    "lifestyle",
    "general",
)

CATCH_ALL = "general"

KEYWORDS: dict[str, tuple[str, ...]] = {
    "politics": (
        "governo", "parlamento", "politica", "elezioni", "ministro", "premier", "senato",
        "camera", "deputati", "legge", "decreto", "presidente", "consiglio", "voto",
        "referendum", "partito", "coalizione", "opposizione", "maggioranza", "costituzione",
        "repubblica", "regione", "sindaco", "giunta", "quirinale", "palazzo chigi",
        "montecitorio", "emendamento", "mozione", "fiducia", "dimissioni", "sottosegretario",
        "candidato", "urne", "ballottaggio", "affluenza", "vertice", "unione europea",
        "bruxelles", "europarlamento", "commissione europea", "nato", "onu", "diplomazia",
        "ambasciatore", "trattato", "sanzioni",
        "politics", "government", "election", "minister", "parliament", "senate", "congress",
        "vote", "coalition", "opposition", "constitution", "president", "prime minister",
        "cabinet", "legislation", "law", "bill", "amendment", "resignation", "candidate",
        "ballot", "polling", "campaign",
    ),
    "crime": (
        "cronaca", "crimine", "reato", "delitto", "omicidio", "assassinio", "uccisione",
        "vittima", "cadavere", "polizia", "carabinieri", "guardia di finanza", "questura",
        "indagine", "inchiesta", "arresto", "arrestato", "latitante", "perquisizione",
        "sequestro", "processo", "tribunale", "giudice", "procuratore", "imputato",
        "testimone", "sentenza", "condanna", "assoluzione", "carcere", "ergastolo", "furto",
        "rapina", "truffa", "estorsione", "stupro", "violenza", "aggressione", "droga",
        "spaccio", "mafia", "camorra", "ndrangheta", "clan", "intercettazione", "blitz",
        "crime", "murder", "homicide", "killing", "victim", "police", "detective",
        "investigation", "arrest", "fugitive", "warrant", "trial", "court", "judge",
        "prosecutor", "defendant", "witness", "verdict", "conviction", "prison", "jail",
        "theft", "robbery", "fraud", "extortion", "kidnapping", "assault", "trafficking", "gang",
    ),
    "automotive": (
        "auto", "automobile", "macchina", "veicolo", "moto", "motocicletta", "scooter",
        "motore", "cilindrata", "cavalli", "velocità", "freni", "cambio", "trazione", "4x4",
        "suv", "berlina", "station wagon", "cabriolet", "crossover", "furgone", "ferrari",
        "lamborghini", "maserati", "alfa romeo", "fiat", "lancia", "abarth", "ducati",
        "aprilia", "piaggio", "vespa", "bmw", "mercedes", "audi", "volkswagen", "porsche",
        "tesla", "toyota", "stellantis", "pneumatici", "carburante", "benzina", "diesel",
        "elettrico", "ibrido", "autonomia", "ricarica", "batteria",
        "automotive", "car", "vehicle", "motorcycle", "engine", "sedan", "coupe",
        "convertible", "truck", "fuel", "electric", "hybrid", "battery", "charging",
    ),
    "sports": (
        "calcio", "serie a", "serie b", "champions", "europa league", "coppa italia", "sport",
        "partita", "gol", "allenatore", "squadra", "campionato", "giocatore", "calciatore",
        "portiere", "arbitro", "rigore", "cartellino", "fuorigioco", "classifica",
        "scudetto", "trofeo", "semifinale", "girone", "juventus", "inter", "milan", "napoli",
        "lazio", "fiorentina", "atalanta", "tennis", "formula 1", "motogp", "gran premio",
        "pole position", "podio", "basket", "pallavolo", "volley", "rugby", "ciclismo",
        "giro d'italia", "maglia rosa", "nuoto", "atletica", "olimpiadi", "mondiali",
        "europei", "medaglia",
        "football", "soccer", "match", "player", "coach", "championship", "league",
        "trophy", "referee", "penalty", "offside", "standings", "semifinal",
        "qualification", "basketball", "volleyball", "cycling", "swimming", "athletics",
        "olympics", "world cup", "medal",
    ),
    "technology": (
        "tecnologia", "tech", "smartphone", "cellulare", "iphone", "android", "samsung",
        "apple", "google", "microsoft", "computer", "laptop", "tablet", "software",
        "applicazione", "sistema operativo", "windows", "linux", "digitale", "internet",
        "browser", "facebook", "instagram", "tiktok", "youtube", "whatsapp", "telegram",
        "intelligenza artificiale", "machine learning", "algoritmo", "robot",
        "automazione", "cloud", "cybersecurity", "hacker", "malware", "crittografia",
        "blockchain", "bitcoin", "criptovaluta", "metaverso", "realtà virtuale",
        "realtà aumentata", "5g", "fibra", "banda larga", "videogiochi", "playstation",
        "xbox", "nintendo", "innovazione", "startup",
        "technology", "mobile", "hardware", "operating system", "digital", "social media",
        "artificial intelligence", "algorithm", "automation", "database", "encryption",
        "cryptocurrency", "metaverse", "virtual reality", "augmented reality",
        "broadband", "gaming", "innovation",
    ),
    "entertainment": (
        "cinema", "film", "pellicola", "regista", "attore", "attrice", "box office",
        "incasso", "oscar", "festival", "mostra del cinema", "cannes", "musica",
        "canzone", "album", "singolo", "cantante", "concerto", "tournée", "sanremo",
        "eurovision", "spotify", "spettacolo", "teatro", "commedia", "musical", "balletto",
        "televisione", "serie tv", "fiction", "conduttore", "reality", "talent", "talk show",
        "netflix", "disney+", "amazon prime", "episodio", "stagione", "celebrity", "vip",
        "gossip", "paparazzi", "red carpet", "anteprima", "trailer", "influencer",
        "entertainment", "movie", "director", "actor", "actress", "award", "music",
        "song", "singer", "band", "concert", "theater", "theatre", "comedy", "drama",
        "television", "series", "episode", "premiere",
    ),
    "business": (
        "economia", "azienda", "impresa", "mercato", "borsa", "azioni", "titoli",
        "quotazione", "ftse", "mib", "dow jones", "nasdaq", "finanza", "investimenti",
        "investitore", "fondo", "private equity", "venture capital", "unicorno", "ipo",
        "fusione", "acquisizione", "bilancio", "fatturato", "utile", "perdita", "trimestre",
        "dividendo", "amministratore delegato", "cda", "azionista", "industria",
        "manifattura", "export", "commercio", "valuta", "dollaro", "banca", "credito",
        "prestito", "mutuo", "tasso", "inflazione", "pil", "crescita", "recessione",
        "economy", "business", "company", "corporation", "market", "stock", "shares",
        "finance", "investment", "investor", "merger", "acquisition", "revenue", "profit",
        "earnings", "dividend", "ceo", "shareholder", "industry", "manufacturing", "trade",
        "currency", "bank", "loan", "mortgage", "inflation", "gdp", "recession",
    ),
    "world": (
        "mondo", "internazionale", "globale", "estero", "europa", "asia", "africa",
        "america", "stati uniti", "usa", "cina", "russia", "ucraina", "india", "giappone",
        "brasile", "messico", "francia", "germania", "spagna", "regno unito",
        "inghilterra", "svizzera", "grecia", "turchia", "egitto", "israele", "gaza",
        "arabia saudita", "iran", "iraq", "siria", "afghanistan", "pakistan", "corea",
        "onu", "nato", "unione europea", "g7", "g20", "brics", "fmi", "banca mondiale",
        "unesco", "oms",
        "world", "international", "global", "foreign", "europe", "china", "ukraine",
        "japan", "brazil", "canada", "mexico", "france", "germany", "spain", "united kingdom",
        "turkey", "egypt", "israel", "saudi", "korea", "european union", "united nations",
        "world bank",
    ),
    "lifestyle": (
        "stile di vita", "moda", "abbigliamento", "vestiti", "scarpe", "borsa",
        "accessori", "gioielli", "orologio", "profumo", "cosmetici", "trucco", "bellezza",
        "capelli", "benessere", "salute", "palestra", "allenamento", "yoga", "pilates",
        "dieta", "nutrizione", "alimentazione", "cucina", "ricetta", "ristorante",
        "trattoria", "pizzeria", "caffè", "vino", "birra", "gastronomia", "michelin",
        "viaggio", "turismo", "vacanza", "destinazione", "albergo", "terme", "montagna",
        "arredamento", "design", "giardino", "fai da te", "tempo libero", "arte", "cultura",
        "libro", "museo",
        "lifestyle", "fashion", "clothing", "jewelry", "perfume", "cosmetics", "makeup",
        "beauty", "wellness", "health", "fitness", "workout", "diet", "nutrition", "food",
        "cooking", "recipe", "chef", "restaurant", "coffee", "wine", "travel", "tourism",
        "vacation", "hotel", "resort", "furniture", "interior", "garden", "hobby",
        "leisure", "museum",
    ),
}
