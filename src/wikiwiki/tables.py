"""Lookup tables driving type inference, identifier extraction, link
categorization and link noise filtering."""

from __future__ import annotations

# P31 ("instance of") value -> coarse entity type.
TYPE_BY_INSTANCE: dict[str, str] = {
    "Q5": "person",  # human
    "Q215627": "person",  # person
    "Q28640": "person",  # profession
    "Q11424": "work",  # film
    "Q5398426": "work",  # television series
    "Q571": "work",  # book
    "Q7725634": "work",  # literary work
    "Q8341": "concept",  # jazz / music genre
    "Q7278": "concept",  # political party
    "Q35127": "concept",  # website
    "Q1644573": "concept",  # scientific theory
    "Q11173": "concept",  # chemical compound
    "Q515": "place",  # city
    "Q486972": "place",  # human settlement
    "Q7275": "place",  # state
    "Q8502": "place",  # mountain
    "Q4022": "place",  # river
}

INSTANCE_OF = "P31"
COORDINATES = "P625"

# Wikidata property -> key under Entity.identifiers.
IDENTIFIER_PROPERTIES: dict[str, str] = {
    "P434": "musicbrainz",
    "P1004": "musicbrainz_work",
    "P4985": "tmdb",
    "P214": "viaf",
    "P227": "gnd",
    "P1953": "discogs",
    "P646": "freebase",
    "P648": "openlibrary",
    "P345": "imdb",
    "P1233": "isfdb_author",
    "P496": "orcid",
    COORDINATES: "coordinates",
    "P18": "image",
}

# Wikidata property -> relation type for structural graph edges.
STRUCTURAL_PROPERTIES: dict[str, str] = {
    "P31": "type",
    "P106": "occupation",
    "P800": "notable_work",
    "P136": "genre",
    "P101": "field_of_work",
    "P737": "influenced_by",
    "P175": "performer",
    "P161": "cast_member",
    "P57": "director",
    "P279": "subclass_of",
}

# External link buckets, checked in order. "official" is name-driven and
# handled separately.
LINK_DOMAINS: dict[str, tuple[str, ...]] = {
    "music": (
        "allmusic.com",
        "discogs.com",
        "musicbrainz.org",
        "last.fm",
        "spotify.com",
        "deezer.com",
        "rateyourmusic.com",
        "allaboutjazz.com",
        "jazzmusicarchives.com",
    ),
    "video": (
        "imdb.com",
        "allocine.fr",
        "rottentomatoes.com",
        "youtube.com",
        "youtu.be",
        "vimeo.com",
    ),
    "social": (
        "facebook.com",
        "twitter.com",
        "instagram.com",
        "linkedin.com",
        "tiktok.com",
    ),
}

LINK_BUCKETS = ("official", "music", "video", "social", "other")

# Per-language noise tokens for Wikipedia article links.
CENTURY_TOKENS: dict[str, tuple[str, ...]] = {
    "en": ("century",),
    "fr": ("siècle",),
    "de": ("Jahrhundert",),
    "es": ("siglo",),
    "it": ("secolo",),
}

META_PREFIXES: dict[str, tuple[str, ...]] = {
    "en": (
        "Help:",
        "Template:",
        "Wikipedia:",
        "Portal:",
        "Category:",
        "File:",
        "Special:",
        "Talk:",
        "Module:",
    ),
    "fr": (
        "Aide:",
        "Modèle:",
        "Wikipédia:",
        "Portail:",
        "Catégorie:",
        "Fichier:",
        "Projet:",
        "Discussion:",
        "Spécial:",
    ),
    "de": ("Hilfe:", "Vorlage:", "Wikipedia:", "Portal:", "Kategorie:", "Datei:", "Spezial:", "Diskussion:"),
    "es": ("Ayuda:", "Plantilla:", "Wikipedia:", "Portal:", "Categoría:", "Archivo:", "Especial:", "Discusión:"),
    "it": ("Aiuto:", "Template:", "Wikipedia:", "Portale:", "Categoria:", "File:", "Speciale:", "Discussione:"),
}

LIST_PREFIXES: dict[str, tuple[str, ...]] = {
    "en": ("List of", "Lists of"),
    "fr": ("Liste de", "Liste des"),
    "de": ("Liste der", "Liste von"),
    "es": ("Anexo:", "Lista de"),
    "it": ("Lista di", "Elenco di"),
}

MONTHS: dict[str, tuple[str, ...]] = {
    "en": (
        "january", "february", "march", "april", "may", "june",
        "july", "august", "september", "october", "november", "december",
    ),
    "fr": (
        "janvier", "février", "mars", "avril", "mai", "juin",
        "juillet", "août", "septembre", "octobre", "novembre", "décembre",
    ),
    "de": (
        "januar", "februar", "märz", "april", "mai", "juni",
        "juli", "august", "september", "oktober", "november", "dezember",
    ),
    "es": (
        "enero", "febrero", "marzo", "abril", "mayo", "junio",
        "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
    ),
    "it": (
        "gennaio", "febbraio", "marzo", "aprile", "maggio", "giugno",
        "luglio", "agosto", "settembre", "ottobre", "novembre", "dicembre",
    ),
}
